# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import OrderedDict
from collections.abc import Hashable, Mapping
from typing import Iterable, Iterator, TypeVar, get_args, get_origin

from typing_extensions import Self, override

from eetf_codec.decoder import Decoder, MapAccess
from eetf_codec.encoder import Encoder
from eetf_codec.exceptions import Message
from eetf_codec.term import Term
from eetf_codec.term_types.term_type import TermType
from eetf_codec.term_types.utils import is_origin_hashable

T = TypeVar('T')
H = TypeVar('H', bound=Hashable)


class _MapTermType(TermType[Mapping[H, T]], ABC):
    """ Base class to help implement TermType for mappings, they are written as map terms in iteration order.
    """

    __slots__ = ('_key', '_value')

    _key: TermType[H]
    _value: TermType[T]
    _is_hashable = False

    def __init__(self, key: TermType[H], value: TermType[T]) -> None:
        self._key = key
        self._value = value

    @abstractmethod
    def _build(self, items: Iterable[tuple[H, T]]) -> Mapping[H, T]:
        """ How to build the concrete map from an iterable of (key, value).
        """
        raise NotImplementedError

    @override
    @classmethod
    def _from_type(cls, type_: type[Mapping[H, T]], /, *, type_map: TermType.TypeMap) -> Self:
        origin_type: type = get_origin(type_) or type_
        if not issubclass(origin_type, Mapping):
            raise TypeError('expected Mapping type')
        args = get_args(type_)
        if not args or len(args) != 2:
            raise TypeError(f'expected {origin_type.__name__}[<key type>, <value type>]')
        key_type, value_type = args
        if not is_origin_hashable(key_type):
            raise TypeError(f'{key_type} is not hashable')
        key_term_type = TermType.from_type(key_type, type_map=type_map)
        return cls(key_term_type, TermType.from_type(value_type, type_map=type_map))

    @override
    def _check_value(self, value: Mapping[H, T], /, *, deep: bool) -> None:
        if not isinstance(value, Mapping):
            raise TypeError('expected Mapping type')
        if deep:
            for k, v in value.items():
                self._key._check_value(k, deep=True)
                self._value._check_value(v, deep=True)

    @override
    def _encode(self, encoder: Encoder, value: Mapping[H, T], /) -> Term:
        builder = encoder.encode_map(len(value))
        for k, v in value.items():
            builder.add_entry(self._key, k, self._value, v)
        return builder.end()

    def _iter_entries(self, access: MapAccess) -> Iterator[tuple[H, T]]:
        while (key_decoder := access.next_key()) is not None:
            key = self._key.decode(key_decoder)
            if not isinstance(key, Hashable):
                raise Message(f'map key {key!r} is not hashable')
            yield key, self._value.decode(access.next_value())

    def _visit(self, access: MapAccess) -> Mapping[H, T]:
        return self._build(self._iter_entries(access))

    @override
    def _decode(self, decoder: Decoder, /) -> Mapping[H, T]:
        return decoder.decode_map(self._visit)


class DictTermType(_MapTermType[H, T]):
    """ Represents builtin `dict` values, a key that appears more than once keeps the last value.
    """

    @override
    def _build(self, items: Iterable[tuple[H, T]]) -> dict[H, T]:
        return dict(items)


class OrderedDictTermType(_MapTermType[H, T]):
    """ Represents `collections.OrderedDict` values.
    """

    @override
    def _build(self, items: Iterable[tuple[H, T]]) -> OrderedDict[H, T]:
        return OrderedDict(items)
