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

from types import NoneType, UnionType
# XXX: ignore attr-defined because mypy doesn't recognize it, even though all version of python that we support have
#      this defined, even if it's an internal class
from typing import TypeVar, _UnionGenericAlias as UnionGenericAlias, get_args  # type: ignore[attr-defined]

from typing_extensions import Self, override

from eetf_codec.decoder import Decoder
from eetf_codec.encoder import Encoder
from eetf_codec.term import Term
from eetf_codec.term.term import TERM_CLASSES
from eetf_codec.term_types.term_type import TermType

V = TypeVar('V')


class OptionalTermType(TermType[V | None]):
    """ Represents a term_type that is either `V` or `None`.

    `None` is written as the `nil` atom and any other value as the bare inner term, which means that when `V`
    itself is written as `nil` (the unit value, unit records and nested optionals) `None` and `V` can't be told
    apart and `None` is what is decoded.
    """

    __slots__ = ('_is_hashable', '_value')

    _value: TermType[V]

    def __init__(self, term_type: TermType[V]) -> None:
        self._value = term_type
        self._is_hashable = term_type.is_hashable()

    @override
    @classmethod
    def _from_type(cls, type_: type[V | None], /, *, type_map: TermType.TypeMap) -> Self:
        if not isinstance(type_, (UnionType, UnionGenericAlias)):
            raise TypeError('expected type union')
        args = get_args(type_)
        assert args, 'union always has args'
        if NoneType not in args:
            raise TypeError('type must be either `None | T` or `T | None`')
        not_none_args = tuple(arg for arg in args if arg is not NoneType)
        if len(not_none_args) == 1:
            not_none_type, = not_none_args
        elif set(not_none_args) == set(TERM_CLASSES):
            # XXX: `Term | None` is flattened into a single union with all the term classes
            not_none_type = Term
        else:
            raise TypeError('type must be either `None | T` or `T | None`')
        return cls(TermType.from_type(not_none_type, type_map=type_map))

    @override
    def _check_value(self, value: V | None, /, *, deep: bool) -> None:
        if value is None:
            return
        if deep:
            self._value._check_value(value, deep=True)

    @override
    def _encode(self, encoder: Encoder, value: V | None, /) -> Term:
        if value is None:
            return encoder.encode_none()
        return encoder.encode_some(self._value, value)

    @override
    def _decode(self, decoder: Decoder, /) -> V | None:
        inner = decoder.decode_option()
        if inner is None:
            return None
        return self._value.decode(inner)
