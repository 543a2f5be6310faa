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
from collections import deque
from collections.abc import Collection, Hashable, Iterable, Set
from typing import TypeVar, get_args, get_origin

from typing_extensions import Self, override

from eetf_codec.decoder import Decoder, SequenceAccess
from eetf_codec.encoder import Encoder
from eetf_codec.term import Term
from eetf_codec.term_types.term_type import TermType
from eetf_codec.term_types.utils import is_origin_hashable

T = TypeVar('T')
H = TypeVar('H', bound=Hashable)


class _CollectionTermType(TermType[Collection[T]], ABC):
    """ Used as base for TermType classes that represent collections, they are all written as proper lists.
    """
    __slots__ = ('_item',)

    _is_hashable = False
    _item: TermType[T]

    def __init__(self, item_term_type: TermType[T], /) -> None:
        self._item = item_term_type

    @abstractmethod
    def _build(self, items: Iterable[T]) -> Collection[T]:
        """ How to build the concrete collection from an iterable of items.
        """
        raise NotImplementedError

    @override
    @classmethod
    def _from_type(cls, type_: type[Collection[T]], /, *, type_map: TermType.TypeMap) -> Self:
        member_type = cls._get_member_type(type_)
        member_term_type = TermType.from_type(member_type, type_map=type_map)
        return cls(member_term_type)

    @classmethod
    def _get_member_type(cls, type_: type[Collection[T]]) -> type[T]:
        origin_type: type = get_origin(type_) or type_
        if not issubclass(origin_type, Collection):
            raise TypeError('expected Collection type')
        args = get_args(type_)
        if not args or len(args) != 1:
            raise TypeError(f'expected {origin_type.__name__}[<type>]')
        return args[0]

    def _check_item(self, item: T) -> None:
        self._item._check_value(item, deep=True)

    @override
    def _check_value(self, value: Collection[T], /, *, deep: bool) -> None:
        if not isinstance(value, Collection) or isinstance(value, (str, bytes)):
            raise TypeError('expected Collection type')
        if deep:
            for i in value:
                self._check_item(i)

    @override
    def _encode(self, encoder: Encoder, value: Collection[T], /) -> Term:
        builder = encoder.encode_seq(len(value))
        for item in value:
            builder.add_element(self._item, item)
        return builder.end()

    def _visit(self, access: SequenceAccess) -> Collection[T]:
        return self._build(self._item.decode(item) for item in access)

    @override
    def _decode(self, decoder: Decoder, /) -> Collection[T]:
        return decoder.decode_seq(self._visit)


class ListTermType(_CollectionTermType[T]):
    """ Represents builtin `list` values.
    """

    @override
    def _build(self, items: Iterable[T]) -> list[T]:
        return list(items)


class DequeTermType(_CollectionTermType[T]):
    """ Represents builtin `collections.deque` values.
    """

    @override
    def _build(self, items: Iterable[T]) -> deque[T]:
        return deque(items)


class SetTermType(_CollectionTermType[H]):
    """ Represents builtin `set` values, they are written in iteration order.
    """

    @override
    def _build(self, items: Iterable[H]) -> Set[H]:
        return set(items)

    @override
    @classmethod
    def _get_member_type(cls, type_: type[Collection[T]]) -> type[T]:
        member_type = super()._get_member_type(type_)
        if not is_origin_hashable(member_type):
            raise TypeError(f'{member_type} is not hashable')
        return member_type

    @override
    def _check_value(self, value: Collection[H], /, *, deep: bool) -> None:
        if not isinstance(value, Set):
            raise TypeError('expected Set type')
        super()._check_value(value, deep=deep)

    @override
    def _check_item(self, item: H) -> None:
        if not isinstance(item, Hashable):
            raise TypeError('expected Hashable type')
        super()._check_item(item)


class FrozenSetTermType(SetTermType[H]):
    """ Represents builtin `frozenset` values.
    """

    _is_hashable = True

    @override
    def _build(self, items: Iterable[H]) -> frozenset[H]:
        return frozenset(items)
