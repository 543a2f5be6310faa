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

from enum import Enum
from typing import TypeVar

from typing_extensions import Self, override

from eetf_codec.casing import to_camel_case
from eetf_codec.decoder import Decoder, EnumAccess
from eetf_codec.encoder import Encoder
from eetf_codec.exceptions import Message
from eetf_codec.term import Term
from eetf_codec.term_types.term_type import TermType

E = TypeVar('E', bound=Enum)


class EnumTermType(TermType[E]):
    """ Represents `enum.Enum` classes, every member is a unit variant written as an atom named after the member.

    Member values are not written at all, only the member names matter:

    >>> class Color(Enum):
    ...     LightBlue = 1
    ...     DARK_RED = 2
    >>> from eetf_codec.term_types import make_term_type
    >>> make_term_type(Color).to_term(Color.LightBlue)
    Atom(name='light_blue')
    >>> make_term_type(Color).to_term(Color.DARK_RED)
    Atom(name='dark_red')
    """

    __slots__ = ('_class', '_members')

    _is_hashable = True
    _class: type[E]
    _members: tuple[E, ...]

    def __init__(self, class_: type[E]) -> None:
        self._class = class_
        self._members = tuple(class_)

    @override
    @classmethod
    def _from_type(cls, type_: type[E], /, *, type_map: TermType.TypeMap) -> Self:
        if not isinstance(type_, type) or not issubclass(type_, Enum):
            raise TypeError('expected Enum type')
        return cls(type_)

    @override
    def _check_value(self, value: E, /, *, deep: bool) -> None:
        if not isinstance(value, self._class):
            raise TypeError(f'expected {self._class.__name__} member')

    @override
    def _encode(self, encoder: Encoder, value: E, /) -> Term:
        return encoder.encode_unit_variant(self._class.__name__, self._members.index(value), value.name)

    def _find_member(self, name: str, *, convert_case: bool) -> E:
        for member in self._members:
            member_name = to_camel_case(member.name) if convert_case else member.name
            if member_name == name:
                return member
        expected = ', '.join(f'`{member.name}`' for member in self._members)
        raise Message(f'unknown variant `{name}`, expected one of {expected}')

    def _visit(self, access: EnumAccess, *, convert_case: bool) -> E:
        name, variant_access = access.variant()
        member = self._find_member(name, convert_case=convert_case)
        variant_access.unit_variant()
        return member

    @override
    def _decode(self, decoder: Decoder, /) -> E:
        convert_case = decoder.settings.convert_variant_case
        names = tuple(member.name for member in self._members)
        return decoder.decode_enum(
            self._class.__name__,
            names,
            lambda access: self._visit(access, convert_case=convert_case),
        )
