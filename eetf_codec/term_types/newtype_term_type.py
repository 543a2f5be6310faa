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

from typing import Any, NewType, TypeVar

from typing_extensions import Self, override

from eetf_codec.decoder import Decoder
from eetf_codec.encoder import Encoder
from eetf_codec.term import Term
from eetf_codec.term_types.term_type import TermType

T = TypeVar('T')


class NewtypeTermType(TermType[T]):
    """ Represents a `typing.NewType`, a named wrapper that is written exactly as the wrapped value.

    >>> from eetf_codec.term_types import make_term_type
    >>> UserId = NewType('UserId', int)
    >>> make_term_type(UserId).to_term(UserId(7))
    FixInteger(value=7)
    """

    __slots__ = ('_is_hashable', '_name', '_inner')

    _name: str
    _inner: TermType[T]

    def __init__(self, name: str, inner: TermType[T]) -> None:
        self._name = name
        self._inner = inner
        self._is_hashable = inner.is_hashable()

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: TermType.TypeMap) -> Self:
        if not isinstance(type_, NewType):
            raise TypeError('expected NewType')
        return cls(type_.__name__, TermType.from_type(type_.__supertype__, type_map=type_map))

    @override
    def _check_value(self, value: T, /, *, deep: bool) -> None:
        self._inner._check_value(value, deep=deep)

    @override
    def _encode(self, encoder: Encoder, value: T, /) -> Term:
        return encoder.encode_newtype_struct(self._name, self._inner, value)

    @override
    def _decode(self, decoder: Decoder, /) -> T:
        return self._inner.decode(decoder.decode_newtype_struct(self._name))
