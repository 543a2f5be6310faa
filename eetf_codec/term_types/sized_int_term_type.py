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

from typing import ClassVar

from typing_extensions import Self, override

from eetf_codec.decoder import Decoder, int_bounds
from eetf_codec.encoder import Encoder
from eetf_codec.term import Term
from eetf_codec.term_types.term_type import TermType
from eetf_codec.utils.typing import is_subclass


def _check_int(value: int) -> None:
    # XXX: bool is a subclass of int, but a bool value is never meant to be written as a number
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError('expected integer')


class IntTermType(TermType[int]):
    """ Represents builtin `int` values, with arbitrary precision.

    Values that fit in 32 bits are written as FixInteger nodes, bigger values as BigInteger nodes.
    """

    _is_hashable = True

    @override
    @classmethod
    def _from_type(cls, type_: type[int], /, *, type_map: TermType.TypeMap) -> Self:
        if not is_subclass(type_, int):
            raise TypeError('expected int type')
        return cls()

    @override
    def _check_value(self, value: int, /, *, deep: bool) -> None:
        _check_int(value)

    @override
    def _encode(self, encoder: Encoder, value: int, /) -> Term:
        return encoder.encode_bigint(value)

    @override
    def _decode(self, decoder: Decoder, /) -> int:
        return decoder.decode_bigint()


class _SizedIntTermType(IntTermType):
    """ Base class for classes that represent `int` values with a fixed size and signedness.
    """

    # XXX: subclass must define these values:
    _signed: ClassVar[bool]
    _bits: ClassVar[int]

    @override
    def _check_value(self, value: int, /, *, deep: bool) -> None:
        _check_int(value)
        lower_bound, upper_bound = int_bounds(self._bits, self._signed)
        if value > upper_bound:
            raise ValueError('above upper bound')
        if value < lower_bound:
            raise ValueError('below lower bound')

    @override
    def _encode(self, encoder: Encoder, value: int, /) -> Term:
        return encoder.encode_int(value, bits=self._bits, signed=self._signed)

    @override
    def _decode(self, decoder: Decoder, /) -> int:
        return decoder.decode_int(bits=self._bits, signed=self._signed)


class Int8TermType(_SizedIntTermType):
    _signed = True
    _bits = 8


class Int16TermType(_SizedIntTermType):
    _signed = True
    _bits = 16


class Int32TermType(_SizedIntTermType):
    _signed = True
    _bits = 32


class Int64TermType(_SizedIntTermType):
    _signed = True
    _bits = 64


class Uint8TermType(_SizedIntTermType):
    _signed = False
    _bits = 8


class Uint16TermType(_SizedIntTermType):
    _signed = False
    _bits = 16


class Uint32TermType(_SizedIntTermType):
    _signed = False
    _bits = 32


class Uint64TermType(_SizedIntTermType):
    _signed = False
    _bits = 64
