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

from eetf_codec.decoder import Decoder
from eetf_codec.encoder import Encoder
from eetf_codec.term import Term
from eetf_codec.term_types.term_type import TermType
from eetf_codec.utils.typing import is_subclass


class Float64TermType(TermType[float]):
    """ Represents builtin `float` values, integers are accepted when encoding.
    """

    _is_hashable = True
    _bits: ClassVar[int] = 64

    @override
    @classmethod
    def _from_type(cls, type_: type[float], /, *, type_map: TermType.TypeMap) -> Self:
        if not is_subclass(type_, float):
            raise TypeError('expected float type')
        return cls()

    @override
    def _check_value(self, value: float, /, *, deep: bool) -> None:
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise TypeError('expected float')

    @override
    def _encode(self, encoder: Encoder, value: float, /) -> Term:
        return encoder.encode_float(float(value), bits=self._bits)

    @override
    def _decode(self, decoder: Decoder, /) -> float:
        return decoder.decode_float(bits=self._bits)


class Float32TermType(Float64TermType):
    """ Values are rounded to the nearest 32-bit float, values out of its range can't be encoded.
    """

    _bits = 32
