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

from typing_extensions import Self, override

from eetf_codec.decoder import Decoder
from eetf_codec.encoder import Encoder
from eetf_codec.term import Term
from eetf_codec.term_types.term_type import TermType
from eetf_codec.utils.typing import is_subclass


class StrTermType(TermType[str]):
    """ Represents builtin `str` values, as UTF-8 binaries.
    """

    _is_hashable = True

    @override
    @classmethod
    def _from_type(cls, type_: type[str], /, *, type_map: TermType.TypeMap) -> Self:
        if not is_subclass(type_, str):
            raise TypeError('expected str type')
        return cls()

    @override
    def _check_value(self, value: str, /, *, deep: bool) -> None:
        if not isinstance(value, str):
            raise TypeError('expected str type')

    @override
    def _encode(self, encoder: Encoder, value: str, /) -> Term:
        return encoder.encode_str(value)

    @override
    def _decode(self, decoder: Decoder, /) -> str:
        return decoder.decode_str()


class CharTermType(StrTermType):
    """ Represents a single code point, written as a one character UTF-8 binary.
    """

    @override
    def _check_value(self, value: str, /, *, deep: bool) -> None:
        super()._check_value(value, deep=deep)
        if len(value) != 1:
            raise ValueError('expected a single character')

    @override
    def _encode(self, encoder: Encoder, value: str, /) -> Term:
        return encoder.encode_char(value)

    @override
    def _decode(self, decoder: Decoder, /) -> str:
        return decoder.decode_char()
