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


class BytesTermType(TermType[bytes]):
    """ Represents builtin `bytes` values, as binaries.

    Any bytes-like value is accepted when encoding, decoding always produces `bytes`.
    """

    _is_hashable = True

    @override
    @classmethod
    def _from_type(cls, type_: type[bytes], /, *, type_map: TermType.TypeMap) -> Self:
        if not is_subclass(type_, bytes):
            raise TypeError('expected bytes type')
        return cls()

    @override
    def _check_value(self, value: bytes, /, *, deep: bool) -> None:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError('expected bytes type')

    @override
    def _encode(self, encoder: Encoder, value: bytes, /) -> Term:
        return encoder.encode_bytes(value)

    @override
    def _decode(self, decoder: Decoder, /) -> bytes:
        return decoder.decode_bytes()
