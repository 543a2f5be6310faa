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


class BoolTermType(TermType[bool]):
    """ Represents builtin `bool` values, as the `true` and `false` atoms.
    """

    _is_hashable = True

    @override
    @classmethod
    def _from_type(cls, type_: type[bool], /, *, type_map: TermType.TypeMap) -> Self:
        if type_ is not bool:
            raise TypeError('expected bool type')
        return cls()

    @override
    def _check_value(self, value: bool, /, *, deep: bool) -> None:
        if not isinstance(value, bool):
            raise TypeError('expected boolean')

    @override
    def _encode(self, encoder: Encoder, value: bool, /) -> Term:
        return encoder.encode_bool(value)

    @override
    def _decode(self, decoder: Decoder, /) -> bool:
        return decoder.decode_bool()
