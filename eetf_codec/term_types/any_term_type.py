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

"""
Types for values without a precise annotation.

`Any` values can be encoded, the shape is taken from the runtime type of each value, but they can't be decoded since
the term tree alone doesn't say which Python type is wanted. `GenericValue` values decode to plain Python objects.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Mapping
from typing import Any

from typing_extensions import Self, override

from eetf_codec.decoder import Decoder
from eetf_codec.encoder import Encoder
from eetf_codec.term import Term
from eetf_codec.term_types.term_type import TermType
from eetf_codec.types import GenericValue


class AnyTermType(TermType[Any]):
    __slots__ = ('_type_map',)

    _is_hashable = True
    _type_map: TermType.TypeMap

    def __init__(self, type_map: TermType.TypeMap) -> None:
        self._type_map = type_map

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: TermType.TypeMap) -> Self:
        if type_ is not Any:
            raise TypeError('expected Any')
        return cls(type_map)

    @override
    def _check_value(self, value: Any, /, *, deep: bool) -> None:
        # XXX: the precise check is made by the TermType inferred when encoding
        pass

    @override
    def _encode(self, encoder: Encoder, value: Any, /) -> Term:
        if isinstance(value, (list, set, frozenset, deque)):
            seq_builder = encoder.encode_seq(len(value))
            for item in value:
                seq_builder.add_element(self, item)
            return seq_builder.end()
        if type(value) is tuple:
            tuple_builder = encoder.encode_tuple(len(value))
            for item in value:
                tuple_builder.add_element(self, item)
            return tuple_builder.end()
        if isinstance(value, Mapping):
            map_builder = encoder.encode_map(len(value))
            for k, v in value.items():
                map_builder.add_entry(self, k, self, v)
            return map_builder.end()
        return TermType.from_type(type(value), type_map=self._type_map).encode(encoder, value)

    @override
    def _decode(self, decoder: Decoder, /) -> Any:
        decoder.decode_any()


class GenericTermType(AnyTermType):
    """ Encodes like `Any`, decodes to plain Python objects (see `term_to_generic`).
    """

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: TermType.TypeMap) -> Self:
        if type_ is not GenericValue:
            raise TypeError('expected GenericValue')
        return cls(type_map)

    @override
    def _decode(self, decoder: Decoder, /) -> Any:
        return decoder.decode_generic()
