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
Bidirectional codec between Python values and the Erlang External Term Format.

>>> from eetf_codec import decode_from_bytes, encode_to_bytes
>>> decode_from_bytes(encode_to_bytes({'a': [1, 2]}, dict[str, list[int]]), dict[str, list[int]])
{'a': [1, 2]}
"""

from eetf_codec.api import decode_from_bytes, decode_from_stream, encode_to_bytes, encode_to_stream, from_term, to_term
from eetf_codec.decoder import Decoder
from eetf_codec.encoder import Encoder
from eetf_codec.exceptions import CursorProtocolError, DecodeError, EetfError, EncodeError
from eetf_codec.settings import CodecSettings
from eetf_codec.term_types import TermType, make_term_type
from eetf_codec.types import (
    Char,
    Float32,
    Float64,
    GenericValue,
    Int8,
    Int16,
    Int32,
    Int64,
    TaggedEnum,
    Uint8,
    Uint16,
    Uint32,
    Uint64,
    VariantKind,
)

__version__ = '0.1.0'

__all__ = [
    'Char',
    'CodecSettings',
    'CursorProtocolError',
    'DecodeError',
    'Decoder',
    'EetfError',
    'EncodeError',
    'Encoder',
    'Float32',
    'Float64',
    'GenericValue',
    'Int8',
    'Int16',
    'Int32',
    'Int64',
    'TaggedEnum',
    'TermType',
    'Uint8',
    'Uint16',
    'Uint32',
    'Uint64',
    'VariantKind',
    'decode_from_bytes',
    'decode_from_stream',
    'encode_to_bytes',
    'encode_to_stream',
    'from_term',
    'make_term_type',
    'to_term',
]
