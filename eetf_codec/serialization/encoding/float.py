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
IEEE 754 double precision in big-endian byte order, as used by NEW_FLOAT_EXT.

>>> se = Serializer.build_bytes_serializer()
>>> encode_float64(se, 1.5)
>>> bytes(se.finalize()).hex()
'3ff8000000000000'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('3ff8000000000000'))
>>> decode_float64(de)
1.5

The old FLOAT_EXT stores the value as a 31-byte NUL padded ascii string:

>>> de = Deserializer.build_bytes_deserializer(b'1.5'.ljust(31, b'\\x00'))
>>> decode_float_ascii(de)
1.5
"""

import struct

from eetf_codec.serialization import BadDataError, Deserializer, Serializer

FLOAT_ASCII_LENGTH = 31


def encode_float64(serializer: Serializer, value: float) -> None:
    serializer.write_bytes(struct.pack('>d', value))


def decode_float64(deserializer: Deserializer) -> float:
    value, = struct.unpack('>d', deserializer.read_bytes(8))
    return value


def decode_float_ascii(deserializer: Deserializer) -> float:
    raw = bytes(deserializer.read_bytes(FLOAT_ASCII_LENGTH))
    try:
        return float(raw.rstrip(b'\x00').decode('ascii'))
    except (UnicodeDecodeError, ValueError) as e:
        raise BadDataError('invalid float string') from e
