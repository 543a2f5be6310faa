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
Arbitrary precision integers are stored as a sign byte followed by the magnitude in little-endian base-256 digits.
The digit count comes first and takes 1 byte for SMALL_BIG_EXT or 4 bytes for LARGE_BIG_EXT.

Layout: [N: 1 or 4 bytes][sign: 0 or 1][digit_0]...[digit_N-1]

>>> se = Serializer.build_bytes_serializer()
>>> encode_bignum(se, 65530, length_size=1)  # writes 02 00 faff
>>> encode_bignum(se, -256, length_size=1)  # writes 02 01 0001
>>> bytes(se.finalize()).hex()
'0200faff02010001'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0200faff02010001'))
>>> decode_bignum(de, length_size=1)
65530
>>> decode_bignum(de, length_size=1)
-256
"""

from eetf_codec.serialization import BadDataError, Deserializer, Serializer
from eetf_codec.serialization.encoding.int import decode_int, encode_int


def bignum_digit_count(value: int) -> int:
    """How many base-256 digits are needed for the magnitude of value."""
    return (abs(value).bit_length() + 7) // 8


def encode_bignum(serializer: Serializer, value: int, *, length_size: int) -> None:
    n = bignum_digit_count(value)
    encode_int(serializer, n, length=length_size, signed=False)
    serializer.write_byte(1 if value < 0 else 0)
    serializer.write_bytes(abs(value).to_bytes(n, byteorder='little'))


def decode_bignum(deserializer: Deserializer, *, length_size: int) -> int:
    n = decode_int(deserializer, length=length_size, signed=False)
    sign = deserializer.read_byte()
    if sign not in (0, 1):
        raise BadDataError(f'invalid bignum sign: {sign}')
    magnitude = int.from_bytes(deserializer.read_bytes(n), byteorder='little')
    return -magnitude if sign else magnitude
