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
This module implements encoding of integers with a fixed size, the size and signedness are parametrized.

The encoding format itself is a standard big-endian format, which is what EETF uses for every length prefix, for
INTEGER_EXT and for the numeric fields of pids, ports and references.

>>> se = Serializer.build_bytes_serializer()
>>> encode_int(se, 131, length=1, signed=False)  # writes 83
>>> encode_int(se, 3, length=4, signed=False)  # writes 00000003
>>> encode_int(se, -1, length=4, signed=True)  # writes ffffffff
>>> bytes(se.finalize()).hex()
'8300000003ffffffff'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('8300000003ffffffff'))
>>> decode_int(de, length=1, signed=False)  # reads 83
131
>>> decode_int(de, length=4, signed=False)  # reads 00000003
3
>>> decode_int(de, length=4, signed=True)  # reads ffffffff
-1
"""

from eetf_codec.serialization import Deserializer, Serializer


def encode_int(serializer: Serializer, number: int, *, length: int, signed: bool) -> None:
    """ Encode an int using the given byte-length and signedness.

    This modules's docstring has more details and examples.
    """
    try:
        data = int.to_bytes(number, length, byteorder='big', signed=signed)
    except OverflowError:
        raise ValueError('too big to encode')
    serializer.write_bytes(data)


def decode_int(deserializer: Deserializer, *, length: int, signed: bool) -> int:
    """ Decode an int using the given byte-length and signedness.

    This modules's docstring has more details and examples.
    """
    data = deserializer.read_bytes(length)
    return int.from_bytes(data, byteorder='big', signed=signed)
