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

r"""
Writes a materialized term tree using the external term format byte layout.

The writer always picks the most compact tag that keeps the node kind, except for `BigInteger` which is always written
as a bignum (even when the value would fit in INTEGER_EXT), this way a `BigInteger` is read back as a `BigInteger`.

>>> term_to_bytes(Tuple((Atom('ok'), FixInteger(1)))).hex()
'83680277026f6b6101'

Breakdown of the result:

    83: version
    6802: SMALL_TUPLE_EXT with arity 2
    77026f6b: SMALL_ATOM_UTF8_EXT 'ok'
    6101: SMALL_INTEGER_EXT 1

>>> term_to_bytes(BigInteger(65530)).hex()
'836e0200faff'
>>> term_to_bytes(List(())).hex()
'836a'
"""

import math
import zlib

from structlog import get_logger
from typing_extensions import assert_never

from eetf_codec.serialization import Serializer
from eetf_codec.serialization.encoding.bignum import bignum_digit_count, encode_bignum
from eetf_codec.serialization.encoding.float import encode_float64
from eetf_codec.serialization.encoding.int import encode_int
from eetf_codec.term.tags import VERSION, Tag
from eetf_codec.term.term import (
    Atom,
    BigInteger,
    Binary,
    BitBinary,
    ExternalFun,
    FixInteger,
    Float,
    ImproperList,
    InternalFun,
    List,
    Map,
    Pid,
    Port,
    Reference,
    Term,
    Tuple,
)

logger = get_logger()

_U8_MAX = 2**8 - 1
_U16_MAX = 2**16 - 1
_U32_MAX = 2**32 - 1


def _write_tag(serializer: Serializer, tag: Tag) -> None:
    serializer.write_byte(tag)


def _write_u8(serializer: Serializer, value: int) -> None:
    encode_int(serializer, value, length=1, signed=False)


def _write_u16(serializer: Serializer, value: int) -> None:
    encode_int(serializer, value, length=2, signed=False)


def _write_u32(serializer: Serializer, value: int) -> None:
    encode_int(serializer, value, length=4, signed=False)


def write_atom(serializer: Serializer, atom: Atom) -> None:
    data = atom.name.encode('utf-8')
    if len(data) <= _U8_MAX:
        _write_tag(serializer, Tag.SMALL_ATOM_UTF8_EXT)
        _write_u8(serializer, len(data))
    elif len(data) <= _U16_MAX:
        _write_tag(serializer, Tag.ATOM_UTF8_EXT)
        _write_u16(serializer, len(data))
    else:
        raise ValueError('atom is too long')
    serializer.write_bytes(data)


def _write_elements(serializer: Serializer, elements: tuple[Term, ...]) -> None:
    for element in elements:
        write_term(serializer, element)


def write_term(serializer: Serializer, term: Term) -> None:
    """Write a single term, without the version byte."""
    match term:
        case Atom():
            write_atom(serializer, term)
        case FixInteger(value):
            if 0 <= value <= _U8_MAX:
                _write_tag(serializer, Tag.SMALL_INTEGER_EXT)
                _write_u8(serializer, value)
            else:
                _write_tag(serializer, Tag.INTEGER_EXT)
                encode_int(serializer, value, length=4, signed=True)
        case BigInteger(value):
            if bignum_digit_count(value) <= _U8_MAX:
                _write_tag(serializer, Tag.SMALL_BIG_EXT)
                encode_bignum(serializer, value, length_size=1)
            else:
                _write_tag(serializer, Tag.LARGE_BIG_EXT)
                encode_bignum(serializer, value, length_size=4)
        case Float(value):
            if not math.isfinite(value):
                raise ValueError(f'{value} cannot be represented in the external term format')
            _write_tag(serializer, Tag.NEW_FLOAT_EXT)
            encode_float64(serializer, value)
        case Binary(data):
            _write_tag(serializer, Tag.BINARY_EXT)
            _write_u32(serializer, len(data))
            serializer.write_bytes(data)
        case BitBinary(data, tail_bits):
            if not data or not 1 <= tail_bits <= 8:
                raise ValueError('a bit binary needs at least one byte and 1 to 8 tail bits')
            _write_tag(serializer, Tag.BIT_BINARY_EXT)
            _write_u32(serializer, len(data))
            _write_u8(serializer, tail_bits)
            serializer.write_bytes(data)
        case List(elements):
            if elements:
                _write_tag(serializer, Tag.LIST_EXT)
                _write_u32(serializer, len(elements))
                _write_elements(serializer, elements)
            _write_tag(serializer, Tag.NIL_EXT)
        case ImproperList(elements, tail):
            _write_tag(serializer, Tag.LIST_EXT)
            _write_u32(serializer, len(elements))
            _write_elements(serializer, elements)
            write_term(serializer, tail)
        case Tuple(elements):
            if len(elements) <= _U8_MAX:
                _write_tag(serializer, Tag.SMALL_TUPLE_EXT)
                _write_u8(serializer, len(elements))
            else:
                _write_tag(serializer, Tag.LARGE_TUPLE_EXT)
                _write_u32(serializer, len(elements))
            _write_elements(serializer, elements)
        case Map(entries):
            _write_tag(serializer, Tag.MAP_EXT)
            _write_u32(serializer, len(entries))
            for key, value in entries:
                write_term(serializer, key)
                write_term(serializer, value)
        case Pid(node, id, serial, creation):
            _write_tag(serializer, Tag.NEW_PID_EXT)
            write_atom(serializer, node)
            _write_u32(serializer, id)
            _write_u32(serializer, serial)
            _write_u32(serializer, creation)
        case Port(node, id, creation):
            if id > _U32_MAX:
                _write_tag(serializer, Tag.V4_PORT_EXT)
                write_atom(serializer, node)
                encode_int(serializer, id, length=8, signed=False)
            else:
                _write_tag(serializer, Tag.NEW_PORT_EXT)
                write_atom(serializer, node)
                _write_u32(serializer, id)
            _write_u32(serializer, creation)
        case Reference(node, ids, creation):
            _write_tag(serializer, Tag.NEWER_REFERENCE_EXT)
            _write_u16(serializer, len(ids))
            write_atom(serializer, node)
            _write_u32(serializer, creation)
            for id_ in ids:
                _write_u32(serializer, id_)
        case ExternalFun(module, function, arity):
            _write_tag(serializer, Tag.EXPORT_EXT)
            write_atom(serializer, module)
            write_atom(serializer, function)
            write_term(serializer, FixInteger(arity))
        case InternalFun(body):
            _write_tag(serializer, Tag.NEW_FUN_EXT)
            serializer.write_bytes(body)
        case _:
            assert_never(term)


def term_to_bytes(term: Term, *, compression_level: int | None = None) -> bytes:
    """Version byte followed by the term, optionally wrapped in the zlib envelope."""
    inner = Serializer.build_bytes_serializer()
    write_term(inner, term)
    payload = bytes(inner.finalize())

    serializer = Serializer.build_bytes_serializer()
    serializer.write_byte(VERSION)
    if compression_level is None:
        serializer.write_bytes(payload)
    else:
        compressed = zlib.compress(payload, compression_level)
        logger.debug('compressed term', uncompressed_size=len(payload), compressed_size=len(compressed))
        _write_tag(serializer, Tag.COMPRESSED)
        _write_u32(serializer, len(payload))
        serializer.write_bytes(compressed)
    return bytes(serializer.finalize())
