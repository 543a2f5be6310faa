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
Materializes a term tree from the external term format byte layout.

The whole input must be available, reading stops with an `OutOfDataError` as soon as a term needs more bytes than
what is left, and `term_from_bytes` refuses trailing bytes after the root term.

>>> term_from_bytes(bytes.fromhex('83680277026f6b6101'))
Tuple(elements=(Atom(name='ok'), FixInteger(value=1)))

Legacy encodings are accepted, for instance STRING_EXT (how Erlang sends short lists of small integers) is read as a
list of fix integers:

>>> term_from_bytes(bytes.fromhex('836b0003010203'))
List(elements=(FixInteger(value=1), FixInteger(value=2), FixInteger(value=3)))
"""

import zlib
from typing import Callable

from structlog import get_logger

from eetf_codec.serialization import BadDataError, Deserializer
from eetf_codec.serialization.adapters import MaxBytesExceededError
from eetf_codec.serialization.encoding.bignum import decode_bignum
from eetf_codec.serialization.encoding.float import decode_float64, decode_float_ascii
from eetf_codec.serialization.encoding.int import decode_int
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


def _read_u8(deserializer: Deserializer) -> int:
    return decode_int(deserializer, length=1, signed=False)


def _read_u16(deserializer: Deserializer) -> int:
    return decode_int(deserializer, length=2, signed=False)


def _read_u32(deserializer: Deserializer) -> int:
    return decode_int(deserializer, length=4, signed=False)


def _read_atom_text(deserializer: Deserializer, length: int, encoding: str) -> Atom:
    data = bytes(deserializer.read_bytes(length))
    try:
        return Atom(data.decode(encoding))
    except UnicodeDecodeError as e:
        raise BadDataError('invalid atom text') from e


def read_atom(deserializer: Deserializer) -> Atom:
    """Read a term that must be an atom, as required for the node field of pids, ports and references."""
    term = read_term(deserializer)
    if not isinstance(term, Atom):
        raise BadDataError(f'expected an atom, got {type(term).__name__}')
    return term


def _read_elements(deserializer: Deserializer, arity: int) -> tuple[Term, ...]:
    return tuple(read_term(deserializer) for _ in range(arity))


def _read_small_integer(deserializer: Deserializer) -> Term:
    return FixInteger(_read_u8(deserializer))


def _read_integer(deserializer: Deserializer) -> Term:
    return FixInteger(decode_int(deserializer, length=4, signed=True))


def _read_small_big(deserializer: Deserializer) -> Term:
    return BigInteger(decode_bignum(deserializer, length_size=1))


def _read_large_big(deserializer: Deserializer) -> Term:
    return BigInteger(decode_bignum(deserializer, length_size=4))


def _read_new_float(deserializer: Deserializer) -> Term:
    return Float(decode_float64(deserializer))


def _read_float(deserializer: Deserializer) -> Term:
    return Float(decode_float_ascii(deserializer))


def _read_atom_latin1(deserializer: Deserializer) -> Term:
    return _read_atom_text(deserializer, _read_u16(deserializer), 'latin-1')


def _read_small_atom_latin1(deserializer: Deserializer) -> Term:
    return _read_atom_text(deserializer, _read_u8(deserializer), 'latin-1')


def _read_atom_utf8(deserializer: Deserializer) -> Term:
    return _read_atom_text(deserializer, _read_u16(deserializer), 'utf-8')


def _read_small_atom_utf8(deserializer: Deserializer) -> Term:
    return _read_atom_text(deserializer, _read_u8(deserializer), 'utf-8')


def _read_binary(deserializer: Deserializer) -> Term:
    length = _read_u32(deserializer)
    return Binary(bytes(deserializer.read_bytes(length)))


def _read_bit_binary(deserializer: Deserializer) -> Term:
    length = _read_u32(deserializer)
    tail_bits = _read_u8(deserializer)
    return BitBinary(bytes(deserializer.read_bytes(length)), tail_bits)


def _read_nil(deserializer: Deserializer) -> Term:
    return List(())


def _read_string(deserializer: Deserializer) -> Term:
    length = _read_u16(deserializer)
    return List(tuple(FixInteger(b) for b in bytes(deserializer.read_bytes(length))))


def _read_list(deserializer: Deserializer) -> Term:
    length = _read_u32(deserializer)
    elements = _read_elements(deserializer, length)
    tail = read_term(deserializer)
    if tail == List(()):
        return List(elements)
    return ImproperList(elements, tail)


def _read_small_tuple(deserializer: Deserializer) -> Term:
    return Tuple(_read_elements(deserializer, _read_u8(deserializer)))


def _read_large_tuple(deserializer: Deserializer) -> Term:
    return Tuple(_read_elements(deserializer, _read_u32(deserializer)))


def _read_map(deserializer: Deserializer) -> Term:
    arity = _read_u32(deserializer)
    return Map(tuple((read_term(deserializer), read_term(deserializer)) for _ in range(arity)))


def _read_pid(deserializer: Deserializer) -> Term:
    node = read_atom(deserializer)
    return Pid(node, _read_u32(deserializer), _read_u32(deserializer), _read_u8(deserializer))


def _read_new_pid(deserializer: Deserializer) -> Term:
    node = read_atom(deserializer)
    return Pid(node, _read_u32(deserializer), _read_u32(deserializer), _read_u32(deserializer))


def _read_port(deserializer: Deserializer) -> Term:
    node = read_atom(deserializer)
    return Port(node, _read_u32(deserializer), _read_u8(deserializer))


def _read_new_port(deserializer: Deserializer) -> Term:
    node = read_atom(deserializer)
    return Port(node, _read_u32(deserializer), _read_u32(deserializer))


def _read_v4_port(deserializer: Deserializer) -> Term:
    node = read_atom(deserializer)
    return Port(node, decode_int(deserializer, length=8, signed=False), _read_u32(deserializer))


def _read_reference(deserializer: Deserializer) -> Term:
    node = read_atom(deserializer)
    id_ = _read_u32(deserializer)
    return Reference(node, (id_,), _read_u8(deserializer))


def _read_new_reference(deserializer: Deserializer) -> Term:
    length = _read_u16(deserializer)
    node = read_atom(deserializer)
    creation = _read_u8(deserializer)
    return Reference(node, tuple(_read_u32(deserializer) for _ in range(length)), creation)


def _read_newer_reference(deserializer: Deserializer) -> Term:
    length = _read_u16(deserializer)
    node = read_atom(deserializer)
    creation = _read_u32(deserializer)
    return Reference(node, tuple(_read_u32(deserializer) for _ in range(length)), creation)


def _read_export(deserializer: Deserializer) -> Term:
    module = read_atom(deserializer)
    function = read_atom(deserializer)
    arity = read_term(deserializer)
    if not isinstance(arity, FixInteger):
        raise BadDataError('fun arity must be a small integer')
    return ExternalFun(module, function, arity.value)


def _read_new_fun(deserializer: Deserializer) -> Term:
    # XXX: the size field counts itself, so the body is the 4 size bytes plus size - 4 bytes
    size_bytes = bytes(deserializer.read_bytes(4))
    size = int.from_bytes(size_bytes, byteorder='big')
    if size < 4:
        raise BadDataError('invalid fun size')
    return InternalFun(size_bytes + bytes(deserializer.read_bytes(size - 4)))


_READERS: dict[int, Callable[[Deserializer], Term]] = {
    Tag.SMALL_INTEGER_EXT: _read_small_integer,
    Tag.INTEGER_EXT: _read_integer,
    Tag.SMALL_BIG_EXT: _read_small_big,
    Tag.LARGE_BIG_EXT: _read_large_big,
    Tag.NEW_FLOAT_EXT: _read_new_float,
    Tag.FLOAT_EXT: _read_float,
    Tag.ATOM_EXT: _read_atom_latin1,
    Tag.SMALL_ATOM_EXT: _read_small_atom_latin1,
    Tag.ATOM_UTF8_EXT: _read_atom_utf8,
    Tag.SMALL_ATOM_UTF8_EXT: _read_small_atom_utf8,
    Tag.BINARY_EXT: _read_binary,
    Tag.BIT_BINARY_EXT: _read_bit_binary,
    Tag.NIL_EXT: _read_nil,
    Tag.STRING_EXT: _read_string,
    Tag.LIST_EXT: _read_list,
    Tag.SMALL_TUPLE_EXT: _read_small_tuple,
    Tag.LARGE_TUPLE_EXT: _read_large_tuple,
    Tag.MAP_EXT: _read_map,
    Tag.PID_EXT: _read_pid,
    Tag.NEW_PID_EXT: _read_new_pid,
    Tag.PORT_EXT: _read_port,
    Tag.NEW_PORT_EXT: _read_new_port,
    Tag.V4_PORT_EXT: _read_v4_port,
    Tag.REFERENCE_EXT: _read_reference,
    Tag.NEW_REFERENCE_EXT: _read_new_reference,
    Tag.NEWER_REFERENCE_EXT: _read_newer_reference,
    Tag.EXPORT_EXT: _read_export,
    Tag.NEW_FUN_EXT: _read_new_fun,
}


def read_term(deserializer: Deserializer) -> Term:
    """Read a single term, without the version byte."""
    tag = deserializer.read_byte()
    reader = _READERS.get(tag)
    if reader is None:
        raise BadDataError(f'unsupported term tag: {tag}')
    return reader(deserializer)


def _decompress(deserializer: Deserializer, *, max_bytes: int | None) -> bytes:
    size = _read_u32(deserializer)
    if max_bytes is not None and size > max_bytes:
        raise MaxBytesExceededError(f'uncompressed term has {size} bytes')
    # XXX: inflate at most one byte past the declared size, so a lying header can't make us allocate more than that
    decompressor = zlib.decompressobj()
    try:
        payload = decompressor.decompress(bytes(deserializer.read_all()), size + 1)
    except zlib.error as e:
        raise BadDataError('invalid compressed term') from e
    if len(payload) != size:
        raise BadDataError(f'uncompressed size mismatch: expected {size}, got {len(payload)}')
    logger.debug('decompressed term', uncompressed_size=size)
    return payload


def term_from_bytes(data: bytes, *, max_bytes: int | None = None) -> Term:
    """Read a version byte and a single term, the whole input must be consumed.

    When `max_bytes` is given it bounds both the input and the size of a compressed term once inflated.
    """
    deserializer = Deserializer.build_bytes_deserializer(data).with_optional_max_bytes(max_bytes)
    version = deserializer.read_byte()
    if version != VERSION:
        raise BadDataError(f'invalid version: {version} (expected {VERSION})')
    if deserializer.peek_byte() == Tag.COMPRESSED:
        deserializer.read_byte()
        payload = _decompress(deserializer, max_bytes=max_bytes)
        deserializer.finalize()
        deserializer = Deserializer.build_bytes_deserializer(payload)
    try:
        term = read_term(deserializer)
    except RecursionError as e:
        raise BadDataError('term is nested too deeply') from e
    deserializer.finalize()
    return term
