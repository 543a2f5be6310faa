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
Entry points to go between values and the external term format.

>>> from dataclasses import dataclass
>>> from eetf_codec.types import Uint8
>>> @dataclass
... class Point:
...     x: Uint8
...     y: Uint8
>>> data = encode_to_bytes(Point(1, 2))
>>> data.hex()
'83740000000277017861017701796102'
>>> decode_from_bytes(data, Point)
Point(x=1, y=2)

When no type is given for encoding, it is inferred from the value itself. Decoding always needs a type.
"""

from typing import IO, Any, Optional, TypeVar

from structlog import get_logger

from eetf_codec.exceptions import DecodeError, EncodeError
from eetf_codec.serialization import SerializationError
from eetf_codec.settings import DEFAULT_SETTINGS, CodecSettings
from eetf_codec.term import Term, term_from_bytes, term_to_bytes
from eetf_codec.term_types import TermType, make_term_type

logger = get_logger()

T = TypeVar('T')


def _term_type_for(type_: Any) -> TermType:
    # XXX: Any infers the shape from each value at runtime, including the items of builtin containers
    return make_term_type(Any if type_ is None else type_)


def to_term(value: Any, type_: Any = None, *, settings: Optional[CodecSettings] = None) -> Term:
    """Encode a value to a term tree."""
    return _term_type_for(type_).to_term(value, settings=settings)


def from_term(term: Term, type_: type[T], *, settings: Optional[CodecSettings] = None) -> T:
    """Decode a value of the given type from a term tree."""
    return make_term_type(type_).from_term(term, settings=settings)


def encode_to_bytes(value: Any, type_: Any = None, *, settings: Optional[CodecSettings] = None) -> bytes:
    settings = settings or DEFAULT_SETTINGS
    term = to_term(value, type_, settings=settings)
    try:
        return term_to_bytes(term, compression_level=settings.compression_level)
    except ValueError as e:
        logger.debug('encode failed', error=str(e))
        raise EncodeError(str(e)) from e


def encode_to_stream(
    value: Any,
    writer: IO[bytes],
    type_: Any = None,
    *,
    settings: Optional[CodecSettings] = None,
) -> None:
    """Encode a value and write it to a binary writer, the writer is not flushed."""
    data = encode_to_bytes(value, type_, settings=settings)
    try:
        writer.write(data)
    except (OSError, ValueError) as e:
        logger.debug('encode failed', error=str(e), size=len(data))
        raise EncodeError(f'failed to write term: {e}') from e


def decode_from_bytes(data: bytes, type_: type[T], *, settings: Optional[CodecSettings] = None) -> T:
    settings = settings or DEFAULT_SETTINGS
    try:
        term = term_from_bytes(data, max_bytes=settings.max_input_bytes)
    except SerializationError as e:
        logger.debug('decode failed', error=str(e), size=len(data))
        raise DecodeError(str(e)) from e
    try:
        return from_term(term, type_, settings=settings)
    except RecursionError as e:
        logger.debug('decode failed', error='term is nested too deeply', size=len(data))
        raise DecodeError('term is nested too deeply') from e


def decode_from_stream(reader: IO[bytes], type_: type[T], *, settings: Optional[CodecSettings] = None) -> T:
    """Read a whole term from a binary reader and decode it, the reader is read until EOF.

    With `max_input_bytes` set at most one byte past the limit is read, which is enough to tell the input is too big.
    """
    settings = settings or DEFAULT_SETTINGS
    try:
        if settings.max_input_bytes is None:
            data = reader.read()
        else:
            data = reader.read(settings.max_input_bytes + 1)
    except (OSError, ValueError) as e:
        logger.debug('decode failed', error=str(e))
        raise DecodeError(f'failed to read term: {e}') from e
    return decode_from_bytes(data, type_, settings=settings)
