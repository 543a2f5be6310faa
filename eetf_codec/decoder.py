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
The decoder reads values out of a term tree, driven by the shape the caller asks for.

A `Decoder` wraps a single node. Scalar requests return the value directly, composite requests hand a cursor to a
visit callback and check that the callback consumed every element before returning what it produced:

>>> from eetf_codec.term import FixInteger, List
>>> decoder = Decoder(List((FixInteger(1), FixInteger(2))))
>>> decoder.decode_seq(lambda access: [d.decode_int(bits=8, signed=False) for d in access])
[1, 2]

Failures are reported with the exception that names the mismatch:

>>> Decoder(FixInteger(300)).decode_int(bits=8, signed=False)
Traceback (most recent call last):
...
eetf_codec.exceptions.IntegerConvertError: 300 does not fit in an unsigned 8-bit integer
"""

from __future__ import annotations

import struct
from typing import Any, Callable, Iterator, NoReturn, Optional, Sequence, TypeVar

from eetf_codec.casing import to_camel_case
from eetf_codec.exceptions import (
    CursorProtocolError,
    ExpectedAtom,
    ExpectedAtomOrTuple,
    ExpectedBinary,
    ExpectedBoolean,
    ExpectedChar,
    ExpectedFixInteger,
    ExpectedFloat,
    ExpectedList,
    ExpectedMap,
    ExpectedNil,
    ExpectedTuple,
    FloatConvertError,
    IntegerConvertError,
    InvalidBoolean,
    Message,
    MisSizedVariantTuple,
    TooManyItems,
    TypeHintsRequired,
    Utf8DecodeError,
    WrongTupleLength,
)
from eetf_codec.settings import DEFAULT_SETTINGS, CodecSettings
from eetf_codec.term import NIL, Atom, BigInteger, Binary, FixInteger, Float, List, Map, Term, Tuple, kind_name

T = TypeVar('T')


def int_bounds(bits: int, signed: bool) -> tuple[int, int]:
    """ Inclusive range of a sized integer.

    >>> int_bounds(8, True)
    (-128, 127)
    >>> int_bounds(16, False)
    (0, 65535)
    """
    if signed:
        return -(2**(bits - 1)), 2**(bits - 1) - 1
    return 0, 2**bits - 1


class Decoder:
    __slots__ = ('_term', 'settings')

    _term: Term
    settings: CodecSettings

    def __init__(self, term: Term, settings: CodecSettings = DEFAULT_SETTINGS) -> None:
        self._term = term
        self.settings = settings

    @property
    def term(self) -> Term:
        return self._term

    def _child(self, term: Term) -> Decoder:
        return Decoder(term, self.settings)

    def variant_name(self, atom: Atom) -> str:
        """The variant name an atom tag stands for."""
        if self.settings.convert_variant_case:
            return to_camel_case(atom.name)
        return atom.name

    def decode_any(self) -> NoReturn:
        raise TypeHintsRequired

    def decode_generic(self) -> Any:
        """Decode without a target type, see `term_to_generic`."""
        return term_to_generic(self._term)

    def decode_term(self) -> Term:
        """Raw passthrough, the node is returned as it is."""
        return self._term

    def decode_bool(self) -> bool:
        match self._term:
            case Atom('true'):
                return True
            case Atom('false'):
                return False
            case Atom(name):
                raise InvalidBoolean(f'Invalid boolean: {name}')
            case _:
                raise ExpectedBoolean

    def decode_int(self, *, bits: int, signed: bool) -> int:
        """ Sized integers, a FixInteger or a BigInteger is accepted as long as the value is in range.
        """
        match self._term:
            case FixInteger(value) | BigInteger(value):
                pass
            case _:
                raise ExpectedFixInteger
        lower, upper = int_bounds(bits, signed)
        if not lower <= value <= upper:
            kind = 'a signed' if signed else 'an unsigned'
            raise IntegerConvertError(f'{value} does not fit in {kind} {bits}-bit integer')
        return value

    def decode_bigint(self) -> int:
        match self._term:
            case FixInteger(value) | BigInteger(value):
                return value
            case _:
                raise ExpectedFixInteger

    def decode_float(self, *, bits: int = 64) -> float:
        match self._term:
            case Float(value):
                pass
            case _:
                raise ExpectedFloat
        if bits == 32:
            try:
                value, = struct.unpack('>f', struct.pack('>f', value))
            except OverflowError:
                raise FloatConvertError(f'{value} does not fit a 32-bit float')
        return value

    def decode_char(self) -> str:
        try:
            text = self.decode_str()
        except ExpectedBinary:
            raise ExpectedChar
        if len(text) != 1:
            raise ExpectedChar
        return text

    def decode_str(self) -> str:
        data = self.decode_bytes()
        try:
            return data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise Utf8DecodeError from e

    def decode_bytes(self) -> bytes:
        match self._term:
            case Binary(data):
                return data
            case _:
                raise ExpectedBinary

    def decode_option(self) -> Optional[Decoder]:
        """`None` for the `nil` atom, otherwise this same decoder for the inner value."""
        if self._term == NIL:
            return None
        return self

    def decode_unit(self) -> None:
        if self._term != NIL:
            raise ExpectedNil

    def decode_unit_struct(self, name: str) -> None:
        self.decode_unit()

    def decode_newtype_struct(self, name: str) -> Decoder:
        return self

    def decode_seq(self, visit: Callable[[SequenceAccess], T]) -> T:
        match self._term:
            case List(elements):
                return _visit_sequence(SequenceAccess(elements, self.settings), visit)
            case _:
                raise ExpectedList

    def decode_tuple(self, length: int, visit: Callable[[SequenceAccess], T]) -> T:
        match self._term:
            case Tuple(elements):
                if len(elements) != length:
                    raise WrongTupleLength(f'Tuple was wrong length: expected {length}, got {len(elements)}')
                return _visit_sequence(SequenceAccess(elements, self.settings), visit)
            case _:
                raise ExpectedTuple

    def decode_tuple_struct(self, name: str, length: int, visit: Callable[[SequenceAccess], T]) -> T:
        return self.decode_tuple(length, visit)

    def decode_map(self, visit: Callable[[MapAccess], T]) -> T:
        match self._term:
            case Map(entries):
                access = MapAccess(entries, self.settings)
                value = visit(access)
                access.end()
                return value
            case _:
                raise ExpectedMap

    def decode_struct(self, name: str, fields: Sequence[str], visit: Callable[[MapAccess], T]) -> T:
        return self.decode_map(visit)

    def decode_enum(self, name: str, variants: Sequence[str], visit: Callable[[EnumAccess], T]) -> T:
        """ Variants are read from a bare atom, a 2-tuple `{tag, payload}` or a single entry map `#{tag => payload}`.
        """
        match self._term:
            case Atom():
                access = EnumAccess(self, self._term, None)
            case Tuple((tag, payload)):
                access = EnumAccess(self, tag, payload)
            case Tuple():
                raise MisSizedVariantTuple
            case Map(((tag, payload),)):
                access = EnumAccess(self, tag, payload)
            case _:
                raise ExpectedAtomOrTuple
        return visit(access)

    def decode_identifier(self) -> str:
        match self._term:
            case Atom(name):
                return name
            case _:
                raise ExpectedAtom

    def decode_ignored_any(self) -> None:
        pass


def _visit_sequence(access: SequenceAccess, visit: Callable[[SequenceAccess], T]) -> T:
    value = visit(access)
    access.end()
    return value


class SequenceAccess:
    """Cursor over the elements of a list or a tuple, each element is handed out exactly once, in order."""

    __slots__ = ('_elements', '_settings', '_position')

    def __init__(self, elements: tuple[Term, ...], settings: CodecSettings) -> None:
        self._elements = elements
        self._settings = settings
        self._position = 0

    def size_hint(self) -> int:
        """Number of elements that were not handed out yet."""
        return len(self._elements) - self._position

    def next_element(self) -> Optional[Decoder]:
        if self._position >= len(self._elements):
            return None
        element = self._elements[self._position]
        self._position += 1
        return Decoder(element, self._settings)

    def __iter__(self) -> Iterator[Decoder]:
        while (decoder := self.next_element()) is not None:
            yield decoder

    def end(self) -> None:
        if self.size_hint():
            raise TooManyItems


class MapAccess:
    """ Cursor over the entries of a map.

    Each entry is read with `next_key` followed by `next_value`, calling them out of that order is a bug in the caller
    and raises `CursorProtocolError`.
    """

    __slots__ = ('_entries', '_settings', '_position', '_pending_value')

    def __init__(self, entries: tuple[tuple[Term, Term], ...], settings: CodecSettings) -> None:
        self._entries = entries
        self._settings = settings
        self._position = 0
        self._pending_value: Optional[Term] = None

    def size_hint(self) -> int:
        return len(self._entries) - self._position

    def next_key(self) -> Optional[Decoder]:
        if self._pending_value is not None:
            raise CursorProtocolError('next_key was called twice in a row')
        if self._position >= len(self._entries):
            return None
        key, self._pending_value = self._entries[self._position]
        self._position += 1
        return Decoder(key, self._settings)

    def next_value(self) -> Decoder:
        if self._pending_value is None:
            raise CursorProtocolError('next_value was called before next_key')
        value, self._pending_value = self._pending_value, None
        return Decoder(value, self._settings)

    def next_entry(self) -> Optional[tuple[Decoder, Decoder]]:
        key = self.next_key()
        if key is None:
            return None
        return key, self.next_value()

    def end(self) -> None:
        if self._pending_value is not None:
            raise CursorProtocolError('a key was read but not its value')
        if self.size_hint():
            raise TooManyItems


class EnumAccess:
    """Access to the tag of a variant, `variant()` can only be called once."""

    __slots__ = ('_decoder', '_tag', '_payload', '_used')

    def __init__(self, decoder: Decoder, tag: Term, payload: Optional[Term]) -> None:
        self._decoder = decoder
        self._tag = tag
        self._payload = payload
        self._used = False

    def variant(self) -> tuple[str, VariantAccess]:
        if self._used:
            raise CursorProtocolError('variant() was called twice')
        self._used = True
        if not isinstance(self._tag, Atom):
            raise ExpectedAtom
        payload = None if self._payload is None else self._decoder._child(self._payload)
        return self._decoder.variant_name(self._tag), VariantAccess(payload)


class VariantAccess:
    """ Access to the payload of a variant.

    A bare atom only has a unit variant and a `{tag, payload}` pair only has a payload, asking for the other kind
    raises `ExpectedAtom`.
    """

    __slots__ = ('_payload',)

    def __init__(self, payload: Optional[Decoder]) -> None:
        self._payload = payload

    def _require_payload(self) -> Decoder:
        if self._payload is None:
            raise ExpectedAtom('Expected a tuple with a payload, got a bare atom')
        return self._payload

    def unit_variant(self) -> None:
        if self._payload is not None:
            raise ExpectedAtom

    def newtype_variant(self) -> Decoder:
        return self._require_payload()

    def tuple_variant(self, length: int, visit: Callable[[SequenceAccess], T]) -> T:
        return self._require_payload().decode_tuple(length, visit)

    def struct_variant(self, fields: Sequence[str], visit: Callable[[MapAccess], T]) -> T:
        return self._require_payload().decode_map(visit)


def term_to_generic(term: Term) -> Any:
    """ Convert a term to plain Python values, without any target type.

    >>> from eetf_codec.term import Binary
    >>> term_to_generic(Map(((Atom('ok'), List((FixInteger(1), Binary(b'x')))),)))
    {'ok': [1, b'x']}

    Only the node kinds the encoder produces have a generic form, except BigInteger: a generic `int` always comes from
    a FixInteger.
    """
    match term:
        case Atom(name):
            return name
        case FixInteger(value) | Float(value):
            return value
        case Binary(data):
            return data
        case List(elements):
            return [term_to_generic(element) for element in elements]
        case Tuple(elements):
            return tuple(term_to_generic(element) for element in elements)
        case Map(entries):
            result: dict[Any, Any] = {}
            for key, value in entries:
                generic_key = term_to_generic(key)
                try:
                    result[generic_key] = term_to_generic(value)
                except TypeError as e:
                    raise Message(f'map key is not hashable: {kind_name(key)}') from e
            return result
        case _:
            raise Message(f'{kind_name(term)} terms have no generic representation')
