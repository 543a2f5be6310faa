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
The encoder turns values into term trees.

It has one method per shape of the data model and never looks at Python types itself, a `TermType` describes the
value and calls the method that matches its shape, passing along the `TermType` of any inner value so the encoder can
recurse. Composite values are built with a builder returned by the encoder:

>>> from eetf_codec.term_types import make_term_type
>>> encoder = Encoder()
>>> builder = encoder.encode_seq(2)
>>> builder.add_element(make_term_type(str), 'a')
>>> builder.add_element(make_term_type(str), 'b')
>>> builder.end()
List(elements=(Binary(data=b'a'), Binary(data=b'b')))

Variants are always written as an atom (unit variants) or as a 2-tuple of the variant atom and the payload:

>>> encoder.encode_newtype_variant('ErlResult', 0, 'Ok', make_term_type(str), 'test')
Tuple(elements=(Atom(name='ok'), Binary(data=b'test')))
"""

from __future__ import annotations

import math
import struct
from typing import TYPE_CHECKING, Any, Optional

from eetf_codec.casing import to_snake_case
from eetf_codec.exceptions import CursorProtocolError, EncodeError, FloatConvertError
from eetf_codec.settings import DEFAULT_SETTINGS, CodecSettings
from eetf_codec.term import (
    FALSE,
    NIL,
    TRUE,
    Atom,
    BigInteger,
    Binary,
    FixInteger,
    Float,
    List,
    Map,
    Term,
    Tuple,
    kind_name,
)

if TYPE_CHECKING:
    from eetf_codec.term_types import TermType

# Every node built by the encoder is one of these kinds.
ENCODABLE_TERM_CLASSES = (Atom, FixInteger, BigInteger, Float, Binary, List, Tuple, Map)


class Encoder:
    __slots__ = ('settings',)

    settings: CodecSettings

    def __init__(self, settings: CodecSettings = DEFAULT_SETTINGS) -> None:
        self.settings = settings

    def variant_atom(self, variant: str) -> Atom:
        """The atom used as the tag of a variant."""
        if self.settings.convert_variant_case:
            return Atom(to_snake_case(variant))
        return Atom(variant)

    def encode_bool(self, value: bool) -> Term:
        return TRUE if value else FALSE

    def encode_int(self, value: int, *, bits: int, signed: bool) -> Term:
        """ Sized integers, the node kind only depends on the declared width and not on the value.

        Signed integers of up to 32 bits and unsigned integers of up to 16 bits always fit a FixInteger, anything
        wider is written as a BigInteger.
        """
        if (signed and bits <= 32) or (not signed and bits <= 16):
            return FixInteger(value)
        return BigInteger(value)

    def encode_bigint(self, value: int) -> Term:
        """Arbitrary precision integers use the smallest node kind that holds the value."""
        if FixInteger.fits(value):
            return FixInteger(value)
        return BigInteger(value)

    def encode_float(self, value: float, *, bits: int = 64) -> Term:
        if not math.isfinite(value):
            raise FloatConvertError(f'{value} cannot be represented as a float term')
        if bits == 32:
            try:
                value, = struct.unpack('>f', struct.pack('>f', value))
            except OverflowError:
                raise FloatConvertError(f'{value} does not fit a 32-bit float')
        return Float(float(value))

    def encode_char(self, value: str) -> Term:
        if len(value) != 1:
            raise ValueError(f'a char is a single code point, got {len(value)}')
        return self.encode_str(value)

    def encode_str(self, value: str) -> Term:
        try:
            return Binary(value.encode('utf-8'))
        except UnicodeEncodeError as e:
            raise EncodeError(f'string is not valid unicode: {e.reason}') from e

    def encode_bytes(self, value: bytes) -> Term:
        return Binary(bytes(value))

    def encode_none(self) -> Term:
        return NIL

    def encode_some(self, term_type: TermType[Any], value: Any) -> Term:
        # XXX: the value is not wrapped, so `Some(unit)` and `None` are both written as `nil`
        return term_type.encode(self, value)

    def encode_unit(self) -> Term:
        return NIL

    def encode_unit_struct(self, name: str) -> Term:
        return self.encode_unit()

    def encode_unit_variant(self, name: str, variant_index: int, variant: str) -> Term:
        return self.variant_atom(variant)

    def encode_newtype_struct(self, name: str, term_type: TermType[Any], value: Any) -> Term:
        return term_type.encode(self, value)

    def encode_newtype_variant(
        self,
        name: str,
        variant_index: int,
        variant: str,
        term_type: TermType[Any],
        value: Any,
    ) -> Term:
        return Tuple((self.variant_atom(variant), term_type.encode(self, value)))

    def encode_term(self, term: Term) -> Term:
        """Raw passthrough for values that are already terms, limited to the kinds the encoder can produce."""
        if not isinstance(term, ENCODABLE_TERM_CLASSES):
            raise EncodeError(f'{kind_name(term)} terms are not supported by the encoder')
        return term

    def encode_seq(self, length: Optional[int] = None) -> SequenceBuilder:
        return SequenceBuilder(self, length)

    def encode_tuple(self, length: int) -> TupleBuilder:
        return TupleBuilder(self, length)

    def encode_tuple_struct(self, name: str, length: int) -> TupleBuilder:
        return self.encode_tuple(length)

    def encode_tuple_variant(self, name: str, variant_index: int, variant: str, length: int) -> TupleVariantBuilder:
        return TupleVariantBuilder(self, length, self.variant_atom(variant))

    def encode_map(self, length: Optional[int] = None) -> MapBuilder:
        return MapBuilder(self, length)

    def encode_struct(self, name: str, length: int) -> StructBuilder:
        return StructBuilder(self, length)

    def encode_struct_variant(
        self,
        name: str,
        variant_index: int,
        variant: str,
        length: int,
    ) -> StructVariantBuilder:
        return StructVariantBuilder(self, length, self.variant_atom(variant))


class _Builder:
    """ Base class for the accumulators used while a composite value is encoded.

    Builders keep the child nodes in the order they were added and turn into exactly one node when `end()` is called,
    after that they can't be used anymore.
    """

    __slots__ = ('_encoder', '_length', '_done')

    def __init__(self, encoder: Encoder, length: Optional[int]) -> None:
        self._encoder = encoder
        self._length = length
        self._done = False

    def _check_open(self) -> None:
        if self._done:
            raise CursorProtocolError(f'{type(self).__name__} was used after end()')

    def _finish(self) -> None:
        self._check_open()
        self._done = True


class SequenceBuilder(_Builder):
    __slots__ = ('_elements',)

    def __init__(self, encoder: Encoder, length: Optional[int]) -> None:
        super().__init__(encoder, length)
        self._elements: list[Term] = []

    def add_element(self, term_type: TermType[Any], value: Any) -> None:
        self._check_open()
        self._elements.append(term_type.encode(self._encoder, value))

    def end(self) -> Term:
        self._finish()
        return List(tuple(self._elements))


class TupleBuilder(SequenceBuilder):
    """Like a sequence, but the declared length is exact."""

    __slots__ = ()

    def _tuple(self) -> Tuple:
        self._finish()
        if len(self._elements) != self._length:
            raise CursorProtocolError(f'tuple declared {self._length} elements but got {len(self._elements)}')
        return Tuple(tuple(self._elements))

    def end(self) -> Term:
        return self._tuple()


class TupleVariantBuilder(TupleBuilder):
    __slots__ = ('_tag',)

    def __init__(self, encoder: Encoder, length: int, tag: Atom) -> None:
        super().__init__(encoder, length)
        self._tag = tag

    def end(self) -> Term:
        return Tuple((self._tag, self._tuple()))


class MapBuilder(_Builder):
    """ Accumulates map entries, either whole with `add_entry` or split with `add_key` followed by `add_value`.
    """

    __slots__ = ('_entries', '_pending_key')

    def __init__(self, encoder: Encoder, length: Optional[int]) -> None:
        super().__init__(encoder, length)
        self._entries: list[tuple[Term, Term]] = []
        self._pending_key: Optional[Term] = None

    def add_key(self, term_type: TermType[Any], key: Any) -> None:
        self._check_open()
        if self._pending_key is not None:
            raise CursorProtocolError('add_key was called twice in a row')
        self._pending_key = term_type.encode(self._encoder, key)

    def add_value(self, term_type: TermType[Any], value: Any) -> None:
        self._check_open()
        if self._pending_key is None:
            raise CursorProtocolError('add_value was called before add_key')
        key, self._pending_key = self._pending_key, None
        self._entries.append((key, term_type.encode(self._encoder, value)))

    def add_entry(self, key_type: TermType[Any], key: Any, value_type: TermType[Any], value: Any) -> None:
        self.add_key(key_type, key)
        self.add_value(value_type, value)

    def _map(self) -> Map:
        self._finish()
        if self._pending_key is not None:
            raise CursorProtocolError('end() was called with a key that has no value')
        return Map(tuple(self._entries))

    def end(self) -> Term:
        return self._map()


class StructBuilder(MapBuilder):
    """Records are maps keyed by the field names as atoms, spelled exactly as declared."""

    __slots__ = ()

    def add_field(self, name: str, term_type: TermType[Any], value: Any) -> None:
        self._check_open()
        self._entries.append((Atom(name), term_type.encode(self._encoder, value)))

    def skip_field(self, name: str) -> None:
        self._check_open()


class StructVariantBuilder(StructBuilder):
    __slots__ = ('_tag',)

    def __init__(self, encoder: Encoder, length: int, tag: Atom) -> None:
        super().__init__(encoder, length)
        self._tag = tag

    def end(self) -> Term:
        return Tuple((self._tag, self._map()))
