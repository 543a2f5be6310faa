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

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, NamedTuple, Optional, TypeVar, final

from typing_extensions import Self

from eetf_codec.decoder import Decoder
from eetf_codec.encoder import Encoder
from eetf_codec.settings import DEFAULT_SETTINGS, CodecSettings
from eetf_codec.term import Term, term_from_bytes, term_to_bytes
from eetf_codec.term_types.utils import TypeAliasMap, TypeToTermTypeMap, get_aliased_type, get_usable_origin_type

T = TypeVar('T')


class TermType(ABC, Generic[T]):
    """ This class is used to model a type with a known type signature and how it maps to a term tree.

    A `TermType` is built once from a type annotation (see `make_term_type`) and then used to drive the `Encoder` and
    the `Decoder`: it is the only place where Python types are inspected, the encoder and the decoder only know about
    the shapes of the data model.
    """

    class TypeMap(NamedTuple):
        alias_map: TypeAliasMap
        term_types_map: TypeToTermTypeMap

    # XXX: subclasses must override this if they need any properties
    __slots__ = ()

    # XXX: subclasses must initialize this property
    _is_hashable: bool

    @final
    @staticmethod
    def from_type(type_: type[T], /, *, type_map: TypeMap) -> TermType[T]:
        """ Instantiate a TermType instance from a type signature using the given maps.

        A `term_types_map` associates concrete types to concrete TermType classes, while an `alias_map` associates
        types with substitute types to use instead.
        """
        usable_origin = get_usable_origin_type(type_, type_map=type_map)
        term_type = type_map.term_types_map[usable_origin]
        aliased_type = get_aliased_type(type_, type_map.alias_map)
        return term_type._from_type(aliased_type, type_map=type_map)

    @classmethod
    def _from_type(cls, type_: type[T], /, *, type_map: TypeMap) -> Self:
        """ Instantiate a TermType instance from a type signature.

        The implementation is expected to inspect the given type's origin and args to check for compatibility and to
        use `TermType.from_type`, forwarding the given `type_map`, for any inner type.
        """
        raise TypeError(f'{cls} is not compatible with use in a TermType.TypeMap')

    @final
    def is_hashable(self) -> bool:
        """ Indicates whether the values produced when decoding can be used as dict keys or set members."""
        return self._is_hashable

    @final
    def check_value(self, value: T, /) -> None:
        """ Raise a TypeError (or a ValueError when the type is right but the value isn't) if the value can't be
        encoded with this TermType, compound values are checked recursively.
        """
        self._check_value(value, deep=True)

    @final
    def encode(self, encoder: Encoder, value: T, /) -> Term:
        """ Turn a value into a term tree, the value is shallow checked before it's encoded."""
        self._check_value(value, deep=False)
        return self._encode(encoder, value)

    @final
    def decode(self, decoder: Decoder, /) -> T:
        """ Read a value out of the decoder.

        Decoding is expected to always produce valid values, the shallow check made afterwards is only a double check.
        """
        value = self._decode(decoder)
        self._check_value(value, deep=False)
        return value

    @final
    def to_term(self, value: T, /, *, settings: Optional[CodecSettings] = None) -> Term:
        return self.encode(Encoder(settings or DEFAULT_SETTINGS), value)

    @final
    def from_term(self, term: Term, /, *, settings: Optional[CodecSettings] = None) -> T:
        return self.decode(Decoder(term, settings or DEFAULT_SETTINGS))

    @final
    def to_bytes(self, value: T, /, *, settings: Optional[CodecSettings] = None) -> bytes:
        """ Shortcut to go from a value straight to the external term format."""
        settings = settings or DEFAULT_SETTINGS
        return term_to_bytes(self.to_term(value, settings=settings), compression_level=settings.compression_level)

    @final
    def from_bytes(self, data: bytes, /, *, settings: Optional[CodecSettings] = None) -> T:
        """ Shortcut to go from the external term format straight to a value."""
        settings = settings or DEFAULT_SETTINGS
        return self.from_term(term_from_bytes(data, max_bytes=settings.max_input_bytes), settings=settings)

    @abstractmethod
    def _check_value(self, value: T, /, *, deep: bool) -> None:
        """ Inner implementation of `TermType.check_value`.

        Compound values should use `TermType._check_value` on the inner type(s) and pass the `deep` argument along.
        """
        raise NotImplementedError

    @abstractmethod
    def _encode(self, encoder: Encoder, value: T, /) -> Term:
        """ Inner implementation of `encode`, you can assume that the given value has been "shallow checked".

        Inner values must be passed to the encoder along with their `TermType`, never encoded with `_encode`.
        """
        raise NotImplementedError

    @abstractmethod
    def _decode(self, decoder: Decoder, /) -> T:
        """ Inner implementation of `decode`."""
        raise NotImplementedError
