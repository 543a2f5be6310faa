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
Dataclasses are records, written as a map from the field names (as atoms, spelled exactly as declared) to the field
values, in declaration order. A dataclass without fields is a unit record and is written as the `nil` atom.

When decoding, keys that don't name a field are skipped, a field that appears twice is an error and a missing field
is an error unless it has a default or is optional (missing optional fields are `None`).
"""

from __future__ import annotations

from dataclasses import MISSING, fields, is_dataclass
from typing import TYPE_CHECKING, Any, Mapping, NamedTuple, Optional, TypeVar, get_type_hints

from typing_extensions import Self, override

from eetf_codec.decoder import Decoder, MapAccess
from eetf_codec.encoder import Encoder, StructBuilder
from eetf_codec.exceptions import Message
from eetf_codec.term import Term
from eetf_codec.term_types.optional_term_type import OptionalTermType
from eetf_codec.term_types.term_type import TermType
from eetf_codec.term_types.utils import is_origin_hashable

if TYPE_CHECKING:
    from _typeshed import DataclassInstance

D = TypeVar('D', bound='DataclassInstance')


class RecordField(NamedTuple):
    term_type: TermType
    has_default: bool


def get_record_fields(class_: type, type_map: TermType.TypeMap) -> dict[str, RecordField]:
    """ Resolve the TermType of each field that is accepted by the dataclass constructor, in declaration order.
    """
    # XXX: get_type_hints resolves string annotations, including the ones made by `from __future__ import annotations`
    hints = get_type_hints(class_)
    record_fields: dict[str, RecordField] = {}
    for field in fields(class_):
        if not field.init:
            continue
        has_default = field.default is not MISSING or field.default_factory is not MISSING
        record_fields[field.name] = RecordField(TermType.from_type(hints[field.name], type_map=type_map), has_default)
    return record_fields


def add_record_fields(builder: StructBuilder, value: Any, record_fields: Mapping[str, RecordField]) -> None:
    for name, field in record_fields.items():
        builder.add_field(name, field.term_type, getattr(value, name))


def decode_record(access: MapAccess, class_: type[D], record_fields: Mapping[str, RecordField]) -> D:
    kwargs: dict[str, Any] = {}
    while (key_decoder := access.next_key()) is not None:
        name = key_decoder.decode_identifier()
        value_decoder = access.next_value()
        field = record_fields.get(name)
        if field is None:
            value_decoder.decode_ignored_any()
            continue
        if name in kwargs:
            raise Message(f'duplicate field `{name}`')
        kwargs[name] = field.term_type.decode(value_decoder)
    for name, field in record_fields.items():
        if name in kwargs or field.has_default:
            continue
        if isinstance(field.term_type, OptionalTermType):
            kwargs[name] = None
        else:
            raise Message(f'missing field `{name}`')
    return class_(**kwargs)


class DataclassTermType(TermType[D]):
    """ Represents dataclass instances as records, see the module docstring.

    The fields are resolved on first use, so a dataclass can refer to itself (for instance `next: Node | None`).
    """

    __slots__ = ('_is_hashable', '_class', '_type_map', '_fields')

    _class: type[D]
    _type_map: TermType.TypeMap
    _fields: Optional[dict[str, RecordField]]

    def __init__(self, class_: type[D], type_map: TermType.TypeMap) -> None:
        self._class = class_
        self._type_map = type_map
        self._fields = None
        self._is_hashable = is_origin_hashable(class_)

    @override
    @classmethod
    def _from_type(cls, type_: type[D], /, *, type_map: TermType.TypeMap) -> Self:
        if not isinstance(type_, type) or not is_dataclass(type_):
            raise TypeError('expected a dataclass')
        return cls(type_, type_map)

    def _get_fields(self) -> dict[str, RecordField]:
        if self._fields is None:
            self._fields = get_record_fields(self._class, self._type_map)
        return self._fields

    @property
    def _name(self) -> str:
        return self._class.__name__

    @override
    def _check_value(self, value: D, /, *, deep: bool) -> None:
        if not isinstance(value, self._class):
            raise TypeError(f'expected {self._class.__name__} instance')
        if deep:
            for name, field in self._get_fields().items():
                field.term_type._check_value(getattr(value, name), deep=True)

    @override
    def _encode(self, encoder: Encoder, value: D, /) -> Term:
        record_fields = self._get_fields()
        if not record_fields:
            return encoder.encode_unit_struct(self._name)
        builder = encoder.encode_struct(self._name, len(record_fields))
        add_record_fields(builder, value, record_fields)
        return builder.end()

    def _visit(self, access: MapAccess) -> D:
        return decode_record(access, self._class, self._get_fields())

    @override
    def _decode(self, decoder: Decoder, /) -> D:
        record_fields = self._get_fields()
        if not record_fields:
            decoder.decode_unit_struct(self._name)
            return self._class()
        return decoder.decode_struct(self._name, tuple(record_fields), self._visit)
