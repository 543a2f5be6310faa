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
Tagged enums are sums of variants that may carry data, see `eetf_codec.types.TaggedEnum` for how they are declared.

Each variant kind has its own layout, with `tag` being the variant name converted to snake_case:

- unit: `tag`
- newtype: `{tag, value}`
- tuple: `{tag, {v1, v2, ...}}`
- record: `{tag, #{field => value, ...}}`

>>> from dataclasses import dataclass
>>> from eetf_codec.term_types import make_term_type
>>> from eetf_codec.types import VariantKind
>>> class ErlResult(TaggedEnum):
...     pass
>>> @dataclass
... class Ok(ErlResult, kind=VariantKind.NEWTYPE):
...     value: str
>>> make_term_type(ErlResult).to_term(Ok('test'))
Tuple(elements=(Atom(name='ok'), Binary(data=b'test')))
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from typing import NamedTuple, Optional, TypeVar

from typing_extensions import Self, override

from eetf_codec.casing import to_camel_case
from eetf_codec.decoder import Decoder, EnumAccess, MapAccess, SequenceAccess
from eetf_codec.encoder import Encoder
from eetf_codec.exceptions import Message
from eetf_codec.term import Term
from eetf_codec.term_types.dataclass_term_type import RecordField, add_record_fields, decode_record, get_record_fields
from eetf_codec.term_types.term_type import TermType
from eetf_codec.term_types.tuple_term_type import decode_fixed_elements
from eetf_codec.types import TaggedEnum, VariantKind

E = TypeVar('E', bound=TaggedEnum)


class _Variant(NamedTuple):
    class_: type[TaggedEnum]
    index: int
    name: str
    kind: VariantKind
    # positional payload for NEWTYPE and TUPLE variants, named payload for RECORD variants
    args: tuple[TermType, ...]
    record_fields: dict[str, RecordField]


def _build_variant(class_: type[TaggedEnum], type_map: TermType.TypeMap) -> _Variant:
    kind = class_.variant_kind()
    record_fields = get_record_fields(class_, type_map) if is_dataclass(class_) else {}
    args: tuple[TermType, ...] = ()
    match kind:
        case VariantKind.UNIT:
            if record_fields:
                raise TypeError(f'unit variant {class_.__name__} must not have fields')
        case VariantKind.NEWTYPE:
            if len(record_fields) != 1:
                raise TypeError(f'newtype variant {class_.__name__} must have exactly one field')
            args = tuple(field.term_type for field in record_fields.values())
        case VariantKind.TUPLE:
            if not is_dataclass(class_) or not fields(class_):
                raise TypeError(f'tuple variant {class_.__name__} must be a dataclass with fields')
            args = tuple(field.term_type for field in record_fields.values())
        case VariantKind.RECORD:
            pass
    return _Variant(class_, class_.variant_index(), class_.variant_name(), kind, args, record_fields)


class TaggedEnumTermType(TermType[E]):
    """ Represents `TaggedEnum` classes, any of its variants can be encoded and any of them can be decoded.

    Variants are resolved on first use, so their fields can refer to the enum itself.
    """

    __slots__ = ('_class', '_type_map', '_variants')

    _is_hashable = False
    _class: type[E]
    _type_map: TermType.TypeMap
    _variants: Optional[dict[type[TaggedEnum], _Variant]]

    def __init__(self, class_: type[E], type_map: TermType.TypeMap) -> None:
        self._class = class_
        self._type_map = type_map
        self._variants = None

    @override
    @classmethod
    def _from_type(cls, type_: type[E], /, *, type_map: TermType.TypeMap) -> Self:
        if not isinstance(type_, type) or not issubclass(type_, TaggedEnum):
            raise TypeError('expected TaggedEnum type')
        # XXX: a variant annotation accepts any variant of its enum
        return cls(type_.enum_class(), type_map)  # type: ignore[arg-type]

    def _get_variants(self) -> dict[type[TaggedEnum], _Variant]:
        if self._variants is None:
            if not self._class.variants():
                raise TypeError(f'{self._class.__name__} has no variants')
            self._variants = {
                variant: _build_variant(variant, self._type_map) for variant in self._class.variants()
            }
        return self._variants

    @property
    def _name(self) -> str:
        return self._class.__name__

    @override
    def _check_value(self, value: E, /, *, deep: bool) -> None:
        variant = self._get_variants().get(type(value))
        if variant is None:
            raise TypeError(f'expected a variant of {self._name}')
        if deep:
            for name, field in variant.record_fields.items():
                field.term_type._check_value(getattr(value, name), deep=True)

    @override
    def _encode(self, encoder: Encoder, value: E, /) -> Term:
        variant = self._get_variants()[type(value)]
        match variant.kind:
            case VariantKind.UNIT:
                return encoder.encode_unit_variant(self._name, variant.index, variant.name)
            case VariantKind.NEWTYPE:
                (field_name,), (term_type,) = variant.record_fields.keys(), variant.args
                return encoder.encode_newtype_variant(
                    self._name, variant.index, variant.name, term_type, getattr(value, field_name),
                )
            case VariantKind.TUPLE:
                tuple_builder = encoder.encode_tuple_variant(self._name, variant.index, variant.name, len(variant.args))
                for field_name, term_type in zip(variant.record_fields, variant.args):
                    tuple_builder.add_element(term_type, getattr(value, field_name))
                return tuple_builder.end()
            case VariantKind.RECORD:
                struct_builder = encoder.encode_struct_variant(
                    self._name, variant.index, variant.name, len(variant.record_fields),
                )
                add_record_fields(struct_builder, value, variant.record_fields)
                return struct_builder.end()
        raise AssertionError(f'unknown variant kind {variant.kind}')

    def _find_variant(self, name: str, *, convert_case: bool) -> _Variant:
        for variant in self._get_variants().values():
            variant_name = to_camel_case(variant.name) if convert_case else variant.name
            if variant_name == name:
                return variant
        expected = ', '.join(f'`{variant.name}`' for variant in self._get_variants().values())
        raise Message(f'unknown variant `{name}`, expected one of {expected}')

    def _visit(self, access: EnumAccess, *, convert_case: bool) -> E:
        name, variant_access = access.variant()
        variant = self._find_variant(name, convert_case=convert_case)
        class_ = variant.class_
        match variant.kind:
            case VariantKind.UNIT:
                variant_access.unit_variant()
                value = class_()
            case VariantKind.NEWTYPE:
                term_type, = variant.args
                value = class_(term_type.decode(variant_access.newtype_variant()))
            case VariantKind.TUPLE:
                def visit_tuple(seq: SequenceAccess) -> TaggedEnum:
                    return class_(*decode_fixed_elements(seq, variant.args))
                value = variant_access.tuple_variant(len(variant.args), visit_tuple)
            case VariantKind.RECORD:
                def visit_record(map_: MapAccess) -> TaggedEnum:
                    return decode_record(map_, class_, variant.record_fields)
                value = variant_access.struct_variant(tuple(variant.record_fields), visit_record)
        return value  # type: ignore[return-value]

    @override
    def _decode(self, decoder: Decoder, /) -> E:
        names = tuple(variant.name for variant in self._get_variants().values())
        convert_case = decoder.settings.convert_variant_case
        return decoder.decode_enum(self._name, names, lambda access: self._visit(access, convert_case=convert_case))
