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

from collections import OrderedDict, deque
from collections.abc import Mapping, MutableMapping, MutableSequence, MutableSet, Sequence, Set as AbstractSet
from dataclasses import dataclass
from enum import Enum
from types import NoneType, UnionType
from typing import Any, NamedTuple, NewType, TypeVar, Union

from eetf_codec.term import Term
from eetf_codec.term_types.any_term_type import AnyTermType, GenericTermType
from eetf_codec.term_types.bool_term_type import BoolTermType
from eetf_codec.term_types.bytes_term_type import BytesTermType
from eetf_codec.term_types.collection_term_type import DequeTermType, FrozenSetTermType, ListTermType, SetTermType
from eetf_codec.term_types.dataclass_term_type import DataclassTermType
from eetf_codec.term_types.enum_term_type import EnumTermType
from eetf_codec.term_types.float_term_type import Float32TermType, Float64TermType
from eetf_codec.term_types.map_term_type import DictTermType, OrderedDictTermType
from eetf_codec.term_types.namedtuple_term_type import NamedTupleTermType
from eetf_codec.term_types.newtype_term_type import NewtypeTermType
from eetf_codec.term_types.null_term_type import NullTermType
from eetf_codec.term_types.optional_term_type import OptionalTermType
from eetf_codec.term_types.sized_int_term_type import (
    Int8TermType,
    Int16TermType,
    Int32TermType,
    Int64TermType,
    IntTermType,
    Uint8TermType,
    Uint16TermType,
    Uint32TermType,
    Uint64TermType,
)
from eetf_codec.term_types.str_term_type import CharTermType, StrTermType
from eetf_codec.term_types.tagged_enum_term_type import TaggedEnumTermType
from eetf_codec.term_types.term_term_type import TermTermType
from eetf_codec.term_types.term_type import TermType
from eetf_codec.term_types.tuple_term_type import TupleTermType
from eetf_codec.term_types.utils import TypeAliasMap, TypeToTermTypeMap
from eetf_codec.types import (
    Char,
    Float32,
    Float64,
    GenericValue,
    Int8,
    Int16,
    Int32,
    Int64,
    TaggedEnum,
    Uint8,
    Uint16,
    Uint32,
    Uint64,
)

__all__ = [
    'DEFAULT_TYPE_ALIAS_MAP',
    'DEFAULT_TYPE_MAP',
    'DEFAULT_TYPE_TO_TERM_TYPE_MAP',
    'AnyTermType',
    'BoolTermType',
    'BytesTermType',
    'CharTermType',
    'DataclassTermType',
    'DequeTermType',
    'DictTermType',
    'EnumTermType',
    'Float32TermType',
    'Float64TermType',
    'FrozenSetTermType',
    'GenericTermType',
    'Int8TermType',
    'Int16TermType',
    'Int32TermType',
    'Int64TermType',
    'IntTermType',
    'ListTermType',
    'NamedTupleTermType',
    'NewtypeTermType',
    'NullTermType',
    'OptionalTermType',
    'OrderedDictTermType',
    'SetTermType',
    'StrTermType',
    'TaggedEnumTermType',
    'TermTermType',
    'TermType',
    'TupleTermType',
    'TypeAliasMap',
    'TypeToTermTypeMap',
    'Uint8TermType',
    'Uint16TermType',
    'Uint32TermType',
    'Uint64TermType',
    'make_term_type',
]

T = TypeVar('T')

DEFAULT_TYPE_ALIAS_MAP: TypeAliasMap = {
    # XXX: technically types.UnionType is not a type, so mypy complains, but for our purposes it is a type
    Union: UnionType,  # type: ignore[dict-item]
    bytearray: bytes,
    memoryview: bytes,
    Sequence: list,
    MutableSequence: list,
    AbstractSet: frozenset,
    MutableSet: set,
    Mapping: dict,
    MutableMapping: dict,
}

# Mapping between types and TermType classes, some keys are markers for classes that are recognized by their base.
DEFAULT_TYPE_TO_TERM_TYPE_MAP: TypeToTermTypeMap = {
    # builtin types:
    bool: BoolTermType,
    bytes: BytesTermType,
    dict: DictTermType,
    float: Float64TermType,
    frozenset: FrozenSetTermType,
    int: IntTermType,
    list: ListTermType,
    set: SetTermType,
    str: StrTermType,
    tuple: TupleTermType,
    # XXX: ignored dict-item because technically None is not a type, type[None]/NoneType is
    None: NullTermType,  # type: ignore[dict-item]
    NoneType: NullTermType,
    # sized types:
    Int8: Int8TermType,
    Int16: Int16TermType,
    Int32: Int32TermType,
    Int64: Int64TermType,
    Uint8: Uint8TermType,
    Uint16: Uint16TermType,
    Uint32: Uint32TermType,
    Uint64: Uint64TermType,
    Float32: Float32TermType,
    Float64: Float64TermType,
    Char: CharTermType,
    # other Python types:
    UnionType: OptionalTermType,
    NewType: NewtypeTermType,
    NamedTuple: NamedTupleTermType,
    dataclass: DataclassTermType,
    Enum: EnumTermType,
    deque: DequeTermType,
    OrderedDict: OrderedDictTermType,
    Any: AnyTermType,
    # codec types:
    TaggedEnum: TaggedEnumTermType,
    GenericValue: GenericTermType,
    Term: TermTermType,
}

DEFAULT_TYPE_MAP = TermType.TypeMap(DEFAULT_TYPE_ALIAS_MAP, DEFAULT_TYPE_TO_TERM_TYPE_MAP)


def make_term_type(type_: type[T], /) -> TermType[T]:
    """ Like TermType.from_type, but with the default maps.

    If you need to customize the mapping use `TermType.from_type` instead.

    >>> make_term_type(dict[str, list[int]]).to_term({'a': [1]})
    Map(entries=((Binary(data=b'a'), List(elements=(FixInteger(value=1),))),))
    """
    return TermType.from_type(type_, type_map=DEFAULT_TYPE_MAP)
