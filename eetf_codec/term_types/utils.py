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

from collections.abc import Hashable, Mapping
from dataclasses import dataclass, is_dataclass
from enum import Enum
from functools import reduce
from operator import or_
from types import NoneType, UnionType
from typing import TYPE_CHECKING, Any, NamedTuple, NewType, TypeAlias, TypeVar, Union, cast, get_args, get_origin

from structlog import get_logger

from eetf_codec.term.term import TERM_CLASSES, Term
from eetf_codec.types import TaggedEnum
from eetf_codec.utils.typing import is_namedtuple, is_subclass, pretty_type

if TYPE_CHECKING:
    from eetf_codec.term_types import TermType


logger = get_logger()

T = TypeVar('T')
TypeAliasMap: TypeAlias = Mapping[Any, type]
TypeToTermTypeMap: TypeAlias = Mapping[Any, type['TermType']]


def is_term_annotation(type_: Any) -> bool:
    """ Whether the annotation asks for raw term nodes.

    >>> from eetf_codec.term import Atom
    >>> is_term_annotation(Term)
    True
    >>> is_term_annotation(Atom)
    True
    >>> is_term_annotation(int)
    False
    """
    try:
        return type_ in TERM_CLASSES or type_ == Term
    except TypeError:
        return False


def is_origin_hashable(type_: Any) -> bool:
    """ Checks whether the values of the given type signature can be dict keys, type arguments are ignored.

    >>> is_origin_hashable(int)
    True
    >>> is_origin_hashable(frozenset[int])
    True
    >>> is_origin_hashable(list[int])
    False
    >>> is_origin_hashable(int | None)
    True
    """
    origin = get_origin(type_) or type_
    if origin is UnionType or origin is Union:
        return all(is_origin_hashable(arg) for arg in get_args(type_))
    if isinstance(origin, type | NewType):
        return is_subclass(origin, Hashable)
    # XXX: Any and GenericValue can only be checked once there's a value
    return True


# XXX: _verbose argument is used to help with doctest
def get_aliased_type(type_: Any, alias_map: TypeAliasMap, *, _verbose: bool = True) -> Any:
    """ Map a type to its usable alias including the type's arguments.

    For example, `bytearray` is mapped to `bytes` and the abstract collections to their builtin counterparts in the
    default alias map:

    >>> from collections.abc import Sequence
    >>> from eetf_codec.term_types import DEFAULT_TYPE_ALIAS_MAP as alias_map
    >>> get_aliased_type(dict[str, Sequence[bytearray]], alias_map, _verbose=False)
    dict[str, list[bytes]]
    """
    new_type, replaced = _get_aliased_type(type_, alias_map)
    if replaced and _verbose:
        logger.debug('type replaced', old=pretty_type(type_), new=pretty_type(new_type))
    return new_type


def _get_aliased_type(type_: Any, alias_map: TypeAliasMap) -> tuple[Any, bool]:
    """ Implementation of get_aliased_type with indication of whether there was a replacement.
    """
    origin_type = get_origin(type_) or type_
    replaced = False

    # XXX: special case, replace typing.Union with types.UnionType
    if origin_type is Union:
        aliased_origin = UnionType
    elif _in_map(origin_type, alias_map):
        aliased_origin = alias_map[origin_type]
        replaced = True
    else:
        aliased_origin = origin_type

    type_args = get_args(type_) if hasattr(type_, '__args__') else ()
    if not type_args:
        return aliased_origin, replaced

    # use _get_aliased_type for recursion so we don't log multiple times when a replacement happens
    aliased_args_replaced = [
        _get_aliased_type(arg, alias_map) if arg is not Ellipsis else (arg, False)
        for arg in type_args
    ]
    aliased_args, args_replaced = zip(*aliased_args_replaced)
    replaced |= any(args_replaced)

    # XXX: special case, UnionType can't be instantiated directly, this is the simplest way to do it
    if aliased_origin is UnionType:
        return reduce(or_, aliased_args), replaced

    assert hasattr(aliased_origin, '__class_getitem__'), 'we must have an indexable class at this point'
    return aliased_origin[*aliased_args], replaced


def _in_map(type_: Any, map_: Mapping[Any, Any]) -> bool:
    try:
        return type_ in map_
    except TypeError:
        # unhashable annotations are never in a map
        return False


def get_usable_origin_type(
    type_: Any,
    /,
    *,
    type_map: 'TermType.TypeMap',
    _verbose: bool = True,
) -> Any:
    """ The purpose of this function is to map a given type into a key that is usable in a TermType.TypeMap

    It takes into account type-aliasing according to TermType.TypeMap.alias_map, and maps classes that are only
    recognized by their base (dataclasses, named tuples, enums) to the marker used as their key. If the given type
    cannot be used in the given type_map, a TypeError exception will be raised.

    >>> from eetf_codec.term_types import DEFAULT_TYPE_MAP as default_type_map
    >>> get_usable_origin_type(list[int], type_map=default_type_map)
    <class 'list'>
    >>> get_usable_origin_type(int | None, type_map=default_type_map)
    <class 'types.UnionType'>
    >>> @dataclass
    ... class Point:
    ...     x: int
    >>> get_usable_origin_type(Point, type_map=default_type_map) is dataclass
    True
    """
    if isinstance(type_, str):
        raise NotImplementedError('string annotations are not currently supported')

    term_types_map = type_map.term_types_map

    if type_ is None:
        type_ = NoneType

    if isinstance(type_, NewType):
        if type_ in term_types_map:
            return type_
        if NewType in term_types_map:
            return NewType
        raise TypeError(f'type {pretty_type(type_)} is not supported by any TermType class')

    if Term in term_types_map and is_term_annotation(type_):
        return Term

    aliased_type = get_aliased_type(type_, type_map.alias_map, _verbose=_verbose)
    origin_aliased_type = get_origin(aliased_type) or aliased_type

    # XXX: `NewType | None` is a typing.Union even after aliasing because NewType.__or__ builds a typing.Union
    if origin_aliased_type is Union:
        origin_aliased_type = UnionType

    if origin_aliased_type is UnionType:
        if NoneType not in get_args(aliased_type):
            raise TypeError(f'union {pretty_type(type_)} is not supported, use a TaggedEnum for sum types')

    if _in_map(origin_aliased_type, term_types_map):
        return origin_aliased_type

    if isinstance(origin_aliased_type, type):
        origin = cast(type, origin_aliased_type)
        # XXX: the order matters, a TaggedEnum variant is usually also a dataclass
        for base in (TaggedEnum, Enum):
            if base in term_types_map and issubclass(origin, base):
                return base
        if dataclass in term_types_map and is_dataclass(origin):
            return dataclass
        if NamedTuple in term_types_map and is_namedtuple(origin):
            return NamedTuple

    raise TypeError(f'type {pretty_type(type_)} is not supported by any TermType class')
