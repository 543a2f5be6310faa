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

from types import NoneType, UnionType
from typing import Any, NewType


def is_subclass(cls: Any, class_or_tuple: type | tuple[type, ...] | UnionType, /) -> bool:
    """ Reimplements issubclass() with support for NewType classes and without failing on non-classes.

    >>> is_subclass(bool, int)
    True
    >>> is_subclass(str, int | bytes)
    False
    >>> N = NewType('N', int)
    >>> is_subclass(N, int)
    True
    >>> is_subclass(NewType('M', N), int)
    True
    >>> is_subclass(list[int], list)
    False
    """
    while isinstance(cls, NewType):
        cls = cls.__supertype__
    if not isinstance(cls, type):
        return False
    return issubclass(cls, class_or_tuple)


def pretty_type(type_: Any) -> str:
    """ Shows a cleaner string representation for a type.

    >>> pretty_type(None)
    'None'
    >>> pretty_type(int)
    'int'
    >>> pretty_type(dict[str, int])
    'dict[str, int]'
    """
    if type_ is NoneType or type_ is None:
        return 'None'
    elif hasattr(type_, '__args__') or not hasattr(type_, '__name__'):
        return str(type_)
    else:
        return type_.__name__


def is_namedtuple(type_: Any) -> bool:
    """ Whether the given type is a class made with `typing.NamedTuple` (or `collections.namedtuple`).

    >>> from typing import NamedTuple
    >>> class Pair(NamedTuple):
    ...     a: int
    ...     b: int
    >>> is_namedtuple(Pair)
    True
    >>> is_namedtuple(tuple)
    False
    """
    # XXX: __orig_bases__ is only set on NamedTuple classes from Python 3.12 on, _fields works on every version
    return isinstance(type_, type) and issubclass(type_, tuple) and hasattr(type_, '_fields')
