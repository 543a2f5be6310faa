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
Annotations that describe shapes which plain Python types can't express.

Python has a single `int` and a single `float`, sized numbers are annotated with the NewTypes below so the codec knows
which width to check and which node kind to use:

>>> from dataclasses import dataclass
>>> @dataclass
... class Unsigned:
...     a: Uint8
...     b: Uint64

Sum types with payloads are declared with `TaggedEnum`, every direct subclass of the enum class is one variant, in
declaration order:

>>> class Shape(TaggedEnum):
...     pass
>>> @dataclass
... class Circle(Shape):
...     radius: float
>>> @dataclass
... class Empty(Shape):
...     pass
>>> [variant.__name__ for variant in Shape.variants()]
['Circle', 'Empty']
>>> Empty.variant_kind()
<VariantKind.UNIT: 'unit'>
>>> Circle.variant_kind()
<VariantKind.RECORD: 'record'>
"""

from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, ClassVar, NewType, Optional

Int8 = NewType('Int8', int)
Int16 = NewType('Int16', int)
Int32 = NewType('Int32', int)
Int64 = NewType('Int64', int)
Uint8 = NewType('Uint8', int)
Uint16 = NewType('Uint16', int)
Uint32 = NewType('Uint32', int)
Uint64 = NewType('Uint64', int)

Float32 = NewType('Float32', float)
Float64 = NewType('Float64', float)

# A single unicode code point.
Char = NewType('Char', str)


class GenericValue:
    """Annotation for values decoded without a target type, they come out as plain Python objects.

    Atoms become `str`, binaries `bytes`, lists `list`, tuples `tuple` and maps `dict`.
    """

    def __new__(cls, *args: Any, **kwargs: Any) -> 'GenericValue':
        raise TypeError('GenericValue is only meant to be used as an annotation')


class VariantKind(Enum):
    UNIT = 'unit'
    NEWTYPE = 'newtype'
    TUPLE = 'tuple'
    RECORD = 'record'


class TaggedEnum:
    """ Base class for enums whose variants carry data.

    A class that directly subclasses `TaggedEnum` is the enum itself, and classes that directly subclass it are its
    variants. Variants are usually dataclasses, their kind is inferred from their fields unless given explicitly:

    - no fields: `VariantKind.UNIT`, written as a bare atom
    - otherwise: `VariantKind.RECORD`, written as `{variant, #{field => value}}`
    - `kind=VariantKind.NEWTYPE` requires exactly one field and writes `{variant, value}`
    - `kind=VariantKind.TUPLE` writes the fields positionally as `{variant, {f1, f2, ...}}`

    The `name` class argument overrides the variant name, which defaults to the class name.
    """

    _enum_class: ClassVar[type['TaggedEnum']]
    _variants: ClassVar[tuple[type['TaggedEnum'], ...]]
    _variant_name: ClassVar[str]
    _declared_kind: ClassVar[Optional[VariantKind]]

    def __init_subclass__(cls, *, kind: Optional[VariantKind] = None, name: Optional[str] = None, **kwargs: Any):
        super().__init_subclass__(**kwargs)
        if TaggedEnum in cls.__bases__:
            if kind is not None or name is not None:
                raise TypeError('kind and name can only be given to variants')
            cls._enum_class = cls
            cls._variants = ()
            return
        enum_class = cls._enum_class
        if enum_class not in cls.__bases__:
            raise TypeError(f'variant {cls.__name__} must directly subclass {enum_class.__name__}')
        cls._variant_name = cls.__name__ if name is None else name
        cls._declared_kind = kind
        enum_class._variants = enum_class._variants + (cls,)

    @classmethod
    def enum_class(cls) -> type['TaggedEnum']:
        return cls._enum_class

    @classmethod
    def variants(cls) -> tuple[type['TaggedEnum'], ...]:
        return cls._enum_class._variants

    @classmethod
    def is_variant(cls) -> bool:
        return cls is not cls._enum_class

    @classmethod
    def variant_name(cls) -> str:
        assert cls.is_variant(), 'only variants have a name'
        return cls._variant_name

    @classmethod
    def variant_index(cls) -> int:
        return cls.variants().index(cls)

    @classmethod
    def variant_kind(cls) -> VariantKind:
        # XXX: resolved on demand because the dataclass decorator runs after __init_subclass__
        assert cls.is_variant(), 'only variants have a kind'
        if cls._declared_kind is not None:
            return cls._declared_kind
        if is_dataclass(cls) and fields(cls):
            return VariantKind.RECORD
        return VariantKind.UNIT
