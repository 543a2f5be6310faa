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
Materialized EETF term tree.

Every node is a frozen dataclass and containers hold tuples, so a tree can be shared freely between threads and used
as a dict key. The codec core only produces the first eight kinds (Atom through Map), the others exist so that any
valid input can be materialized and reported precisely when a typed decode reaches them.

>>> Tuple((Atom('ok'), Binary(b'test')))
Tuple(elements=(Atom(name='ok'), Binary(data=b'test')))
>>> Map.from_dict({Atom('a'): FixInteger(1)}).entries
((Atom(name='a'), FixInteger(value=1)),)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, TypeAlias, Union

FIX_INTEGER_MIN = -(2**31)
FIX_INTEGER_MAX = 2**31 - 1


@dataclass(frozen=True, slots=True)
class Atom:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class FixInteger:
    value: int

    def __post_init__(self) -> None:
        if not FIX_INTEGER_MIN <= self.value <= FIX_INTEGER_MAX:
            raise ValueError(f'{self.value} does not fit in a 32-bit fix integer')

    @staticmethod
    def fits(value: int) -> bool:
        return FIX_INTEGER_MIN <= value <= FIX_INTEGER_MAX


@dataclass(frozen=True, slots=True)
class BigInteger:
    value: int


@dataclass(frozen=True, slots=True)
class Float:
    value: float


@dataclass(frozen=True, slots=True)
class Binary:
    data: bytes


@dataclass(frozen=True, slots=True)
class List:
    elements: tuple[Term, ...] = ()

    def __len__(self) -> int:
        return len(self.elements)


@dataclass(frozen=True, slots=True)
class Tuple:
    elements: tuple[Term, ...] = ()

    def __len__(self) -> int:
        return len(self.elements)


@dataclass(frozen=True, slots=True)
class Map:
    """Ordered key/value pairs, duplicated keys are kept as they are."""
    entries: tuple[tuple[Term, Term], ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    @classmethod
    def from_dict(cls, entries: Mapping[Term, Term]) -> Map:
        return cls(tuple(entries.items()))


@dataclass(frozen=True, slots=True)
class Pid:
    node: Atom
    id: int
    serial: int
    creation: int


@dataclass(frozen=True, slots=True)
class Port:
    node: Atom
    id: int
    creation: int


@dataclass(frozen=True, slots=True)
class Reference:
    node: Atom
    ids: tuple[int, ...]
    creation: int


@dataclass(frozen=True, slots=True)
class ExternalFun:
    """A `fun Module:Function/Arity` value (EXPORT_EXT)."""
    module: Atom
    function: Atom
    arity: int


@dataclass(frozen=True, slots=True)
class InternalFun:
    """A closure (NEW_FUN_EXT), kept as its raw body since nothing here needs to look inside it."""
    body: bytes = field(repr=False)


@dataclass(frozen=True, slots=True)
class BitBinary:
    """A binary whose last byte only has `tail_bits` significant bits (1 to 8)."""
    data: bytes
    tail_bits: int


@dataclass(frozen=True, slots=True)
class ImproperList:
    elements: tuple[Term, ...]
    tail: Term


Fun: TypeAlias = Union[ExternalFun, InternalFun]

Term: TypeAlias = Union[
    Atom,
    FixInteger,
    BigInteger,
    Float,
    Binary,
    List,
    Tuple,
    Map,
    Pid,
    Port,
    Reference,
    ExternalFun,
    InternalFun,
    BitBinary,
    ImproperList,
]

TERM_CLASSES: tuple[type, ...] = (
    Atom,
    FixInteger,
    BigInteger,
    Float,
    Binary,
    List,
    Tuple,
    Map,
    Pid,
    Port,
    Reference,
    ExternalFun,
    InternalFun,
    BitBinary,
    ImproperList,
)


def is_term(value: object) -> bool:
    return isinstance(value, TERM_CLASSES)


def kind_name(term: Term) -> str:
    """Name of the node kind, used in error messages and logs."""
    return type(term).__name__


NIL = Atom('nil')
TRUE = Atom('true')
FALSE = Atom('false')
