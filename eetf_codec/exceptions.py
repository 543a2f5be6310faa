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
This module contains the exceptions raised by the term codec.

Every failure caused by the data being encoded or decoded is an `EetfError`, and each shape mismatch has its own
subclass so callers can tell them apart without parsing messages:

>>> str(TooManyItems())
'Too many items when deserializing sequence'
>>> isinstance(WrongTupleLength(), EetfError)
True

Bugs in the code driving a cursor or a builder are not data errors, they raise `CursorProtocolError` which is an
`AssertionError` and is intentionally not an `EetfError`.
"""

from typing import ClassVar


class EetfError(Exception):
    """Base class for all recoverable codec errors."""

    description: ClassVar[str] = 'EETF codec error'

    def __init__(self, message: str | None = None) -> None:
        super().__init__(self.description if message is None else message)

    @property
    def message(self) -> str:
        return str(self)


class Message(EetfError):
    """Custom error raised by a value description, for instance an unknown variant or a missing field."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class EncodeError(EetfError):
    """The term could not be written."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class DecodeError(EetfError):
    """The input bytes are not a valid external term format."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class TypeHintsRequired(EetfError):
    description = 'Type Hints are required for deserializing eetf'


class ExpectedBoolean(EetfError):
    description = 'Expected boolean, got something else'


class InvalidBoolean(EetfError):
    description = 'Invalid boolean'


class ExpectedFixInteger(EetfError):
    description = 'Expected fix integer, got something else'


class ExpectedFloat(EetfError):
    description = 'Expected float, got something else'


class ExpectedChar(EetfError):
    description = 'Expected string of one character, got something else'


class ExpectedBinary(EetfError):
    description = 'Expected binary, got something else'


class Utf8DecodeError(EetfError):
    description = 'Error decoding UTF8 from binary'


class ExpectedNil(EetfError):
    description = 'Expected nil, got something else'


class ExpectedList(EetfError):
    description = 'Expected list, got something else'


class ExpectedTuple(EetfError):
    description = 'Expected tuple, got something else'


class WrongTupleLength(EetfError):
    description = 'Tuple was wrong length'


class ExpectedMap(EetfError):
    description = 'Expected map, got something else'


class ExpectedAtom(EetfError):
    description = 'Expected atom, got something else'


class ExpectedAtomOrTuple(EetfError):
    description = 'Was expecting an atom or a tuple'


class IntegerConvertError(EetfError):
    description = 'Could not convert integer without overflow'


class FloatConvertError(EetfError):
    description = 'Could not convert float without overflow'


class TooManyItems(EetfError):
    description = 'Too many items when deserializing sequence'


class MisSizedVariantTuple(EetfError):
    description = 'Was expecting a tuple of an atom and element'


class CursorProtocolError(AssertionError):
    """A cursor or builder was driven out of order, this is a bug in the calling code and not bad data."""
    pass
