import pytest

from eetf_codec import exceptions
from eetf_codec.exceptions import (
    CursorProtocolError,
    DecodeError,
    EetfError,
    EncodeError,
    ExpectedAtomOrTuple,
    Message,
    MisSizedVariantTuple,
    TooManyItems,
    TypeHintsRequired,
    WrongTupleLength,
)

TAXONOMY = [
    exceptions.TypeHintsRequired,
    exceptions.ExpectedBoolean,
    exceptions.InvalidBoolean,
    exceptions.ExpectedFixInteger,
    exceptions.ExpectedFloat,
    exceptions.ExpectedChar,
    exceptions.ExpectedBinary,
    exceptions.Utf8DecodeError,
    exceptions.ExpectedNil,
    exceptions.ExpectedList,
    exceptions.ExpectedTuple,
    exceptions.WrongTupleLength,
    exceptions.ExpectedMap,
    exceptions.ExpectedAtom,
    exceptions.ExpectedAtomOrTuple,
    exceptions.IntegerConvertError,
    exceptions.FloatConvertError,
    exceptions.TooManyItems,
    exceptions.MisSizedVariantTuple,
]


@pytest.mark.parametrize('error_class', TAXONOMY)
def test_default_message_is_the_description(error_class: type[EetfError]) -> None:
    error = error_class()
    assert isinstance(error, EetfError)
    assert str(error) == error_class.description
    assert error.message == error_class.description


def test_descriptions() -> None:
    assert TypeHintsRequired.description == 'Type Hints are required for deserializing eetf'
    assert TooManyItems.description == 'Too many items when deserializing sequence'
    assert MisSizedVariantTuple.description == 'Was expecting a tuple of an atom and element'
    assert ExpectedAtomOrTuple.description == 'Was expecting an atom or a tuple'
    assert WrongTupleLength.description == 'Tuple was wrong length'


def test_descriptions_are_unique() -> None:
    descriptions = [error_class.description for error_class in TAXONOMY]
    assert len(set(descriptions)) == len(descriptions)


def test_custom_message() -> None:
    error = WrongTupleLength('expected 2, got 3')
    assert str(error) == 'expected 2, got 3'
    assert WrongTupleLength.description == 'Tuple was wrong length'


@pytest.mark.parametrize('error_class', [Message, EncodeError, DecodeError])
def test_message_errors(error_class: type[EetfError]) -> None:
    error = error_class('something went wrong')
    assert isinstance(error, EetfError)
    assert error.message == 'something went wrong'


def test_cursor_protocol_error_is_not_a_data_error() -> None:
    assert issubclass(CursorProtocolError, AssertionError)
    assert not issubclass(CursorProtocolError, EetfError)
