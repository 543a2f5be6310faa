import io
from dataclasses import dataclass
from typing import Any, Optional

import pydantic

from eetf_codec import (
    CodecSettings,
    DecodeError,
    EncodeError,
    decode_from_bytes,
    decode_from_stream,
    encode_to_bytes,
    encode_to_stream,
    from_term,
    to_term,
)
from eetf_codec.exceptions import IntegerConvertError, Message, TypeHintsRequired
from eetf_codec.term import NIL, Atom, Binary, FixInteger, List, Map, Term, Tuple, term_to_bytes
from eetf_codec.types import GenericValue, TaggedEnum, Uint8, VariantKind
from eetf_codec_tests import unittest


@dataclass
class Point:
    x: Uint8
    y: Uint8


class ErlResult(TaggedEnum):
    pass


@dataclass
class Ok(ErlResult, kind=VariantKind.NEWTYPE):
    value: str


@dataclass
class Error(ErlResult, kind=VariantKind.NEWTYPE):
    value: str


class BrokenWriter(io.RawIOBase):
    def writable(self) -> bool:
        return True

    def write(self, data) -> int:
        raise OSError('disk full')


class ApiTestCase(unittest.TestCase):
    def test_to_and_from_term(self) -> None:
        term = to_term(Point(1, 2))
        self.assertEqual(term, Map(((Atom('x'), FixInteger(1)), (Atom('y'), FixInteger(2)))))
        self.assertEqual(from_term(term, Point), Point(1, 2))

    def test_type_is_inferred_when_encoding(self) -> None:
        self.assertEqual(to_term([1, 'a', None]), List((FixInteger(1), Binary(b'a'), NIL)))
        self.assertEqual(to_term({'k': (True, 1.5)}), to_term({'k': (True, 1.5)}, dict[str, tuple[bool, float]]))
        self.assertEqual(to_term(Ok('test')), Tuple((Atom('ok'), Binary(b'test'))))

    def test_explicit_type_is_checked(self) -> None:
        with self.assertRaises(ValueError):
            to_term(300, Uint8)

    def test_bytes(self) -> None:
        data = encode_to_bytes(Point(1, 2))
        self.assertEqual(data.hex(), '83740000000277017861017701796102')
        self.assertEqual(decode_from_bytes(data, Point), Point(1, 2))

    def test_erl_result(self) -> None:
        data = encode_to_bytes(Ok('test'), ErlResult)
        self.assertEqual(data, term_to_bytes(Tuple((Atom('ok'), Binary(b'test')))))
        self.assertEqual(decode_from_bytes(data, ErlResult), Ok('test'))
        as_map = term_to_bytes(Map(((Atom('error'), Binary(b'boom')),)))
        self.assertEqual(decode_from_bytes(as_map, ErlResult), Error('boom'))

    def test_option(self) -> None:
        self.assertEqual(decode_from_bytes(encode_to_bytes(None, Optional[Uint8]), Optional[Uint8]), None)
        self.assertEqual(decode_from_bytes(encode_to_bytes(5, Optional[Uint8]), Optional[Uint8]), 5)
        self.assertEqual(encode_to_bytes(None, Optional[Uint8]), term_to_bytes(NIL))

    def test_invalid_bytes(self) -> None:
        with self.assertRaises(DecodeError):
            decode_from_bytes(b'', Point)
        with self.assertRaises(DecodeError):
            decode_from_bytes(b'\x82\x6a', Point)
        with self.assertRaises(DecodeError):
            decode_from_bytes(encode_to_bytes(Point(1, 2)) + b'\x00', Point)

    def test_deeply_nested_bytes(self) -> None:
        data = b'\x83' + bytes.fromhex('6c00000001') * 5000 + b'\x6a' * 5001
        with self.assertRaisesRegex(DecodeError, 'nested too deeply'):
            decode_from_bytes(data, GenericValue)

    def test_shape_errors_are_not_wrapped(self) -> None:
        data = term_to_bytes(Map(((Atom('x'), FixInteger(1)), (Atom('y'), FixInteger(256)))))
        with self.assertRaises(IntegerConvertError):
            decode_from_bytes(data, Point)

    def test_decode_needs_a_type(self) -> None:
        data = encode_to_bytes([1, 2])
        with self.assertRaises(TypeHintsRequired):
            decode_from_bytes(data, Any)
        with self.assertRaises(TypeHintsRequired):
            decode_from_bytes(data, list[Any])
        self.assertEqual(decode_from_bytes(data, GenericValue), [1, 2])

    def test_term_passthrough(self) -> None:
        term = Tuple((Atom('ok'), Binary(b'raw')))
        self.assertEqual(decode_from_bytes(encode_to_bytes(term, Term), Term), term)

    def test_stream(self) -> None:
        stream = io.BytesIO()
        encode_to_stream(Point(3, 4), stream)
        self.assertEqual(stream.getvalue(), encode_to_bytes(Point(3, 4)))
        stream.seek(0)
        self.assertEqual(decode_from_stream(stream, Point), Point(3, 4))

    def test_stream_errors(self) -> None:
        with self.assertRaises(EncodeError):
            encode_to_stream(Point(1, 2), BrokenWriter())
        closed = io.BytesIO(encode_to_bytes(Point(1, 2)))
        closed.close()
        with self.assertRaises(DecodeError):
            decode_from_stream(closed, Point)

    def test_compression(self) -> None:
        settings = CodecSettings(compression_level=6)
        value = {'key': ['value'] * 50}
        data = encode_to_bytes(value, settings=settings)
        self.assertEqual(data[:2], b'\x83\x50')
        self.assertLess(len(data), len(encode_to_bytes(value)))
        self.assertEqual(decode_from_bytes(data, dict[str, list[str]]), value)

    def test_max_input_bytes(self) -> None:
        data = encode_to_bytes(Point(1, 2))
        settings = CodecSettings(max_input_bytes=len(data))
        self.assertEqual(decode_from_bytes(data, Point, settings=settings), Point(1, 2))
        self.assertEqual(decode_from_stream(io.BytesIO(data), Point, settings=settings), Point(1, 2))
        small = CodecSettings(max_input_bytes=len(data) - 1)
        with self.assertRaises(DecodeError):
            decode_from_bytes(data, Point, settings=small)
        with self.assertRaises(DecodeError):
            decode_from_stream(io.BytesIO(data), Point, settings=small)

    def test_max_input_bytes_with_compression(self) -> None:
        value = 'x' * 10_000
        data = encode_to_bytes(value, settings=CodecSettings(compression_level=9))
        with self.assertRaises(DecodeError):
            decode_from_bytes(data, str, settings=CodecSettings(max_input_bytes=1000))
        self.assertEqual(decode_from_bytes(data, str, settings=CodecSettings(max_input_bytes=20_000)), value)


class SettingsTestCase(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = CodecSettings()
        self.assertTrue(settings.convert_variant_case)
        self.assertIsNone(settings.max_input_bytes)
        self.assertIsNone(settings.compression_level)

    def test_validation(self) -> None:
        with self.assertRaises(pydantic.ValidationError):
            CodecSettings(compression_level=10)
        with self.assertRaises(pydantic.ValidationError):
            CodecSettings(max_input_bytes=0)
        with self.assertRaises(pydantic.ValidationError):
            CodecSettings(unknown_option=True)  # type: ignore[call-arg]

    def test_frozen(self) -> None:
        settings = CodecSettings()
        with self.assertRaises(pydantic.ValidationError):
            settings.convert_variant_case = False  # type: ignore[misc]

    def test_variant_case(self) -> None:
        settings = CodecSettings(convert_variant_case=False)
        data = encode_to_bytes(Ok('test'), settings=settings)
        self.assertEqual(data, term_to_bytes(Tuple((Atom('Ok'), Binary(b'test')))))
        self.assertEqual(decode_from_bytes(data, ErlResult, settings=settings), Ok('test'))
        with self.assertRaisesRegex(Message, 'unknown variant `ok`'):
            decode_from_bytes(encode_to_bytes(Ok('test')), ErlResult, settings=settings)
