from dataclasses import dataclass

from eetf_codec.encoder import Encoder
from eetf_codec.exceptions import CursorProtocolError, EncodeError, FloatConvertError
from eetf_codec.settings import CodecSettings
from eetf_codec.term import (
    FALSE,
    NIL,
    TRUE,
    Atom,
    BigInteger,
    Binary,
    FixInteger,
    Float,
    List,
    Map,
    Pid,
    Tuple,
)
from eetf_codec.term_types import make_term_type
from eetf_codec.types import Uint8, Uint16, Uint32, Uint64
from eetf_codec_tests import unittest


@dataclass
class Unsigned:
    unsigned8: Uint8
    unsigned16: Uint16
    unsigned32: Uint32
    unsigned64: Uint64


class EncoderTestCase(unittest.TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.encoder = Encoder()
        self.str_type = make_term_type(str)
        self.int_type = make_term_type(int)

    def test_bool(self) -> None:
        self.assertEqual(self.encoder.encode_bool(True), TRUE)
        self.assertEqual(self.encoder.encode_bool(False), FALSE)

    def test_int_widths(self) -> None:
        # the node kind depends on the declared width only
        cases = [
            (8, True, FixInteger), (16, True, FixInteger), (32, True, FixInteger), (64, True, BigInteger),
            (8, False, FixInteger), (16, False, FixInteger), (32, False, BigInteger), (64, False, BigInteger),
        ]
        for bits, signed, term_class in cases:
            self.assertEqual(self.encoder.encode_int(1, bits=bits, signed=signed), term_class(1))

    def test_unsigned_record(self) -> None:
        value = Unsigned(unsigned8=129, unsigned16=65530, unsigned32=4294967290, unsigned64=18446744073709551610)
        term = make_term_type(Unsigned).to_term(value)
        self.assertEqual(term, Map((
            (Atom('unsigned8'), FixInteger(129)),
            (Atom('unsigned16'), FixInteger(65530)),
            (Atom('unsigned32'), BigInteger(4294967290)),
            (Atom('unsigned64'), BigInteger(18446744073709551610)),
        )))
        self.assertEqual(make_term_type(Unsigned).from_term(term), value)

    def test_bigint(self) -> None:
        self.assertEqual(self.encoder.encode_bigint(2**31 - 1), FixInteger(2**31 - 1))
        self.assertEqual(self.encoder.encode_bigint(2**31), BigInteger(2**31))
        self.assertEqual(self.encoder.encode_bigint(-(2**31) - 1), BigInteger(-(2**31) - 1))
        self.assertEqual(self.encoder.encode_bigint(10**40), BigInteger(10**40))

    def test_float(self) -> None:
        self.assertEqual(self.encoder.encode_float(1.5), Float(1.5))
        # rounded to the nearest 32-bit float
        self.assertEqual(self.encoder.encode_float(0.1, bits=32), Float(0.10000000149011612))
        for value in [float('nan'), float('inf'), float('-inf')]:
            with self.assertRaises(FloatConvertError):
                self.encoder.encode_float(value)
        with self.assertRaises(FloatConvertError):
            self.encoder.encode_float(1e300, bits=32)

    def test_strings(self) -> None:
        self.assertEqual(self.encoder.encode_str('ação'), Binary('ação'.encode('utf-8')))
        self.assertEqual(self.encoder.encode_char('ç'), Binary(b'\xc3\xa7'))
        with self.assertRaises(ValueError):
            self.encoder.encode_char('ab')
        with self.assertRaises(ValueError):
            self.encoder.encode_char('')
        self.assertEqual(self.encoder.encode_bytes(bytearray(b'\x00\x01')), Binary(b'\x00\x01'))
        with self.assertRaises(EncodeError):
            # lone surrogates can't be written as UTF-8
            self.encoder.encode_str('\ud800')

    def test_units(self) -> None:
        self.assertEqual(self.encoder.encode_none(), NIL)
        self.assertEqual(self.encoder.encode_unit(), NIL)
        self.assertEqual(self.encoder.encode_unit_struct('Empty'), NIL)
        self.assertEqual(self.encoder.encode_some(self.int_type, 5), FixInteger(5))

    def test_variants(self) -> None:
        self.assertEqual(self.encoder.encode_unit_variant('Color', 0, 'LightBlue'), Atom('light_blue'))
        self.assertEqual(
            self.encoder.encode_newtype_variant('ErlResult', 0, 'Ok', self.str_type, 'test'),
            Tuple((Atom('ok'), Binary(b'test'))),
        )
        builder = self.encoder.encode_tuple_variant('Shape', 1, 'Point', 2)
        builder.add_element(self.int_type, 1)
        builder.add_element(self.int_type, 2)
        self.assertEqual(builder.end(), Tuple((Atom('point'), Tuple((FixInteger(1), FixInteger(2))))))
        struct_builder = self.encoder.encode_struct_variant('Shape', 2, 'Circle', 1)
        struct_builder.add_field('radius', self.int_type, 3)
        self.assertEqual(
            struct_builder.end(),
            Tuple((Atom('circle'), Map(((Atom('radius'), FixInteger(3)),)))),
        )

    def test_variants_without_case_conversion(self) -> None:
        encoder = Encoder(CodecSettings(convert_variant_case=False))
        self.assertEqual(encoder.encode_unit_variant('Color', 0, 'LightBlue'), Atom('LightBlue'))
        self.assertEqual(
            encoder.encode_newtype_variant('ErlResult', 0, 'Ok', self.str_type, 'test'),
            Tuple((Atom('Ok'), Binary(b'test'))),
        )

    def test_newtype_struct_is_transparent(self) -> None:
        self.assertEqual(self.encoder.encode_newtype_struct('UserId', self.int_type, 7), FixInteger(7))

    def test_term_passthrough(self) -> None:
        term = Tuple((Atom('a'), List((Float(1.0),))))
        self.assertIs(self.encoder.encode_term(term), term)
        with self.assertRaises(EncodeError):
            self.encoder.encode_term(Pid(Atom('node'), 1, 2, 3))

    def test_seq(self) -> None:
        builder = self.encoder.encode_seq()
        self.assertEqual(builder.end(), List(()))
        builder = self.encoder.encode_seq(2)
        builder.add_element(self.str_type, 'a')
        builder.add_element(self.str_type, 'b')
        self.assertEqual(builder.end(), List((Binary(b'a'), Binary(b'b'))))

    def test_tuple(self) -> None:
        builder = self.encoder.encode_tuple(0)
        self.assertEqual(builder.end(), Tuple(()))
        builder = self.encoder.encode_tuple_struct('Pair', 2)
        builder.add_element(self.int_type, 1)
        builder.add_element(self.str_type, 'x')
        self.assertEqual(builder.end(), Tuple((FixInteger(1), Binary(b'x'))))

    def test_tuple_length_mismatch(self) -> None:
        builder = self.encoder.encode_tuple(2)
        builder.add_element(self.int_type, 1)
        with self.assertRaises(CursorProtocolError):
            builder.end()

    def test_map(self) -> None:
        builder = self.encoder.encode_map(2)
        builder.add_key(self.str_type, 'a')
        builder.add_value(self.int_type, 1)
        builder.add_entry(self.str_type, 'b', self.int_type, 2)
        self.assertEqual(builder.end(), Map((
            (Binary(b'a'), FixInteger(1)),
            (Binary(b'b'), FixInteger(2)),
        )))

    def test_map_protocol(self) -> None:
        builder = self.encoder.encode_map()
        with self.assertRaises(CursorProtocolError):
            builder.add_value(self.int_type, 1)
        builder.add_key(self.str_type, 'a')
        with self.assertRaises(CursorProtocolError):
            builder.add_key(self.str_type, 'b')

        builder = self.encoder.encode_map()
        builder.add_key(self.str_type, 'a')
        with self.assertRaises(CursorProtocolError):
            builder.end()

    def test_struct(self) -> None:
        builder = self.encoder.encode_struct('Point', 2)
        builder.add_field('x', self.int_type, 1)
        builder.skip_field('z')
        builder.add_field('y', self.int_type, 2)
        self.assertEqual(builder.end(), Map((
            (Atom('x'), FixInteger(1)),
            (Atom('y'), FixInteger(2)),
        )))

    def test_struct_field_names_are_verbatim(self) -> None:
        builder = self.encoder.encode_struct('Point', 1)
        builder.add_field('SomeField', self.int_type, 1)
        self.assertEqual(builder.end(), Map(((Atom('SomeField'), FixInteger(1)),)))

    def test_builders_cant_be_used_after_end(self) -> None:
        seq_builder = self.encoder.encode_seq()
        seq_builder.end()
        with self.assertRaises(CursorProtocolError):
            seq_builder.add_element(self.int_type, 1)
        with self.assertRaises(CursorProtocolError):
            seq_builder.end()

        struct_builder = self.encoder.encode_struct('Point', 0)
        struct_builder.end()
        with self.assertRaises(CursorProtocolError):
            struct_builder.add_field('x', self.int_type, 1)
