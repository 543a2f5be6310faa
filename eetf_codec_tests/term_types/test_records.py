from dataclasses import dataclass, field
from typing import Optional

from eetf_codec.exceptions import ExpectedAtom, ExpectedMap, ExpectedNil, Message
from eetf_codec.term import NIL, Atom, BigInteger, Binary, FixInteger, List, Map
from eetf_codec.term_types import make_term_type
from eetf_codec.types import Uint8, Uint16, Uint32, Uint64
from eetf_codec_tests import unittest


@dataclass
class Point:
    x: Uint8
    y: Uint8


@dataclass
class Unsigned:
    unsigned8: Uint8
    unsigned16: Uint16
    unsigned32: Uint32
    unsigned64: Uint64


@dataclass
class Settings:
    name: str
    retries: int = 3
    tags: list[str] = field(default_factory=list)
    comment: Optional[str] = None
    nickname: Optional[str] = None


@dataclass
class Empty:
    pass


@dataclass
class Node:
    value: int
    next: Optional['Node'] = None


@dataclass
class Mixed:
    CamelField: int
    snake_field: int


@dataclass
class Computed:
    value: int
    double: int = field(init=False)

    def __post_init__(self) -> None:
        self.double = self.value * 2


class RecordTestCase(unittest.TestCase):
    def test_record(self) -> None:
        self.assertEqual(
            self._run_test(Point, Point(1, 2)),
            Map(((Atom('x'), FixInteger(1)), (Atom('y'), FixInteger(2)))),
        )

    def test_unsigned_widths(self) -> None:
        term = self._run_test(Unsigned, Unsigned(129, 65530, 4294967290, 18446744073709551610))
        self.assertEqual([type(value) for _, value in term.entries], [FixInteger, FixInteger, BigInteger, BigInteger])

    def test_field_order_does_not_matter(self) -> None:
        term = Map(((Atom('y'), FixInteger(2)), (Atom('x'), FixInteger(1))))
        self.assertEqual(self._decode(Point, term), Point(1, 2))

    def test_field_names_are_verbatim(self) -> None:
        term = self._run_test(Mixed, Mixed(1, 2))
        self.assertEqual([key for key, _ in term.entries], [Atom('CamelField'), Atom('snake_field')])

    def test_unknown_fields_are_skipped(self) -> None:
        term = Map((
            (Atom('x'), FixInteger(1)),
            (Atom('color'), List((Binary(b'red'),))),
            (Atom('y'), FixInteger(2)),
        ))
        self.assertEqual(self._decode(Point, term), Point(1, 2))

    def test_duplicate_field(self) -> None:
        term = Map(((Atom('x'), FixInteger(1)), (Atom('y'), FixInteger(2)), (Atom('x'), FixInteger(3))))
        with self.assertRaisesRegex(Message, 'duplicate field `x`'):
            self._decode(Point, term)

    def test_missing_field(self) -> None:
        with self.assertRaisesRegex(Message, 'missing field `y`'):
            self._decode(Point, Map(((Atom('x'), FixInteger(1)),)))

    def test_defaults_and_optional_fields(self) -> None:
        term = Map(((Atom('name'), Binary(b'svc')), (Atom('nickname'), Binary(b'n'))))
        self.assertEqual(self._decode(Settings, term), Settings('svc', nickname='n'))
        self._run_test(Settings, Settings('svc', 5, ['a', 'b'], 'hi', None))

    def test_missing_optional_field_without_default(self) -> None:
        @dataclass
        class Profile:
            name: str
            email: Optional[str]

        term_type = make_term_type(Profile)
        self.assertEqual(term_type.from_term(Map(((Atom('name'), Binary(b'a')),))), Profile('a', None))

    def test_keys_must_be_atoms(self) -> None:
        with self.assertRaises(ExpectedAtom):
            self._decode(Point, Map(((Binary(b'x'), FixInteger(1)), (Binary(b'y'), FixInteger(2)))))

    def test_not_a_map(self) -> None:
        with self.assertRaises(ExpectedMap):
            self._decode(Point, List((FixInteger(1), FixInteger(2))))

    def test_unit_record(self) -> None:
        self.assertEqual(self._run_test(Empty, Empty()), NIL)
        with self.assertRaises(ExpectedNil):
            self._decode(Empty, Map(()))

    def test_self_reference(self) -> None:
        node = Node(1, Node(2, Node(3)))
        term = self._run_test(Node, node)
        self.assertEqual(term, Map((
            (Atom('value'), FixInteger(1)),
            (Atom('next'), Map((
                (Atom('value'), FixInteger(2)),
                (Atom('next'), Map(((Atom('value'), FixInteger(3)), (Atom('next'), NIL)))),
            ))),
        )))

    def test_non_init_fields_are_not_written(self) -> None:
        term = self._run_test(Computed, Computed(2))
        self.assertEqual(term, Map(((Atom('value'), FixInteger(2)),)))

    def test_nested_records(self) -> None:
        self._run_test(dict[str, list[Point]], {'a': [Point(1, 2)], 'b': []})
        self._run_test(tuple[Point, Optional[Point]], (Point(0, 0), None))

    def test_wrong_value(self) -> None:
        with self.assertRaises(TypeError):
            make_term_type(Point).to_term(Node(1))  # type: ignore[arg-type]
        with self.assertRaises(ValueError):
            make_term_type(Point).to_term(Point(1, 256))


if __name__ == '__main__':
    unittest.main()
