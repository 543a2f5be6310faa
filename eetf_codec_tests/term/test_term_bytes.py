import zlib

import pytest

from eetf_codec.serialization import BadDataError, OutOfDataError
from eetf_codec.serialization.adapters import MaxBytesExceededError
from eetf_codec.term import (
    NIL,
    Atom,
    BigInteger,
    Binary,
    BitBinary,
    ExternalFun,
    FixInteger,
    Float,
    ImproperList,
    InternalFun,
    List,
    Map,
    Pid,
    Port,
    Reference,
    Tuple,
    term_from_bytes,
    term_to_bytes,
)


@pytest.mark.parametrize('term, expected', [
    (FixInteger(1), '836101'),
    (FixInteger(255), '8361ff'),
    (FixInteger(256), '836200000100'),
    (FixInteger(-1), '8362ffffffff'),
    (BigInteger(65530), '836e0200faff'),
    (BigInteger(0), '836e0000'),
    (Float(1.5), '83463ff8000000000000'),
    (Atom('ok'), '8377026f6b'),
    (NIL, '8377036e696c'),
    (Binary(b'test'), '836d0000000474657374'),
    (List(()), '836a'),
    (List((FixInteger(1),)), '836c0000000161016a'),
    (Tuple(()), '836800'),
    (Tuple((Atom('ok'), FixInteger(1))), '83680277026f6b6101'),
    (Map(()), '837400000000'),
    (Map(((Atom('x'), FixInteger(1)),)), '8374000000017701786101'),
])
def test_term_layout(term, expected: str) -> None:
    data = term_to_bytes(term)
    assert data.hex() == expected
    assert term_from_bytes(data) == term


@pytest.mark.parametrize('term', [
    BigInteger(2**64 - 1),
    BigInteger(-(2**64)),
    BigInteger(2**(8 * 300)),
    Atom('á' * 100),
    Atom('x' * 300),
    Tuple(tuple(FixInteger(i) for i in range(300))),
    ImproperList((FixInteger(1), FixInteger(2)), Atom('tail')),
    BitBinary(b'\xff\x80', 1),
    Pid(Atom('node@host'), 1, 2, 3),
    Port(Atom('node@host'), 7, 1),
    Port(Atom('node@host'), 2**40, 1),
    Reference(Atom('node@host'), (1, 2, 3), 4),
    ExternalFun(Atom('lists'), Atom('map'), 2),
    Map(((Atom('a'), List((Binary(b''), Float(-0.5)))), (FixInteger(1), Tuple((NIL,))))),
])
def test_term_round_trip(term) -> None:
    assert term_from_bytes(term_to_bytes(term)) == term


def test_big_integer_keeps_its_kind() -> None:
    # a small value in a BigInteger is still written as a bignum, so it's read back as a BigInteger
    assert term_from_bytes(term_to_bytes(BigInteger(1))) == BigInteger(1)
    assert term_from_bytes(term_to_bytes(FixInteger(1))) == FixInteger(1)


def test_fix_integer_range() -> None:
    FixInteger(2**31 - 1)
    FixInteger(-(2**31))
    with pytest.raises(ValueError):
        FixInteger(2**31)
    with pytest.raises(ValueError):
        FixInteger(-(2**31) - 1)


def test_non_finite_float() -> None:
    with pytest.raises(ValueError):
        term_to_bytes(Float(float('nan')))
    with pytest.raises(ValueError):
        term_to_bytes(Float(float('inf')))


def test_legacy_encodings() -> None:
    # STRING_EXT is a list of small integers
    assert term_from_bytes(bytes.fromhex('836b0003010203')) == List((FixInteger(1), FixInteger(2), FixInteger(3)))
    # ATOM_EXT and SMALL_ATOM_EXT are latin-1
    assert term_from_bytes(bytes.fromhex('83640002e9e9')) == Atom('éé')
    assert term_from_bytes(bytes.fromhex('837302e9e9')) == Atom('éé')
    # ATOM_UTF8_EXT
    assert term_from_bytes(bytes.fromhex('837600026f6b')) == Atom('ok')
    # FLOAT_EXT is a 31 bytes string
    assert term_from_bytes(b'\x83\x63' + b'1.5'.ljust(31, b'\x00')) == Float(1.5)
    # LARGE_TUPLE_EXT, even if it's small
    assert term_from_bytes(bytes.fromhex('83690000000161ff')) == Tuple((FixInteger(255),))
    # LARGE_BIG_EXT
    assert term_from_bytes(bytes.fromhex('836f000000010107')) == BigInteger(-7)


def test_improper_list_from_bytes() -> None:
    # [1 | 2]
    data = bytes.fromhex('836c0000000161016102')
    assert term_from_bytes(data) == ImproperList((FixInteger(1),), FixInteger(2))


def test_internal_fun_is_kept_raw() -> None:
    fun = InternalFun(b'\x00\x00\x00\x05\x01')
    data = term_to_bytes(fun)
    assert data[:2] == b'\x83\x70'
    assert term_from_bytes(data) == fun


def test_invalid_version() -> None:
    with pytest.raises(BadDataError, match='invalid version'):
        term_from_bytes(bytes.fromhex('826101'))


def test_empty_input() -> None:
    with pytest.raises(OutOfDataError):
        term_from_bytes(b'')
    with pytest.raises(OutOfDataError):
        term_from_bytes(b'\x83')


def test_trailing_data() -> None:
    with pytest.raises(BadDataError, match='trailing data'):
        term_from_bytes(bytes.fromhex('83610161'))


def test_unknown_tag() -> None:
    with pytest.raises(BadDataError, match='unsupported term tag'):
        term_from_bytes(bytes.fromhex('8300'))


def test_truncated_input() -> None:
    with pytest.raises(OutOfDataError):
        term_from_bytes(bytes.fromhex('836d0000000474'))
    with pytest.raises(OutOfDataError):
        term_from_bytes(bytes.fromhex('836802'))


def test_compressed_envelope() -> None:
    term = List(tuple(Binary(b'same') for _ in range(100)))
    plain = term_to_bytes(term)
    compressed = term_to_bytes(term, compression_level=9)
    assert compressed[:2] == b'\x83\x50'
    assert len(compressed) < len(plain)
    assert term_from_bytes(compressed) == term
    # level 0 still uses the envelope
    assert term_from_bytes(term_to_bytes(term, compression_level=0)) == term


def test_compressed_size_mismatch() -> None:
    payload = term_to_bytes(Binary(b'abc'))[1:]
    data = b'\x83\x50' + (len(payload) + 1).to_bytes(4, 'big') + zlib.compress(payload)
    with pytest.raises(BadDataError, match='size mismatch'):
        term_from_bytes(data)


def test_compressed_garbage() -> None:
    data = b'\x83\x50' + (10).to_bytes(4, 'big') + b'not zlib'
    with pytest.raises(BadDataError, match='invalid compressed term'):
        term_from_bytes(data)


def test_max_bytes() -> None:
    data = term_to_bytes(Binary(b'x' * 100))
    assert term_from_bytes(data, max_bytes=len(data)) == Binary(b'x' * 100)
    with pytest.raises(MaxBytesExceededError):
        term_from_bytes(data, max_bytes=len(data) - 1)


def test_max_bytes_applies_to_inflated_size() -> None:
    term = Binary(b'\x00' * 10_000)
    data = term_to_bytes(term, compression_level=9)
    assert len(data) < 1000
    with pytest.raises(MaxBytesExceededError):
        term_from_bytes(data, max_bytes=1000)
    assert term_from_bytes(data, max_bytes=20_000) == term


def _nested_lists(depth: int) -> bytes:
    # each level is a one-element list, the innermost element and every tail are nil
    return b'\x83' + bytes.fromhex('6c00000001') * depth + b'\x6a' * (depth + 1)


def test_nesting() -> None:
    term = term_from_bytes(_nested_lists(50))
    for _ in range(50):
        assert isinstance(term, List)
        term, = term.elements
    assert term == List(())


def test_nesting_too_deep() -> None:
    with pytest.raises(BadDataError, match='nested too deeply'):
        term_from_bytes(_nested_lists(5000))
