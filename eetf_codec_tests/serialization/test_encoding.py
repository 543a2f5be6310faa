import pytest


def _encode_bignum(n: int, length_size: int) -> bytes:
    from eetf_codec.serialization import Serializer
    from eetf_codec.serialization.encoding.bignum import encode_bignum
    se = Serializer.build_bytes_serializer()
    encode_bignum(se, n, length_size=length_size)
    return bytes(se.finalize())


def _do_bignum_round_trip_test(n: int, digits: int) -> None:
    from eetf_codec.serialization import Deserializer
    from eetf_codec.serialization.encoding.bignum import bignum_digit_count, decode_bignum
    assert bignum_digit_count(n) == digits
    encoded_n = _encode_bignum(n, 1)
    # length byte + sign byte + digits
    assert len(encoded_n) == 2 + digits
    de = Deserializer.build_bytes_deserializer(encoded_n)
    assert decode_bignum(de, length_size=1) == n
    assert de.is_empty()


BIGNUM_EXAMPLES_BY_DIGITS = {
    0: [0],
    1: [1, 255, -1, -255],
    2: [256, 65535, -256, -65535],
    8: [2**63 - 1, -(2**63), 2**64 - 1],
    9: [2**64, -(2**64)],
}


def gen_bignum_test_cases():
    test_cases = []
    for digits, examples in BIGNUM_EXAMPLES_BY_DIGITS.items():
        for example in examples:
            test_cases.append((example, digits))
    for digits in range(10, 40, 7):
        test_cases.append((2**(8 * digits) - 1, digits))
        test_cases.append((-(2**(8 * (digits - 1))), digits))
    return test_cases


@pytest.mark.parametrize('n, digits', gen_bignum_test_cases())
def test_bignum_round_trip(n: int, digits: int) -> None:
    _do_bignum_round_trip_test(n, digits)


def test_bignum_layout() -> None:
    # digits are little endian, the sign is its own byte
    assert _encode_bignum(65530, 1).hex() == '0200faff'
    assert _encode_bignum(-256, 1).hex() == '02010001'
    assert _encode_bignum(1, 4).hex() == '000000010001'


def test_bignum_bad_sign() -> None:
    from eetf_codec.serialization import BadDataError, Deserializer
    from eetf_codec.serialization.encoding.bignum import decode_bignum
    de = Deserializer.build_bytes_deserializer(bytes.fromhex('010201'))
    with pytest.raises(BadDataError):
        decode_bignum(de, length_size=1)


def test_bignum_out_of_data() -> None:
    from eetf_codec.serialization import Deserializer, OutOfDataError
    from eetf_codec.serialization.encoding.bignum import decode_bignum
    de = Deserializer.build_bytes_deserializer(bytes.fromhex('040001'))
    with pytest.raises(OutOfDataError):
        decode_bignum(de, length_size=1)


@pytest.mark.parametrize('n, length, signed, expected', [
    (0, 1, False, '00'),
    (255, 1, False, 'ff'),
    (3, 4, False, '00000003'),
    (-1, 4, True, 'ffffffff'),
    (-(2**31), 4, True, '80000000'),
    (2**16 - 1, 2, False, 'ffff'),
])
def test_int_layout(n: int, length: int, signed: bool, expected: str) -> None:
    from eetf_codec.serialization import Deserializer, Serializer
    from eetf_codec.serialization.encoding.int import decode_int, encode_int
    se = Serializer.build_bytes_serializer()
    encode_int(se, n, length=length, signed=signed)
    data = bytes(se.finalize())
    assert data.hex() == expected
    de = Deserializer.build_bytes_deserializer(data)
    assert decode_int(de, length=length, signed=signed) == n


def test_int_too_big() -> None:
    from eetf_codec.serialization import Serializer
    from eetf_codec.serialization.encoding.int import encode_int
    se = Serializer.build_bytes_serializer()
    with pytest.raises(ValueError):
        encode_int(se, 256, length=1, signed=False)
    with pytest.raises(ValueError):
        encode_int(se, -1, length=4, signed=False)


@pytest.mark.parametrize('value', [0.0, -0.0, 1.5, -2.25, 1e300, 5e-324])
def test_float64_round_trip(value: float) -> None:
    from eetf_codec.serialization import Deserializer, Serializer
    from eetf_codec.serialization.encoding.float import decode_float64, encode_float64
    se = Serializer.build_bytes_serializer()
    encode_float64(se, value)
    data = bytes(se.finalize())
    assert len(data) == 8
    de = Deserializer.build_bytes_deserializer(data)
    assert decode_float64(de) == value


def test_float_ascii() -> None:
    from eetf_codec.serialization import BadDataError, Deserializer
    from eetf_codec.serialization.encoding.float import FLOAT_ASCII_LENGTH, decode_float_ascii
    de = Deserializer.build_bytes_deserializer(b'-1.25e+01'.ljust(FLOAT_ASCII_LENGTH, b'\x00'))
    assert decode_float_ascii(de) == -12.5
    de = Deserializer.build_bytes_deserializer(b'not a float'.ljust(FLOAT_ASCII_LENGTH, b'\x00'))
    with pytest.raises(BadDataError):
        decode_float_ascii(de)


def test_max_bytes_deserializer() -> None:
    from eetf_codec.serialization import Deserializer
    from eetf_codec.serialization.adapters import MaxBytesExceededError
    de = Deserializer.build_bytes_deserializer(b'\x01\x02\x03\x04').with_max_bytes(3)
    assert de.read_bytes(2) == b'\x01\x02'
    assert de.read_byte() == 3
    with pytest.raises(MaxBytesExceededError):
        de.read_byte()
