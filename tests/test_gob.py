import pytest

from monads.gob import GobError, decode, encode


def test_encode_int_wire_bytes():
    assert encode(42) == bytes([0x3, 0x4, 0x0, 0x54])


def test_encode_str_wire_bytes():
    assert encode("42") == bytes([0x5, 0xC, 0x0, 0x2, 0x34, 0x32])


def test_decode_int_wire_bytes():
    assert decode(bytes([0x3, 0x4, 0x0, 0x54]), int) == 42


def test_decode_str_wire_bytes():
    assert decode(bytes([0x5, 0xC, 0x0, 0x2, 0x34, 0x32]), str) == "42"


def test_encode_float_is_byte_reversed():
    assert encode(17.0) == bytes([0x5, 0x8, 0x0, 0xFE, 0x31, 0x40])


def test_encode_bool():
    assert encode(True) == bytes([0x3, 0x2, 0x0, 0x1])
    assert encode(False) == bytes([0x3, 0x2, 0x0, 0x0])


def test_encode_negative_int():
    assert encode(-129) == bytes([0x5, 0x4, 0x0, 0xFE, 0x1, 0x1])
    assert encode(-1) == bytes([0x3, 0x4, 0x0, 0x1])


def test_encode_bytes():
    assert encode(b"ab") == bytes([0x5, 0xA, 0x0, 0x2, 0x61, 0x62])


@pytest.mark.parametrize(
    "value",
    [
        0,
        42,
        -42,
        127,
        128,
        -(1 << 63),
        (1 << 63) - 1,
        0.0,
        -2.5,
        1e300,
        True,
        False,
        "",
        "hello",
        "héllo",
        b"",
        b"\x00\xff",
        complex(1.5, -2.0),
    ],
)
def test_round_trip(value):
    assert decode(encode(value), type(value)) == value


def test_round_trip_keeps_type():
    assert type(decode(encode(True), bool)) is bool
    assert type(decode(encode(b"x"), bytes)) is bytes


def test_decode_type_mismatch():
    with pytest.raises(GobError, match="received remote type int"):
        decode(encode(42), str)


def test_decode_empty():
    with pytest.raises(GobError):
        decode(b"", int)


def test_decode_truncated_message():
    with pytest.raises(GobError):
        decode(bytes([0x3, 0x4, 0x0]), int)


def test_decode_truncated_string():
    with pytest.raises(GobError):
        decode(bytes([0x5, 0xC, 0x0, 0x9, 0x34, 0x32]), str)


def test_decode_invalid_bool():
    with pytest.raises(GobError, match="invalid bool"):
        decode(bytes([0x3, 0x2, 0x0, 0x2]), bool)


def test_decode_non_zero_singleton_delta():
    with pytest.raises(GobError, match="singleton"):
        decode(bytes([0x3, 0x4, 0x1, 0x54]), int)


def test_decode_unsupported_kind():
    with pytest.raises(GobError):
        decode(encode(42), list)


def test_encode_out_of_range_int():
    with pytest.raises(GobError):
        encode(1 << 63)


def test_encode_unsupported_type():
    with pytest.raises(GobError, match="not supported"):
        encode([1, 2])