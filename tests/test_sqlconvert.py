import datetime as dt
import json
from dataclasses import dataclass

import pytest

from monads.sqlconvert import ConversionError, convert_assign, convert_value


@dataclass
class _Scanned:
    cool: bool
    some: int

    @classmethod
    def scan(cls, src):
        if not isinstance(src, str):
            raise ValueError("cannot scan - src is not a string")
        data = json.loads(src)
        return cls(cool=data["cool"], some=data["some"])


class _Valued:
    def __init__(self, value):
        self._value = value

    def to_sql(self):
        return self._value


@pytest.mark.parametrize("value", [None, True, 42, -7, 1.5, b"ABC", "foo"])
def test_convert_value_passes_values_through(value):
    assert convert_value(value) == value


def test_convert_value_datetime():
    moment = dt.datetime(2024, 6, 22, tzinfo=dt.timezone.utc)
    assert convert_value(moment) == moment


def test_convert_value_bytearray():
    assert convert_value(bytearray(b"AB")) == b"AB"


def test_convert_value_high_bit_int():
    with pytest.raises(ConversionError, match="high bit"):
        convert_value(1 << 63)


def test_convert_value_uses_to_sql():
    assert convert_value(_Valued("foo")) == "foo"
    assert convert_value(_Valued(None)) is None


def test_convert_value_rejects_bad_to_sql_result():
    with pytest.raises(ConversionError, match="non-Value"):
        convert_value(_Valued([1]))


def test_convert_value_unsupported():
    with pytest.raises(ConversionError, match="unsupported type list"):
        convert_value([1, 2])


def test_assign_bytes_to_str():
    assert convert_assign(str, bytes([65, 66, 67])) == "ABC"


def test_assign_int_to_int():
    assert convert_assign(int, 32) == 32


def test_assign_str_to_int():
    assert convert_assign(int, "42") == 42
    assert convert_assign(int, b"-17") == -17


@pytest.mark.parametrize("src", ["abc", " 42", "1_000", "3.5", True])
def test_assign_int_invalid_syntax(src):
    with pytest.raises(ConversionError, match="invalid syntax"):
        convert_assign(int, src)


def test_assign_int_out_of_range():
    with pytest.raises(ConversionError, match="out of range"):
        convert_assign(int, "9223372036854775808")


def test_assign_whole_float_to_int():
    assert convert_assign(int, 3.0) == 3


def test_assign_null_to_int():
    with pytest.raises(ConversionError, match="NULL"):
        convert_assign(int, None)


def test_assign_null_to_str():
    with pytest.raises(ConversionError, match="NULL"):
        convert_assign(str, None)


@pytest.mark.parametrize(
    ("src", "expected"),
    [
        (3.0, "3"),
        (0.5, "0.5"),
        (-1.5, "-1.5"),
        (123456.0, "123456"),
        (1234567.0, "1.234567e+06"),
        (1e21, "1e+21"),
        (0.0001, "0.0001"),
        (1e-05, "1e-05"),
        (float("inf"), "+Inf"),
        (True, "true"),
        (False, "false"),
        (42, "42"),
    ],
)
def test_assign_to_str(src, expected):
    assert convert_assign(str, src) == expected


def test_assign_datetime_to_str():
    utc = dt.timezone.utc
    assert convert_assign(str, dt.datetime(2024, 6, 22, tzinfo=utc)) == "2024-06-22T00:00:00Z"
    assert (
        convert_assign(str, dt.datetime(2024, 6, 22, 1, 2, 3, 500000, tzinfo=utc))
        == "2024-06-22T01:02:03.5Z"
    )
    plus_two = dt.timezone(dt.timedelta(hours=2))
    assert (
        convert_assign(str, dt.datetime(2024, 6, 22, tzinfo=plus_two))
        == "2024-06-22T00:00:00+02:00"
    )


def test_assign_to_bytes():
    assert convert_assign(bytes, "foo") == b"foo"
    assert convert_assign(bytes, 42) == b"42"
    assert convert_assign(bytes, None) == b""


@pytest.mark.parametrize(
    ("src", "expected"),
    [("t", True), ("TRUE", True), ("0", False), (b"false", False), (1, True), (0, False), (True, True)],
)
def test_assign_to_bool(src, expected):
    assert convert_assign(bool, src) is expected


@pytest.mark.parametrize("src", ["yes", 2, 1.0, None])
def test_assign_to_bool_rejects(src):
    with pytest.raises(ConversionError, match="into type bool"):
        convert_assign(bool, src)


def test_assign_to_float():
    assert convert_assign(float, 42) == 42.0
    assert convert_assign(float, "2.5e3") == 2500.0
    assert convert_assign(float, 1.25) == 1.25


def test_assign_to_float_rejects():
    with pytest.raises(ConversionError, match="invalid syntax"):
        convert_assign(float, True)
    with pytest.raises(ConversionError, match="out of range"):
        convert_assign(float, "1e400")


def test_assign_datetime():
    moment = dt.datetime(2024, 6, 22, tzinfo=dt.timezone.utc)
    assert convert_assign(dt.datetime, moment) == moment
    with pytest.raises(ConversionError, match="unsupported Scan"):
        convert_assign(dt.datetime, "2024-06-22")


def test_assign_any_keeps_source():
    assert convert_assign(object, b"x") == b"x"
    assert convert_assign(object, None) is None


def test_assign_uses_scan():
    assert convert_assign(_Scanned, '{"cool": true, "some": 123}') == _Scanned(cool=True, some=123)


def test_assign_scan_error_propagates():
    with pytest.raises(ValueError, match="not a string"):
        convert_assign(_Scanned, 42)


def test_assign_unsupported_custom_type():
    class Plain:
        pass

    with pytest.raises(ConversionError, match="unsupported Scan"):
        convert_assign(Plain, "foo")