"""Conversion of values to and from database column values.

Database values are None, bool, 64-bit int, float, bytes, str and datetime.
An object takes part as a value by providing a ``to_sql()`` method, and a
class takes part as a scan target by providing a ``scan(src)`` classmethod.
"""

from __future__ import annotations

import datetime as _dt
import math
import re
from decimal import Decimal
from typing import Any, Callable

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_FLOAT_SPECIAL_RE = re.compile(r"(?:[+-]?(?:inf|infinity)|nan)", re.IGNORECASE)

_BOOL_WORDS = {
    "1": True,
    "t": True,
    "T": True,
    "TRUE": True,
    "true": True,
    "True": True,
    "0": False,
    "f": False,
    "F": False,
    "FALSE": False,
    "false": False,
    "False": False,
}


class ConversionError(ValueError):
    """Raised when a value cannot be converted to or from a database value."""


def _type_name(value: Any) -> str:
    return "None" if value is None else type(value).__name__


def _is_value(value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return True
    if isinstance(value, int):
        return _INT64_MIN <= value <= _INT64_MAX
    return isinstance(value, (float, bytes, str, _dt.datetime))


def convert_value(value: Any) -> Any:
    """Convert a value to one of the database value types."""
    if _is_value(value):
        return value
    to_sql = getattr(value, "to_sql", None)
    if callable(to_sql):
        converted = to_sql()
        if not _is_value(converted):
            raise ConversionError(
                f"non-Value type {_type_name(converted)} returned from to_sql"
            )
        return converted
    if isinstance(value, int):
        if value > _INT64_MAX:
            raise ConversionError(
                "integer values with the high bit set are not supported"
            )
        raise ConversionError(f"integer {value} is below the 64-bit range")
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    raise ConversionError(f"unsupported type {_type_name(value)}")


def _format_float(number: float) -> str:
    """Format a float with the shortest digits, exponent form outside 1e-4..1e6."""
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "+Inf" if number > 0 else "-Inf"
    sign = "-" if math.copysign(1.0, number) < 0 else ""
    if number == 0:
        return sign + "0"
    parts = Decimal(repr(abs(number))).as_tuple()
    digits = "".join(str(d) for d in parts.digits)
    point = len(digits) + parts.exponent
    digits = digits.rstrip("0")
    exponent = point - 1
    if exponent < -4 or exponent >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        exp_sign = "-" if exponent < 0 else "+"
        return f"{sign}{mantissa}e{exp_sign}{abs(exponent):02d}"
    if point <= 0:
        return f"{sign}0.{'0' * -point}{digits}"
    if point >= len(digits):
        return sign + digits + "0" * (point - len(digits))
    return f"{sign}{digits[:point]}.{digits[point:]}"


def _format_rfc3339_nano(moment: _dt.datetime) -> str:
    text = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    offset = moment.utcoffset()
    if offset is None or not offset:
        return text + "Z"
    seconds = int(offset.total_seconds())
    zone_sign = "-" if seconds < 0 else "+"
    minutes = abs(seconds) // 60
    return f"{text}{zone_sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _as_string(src: Any) -> str:
    if isinstance(src, str):
        return src
    if isinstance(src, bytes):
        return src.decode("utf-8", errors="surrogateescape")
    if isinstance(src, bool):
        return "true" if src else "false"
    if isinstance(src, int):
        return str(src)
    if isinstance(src, float):
        return _format_float(src)
    return str(src)


def _unsupported(src: Any, kind: type) -> ConversionError:
    return ConversionError(
        f"unsupported Scan, storing value type {_type_name(src)} into type {kind.__name__}"
    )


def _null_error(kind: type) -> ConversionError:
    return ConversionError(f"converting NULL to {kind.__name__} is unsupported")


def _to_str(src: Any) -> str:
    if src is None:
        raise _null_error(str)
    if isinstance(src, _dt.datetime):
        return _format_rfc3339_nano(src)
    if isinstance(src, (str, bytes, bool, int, float)):
        return _as_string(src)
    raise _unsupported(src, str)


def _to_bytes(src: Any) -> bytes:
    if src is None:
        return b""
    if isinstance(src, bytes):
        return src
    if isinstance(src, _dt.datetime):
        return _format_rfc3339_nano(src).encode("ascii")
    if isinstance(src, (str, bool, int, float)):
        return _as_string(src).encode("utf-8", errors="surrogateescape")
    raise _unsupported(src, bytes)


def _to_bool(src: Any) -> bool:
    if isinstance(src, bool):
        return src
    if isinstance(src, (str, bytes)):
        text = _as_string(src)
        try:
            return _BOOL_WORDS[text]
        except KeyError:
            raise ConversionError(f"couldn't convert {text!r} into type bool") from None
    if isinstance(src, int):
        if src in (0, 1):
            return src == 1
        raise ConversionError(f"couldn't convert {src} into type bool")
    raise ConversionError(f"couldn't convert {src!r} ({_type_name(src)}) into type bool")


def _to_int(src: Any) -> int:
    if src is None:
        raise _null_error(int)
    if isinstance(src, int) and not isinstance(src, bool):
        if not _INT64_MIN <= src <= _INT64_MAX:
            raise ConversionError(f"converting {src} to int: value out of range")
        return src
    text = _as_string(src)
    if not _INT_RE.fullmatch(text):
        raise ConversionError(
            f"converting value type {_type_name(src)} ({text!r}) to int: invalid syntax"
        )
    number = int(text)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ConversionError(
            f"converting value type {_type_name(src)} ({text!r}) to int: value out of range"
        )
    return number


def _to_float(src: Any) -> float:
    if src is None:
        raise _null_error(float)
    if isinstance(src, float):
        return src
    text = _as_string(src)
    if _FLOAT_SPECIAL_RE.fullmatch(text):
        return float(text)
    if not _FLOAT_RE.fullmatch(text):
        raise ConversionError(
            f"converting value type {_type_name(src)} ({text!r}) to float: invalid syntax"
        )
    number = float(text)
    if math.isinf(number):
        raise ConversionError(
            f"converting value type {_type_name(src)} ({text!r}) to float: value out of range"
        )
    return number


_CONVERTERS: dict[type, Callable[[Any], Any]] = {
    str: _to_str,
    bytes: _to_bytes,
    bool: _to_bool,
    int: _to_int,
    float: _to_float,
}


def convert_assign(kind: Any, src: Any) -> Any:
    """Convert a database value to the given type, raising if information would be lost."""
    if isinstance(src, (bytearray, memoryview)):
        src = bytes(src)
    if kind is object or kind is Any:
        return src
    converter = _CONVERTERS.get(kind) if isinstance(kind, type) else None
    if converter is not None:
        return converter(src)
    scan = getattr(kind, "scan", None)
    if callable(scan):
        return scan(src)
    if isinstance(kind, type) and src is not None and isinstance(src, kind):
        return src
    name = getattr(kind, "__name__", repr(kind))
    raise ConversionError(
        f"unsupported Scan, storing value type {_type_name(src)} into type {name}"
    )