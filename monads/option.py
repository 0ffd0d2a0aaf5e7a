"""An optional value: either present (Some) or absent (None)."""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any, Callable, Generic, Iterator, TypeVar

from . import gob, sqlconvert

T = TypeVar("T")

_ANY_KINDS = (None, object, Any)


class NoSuchElementError(LookupError):
    """Raised when the value of an absent Option is requested."""

    def __init__(self, message: str = "no such element") -> None:
        super().__init__(message)


def _empty(kind: Any) -> Any:
    """Return the zero value of a type, or None when it has no obvious one."""
    if kind in _ANY_KINDS:
        return None
    try:
        return kind()
    except Exception:
        return None


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    is_zero = getattr(value, "is_zero", None)
    if callable(is_zero):
        return bool(is_zero())
    zero = _empty(type(value))
    if zero is None:
        return False
    try:
        return bool(value == zero)
    except Exception:
        return False


def _json_default(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, Option):
        return value._value if value._present else None
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _mismatch(value: Any, kind: type) -> ValueError:
    return ValueError(
        f"json: cannot unmarshal {type(value).__name__} into value of type {kind.__name__}"
    )


def _coerce_json(value: Any, kind: Any) -> Any:
    if value is None:
        return _empty(kind)
    if kind in _ANY_KINDS:
        return value
    if kind is bool:
        if isinstance(value, bool):
            return value
        raise _mismatch(value, kind)
    if kind is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        raise _mismatch(value, kind)
    if kind is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        raise _mismatch(value, kind)
    if kind is bytes:
        if not isinstance(value, str):
            raise _mismatch(value, kind)
        try:
            return base64.b64decode(value, validate=True)
        except binascii.Error as exc:
            raise ValueError(f"json: invalid base64 data: {exc}") from exc
    if isinstance(kind, type) and isinstance(value, kind):
        return value
    raise _mismatch(value, kind)


class Option(Generic[T]):
    """A container for a value that may be present or absent."""

    __slots__ = ("_present", "_value", "_kind")

    def __init__(self, present: bool, value: Any = None, kind: Any = None) -> None:
        self._present = present
        self._value = value if present else _empty(kind)
        self._kind = kind

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Option):
            return NotImplemented
        if self._present != other._present:
            return False
        return not self._present or self._value == other._value

    def __hash__(self) -> int:
        return hash((self._present, self._value if self._present else None))

    def __repr__(self) -> str:
        if self._present:
            return f"Some({self._value!r})"
        return "Option(absent)"

    def __iter__(self) -> Iterator[T]:
        if self._present:
            yield self._value

    def is_present(self) -> bool:
        """Return True when the value is present."""
        return self._present

    def is_absent(self) -> bool:
        """Return True when the value is absent."""
        return not self._present

    def size(self) -> int:
        """Return 1 when the value is present, 0 otherwise."""
        return 1 if self._present else 0

    def get(self) -> tuple[T, bool]:
        """Return the value (or the empty value) and whether it is present."""
        if not self._present:
            return _empty(self._kind), False
        return self._value, True

    def must_get(self) -> T:
        """Return the value, raising NoSuchElementError when absent."""
        if not self._present:
            raise NoSuchElementError()
        return self._value

    def or_else(self, fallback: T) -> T:
        """Return the value when present, else the fallback."""
        return self._value if self._present else fallback

    def or_empty(self) -> T:
        """Return the value when present, else the empty value of its type."""
        return self._value if self._present else _empty(self._kind)

    def for_each(self, on_value: Callable[[T], Any]) -> None:
        """Call on_value with the value when present."""
        if self._present:
            on_value(self._value)

    def match(
        self,
        on_value: Callable[[T], tuple[T, bool]],
        on_none: Callable[[], tuple[T, bool]],
    ) -> Option[T]:
        """Build a new Option from on_value when present or on_none when absent."""
        if self._present:
            return tuple_to_option(*on_value(self._value))
        return tuple_to_option(*on_none())

    def map(self, mapper: Callable[[T], tuple[T, bool]]) -> Option[T]:
        """Build a new Option from mapper when present; stay absent otherwise."""
        if self._present:
            return tuple_to_option(*mapper(self._value))
        return none(self._kind)

    def map_none(self, mapper: Callable[[], tuple[T, bool]]) -> Option[T]:
        """Keep the value when present; otherwise build an Option from mapper."""
        if self._present:
            return Option(True, self._value, self._kind)
        return tuple_to_option(*mapper())

    def flat_map(self, mapper: Callable[[T], Option[T]]) -> Option[T]:
        """Return mapper's Option when present; stay absent otherwise."""
        if self._present:
            return mapper(self._value)
        return none(self._kind)

    def map_value(self, mapper: Callable[[T], T]) -> Option[T]:
        """Wrap mapper's result when present; stay absent otherwise."""
        if self._present:
            return some(mapper(self._value))
        return none(self._kind)

    def to_pointer(self) -> T | None:
        """Return the value when present, else None."""
        return self._value if self._present else None

    def is_zero(self) -> bool:
        """Return True when absent or when the value is the empty value of its type."""
        if not self._present:
            return True
        return _is_empty(self._value)

    def to_json(self) -> str:
        """Encode as JSON: the value itself, or null when absent."""
        value = self._value if self._present else None
        return json.dumps(
            value, separators=(",", ":"), ensure_ascii=False, default=_json_default
        )

    @classmethod
    def from_json(cls, data: str | bytes, kind: Any = None) -> Option[Any]:
        """Decode JSON into a present Option; null gives the empty value of kind."""
        if isinstance(data, (bytes, bytearray)):
            data = bytes(data).decode("utf-8")
        parsed = json.loads(data)
        return cls(True, _coerce_json(parsed, kind), kind)

    def to_text(self) -> bytes:
        """Encode as JSON text bytes."""
        return self.to_json().encode("utf-8")

    @classmethod
    def from_text(cls, data: bytes | str, kind: Any = None) -> Option[Any]:
        """Decode JSON text bytes."""
        return cls.from_json(data, kind)

    def to_binary(self) -> bytes:
        """Encode as a presence byte followed by the gob-encoded value."""
        if not self._present:
            return b"\x00"
        return b"\x01" + gob.encode(self._value)

    @classmethod
    def from_binary(cls, data: bytes, kind: Any = None) -> Option[Any]:
        """Decode the binary form written by to_binary."""
        data = bytes(data)
        if not data:
            raise ValueError("Option.from_binary: no data")
        if data[0] == 0:
            return cls(False, None, kind)
        return cls(True, gob.decode(data[1:], kind), kind)

    def to_sql(self) -> Any:
        """Return a database value: None when absent, the converted value otherwise."""
        if not self._present:
            return None
        return sqlconvert.convert_value(self._value)

    @classmethod
    def from_sql(cls, src: Any, kind: Any = None) -> Option[Any]:
        """Build an Option from a database value; NULL gives an absent Option."""
        if src is None:
            return cls(False, None, kind)

        scan = getattr(kind, "scan", None)
        if callable(scan):
            try:
                return cls(True, scan(src), kind)
            except Exception as exc:
                raise sqlconvert.ConversionError(f"failed to scan: {exc}") from exc

        try:
            converted = sqlconvert.convert_value(src)
        except sqlconvert.ConversionError:
            pass
        else:
            if kind in _ANY_KINDS:
                return cls(True, converted, kind)
            if isinstance(kind, type) and isinstance(converted, kind):
                if kind is bool or not isinstance(converted, bool):
                    return cls(True, converted, kind)

        try:
            value = sqlconvert.convert_assign(kind, src)
        except Exception as exc:
            raise sqlconvert.ConversionError("failed to scan Option") from exc
        return cls(True, value, kind)


def some(value: T) -> Option[T]:
    """Build a present Option."""
    return Option(True, value, type(value))


def none(kind: Any = None) -> Option[Any]:
    """Build an absent Option; kind gives the type of its empty value."""
    return Option(False, None, kind)


def tuple_to_option(value: T, ok: bool) -> Option[T]:
    """Build a present Option when ok is true, else an absent one."""
    if ok:
        return some(value)
    return none(type(value))


def emptyable_to_option(value: T) -> Option[T]:
    """Build a present Option unless value is empty for its type."""
    if _is_empty(value):
        return none(None if value is None else type(value))
    return some(value)


def pointer_to_option(value: T | None, kind: Any = None) -> Option[T]:
    """Build a present Option unless value is None."""
    if value is None:
        return none(kind)
    return some(value)