"""The outcome of an action: either a success value (Ok) or an error (Err)."""

from __future__ import annotations

import json
from typing import Any, Callable, Generic, TypeVar

from .option import _coerce_json, _empty, _json_default

T = TypeVar("T")


def _errors_equal(first: BaseException | None, second: BaseException | None) -> bool:
    if first is second:
        return True
    if first is None or second is None:
        return False
    return type(first) is type(second) and first.args == second.args


class Result(Generic[T]):
    """A container holding either a valid value or the error that prevented it."""

    __slots__ = ("_is_err", "_value", "_err", "_kind")

    def __init__(
        self,
        is_err: bool,
        value: Any = None,
        error: BaseException | None = None,
        kind: Any = None,
    ) -> None:
        self._is_err = is_err
        self._value = _empty(kind) if is_err else value
        self._err = error if is_err else None
        self._kind = kind

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        if self._is_err != other._is_err:
            return False
        if self._is_err:
            return _errors_equal(self._err, other._err)
        return bool(self._value == other._value)

    def __hash__(self) -> int:
        if self._is_err:
            return hash((True, type(self._err), str(self._err)))
        return hash((False, self._value))

    def __repr__(self) -> str:
        if self._is_err:
            return f"Err({self._err!r})"
        return f"Ok({self._value!r})"

    def is_ok(self) -> bool:
        """Return True when the value is valid."""
        return not self._is_err

    def is_error(self) -> bool:
        """Return True when the value is invalid."""
        return self._is_err

    def error(self) -> BaseException | None:
        """Return the error, or None for a valid result."""
        return self._err

    def get(self) -> tuple[T, BaseException | None]:
        """Return the value (or the empty value) and the error (or None)."""
        if self._is_err:
            return _empty(self._kind), self._err
        return self._value, None

    def must_get(self) -> T:
        """Return the value, raising the held error when invalid."""
        if self._is_err:
            assert self._err is not None
            raise self._err
        return self._value

    def or_else(self, fallback: T) -> T:
        """Return the value when valid, else the fallback."""
        return fallback if self._is_err else self._value

    def or_empty(self) -> T:
        """Return the value when valid, else the empty value of its type."""
        return self._value

    def for_each(self, mapper: Callable[[T], Any]) -> None:
        """Call mapper with the value when valid."""
        if not self._is_err:
            mapper(self._value)

    def match(
        self,
        on_success: Callable[[T], T],
        on_error: Callable[[BaseException], T],
    ) -> Result[T]:
        """Build a new Result from on_success or on_error; a raised exception gives Err."""
        if self._is_err:
            assert self._err is not None
            error = self._err
            return try_(lambda: on_error(error))
        value = self._value
        return try_(lambda: on_success(value))

    def map(self, mapper: Callable[[T], T]) -> Result[T]:
        """Apply mapper to a valid value; a raised exception gives Err."""
        if self._is_err:
            return err(self._err, self._kind)
        value = self._value
        return try_(lambda: mapper(value))

    def map_err(self, mapper: Callable[[BaseException], T]) -> Result[T]:
        """Apply mapper to the error of an invalid result; a raised exception gives Err."""
        if self._is_err:
            assert self._err is not None
            error = self._err
            return try_(lambda: mapper(error))
        return ok(self._value)

    def flat_map(self, mapper: Callable[[T], Result[T]]) -> Result[T]:
        """Return mapper's Result for a valid value; keep the error otherwise."""
        if self._is_err:
            return err(self._err, self._kind)
        return mapper(self._value)

    def to_json(self) -> str:
        """Encode as a JSON-RPC style object: {"result": ...} or {"error": {"message": ...}}."""
        if self._is_err:
            payload: dict[str, Any] = {"error": {"message": str(self._err)}}
        else:
            payload = {"result": self._value}
        return json.dumps(
            payload, separators=(",", ":"), ensure_ascii=False, default=_json_default
        )

    @classmethod
    def from_json(cls, data: str | bytes, kind: Any = None) -> Result[Any]:
        """Decode a JSON-RPC style object; a non-empty error message gives Err."""
        if isinstance(data, (bytes, bytearray)):
            data = bytes(data).decode("utf-8")
        parsed = json.loads(data)
        if parsed is None:
            return cls(False, _empty(kind), None, kind)
        if not isinstance(parsed, dict):
            raise ValueError(
                f"json: cannot unmarshal {type(parsed).__name__} into value of type Result"
            )

        value = _empty(kind)
        message = ""
        for key, item in parsed.items():
            name = key.lower()
            if name == "result":
                value = _coerce_json(item, kind)
            elif name == "error":
                if item is None:
                    continue
                if not isinstance(item, dict):
                    raise ValueError(
                        f"json: cannot unmarshal {type(item).__name__} into error object"
                    )
                for inner_key, inner in item.items():
                    if inner_key.lower() != "message" or inner is None:
                        continue
                    if not isinstance(inner, str):
                        raise ValueError(
                            f"json: cannot unmarshal {type(inner).__name__} into error message"
                        )
                    message = inner

        if message:
            return cls(True, None, Exception(message), kind)
        return cls(False, value, None, kind)


def ok(value: T) -> Result[T]:
    """Build a valid Result."""
    return Result(False, value, None, type(value))


def err(error: BaseException, kind: Any = None) -> Result[Any]:
    """Build an invalid Result; kind gives the type of its empty value."""
    return Result(True, None, error, kind)


def errf(format: str, *args: Any) -> Result[Any]:
    """Build an invalid Result whose error message is printf-style formatted."""
    message = format % args if args else format
    return err(Exception(message))


def tuple_to_result(value: T, error: BaseException | None) -> Result[T]:
    """Build an Err when error is set, else an Ok holding value."""
    if error is not None:
        return err(error, type(value))
    return ok(value)


def try_(func: Callable[[], T]) -> Result[T]:
    """Call func; return Ok with its value, or Err with the exception it raised."""
    try:
        value = func()
    except Exception as exc:
        return err(exc)
    return ok(value)