"""Encoding of single basic values in the gob wire format."""

from __future__ import annotations

import struct
from typing import Any

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_UINT64_LIMIT = 1 << 64

_TYPE_IDS: dict[type, int] = {
    bool: 1,
    int: 2,
    float: 4,
    bytes: 5,
    str: 6,
    complex: 7,
}

_REMOTE_NAMES = {
    1: "bool",
    2: "int",
    3: "uint",
    4: "float",
    5: "[]byte",
    6: "string",
    7: "complex",
}


class GobError(ValueError):
    """Raised when a value cannot be encoded or a message cannot be decoded."""


def _encode_uint(number: int) -> bytes:
    if number < 0 or number >= _UINT64_LIMIT:
        raise GobError(f"gob: unsigned integer {number} out of range")
    if number < 0x80:
        return bytes([number])
    body = number.to_bytes((number.bit_length() + 7) // 8, "big")
    return bytes([256 - len(body)]) + body


def _encode_int(number: int) -> bytes:
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise GobError(f"gob: integer {number} out of range")
    folded = ((~number) << 1) | 1 if number < 0 else number << 1
    return _encode_uint(folded)


def _encode_float(number: float) -> bytes:
    # The float's bits are sent byte-reversed so that small exponents compress.
    return _encode_uint(int.from_bytes(struct.pack("<d", number), "big"))


def _decode_float(bits: int) -> float:
    return struct.unpack("<d", bits.to_bytes(8, "big"))[0]


def _kind_of(value: Any) -> type:
    if isinstance(value, bool):
        return bool
    if isinstance(value, int):
        return int
    if isinstance(value, float):
        return float
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes
    if isinstance(value, str):
        return str
    if isinstance(value, complex):
        return complex
    raise GobError(f"gob: type not supported: {type(value).__name__}")


def _encode_body(kind: type, value: Any) -> bytes:
    if kind is bool:
        return _encode_uint(1 if value else 0)
    if kind is int:
        return _encode_int(value)
    if kind is float:
        return _encode_float(value)
    if kind is complex:
        return _encode_float(value.real) + _encode_float(value.imag)
    if kind is str:
        raw = value.encode("utf-8", errors="surrogateescape")
        return _encode_uint(len(raw)) + raw
    raw = bytes(value)
    return _encode_uint(len(raw)) + raw


def encode(value: Any) -> bytes:
    """Encode one bool, int, float, complex, bytes or str value as a gob message."""
    kind = _kind_of(value)
    payload = _encode_int(_TYPE_IDS[kind]) + b"\x00" + _encode_body(kind, value)
    return _encode_uint(len(payload)) + payload


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def take(self, count: int) -> bytes:
        if count > self.remaining:
            raise GobError("gob: unexpected EOF")
        chunk = self._data[self._pos : self._pos + count]
        self._pos += count
        return chunk

    def read_uint(self) -> int:
        first = self.take(1)[0]
        if first < 0x80:
            return first
        count = 256 - first
        if count > 8:
            raise GobError("gob: encoded unsigned integer out of range")
        return int.from_bytes(self.take(count), "big")

    def read_int(self) -> int:
        folded = self.read_uint()
        if folded & 1:
            return ~(folded >> 1)
        return folded >> 1


def _decode_body(kind: type, reader: _Reader) -> Any:
    if kind is bool:
        flag = reader.read_uint()
        if flag > 1:
            raise GobError(f"gob: invalid bool value {flag}")
        return flag == 1
    if kind is int:
        return reader.read_int()
    if kind is float:
        return _decode_float(reader.read_uint())
    if kind is complex:
        real = _decode_float(reader.read_uint())
        imag = _decode_float(reader.read_uint())
        return complex(real, imag)
    raw = reader.take(reader.read_uint())
    if kind is str:
        return raw.decode("utf-8", errors="surrogateescape")
    return bytes(raw)


def decode(data: bytes, kind: type) -> Any:
    """Decode one gob message holding a value of the given basic type."""
    if not isinstance(kind, type) or kind not in _TYPE_IDS:
        raise GobError(f"gob: type not supported: {getattr(kind, '__name__', kind)!r}")
    outer = _Reader(bytes(data))
    length = outer.read_uint()
    message = _Reader(outer.take(length))

    type_id = message.read_int()
    if type_id < 0:
        raise GobError("gob: type definitions are not supported")
    if type_id != _TYPE_IDS[kind]:
        remote = _REMOTE_NAMES.get(type_id, f"type id {type_id}")
        raise GobError(
            f"gob: decoding into local type {kind.__name__}, received remote type {remote}"
        )
    if message.read_uint() != 0:
        raise GobError("gob: corrupted data: non-zero delta for singleton")
    return _decode_body(kind, message)