"""One-dimensional typed arrays in the server's array text format."""

from __future__ import annotations

import json
import re
from decimal import Decimal
from typing import Callable, Iterable

from boiltypes.arrayparse import quote_array_element, scan_linear_array
from boiltypes.decimals import random_decimal, scan_decimal
from boiltypes.textformat import encode, parse_bytea

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_INTEGER = re.compile(r"[+-]?[0-9]+")
_FLOAT = re.compile(
    r"[+-]?(?:(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def _text(raw: bytes | None) -> str:
    return "" if raw is None else raw.decode("utf-8", errors="replace")


def _quoted(raw: bytes | None) -> str:
    return json.dumps(_text(raw), ensure_ascii=False)


def _scan(cls, src, parse_element: Callable[[int, bytes | None], object]):
    """Build an instance of ``cls`` from a database value; NULL gives None."""
    if src is None:
        return None
    if isinstance(src, (bytes, bytearray, memoryview)):
        src = bytes(src)
    elif not isinstance(src, str):
        raise TypeError(f"cannot convert {type(src).__name__} to {cls.__name__}")
    elems = scan_linear_array(src, b",", cls.__name__)
    return cls(parse_element(i, raw) for i, raw in enumerate(elems))


def _render(items: Iterable, format_element: Callable[[object], str]) -> str:
    return "{" + ",".join(format_element(item) for item in items) + "}"


def _parse_bool(index: int, raw: bytes | None) -> bool:
    first = raw[:1] if raw else b""
    if first in (b"t", b"T"):
        return True
    if first in (b"f", b"F"):
        return False
    raise ValueError(
        f"could not parse boolean array index {index}: invalid boolean {_quoted(raw)}"
    )


def _parse_bytes(index: int, raw: bytes | None) -> bytes | None:
    if raw is None:
        return None
    try:
        return parse_bytea(raw)
    except ValueError as exc:
        raise ValueError(f"could not parse bytea array index {index}: {exc}") from exc


def _format_bytes(item) -> str:
    data = b"" if item is None else bytes(item)
    return '"\\\\x' + data.hex() + '"'


def _parse_float(index: int, raw: bytes | None) -> float:
    text = _text(raw)
    if raw is None or not _FLOAT.fullmatch(text):
        raise ValueError(
            f"parsing array element index {index}: invalid syntax {_quoted(raw)}"
        )
    return float(text)


def _parse_int(index: int, raw: bytes | None) -> int:
    text = _text(raw)
    if raw is None or not _INTEGER.fullmatch(text):
        raise ValueError(
            f"parsing array element index {index}: invalid syntax {_quoted(raw)}"
        )
    number = int(text)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ValueError(
            f"parsing array element index {index}: value out of range {_quoted(raw)}"
        )
    return number


def _parse_string(index: int, raw: bytes | None) -> str:
    if raw is None:
        raise ValueError(
            f"parsing array element index {index}: cannot convert nil to string"
        )
    return _text(raw)


def _parse_decimal(index: int, raw: bytes | None) -> Decimal:
    try:
        if raw is None:
            raise ValueError("null element")
        return scan_decimal(_text(raw))
    except ValueError as exc:
        raise ValueError(
            f"parsing decimal element index as decimal {index}: {_text(raw)}"
        ) from exc


class BoolArray(list):
    """An array of booleans."""

    @classmethod
    def scan(cls, src):
        """Build an array from a database value; NULL gives None."""
        return _scan(cls, src, _parse_bool)

    def value(self) -> str:
        """Render the array for the database."""
        return _render(self, lambda item: "t" if item else "f")

    @classmethod
    def randomize(cls, next_int, field_type, should_be_null) -> "BoolArray":
        """Three booleans drawn from ``next_int``."""
        return cls(next_int() % 2 == 0 for _ in range(3))


class BytesArray(list):
    """An array of bytea values; NULL elements are None."""

    @classmethod
    def scan(cls, src):
        """Build an array from a database value; NULL gives None."""
        return _scan(cls, src, _parse_bytes)

    def value(self) -> str:
        """Render the array for the database, in the hex bytea format."""
        return _render(self, _format_bytes)


class Float64Array(list):
    """An array of double precision numbers."""

    @classmethod
    def scan(cls, src):
        """Build an array from a database value; NULL gives None."""
        return _scan(cls, src, _parse_float)

    def value(self) -> str:
        """Render the array for the database."""
        return _render(self, lambda item: encode(float(item)).decode())

    @classmethod
    def randomize(cls, next_int, field_type, should_be_null) -> "Float64Array":
        """Two numbers drawn from ``next_int``."""
        return cls(float(next_int()) for _ in range(2))


class Int64Array(list):
    """An array of 64-bit integers."""

    @classmethod
    def scan(cls, src):
        """Build an array from a database value; NULL gives None."""
        return _scan(cls, src, _parse_int)

    def value(self) -> str:
        """Render the array for the database."""
        return _render(self, lambda item: str(int(item)))

    @classmethod
    def randomize(cls, next_int, field_type, should_be_null) -> "Int64Array":
        """Two integers drawn from ``next_int``."""
        return cls(int(next_int()) for _ in range(2))


class StringArray(list):
    """An array of strings; NULL elements are refused."""

    @classmethod
    def scan(cls, src):
        """Build an array from a database value; NULL gives None."""
        return _scan(cls, src, _parse_string)

    def value(self) -> str:
        """Render the array for the database with every element quoted."""
        return _render(
            self,
            lambda item: quote_array_element(item).decode("utf-8", errors="replace"),
        )


class DecimalArray(list):
    """An array of decimals."""

    @classmethod
    def scan(cls, src):
        """Build an array from a database value; NULL gives None."""
        return _scan(cls, src, _parse_decimal)

    def value(self) -> str:
        """Render the array for the database."""
        return _render(self, lambda item: str(Decimal(item)))

    @classmethod
    def randomize(cls, next_int, field_type, should_be_null) -> "DecimalArray":
        """Two small decimals drawn from ``next_int``."""
        first = random_decimal(next_int)
        second = random_decimal(next_int)
        return cls([first, second])