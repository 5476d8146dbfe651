"""Conversions between Python decimals and DECIMAL column values."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

_SYNTAX = re.compile(
    r"[+-]?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def _truncated_mod(value: int, modulus: int) -> int:
    remainder = abs(value) % modulus
    return -remainder if value < 0 else remainder


def _parse(text: str) -> Decimal:
    if not _SYNTAX.fullmatch(text):
        raise ValueError(f"invalid decimal syntax: {text!r}")
    try:
        return Decimal(text)
    except InvalidOperation as exc:
        raise ValueError(f"invalid decimal syntax: {text!r}") from exc


def decimal_value(d, nullable=False) -> str | None:
    """Render ``d`` for the database.

    None becomes NULL when ``nullable`` and "0" otherwise; NaN and infinity
    are refused.
    """
    if d is None:
        return None if nullable else "0"
    if d.is_nan():
        raise ValueError("refusing to allow NaN into database")
    if d.is_infinite():
        raise ValueError("refusing to allow infinity into database")
    return str(d)


def scan_decimal(src, nullable=False) -> Decimal | None:
    """Build a decimal from a database value."""
    if src is None:
        if not nullable:
            raise ValueError("null cannot be scanned into decimal")
        return None
    if isinstance(src, bool):
        raise TypeError(f"cannot scan decimal value: {src!r}")
    if isinstance(src, float):
        return Decimal(repr(src))
    if isinstance(src, int):
        return Decimal(src)
    if isinstance(src, str):
        return _parse(src)
    if isinstance(src, (bytes, bytearray, memoryview)):
        return _parse(bytes(src).decode("utf-8", errors="replace"))
    raise TypeError(f"cannot scan decimal value: {src!r}")


def decimal_from_json(data) -> Decimal | None:
    """Decode a JSON number or quoted number; JSON null gives None."""
    text = data.decode("utf-8", errors="replace") if isinstance(
        data, (bytes, bytearray, memoryview)
    ) else str(data)
    text = text.strip()
    if text == "null":
        return None
    if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
        text = text[1:-1]
    return _parse(text)


def random_decimal(next_int, should_be_null=False) -> Decimal | None:
    """Produce a small decimal such as 3.7 from two draws of ``next_int``."""
    if should_be_null:
        return None
    whole = _truncated_mod(next_int(), 10)
    fraction = _truncated_mod(next_int(), 10)
    try:
        return _parse(f"{whole}.{fraction}")
    except ValueError as exc:
        raise ValueError("randVal could not be turned into a decimal") from exc