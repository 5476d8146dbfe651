"""A single byte column value."""

from __future__ import annotations

import json


def _truncated_mod(value: int, modulus: int) -> int:
    remainder = abs(value) % modulus
    return -remainder if value < 0 else remainder


class Byte(int):
    """An integer in range(256) that reads and writes as one character."""

    def __new__(cls, value=0):
        obj = super().__new__(cls, value)
        if not 0 <= obj <= 255:
            raise ValueError(f"byte value out of range: {int(obj)}")
        return obj

    def __str__(self) -> str:
        return chr(self)

    def __repr__(self) -> str:
        return f"Byte({int(self)!r})"

    @classmethod
    def unmarshal_json(cls, data) -> "Byte":
        """Decode a one-character JSON string."""
        text = json.loads(data)
        if not isinstance(text, str):
            raise TypeError(f"json: cannot unmarshal {type(text).__name__} into byte")
        raw = text.encode("utf-8")
        if len(raw) > 1:
            raise ValueError("json: cannot convert to byte, text len is greater than one")
        if not raw:
            raise ValueError("json: cannot convert to byte, text is empty")
        return cls(raw[0])

    def marshal_json(self) -> bytes:
        """Encode as a one-character JSON string."""
        return bytes((0x22, self, 0x22))

    def value(self) -> bytes:
        """Return the byte for the database."""
        return bytes((self,))

    @classmethod
    def scan(cls, src) -> "Byte":
        """Take the first byte of a database value."""
        if isinstance(src, bool):
            raise TypeError("incompatible type for byte")
        if isinstance(src, int):
            return cls(src)
        if isinstance(src, str):
            src = src.encode("utf-8")
        if isinstance(src, (bytes, bytearray, memoryview)):
            data = bytes(src)
            if not data:
                raise ValueError("cannot scan an empty value into byte")
            return cls(data[0])
        raise TypeError("incompatible type for byte")

    @classmethod
    def randomize(cls, next_int, field_type, should_be_null) -> "Byte":
        """Produce a printable ASCII byte from ``next_int``."""
        return cls(_truncated_mod(next_int(), 60) + 65)