"""Raw JSON column values."""

from __future__ import annotations

import json

_HTML_ESCAPES = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)
_JSON_WHITESPACE = b" \t\r\n"


def _reject_constant(name: str):
    raise ValueError(f"invalid JSON literal {name}")


def _loads(data: bytes):
    return json.loads(data.decode("utf-8", errors="replace"), parse_constant=_reject_constant)


class JSON(bytes):
    """Undecoded JSON text held as bytes."""

    def __str__(self) -> str:
        return self.decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        return f"JSON({bytes(self)!r})"

    def unmarshal(self):
        """Decode the held JSON into Python objects."""
        return _loads(self)

    @classmethod
    def marshal(cls, obj) -> "JSON":
        """Encode ``obj`` as compact JSON."""
        text = json.dumps(obj, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
        for char, escape in _HTML_ESCAPES:
            text = text.replace(char, escape)
        return cls(text.encode("utf-8"))

    @classmethod
    def unmarshal_json(cls, data) -> "JSON":
        """Take a copy of ``data`` as raw JSON."""
        return cls(bytes(data))

    def marshal_json(self) -> bytes:
        """Return the held JSON unchanged."""
        return bytes(self)

    def value(self) -> bytes:
        """Validate the held JSON and return it without surrounding whitespace."""
        _loads(self)
        return bytes(self).strip(_JSON_WHITESPACE)

    @classmethod
    def scan(cls, src) -> "JSON":
        """Build a value from a database string or bytes."""
        if isinstance(src, str):
            return cls(src.encode("utf-8"))
        if isinstance(src, (bytes, bytearray, memoryview)):
            return cls(bytes(src))
        raise TypeError("incompatible type for json")