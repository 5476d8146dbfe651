"""Key/value maps stored in hstore columns."""

from __future__ import annotations

_BACKSLASH = 0x5C
_QUOTE = 0x22
_SKIPPED = frozenset(b" \t\n\r=")
_ARROW_END = 0x3E  # >
_COMMA = 0x2C


def hquote(s) -> str:
    """Quote and escape a key or value; None becomes NULL."""
    if s is None:
        return "NULL"
    if not isinstance(s, str):
        raise TypeError("not a string or None")
    escaped = s.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _decode(data: bytearray) -> str:
    return bytes(data).decode("utf-8", errors="replace")


class HStore(dict):
    """A mapping of strings to strings or None."""

    @classmethod
    def scan(cls, src) -> "HStore | None":
        """Parse an hstore value; a NULL column gives None."""
        if src is None:
            return None
        if isinstance(src, str):
            data = src.encode("utf-8")
        elif isinstance(src, (bytes, bytearray, memoryview)):
            data = bytes(src)
        else:
            raise TypeError(f"cannot scan {type(src).__name__} into hstore")

        result = cls()
        pair = [bytearray(), bytearray()]
        pi = 0
        in_quote = did_quote = saw_slash = False

        def store() -> None:
            raw = bytes(pair[1])
            if not did_quote and raw.lower() == b"null":
                result[_decode(pair[0])] = None
            else:
                result[_decode(pair[0])] = _decode(pair[1])

        for b in data:
            if saw_slash:
                pair[pi].append(b)
                saw_slash = False
                continue
            if b == _BACKSLASH:
                saw_slash = True
                continue
            if b == _QUOTE:
                in_quote = not in_quote
                did_quote = True
                continue
            if not in_quote:
                if b in _SKIPPED:
                    continue
                if b == _ARROW_END:
                    pi = 1
                    did_quote = False
                    continue
                if b == _COMMA:
                    store()
                    pair = [bytearray(), bytearray()]
                    pi = 0
                    continue
            pair[pi].append(b)

        if len(data) > 1:
            store()
        return result

    def value(self) -> bytes:
        """Render the map in hstore text format."""
        parts = (f"{hquote(key)}=>{hquote(val)}" for key, val in self.items())
        return ",".join(parts).encode("utf-8")