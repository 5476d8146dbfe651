"""Parsing and quoting of the server's array text format."""

from __future__ import annotations

_OPEN = 0x7B  # {
_CLOSE = 0x7D  # }
_QUOTE = 0x22  # "
_BACKSLASH = 0x5C  # \
_NULL = b"NULL"


def _as_bytes(value) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def _quote_char(c: int) -> str:
    if c == 0x27:
        return "'\\''"
    if c == _BACKSLASH:
        return "'\\\\'"
    if 0x20 <= c < 0x7F:
        return f"'{chr(c)}'"
    return f"'\\x{c:02x}'"


def _unexpected(src: bytes, i: int) -> ValueError:
    return ValueError(
        f"unable to parse array; unexpected {_quote_char(src[i])} at offset {i}"
    )


def _format_dims(dims) -> str:
    return "".join(f"[{d}]" for d in dims)


def parse_array(src, delimiter) -> tuple[list[int], list[bytes | None]]:
    """Split array text into its dimensions and its elements.

    Only the representations the server emits are accepted: whitespace is
    significant and NULL is case-sensitive. A NULL element comes back as None.
    """
    src = _as_bytes(src)
    delim = _as_bytes(delimiter)
    n = len(src)

    if n < 1 or src[0] != _OPEN:
        raise ValueError("unable to parse array; expected '{' at offset 0")

    depth = 0
    i = 0
    dims: list[int] = []
    elems: list[bytes | None] = []
    empty = False

    while i < n:
        c = src[i]
        if c == _OPEN:
            depth += 1
            i += 1
        elif c == _CLOSE:
            empty = True
            break
        else:
            break

    if not empty:
        dims = [0] * i
        while True:
            while i < n:
                c = src[i]
                if c == _OPEN:
                    if depth == len(dims):
                        break
                    depth += 1
                    dims[depth - 1] = 0
                    i += 1
                elif c == _QUOTE:
                    elem = bytearray()
                    escape = False
                    closed = False
                    i += 1
                    while i < n:
                        b = src[i]
                        if escape:
                            elem.append(b)
                            escape = False
                        elif b == _BACKSLASH:
                            escape = True
                        elif b == _QUOTE:
                            elems.append(bytes(elem))
                            i += 1
                            closed = True
                            break
                        else:
                            elem.append(b)
                        i += 1
                    if closed:
                        break
                else:
                    start = i
                    found = False
                    while i < n:
                        if src.startswith(delim, i) or src[i] == _CLOSE:
                            elem = src[start:i]
                            if not elem:
                                raise _unexpected(src, i)
                            elems.append(None if elem == _NULL else elem)
                            found = True
                            break
                        i += 1
                    if found:
                        break

            restart = False
            while i < n:
                if src.startswith(delim, i) and depth > 0:
                    dims[depth - 1] += 1
                    i += len(delim)
                    restart = True
                    break
                if src[i] == _CLOSE and depth > 0:
                    dims[depth - 1] += 1
                    depth -= 1
                    i += 1
                else:
                    raise _unexpected(src, i)
            if not restart:
                break

    while i < n:
        if src[i] == _CLOSE and depth > 0:
            depth -= 1
            i += 1
        else:
            raise _unexpected(src, i)

    if depth > 0:
        raise ValueError(f"unable to parse array; expected '}}' at offset {i}")
    for d in dims:
        if d == 0 or len(elems) % d:
            raise ValueError(
                "multidimensional arrays must have elements with matching dimensions"
            )
    return dims, elems


def scan_linear_array(src, delimiter, type_name) -> list[bytes | None]:
    """Parse a one-dimensional array, rejecting anything with more dimensions."""
    dims, elems = parse_array(src, delimiter)
    if len(dims) > 1:
        raise ValueError(f"cannot convert ARRAY{_format_dims(dims)} to {type_name}")
    return elems


def quote_array_element(v) -> bytes:
    """Double-quote an element, escaping quotes and backslashes."""
    data = _as_bytes(v)
    escaped = data.replace(b"\\", b"\\\\").replace(b'"', b'\\"')
    return b'"' + escaped + b'"'