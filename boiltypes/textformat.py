"""Text encodings used on the wire: bytea, scalar parameters and timestamps."""

from __future__ import annotations

import binascii
import functools
import math
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from decimal import Decimal

_INTEGER = re.compile(r"[+-]?[0-9]+")
_OCTAL = re.compile(r"[+-]?[0-7]+")
_FRACTION_END = re.compile(r"[-+ ]")

_HEX_BYTEA_MIN_SERVER_VERSION = 90000


@dataclass
class _InfinityTimestamps:
    enabled: bool = False
    negative: datetime | None = None
    positive: datetime | None = None


_INFINITY = _InfinityTimestamps()


def _format_float(value: float) -> str:
    """Shortest decimal form of ``value`` without an exponent."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def encode(x, server_version=0, as_bytea=False) -> bytes:
    """Encode a scalar parameter into its text representation."""
    if isinstance(x, bool):
        return b"true" if x else b"false"
    if isinstance(x, int):
        return str(x).encode()
    if isinstance(x, float):
        return _format_float(x).encode()
    if isinstance(x, (bytes, bytearray, memoryview)):
        data = bytes(x)
        return encode_bytea(server_version, data) if as_bytea else data
    if isinstance(x, str):
        data = x.encode("utf-8")
        return encode_bytea(server_version, data) if as_bytea else data
    if isinstance(x, datetime):
        return format_ts(x)
    raise TypeError(f"encode: unknown type for {type(x).__name__}")


def parse_bytea(s) -> bytes:
    """Decode a bytea value in either the hex or the legacy escape format."""
    s = bytes(s)
    if s.startswith(b"\\x"):
        try:
            return binascii.unhexlify(s[2:])
        except binascii.Error as exc:
            raise ValueError(f"invalid hex bytea value: {exc}") from exc

    out = bytearray()
    i = 0
    while i < len(s):
        if s[i] != 0x5C:
            j = s.find(b"\\", i)
            if j == -1:
                out += s[i:]
                break
            out += s[i:j]
            i = j
            continue
        if s[i + 1:i + 2] == b"\\":
            out.append(0x5C)
            i += 2
            continue
        if len(s) - i < 4:
            raise ValueError(f"invalid bytea sequence {s[i:]!r}")
        digits = s[i + 1:i + 4].decode("latin-1")
        if not _OCTAL.fullmatch(digits):
            raise ValueError(f"could not parse bytea value: invalid octal {digits!r}")
        number = int(digits, 8)
        if not -256 <= number <= 255:
            raise ValueError(f"could not parse bytea value: {digits!r} out of range")
        out.append(number & 0xFF)
        i += 4
    return bytes(out)


def encode_bytea(server_version, v) -> bytes:
    """Encode bytes as bytea: hex on servers 9.0 and newer, escape otherwise."""
    v = bytes(v)
    if server_version >= _HEX_BYTEA_MIN_SERVER_VERSION:
        return b"\\x" + binascii.hexlify(v)
    parts = []
    for b in v:
        if b == 0x5C:
            parts.append(b"\\\\")
        elif b < 0x20 or b > 0x7E:
            parts.append(b"\\%03o" % b)
        else:
            parts.append(bytes((b,)))
    return b"".join(parts)


def enable_infinity_ts(negative, positive) -> None:
    """Map "-infinity" and "infinity" timestamps to the given bounds."""
    if _INFINITY.enabled:
        raise RuntimeError("infinity timestamp enabled already")
    if not negative < positive:
        raise ValueError(
            "infinity timestamp: negative value must be smaller (before) than positive"
        )
    _INFINITY.enabled = True
    _INFINITY.negative = negative
    _INFINITY.positive = positive


def disable_infinity_ts() -> None:
    """Turn the infinity timestamp mapping off again."""
    _INFINITY.enabled = False
    _INFINITY.negative = None
    _INFINITY.positive = None


def parse_ts(current_location, s):
    """Parse a timestamp, honouring the infinity mapping when it is enabled."""
    if s == "-infinity":
        return _INFINITY.negative if _INFINITY.enabled else s.encode()
    if s == "infinity":
        return _INFINITY.positive if _INFINITY.enabled else s.encode()
    return parse_timestamp(current_location, s)


class _TimestampParser:
    """Field reader that remembers the first failure and keeps going."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.error: str | None = None

    def _fail(self, message: str) -> None:
        if self.error is None:
            self.error = message

    def expect(self, char: str, pos: int) -> None:
        if self.error is not None:
            return
        if pos < 0 or pos + 1 > len(self.text):
            self._fail("invalid timestamp")
            return
        found = self.text[pos]
        if found != char:
            self._fail(f"expected '{char}' at position {pos}; got '{found}'")

    def atoi(self, begin: int, end: int) -> int:
        if self.error is not None:
            return 0
        if begin < 0 or end < 0 or begin > end or end > len(self.text):
            self._fail("invalid timestamp")
            return 0
        field = self.text[begin:end]
        if not _INTEGER.fullmatch(field):
            self._fail(f"expected number; got '{self.text}'")
            return 0
        return int(field)


@functools.lru_cache(maxsize=None)
def _fixed_zone(offset: int) -> timezone:
    return timezone(timedelta(seconds=offset))


def parse_timestamp(current_location, s) -> datetime:
    """Parse the server's ISO text format into an aware datetime.

    The result is expressed in ``current_location`` when that zone agrees
    with the offset sent by the server; otherwise it keeps the fixed offset.
    """
    p = _TimestampParser(s)

    mon_sep = s.find("-")
    year = p.atoi(0, mon_sep)
    day_sep = mon_sep + 3
    month = p.atoi(mon_sep + 1, day_sep)
    p.expect("-", day_sep)
    time_sep = day_sep + 3
    day = p.atoi(day_sep + 1, time_sep)

    hour = minute = second = 0
    if len(s) > mon_sep + len("01-01") + 1:
        p.expect(" ", time_sep)
        min_sep = time_sep + 3
        p.expect(":", min_sep)
        hour = p.atoi(time_sep + 1, min_sep)
        sec_sep = min_sep + 3
        p.expect(":", sec_sep)
        minute = p.atoi(min_sep + 1, sec_sep)
        second = p.atoi(sec_sep + 1, sec_sep + 3)

    idx = mon_sep + len("01-01 00:00:00") + 1
    nanos = 0
    tz_off = 0

    if idx < len(s) and s[idx] == ".":
        frac_start = idx + 1
        match = _FRACTION_END.search(s, frac_start)
        frac_len = (match.start() - frac_start) if match else len(s) - frac_start
        fraction = p.atoi(frac_start, frac_start + frac_len)
        nanos = fraction * (1_000_000_000 // 10**frac_len)
        idx += frac_len + 1

    if 0 <= idx < len(s) and s[idx] in "-+":
        sign = -1 if s[idx] == "-" else 1
        tz_hours = p.atoi(idx + 1, idx + 3)
        idx += 3
        tz_min = tz_sec = 0
        if idx < len(s) and s[idx] == ":":
            tz_min = p.atoi(idx + 1, idx + 3)
            idx += 3
        if idx < len(s) and s[idx] == ":":
            tz_sec = p.atoi(idx + 1, idx + 3)
            idx += 3
        tz_off = sign * (tz_hours * 3600 + tz_min * 60 + tz_sec)

    if s[idx:idx + 3] == " BC":
        iso_year = 1 - year
        idx += 3
    else:
        iso_year = year

    if idx < len(s):
        raise ValueError(f"expected end of input, got {s[idx:]}")
    if p.error is not None:
        raise ValueError(p.error)

    result = datetime(
        iso_year, month, day, hour, minute, second, nanos // 1000,
        tzinfo=_fixed_zone(tz_off),
    )

    if current_location is not None:
        local = result.astimezone(current_location)
        if local.utcoffset() == timedelta(seconds=tz_off):
            result = local
    return result


def format_ts(t) -> bytes:
    """Format ``t``, mapping values beyond the infinity bounds when enabled."""
    if _INFINITY.enabled:
        if not t > _INFINITY.negative:
            return b"-infinity"
        if not t < _INFINITY.positive:
            return b"infinity"
    return format_timestamp(t)


def format_timestamp(t: datetime) -> bytes:
    """Format ``t`` in the server's text format; naive values count as UTC."""
    text = (
        f"{t.year:04d}-{t.month:02d}-{t.day:02d} "
        f"{t.hour:02d}:{t.minute:02d}:{t.second:02d}"
    )
    if t.microsecond:
        text += f".{t.microsecond:06d}".rstrip("0")

    offset = t.utcoffset()
    seconds = 0 if offset is None else int(offset.total_seconds())
    if seconds == 0:
        text += "Z"
    else:
        minutes = abs(seconds) // 60
        sign = "-" if seconds <= -60 else "+"
        text += f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"
        leftover = abs(seconds) % 60
        if leftover:
            text += f":{leftover:02d}"
    return text.encode()