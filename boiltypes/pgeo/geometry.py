"""Geometric column types: points, lines, segments, boxes, paths, polygons, circles."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import NamedTuple

_NUM = r"-?[0-9]+(?:\.[0-9]+)?"
_POINT = re.compile(rf"\(({_NUM}),({_NUM})\)")
_POINT_ANY = re.compile(rf"\((?:{_NUM}),(?:{_NUM})\)")
_LINE = re.compile(rf"\{{({_NUM}),({_NUM}),({_NUM})\}}")
_FLOAT = re.compile(
    r"[+-]?(?:(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)
_SHORTEST_EXPONENT_LIMIT = 6


def _format_float(value: float) -> str:
    """Shortest general form of ``value``, switching to an exponent outside 1e-4..1e6."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"

    sign, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    digits = list(digit_tuple)
    while len(digits) > 1 and digits[-1] == 0:
        digits.pop()
        exponent += 1
    text = "".join(str(d) for d in digits)
    count = len(text)
    point = count + exponent
    prefix = "-" if sign else ""

    power = point - 1
    if power < -4 or power >= _SHORTEST_EXPONENT_LIMIT:
        mantissa = text[0] + ("." + text[1:] if count > 1 else "")
        exp_sign = "-" if power < 0 else "+"
        return f"{prefix}{mantissa}e{exp_sign}{abs(power):02d}"
    if point <= 0:
        return f"{prefix}0.{'0' * -point}{text}"
    if point >= count:
        return f"{prefix}{text}{'0' * (point - count)}"
    return f"{prefix}{text[:point]}.{text[point:]}"


def _to_text(src) -> str:
    if isinstance(src, str):
        return src
    if isinstance(src, (bytes, bytearray, memoryview)):
        return bytes(src).decode("utf-8", errors="replace")
    raise TypeError(f"incompatible type {type(src).__name__}")


def _parse_float(text: str) -> float:
    if not _FLOAT.fullmatch(text):
        raise ValueError(f"invalid syntax for number: {text!r}")
    return float(text)


def _rand_num(next_int) -> float:
    return float(next_int())


@dataclass(frozen=True)
class Point:
    """A two-dimensional point."""

    x: float = 0.0
    y: float = 0.0

    def value(self) -> str:
        """Render as ``(x,y)``."""
        return format_point(self)

    @classmethod
    def scan(cls, src) -> "Point":
        """Parse a database value; NULL gives the origin."""
        if src is None:
            return cls(0.0, 0.0)
        return parse_point(_to_text(src))

    @classmethod
    def randomize(cls, next_int) -> "Point":
        """A point whose coordinates come from ``next_int``."""
        return cls(_rand_num(next_int), _rand_num(next_int))


def _rand_points(next_int, n: int) -> list[Point]:
    return [Point.randomize(next_int) for _ in range(max(n, 0))]


def format_point(point: Point) -> str:
    """Render a point as ``(x,y)``."""
    return f"({_format_float(point.x)},{_format_float(point.y)})"


def format_points(points) -> str:
    """Render points separated by commas."""
    return ",".join(format_point(p) for p in points)


def parse_point(s: str) -> Point:
    """Parse exactly one ``(x,y)``."""
    match = _POINT.fullmatch(s)
    if match is None:
        raise ValueError("wrong point")
    return Point(float(match.group(1)), float(match.group(2)))


def parse_points(s: str) -> list[Point]:
    """Find every ``(x,y)`` in ``s``, in order."""
    return [parse_point(found) for found in _POINT_ANY.findall(s)]


@dataclass(frozen=True)
class Line:
    """The infinite line Ax + By + C = 0."""

    a: float = 0.0
    b: float = 0.0
    c: float = 0.0

    def value(self) -> str:
        """Render as ``{A,B,C}``."""
        return f"{{{_format_float(self.a)},{_format_float(self.b)},{_format_float(self.c)}}}"

    @classmethod
    def scan(cls, src) -> "Line":
        """Parse a database value; NULL gives the all-zero line."""
        if src is None:
            return cls(0.0, 0.0, 0.0)
        match = _LINE.fullmatch(_to_text(src))
        if match is None:
            raise ValueError("wrong line")
        return cls(*(float(g) for g in match.groups()))

    @classmethod
    def randomize(cls, next_int) -> "Line":
        """A line with A and B from ``next_int`` and C zero."""
        return cls(_rand_num(next_int), _rand_num(next_int), 0.0)


class Lseg(NamedTuple):
    """A line segment between two end points."""

    start: Point = Point()
    end: Point = Point()

    def value(self) -> str:
        """Render as ``[(x1,y1),(x2,y2)]``."""
        return f"[{format_points(self)}]"

    @classmethod
    def scan(cls, src) -> "Lseg":
        """Parse a database value; NULL gives a segment at the origin."""
        if src is None:
            return cls(Point(), Point())
        points = parse_points(_to_text(src))
        if len(points) != 2:
            raise ValueError("wrong lseg")
        return cls(points[0], points[1])

    @classmethod
    def randomize(cls, next_int) -> "Lseg":
        """A segment with end points from ``next_int``."""
        return cls(Point.randomize(next_int), Point.randomize(next_int))


class Box(NamedTuple):
    """A box given by two opposite corners."""

    corner: Point = Point()
    opposite: Point = Point()

    def value(self) -> str:
        """Render as ``((x1,y1),(x2,y2))``."""
        return f"({format_points(self)})"

    @classmethod
    def scan(cls, src) -> "Box":
        """Parse a database value; NULL gives a box at the origin."""
        if src is None:
            return cls(Point(), Point())
        points = parse_points(_to_text(src))
        if len(points) != 2:
            raise ValueError("wrong box")
        return cls(points[0], points[1])

    @classmethod
    def randomize(cls, next_int) -> "Box":
        """A box with corners from ``next_int``."""
        return cls(Point.randomize(next_int), Point.randomize(next_int))


@dataclass
class Path:
    """Connected points; closed paths join the last point to the first."""

    points: list[Point] = field(default_factory=list)
    closed: bool = False

    def value(self) -> str:
        """Render closed paths in parentheses and open paths in brackets."""
        body = format_points(self.points)
        return f"({body})" if self.closed else f"[{body}]"

    @classmethod
    def scan(cls, src) -> "Path":
        """Parse a database value; NULL gives an empty open path."""
        if src is None:
            return cls()
        text = _to_text(src)
        points = parse_points(text)
        if len(points) < 2:
            raise ValueError("wrong path")
        return cls(points, text.startswith("(("))

    @classmethod
    def randomize(cls, next_int) -> "Path":
        """Three points from ``next_int``, closed when the next draw is below 40."""
        points = _rand_points(next_int, 3)
        return cls(points, _rand_num(next_int) < 40)


class Polygon(list):
    """The vertices of a polygon."""

    def value(self) -> str:
        """Render as ``((x1,y1),...)``."""
        return f"({format_points(self)})"

    @classmethod
    def scan(cls, src) -> "Polygon":
        """Parse a database value; NULL gives an empty polygon."""
        if src is None:
            return cls()
        points = parse_points(_to_text(src))
        if len(points) <= 2:
            raise ValueError("wrong polygon")
        return cls(points)

    @classmethod
    def randomize(cls, next_int) -> "Polygon":
        """A triangle with vertices from ``next_int``."""
        return cls(_rand_points(next_int, 3))


@dataclass(frozen=True)
class Circle:
    """A circle given by its centre and radius."""

    center: Point = Point()
    radius: float = 0.0

    def value(self) -> str:
        """Render as ``<(x,y),r>``."""
        return f"<{format_point(self.center)},{_format_float(self.radius)}>"

    @classmethod
    def scan(cls, src) -> "Circle":
        """Parse a database value; NULL gives a zero circle at the origin."""
        if src is None:
            return cls(Point(), 0.0)
        text = _to_text(src)
        points = parse_points(text)
        pieces = text.split("),")
        if len(points) != 1 or len(pieces) != 2:
            raise ValueError("wrong circle")
        return cls(points[0], _parse_float(pieces[1].strip(">")))

    @classmethod
    def randomize(cls, next_int) -> "Circle":
        """A circle with centre and radius from ``next_int``."""
        return cls(Point.randomize(next_int), _rand_num(next_int))