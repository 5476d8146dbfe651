"""Arrays of arbitrary element types and dimensions in the server's array text format."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar

from boiltypes.arrayparse import parse_array, quote_array_element
from boiltypes.arrays import (
    BoolArray,
    BytesArray,
    Float64Array,
    Int64Array,
    StringArray,
    DecimalArray,
)
from boiltypes.textformat import encode

_TYPED_ARRAYS = (BoolArray, BytesArray, Float64Array, Int64Array, StringArray, DecimalArray)
_DRIVER_VALUES = (bool, int, float, str, bytes, datetime)


class ArrayDelimiter:
    """Mixin for element types whose array delimiter is not a comma.

    Subclasses set ``delimiter`` or override ``array_delimiter``.
    """

    delimiter: ClassVar[str] = ","

    def array_delimiter(self) -> str:
        """Return the delimiter placed between elements of this type."""
        return self.delimiter


def _format_dims(dims) -> str:
    return "".join(f"[{d}]" for d in dims)


def _is_valuer(item) -> bool:
    return callable(getattr(item, "value", None))


def _is_nested(item) -> bool:
    return isinstance(item, (list, tuple)) and not _is_valuer(item)


def _to_driver_value(item):
    """Reduce ``item`` to None, bool, int, float, str, bytes or datetime."""
    if _is_valuer(item):
        result = item.value()
        if isinstance(result, (bytearray, memoryview)):
            result = bytes(result)
        if result is not None and not isinstance(result, _DRIVER_VALUES):
            raise TypeError(
                f"non-Value type {type(result).__name__} returned from value"
            )
        return result
    if item is None or isinstance(item, _DRIVER_VALUES):
        return item
    if isinstance(item, (bytearray, memoryview)):
        return bytes(item)
    raise TypeError(f"unsupported type {type(item).__name__}")


def _append_array(buf: bytearray, items) -> str:
    """Append ``items`` in braces; return the delimiter its elements used."""
    buf += b"{"
    iterator = iter(items)
    delim = _append_element(buf, next(iterator))
    for item in iterator:
        buf += delim.encode("utf-8")
        delim = _append_element(buf, item)
    buf += b"}"
    return delim


def _append_element(buf: bytearray, item) -> str:
    """Append one element; return the delimiter to put before the next one."""
    if _is_nested(item):
        return _append_array(buf, item) if len(item) else ""

    delim = ","
    custom = getattr(item, "array_delimiter", None)
    if callable(custom):
        delim = custom()

    converted = _to_driver_value(item)
    if converted is None:
        buf += b"NULL"
    elif isinstance(converted, (bytes, str)):
        buf += quote_array_element(converted)
    else:
        buf += encode(converted)
    return delim


def _type_delimiter(element_type) -> str:
    try:
        zero = element_type()
    except (TypeError, ValueError):
        return getattr(element_type, "delimiter", ",")
    custom = getattr(zero, "array_delimiter", None)
    return custom() if callable(custom) else ","


@dataclass
class GenericArray:
    """An array of any element type.

    ``a`` holds the elements, nested lists or tuples for more dimensions.
    Scanning needs ``element_type``, a type with a ``scan`` classmethod;
    ``size`` makes the destination a fixed-length array.
    """

    a: Any = None
    element_type: type | None = None
    size: int | None = None

    def _destination_name(self) -> str:
        name = getattr(self.element_type, "__name__", repr(self.element_type))
        return f"list[{name}]" if self.size is None else f"{name}[{self.size}]"

    def scan(self, src):
        """Fill ``a`` from a one-dimensional database array and return it."""
        if self.element_type is None:
            raise TypeError("destination element type is not set")

        if src is None:
            if self.size is None:
                self.a = None
                return None
            raise TypeError(f"cannot convert NoneType to {self._destination_name()}")
        if isinstance(src, (bytearray, memoryview)):
            src = bytes(src)
        if not isinstance(src, (bytes, str)):
            raise TypeError(
                f"cannot convert {type(src).__name__} to {self._destination_name()}"
            )

        dims, elems = parse_array(src, _type_delimiter(self.element_type))
        if len(dims) > 1:
            raise ValueError(
                f"scanning from multidimensional ARRAY{_format_dims(dims)} "
                "is not implemented"
            )
        length = dims[0] if dims else 0
        if self.size is not None and self.size != length:
            raise ValueError(
                f"cannot convert ARRAY[{length}] to {self._destination_name()}"
            )

        scanner = getattr(self.element_type, "scan", None)
        if elems and not callable(scanner):
            raise TypeError(
                "parsing array element index 0: scanning to "
                f"{self.element_type.__name__} is not implemented; only Scanner"
            )

        values = []
        for index, raw in enumerate(elems):
            try:
                values.append(scanner(raw))
            except (TypeError, ValueError) as exc:
                raise ValueError(f"parsing array element index {index}: {exc}") from exc

        self.a = values
        return values

    def value(self) -> str | None:
        """Render ``a`` for the database; None stays NULL."""
        if self.a is None:
            return None
        if not isinstance(self.a, (list, tuple)):
            raise TypeError(f"unable to convert {type(self.a).__name__} to array")
        if not self.a:
            return "{}"
        buf = bytearray()
        _append_array(buf, self.a)
        return buf.decode("utf-8", errors="surrogateescape")


def _all_of(items, kind, exclude=()) -> bool:
    return all(isinstance(x, kind) and not isinstance(x, exclude) for x in items)


def array(a):
    """Choose the best array type for ``a``.

    Typed arrays are returned unchanged; non-empty lists of only booleans,
    integers, floats or strings become the matching typed array; anything
    else is wrapped in a GenericArray.
    """
    if isinstance(a, _TYPED_ARRAYS):
        return a
    if isinstance(a, list) and a:
        if _all_of(a, bool):
            return BoolArray(a)
        if _all_of(a, int, bool):
            return Int64Array(a)
        if _all_of(a, float):
            return Float64Array(a)
        if _all_of(a, str):
            return StringArray(a)
    return GenericArray(a)