# boiltypes

Value types that convert between Python objects and the text formats PostgreSQL uses on the wire. Most types offer `scan`, a classmethod that builds a value from what the database returned, and `value`, which gives what should be sent back. Invalid input raises `ValueError` or `TypeError`.

## What is included

- `boiltypes.arrays`: one-dimensional arrays as `list` subclasses: `BoolArray`, `BytesArray`, `Float64Array`, `Int64Array`, `StringArray` and `DecimalArray`. Scanning NULL gives `None`.
- `boiltypes.generic`: `GenericArray` for arrays of any element type or nesting (scanning is one-dimensional and needs an `element_type` with a `scan` classmethod), the `ArrayDelimiter` mixin for element types with a delimiter other than a comma, and `array()`, which picks the best array type for a value.
- `boiltypes.arrayparse`: the array literal parser (`parse_array`, `scan_linear_array`) and element quoting (`quote_array_element`).
- `boiltypes.hstore`: `HStore`, a `dict` of string keys to strings or `None`, and `hquote`.
- `boiltypes.jsontype`: `JSON`, raw JSON text held as `bytes`, with `marshal`, `unmarshal`, `unmarshal_json`, `marshal_json`, `value` and `scan`.
- `boiltypes.bytetype`: `Byte`, an `int` in `range(256)` stored and serialised as one character.
- `boiltypes.decimals`: `decimal.Decimal` helpers that refuse NaN and infinity on the way out: `decimal_value`, `scan_decimal`, `decimal_from_json`, `random_decimal`.
- `boiltypes.textformat`: bytea encoding and decoding (`encode_bytea`, `parse_bytea`), scalar parameter encoding (`encode`), timestamp parsing and formatting (`parse_timestamp`, `parse_ts`, `format_timestamp`, `format_ts`) and optional mapping of `infinity` timestamps (`enable_infinity_ts`, `disable_infinity_ts`).
- `boiltypes.pgeo.geometry`: the geometric types `Point`, `Line`, `Lseg`, `Box`, `Path`, `Polygon` and `Circle`, with `format_point`, `format_points`, `parse_point` and `parse_points`.

Several types also have a `randomize` classmethod that builds a value from a caller-supplied `next_int` function, for filling test rows.

## Installation

```
pip install boiltypes
```

## Examples

Arrays:

```python
from boiltypes.arrays import Int64Array, StringArray

Int64Array.scan("{345,678}")           # [345, 678]
StringArray(["a", "c d"]).value()      # '{"a","c d"}'
```

Generic arrays and choosing a type:

```python
from boiltypes.generic import GenericArray, array

GenericArray([[1, 2], [3, 4]]).value()  # '{{1,2},{3,4}}'
array([True, False]).value()            # '{t,f}'
```

Parsing an array literal yourself:

```python
from boiltypes.arrayparse import parse_array

dims, elems = parse_array(b"{{a,b}}", b",")
# dims == [1, 2], elems == [b"a", b"b"]
```

hstore:

```python
from boiltypes.hstore import HStore

h = HStore.scan(b'"a"=>"1", "b"=>NULL')
# {'a': '1', 'b': None}
```

JSON and bytes:

```python
from boiltypes.jsontype import JSON
from boiltypes.bytetype import Byte

j = JSON.marshal({"Name": "hi", "Age": 15})
j.unmarshal()                          # {'Name': 'hi', 'Age': 15}
Byte.scan("b").marshal_json()          # b'"b"'
```

Timestamps and bytea:

```python
from boiltypes.textformat import parse_timestamp, format_timestamp, encode_bytea

t = parse_timestamp(None, "2001-02-03 04:05:06.123+07")
format_timestamp(t)                    # b'2001-02-03 04:05:06.123+07:00'
encode_bytea(90000, b"\xde\xad")       # b'\\xdead'
```

Geometry:

```python
from boiltypes.pgeo.geometry import Point, Circle

Point.scan("(1.5,-2)")                 # Point(x=1.5, y=-2.0)
Circle.scan("<(0,0),3>").value()       # '<(0,0),3>'
```

## What it does not do

- It does not connect to a database; it only converts values to and from their text forms.
- The geometric types have no separate nullable forms. Scanning NULL into one gives a zero value (the origin, an all-zero line, an empty path or polygon), so keep `None` yourself where a column may be NULL.

## Running the tests

```
pip install -e .[test]
pytest
```