import itertools

import pytest

from boiltypes.bytetype import Byte


def test_string():
    assert str(Byte(ord("b"))) == "b"


def test_unmarshal():
    assert Byte.unmarshal_json(b'"b"') == ord("b")


def test_unmarshal_too_long():
    with pytest.raises(ValueError, match="text len is greater than one"):
        Byte.unmarshal_json(b'"bc"')


def test_unmarshal_not_a_string():
    with pytest.raises(TypeError):
        Byte.unmarshal_json(b"12")


def test_marshal():
    assert Byte(ord("b")).marshal_json() == b'"b"'


def test_marshal_round_trip():
    b = Byte(ord("q"))
    assert Byte.unmarshal_json(b.marshal_json()) == b


def test_value():
    b = Byte(ord("b"))
    assert b.value() == bytes([ord("b")])


def test_scan():
    assert Byte.scan("b") == ord("b")
    assert Byte.scan(b"bc") == ord("b")
    assert Byte.scan(98) == ord("b")


def test_scan_incompatible_type():
    with pytest.raises(TypeError, match="incompatible type for byte"):
        Byte.scan(1.5)


def test_out_of_range():
    with pytest.raises(ValueError):
        Byte(256)


def test_randomize_stays_printable():
    counter = itertools.count(-200, 7)
    for _ in range(100):
        b = Byte.randomize(lambda: next(counter), "", False)
        assert 6 <= b < 125
    positive = itertools.count(0, 13)
    for _ in range(100):
        b = Byte.randomize(lambda: next(positive), "", True)
        assert 65 <= b < 125