import pytest

from boiltypes.jsontype import JSON


def test_string():
    assert str(JSON(b"hello")) == "hello"


def test_unmarshal():
    result = JSON(b'{"Name":"hi","Age":15}').unmarshal()
    assert result["Name"] == "hi"
    assert result["Age"] == 15


def test_marshal():
    j = JSON.marshal({"Name": "hi", "Age": 15})
    assert str(j) == '{"Name":"hi","Age":15}'


def test_marshal_escapes_html_characters():
    assert JSON.marshal("<b>") == b'"\\u003cb\\u003e"'


def test_marshal_rejects_nan():
    with pytest.raises(ValueError):
        JSON.marshal(float("nan"))


def test_unmarshal_json():
    j = JSON.unmarshal_json(JSON(b'"hi"'))
    assert str(j) == '"hi"'


def test_marshal_json():
    assert JSON(b'"hi"').marshal_json() == b'"hi"'


def test_value():
    j = JSON(b'{"Name":"hi","Age":15}')
    assert j.value() == bytes(j)


def test_value_strips_surrounding_whitespace():
    assert JSON(b' {"a":1}\n').value() == b'{"a":1}'


@pytest.mark.parametrize("raw", [b"{", b"", b"NaN", b"[1,]"])
def test_value_rejects_invalid_json(raw):
    with pytest.raises(ValueError):
        JSON(raw).value()


def test_scan():
    assert JSON.scan('"hello"') == b'"hello"'
    assert JSON.scan(b'"hello"') == b'"hello"'


def test_scan_incompatible_type():
    with pytest.raises(TypeError, match="incompatible type for json"):
        JSON.scan(12)