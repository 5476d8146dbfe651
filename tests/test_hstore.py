import pytest

from boiltypes.hstore import HStore, hquote


def test_hquote_none_is_null():
    assert hquote(None) == "NULL"


def test_hquote_escapes_quotes_and_backslashes():
    assert hquote('a"b\\c') == '"a\\"b\\\\c"'


def test_hquote_rejects_other_types():
    with pytest.raises(TypeError):
        hquote(42)


def test_value_single_pair():
    assert HStore({"k": "v"}).value() == b'"k"=>"v"'


def test_value_empty_map():
    assert HStore().value() == b""


def test_round_trip():
    original = HStore({"a": "1", "b": None, 'q"x': "back\\slash", "sp ace": "v, w"})
    assert HStore.scan(original.value()) == original


def test_round_trip_quoted_null_word_stays_string():
    original = HStore({"k": "NULL"})
    scanned = HStore.scan(original.value())
    assert scanned == {"k": "NULL"}


def test_scan_unquoted_null_any_case():
    scanned = HStore.scan(b'"a"=>null, "b"=>NuLl')
    assert scanned == {"a": None, "b": None}


def test_scan_server_output():
    scanned = HStore.scan(b'"a"=>"1", "b"=>NULL')
    assert scanned == {"a": "1", "b": None}


def test_scan_accepts_str():
    assert HStore.scan('"x"=>"y"') == {"x": "y"}


def test_scan_none_gives_none():
    assert HStore.scan(None) is None


def test_scan_empty_gives_empty_map():
    scanned = HStore.scan(b"")
    assert isinstance(scanned, HStore)
    assert len(scanned) == 0


def test_scan_rejects_other_types():
    with pytest.raises(TypeError):
        HStore.scan(12)