import itertools

import pytest

from boiltypes.pgeo.geometry import (
    Box,
    Circle,
    Line,
    Lseg,
    Path,
    Point,
    Polygon,
    format_point,
    format_points,
    parse_point,
    parse_points,
)


def counter():
    values = itertools.count(1)
    return lambda: next(values)


def test_format_point_whole_numbers():
    assert format_point(Point(1.0, 2.0)) == "(1,2)"


def test_format_point_large_uses_exponent():
    assert format_point(Point(1000000.0, 0.5)) == "(1e+06,0.5)"


def test_format_points_joins_with_commas():
    points = parse_points("(1,2),(3.5,-4)")
    assert format_points(points) == "(1,2),(3.5,-4)"


@pytest.mark.parametrize("text", ["(1,2)", "(-1.25,3)", "(0,-0.5)"])
def test_parse_point_round_trip(text):
    assert format_point(parse_point(text)) == text


def test_parse_point_values():
    assert parse_point("(3.5,-4)") == Point(3.5, -4.0)


@pytest.mark.parametrize("text", ["(1,2) ", "(1e5,2)", "1,2", "(1,2,3)", "(a,b)"])
def test_parse_point_rejects(text):
    with pytest.raises(ValueError, match="wrong point"):
        parse_point(text)


def test_parse_points_finds_all_in_order():
    assert parse_points("((1,2),(3.5,-4))") == [Point(1.0, 2.0), Point(3.5, -4.0)]


def test_parse_points_empty():
    assert parse_points("nothing here") == []


def test_point_scan_null_is_origin():
    assert Point.scan(None) == Point(0.0, 0.0)


def test_point_scan_bytes_round_trip():
    assert Point.scan(b"(7,-8.25)").value() == "(7,-8.25)"


def test_point_scan_wrong_type():
    with pytest.raises(TypeError, match="incompatible type"):
        Point.scan(42)


def test_point_randomize_uses_next_int():
    assert Point.randomize(counter()) == Point(1.0, 2.0)


def test_line_round_trip():
    assert Line.scan("{1,-2.5,3}").value() == "{1,-2.5,3}"


def test_line_scan_values():
    assert Line.scan("{1,-2.5,3}") == Line(1.0, -2.5, 3.0)


def test_line_scan_null():
    assert Line.scan(None) == Line(0.0, 0.0, 0.0)


@pytest.mark.parametrize("text", ["{1,2}", "{1,2,3,4}", "(1,2,3)", "{1,2,3} "])
def test_line_scan_rejects(text):
    with pytest.raises(ValueError, match="wrong line"):
        Line.scan(text)


def test_line_randomize():
    line = Line.randomize(counter())
    assert (line.a, line.b, line.c) == (1.0, 2.0, 0.0)


def test_lseg_round_trip():
    assert Lseg.scan("[(1,2),(3,4)]").value() == "[(1,2),(3,4)]"


def test_lseg_scan_null():
    assert Lseg.scan(None) == Lseg(Point(), Point())


def test_lseg_scan_rejects_one_point():
    with pytest.raises(ValueError, match="wrong lseg"):
        Lseg.scan("[(1,2)]")


def test_lseg_randomize():
    assert Lseg.randomize(counter()) == Lseg(Point(1.0, 2.0), Point(3.0, 4.0))


def test_box_round_trip():
    assert Box.scan("((1,2),(3,4))").value() == "((1,2),(3,4))"


def test_box_scan_rejects_three_points():
    with pytest.raises(ValueError, match="wrong box"):
        Box.scan("((1,2),(3,4),(5,6))")


def test_box_scan_null():
    assert Box.scan(None) == Box(Point(), Point())


def test_box_randomize():
    assert Box.randomize(counter()) == Box(Point(1.0, 2.0), Point(3.0, 4.0))


def test_path_closed_round_trip():
    path = Path.scan("((1,2),(3,4))")
    assert path.closed is True
    assert path.value() == "((1,2),(3,4))"


def test_path_open_round_trip():
    path = Path.scan("[(1,2),(3,4),(5,6)]")
    assert path.closed is False
    assert path.value() == "[(1,2),(3,4),(5,6)]"


def test_path_scan_rejects_single_point():
    with pytest.raises(ValueError, match="wrong path"):
        Path.scan("[(1,2)]")


def test_path_scan_null_is_empty():
    assert Path.scan(None) == Path([], False)


def test_path_randomize():
    path = Path.randomize(counter())
    assert path.points == [Point(1.0, 2.0), Point(3.0, 4.0), Point(5.0, 6.0)]
    assert path.closed is True


def test_path_randomize_open_when_draw_large():
    values = iter([1, 2, 3, 4, 5, 6, 100])
    path = Path.randomize(lambda: next(values))
    assert path.closed is False


def test_polygon_round_trip():
    text = "((0,0),(1,0),(1,1))"
    assert Polygon.scan(text).value() == text


def test_polygon_scan_rejects_two_points():
    with pytest.raises(ValueError, match="wrong polygon"):
        Polygon.scan("((0,0),(1,0))")


def test_polygon_scan_null_is_empty():
    assert Polygon.scan(None) == []


def test_polygon_randomize():
    polygon = Polygon.randomize(counter())
    assert polygon == [Point(1.0, 2.0), Point(3.0, 4.0), Point(5.0, 6.0)]


def test_circle_round_trip():
    assert Circle.scan("<(1,2),3>").value() == "<(1,2),3>"


def test_circle_scan_values():
    circle = Circle.scan(b"<(1,2),3.5>")
    assert circle.center == Point(1.0, 2.0)
    assert circle.radius == 3.5


def test_circle_scan_null():
    assert Circle.scan(None) == Circle(Point(), 0.0)


def test_circle_scan_rejects_two_points():
    with pytest.raises(ValueError, match="wrong circle"):
        Circle.scan("<(1,2),(3,4),5>")


def test_circle_scan_rejects_bad_radius():
    with pytest.raises(ValueError):
        Circle.scan("<(1,2),x>")


def test_circle_randomize():
    assert Circle.randomize(counter()) == Circle(Point(1.0, 2.0), 3.0)