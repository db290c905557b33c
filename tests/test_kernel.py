from fractions import Fraction

import pytest

from minkowski_conv.kernel import (
    CLOCKWISE,
    COUNTERCLOCKWISE,
    Direction,
    Orientation,
    ccw_in_between,
    compare_xy,
    make_point,
    orientation,
    polygon_orientation,
    signed_area,
    to_point,
    translate,
    vector,
)


def d(x, y):
    return Direction((Fraction(x), Fraction(y)))


def test_points_are_exact_fractions():
    p = to_point((0.5, "1/3"))
    assert p.x == Fraction(1, 2)
    assert p.y == Fraction(1, 3)
    assert isinstance(p.x, Fraction)


@pytest.mark.parametrize('bad', ['xy', (1,), (1, 2, 3), (True, 1), ('a', 1)])
def test_to_point_rejects_malformed_input(bad):
    with pytest.raises(ValueError):
        to_point(bad)


def test_translate_and_vector():
    a = make_point(1, 2)
    b = make_point(4, -1)
    v = vector(a, b)
    assert (v.x, v.y) == (3, -3)
    assert translate(a, v) == b


def test_orientation_classifies_turns():
    a, b = make_point(0, 0), make_point(1, 0)
    assert orientation(a, b, make_point(1, 1)) == Orientation.LEFT_TURN
    assert orientation(a, b, make_point(1, -1)) == Orientation.RIGHT_TURN
    assert orientation(a, b, make_point(5, 0)) == Orientation.COLLINEAR


def test_compare_xy_is_lexicographic():
    assert compare_xy(make_point(0, 5), make_point(1, 0)) == -1
    assert compare_xy(make_point(1, 0), make_point(1, -1)) == 1
    assert compare_xy(make_point(2, 2), make_point(2, 2)) == 0


def test_polygon_orientation_and_area():
    square = [make_point(0, 0), make_point(2, 0), make_point(2, 2), make_point(0, 2)]
    assert signed_area(square) == 4
    assert polygon_orientation(square) == COUNTERCLOCKWISE
    assert polygon_orientation(list(reversed(square))) == CLOCKWISE


def test_direction_total_order_follows_ccw_angle():
    ordered = [d(1, 0), d(1, 1), d(0, 1), d(-1, 1), d(-1, 0), d(-1, -1), d(0, -1), d(1, -1)]
    for lo, hi in zip(ordered, ordered[1:]):
        assert lo < hi
        assert not hi < lo
    assert sorted(reversed(ordered)) == ordered


def test_direction_equality_ignores_length():
    assert d(2, 4) == d(1, 2)
    assert hash(d(2, 4)) == hash(d(1, 2))
    assert d(1, 2) != d(-1, -2)


def test_zero_direction_is_rejected():
    with pytest.raises(ValueError):
        d(0, 0)


def test_ccw_in_between_is_open_interval():
    east, north, west, south = d(1, 0), d(0, 1), d(-1, 0), d(0, -1)
    assert ccw_in_between(d(1, 1), east, north)
    assert not ccw_in_between(east, east, north)
    assert not ccw_in_between(north, east, north)
    assert not ccw_in_between(west, east, north)


def test_ccw_in_between_wraps_past_positive_x_axis():
    south, north = d(0, -1), d(0, 1)
    # From south counterclockwise to north passes through east.
    assert ccw_in_between(d(1, 0), south, north)
    assert ccw_in_between(d(1, -5), south, north)
    assert not ccw_in_between(d(-1, 0), south, north)


def test_ccw_in_between_with_equal_bounds_is_full_turn():
    east = d(1, 0)
    assert ccw_in_between(d(-1, 0), east, east)
    assert ccw_in_between(d(0, -1), east, east)
    assert not ccw_in_between(d(3, 0), east, east)
