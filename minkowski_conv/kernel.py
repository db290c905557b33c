"""Exact planar kernel used by the convolution engine.

All coordinates are :class:`fractions.Fraction` so that orientation tests,
direction comparisons and point equality are decided exactly.
"""

from __future__ import annotations

import numbers
from enum import IntEnum
from fractions import Fraction
from typing import Iterable, NamedTuple, Sequence, Tuple, Union

Scalar = Union[int, float, str, Fraction]


def to_fraction(value: object) -> Fraction:
    """Convert *value* to an exact :class:`Fraction`."""

    if isinstance(value, Fraction):
        return value
    if isinstance(value, bool):
        raise ValueError(f"coordinate must be numeric, got {value!r}")
    if isinstance(value, (numbers.Rational, float, str)):
        try:
            return Fraction(value)
        except (ValueError, ZeroDivisionError) as exc:
            raise ValueError(f"invalid coordinate {value!r}") from exc
    if isinstance(value, numbers.Real):
        return Fraction(float(value))
    raise ValueError(f"coordinate must be numeric, got {value!r}")


class Point(NamedTuple):
    x: Fraction
    y: Fraction

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


class Vector(NamedTuple):
    x: Fraction
    y: Fraction


class Orientation(IntEnum):
    RIGHT_TURN = -1
    COLLINEAR = 0
    LEFT_TURN = 1


CLOCKWISE = Orientation.RIGHT_TURN
COUNTERCLOCKWISE = Orientation.LEFT_TURN


def make_point(x: Scalar, y: Scalar) -> Point:
    return Point(to_fraction(x), to_fraction(y))


def to_point(obj: object) -> Point:
    """Coerce an ``(x, y)`` pair (or a :class:`Point`) into a :class:`Point`."""

    if isinstance(obj, Point):
        return obj
    if hasattr(obj, "x") and hasattr(obj, "y") and not isinstance(obj, (tuple, list)):
        return make_point(obj.x, obj.y)  # type: ignore[attr-defined]
    if isinstance(obj, str):
        raise ValueError(f"expected an (x, y) pair, got {obj!r}")
    try:
        x, y = obj  # type: ignore[misc]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"expected an (x, y) pair, got {obj!r}") from exc
    return make_point(x, y)


def vector(a: Point, b: Point) -> Vector:
    """Return the vector from *a* to *b*."""

    return Vector(b.x - a.x, b.y - a.y)


def position(p: Point) -> Vector:
    return Vector(p.x, p.y)


def translate(p: Point, v: Vector) -> Point:
    return Point(p.x + v.x, p.y + v.y)


def cross(u: Tuple[Fraction, Fraction], v: Tuple[Fraction, Fraction]) -> Fraction:
    return u[0] * v[1] - u[1] * v[0]


def orientation(p: Point, q: Point, r: Point) -> Orientation:
    """Classify the turn ``p -> q -> r``."""

    value = cross(vector(p, q), vector(p, r))
    if value > 0:
        return Orientation.LEFT_TURN
    if value < 0:
        return Orientation.RIGHT_TURN
    return Orientation.COLLINEAR


def compare_xy(a: Point, b: Point) -> int:
    """Lexicographic comparison; returns -1, 0 or 1."""

    if a.x != b.x:
        return -1 if a.x < b.x else 1
    if a.y != b.y:
        return -1 if a.y < b.y else 1
    return 0


def signed_area(points: Sequence[Point]) -> Fraction:
    n = len(points)
    total = Fraction(0)
    for i in range(n):
        total += cross(points[i], points[(i + 1) % n])
    return total / 2


def polygon_orientation(points: Sequence[Point]) -> Orientation:
    area = signed_area(points)
    if area > 0:
        return COUNTERCLOCKWISE
    if area < 0:
        return CLOCKWISE
    return Orientation.COLLINEAR


class Direction:
    """Direction of a non-zero vector, ordered by counterclockwise angle.

    The order starts at the positive x-axis: directions in the upper
    half-plane (including the positive x-axis) precede those in the lower
    half-plane (including the negative x-axis), and within a half-plane the
    cross product decides.
    """

    __slots__ = ("dx", "dy", "_half")

    def __init__(self, v: Tuple[Fraction, Fraction]) -> None:
        dx, dy = v
        if dx == 0 and dy == 0:
            raise ValueError("cannot construct a direction from a zero vector")
        self.dx = dx
        self.dy = dy
        self._half = 0 if (dy > 0 or (dy == 0 and dx > 0)) else 1

    def _cmp(self, other: "Direction") -> int:
        if self._half != other._half:
            return -1 if self._half < other._half else 1
        c = cross((self.dx, self.dy), (other.dx, other.dy))
        if c > 0:
            return -1
        if c < 0:
            return 1
        return 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Direction):
            return NotImplemented
        return self._cmp(other) == 0

    def __lt__(self, other: "Direction") -> bool:
        return self._cmp(other) < 0

    def __gt__(self, other: "Direction") -> bool:
        return self._cmp(other) > 0

    def __le__(self, other: "Direction") -> bool:
        return self._cmp(other) <= 0

    def __ge__(self, other: "Direction") -> bool:
        return self._cmp(other) >= 0

    def __hash__(self) -> int:
        # Normalise by the larger absolute component so equal directions hash alike.
        scale = max(abs(self.dx), abs(self.dy))
        return hash((self.dx / scale, self.dy / scale))

    def __repr__(self) -> str:
        return f"Direction({self.dx}, {self.dy})"


def direction(v: Tuple[Fraction, Fraction]) -> Direction:
    return Direction(v)


def ccw_in_between(d: Direction, lo: Direction, hi: Direction) -> bool:
    """Return ``True`` iff *d* lies strictly inside the counterclockwise arc from *lo* to *hi*.

    When ``lo == hi`` the arc is the full turn, so every direction other
    than *lo* itself is inside.
    """

    if lo < hi:
        return lo < d < hi
    return d > lo or d < hi


def points_from_coords(coords: Iterable[object]) -> Tuple[Point, ...]:
    return tuple(to_point(c) for c in coords)


__all__ = [
    "Scalar",
    "Point",
    "Vector",
    "Direction",
    "Orientation",
    "CLOCKWISE",
    "COUNTERCLOCKWISE",
    "to_fraction",
    "make_point",
    "to_point",
    "points_from_coords",
    "vector",
    "position",
    "translate",
    "cross",
    "orientation",
    "compare_xy",
    "signed_area",
    "polygon_orientation",
    "direction",
    "ccw_in_between",
]
