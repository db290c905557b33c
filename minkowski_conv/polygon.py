from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

from shapely.geometry import LinearRing
from shapely.geometry import Polygon as ShapelyPolygon

from .kernel import (
    Orientation,
    Point,
    compare_xy,
    points_from_coords,
    polygon_orientation,
    signed_area,
)


@dataclass(frozen=True)
class Polygon:
    """Ordered cyclic sequence of exact points.

    The orientation is derived from the vertex order on every call.
    """

    points: Tuple[Point, ...]

    @classmethod
    def from_coords(cls, coords: Iterable[object]) -> "Polygon":
        return cls(points_from_coords(coords))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def orientation(self) -> Orientation:
        return polygon_orientation(self.points)

    def is_counterclockwise(self) -> bool:
        return self.orientation() == Orientation.LEFT_TURN

    def area(self):
        return abs(signed_area(self.points))

    def has_repeated_vertex(self) -> bool:
        n = len(self.points)
        return any(compare_xy(self.points[i], self.points[(i + 1) % n]) == 0 for i in range(n))

    def float_coords(self) -> List[Tuple[float, float]]:
        return [(float(p.x), float(p.y)) for p in self.points]

    def to_shapely(self) -> ShapelyPolygon:
        return ShapelyPolygon(self.float_coords())

    def is_simple(self) -> bool:
        if len(self.points) < 3 or self.has_repeated_vertex():
            return False
        if signed_area(self.points) == 0 or len(set(self.points)) != len(self.points):
            return False
        return bool(LinearRing(self.float_coords()).is_simple)

    def __str__(self) -> str:
        return "[" + ", ".join(str(p) for p in self.points) + "]"


def as_polygon(value: object) -> Polygon:
    if isinstance(value, Polygon):
        return value
    if isinstance(value, ShapelyPolygon):
        return Polygon.from_coords(list(value.exterior.coords)[:-1])
    return Polygon.from_coords(value)  # type: ignore[arg-type]


__all__ = ["Polygon", "as_polygon"]
