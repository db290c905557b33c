"""Per-polygon direction and reflex tables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .kernel import (
    Direction,
    Orientation,
    Point,
    compare_xy,
    direction,
    orientation,
    vector,
)
from .polygon import Polygon


@dataclass(frozen=True)
class BoundaryTables:
    """Vertices of a polygon in counterclockwise traversal order.

    ``points[k]`` is the k-th vertex visited when walking from vertex 0
    forward (counterclockwise input) or backward (clockwise input);
    ``original_index[k]`` maps it back to the input vertex index.
    """

    points: Tuple[Point, ...]
    directions: Tuple[Direction, ...]
    reflex: Tuple[bool, ...]
    forward: bool
    original_index: Tuple[int, ...]

    @property
    def size(self) -> int:
        return len(self.points)

    def next_index(self, k: int) -> int:
        return (k + 1) % len(self.points)

    def prev_index(self, k: int) -> int:
        n = len(self.points)
        return (n + k - 1) % n

    @property
    def reflex_count(self) -> int:
        return sum(1 for flag in self.reflex if flag)


@dataclass(frozen=True)
class SeedTables:
    """Boundary tables of the second polygon plus its seed vertices."""

    boundary: BoundaryTables
    bottom_left: int
    reflex_vertices: Tuple[int, ...]

    @property
    def seeds(self) -> List[int]:
        return [self.bottom_left, *self.reflex_vertices]

    @property
    def is_convex(self) -> bool:
        return not self.reflex_vertices


def preprocess_boundary(polygon: Polygon) -> BoundaryTables:
    n = len(polygon)
    forward = polygon.orientation() == Orientation.LEFT_TURN
    if forward:
        order = tuple(range(n))
    else:
        order = tuple((n - k) % n for k in range(n))
    pts = tuple(polygon.points[i] for i in order)

    dirs: List[Direction] = []
    reflex: List[bool] = []
    for k in range(n):
        prev_pt = pts[(n + k - 1) % n]
        curr_pt = pts[k]
        next_pt = pts[(k + 1) % n]
        reflex.append(orientation(prev_pt, curr_pt, next_pt) == Orientation.RIGHT_TURN)
        dirs.append(direction(vector(curr_pt, next_pt)))

    return BoundaryTables(
        points=pts,
        directions=tuple(dirs),
        reflex=tuple(reflex),
        forward=forward,
        original_index=order,
    )


def preprocess_seed_boundary(polygon: Polygon) -> SeedTables:
    tables = preprocess_boundary(polygon)
    bottom_left = 0
    for k in range(1, tables.size):
        if compare_xy(tables.points[k], tables.points[bottom_left]) < 0:
            bottom_left = k
    reflex_vertices = tuple(k for k, flag in enumerate(tables.reflex) if flag)
    return SeedTables(boundary=tables, bottom_left=bottom_left, reflex_vertices=reflex_vertices)


__all__ = ["BoundaryTables", "SeedTables", "preprocess_boundary", "preprocess_seed_boundary"]
