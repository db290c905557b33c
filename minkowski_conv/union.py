"""Turn a soup of convolution segments into an outer boundary and holes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from fractions import Fraction
from itertools import combinations
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np
import shapely
from shapely.affinity import translate as _stranslate
from shapely.geometry import MultiPolygon
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.ops import polygonize, unary_union
from shapely.strtree import STRtree

from .kernel import Orientation, Point, Vector, cross, orientation, signed_area, translate, vector
from .labels import ConvolutionInvariantError, LabeledSegment
from .logging_utils import apply_debug_logging
from .polygon import Polygon

logger = logging.getLogger(__name__)

MembershipTest = Callable[[float, float], bool]

# Vertices that cannot be matched to a pair of crossing segments are snapped
# to fractions whose denominator does not exceed this bound.
MAX_DENOMINATOR = 10**6

# Relative distance within which a float vertex is taken to lie on a segment.
LOOKUP_TOLERANCE = 1e-9


def minkowski_membership(p: Polygon, q: Polygon) -> MembershipTest:
    """Return a predicate deciding whether ``(x, y)`` lies in ``P + Q``.

    ``x`` is in the sum iff ``P`` meets the copy of ``-Q`` translated by ``x``.
    """

    p_shape = p.to_shapely()
    reflected_q = ShapelyPolygon([(-x, -y) for x, y in q.float_coords()])

    def contains(x: float, y: float) -> bool:
        return bool(p_shape.intersects(_stranslate(reflected_q, xoff=x, yoff=y)))

    return contains


def _snap(x: float, y: float) -> Point:
    return Point(
        Fraction(x).limit_denominator(MAX_DENOMINATOR),
        Fraction(y).limit_denominator(MAX_DENOMINATOR),
    )


def _exact_crossing(a: LabeledSegment, b: LabeledSegment) -> Optional[Point]:
    r = vector(a.source, a.target)
    s = vector(b.source, b.target)
    denom = cross(r, s)
    if denom == 0:
        return None
    offset = vector(a.source, b.source)
    t = cross(offset, s) / denom
    u = cross(offset, r) / denom
    if not (0 <= t <= 1 and 0 <= u <= 1):
        return None
    return translate(a.source, Vector(t * r.x, t * r.y))


@dataclass
class _SegmentIndex:
    """Maps float vertices of the shapely result back to exact points."""

    segments: Sequence[LabeledSegment]
    lines: np.ndarray
    tree: STRtree
    exact: Dict[Tuple[float, float], Point]
    tolerance: float

    def resolve(self, x: float, y: float) -> Point:
        pt = self.exact.get((x, y))
        if pt is not None:
            return pt

        tol = self.tolerance
        where = shapely.points(x, y)
        near = sorted(
            int(i)
            for i in self.tree.query(shapely.box(x - tol, y - tol, x + tol, y + tol))
            if self.lines[i].distance(where) <= tol
        )
        best: Optional[Point] = None
        best_dist = 0.0
        for i, j in combinations(near, 2):
            crossing = _exact_crossing(self.segments[i], self.segments[j])
            if crossing is None:
                continue
            dist = abs(float(crossing.x) - x) + abs(float(crossing.y) - y)
            if best is None or dist < best_dist:
                best, best_dist = crossing, dist
        if best is None:
            logger.debug("_SegmentIndex.resolve: no crossing pair near (%r, %r), snapping", x, y)
            return _snap(x, y)
        return best


def _merge_collinear(points: List[Point]) -> List[Point]:
    pts = list(points)
    changed = True
    while changed and len(pts) > 3:
        changed = False
        n = len(pts)
        for i in range(n):
            if orientation(pts[i - 1], pts[i], pts[(i + 1) % n]) == Orientation.COLLINEAR:
                del pts[i]
                changed = True
                break
    return pts


class SegmentCycleUnion:
    """Arrangement-based union of convolution cycles.

    The segments are noded and polygonized into the faces of their planar
    arrangement; faces whose interior point passes ``contains`` form the
    Minkowski sum. The exterior of their union is the outer boundary and its
    interiors are the holes.
    """

    def __init__(self, contains: MembershipTest, *, merge_collinear: bool = True) -> None:
        self._contains = contains
        self._merge_collinear = merge_collinear

    def unite(self, segments: Sequence[LabeledSegment]) -> Tuple[Polygon, List[Polygon]]:
        if not segments:
            raise ValueError("cannot unite an empty segment collection")

        exact: Dict[Tuple[float, float], Point] = {}
        coords = np.empty((len(segments), 2, 2), dtype=float)
        for i, seg in enumerate(segments):
            for j, pt in enumerate(seg.endpoints()):
                key = (float(pt.x), float(pt.y))
                coords[i, j] = key
                exact.setdefault(key, pt)

        lines = shapely.linestrings(coords)
        index = _SegmentIndex(
            segments=segments,
            lines=lines,
            tree=STRtree(lines),
            exact=exact,
            tolerance=LOOKUP_TOLERANCE * max(1.0, float(np.abs(coords).max())),
        )

        noded = unary_union(list(lines))
        faces = list(polygonize(getattr(noded, "geoms", [noded])))
        members = []
        for face in faces:
            rep = face.representative_point()
            if self._contains(rep.x, rep.y):
                members.append(face)
        logger.debug(
            "SegmentCycleUnion.unite: %d segment(s) -> %d face(s), %d inside the sum",
            len(segments),
            len(faces),
            len(members),
        )
        if not members:
            raise ConvolutionInvariantError("no arrangement face lies inside the Minkowski sum")

        merged = members[0] if len(members) == 1 else unary_union(members)
        if isinstance(merged, MultiPolygon):
            raise ConvolutionInvariantError(
                f"faces inside the Minkowski sum form {len(merged.geoms)} disconnected parts"
            )

        boundary = self._ring(merged.exterior.coords, index, counterclockwise=True)
        holes = [self._ring(interior.coords, index, counterclockwise=False) for interior in merged.interiors]
        holes.sort(key=lambda hole: hole.points)
        return boundary, holes

    def _ring(self, coords, index: _SegmentIndex, *, counterclockwise: bool) -> Polygon:
        ring = np.asarray(coords, dtype=float)[:-1]
        pts = [index.resolve(x, y) for x, y in ring.tolist()]
        if self._merge_collinear:
            pts = _merge_collinear(pts)
        if (signed_area(pts) > 0) != counterclockwise:
            pts.reverse()
        start = min(range(len(pts)), key=pts.__getitem__)
        return Polygon(tuple(pts[start:] + pts[:start]))


apply_debug_logging(
    globals(),
    logger=logger,
    skip={"_snap", "_exact_crossing", "_merge_collinear", "_SegmentIndex", "SegmentCycleUnion._ring"},
)


__all__ = ["MembershipTest", "SegmentCycleUnion", "minkowski_membership"]
