"""Minkowski sum of two simple polygons by boundary convolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .boundary import preprocess_boundary, preprocess_seed_boundary
from .config import MinkowskiConfig, get_config
from .labels import LabeledSegment
from .logging_utils import apply_debug_logging
from .polygon import Polygon, as_polygon
from .seeder import ConvolutionResult, ConvolutionStats, compute_convolution
from .union import SegmentCycleUnion, minkowski_membership
from .validate import validate_pair

logger = logging.getLogger(__name__)


@dataclass
class MinkowskiSumResult:
    boundary: Polygon
    holes: List[Polygon] = field(default_factory=list)
    segments: List[LabeledSegment] = field(default_factory=list)
    stats: Optional[ConvolutionStats] = None


def convolution_segments(p: object, q: object) -> ConvolutionResult:
    """Compute the labeled convolution segments of ``p`` and ``q`` without uniting them."""

    pgn1 = as_polygon(p)
    pgn2 = as_polygon(q)
    return compute_convolution(preprocess_boundary(pgn1), preprocess_seed_boundary(pgn2))


def minkowski_sum(p: object, q: object, config: Optional[MinkowskiConfig] = None) -> MinkowskiSumResult:
    """Compute ``P + Q`` as an outer boundary and a list of holes.

    ``p`` and ``q`` may be :class:`Polygon` instances, shapely polygons or
    sequences of ``(x, y)`` pairs; both must be simple.
    """

    cfg = config or get_config()
    pgn1 = as_polygon(p)
    pgn2 = as_polygon(q)
    if cfg.validate_input:
        validate_pair(pgn1, pgn2)

    conv = compute_convolution(preprocess_boundary(pgn1), preprocess_seed_boundary(pgn2))
    unite = SegmentCycleUnion(minkowski_membership(pgn1, pgn2), merge_collinear=cfg.merge_collinear)
    boundary, holes = unite.unite(conv.segments)

    logger.debug(
        "minkowski_sum: |P|=%d |Q|=%d -> %d cycle(s), %d segment(s), boundary of %d vertices, %d hole(s)",
        len(pgn1),
        len(pgn2),
        conv.stats.cycles,
        len(conv.segments),
        len(boundary),
        len(holes),
    )
    return MinkowskiSumResult(
        boundary=boundary,
        holes=holes,
        segments=conv.segments,
        stats=conv.stats if cfg.collect_stats else None,
    )


apply_debug_logging(globals(), logger=logger, skip={"MinkowskiSumResult"})

minkowski_sum_by_convolution = minkowski_sum


__all__ = [
    "MinkowskiSumResult",
    "convolution_segments",
    "minkowski_sum",
    "minkowski_sum_by_convolution",
]
