"""Seeding of convolution cycles and accumulation of their segments."""

from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass, field
from typing import Dict, List

from .boundary import BoundaryTables, SeedTables
from .labels import LabeledSegment, MoveOn, make_anchor
from .logging_utils import apply_debug_logging
from .tracer import ConvolutionSession, trace_convolution_cycle

logger = logging.getLogger(__name__)


@dataclass
class ConvolutionStats:
    """Counters describing one convolution run."""

    p_vertices: int = 0
    q_vertices: int = 0
    p_reflex: int = 0
    q_reflex: int = 0
    cycles: int = 0
    loops: int = 0
    segments: int = 0
    suppressed_segments: int = 0
    discarded_sessions: int = 0
    sweep_cycles: int = 0
    elapsed_seconds: float = 0.0

    def as_dict(self) -> Dict[str, object]:
        return asdict(self)


@dataclass
class ConvolutionResult:
    segments: List[LabeledSegment] = field(default_factory=list)
    stats: ConvolutionStats = field(default_factory=ConvolutionStats)
    next_cycle_id: int = 1

    @property
    def cycles(self) -> int:
        return self.stats.cycles

    @property
    def cycle_ids(self) -> List[int]:
        return sorted({seg.cycle_id for seg in self.segments})


def _is_seed(session: ConvolutionSession, k1: int, k2: int) -> bool:
    if session.is_used(k1, k2, MoveOn.ON_P):
        return False
    return session.p_edge_in_q_cone(k1, k2) or session.p.directions[k1] == session.q.directions[k2]


def _run_session(session: ConvolutionSession, result: ConvolutionResult, k1: int, k2: int) -> bool:
    """Trace the cycle through ``(k1, k2)`` and every loop branching off it.

    Returns ``False`` when the session emitted nothing.
    """

    session.queue.clear()
    session.queue.append(make_anchor(k1, k2))
    loops = 0
    emitted = 0
    is_seed = True

    while session.queue:
        vert1, vert2 = session.queue.popleft()
        # Deferred anchors stand for a move on Q that another loop may have made since.
        if not is_seed and session.is_used(vert1.index, vert2.index, MoveOn.ON_Q):
            continue
        is_seed = False

        cycle_id = result.next_cycle_id
        result.next_cycle_id += 1
        cycle = trace_convolution_cycle(session, cycle_id, vert1.index, vert2.index)
        if not cycle:
            continue
        loops += 1
        emitted += len(cycle)
        result.segments.extend(cycle)

    stats = result.stats
    if not emitted:
        stats.discarded_sessions += 1
        logger.debug("_run_session: redundant session at (%d, %d) discarded", k1, k2)
        return False

    stats.cycles += 1
    stats.loops += loops
    logger.debug(
        "_run_session: cycle %d seeded at (%d, %d) holds %d segment(s) in %d loop(s)",
        stats.cycles,
        k1,
        k2,
        emitted,
        loops,
    )
    return True


def compute_convolution(p_tables: BoundaryTables, q_seeds: SeedTables) -> ConvolutionResult:
    """Trace every convolution cycle of the two boundaries.

    Seeds are the bottom-left vertex of Q followed by its reflex vertices;
    for each seed every compatible vertex of P starts a session that runs
    until its anchor queue is exhausted. A final sweep over the remaining
    vertex pairs picks up any cycle that none of the seeds reaches.
    """

    started = time.perf_counter()
    session = ConvolutionSession(p=p_tables, q=q_seeds.boundary)
    result = ConvolutionResult()
    stats = result.stats
    stats.p_vertices = p_tables.size
    stats.q_vertices = q_seeds.boundary.size
    stats.p_reflex = p_tables.reflex_count
    stats.q_reflex = len(q_seeds.reflex_vertices)

    for k2 in q_seeds.seeds:
        for k1 in range(p_tables.size):
            if _is_seed(session, k1, k2):
                _run_session(session, result, k1, k2)

    for k2 in range(q_seeds.boundary.size):
        for k1 in range(p_tables.size):
            if _is_seed(session, k1, k2) and _run_session(session, result, k1, k2):
                stats.sweep_cycles += 1
                logger.debug("compute_convolution: sweep found an unseeded cycle at (%d, %d)", k1, k2)

    stats.segments = len(result.segments)
    stats.suppressed_segments = session.suppressed
    stats.elapsed_seconds = time.perf_counter() - started
    logger.debug(
        "compute_convolution: |P|=%d (%d reflex) |Q|=%d (%d reflex): %d cycle(s), %d segment(s)",
        stats.p_vertices,
        stats.p_reflex,
        stats.q_vertices,
        stats.q_reflex,
        stats.cycles,
        stats.segments,
    )
    return result


apply_debug_logging(
    globals(),
    logger=logger,
    skip={"_is_seed", "_run_session", "ConvolutionStats", "ConvolutionResult"},
)


__all__ = ["ConvolutionStats", "ConvolutionResult", "compute_convolution"]
