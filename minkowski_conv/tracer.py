"""Tracing of single convolution loops."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field, replace
from typing import Deque, List

from .boundary import BoundaryTables
from .kernel import Point, ccw_in_between, compare_xy, position, translate
from .labels import (
    Anchor,
    ConvolutionInvariantError,
    ConvolutionLabel,
    LabeledSegment,
    MoveOn,
    UsedLabelSet,
    make_anchor,
)

logger = logging.getLogger(__name__)


@dataclass
class ConvolutionSession:
    """State shared by every trace of one Minkowski-sum computation."""

    p: BoundaryTables
    q: BoundaryTables
    used_labels: UsedLabelSet = field(default_factory=UsedLabelSet)
    queue: Deque[Anchor] = field(default_factory=deque)
    suppressed: int = 0

    def p_edge_in_q_cone(self, k1: int, k2: int) -> bool:
        q = self.q
        return ccw_in_between(self.p.directions[k1], q.directions[q.prev_index(k2)], q.directions[k2])

    def q_edge_in_p_cone(self, k1: int, k2: int) -> bool:
        p = self.p
        return ccw_in_between(self.q.directions[k2], p.directions[p.prev_index(k1)], p.directions[k1])

    def is_used(self, k1: int, k2: int, move_on: MoveOn) -> bool:
        return ConvolutionLabel(k1, k2, move_on) in self.used_labels

    def sum_point(self, k1: int, k2: int) -> Point:
        return translate(self.p.points[k1], position(self.q.points[k2]))


def trace_convolution_cycle(
    session: ConvolutionSession,
    cycle_id: int,
    k1: int,
    k2: int,
) -> List[LabeledSegment]:
    """Trace one closed loop of the convolution starting at ``(k1, k2)``.

    Returns the emitted segments in loop order. Branch points met on the way
    are appended to ``session.queue``; segments whose stationary vertex is
    reflex are consumed but not emitted, so the result may be empty.
    """

    p, q = session.p, session.q
    used = session.used_labels
    first1, first2 = k1, k2
    first_pt = curr_pt = session.sum_point(k1, k2)
    cycle: List[LabeledSegment] = []
    seg_index = 0
    max_steps = 2 * p.size * q.size + 2
    steps = 0

    while True:
        inc1 = False
        inc2 = False

        if session.p_edge_in_q_cone(k1, k2):
            inc1 = not session.is_used(k1, k2, MoveOn.ON_P)

        if session.q_edge_in_p_cone(k1, k2):
            if inc1:
                # Revisit this pair later and move on Q from there.
                if not session.is_used(k1, k2, MoveOn.ON_Q):
                    session.queue.append(make_anchor(k1, k2))
            else:
                inc2 = not session.is_used(k1, k2, MoveOn.ON_Q)

        if not inc1 and not inc2 and p.directions[k1] == q.directions[k2]:
            inc1 = not session.is_used(k1, k2, MoveOn.ON_P)
            k1_after = p.next_index(k1) if inc1 else k1
            inc2 = not session.is_used(k1_after, k2, MoveOn.ON_Q)

        if not (inc1 or inc2):
            raise ConvolutionInvariantError(
                f"cycle {cycle_id}: no admissible move at vertex pair ({k1}, {k2})"
            )

        if inc1:
            next_pt = translate(p.points[p.next_index(k1)], position(q.points[k2]))
            _check_distinct(curr_pt, next_pt, cycle_id)
            if q.reflex[k2]:
                session.suppressed += 1
            else:
                cycle.append(_segment(curr_pt, next_pt, cycle_id, seg_index, MoveOn.ON_P))
            used.insert(ConvolutionLabel(k1, k2, MoveOn.ON_P))
            seg_index += 1
            k1 = p.next_index(k1)
            curr_pt = next_pt

        if inc2:
            next_pt = translate(q.points[q.next_index(k2)], position(p.points[k1]))
            _check_distinct(curr_pt, next_pt, cycle_id)
            if p.reflex[k1]:
                session.suppressed += 1
            else:
                cycle.append(_segment(curr_pt, next_pt, cycle_id, seg_index, MoveOn.ON_Q))
            used.insert(ConvolutionLabel(k1, k2, MoveOn.ON_Q))
            seg_index += 1
            k2 = q.next_index(k2)
            curr_pt = next_pt

        if k1 == first1 and k2 == first2:
            break
        steps += 1
        if steps > max_steps:
            raise ConvolutionInvariantError(
                f"cycle {cycle_id}: loop from ({first1}, {first2}) did not close"
            )

    if curr_pt != first_pt:
        raise ConvolutionInvariantError(
            f"cycle {cycle_id}: loop ended at {curr_pt}, expected {first_pt}"
        )

    if cycle and cycle[-1].index + 1 == seg_index:
        cycle[-1] = replace(cycle[-1], is_last=True)

    logger.debug(
        "trace_convolution_cycle: cycle %d from (%d, %d) took %d moves, emitted %d segment(s)",
        cycle_id,
        first1,
        first2,
        seg_index,
        len(cycle),
    )
    return cycle


def _check_distinct(curr_pt: Point, next_pt: Point, cycle_id: int) -> None:
    if compare_xy(curr_pt, next_pt) == 0:
        raise ConvolutionInvariantError(f"cycle {cycle_id}: degenerate segment at {curr_pt}")


def _segment(source: Point, target: Point, cycle_id: int, index: int, move_on: MoveOn) -> LabeledSegment:
    return LabeledSegment(
        source=source,
        target=target,
        cycle_id=cycle_id,
        index=index,
        is_directed_right=compare_xy(source, target) < 0,
        move_on=move_on,
    )


__all__ = ["ConvolutionSession", "trace_convolution_cycle"]
