"""Label bookkeeping for convolution cycles."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, NamedTuple, Set, Tuple

from .kernel import Point


class ConvolutionInvariantError(AssertionError):
    """Raised when the convolution engine detects an internal inconsistency."""


class MoveOn(IntEnum):
    ON_P = 1
    ON_Q = 2


class ConvolutionLabel(NamedTuple):
    """Identifies one transition of the convolution diagram.

    Tuple ordering gives the lexicographic order on (index1, index2, move_on).
    """

    index1: int
    index2: int
    move_on: MoveOn


class VertexRef(NamedTuple):
    polygon: int
    index: int


Anchor = Tuple[VertexRef, VertexRef]

POLYGON_P = 0
POLYGON_Q = 1


def make_anchor(k1: int, k2: int) -> Anchor:
    return (VertexRef(POLYGON_P, k1), VertexRef(POLYGON_Q, k2))


@dataclass(frozen=True)
class LabeledSegment:
    """A directed convolution segment tagged with its originating cycle."""

    source: Point
    target: Point
    cycle_id: int
    index: int
    is_directed_right: bool
    move_on: MoveOn
    is_last: bool = False

    def endpoints(self) -> Tuple[Point, Point]:
        return self.source, self.target


class UsedLabelSet:
    """Set of consumed labels; every label may be inserted at most once."""

    def __init__(self) -> None:
        self._labels: Set[ConvolutionLabel] = set()

    def __contains__(self, label: object) -> bool:
        return label in self._labels

    def contains(self, label: ConvolutionLabel) -> bool:
        return label in self._labels

    def insert(self, label: ConvolutionLabel) -> None:
        if label in self._labels:
            raise ConvolutionInvariantError(f"label {tuple(label)} consumed twice")
        self._labels.add(label)

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self) -> Iterator[ConvolutionLabel]:
        return iter(sorted(self._labels))


__all__ = [
    "ConvolutionInvariantError",
    "MoveOn",
    "ConvolutionLabel",
    "VertexRef",
    "Anchor",
    "POLYGON_P",
    "POLYGON_Q",
    "make_anchor",
    "LabeledSegment",
    "UsedLabelSet",
]
