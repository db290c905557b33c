import pytest

from minkowski_conv import Polygon, make_point
from minkowski_conv.boundary import preprocess_boundary
from minkowski_conv.labels import ConvolutionInvariantError, ConvolutionLabel, MoveOn
from minkowski_conv.tracer import ConvolutionSession, trace_convolution_cycle

SQUARE = [(0, 0), (1, 0), (1, 1), (0, 1)]
TRIANGLE = [(0, 0), (1, 0), (0, 1)]
L_SHAPE = [(0, 0), (2, 0), (2, 1), (1, 1), (1, 2), (0, 2)]


def session_for(p_coords, q_coords):
    return ConvolutionSession(
        p=preprocess_boundary(Polygon.from_coords(p_coords)),
        q=preprocess_boundary(Polygon.from_coords(q_coords)),
    )


def chain(segments):
    return [(seg.source, seg.target) for seg in segments]


def pts(*coords):
    return [make_point(x, y) for x, y in coords]


def test_square_plus_triangle_traces_the_full_boundary():
    session = session_for(SQUARE, TRIANGLE)
    cycle = trace_convolution_cycle(session, 1, 0, 0)

    path = pts((0, 0), (1, 0), (2, 0), (2, 1), (1, 2), (0, 2), (0, 1), (0, 0))
    assert chain(cycle) == list(zip(path, path[1:]))
    assert [seg.move_on for seg in cycle] == [
        MoveOn.ON_P,
        MoveOn.ON_Q,
        MoveOn.ON_P,
        MoveOn.ON_Q,
        MoveOn.ON_P,
        MoveOn.ON_P,
        MoveOn.ON_Q,
    ]
    assert [seg.index for seg in cycle] == list(range(7))
    assert all(seg.cycle_id == 1 for seg in cycle)
    assert [seg.is_last for seg in cycle] == [False] * 6 + [True]
    assert len(session.used_labels) == 7
    assert not session.queue


def test_equal_directions_advance_both_polygons_together():
    session = session_for(SQUARE, SQUARE)
    cycle = trace_convolution_cycle(session, 7, 0, 0)

    assert len(cycle) == 8
    assert [seg.move_on for seg in cycle] == [MoveOn.ON_P, MoveOn.ON_Q] * 4
    # The Q half of a joint move is labelled with the advanced P index.
    assert list(session.used_labels) == sorted(
        [
            ConvolutionLabel(0, 0, MoveOn.ON_P),
            ConvolutionLabel(1, 0, MoveOn.ON_Q),
            ConvolutionLabel(1, 1, MoveOn.ON_P),
            ConvolutionLabel(2, 1, MoveOn.ON_Q),
            ConvolutionLabel(2, 2, MoveOn.ON_P),
            ConvolutionLabel(3, 2, MoveOn.ON_Q),
            ConvolutionLabel(3, 3, MoveOn.ON_P),
            ConvolutionLabel(0, 3, MoveOn.ON_Q),
        ]
    )
    assert cycle[0].source == cycle[-1].target == make_point(0, 0)


def test_reflex_vertex_suppresses_segments_without_breaking_closure():
    session = session_for(SQUARE, L_SHAPE)
    cycle = trace_convolution_cycle(session, 1, 0, 0)

    # Three moves of the square across the reflex corner (1, 1) of the L are consumed silently.
    assert session.suppressed == 3
    assert len(cycle) == 11
    assert len(session.used_labels) == 14
    for move in (ConvolutionLabel(3, 3, MoveOn.ON_P), ConvolutionLabel(0, 3, MoveOn.ON_P)):
        assert move in session.used_labels
    assert cycle[0].source == make_point(0, 0)
    assert cycle[-1].target == make_point(0, 0)
    assert cycle[-1].is_last
    emitted = {seg.source for seg in cycle} | {seg.target for seg in cycle}
    assert set(pts((3, 0), (3, 2), (2, 2), (2, 3), (0, 3))) <= emitted


def test_directed_right_flag_follows_lexicographic_order():
    session = session_for(SQUARE, TRIANGLE)
    cycle = trace_convolution_cycle(session, 1, 0, 0)
    for seg in cycle:
        assert seg.is_directed_right == ((seg.source.x, seg.source.y) < (seg.target.x, seg.target.y))


def test_retracing_a_consumed_loop_is_an_invariant_failure():
    session = session_for(SQUARE, TRIANGLE)
    trace_convolution_cycle(session, 1, 0, 0)
    with pytest.raises(ConvolutionInvariantError):
        trace_convolution_cycle(session, 2, 0, 0)
