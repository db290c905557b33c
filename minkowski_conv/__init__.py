from .kernel import (
    Point,
    Vector,
    Direction,
    Orientation,
    make_point,
    to_point,
    orientation,
    compare_xy,
    ccw_in_between,
)
from .polygon import Polygon, as_polygon
from .validate import validate_polygon, ValidationError
from .labels import (
    ConvolutionInvariantError,
    ConvolutionLabel,
    LabeledSegment,
    MoveOn,
    UsedLabelSet,
    VertexRef,
)
from .boundary import BoundaryTables, SeedTables, preprocess_boundary, preprocess_seed_boundary
from .tracer import ConvolutionSession, trace_convolution_cycle
from .seeder import ConvolutionResult, ConvolutionStats, compute_convolution
from .union import SegmentCycleUnion, minkowski_membership
from .config import MinkowskiConfig, get_config, set_config
from .minkowski import (
    MinkowskiSumResult,
    convolution_segments,
    minkowski_sum,
    minkowski_sum_by_convolution,
)

__all__ = [
    'Point',
    'Vector',
    'Direction',
    'Orientation',
    'make_point',
    'to_point',
    'orientation',
    'compare_xy',
    'ccw_in_between',
    'Polygon',
    'as_polygon',
    'validate_polygon',
    'ValidationError',
    'ConvolutionInvariantError',
    'ConvolutionLabel',
    'LabeledSegment',
    'MoveOn',
    'UsedLabelSet',
    'VertexRef',
    'BoundaryTables',
    'SeedTables',
    'preprocess_boundary',
    'preprocess_seed_boundary',
    'ConvolutionSession',
    'trace_convolution_cycle',
    'ConvolutionResult',
    'ConvolutionStats',
    'compute_convolution',
    'SegmentCycleUnion',
    'minkowski_membership',
    'MinkowskiConfig',
    'get_config',
    'set_config',
    'MinkowskiSumResult',
    'convolution_segments',
    'minkowski_sum',
    'minkowski_sum_by_convolution',
]
