from shapely.geometry import Polygon as ShapelyPolygon
from shapely.validation import explain_validity

from .kernel import compare_xy, signed_area
from .polygon import Polygon


class ValidationError(Exception):
    pass


def validate_polygon(polygon: Polygon, name: str = 'polygon') -> None:
    pts = polygon.points
    n = len(pts)
    if n == 0:
        raise ValidationError(f'[{name}] polygon is empty')
    if n < 3:
        raise ValidationError(f'[{name}] polygon needs at least 3 vertices, got {n}')
    for i in range(n):
        if compare_xy(pts[i], pts[(i + 1) % n]) == 0:
            raise ValidationError(f'[{name}] repeated consecutive vertex {pts[i]} at index {i}')
    if signed_area(pts) == 0:
        raise ValidationError(f'[{name}] polygon has zero area')
    if not polygon.is_simple():
        reason = explain_validity(ShapelyPolygon(polygon.float_coords()))
        raise ValidationError(f'[{name}] polygon is not simple ({reason})')


def validate_pair(p: Polygon, q: Polygon) -> None:
    validate_polygon(p, 'P')
    validate_polygon(q, 'Q')
