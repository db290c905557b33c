import argparse
import json
import logging
from fractions import Fraction
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from minkowski_conv import (
    MinkowskiConfig,
    Polygon,
    ValidationError,
    minkowski_sum_by_convolution,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _format_number(value: Fraction) -> Any:
    if value.denominator == 1:
        return value.numerator
    return str(value)


def _format_polygon(polygon: Polygon) -> List[List[Any]]:
    return [[_format_number(p.x), _format_number(p.y)] for p in polygon.points]


def _load_polygons(path: str) -> Dict[str, Polygon]:
    with open(path) as fin:
        payload = json.load(fin)
    if not isinstance(payload, dict) or "P" not in payload or "Q" not in payload:
        raise ValueError(f"{path}: expected a JSON object with 'P' and 'Q' vertex lists")
    return {key: Polygon.from_coords(payload[key]) for key in ("P", "Q")}


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Minkowski sum of two simple polygons by convolution")
    parser.add_argument("path", help='JSON file holding {"P": [[x, y], ...], "Q": [[x, y], ...]}')
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--output",
        help="Write the result as JSON to the given path instead of stdout",
    )
    parser.add_argument(
        "--segments",
        action="store_true",
        help="Include the labeled convolution segments in the output",
    )
    parser.add_argument(
        "--keep-collinear",
        action="store_true",
        help="Do not merge collinear vertices of the output polygons",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    logger.info("Reading polygons from %s", args.path)
    polygons = _load_polygons(args.path)

    config = MinkowskiConfig(merge_collinear=not args.keep_collinear)
    try:
        result = minkowski_sum_by_convolution(polygons["P"], polygons["Q"], config)
    except ValidationError as exc:
        logger.error("Invalid input: %s", exc)
        raise SystemExit(1)

    logger.info(
        "Boundary has %d vertices, %d hole(s)",
        len(result.boundary),
        len(result.holes),
    )
    if result.stats is not None:
        logger.info(
            "%d cycle(s), %d segment(s), %d suppressed, %.3fs",
            result.stats.cycles,
            result.stats.segments,
            result.stats.suppressed_segments,
            result.stats.elapsed_seconds,
        )

    document: Dict[str, Any] = {
        "boundary": _format_polygon(result.boundary),
        "holes": [_format_polygon(hole) for hole in result.holes],
    }
    if result.stats is not None:
        document["stats"] = result.stats.as_dict()
    if args.segments:
        document["segments"] = [
            {
                "source": [_format_number(seg.source.x), _format_number(seg.source.y)],
                "target": [_format_number(seg.target.x), _format_number(seg.target.y)],
                "cycle": seg.cycle_id,
                "index": seg.index,
                "move_on": seg.move_on.name,
                "is_last": seg.is_last,
            }
            for seg in result.segments
        ]

    text = json.dumps(document, indent=2)
    if args.output:
        out_path = Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8")
        logger.info("Wrote result to %s", out_path)
    else:
        print(text)


if __name__ == "__main__":
    main()
