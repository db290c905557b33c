"""Configuration for Minkowski-sum computations."""

from __future__ import annotations

import copy
from dataclasses import dataclass


@dataclass
class MinkowskiConfig:
    validate_input: bool = True
    merge_collinear: bool = True
    collect_stats: bool = True


_CONFIG = MinkowskiConfig()


def get_config() -> MinkowskiConfig:
    return copy.deepcopy(_CONFIG)


def set_config(config: MinkowskiConfig) -> None:
    global _CONFIG
    _CONFIG = copy.deepcopy(config)
