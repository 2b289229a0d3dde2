"""Heatmap data pipeline."""

from .aggregate import Datum, aggregate
from .buckets import OUT_OF_SCALE, classify
from .controller import HeatmapController, RecomputeInputs, recompute
from .loader import ActivityLoader
from .range import (
    DateRange,
    RangeController,
    RangeState,
    NUM_WEEKS,
    NAVIGATION_WEEKS,
)
from .score import parse_score

__all__ = [
    "Datum",
    "aggregate",
    "OUT_OF_SCALE",
    "classify",
    "HeatmapController",
    "RecomputeInputs",
    "recompute",
    "ActivityLoader",
    "DateRange",
    "RangeController",
    "RangeState",
    "NUM_WEEKS",
    "NAVIGATION_WEEKS",
    "parse_score",
]
