"""Tick pipeline: extent resolution, exact ticks, automatic intervals, filtering."""

from timeaxis.scale.exact import infer_time_level, provide_exact_ticks, unit_for_gap
from timeaxis.scale.extent import resolve_extent
from timeaxis.scale.extent_filter import filter_ticks
from timeaxis.scale.interval import CANDIDATE_STEPS, StepCandidate, choose_step, plan_ticks
from timeaxis.scale.time_scale import TimeScale, axis_extent, compute_ticks

__all__ = [
    "TimeScale",
    "compute_ticks",
    "axis_extent",
    "resolve_extent",
    "provide_exact_ticks",
    "infer_time_level",
    "unit_for_gap",
    "plan_ticks",
    "choose_step",
    "StepCandidate",
    "CANDIDATE_STEPS",
    "filter_ticks",
]
