"""Muscle usage module - taxonomy mapping, aggregation and intensity buckets.

This module provides:
- Static muscle tag -> body-part slug taxonomy
- Body-part aggregation with absolute 1-5 intensity classification
- Exercise / routine / microcycle usage rollups
"""

from analytics_core.muscles.payloads import (
    build_exercise_muscle_usage,
    build_microcycle_muscle_usage,
    build_routine_muscle_usage,
)
from analytics_core.muscles.taxonomy import MUSCLE_TO_BODY_PART, TAXONOMY_VERSION, resolve_body_part
from analytics_core.muscles.types import (
    BodyPartAggregate,
    BodyPartContribution,
    Exercise,
    MuscleContribution,
)
from analytics_core.muscles.usage import (
    aggregate_muscle_contributions,
    classify_intensity,
    map_muscle_contributions_to_body_data,
    parse_muscle_contributions,
)

__all__ = [
    "MUSCLE_TO_BODY_PART",
    "TAXONOMY_VERSION",
    "BodyPartAggregate",
    "BodyPartContribution",
    "Exercise",
    "MuscleContribution",
    "aggregate_muscle_contributions",
    "build_exercise_muscle_usage",
    "build_microcycle_muscle_usage",
    "build_routine_muscle_usage",
    "classify_intensity",
    "map_muscle_contributions_to_body_data",
    "parse_muscle_contributions",
    "resolve_body_part",
]
