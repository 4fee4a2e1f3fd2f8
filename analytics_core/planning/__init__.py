"""Planning surface analytics."""

from analytics_core.planning.microcycle_summary import build_microcycle_muscle_summaries
from analytics_core.planning.types import CycleDraft, MicrocycleDraft, MicrocycleMuscleSummary, PlanningWorkout

__all__ = [
    "CycleDraft",
    "MicrocycleDraft",
    "MicrocycleMuscleSummary",
    "PlanningWorkout",
    "build_microcycle_muscle_summaries",
]
