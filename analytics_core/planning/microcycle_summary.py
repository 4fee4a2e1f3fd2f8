"""Microcycle muscle summary for the planning surface.

Buckets planned workouts into 7-day microcycles counted from the macrocycle
start, resolves each workout title to catalog exercises, and rolls the
exercises up into per-microcycle muscle totals.

A microcycle is flagged as high overlap when a single body part carries at
least settings.high_overlap_threshold of the mapped load.
"""

from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from loguru import logger

from analytics_core.config.settings import settings
from analytics_core.muscles.catalog import resolve_exercises_for_title
from analytics_core.muscles.payloads import build_microcycle_muscle_usage, build_routine_muscle_usage
from analytics_core.muscles.types import RoutineMuscleUsage
from analytics_core.muscles.usage import aggregate_muscle_contributions
from analytics_core.planning.types import (
    CycleDraft,
    MicrocycleMuscleSummary,
    MicrocycleWorkoutDrilldown,
    PlanningWorkout,
)

MICROCYCLE_DAYS = 7


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Normalize datetime to UTC-aware.

    Converts naive datetimes to UTC-aware, and converts aware datetimes to UTC.
    Returns None if input is None.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _parse_instant(value: str) -> datetime | None:
    try:
        return ensure_utc(datetime.fromisoformat(value.strip()))
    except ValueError:
        return None


def resolve_microcycle_index(start: datetime, macro_start: datetime, microcycle_count: int) -> int | None:
    """Return the zero-based microcycle a workout falls in, or None if outside the cycle."""
    delta = start - macro_start
    if delta < timedelta(0):
        return None
    index = (delta // timedelta(days=1)) // MICROCYCLE_DAYS
    if index >= microcycle_count:
        return None
    return index


def _empty_summary(microcycle_id: str, label: str) -> MicrocycleMuscleSummary:
    return MicrocycleMuscleSummary(
        microcycle_id=microcycle_id,
        label=label,
        totals=(),
        workouts=(),
        has_high_overlap=False,
        high_overlap_body_part=None,
    )


def build_microcycle_muscle_summaries(
    draft: CycleDraft,
    workouts: Iterable[PlanningWorkout],
) -> list[MicrocycleMuscleSummary]:
    """Build one muscle summary per active microcycle of a cycle draft.

    Args:
        draft: Cycle draft with macro start date and microcycles
        workouts: Planned workouts from the calendar

    Returns:
        Summaries in microcycle order. Workouts before the macro start, after
        the last active microcycle, or with an unparseable start are skipped.
    """
    active = draft.microcycles[: draft.microcycle_count]
    macro_start = _parse_instant(draft.macro_start_date)
    if macro_start is None:
        logger.warning(f"[MICROCYCLE_SUMMARY] Invalid macro start date '{draft.macro_start_date}', returning empty summaries")
        return [_empty_summary(microcycle.id, microcycle.label) for microcycle in active]

    drilldowns: list[list[MicrocycleWorkoutDrilldown]] = [[] for _ in active]
    routines: list[list[RoutineMuscleUsage]] = [[] for _ in active]

    for workout in workouts:
        start = _parse_instant(workout.start)
        if start is None:
            logger.debug(f"[MICROCYCLE_SUMMARY] Skipping workout {workout.id} with invalid start '{workout.start}'")
            continue
        index = resolve_microcycle_index(start, macro_start, len(active))
        if index is None:
            continue

        exercises = resolve_exercises_for_title(workout.title)
        routines[index].append(build_routine_muscle_usage(workout.id, exercises))
        drilldowns[index].append(
            MicrocycleWorkoutDrilldown(
                workout_id=workout.id,
                title=workout.title,
                start=workout.start,
                end=workout.end,
                exercise_names=tuple(exercise.canonical_name for exercise in exercises),
            )
        )

    summaries: list[MicrocycleMuscleSummary] = []
    for microcycle, bucket_workouts, bucket_routines in zip(active, drilldowns, routines, strict=True):
        usage = build_microcycle_muscle_usage(microcycle.id, bucket_routines)
        body_parts = aggregate_muscle_contributions(usage.totals)
        total_score = sum(item.score for item in body_parts)
        dominant = body_parts[0] if body_parts else None
        dominant_ratio = dominant.score / total_score if dominant and total_score > 0 else 0.0
        has_high_overlap = dominant is not None and dominant_ratio >= settings.high_overlap_threshold

        summaries.append(
            MicrocycleMuscleSummary(
                microcycle_id=microcycle.id,
                label=microcycle.label,
                totals=usage.totals,
                workouts=tuple(
                    sorted(bucket_workouts, key=lambda item: (_parse_instant(item.start), item.workout_id))
                ),
                has_high_overlap=has_high_overlap,
                high_overlap_body_part=dominant.slug if has_high_overlap and dominant else None,
            )
        )
    return summaries
