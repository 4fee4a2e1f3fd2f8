"""Muscle usage rollups: exercise -> routine -> microcycle.

Each level carries raw muscle tags (not body-part slugs) so the same payload
can feed both the anatomical map and per-muscle tables upstream.
"""

from collections.abc import Iterable, Mapping

from analytics_core.muscles.constants import (
    DEFAULT_PRIMARY_WEIGHT,
    DEFAULT_SECONDARY_WEIGHT,
    SCORE_PRECISION,
)
from analytics_core.muscles.types import (
    Exercise,
    ExerciseMuscleUsage,
    MicrocycleMuscleUsage,
    MuscleContribution,
    RoutineMuscleUsage,
)


def _order_contributions(scores: Mapping[str, float]) -> tuple[MuscleContribution, ...]:
    rounded = [(muscle, round(score, SCORE_PRECISION)) for muscle, score in scores.items()]
    rounded.sort(key=lambda item: (-item[1], item[0]))
    return tuple(MuscleContribution(muscle=muscle, score=score) for muscle, score in rounded)


def _merge_contributions(target: dict[str, float], contributions: Iterable[MuscleContribution]) -> None:
    for contribution in contributions:
        target[contribution.muscle] = target.get(contribution.muscle, 0.0) + contribution.score


def build_exercise_muscle_usage(
    exercise: Exercise,
    primary_weight: float = DEFAULT_PRIMARY_WEIGHT,
    secondary_weight: float = DEFAULT_SECONDARY_WEIGHT,
) -> ExerciseMuscleUsage:
    """Weight an exercise's muscles by role.

    A muscle listed as both primary and secondary keeps the larger weight.
    """
    role_weights: dict[str, float] = {}
    for muscle in exercise.primary_muscles:
        role_weights[muscle] = max(role_weights.get(muscle, 0.0), primary_weight)
    for muscle in exercise.secondary_muscles:
        role_weights[muscle] = max(role_weights.get(muscle, 0.0), secondary_weight)

    return ExerciseMuscleUsage(
        exercise_id=exercise.id,
        exercise_name=exercise.canonical_name,
        contributions=_order_contributions(role_weights),
    )


def build_routine_muscle_usage(routine_id: str, exercises: Iterable[Exercise]) -> RoutineMuscleUsage:
    exercise_payloads = tuple(build_exercise_muscle_usage(exercise) for exercise in exercises)

    totals: dict[str, float] = {}
    for payload in exercise_payloads:
        _merge_contributions(totals, payload.contributions)

    return RoutineMuscleUsage(
        routine_id=routine_id,
        totals=_order_contributions(totals),
        exercises=exercise_payloads,
    )


def build_microcycle_muscle_usage(
    microcycle_id: str,
    routines: Iterable[RoutineMuscleUsage],
) -> MicrocycleMuscleUsage:
    routine_payloads = tuple(routines)

    totals: dict[str, float] = {}
    for routine in routine_payloads:
        _merge_contributions(totals, routine.totals)

    return MicrocycleMuscleUsage(
        microcycle_id=microcycle_id,
        totals=_order_contributions(totals),
        routines=routine_payloads,
    )
