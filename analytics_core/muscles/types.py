"""Muscle usage input/output models.

Contributions arrive per exercise, routine, or microcycle rollup level and
leave as body-part level entries for the anatomical map.
"""

from pydantic import BaseModel, ConfigDict, Field


class MuscleContribution(BaseModel):
    """Raw per-muscle contribution score.

    Attributes:
        muscle: Raw muscle tag (e.g. "quadriceps", "lats")
        score: Non-negative contribution score
    """

    model_config = ConfigDict(frozen=True)

    muscle: str
    score: float


class BodyPartContribution(BaseModel):
    """Summed score for one body-part slug (list/text views)."""

    model_config = ConfigDict(frozen=True)

    slug: str
    score: float = Field(gt=0)


class BodyPartAggregate(BaseModel):
    """Body-part entry consumed by the anatomical map.

    Attributes:
        slug: Canonical body-part slug
        intensity: Visual intensity bucket, 1 (light) to 5 (saturated)
    """

    model_config = ConfigDict(frozen=True)

    slug: str
    intensity: int = Field(ge=1, le=5)


class Exercise(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    canonical_name: str = Field(alias="canonicalName")
    aliases: tuple[str, ...] = ()
    equipment: tuple[str, ...] = ()
    primary_muscles: tuple[str, ...] = Field(default=(), alias="primaryMuscles")
    secondary_muscles: tuple[str, ...] = Field(default=(), alias="secondaryMuscles")


class ExerciseMuscleUsage(BaseModel):
    model_config = ConfigDict(frozen=True)

    exercise_id: str
    exercise_name: str
    contributions: tuple[MuscleContribution, ...]


class RoutineMuscleUsage(BaseModel):
    model_config = ConfigDict(frozen=True)

    routine_id: str
    totals: tuple[MuscleContribution, ...]
    exercises: tuple[ExerciseMuscleUsage, ...]


class MicrocycleMuscleUsage(BaseModel):
    model_config = ConfigDict(frozen=True)

    microcycle_id: str
    totals: tuple[MuscleContribution, ...]
    routines: tuple[RoutineMuscleUsage, ...]
