"""Planning surface models consumed by the microcycle muscle summary."""

from pydantic import BaseModel, ConfigDict, Field

from analytics_core.muscles.types import MuscleContribution


class _PlanningModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, coerce_numbers_to_str=True)


class MicrocycleDraft(_PlanningModel):
    id: str
    label: str
    focus: str | None = None
    key_sessions: int = Field(default=0, alias="keySessions")


class CycleDraft(_PlanningModel):
    """Macrocycle draft: start date plus its ordered microcycles.

    Attributes:
        macro_start_date: ISO date the first microcycle starts on
        microcycle_count: Number of active microcycles
        microcycles: Microcycle drafts; only the first microcycle_count are active
    """

    macro_start_date: str = Field(alias="macroStartDate")
    microcycle_count: int = Field(alias="microcycleCount", ge=0)
    microcycles: tuple[MicrocycleDraft, ...] = ()


class PlanningWorkout(_PlanningModel):
    id: str
    title: str
    start: str
    end: str


class MicrocycleWorkoutDrilldown(_PlanningModel):
    workout_id: str
    title: str
    start: str
    end: str
    exercise_names: tuple[str, ...]


class MicrocycleMuscleSummary(_PlanningModel):
    """Muscle usage for one microcycle.

    Attributes:
        microcycle_id: Microcycle identifier
        label: Display label
        totals: Raw muscle totals, score descending
        workouts: Drill-down ordered by start, then workout id
        has_high_overlap: True when one body part dominates the mapped load
        high_overlap_body_part: Dominant body-part slug when overlapping
    """

    microcycle_id: str
    label: str
    totals: tuple[MuscleContribution, ...]
    workouts: tuple[MicrocycleWorkoutDrilldown, ...]
    has_high_overlap: bool
    high_overlap_body_part: str | None
