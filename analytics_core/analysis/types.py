"""Analysis input/output models.

This module defines the data structures for:
- Session compliance (raw records, normalized windows, snapshots, trend points)
- Adaptation risk timeline (fatigue points, gated scores, zones)
- Axis fatigue trends (per-day planned/completed axis scores)
- Block effectiveness (target vs realized metrics, block summaries)
- Endurance progress (zone minutes, threshold estimates)

Raw payload models accept the backend's camelCase keys as well as snake_case.
Everything is immutable; derived views are rebuilt on every call.
"""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from analytics_core.states.canonical import ComplianceState


class RiskZone(StrEnum):
    """Coarse three-level risk classification."""

    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, coerce_numbers_to_str=True)


# Session compliance


class SessionRecord(_Record):
    """Raw session record as supplied by the backend.

    Attributes:
        id: Session identifier
        label: Display label
        href: Link to the session in the calendar
        date: ISO date (or date-time) of the session
        day_label: Optional precomputed weekday label
        plan_block: Training block name, free text
        modality: Training modality, free text
        state: Raw status token (any case, may be missing)
    """

    id: str
    label: str = ""
    href: str = ""
    date: str
    day_label: str | None = Field(default=None, alias="dayLabel")
    plan_block: str | None = Field(default=None, alias="planBlock")
    modality: str | None = None
    state: str | None = None

    @field_validator("state", mode="before")
    @classmethod
    def drop_non_text_state(cls, value: Any) -> str | None:
        """Treat a non-string state as missing so it resolves to the default."""
        return value if isinstance(value, str) else None


class ComplianceWindow(_Record):
    """Reporting period (week, month, training block) of raw sessions."""

    key: str
    label: str = ""
    sessions: tuple[SessionRecord, ...] = ()


class ComplianceData(_Record):
    default_window_key: str | None = Field(default=None, alias="defaultWindowKey")
    windows: tuple[ComplianceWindow, ...] = ()


class NormalizedSession(_Record):
    """Session with canonical state and resolved display categories."""

    id: str
    label: str
    href: str
    date: str
    day_label: str
    plan_block: str
    modality: str
    state: ComplianceState


class NormalizedComplianceWindow(_Record):
    key: str
    label: str
    sessions: tuple[NormalizedSession, ...] = ()


class NormalizedComplianceData(_Record):
    default_window_key: str | None = None
    windows: tuple[NormalizedComplianceWindow, ...] = ()


class ComplianceCounts(_Record):
    """Mutually exclusive per-state session counts."""

    planned_count: int = 0
    completed_count: int = 0
    move_count: int = 0
    skip_count: int = 0

    @property
    def total(self) -> int:
        return self.planned_count + self.completed_count + self.move_count + self.skip_count


class ComplianceTrendPoint(_Record):
    """Per-day compliance rollup."""

    date: str
    day_label: str
    planned_count: int
    completed_count: int
    move_count: int
    skip_count: int
    adherence_percentage: int
    sessions: tuple[NormalizedSession, ...]


class ComplianceSnapshot(_Record):
    """Window-level compliance view.

    Attributes:
        window: Selected normalized window (None when no window exists)
        planned_count: Sessions still canonically planned
        completed_count: Completed sessions
        move_count: Moved (rescheduled) sessions
        skip_count: Skipped sessions
        adherence_percentage: Integer 0-100
        adherence_state: Risk zone for the adherence percentage
        available_plan_blocks: Sorted distinct plan blocks of the unfiltered window
        available_modalities: Sorted distinct modalities of the unfiltered window
        trend: Chronological per-day rollups of the filtered sessions
    """

    window: NormalizedComplianceWindow | None
    planned_count: int
    completed_count: int
    move_count: int
    skip_count: int
    adherence_percentage: int
    adherence_state: RiskZone
    available_plan_blocks: tuple[str, ...]
    available_modalities: tuple[str, ...]
    trend: tuple[ComplianceTrendPoint, ...]


# Adaptation risk timeline


class SessionLink(_Record):
    id: str
    label: str = ""
    href: str = ""


class AdaptationRiskPoint(_Record):
    """Daily combined fatigue reading.

    Attributes:
        date: ISO date
        day_label: Optional precomputed weekday label
        combined_fatigue_score: Combined fatigue on a 0-10 scale
        system_capacity_gate: Multiplier reflecting current system capacity
        gated_risk_score: combined_fatigue_score * gate, clamped (set on normalization)
        contributors: Sessions contributing to the reading
    """

    date: str
    day_label: str | None = Field(default=None, alias="dayLabel")
    combined_fatigue_score: float = Field(alias="combinedFatigueScore")
    system_capacity_gate: float = Field(default=1.0, alias="systemCapacityGate")
    gated_risk_score: float | None = Field(default=None, alias="gatedRiskScore")
    contributors: tuple[SessionLink, ...] = ()


class AdaptationRiskWindow(_Record):
    key: str
    label: str = ""
    points: tuple[AdaptationRiskPoint, ...] = ()


class AdaptationRiskData(_Record):
    default_window_key: str | None = Field(default=None, alias="defaultWindowKey")
    windows: tuple[AdaptationRiskWindow, ...] = ()


class ClassifiedRiskPoint(_Record):
    date: str
    day_label: str
    gated_risk_score: float
    zone: RiskZone
    contributors: tuple[SessionLink, ...] = ()


class AdaptationRiskSnapshot(_Record):
    """Zoned risk timeline for one window.

    Attributes:
        window: Selected normalized window (None when no window exists)
        points: Chronological points with their zone
        peak: Highest gated point (earliest wins ties), None when empty
        peak_zone: Zone of the peak, green when empty
        latest_zone: Zone of the most recent point, green when empty
    """

    window: AdaptationRiskWindow | None
    points: tuple[ClassifiedRiskPoint, ...]
    peak: ClassifiedRiskPoint | None
    peak_zone: RiskZone
    latest_zone: RiskZone


# Axis fatigue trends


class AxisFatigueSeriesPoint(_Record):
    neural: float = 0.0
    metabolic: float = 0.0
    mechanical: float = 0.0
    recruitment: float = 0.0


class AxisFatigueTrendDay(_Record):
    date: str
    day_label: str | None = Field(default=None, alias="dayLabel")
    planned: AxisFatigueSeriesPoint = AxisFatigueSeriesPoint()
    completed: AxisFatigueSeriesPoint = AxisFatigueSeriesPoint()
    planned_sessions: tuple[SessionLink, ...] = Field(default=(), alias="plannedSessions")
    completed_sessions: tuple[SessionLink, ...] = Field(default=(), alias="completedSessions")


class AxisFatigueWindow(_Record):
    key: str
    label: str = ""
    days: tuple[AxisFatigueTrendDay, ...] = ()


class AxisFatigueData(_Record):
    default_window_key: str | None = Field(default=None, alias="defaultWindowKey")
    windows: tuple[AxisFatigueWindow, ...] = ()


class AxisTrend(_Record):
    axis: str
    direction: str
    slope: float


# Block effectiveness


class BlockObjectiveType(StrEnum):
    STRENGTH = "strength"
    ENDURANCE = "endurance"


class MetricDirection(StrEnum):
    """Which way a metric improves."""

    HIGHER = "higher"
    LOWER = "lower"


class ConfidenceBand(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class DataQualityFlag(StrEnum):
    OK = "ok"
    SPARSE = "sparse"
    LOW_QUALITY = "low-quality"


class BlockMetric(_Record):
    """Target vs realized value of one block objective.

    Attributes:
        key: Metric identifier (e.g. "squat_1rm")
        label: Display label
        objective_type: Strength or endurance objective
        unit: Display unit
        target_value: Value the block aimed for
        realized_value: Value actually reached
        direction: Raw improvement direction; anything but "lower" means higher
        confidence: Estimate confidence, 0-1 after normalization
        sample_size: Number of observations, non-negative integer after normalization
        contributors: Sessions the estimate is based on
        delta_value: Improvement over target (set on normalization)
        delta_percentage: Improvement as a percentage of target (set on normalization)
        effectiveness_index: 100 minus the absolute delta percentage (set on normalization)
    """

    key: str
    label: str = ""
    objective_type: BlockObjectiveType = Field(alias="objectiveType")
    unit: str = ""
    target_value: float = Field(alias="targetValue")
    realized_value: float = Field(alias="realizedValue")
    direction: str | None = None
    confidence: float = 0.0
    sample_size: float = Field(default=0, alias="sampleSize")
    contributors: tuple[SessionLink, ...] = ()
    delta_value: float | None = Field(default=None, alias="deltaValue")
    delta_percentage: float | None = Field(default=None, alias="deltaPercentage")
    effectiveness_index: float | None = Field(default=None, alias="effectivenessIndex")


class TrainingBlock(_Record):
    key: str
    label: str = ""
    start_date: str = Field(alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")
    metrics: tuple[BlockMetric, ...] = ()


class BlockEffectivenessWindow(_Record):
    key: str
    label: str = ""
    blocks: tuple[TrainingBlock, ...] = ()


class BlockEffectivenessData(_Record):
    default_window_key: str | None = Field(default=None, alias="defaultWindowKey")
    windows: tuple[BlockEffectivenessWindow, ...] = ()


class BlockEffectivenessSummary(_Record):
    """Per-block rollup of its metrics.

    Attributes:
        block: Normalized block
        objective_types: Sorted distinct objective types of the block's metrics
        average_delta_percentage: Mean metric delta percentage
        effectiveness_index: Mean metric effectiveness index
        average_confidence: Mean metric confidence
        confidence_band: Band of the average confidence
        data_quality_flag: sparse, low-quality or ok
    """

    block: TrainingBlock
    objective_types: tuple[BlockObjectiveType, ...]
    average_delta_percentage: float
    effectiveness_index: float
    average_confidence: float
    confidence_band: ConfidenceBand
    data_quality_flag: DataQualityFlag


class BlockEffectivenessSnapshot(_Record):
    window: BlockEffectivenessWindow | None
    block_summaries: tuple[BlockEffectivenessSummary, ...]
    active_block_summary: BlockEffectivenessSummary | None
    active_metric: BlockMetric | None


# Endurance progress


class EnduranceZone(StrEnum):
    Z1 = "z1"
    Z2 = "z2"
    Z3 = "z3"
    Z4 = "z4"
    Z5 = "z5"


class ThresholdPoint(_Record):
    """Dated threshold estimate (pace, power, heart rate)."""

    date: str
    day_label: str | None = Field(default=None, alias="dayLabel")
    value: float
    confidence: float = 0.0
    inferred: bool = False
    contributors: tuple[SessionLink, ...] = ()


class ThresholdMetric(_Record):
    key: str
    label: str = ""
    unit: str = ""
    points: tuple[ThresholdPoint, ...] = ()


class ZoneMinutes(_Record):
    zone: str
    minutes: float


class ZoneDistributionEntry(_Record):
    zone: EnduranceZone
    minutes: float
    percentage: float


class EnduranceProgressWindow(_Record):
    key: str
    label: str = ""
    zone_distribution: tuple[ZoneMinutes, ...] = Field(default=(), alias="zoneDistribution")
    threshold_metrics: tuple[ThresholdMetric, ...] = Field(default=(), alias="thresholdMetrics")


class EnduranceProgressData(_Record):
    default_window_key: str | None = Field(default=None, alias="defaultWindowKey")
    windows: tuple[EnduranceProgressWindow, ...] = ()


class EnduranceProgressSnapshot(_Record):
    """Zone distribution and selected threshold metric for one window.

    Attributes:
        window: Selected normalized window (None when no window exists)
        metric: Requested threshold metric, else the first one
        total_zone_minutes: Sum of minutes over all five zones
        zone_distribution: One entry per zone, z1 to z5, with its share of the total
    """

    window: EnduranceProgressWindow | None
    metric: ThresholdMetric | None
    total_zone_minutes: float
    zone_distribution: tuple[ZoneDistributionEntry, ...]
