"""Adaptation risk timeline.

Combined fatigue is gated by current system capacity and classified into
green / yellow / red zones. Zones are descriptive, not prescriptive.
"""

import math

from loguru import logger

from analytics_core.analysis.types import (
    AdaptationRiskData,
    AdaptationRiskPoint,
    AdaptationRiskSnapshot,
    AdaptationRiskWindow,
    ClassifiedRiskPoint,
    RiskZone,
)
from analytics_core.analysis.windows import derive_day_label, select_window
from analytics_core.config.settings import settings

MIN_SCORE = 0.0
MAX_SCORE = 10.0
DEFAULT_CAPACITY_GATE = 1.0


def clamp_score(value: float) -> float:
    """Clamp a fatigue score to 0-10; non-finite values become 0."""
    if not math.isfinite(value):
        return MIN_SCORE
    return min(MAX_SCORE, max(MIN_SCORE, value))


def normalize_risk_point(point: AdaptationRiskPoint) -> AdaptationRiskPoint:
    combined = clamp_score(point.combined_fatigue_score)
    gate = point.system_capacity_gate if math.isfinite(point.system_capacity_gate) else DEFAULT_CAPACITY_GATE

    return point.model_copy(
        update={
            "day_label": derive_day_label(point.date, point.day_label),
            "combined_fatigue_score": combined,
            "system_capacity_gate": gate,
            "gated_risk_score": clamp_score(combined * gate),
        }
    )


def normalize_risk_window(window: AdaptationRiskWindow) -> AdaptationRiskWindow:
    points = sorted((normalize_risk_point(point) for point in window.points), key=lambda point: point.date)
    return window.model_copy(update={"points": tuple(points)})


def normalize_adaptation_risk_data(data: AdaptationRiskData) -> AdaptationRiskData:
    return data.model_copy(update={"windows": tuple(normalize_risk_window(window) for window in data.windows)})


def resolve_risk_zone(
    score: float,
    yellow_threshold: float | None = None,
    red_threshold: float | None = None,
) -> RiskZone:
    """Classify a gated risk score (0-10) into a zone.

    Args:
        score: Gated risk score
        yellow_threshold: Minimum score for yellow (default from settings)
        red_threshold: Minimum score for red (default from settings)
    """
    yellow = settings.risk_yellow_threshold if yellow_threshold is None else yellow_threshold
    red = settings.risk_red_threshold if red_threshold is None else red_threshold

    if score >= red:
        return RiskZone.RED
    if score >= yellow:
        return RiskZone.YELLOW
    return RiskZone.GREEN


def _classify_point(point: AdaptationRiskPoint) -> ClassifiedRiskPoint:
    gated = point.gated_risk_score if point.gated_risk_score is not None else MIN_SCORE
    return ClassifiedRiskPoint(
        date=point.date,
        day_label=point.day_label or point.date,
        gated_risk_score=gated,
        zone=resolve_risk_zone(gated),
        contributors=point.contributors,
    )


def build_adaptation_risk_snapshot(window: AdaptationRiskWindow | None) -> AdaptationRiskSnapshot:
    """Zone every point of a window and pick out the peak and latest zones.

    The window is normalized here, so raw windows are accepted.
    """
    if window is None:
        return AdaptationRiskSnapshot(window=None, points=(), peak=None, peak_zone=RiskZone.GREEN, latest_zone=RiskZone.GREEN)

    normalized = normalize_risk_window(window)
    points = tuple(_classify_point(point) for point in normalized.points)
    if not points:
        return AdaptationRiskSnapshot(
            window=normalized, points=(), peak=None, peak_zone=RiskZone.GREEN, latest_zone=RiskZone.GREEN
        )

    peak = max(points, key=lambda point: point.gated_risk_score)
    if peak.zone == RiskZone.RED:
        logger.debug(f"[RISK] Window {normalized.key} peaks in red zone on {peak.date} (score={peak.gated_risk_score})")

    return AdaptationRiskSnapshot(
        window=normalized,
        points=points,
        peak=peak,
        peak_zone=peak.zone,
        latest_zone=points[-1].zone,
    )


def build_adaptation_risk_view(data: AdaptationRiskData, window_key: str | None) -> AdaptationRiskSnapshot:
    """Select a window (requested, default, first) and build its snapshot."""
    window = select_window(data.windows, window_key, data.default_window_key)
    return build_adaptation_risk_snapshot(window)
