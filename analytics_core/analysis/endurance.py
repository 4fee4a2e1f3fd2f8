"""Endurance progress.

Time-in-zone distribution over the five intensity zones plus dated threshold
estimates (pace, power) per window.
"""

import math
from collections.abc import Iterable

from loguru import logger

from analytics_core.analysis.types import (
    EnduranceProgressData,
    EnduranceProgressSnapshot,
    EnduranceProgressWindow,
    EnduranceZone,
    ThresholdMetric,
    ThresholdPoint,
    ZoneDistributionEntry,
    ZoneMinutes,
)
from analytics_core.analysis.windows import derive_day_label, select_window


def _finite(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def normalize_zone_distribution(distribution: Iterable[ZoneMinutes]) -> tuple[ZoneMinutes, ...]:
    """Sum minutes per zone over all five zones, z1 first.

    Unknown zones are ignored. Negative or non-finite minutes count as 0.
    """
    totals = dict.fromkeys(EnduranceZone, 0.0)
    for entry in distribution:
        try:
            zone = EnduranceZone(entry.zone.strip().lower())
        except ValueError:
            logger.debug(f"[ENDURANCE] Ignoring unknown zone '{entry.zone}'")
            continue
        totals[zone] += max(0.0, _finite(entry.minutes))
    return tuple(ZoneMinutes(zone=zone.value, minutes=minutes) for zone, minutes in totals.items())


def normalize_threshold_point(point: ThresholdPoint) -> ThresholdPoint:
    return point.model_copy(
        update={
            "day_label": derive_day_label(point.date, point.day_label),
            "value": _finite(point.value),
            "confidence": min(1.0, max(0.0, _finite(point.confidence))),
        }
    )


def normalize_threshold_metric(metric: ThresholdMetric) -> ThresholdMetric:
    points = sorted((normalize_threshold_point(point) for point in metric.points), key=lambda point: point.date)
    return metric.model_copy(update={"points": tuple(points)})


def normalize_endurance_window(window: EnduranceProgressWindow) -> EnduranceProgressWindow:
    return window.model_copy(
        update={
            "zone_distribution": normalize_zone_distribution(window.zone_distribution),
            "threshold_metrics": tuple(normalize_threshold_metric(metric) for metric in window.threshold_metrics),
        }
    )


def normalize_endurance_progress_data(data: EnduranceProgressData) -> EnduranceProgressData:
    return data.model_copy(update={"windows": tuple(normalize_endurance_window(window) for window in data.windows)})


def build_endurance_progress_snapshot(
    window: EnduranceProgressWindow | None,
    metric_key: str | None = None,
) -> EnduranceProgressSnapshot:
    """Compute zone shares and pick the threshold metric for one window.

    Args:
        window: Raw or normalized window; None yields an empty snapshot
        metric_key: Requested threshold metric; falls back to the first metric

    Returns:
        EnduranceProgressSnapshot with percentages rounded to one decimal.
        Every share is 0 when the window has no zone minutes.
    """
    if window is None:
        return EnduranceProgressSnapshot(window=None, metric=None, total_zone_minutes=0.0, zone_distribution=())

    normalized = normalize_endurance_window(window)
    total_minutes = sum(entry.minutes for entry in normalized.zone_distribution)
    distribution = tuple(
        ZoneDistributionEntry(
            zone=entry.zone,
            minutes=entry.minutes,
            percentage=round(entry.minutes / total_minutes * 100, 1) if total_minutes > 0 else 0.0,
        )
        for entry in normalized.zone_distribution
    )

    metrics = normalized.threshold_metrics
    metric = next((item for item in metrics if item.key == metric_key), metrics[0] if metrics else None)

    return EnduranceProgressSnapshot(
        window=normalized,
        metric=metric,
        total_zone_minutes=total_minutes,
        zone_distribution=distribution,
    )


def build_endurance_progress_view(
    data: EnduranceProgressData,
    window_key: str | None,
    metric_key: str | None = None,
) -> EnduranceProgressSnapshot:
    """Select a window (requested, default, first) and build its snapshot."""
    window = select_window(data.windows, window_key, data.default_window_key)
    return build_endurance_progress_snapshot(window, metric_key=metric_key)
