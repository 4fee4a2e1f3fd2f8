"""Axis fatigue trend computation.

Per-day neural / metabolic / mechanical / recruitment fatigue for planned and
completed series, plus a simple linear trend per axis.
"""

import numpy as np

from analytics_core.analysis.risk import clamp_score
from analytics_core.analysis.types import (
    AxisFatigueData,
    AxisFatigueSeriesPoint,
    AxisFatigueTrendDay,
    AxisFatigueWindow,
    AxisTrend,
)
from analytics_core.analysis.windows import derive_day_label
from analytics_core.states.canonical import SeriesState, normalize_series_state

FATIGUE_AXES = ("neural", "metabolic", "mechanical", "recruitment")

TREND_FLAT_TOLERANCE = 0.01
MIN_TREND_POINTS = 3


def compute_trend(values: list[float]) -> dict:
    """Compute simple linear trend from a list of values.

    Args:
        values: List of numeric values over time (chronological order)

    Returns:
        Dictionary with:
        - direction: "up", "down", "flat", or "unknown"
        - slope: Linear slope of the trend
    """
    if len(values) < MIN_TREND_POINTS:
        return {"direction": "unknown", "slope": 0.0}

    x = np.arange(len(values), dtype=float)
    y = np.array(values, dtype=float)
    slope = float(np.polyfit(x, y, 1)[0])

    if slope > TREND_FLAT_TOLERANCE:
        direction = "up"
    elif slope < -TREND_FLAT_TOLERANCE:
        direction = "down"
    else:
        direction = "flat"

    return {
        "direction": direction,
        "slope": slope,
    }


def normalize_series_point(point: AxisFatigueSeriesPoint) -> AxisFatigueSeriesPoint:
    return AxisFatigueSeriesPoint(**{axis: clamp_score(getattr(point, axis)) for axis in FATIGUE_AXES})


def normalize_fatigue_day(day: AxisFatigueTrendDay) -> AxisFatigueTrendDay:
    return day.model_copy(
        update={
            "day_label": derive_day_label(day.date, day.day_label),
            "planned": normalize_series_point(day.planned),
            "completed": normalize_series_point(day.completed),
        }
    )


def normalize_fatigue_window(window: AxisFatigueWindow) -> AxisFatigueWindow:
    days = sorted((normalize_fatigue_day(day) for day in window.days), key=lambda day: day.date)
    return window.model_copy(update={"days": tuple(days)})


def normalize_axis_fatigue_data(data: AxisFatigueData) -> AxisFatigueData:
    return data.model_copy(update={"windows": tuple(normalize_fatigue_window(window) for window in data.windows)})


def summarize_axis_trends(window: AxisFatigueWindow, series: str | None = "completed") -> list[AxisTrend]:
    """Trend direction per fatigue axis for one series of a window.

    Args:
        window: Raw or normalized window
        series: Series state token; canonicalized, unknown tokens mean planned
    """
    state = normalize_series_state(series)
    days = normalize_fatigue_window(window).days
    points = [day.completed if state == SeriesState.COMPLETED else day.planned for day in days]

    trends: list[AxisTrend] = []
    for axis in FATIGUE_AXES:
        result = compute_trend([getattr(point, axis) for point in points])
        trends.append(AxisTrend(axis=axis, direction=result["direction"], slope=result["slope"]))
    return trends
