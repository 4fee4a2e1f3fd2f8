"""Tests for the adaptation risk timeline."""

import math

import pytest

from analytics_core.analysis.risk import (
    build_adaptation_risk_snapshot,
    build_adaptation_risk_view,
    clamp_score,
    normalize_adaptation_risk_data,
    resolve_risk_zone,
)
from analytics_core.analysis.types import AdaptationRiskData, AdaptationRiskWindow, RiskZone


@pytest.fixture
def risk_data() -> AdaptationRiskData:
    return AdaptationRiskData.model_validate(
        {
            "defaultWindowKey": "30d",
            "windows": [
                {
                    "key": "7d",
                    "label": "7 days",
                    "points": [
                        {
                            "date": "2026-02-12",
                            "dayLabel": "Thu",
                            "combinedFatigueScore": 12.8,
                            "systemCapacityGate": 1.25,
                            "contributors": [{"id": "s-9", "label": "Intervals", "href": "/calendar?sessionId=s-9"}],
                        },
                        {
                            "date": "2026-02-10",
                            "combinedFatigueScore": 4.6,
                            "systemCapacityGate": -0.6,
                        },
                        {
                            "date": "2026-02-11",
                            "combinedFatigueScore": 6,
                            "systemCapacityGate": math.nan,
                        },
                    ],
                },
                {"key": "30d", "label": "30 days", "points": []},
            ],
        }
    )


class TestNormalization:
    """Tests for risk point normalization."""

    def test_points_sorted_and_gated(self, risk_data: AdaptationRiskData) -> None:
        """Test ascending dates and clamped gated scores."""
        window = normalize_adaptation_risk_data(risk_data).windows[0]

        assert [point.date for point in window.points] == ["2026-02-10", "2026-02-11", "2026-02-12"]
        assert [point.gated_risk_score for point in window.points] == [0.0, 6.0, 10.0]

    def test_non_finite_gate_defaults_to_one(self, risk_data: AdaptationRiskData) -> None:
        """Test a NaN gate is replaced by 1."""
        window = normalize_adaptation_risk_data(risk_data).windows[0]
        assert window.points[1].system_capacity_gate == 1.0

    def test_day_labels(self, risk_data: AdaptationRiskData) -> None:
        """Test missing labels are derived and supplied labels kept."""
        window = normalize_adaptation_risk_data(risk_data).windows[0]
        assert [point.day_label for point in window.points] == ["Tue", "Wed", "Thu"]

    def test_normalization_is_idempotent(self, risk_data: AdaptationRiskData) -> None:
        """Test normalizing twice changes nothing."""
        once = normalize_adaptation_risk_data(risk_data)
        assert normalize_adaptation_risk_data(once) == once

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(-1.0, 0.0), (0.0, 0.0), (5.5, 5.5), (10.0, 10.0), (11.0, 10.0), (math.inf, 0.0), (math.nan, 0.0)],
    )
    def test_clamp_score(self, value: float, expected: float) -> None:
        """Test scores are clamped to 0-10."""
        assert clamp_score(value) == expected


class TestZones:
    """Tests for risk zone classification."""

    @pytest.mark.parametrize(
        ("score", "expected"),
        [(0, RiskZone.GREEN), (4.99, RiskZone.GREEN), (5, RiskZone.YELLOW), (6.99, RiskZone.YELLOW), (7, RiskZone.RED), (10, RiskZone.RED)],
    )
    def test_threshold_boundaries(self, score: float, expected: RiskZone) -> None:
        """Test classification at the 5 / 7 boundaries."""
        assert resolve_risk_zone(score, yellow_threshold=5, red_threshold=7) == expected


class TestSnapshot:
    """Tests for zoned risk snapshots."""

    def test_peak_and_latest(self, risk_data: AdaptationRiskData) -> None:
        """Test the peak point and the latest zone."""
        snapshot = build_adaptation_risk_view(risk_data, "7d")

        assert [point.zone for point in snapshot.points] == [RiskZone.GREEN, RiskZone.YELLOW, RiskZone.RED]
        assert snapshot.peak is not None
        assert snapshot.peak.date == "2026-02-12"
        assert snapshot.peak_zone == RiskZone.RED
        assert snapshot.latest_zone == RiskZone.RED
        assert snapshot.peak.contributors[0].id == "s-9"

    def test_default_window_fallback(self, risk_data: AdaptationRiskData) -> None:
        """Test a missing key falls back to the default (empty) window."""
        snapshot = build_adaptation_risk_view(risk_data, "missing")

        assert snapshot.window is not None
        assert snapshot.window.key == "30d"
        assert snapshot.points == ()
        assert snapshot.peak is None
        assert snapshot.peak_zone == RiskZone.GREEN

    def test_no_window(self) -> None:
        """Test a snapshot without any window."""
        snapshot = build_adaptation_risk_snapshot(None)
        assert snapshot.window is None
        assert snapshot.latest_zone == RiskZone.GREEN

    def test_peak_tie_prefers_earliest(self) -> None:
        """Test the earliest point wins when gated scores tie."""
        window = AdaptationRiskWindow.model_validate(
            {
                "key": "w",
                "points": [
                    {"date": "2026-02-02", "combinedFatigueScore": 8},
                    {"date": "2026-02-01", "combinedFatigueScore": 8},
                ],
            }
        )
        snapshot = build_adaptation_risk_snapshot(window)
        assert snapshot.peak is not None
        assert snapshot.peak.date == "2026-02-01"
