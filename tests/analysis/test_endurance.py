"""Tests for endurance progress."""

import math

import pytest

from analytics_core.analysis.endurance import (
    build_endurance_progress_snapshot,
    build_endurance_progress_view,
    normalize_endurance_progress_data,
    normalize_zone_distribution,
)
from analytics_core.analysis.types import EnduranceProgressData, EnduranceZone, ZoneMinutes


@pytest.fixture
def endurance_data() -> EnduranceProgressData:
    return EnduranceProgressData.model_validate(
        {
            "defaultWindowKey": "30d",
            "windows": [
                {
                    "key": "7d",
                    "label": "7 days",
                    "zoneDistribution": [
                        {"zone": "z3", "minutes": 50},
                        {"zone": "z2", "minutes": 30},
                        {"zone": "z5", "minutes": -12},
                    ],
                    "thresholdMetrics": [
                        {
                            "key": "pace",
                            "label": "Threshold pace",
                            "unit": "min/km",
                            "points": [
                                {"date": "2026-02-12", "value": 4.2, "confidence": 1.2, "inferred": True},
                                {"date": "2026-02-10", "value": 4.35, "confidence": -0.2, "inferred": False},
                            ],
                        },
                        {
                            "key": "power",
                            "label": "Threshold power",
                            "unit": "W",
                            "points": [{"date": "2026-02-11", "value": 285, "confidence": 0.74, "inferred": True}],
                        },
                    ],
                },
                {"key": "30d", "label": "30 days", "zoneDistribution": [], "thresholdMetrics": []},
            ],
        }
    )


class TestNormalization:
    """Tests for zone and threshold normalization."""

    def test_zone_distribution_covers_all_zones(self, endurance_data: EnduranceProgressData) -> None:
        """Test every zone appears in order and negative minutes count as 0."""
        window = normalize_endurance_progress_data(endurance_data).windows[0]

        assert [(entry.zone, entry.minutes) for entry in window.zone_distribution] == [
            ("z1", 0.0),
            ("z2", 30.0),
            ("z3", 50.0),
            ("z4", 0.0),
            ("z5", 0.0),
        ]

    def test_duplicate_and_unknown_zones(self, loguru_messages: list[str]) -> None:
        """Test duplicate zones accumulate and unknown zones are ignored."""
        distribution = normalize_zone_distribution(
            [
                ZoneMinutes(zone="Z1", minutes=10),
                ZoneMinutes(zone="z1", minutes=5),
                ZoneMinutes(zone="z6", minutes=99),
                ZoneMinutes(zone="z4", minutes=math.inf),
            ]
        )

        assert [entry.minutes for entry in distribution] == [15.0, 0.0, 0.0, 0.0, 0.0]
        assert any("Ignoring unknown zone 'z6'" in message for message in loguru_messages)

    def test_threshold_points(self, endurance_data: EnduranceProgressData) -> None:
        """Test points are sorted by date, confidence clamped and labels derived."""
        pace = normalize_endurance_progress_data(endurance_data).windows[0].threshold_metrics[0]

        assert [point.date for point in pace.points] == ["2026-02-10", "2026-02-12"]
        assert [point.confidence for point in pace.points] == [0.0, 1.0]
        assert [point.day_label for point in pace.points] == ["Tue", "Thu"]


class TestSnapshot:
    """Tests for endurance progress snapshots."""

    def test_zone_percentages(self, endurance_data: EnduranceProgressData) -> None:
        """Test zone shares of the total minutes."""
        snapshot = build_endurance_progress_view(endurance_data, "7d", metric_key="pace")

        assert snapshot.total_zone_minutes == 80.0
        assert [(entry.zone, entry.percentage) for entry in snapshot.zone_distribution] == [
            (EnduranceZone.Z1, 0.0),
            (EnduranceZone.Z2, 37.5),
            (EnduranceZone.Z3, 62.5),
            (EnduranceZone.Z4, 0.0),
            (EnduranceZone.Z5, 0.0),
        ]
        assert snapshot.metric is not None
        assert snapshot.metric.key == "pace"

    def test_metric_fallback(self, endurance_data: EnduranceProgressData) -> None:
        """Test an unknown metric key falls back to the first metric."""
        snapshot = build_endurance_progress_view(endurance_data, "7d", metric_key="heart_rate")
        assert snapshot.metric is not None
        assert snapshot.metric.key == "pace"

    def test_empty_default_window(self, endurance_data: EnduranceProgressData) -> None:
        """Test the default window without minutes has zero shares and no metric."""
        snapshot = build_endurance_progress_view(endurance_data, "missing")

        assert snapshot.window is not None
        assert snapshot.window.key == "30d"
        assert snapshot.total_zone_minutes == 0.0
        assert [entry.percentage for entry in snapshot.zone_distribution] == [0.0] * 5
        assert snapshot.metric is None

    def test_first_window_when_default_unknown(self, endurance_data: EnduranceProgressData) -> None:
        """Test selection falls back to the first window when the default key is unknown."""
        data = endurance_data.model_copy(update={"default_window_key": "unknown"})
        assert build_endurance_progress_view(data, "missing").window.key == "7d"

    def test_no_window(self) -> None:
        """Test a snapshot without any window."""
        snapshot = build_endurance_progress_snapshot(None)
        assert snapshot.window is None
        assert snapshot.zone_distribution == ()
