"""Tests for training block effectiveness."""

import math

import pytest

from analytics_core.analysis.block_effectiveness import (
    build_block_effectiveness_snapshot,
    build_block_effectiveness_view,
    classify_confidence_band,
    normalize_block_effectiveness_data,
    normalize_block_metric,
    resolve_metric_direction,
)
from analytics_core.analysis.types import (
    BlockEffectivenessData,
    BlockMetric,
    ConfidenceBand,
    DataQualityFlag,
    MetricDirection,
)


def _metric(key: str, objective: str, target: float, realized: float, direction: str, confidence: float, samples: int) -> dict:
    return {
        "key": key,
        "label": key.replace("_", " "),
        "objectiveType": objective,
        "unit": "",
        "targetValue": target,
        "realizedValue": realized,
        "direction": direction,
        "confidence": confidence,
        "sampleSize": samples,
        "contributors": [],
    }


@pytest.fixture
def block_data() -> BlockEffectivenessData:
    return BlockEffectivenessData.model_validate(
        {
            "defaultWindowKey": "30d",
            "windows": [
                {
                    "key": "7d",
                    "label": "7 days",
                    "blocks": [
                        {
                            "key": "build",
                            "label": "Build",
                            "startDate": "2026-02-10",
                            "metrics": [
                                _metric("squat_1rm", "strength", 170, 173.4, "higher", 0.81, 4),
                                _metric("threshold_pace", "endurance", 4.2, 4.1, "lower", 0.66, 3),
                            ],
                        },
                        {
                            "key": "base",
                            "label": "Base",
                            "startDate": "2026-02-03",
                            "metrics": [
                                _metric("threshold_power", "endurance", 280, 272, "higher", 0.4, 1),
                                _metric("deadlift_1rm", "strength", 0, 185, "higher", 0.49, 2),
                            ],
                        },
                    ],
                },
                {"key": "30d", "label": "30 days", "blocks": []},
            ],
        }
    )


class TestNormalization:
    """Tests for metric and block normalization."""

    def test_blocks_ordered_by_start_date(self, block_data: BlockEffectivenessData) -> None:
        """Test blocks are sorted by start date, then key."""
        window = normalize_block_effectiveness_data(block_data).windows[0]
        assert [block.key for block in window.blocks] == ["base", "build"]

    def test_metric_deltas(self, block_data: BlockEffectivenessData) -> None:
        """Test delta, delta percentage and effectiveness index for both directions."""
        build = normalize_block_effectiveness_data(block_data).windows[0].blocks[1]
        squat, pace = build.metrics

        assert (squat.delta_value, squat.delta_percentage, squat.effectiveness_index) == (3.4, 2.0, 98.0)
        assert squat.confidence == 0.81
        assert (pace.delta_value, pace.delta_percentage, pace.effectiveness_index) == (0.1, 2.4, 97.6)

    def test_non_positive_target(self, block_data: BlockEffectivenessData) -> None:
        """Test a zero target yields zero percentage and index."""
        deadlift = normalize_block_effectiveness_data(block_data).windows[0].blocks[0].metrics[1]

        assert deadlift.delta_value == 185.0
        assert deadlift.delta_percentage == 0.0
        assert deadlift.effectiveness_index == 0.0

    def test_inputs_sanitized(self) -> None:
        """Test confidence is clamped, sample size truncated and non-finite values zeroed."""
        metric = normalize_block_metric(
            BlockMetric.model_validate(
                {
                    "key": "m",
                    "objectiveType": "endurance",
                    "targetValue": 100,
                    "realizedValue": math.nan,
                    "confidence": 1.7,
                    "sampleSize": 4.9,
                    "contributors": [{"id": "s-2"}, {"id": "s-1"}],
                }
            )
        )

        assert metric.realized_value == 0.0
        assert metric.confidence == 1.0
        assert metric.sample_size == 4
        assert metric.direction == MetricDirection.HIGHER
        assert [contributor.id for contributor in metric.contributors] == ["s-1", "s-2"]

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("lower", MetricDirection.LOWER),
            (" LOWER ", MetricDirection.LOWER),
            ("higher", MetricDirection.HIGHER),
            ("sideways", MetricDirection.HIGHER),
            (None, MetricDirection.HIGHER),
        ],
    )
    def test_direction(self, raw: str | None, expected: MetricDirection) -> None:
        """Test only an explicit lower flips the direction."""
        assert resolve_metric_direction(raw) == expected


class TestConfidenceBand:
    """Tests for confidence banding."""

    @pytest.mark.parametrize(
        ("confidence", "expected"),
        [(0.49, ConfidenceBand.LOW), (0.5, ConfidenceBand.MEDIUM), (0.79, ConfidenceBand.MEDIUM), (0.8, ConfidenceBand.HIGH)],
    )
    def test_boundaries(self, confidence: float, expected: ConfidenceBand) -> None:
        """Test the 0.5 / 0.8 boundaries."""
        assert classify_confidence_band(confidence) == expected


class TestSnapshot:
    """Tests for block effectiveness snapshots."""

    def test_active_block_summary(self, block_data: BlockEffectivenessData) -> None:
        """Test averages, objective types and quality flag of the requested block."""
        snapshot = build_block_effectiveness_view(block_data, "7d", block_key="build")
        summary = snapshot.active_block_summary

        assert summary is not None
        assert summary.block.key == "build"
        assert summary.objective_types == ("endurance", "strength")
        assert summary.average_delta_percentage == 2.2
        assert summary.effectiveness_index == 97.8
        assert summary.confidence_band == ConfidenceBand.MEDIUM
        assert summary.data_quality_flag == DataQualityFlag.OK
        assert snapshot.active_metric is not None
        assert snapshot.active_metric.key == "squat_1rm"

    def test_sparse_block(self, block_data: BlockEffectivenessData) -> None:
        """Test small samples flag a block as sparse."""
        snapshot = build_block_effectiveness_view(block_data, "7d")
        base = next(summary for summary in snapshot.block_summaries if summary.block.key == "base")

        assert base.data_quality_flag == DataQualityFlag.SPARSE
        assert base.confidence_band == ConfidenceBand.LOW

    def test_fallbacks(self, block_data: BlockEffectivenessData) -> None:
        """Test unknown block and metric keys fall back to the first of each."""
        snapshot = build_block_effectiveness_view(block_data, "7d", block_key="missing", metric_key="threshold_pace")

        assert snapshot.active_block_summary is not None
        assert snapshot.active_block_summary.block.key == "base"
        assert snapshot.active_metric is not None
        assert snapshot.active_metric.key == "threshold_power"

    def test_requested_metric(self, block_data: BlockEffectivenessData) -> None:
        """Test a metric key within the active block is honored."""
        snapshot = build_block_effectiveness_view(block_data, "7d", block_key="build", metric_key="threshold_pace")
        assert snapshot.active_metric is not None
        assert snapshot.active_metric.key == "threshold_pace"

    def test_low_quality_block(self) -> None:
        """Test enough samples but low confidence is flagged low-quality."""
        window = {
            "key": "w",
            "blocks": [
                {"key": "b", "startDate": "2026-01-05", "metrics": [_metric("vo2", "endurance", 50, 50, "higher", 0.2, 6)]},
            ],
        }
        snapshot = build_block_effectiveness_view(BlockEffectivenessData.model_validate({"windows": [window]}), "w")

        assert snapshot.active_block_summary is not None
        assert snapshot.active_block_summary.data_quality_flag == DataQualityFlag.LOW_QUALITY
        assert snapshot.active_block_summary.effectiveness_index == 100.0

    def test_empty_default_window(self, block_data: BlockEffectivenessData) -> None:
        """Test a missing key falls back to the default window, which has no blocks."""
        snapshot = build_block_effectiveness_view(block_data, "missing")

        assert snapshot.window is not None
        assert snapshot.window.key == "30d"
        assert snapshot.block_summaries == ()
        assert snapshot.active_block_summary is None
        assert snapshot.active_metric is None

    def test_no_window(self) -> None:
        """Test a snapshot without any window."""
        snapshot = build_block_effectiveness_snapshot(None)
        assert snapshot.window is None
        assert snapshot.block_summaries == ()
