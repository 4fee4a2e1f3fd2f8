"""Training block effectiveness.

Compares each block metric's realized value with its target, then rolls the
metrics of a block up into averages, a confidence band and a data quality
flag. Descriptive only: a low index says the block missed its targets, not
what to change.
"""

import math

from loguru import logger

from analytics_core.analysis.types import (
    BlockEffectivenessData,
    BlockEffectivenessSnapshot,
    BlockEffectivenessSummary,
    BlockEffectivenessWindow,
    BlockMetric,
    ConfidenceBand,
    DataQualityFlag,
    MetricDirection,
    TrainingBlock,
)
from analytics_core.analysis.windows import select_window
from analytics_core.states.canonical import canonicalize_state

LOW_CONFIDENCE_THRESHOLD = 0.5
HIGH_CONFIDENCE_THRESHOLD = 0.8
# Metrics with fewer observations mark their block as sparse
SPARSE_SAMPLE_SIZE = 3

METRIC_DIRECTION_ALIASES: dict[str, MetricDirection] = {
    "higher": MetricDirection.HIGHER,
    "lower": MetricDirection.LOWER,
}


def _finite(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def _average(values: list[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def classify_confidence_band(confidence: float) -> ConfidenceBand:
    """Band a 0-1 confidence: >= 0.8 high, >= 0.5 medium, else low."""
    if confidence >= HIGH_CONFIDENCE_THRESHOLD:
        return ConfidenceBand.HIGH
    if confidence >= LOW_CONFIDENCE_THRESHOLD:
        return ConfidenceBand.MEDIUM
    return ConfidenceBand.LOW


def resolve_metric_direction(direction: str | None) -> MetricDirection:
    return canonicalize_state(direction, METRIC_DIRECTION_ALIASES, MetricDirection.HIGHER)


def normalize_block_metric(metric: BlockMetric) -> BlockMetric:
    """Sanitize inputs and derive delta, delta percentage and effectiveness index.

    A non-positive target has no meaningful percentage, so both the delta
    percentage and the effectiveness index are 0 for it.
    """
    target = _finite(metric.target_value)
    realized = _finite(metric.realized_value)
    direction = resolve_metric_direction(metric.direction)
    confidence = min(1.0, max(0.0, _finite(metric.confidence)))
    sample_size = max(0, math.trunc(metric.sample_size)) if math.isfinite(metric.sample_size) else 0

    raw_delta = target - realized if direction == MetricDirection.LOWER else realized - target
    if target > 0:
        delta_percentage = round(raw_delta / target * 100, 1)
        effectiveness_index = round(max(0.0, 100 - abs(delta_percentage)), 1)
    else:
        delta_percentage = 0.0
        effectiveness_index = 0.0

    return metric.model_copy(
        update={
            "target_value": target,
            "realized_value": realized,
            "direction": direction,
            "confidence": confidence,
            "sample_size": sample_size,
            "contributors": tuple(sorted(metric.contributors, key=lambda contributor: contributor.id)),
            "delta_value": round(raw_delta, 1),
            "delta_percentage": delta_percentage,
            "effectiveness_index": effectiveness_index,
        }
    )


def normalize_training_block(block: TrainingBlock) -> TrainingBlock:
    return block.model_copy(update={"metrics": tuple(normalize_block_metric(metric) for metric in block.metrics)})


def normalize_block_window(window: BlockEffectivenessWindow) -> BlockEffectivenessWindow:
    """Normalize every block and order them by start date, then key."""
    blocks = sorted(
        (normalize_training_block(block) for block in window.blocks),
        key=lambda block: (block.start_date, block.key),
    )
    return window.model_copy(update={"blocks": tuple(blocks)})


def normalize_block_effectiveness_data(data: BlockEffectivenessData) -> BlockEffectivenessData:
    return data.model_copy(update={"windows": tuple(normalize_block_window(window) for window in data.windows)})


def _data_quality_flag(block: TrainingBlock, confidence_band: ConfidenceBand) -> DataQualityFlag:
    if not block.metrics or any(metric.sample_size < SPARSE_SAMPLE_SIZE for metric in block.metrics):
        return DataQualityFlag.SPARSE
    if confidence_band == ConfidenceBand.LOW:
        return DataQualityFlag.LOW_QUALITY
    return DataQualityFlag.OK


def summarize_block(block: TrainingBlock) -> BlockEffectivenessSummary:
    """Average a normalized block's metrics into one summary.

    Args:
        block: Block whose metrics went through normalize_block_metric

    Returns:
        Summary with 1-decimal averages and a 2-decimal average confidence.
        A block without metrics averages to 0 and is flagged sparse.
    """
    metrics = block.metrics
    average_confidence = round(_average([metric.confidence for metric in metrics]), 2)
    confidence_band = classify_confidence_band(average_confidence)

    return BlockEffectivenessSummary(
        block=block,
        objective_types=tuple(sorted({metric.objective_type for metric in metrics})),
        average_delta_percentage=round(_average([metric.delta_percentage or 0.0 for metric in metrics]), 1),
        effectiveness_index=round(_average([metric.effectiveness_index or 0.0 for metric in metrics]), 1),
        average_confidence=average_confidence,
        confidence_band=confidence_band,
        data_quality_flag=_data_quality_flag(block, confidence_band),
    )


def build_block_effectiveness_snapshot(
    window: BlockEffectivenessWindow | None,
    block_key: str | None = None,
    metric_key: str | None = None,
) -> BlockEffectivenessSnapshot:
    """Summarize every block of a window and pick the active block and metric.

    The active block is the requested one, else the earliest block. The active
    metric is the requested one within that block, else its first metric.
    """
    if window is None:
        return BlockEffectivenessSnapshot(window=None, block_summaries=(), active_block_summary=None, active_metric=None)

    normalized = normalize_block_window(window)
    summaries = tuple(summarize_block(block) for block in normalized.blocks)

    active_summary = next(
        (summary for summary in summaries if summary.block.key == block_key),
        summaries[0] if summaries else None,
    )
    active_metric = None
    if active_summary is not None:
        metrics = active_summary.block.metrics
        active_metric = next((metric for metric in metrics if metric.key == metric_key), metrics[0] if metrics else None)

    sparse_blocks = [summary.block.key for summary in summaries if summary.data_quality_flag == DataQualityFlag.SPARSE]
    if sparse_blocks:
        logger.debug(f"[BLOCK_EFFECTIVENESS] Window {normalized.key} has sparse blocks: {sparse_blocks}")

    return BlockEffectivenessSnapshot(
        window=normalized,
        block_summaries=summaries,
        active_block_summary=active_summary,
        active_metric=active_metric,
    )


def build_block_effectiveness_view(
    data: BlockEffectivenessData,
    window_key: str | None,
    block_key: str | None = None,
    metric_key: str | None = None,
) -> BlockEffectivenessSnapshot:
    """Select a window (requested, default, first) and build its snapshot."""
    window = select_window(data.windows, window_key, data.default_window_key)
    return build_block_effectiveness_snapshot(window, block_key=block_key, metric_key=metric_key)
