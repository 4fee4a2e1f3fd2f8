"""Session compliance computation.

Roll a window of session records into adherence metrics and a per-day trend.

Pipeline:
1. Normalize each session (canonical state, day label, display categories)
2. Count states - every session lands in exactly one bucket
3. Adherence percentage via the configured denominator policy
4. Zone classification against the adherence thresholds
5. Per-day trend with the same counting and adherence logic

Read-only and deterministic. No persistence, no recommendations.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from loguru import logger
from pydantic import ValidationError

from analytics_core.analysis.adherence import (
    AdherencePolicy,
    classify_adherence_state,
    compute_adherence_percentage,
    get_adherence_policy,
)
from analytics_core.analysis.types import (
    ComplianceCounts,
    ComplianceData,
    ComplianceSnapshot,
    ComplianceTrendPoint,
    ComplianceWindow,
    NormalizedComplianceData,
    NormalizedComplianceWindow,
    NormalizedSession,
    SessionRecord,
)
from analytics_core.analysis.windows import calendar_day_key, derive_day_label, select_window
from analytics_core.states.canonical import ComplianceState, normalize_compliance_state

UNASSIGNED_PLAN_BLOCK = "Unassigned"
UNSPECIFIED_MODALITY = "Unspecified"
ALL_FILTER_VALUE = "all"


def parse_compliance_data(raw: Mapping[str, Any]) -> ComplianceData:
    """Validate a raw compliance payload record by record.

    A malformed session or window is dropped with a warning so one bad
    record cannot break the rest of the batch.

    Args:
        raw: Backend payload ({"defaultWindowKey": ..., "windows": [...]})

    Returns:
        ComplianceData holding every valid window and session
    """
    windows: list[ComplianceWindow] = []
    for window_index, raw_window in enumerate(raw.get("windows") or []):
        if not isinstance(raw_window, Mapping):
            logger.warning(f"[COMPLIANCE] Dropping malformed window {window_index}: not a mapping")
            continue
        sessions: list[SessionRecord] = []
        for session_index, raw_session in enumerate(raw_window.get("sessions") or []):
            try:
                sessions.append(SessionRecord.model_validate(raw_session))
            except ValidationError as e:
                logger.warning(
                    f"[COMPLIANCE] Dropping malformed session {session_index} in window {window_index}: {e.error_count()} error(s)"
                )
        try:
            windows.append(ComplianceWindow.model_validate({**raw_window, "sessions": sessions}))
        except ValidationError as e:
            logger.warning(f"[COMPLIANCE] Dropping malformed window {window_index}: {e.error_count()} error(s)")

    default_key = raw.get("defaultWindowKey", raw.get("default_window_key"))
    return ComplianceData(default_window_key=default_key, windows=tuple(windows))


def _normalize_category(value: str | None, fallback: str) -> str:
    words = (value or "").split()
    if not words:
        return fallback
    return " ".join(word[0].upper() + word[1:].lower() for word in words)


def _normalize_filter_value(value: str | None) -> str | None:
    normalized = " ".join((value or "").split()).lower()
    if not normalized or normalized == ALL_FILTER_VALUE:
        return None
    return normalized


def normalize_session(record: SessionRecord) -> NormalizedSession:
    return NormalizedSession(
        id=record.id,
        label=record.label,
        href=record.href,
        date=record.date,
        day_label=derive_day_label(record.date, record.day_label),
        plan_block=_normalize_category(record.plan_block, UNASSIGNED_PLAN_BLOCK),
        modality=_normalize_category(record.modality, UNSPECIFIED_MODALITY),
        state=normalize_compliance_state(record.state),
    )


def normalize_window(window: ComplianceWindow) -> NormalizedComplianceWindow:
    """Normalize every session and order them by date, then id."""
    sessions = sorted(
        (normalize_session(record) for record in window.sessions),
        key=lambda session: (session.date, session.id),
    )
    return NormalizedComplianceWindow(key=window.key, label=window.label, sessions=tuple(sessions))


def normalize_compliance_data(data: ComplianceData) -> NormalizedComplianceData:
    return NormalizedComplianceData(
        default_window_key=data.default_window_key,
        windows=tuple(normalize_window(window) for window in data.windows),
    )


def count_states(sessions: Iterable[NormalizedSession]) -> ComplianceCounts:
    """Partition sessions by canonical state."""
    counts = dict.fromkeys(ComplianceState, 0)
    for session in sessions:
        counts[session.state] += 1
    return ComplianceCounts(
        planned_count=counts[ComplianceState.PLANNED],
        completed_count=counts[ComplianceState.COMPLETED],
        move_count=counts[ComplianceState.MOVED],
        skip_count=counts[ComplianceState.SKIPPED],
    )


def build_compliance_trend(
    sessions: Iterable[NormalizedSession],
    policy: AdherencePolicy | None = None,
) -> list[ComplianceTrendPoint]:
    """Group sessions by calendar day in chronological order.

    Days without sessions are omitted.
    """
    resolved_policy = policy or get_adherence_policy()

    by_day: dict[str, list[NormalizedSession]] = {}
    for session in sessions:
        by_day.setdefault(calendar_day_key(session.date), []).append(session)

    trend: list[ComplianceTrendPoint] = []
    for day in sorted(by_day):
        day_sessions = by_day[day]
        counts = count_states(day_sessions)
        trend.append(
            ComplianceTrendPoint(
                date=day,
                day_label=day_sessions[0].day_label,
                planned_count=counts.planned_count,
                completed_count=counts.completed_count,
                move_count=counts.move_count,
                skip_count=counts.skip_count,
                adherence_percentage=compute_adherence_percentage(counts, resolved_policy),
                sessions=tuple(day_sessions),
            )
        )
    return trend


def build_compliance_snapshot(
    window: NormalizedComplianceWindow | ComplianceWindow | None,
    plan_block: str | None = None,
    modality: str | None = None,
    policy: AdherencePolicy | None = None,
) -> ComplianceSnapshot:
    """Compute the compliance snapshot for one window.

    Args:
        window: Raw or normalized window; None is treated as an empty window
        plan_block: Optional case-insensitive plan block filter ("all" = none)
        modality: Optional case-insensitive modality filter ("all" = none)
        policy: Adherence denominator policy (default from settings)

    Returns:
        ComplianceSnapshot. An empty window yields zero counts, 100% adherence,
        green zone and an empty trend.
    """
    if isinstance(window, ComplianceWindow):
        window = normalize_window(window)
    resolved_policy = policy or get_adherence_policy()

    sessions = window.sessions if window is not None else ()
    available_plan_blocks = tuple(sorted({session.plan_block for session in sessions}))
    available_modalities = tuple(sorted({session.modality for session in sessions}))

    plan_block_filter = _normalize_filter_value(plan_block)
    modality_filter = _normalize_filter_value(modality)
    filtered = [
        session
        for session in sessions
        if (plan_block_filter is None or session.plan_block.lower() == plan_block_filter)
        and (modality_filter is None or session.modality.lower() == modality_filter)
    ]

    counts = count_states(filtered)
    adherence_percentage = compute_adherence_percentage(counts, resolved_policy)
    adherence_state = classify_adherence_state(adherence_percentage)

    logger.debug(
        f"[COMPLIANCE] Snapshot window={window.key if window else None} sessions={len(filtered)}/{len(sessions)} "
        f"adherence={adherence_percentage}% state={adherence_state}"
    )

    return ComplianceSnapshot(
        window=window,
        planned_count=counts.planned_count,
        completed_count=counts.completed_count,
        move_count=counts.move_count,
        skip_count=counts.skip_count,
        adherence_percentage=adherence_percentage,
        adherence_state=adherence_state,
        available_plan_blocks=available_plan_blocks,
        available_modalities=available_modalities,
        trend=tuple(build_compliance_trend(filtered, resolved_policy)),
    )


def build_session_compliance_snapshot(
    data: NormalizedComplianceData | ComplianceData,
    window_key: str | None,
    plan_block: str | None = None,
    modality: str | None = None,
    policy: AdherencePolicy | None = None,
) -> ComplianceSnapshot:
    """Select a window (requested, default, first) and build its snapshot."""
    if isinstance(data, ComplianceData):
        data = normalize_compliance_data(data)
    window = select_window(data.windows, window_key, data.default_window_key)
    if window is None:
        logger.debug(f"[COMPLIANCE] No window available for key={window_key}")
    return build_compliance_snapshot(window, plan_block=plan_block, modality=modality, policy=policy)
