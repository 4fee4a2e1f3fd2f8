"""Analysis module - compliance, adaptation risk and fatigue trends.

This module provides:
- Session compliance snapshots with adherence zones and per-day trends
- Named adherence denominator policies
- Adaptation risk timeline zoning
- Axis fatigue normalization and linear trends
- Training block effectiveness summaries
- Endurance zone distribution and threshold estimates
"""

from analytics_core.analysis.adherence import (
    ADHERENCE_POLICIES,
    classify_adherence_state,
    compute_adherence_percentage,
    get_adherence_policy,
)
from analytics_core.analysis.block_effectiveness import (
    build_block_effectiveness_snapshot,
    build_block_effectiveness_view,
    classify_confidence_band,
    normalize_block_effectiveness_data,
)
from analytics_core.analysis.compliance import (
    build_compliance_snapshot,
    build_compliance_trend,
    build_session_compliance_snapshot,
    count_states,
    normalize_compliance_data,
    normalize_session,
    normalize_window,
    parse_compliance_data,
)
from analytics_core.analysis.endurance import (
    build_endurance_progress_snapshot,
    build_endurance_progress_view,
    normalize_endurance_progress_data,
)
from analytics_core.analysis.risk import (
    build_adaptation_risk_snapshot,
    build_adaptation_risk_view,
    normalize_adaptation_risk_data,
    resolve_risk_zone,
)
from analytics_core.analysis.trends import compute_trend, normalize_axis_fatigue_data, summarize_axis_trends
from analytics_core.analysis.types import ComplianceSnapshot, RiskZone
from analytics_core.analysis.windows import select_window

__all__ = [
    "ADHERENCE_POLICIES",
    "ComplianceSnapshot",
    "RiskZone",
    "build_adaptation_risk_snapshot",
    "build_adaptation_risk_view",
    "build_block_effectiveness_snapshot",
    "build_block_effectiveness_view",
    "build_compliance_snapshot",
    "build_compliance_trend",
    "build_endurance_progress_snapshot",
    "build_endurance_progress_view",
    "build_session_compliance_snapshot",
    "classify_adherence_state",
    "classify_confidence_band",
    "compute_adherence_percentage",
    "compute_trend",
    "count_states",
    "get_adherence_policy",
    "normalize_adaptation_risk_data",
    "normalize_axis_fatigue_data",
    "normalize_block_effectiveness_data",
    "normalize_compliance_data",
    "normalize_endurance_progress_data",
    "normalize_session",
    "normalize_window",
    "parse_compliance_data",
    "resolve_risk_zone",
    "select_window",
    "summarize_axis_trends",
]
