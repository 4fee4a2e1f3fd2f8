"""State canonicalization and series styling."""

from analytics_core.states.canonical import (
    COMPLIANCE_STATE_ALIASES,
    SERIES_STATE_ALIASES,
    ComplianceState,
    SeriesState,
    canonicalize_state,
    normalize_compliance_state,
    normalize_series_state,
)
from analytics_core.states.chart_style import (
    SERIES_STATE_LEGEND,
    SeriesStyle,
    get_series_style,
    resolve_series_style,
)

__all__ = [
    "COMPLIANCE_STATE_ALIASES",
    "SERIES_STATE_ALIASES",
    "SERIES_STATE_LEGEND",
    "ComplianceState",
    "SeriesState",
    "SeriesStyle",
    "canonicalize_state",
    "get_series_style",
    "normalize_compliance_state",
    "normalize_series_state",
    "resolve_series_style",
]
