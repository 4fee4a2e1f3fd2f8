"""State canonicalization.

Maps free-form backend status tokens onto fixed, domain-specific enumerations.
Alias sets are data: adding an alias is a table change, not a code change.

Total functions only. Unknown or empty tokens resolve to the domain default
so an unexpected backend value can never block rendering.
"""

from collections.abc import Mapping
from enum import StrEnum
from typing import TypeVar

_StateT = TypeVar("_StateT", bound=StrEnum)


class SeriesState(StrEnum):
    """Chart series state (audit charts, fatigue overlays)."""

    COMPLETED = "completed"
    PLANNED = "planned"


class ComplianceState(StrEnum):
    """Session compliance state."""

    PLANNED = "planned"
    COMPLETED = "completed"
    MOVED = "moved"
    SKIPPED = "skipped"


COMPLETED_ALIASES = frozenset({"completed", "done", "executed", "logged"})
PLANNED_ALIASES = frozenset({"planned", "pending", "scheduled"})

DEFAULT_SERIES_STATE = SeriesState.PLANNED
DEFAULT_COMPLIANCE_STATE = ComplianceState.PLANNED


def _alias_table(groups: Mapping[_StateT, frozenset[str]]) -> dict[str, _StateT]:
    table: dict[str, _StateT] = {}
    for state, aliases in groups.items():
        for alias in aliases:
            if alias in table:
                raise ValueError(f"Alias '{alias}' maps to both {table[alias]} and {state}")
            table[alias] = state
    return table


SERIES_STATE_ALIASES: dict[str, SeriesState] = _alias_table(
    {
        SeriesState.COMPLETED: COMPLETED_ALIASES,
        SeriesState.PLANNED: PLANNED_ALIASES,
    }
)

# moved/skipped are canonical values in their own right, no extra aliases
COMPLIANCE_STATE_ALIASES: dict[str, ComplianceState] = _alias_table(
    {
        ComplianceState.COMPLETED: COMPLETED_ALIASES,
        ComplianceState.PLANNED: PLANNED_ALIASES,
        ComplianceState.MOVED: frozenset({"moved"}),
        ComplianceState.SKIPPED: frozenset({"skipped"}),
    }
)


def canonicalize_state(
    token: str | None,
    aliases: Mapping[str, _StateT],
    default: _StateT,
) -> _StateT:
    """Resolve a raw status token through an alias table.

    Args:
        token: Raw status token from the backend (any case, may be None)
        aliases: Lower-case alias -> canonical state
        default: State returned for empty or unrecognized tokens

    Returns:
        Exactly one member of the canonical enumeration
    """
    if token is None:
        return default
    normalized = str(token).strip().lower()
    if not normalized:
        return default
    return aliases.get(normalized, default)


def normalize_series_state(token: str | None) -> SeriesState:
    """Canonicalize a chart series state token (completed or planned)."""
    return canonicalize_state(token, SERIES_STATE_ALIASES, DEFAULT_SERIES_STATE)


def normalize_compliance_state(token: str | None) -> ComplianceState:
    """Canonicalize a session compliance state token."""
    return canonicalize_state(token, COMPLIANCE_STATE_ALIASES, DEFAULT_COMPLIANCE_STATE)
