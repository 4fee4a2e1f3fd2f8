"""Adherence percentage policies and zone classification.

Adherence is completed sessions over expected sessions. Which sessions count
as "expected" is product policy, so denominators are named, swappable
functions selected by ANALYTICS_ADHERENCE_POLICY:

- exclude_moved: planned + completed + skipped. Moving a session is a
  clerical reschedule and does not penalize adherence.
- all_sessions: every session in the window, moved ones included.
"""

from collections.abc import Callable

from analytics_core.analysis.types import ComplianceCounts, RiskZone
from analytics_core.config.settings import settings
from analytics_core.errors import UnknownPolicyError

AdherencePolicy = Callable[[ComplianceCounts], int]

# Nothing expected means nothing missed
EMPTY_ADHERENCE_PERCENTAGE = 100


def exclude_moved_denominator(counts: ComplianceCounts) -> int:
    return counts.planned_count + counts.completed_count + counts.skip_count


def all_sessions_denominator(counts: ComplianceCounts) -> int:
    return counts.total


ADHERENCE_POLICIES: dict[str, AdherencePolicy] = {
    "exclude_moved": exclude_moved_denominator,
    "all_sessions": all_sessions_denominator,
}


def get_adherence_policy(name: str | None = None) -> AdherencePolicy:
    """Look up a registered denominator policy.

    Args:
        name: Policy name; defaults to settings.adherence_policy

    Raises:
        UnknownPolicyError: If the name is not registered
    """
    policy_name = (name if name is not None else settings.adherence_policy).strip().lower()
    policy = ADHERENCE_POLICIES.get(policy_name)
    if policy is None:
        raise UnknownPolicyError(policy_name, sorted(ADHERENCE_POLICIES))
    return policy


def compute_adherence_percentage(
    counts: ComplianceCounts,
    policy: AdherencePolicy | None = None,
) -> int:
    """Completed share of expected sessions as an integer 0-100.

    Rounds half up. An empty denominator yields 100.
    """
    denominator = (policy or get_adherence_policy())(counts)
    if denominator <= 0:
        return EMPTY_ADHERENCE_PERCENTAGE
    completed = min(counts.completed_count, denominator)
    return (200 * completed + denominator) // (2 * denominator)


def classify_adherence_state(
    adherence_percentage: float,
    green_threshold: float | None = None,
    yellow_threshold: float | None = None,
) -> RiskZone:
    """Map an adherence percentage to a risk zone.

    Args:
        adherence_percentage: Adherence on a 0-100 scale
        green_threshold: Minimum percentage for green (default from settings)
        yellow_threshold: Minimum percentage for yellow (default from settings)
    """
    green = settings.adherence_green_threshold if green_threshold is None else green_threshold
    yellow = settings.adherence_yellow_threshold if yellow_threshold is None else yellow_threshold

    if adherence_percentage >= green:
        return RiskZone.GREEN
    if adherence_percentage >= yellow:
        return RiskZone.YELLOW
    return RiskZone.RED
