"""Muscle usage aggregation and intensity classification.

Collapses raw per-muscle contribution scores into body-part totals for the
anatomical map:

1. Map each raw tag to a body-part slug (unmapped tags are dropped silently)
2. Sum scores per slug (duplicates accumulate)
3. Bucket each positive sum into a 1-5 intensity
4. Order by intensity descending, slug ascending

No I/O. Same inputs -> same output.
"""

import math
from collections.abc import Iterable, Mapping
from typing import Any

from loguru import logger
from pydantic import ValidationError

from analytics_core.muscles.constants import (
    INTENSITY_MAX,
    INTENSITY_MIN,
    INTENSITY_SCALE,
    SCORE_PRECISION,
)
from analytics_core.muscles.taxonomy import resolve_body_part
from analytics_core.muscles.types import (
    BodyPartAggregate,
    BodyPartContribution,
    MuscleContribution,
)


def parse_muscle_contributions(raw: Iterable[Mapping[str, Any]]) -> list[MuscleContribution]:
    """Validate raw contribution records, dropping malformed ones.

    Args:
        raw: Backend records shaped like {"muscle": str, "score": number}

    Returns:
        Valid contributions in input order
    """
    contributions: list[MuscleContribution] = []
    for index, record in enumerate(raw):
        try:
            contributions.append(MuscleContribution.model_validate(record))
        except ValidationError as e:
            logger.warning(f"[MUSCLE_MAP] Dropping malformed contribution at index {index}: {e.error_count()} error(s)")
    return contributions


def _contribution_score(contribution: MuscleContribution) -> float:
    score = contribution.score
    if not math.isfinite(score) or score < 0:
        logger.debug(f"[MUSCLE_MAP] Treating invalid score {score!r} for '{contribution.muscle}' as 0")
        return 0.0
    return score


def sum_scores_by_body_part(contributions: Iterable[MuscleContribution]) -> dict[str, float]:
    """Map contributions to body-part slugs and sum them.

    Returns:
        Slug -> rounded positive sum. Slugs without a positive total are absent.
    """
    scores: dict[str, float] = {}
    unmapped: set[str] = set()

    for contribution in contributions:
        slug = resolve_body_part(contribution.muscle)
        if slug is None:
            unmapped.add(contribution.muscle)
            continue
        scores[slug] = scores.get(slug, 0.0) + _contribution_score(contribution)

    if unmapped:
        logger.debug(f"[MUSCLE_MAP] Ignoring unmapped muscle tags: {sorted(unmapped)}")

    rounded = {slug: round(score, SCORE_PRECISION) for slug, score in scores.items()}
    return {slug: score for slug, score in rounded.items() if score > 0}


def aggregate_muscle_contributions(
    contributions: Iterable[MuscleContribution],
) -> list[BodyPartContribution]:
    """Per-slug summed scores, ordered by score descending then slug ascending.

    This is the un-bucketed view used by textual summaries. It shares the
    mapping and summation with map_muscle_contributions_to_body_data.
    """
    totals = sum_scores_by_body_part(contributions)
    ordered = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    return [BodyPartContribution(slug=slug, score=score) for slug, score in ordered]


def classify_intensity(score: float) -> int:
    """Bucket an aggregate score into a 1-5 visual intensity.

    intensity = clamp(ceil(score * 2.5), 1, 5), applied to the score as given.
    Aggregated sums are rounded in sum_scores_by_body_part before they get here.

    Args:
        score: Non-negative aggregate score

    Returns:
        Integer intensity between INTENSITY_MIN and INTENSITY_MAX
    """
    if math.isnan(score):
        return INTENSITY_MIN
    if math.isinf(score):
        return INTENSITY_MAX if score > 0 else INTENSITY_MIN
    return max(INTENSITY_MIN, min(INTENSITY_MAX, math.ceil(score * INTENSITY_SCALE)))


def map_muscle_contributions_to_body_data(
    contributions: Iterable[MuscleContribution],
) -> list[BodyPartAggregate]:
    """Convert raw muscle contributions into anatomical map entries.

    Args:
        contributions: Raw tag + score pairs, in any order

    Returns:
        Body-part entries sorted by intensity descending, slug ascending.
        Empty when no tag is recognized.
    """
    aggregates = [
        BodyPartAggregate(slug=slug, intensity=classify_intensity(score))
        for slug, score in sum_scores_by_body_part(contributions).items()
    ]
    return sorted(aggregates, key=lambda item: (-item.intensity, item.slug))
