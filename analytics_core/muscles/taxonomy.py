"""Muscle tag -> body-part slug taxonomy.

Static, many-to-one lookup used by the anatomical map. Slugs are the body-part
identifiers the highlighter component understands. Tags missing here are not
rendered. Bump TAXONOMY_VERSION whenever an entry changes meaning.
"""

TAXONOMY_VERSION = "2026.02"

MUSCLE_TO_BODY_PART: dict[str, str] = {
    "abdominals": "abs",
    "core": "abs",
    "adductors": "adductors",
    "biceps": "biceps",
    "calves": "calves",
    "chest": "chest",
    "pectorals": "chest",
    "anterior_deltoids": "deltoids",
    "lateral_deltoids": "deltoids",
    "rear_deltoids": "deltoids",
    "shoulders": "deltoids",
    "forearms": "forearm",
    "glutes": "gluteal",
    "hamstrings": "hamstring",
    "erector_spinae": "lower-back",
    "obliques": "obliques",
    "quadriceps": "quadriceps",
    "tibialis_anterior": "tibialis",
    "trapezius": "trapezius",
    "upper_traps": "trapezius",
    "mid_traps": "trapezius",
    "triceps": "triceps",
    "lats": "upper-back",
    "rhomboids": "upper-back",
}

BODY_PART_SLUGS: frozenset[str] = frozenset(MUSCLE_TO_BODY_PART.values())


def resolve_body_part(muscle: str) -> str | None:
    """Return the body-part slug for a raw muscle tag, or None if unmapped."""
    return MUSCLE_TO_BODY_PART.get(muscle.strip().lower())
