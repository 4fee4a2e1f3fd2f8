"""Static exercise catalog.

Local fallback catalog used to resolve planned workout titles to muscles.
"""

from collections.abc import Iterable

from analytics_core.muscles.types import Exercise

EXERCISE_CATALOG: tuple[Exercise, ...] = (
    Exercise(
        id="ex-1",
        canonical_name="Back Squat",
        aliases=("BB Back Squat",),
        equipment=("barbell", "rack"),
        primary_muscles=("quadriceps", "glutes"),
        secondary_muscles=("adductors", "core"),
    ),
    Exercise(
        id="ex-2",
        canonical_name="Bulgarian Split Squat",
        aliases=("RFESS",),
        equipment=("dumbbell", "bench"),
        primary_muscles=("quadriceps", "glutes"),
        secondary_muscles=("adductors",),
    ),
    Exercise(
        id="ex-3",
        canonical_name="Seated Cable Row",
        aliases=("Cable Row",),
        equipment=("cable",),
        primary_muscles=("lats", "rhomboids"),
        secondary_muscles=("biceps",),
    ),
)


def _normalize(value: str) -> str:
    return value.strip().lower()


def search_exercise_catalog(
    query: str = "",
    equipment: Iterable[str] = (),
    muscles: Iterable[str] = (),
    catalog: Iterable[Exercise] = EXERCISE_CATALOG,
) -> list[Exercise]:
    """Filter the catalog by name/alias substring, equipment and muscles.

    Equipment and muscle filters are all-of; blank filter values are ignored.
    Results are ordered by canonical name.
    """
    normalized_query = _normalize(query)
    equipment_filters = [value for value in map(_normalize, equipment) if value]
    muscle_filters = [value for value in map(_normalize, muscles) if value]

    matches: list[Exercise] = []
    for exercise in catalog:
        names = [exercise.canonical_name, *exercise.aliases]
        if normalized_query and not any(normalized_query in _normalize(name) for name in names):
            continue

        exercise_equipment = {_normalize(item) for item in exercise.equipment}
        if not all(value in exercise_equipment for value in equipment_filters):
            continue

        muscle_pool = {_normalize(item) for item in (*exercise.primary_muscles, *exercise.secondary_muscles)}
        if not all(value in muscle_pool for value in muscle_filters):
            continue

        matches.append(exercise)

    return sorted(matches, key=lambda exercise: exercise.canonical_name)


def resolve_exercises_for_title(title: str, catalog: Iterable[Exercise] = EXERCISE_CATALOG) -> list[Exercise]:
    """Find catalog exercises whose name or alias appears in a workout title."""
    normalized_title = _normalize(title)
    if not normalized_title:
        return []

    matches = [
        exercise
        for exercise in catalog
        if any(_normalize(name) in normalized_title for name in (exercise.canonical_name, *exercise.aliases))
    ]
    return sorted(matches, key=lambda exercise: exercise.canonical_name)
