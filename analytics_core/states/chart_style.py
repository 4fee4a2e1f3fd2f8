"""Series stroke styles keyed by canonical state.

Completed series render solid, planned series render dashed.
"""

from pydantic import BaseModel, ConfigDict

from analytics_core.states.canonical import SeriesState, normalize_series_state

PLANNED_STROKE_DASHARRAY = "6 4"


class SeriesStyle(BaseModel):
    """Stroke style for a chart series."""

    model_config = ConfigDict(frozen=True)

    stroke_dasharray: str | None = None


class LegendEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: SeriesState
    label: str


SERIES_STYLES: dict[SeriesState, SeriesStyle] = {
    SeriesState.COMPLETED: SeriesStyle(stroke_dasharray=None),
    SeriesState.PLANNED: SeriesStyle(stroke_dasharray=PLANNED_STROKE_DASHARRAY),
}

SERIES_STATE_LEGEND: tuple[LegendEntry, ...] = (
    LegendEntry(state=SeriesState.COMPLETED, label="Completed (solid)"),
    LegendEntry(state=SeriesState.PLANNED, label="Planned (dashed)"),
)


def get_series_style(state: SeriesState) -> SeriesStyle:
    return SERIES_STYLES[state]


def resolve_series_style(token: str | None) -> SeriesStyle:
    """Canonicalize a raw series state and return its stroke style."""
    return get_series_style(normalize_series_state(token))
