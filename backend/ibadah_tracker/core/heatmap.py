from typing import List, Mapping, Optional, Sequence

from ..models import DayRecord, Goals, Heat, empty_day
from .dimensions import DimensionSet, DEFAULT_DIMENSIONS
from .scoring import completed_count, heat_classification

DEFAULT_WINDOW = 14
HEATMAP_PLACEHOLDER = "—"


def heat_levels(
    sorted_keys: Sequence[str],
    days_by_key: Mapping[str, DayRecord],
    goals: Optional[Goals] = None,
    window: int = DEFAULT_WINDOW,
    dimensions: DimensionSet = DEFAULT_DIMENSIONS,
) -> List[Heat]:
    """Heat of the trailing ``window`` days, most recent last."""
    if window <= 0:
        return []
    levels = []
    for key in sorted_keys[-window:]:
        record = days_by_key.get(key)
        if record is None:
            record = empty_day()
        levels.append(heat_classification(completed_count(record, goals, dimensions), dimensions))
    return levels


def render_heatmap(
    sorted_keys: Sequence[str],
    days_by_key: Mapping[str, DayRecord],
    goals: Optional[Goals] = None,
    window: int = DEFAULT_WINDOW,
    dimensions: DimensionSet = DEFAULT_DIMENSIONS,
) -> List[str]:
    levels = heat_levels(sorted_keys, days_by_key, goals, window, dimensions)
    if not levels:
        return [HEATMAP_PLACEHOLDER]
    return [level.symbol for level in levels]
