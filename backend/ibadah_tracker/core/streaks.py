"""Current and best streak of active days.

A day is active when at least one check is satisfied. Days are identified
by ``YYYY-MM-DD`` keys in the user's time zone.
"""
from datetime import date, timedelta
from typing import Iterable, Mapping, Optional

from ..models import DayRecord, Goals, Streaks
from .dimensions import DimensionSet, DEFAULT_DIMENSIONS
from .scoring import completed_count

# Насколько далеко назад ищем текущий стрик
MAX_LOOKBACK_DAYS = 400

DATE_KEY_FORMAT = "%Y-%m-%d"


def parse_key(key: str) -> date:
    return date.fromisoformat(key)


def format_key(day: date) -> str:
    return day.strftime(DATE_KEY_FORMAT)


def is_active(
    record: Optional[DayRecord],
    goals: Optional[Goals] = None,
    dimensions: DimensionSet = DEFAULT_DIMENSIONS,
) -> bool:
    return record is not None and completed_count(record, goals, dimensions) >= 1


def current_streak(
    days_by_key: Mapping[str, DayRecord],
    today_key: str,
    goals: Optional[Goals] = None,
    dimensions: DimensionSet = DEFAULT_DIMENSIONS,
    max_lookback: int = MAX_LOOKBACK_DAYS,
) -> int:
    streak = 0
    day = parse_key(today_key)
    for _ in range(max_lookback):
        if not is_active(days_by_key.get(format_key(day)), goals, dimensions):
            break
        streak += 1
        day -= timedelta(days=1)
    return streak


def best_streak(
    days_by_key: Mapping[str, DayRecord],
    goals: Optional[Goals] = None,
    dimensions: DimensionSet = DEFAULT_DIMENSIONS,
    sorted_keys: Optional[Iterable[str]] = None,
) -> int:
    """Longest run of consecutive active days among the stored keys.

    Only an inactive record breaks the run; dates with no record are not
    visited.
    """
    keys = sorted_keys if sorted_keys is not None else sorted(days_by_key)
    best = 0
    run = 0
    for key in keys:
        if is_active(days_by_key.get(key), goals, dimensions):
            run += 1
        else:
            run = 0
        best = max(best, run)
    return best


def compute_streaks(
    days_by_key: Mapping[str, DayRecord],
    today_key: str,
    goals: Optional[Goals] = None,
    dimensions: DimensionSet = DEFAULT_DIMENSIONS,
) -> Streaks:
    if not days_by_key:
        return Streaks(current=0, best=0)
    return Streaks(
        current=current_streak(days_by_key, today_key, goals, dimensions),
        best=best_streak(days_by_key, goals, dimensions),
    )
