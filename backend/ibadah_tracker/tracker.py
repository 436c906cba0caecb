"""Glue between storage and the aggregation engine, shared by the bot and the API."""
from typing import List, Tuple

from .clock import Clock
from .core import aggregate_statistics, remaining_goals, score_day
from .core.dimensions import DimensionSet
from .models import DayRecord, DayScore, Goals, RemainingItem, StatisticsReport, empty_day, resolve_goals
from .storage import TrackerStorage


def load_goals(storage: TrackerStorage, user_id: str) -> Goals:
    return resolve_goals(storage.get_goals(user_id))


def today_record(storage: TrackerStorage, user_id: str, clock: Clock) -> DayRecord:
    return storage.get_day(user_id, clock.today_key()) or empty_day()


def today_summary(storage: TrackerStorage, user_id: str, clock: Clock,
                  dimensions: DimensionSet) -> Tuple[DayRecord, Goals, DayScore, List[RemainingItem]]:
    record = today_record(storage, user_id, clock)
    goals = load_goals(storage, user_id)
    return record, goals, score_day(record, goals, dimensions), remaining_goals(record, goals, dimensions)


def user_statistics(storage: TrackerStorage, user_id: str, clock: Clock,
                    dimensions: DimensionSet) -> StatisticsReport:
    days = storage.get_days(user_id)
    report = aggregate_statistics(sorted(days), days, load_goals(storage, user_id), clock.today_key(), dimensions)
    if report.has_data:
        storage.update_best_streak(user_id, report.streaks.best)
    return report
