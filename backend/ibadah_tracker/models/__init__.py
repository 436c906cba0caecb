# Models package
from .day import DayRecord, MosqueAttendance, PRAYERS, COUNTER_FIELDS, WHOLE_COUNTER_FIELDS, FLAG_FIELDS, TOGGLE_FIELDS, empty_day
from .goals import Goals, DEFAULT_GOALS, GOAL_FIELDS, resolve_goals
from .user import UserModel
from .stats import (
    Heat,
    DayScore,
    Streaks,
    RemainingItem,
    MetricSummary,
    FlagSummary,
    GoalHit,
    BestDay,
    StatisticsReport,
)
