from pydantic import BaseModel
from typing import List, Optional
from enum import Enum


class Heat(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def symbol(self) -> str:
        return HEAT_SYMBOLS[self]


HEAT_SYMBOLS = {
    Heat.HIGH: "🟩",
    Heat.MEDIUM: "🟨",
    Heat.LOW: "🟥",
}


class DayScore(BaseModel):
    checks: List[bool]  # в порядке набора проверок
    completed: int
    total: int
    heat: Heat


class Streaks(BaseModel):
    current: int = 0  # подряд активных дней, заканчивая сегодня
    best: int = 0  # самый длинный стрик за всё время


class RemainingItem(BaseModel):
    key: str
    label: str
    unit: str = ""
    remaining: Optional[float] = None  # None для галочек


class MetricSummary(BaseModel):
    key: str
    label: str
    unit: str = ""
    total: float
    average: float
    possible: Optional[int] = None  # только для мечети: 5 * дней


class FlagSummary(BaseModel):
    key: str
    label: str
    days: int


class GoalHit(BaseModel):
    key: str
    label: str
    unit: str = ""
    goal: Optional[float] = None
    hits: int


class BestDay(BaseModel):
    date: str
    score: int


class StatisticsReport(BaseModel):
    has_data: bool
    dimension_set: str
    total_checks: int
    total_days_tracked: int = 0
    metrics: List[MetricSummary] = []
    flag_days: List[FlagSummary] = []
    goal_hits: List[GoalHit] = []
    perfect_day_count: int = 0
    average_completion: float = 0.0
    best_day: Optional[BestDay] = None
    streaks: Streaks = Streaks()
    heatmap: List[str] = []
