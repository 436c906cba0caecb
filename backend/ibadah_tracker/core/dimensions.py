"""Configurable sets of tracked checks.

A dimension set is the ordered list of checks a day is scored against plus
the heat thresholds used for that list. The thresholds are explicit numbers
per set rather than a ratio of the number of checks.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from ..models.day import DayRecord, PRAYERS
from ..models.goals import Goals


class CheckKind(str, Enum):
    GOAL = "goal"  # накопительное значение >= цели
    FLAG = "flag"  # простая галочка
    ALL_PRAYERS = "all_prayers"  # все пять намазов в мечети


@dataclass(frozen=True)
class CheckDefinition:
    key: str
    kind: CheckKind
    label: str
    unit: str = ""
    reminder: bool = True

    def is_satisfied(self, record: DayRecord, goals: Goals) -> bool:
        if self.kind is CheckKind.GOAL:
            return getattr(record, self.key) >= getattr(goals, self.key)
        if self.kind is CheckKind.ALL_PRAYERS:
            return record.mosque_count() == len(PRAYERS)
        return bool(getattr(record, self.key))


@dataclass(frozen=True)
class DimensionSet:
    name: str
    checks: Tuple[CheckDefinition, ...]
    high_threshold: int
    medium_threshold: int

    def __post_init__(self):
        keys = [check.key for check in self.checks]
        if len(set(keys)) != len(keys):
            raise ValueError(f"Duplicate check keys in dimension set {self.name!r}")
        if not 0 < self.medium_threshold <= self.high_threshold <= len(self.checks):
            raise ValueError(
                f"Invalid heat thresholds for {self.name!r}: "
                f"medium={self.medium_threshold}, high={self.high_threshold}, total={len(self.checks)}"
            )

    @property
    def total_checks(self) -> int:
        return len(self.checks)

    @property
    def goal_checks(self) -> Tuple[CheckDefinition, ...]:
        return tuple(c for c in self.checks if c.kind is CheckKind.GOAL)

    @property
    def flag_checks(self) -> Tuple[CheckDefinition, ...]:
        return tuple(c for c in self.checks if c.kind is CheckKind.FLAG)

    def get(self, key: str) -> Optional[CheckDefinition]:
        return next((c for c in self.checks if c.key == key), None)


QURAN = CheckDefinition("quran_pages", CheckKind.GOAL, "📖 Коран", unit="стр")
MOSQUE = CheckDefinition("mosque", CheckKind.ALL_PRAYERS, "🕌 Мечеть 5/5", reminder=False)
TARAWEEH = CheckDefinition("taraweeh", CheckKind.FLAG, "🌙 Таравих", reminder=False)
TAHAJJUD = CheckDefinition("tahajjud", CheckKind.FLAG, "🕯 Тахаджуд", reminder=False)
MORNING_REMEMBRANCE = CheckDefinition("morning_remembrance", CheckKind.FLAG, "🌅 Утренние азкары")
EVENING_REMEMBRANCE = CheckDefinition("evening_remembrance", CheckKind.FLAG, "🌙 Вечерние азкары")
DUHA = CheckDefinition("duha", CheckKind.FLAG, "☀️ Духа")
ISTIGHFAR = CheckDefinition("istighfar_count", CheckKind.GOAL, "🤍 Истигфар")
DHIKR = CheckDefinition("dhikr_count", CheckKind.GOAL, "📿 Зикр")
CHARITY = CheckDefinition("charity_amount", CheckKind.GOAL, "💰 Садака", unit="₽")
DUA = CheckDefinition("dua_count", CheckKind.GOAL, "🤲 Дуа")

BASE_DIMENSIONS = DimensionSet(
    name="base",
    checks=(QURAN, MOSQUE, TARAWEEH, TAHAJJUD, ISTIGHFAR, DHIKR, CHARITY, DUA),
    high_threshold=7,
    medium_threshold=4,
)

EXTENDED_DIMENSIONS = DimensionSet(
    name="extended",
    checks=(
        QURAN,
        MOSQUE,
        TARAWEEH,
        TAHAJJUD,
        MORNING_REMEMBRANCE,
        EVENING_REMEMBRANCE,
        DUHA,
        ISTIGHFAR,
        DHIKR,
        CHARITY,
        DUA,
    ),
    high_threshold=9,
    medium_threshold=6,
)

DIMENSION_SETS: Dict[str, DimensionSet] = {
    BASE_DIMENSIONS.name: BASE_DIMENSIONS,
    EXTENDED_DIMENSIONS.name: EXTENDED_DIMENSIONS,
}

DEFAULT_DIMENSIONS = EXTENDED_DIMENSIONS


def get_dimension_set(name: str) -> DimensionSet:
    try:
        return DIMENSION_SETS[name]
    except KeyError:
        raise ValueError(f"Unknown dimension set {name!r}, expected one of {sorted(DIMENSION_SETS)}")
