from typing import List, Optional

from ..models import DayRecord, DayScore, Goals, Heat, RemainingItem, resolve_goals
from .dimensions import CheckKind, DimensionSet, DEFAULT_DIMENSIONS


def mosque_count(record: DayRecord) -> int:
    """Number of the five prayers attended in the mosque (0-5)."""
    return record.mosque_count()


def evaluate_checks(
    record: DayRecord,
    goals: Optional[Goals] = None,
    dimensions: DimensionSet = DEFAULT_DIMENSIONS,
) -> List[bool]:
    """Check results in the fixed order of the dimension set."""
    goals = resolve_goals(goals)
    return [check.is_satisfied(record, goals) for check in dimensions.checks]


def completed_count(
    record: DayRecord,
    goals: Optional[Goals] = None,
    dimensions: DimensionSet = DEFAULT_DIMENSIONS,
) -> int:
    return sum(evaluate_checks(record, goals, dimensions))


def heat_classification(completed: int, dimensions: DimensionSet = DEFAULT_DIMENSIONS) -> Heat:
    if completed >= dimensions.high_threshold:
        return Heat.HIGH
    if completed >= dimensions.medium_threshold:
        return Heat.MEDIUM
    return Heat.LOW


def score_day(
    record: DayRecord,
    goals: Optional[Goals] = None,
    dimensions: DimensionSet = DEFAULT_DIMENSIONS,
) -> DayScore:
    checks = evaluate_checks(record, goals, dimensions)
    completed = sum(checks)
    return DayScore(
        checks=checks,
        completed=completed,
        total=dimensions.total_checks,
        heat=heat_classification(completed, dimensions),
    )


def remaining_goals(
    record: DayRecord,
    goals: Optional[Goals] = None,
    dimensions: DimensionSet = DEFAULT_DIMENSIONS,
) -> List[RemainingItem]:
    """What is still left for today among the checks we remind about."""
    goals = resolve_goals(goals)
    items = []
    for check in dimensions.checks:
        if not check.reminder or check.is_satisfied(record, goals):
            continue
        remaining = None
        if check.kind is CheckKind.GOAL:
            remaining = max(0, getattr(goals, check.key) - getattr(record, check.key))
        items.append(RemainingItem(key=check.key, label=check.label, unit=check.unit, remaining=remaining))
    return items
