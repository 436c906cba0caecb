"""Aggregate statistics over a user's whole history."""
from typing import Callable, List, Mapping, Optional, Sequence

from ..models import (
    BestDay,
    DayRecord,
    FlagSummary,
    GoalHit,
    Goals,
    MetricSummary,
    StatisticsReport,
    Streaks,
    resolve_goals,
)
from .dimensions import CheckKind, DimensionSet, DEFAULT_DIMENSIONS, QURAN, ISTIGHFAR, DHIKR, CHARITY, DUA
from .heatmap import DEFAULT_WINDOW, HEATMAP_PLACEHOLDER, render_heatmap
from .scoring import evaluate_checks
from .streaks import compute_streaks

# (ключ, подпись, единица, функция значения дня)
CUMULATIVE_METRICS = (
    (QURAN.key, QURAN.label, QURAN.unit, lambda d: d.quran_pages),
    ("mosque", "🕌 Мечеть", "намазов", lambda d: d.mosque_count()),
    (ISTIGHFAR.key, ISTIGHFAR.label, ISTIGHFAR.unit, lambda d: d.istighfar_count),
    (DHIKR.key, DHIKR.label, DHIKR.unit, lambda d: d.dhikr_count),
    (CHARITY.key, CHARITY.label, CHARITY.unit, lambda d: d.charity_amount),
    (DUA.key, DUA.label, DUA.unit, lambda d: d.dua_count),
)


def no_data_report(dimensions: DimensionSet = DEFAULT_DIMENSIONS) -> StatisticsReport:
    return StatisticsReport(
        has_data=False,
        dimension_set=dimensions.name,
        total_checks=dimensions.total_checks,
        streaks=Streaks(current=0, best=0),
        heatmap=[HEATMAP_PLACEHOLDER],
    )


def _total(days: List[DayRecord], value: Callable[[DayRecord], float]) -> float:
    return sum(value(d) for d in days)


def aggregate_statistics(
    sorted_keys: Sequence[str],
    days_by_key: Mapping[str, DayRecord],
    goals: Optional[Goals],
    today_key: str,
    dimensions: DimensionSet = DEFAULT_DIMENSIONS,
    heatmap_window: int = DEFAULT_WINDOW,
) -> StatisticsReport:
    """Totals, averages, goal hits, best day, streaks and heatmap.

    Only keys that have a stored record are counted as tracked days. With
    no tracked days an explicit no-data report is returned and no averages
    are computed.
    """
    keys = [k for k in sorted_keys if k in days_by_key]
    if not keys:
        return no_data_report(dimensions)

    goals = resolve_goals(goals)
    total_days = len(keys)
    days = [days_by_key[k] for k in keys]

    metrics = []
    for key, label, unit, value in CUMULATIVE_METRICS:
        total = _total(days, value)
        metrics.append(
            MetricSummary(
                key=key,
                label=label,
                unit=unit,
                total=total,
                average=round(total / total_days, 1),
                possible=5 * total_days if key == "mosque" else None,
            )
        )

    flag_days = [
        FlagSummary(key=c.key, label=c.label, days=sum(1 for d in days if getattr(d, c.key)))
        for c in dimensions.flag_checks
    ]

    checks_by_day = [evaluate_checks(d, goals, dimensions) for d in days]
    scores = [sum(checks) for checks in checks_by_day]

    goal_hits = []
    for index, check in enumerate(dimensions.checks):
        goal_hits.append(
            GoalHit(
                key=check.key,
                label=check.label,
                unit=check.unit,
                goal=getattr(goals, check.key) if check.kind is CheckKind.GOAL else None,
                hits=sum(1 for checks in checks_by_day if checks[index]),
            )
        )

    # Первый день с максимальным результатом, при равенстве побеждает более ранний
    best_key, best_score = keys[0], -1
    for key, score in zip(keys, scores):
        if score > best_score:
            best_key, best_score = key, score

    return StatisticsReport(
        has_data=True,
        dimension_set=dimensions.name,
        total_checks=dimensions.total_checks,
        total_days_tracked=total_days,
        metrics=metrics,
        flag_days=flag_days,
        goal_hits=goal_hits,
        perfect_day_count=sum(1 for s in scores if s == dimensions.total_checks),
        average_completion=round(sum(scores) / total_days, 1),
        best_day=BestDay(date=best_key, score=best_score),
        streaks=compute_streaks(days_by_key, today_key, goals, dimensions),
        heatmap=render_heatmap(keys, days_by_key, goals, heatmap_window, dimensions),
    )
