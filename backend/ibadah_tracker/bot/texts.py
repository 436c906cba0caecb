from typing import List, Optional

from ..core.dimensions import CheckKind, DimensionSet
from ..core.setup import SETUP_STEPS
from ..models import DayRecord, DayScore, Goals, RemainingItem, StatisticsReport


def progress_bar(value: float, maximum: float, width: int = 10) -> str:
    if maximum <= 0:
        return "█" * width
    v = max(0, min(value, maximum))
    filled = round(v / maximum * width)
    return "█" * filled + "░" * (width - filled)


def _ok(done: bool) -> str:
    return "✅" if done else "❌"


def _num(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:.1f}"


def format_today_report(record: DayRecord, goals: Goals, score: DayScore,
                        dimensions: DimensionSet, campaign_day: Optional[int] = None) -> str:
    title = f"🌙 Рамадан — день {campaign_day}" if campaign_day else "🌙 Сегодня"
    lines = [title, ""]
    for check, done in zip(dimensions.checks, score.checks):
        if check.kind is CheckKind.GOAL:
            unit = check.unit
            lines.append(
                f"{check.label}: {_num(getattr(record, check.key))}{unit and ' ' + unit} {_ok(done)} "
                f"(цель {_num(getattr(goals, check.key))}{unit and ' ' + unit})"
            )
        elif check.kind is CheckKind.ALL_PRAYERS:
            count = record.mosque_count()
            lines.append(f"🕌 Мечеть: {count}/5 {progress_bar(count, 5)} {_ok(done)}")
        else:
            lines.append(f"{check.label}: {_ok(done)}")
    lines += ["", f"⭐️ Выполнено: {score.completed}/{score.total} {score.heat.symbol}"]
    return "\n".join(lines)


def format_remaining(items: List[RemainingItem]) -> str:
    if not items:
        return "✅ Всё по целям выполнено (кроме намазов/таравиха — без напоминаний)."
    lines = []
    for item in items:
        if item.remaining is None:
            lines.append(f"{item.label}: не отмечено")
        else:
            unit = f" {item.unit}" if item.unit else ""
            lines.append(f"{item.label}: осталось {_num(item.remaining)}{unit}")
    return "\n".join(lines)


def format_reminder(items: List[RemainingItem]) -> str:
    return "⏰ Напоминание\nЧто осталось по целям:\n\n" + format_remaining(items)


def format_statistics(report: StatisticsReport) -> str:
    if not report.has_data:
        return "Пока нет отметок. Нажми ✅ Отметить сегодня."

    days = report.total_days_tracked
    total = report.total_checks
    lines = [
        f"📊 Статистика (дней с отметками: {days})",
        "",
        f"🔥 Стрик: {report.streaks.current} | Лучший стрик: {report.streaks.best}",
        f"✅ Идеальные дни ({total}/{total}): {report.perfect_day_count}",
        f"⭐️ Среднее выполнение: {report.average_completion:.1f}/{total}",
        f"🏆 Лучший день: {report.best_day.date} ({report.best_day.score}/{total})",
        "",
        f"🗓 Последние 14 дней: {''.join(report.heatmap)}",
        "",
        "— Итоги —",
    ]
    for metric in report.metrics:
        unit = f" {metric.unit}" if metric.unit else ""
        if metric.possible is not None:
            lines.append(f"{metric.label}: {_num(metric.total)}{unit} (из {metric.possible})")
        else:
            lines.append(f"{metric.label}: {_num(metric.total)}{unit} (ср. {metric.average:.1f}/день)")
    for flag in report.flag_days:
        lines.append(f"{flag.label}: {flag.days} дней")

    lines += ["", "— Выполнение целей (сколько дней достигал) —"]
    for hit in report.goal_hits:
        goal = f" ≥{_num(hit.goal)}{hit.unit}" if hit.goal is not None else ""
        lines.append(f"{hit.label}{goal}: {hit.hits}/{days}")
    return "\n".join(lines)


def setup_prompt(step: int) -> str:
    s = SETUP_STEPS[step]
    return f"{s.question}\nНапиши число.\nИли напиши: по умолчанию (={_num(s.default)})"


def format_goals(goals: Goals) -> str:
    return (
        f"📖 Коран: {goals.quran_pages} стр\n"
        f"🤍 Истигфар: {goals.istighfar_count}\n"
        f"📿 Зикр: {goals.dhikr_count}\n"
        f"💰 Садака: {_num(goals.charity_amount)}₽\n"
        f"🤲 Дуа: {goals.dua_count}"
    )
