from ibadah_tracker.bot.texts import format_remaining, format_statistics, format_today_report, progress_bar, setup_prompt
from ibadah_tracker.core import BASE_DIMENSIONS, aggregate_statistics, no_data_report, remaining_goals, score_day
from ibadah_tracker.models import DayRecord

from conftest import SCENARIO_GOALS, TODAY, perfect_day


class TestProgressBar:

    def test_bounds(self):
        assert progress_bar(0, 5) == "░" * 10
        assert progress_bar(5, 5) == "█" * 10
        assert progress_bar(7, 5) == "█" * 10
        assert progress_bar(3, 5) == "██████░░░░"


class TestReports:

    def test_today_report(self):
        record = DayRecord(quran_pages=12, mosque={"fajr": True, "dhuhr": True})
        score = score_day(record, SCENARIO_GOALS, BASE_DIMENSIONS)
        text = format_today_report(record, SCENARIO_GOALS, score, BASE_DIMENSIONS, campaign_day=5)
        assert text.startswith("🌙 Рамадан — день 5")
        assert "📖 Коран: 12 стр ❌ (цель 20 стр)" in text
        assert "🕌 Мечеть: 2/5" in text
        assert text.endswith("⭐️ Выполнено: 0/8 🟥")

    def test_remaining_done(self):
        assert format_remaining([]).startswith("✅")

    def test_remaining_lines(self):
        text = format_remaining(remaining_goals(DayRecord(charity_amount=40), SCENARIO_GOALS))
        assert "💰 Садака: осталось 60 ₽" in text
        assert "☀️ Духа: не отмечено" in text

    def test_statistics_no_data(self):
        assert format_statistics(no_data_report()).startswith("Пока нет отметок")

    def test_statistics(self):
        report = aggregate_statistics([TODAY], {TODAY: perfect_day()}, SCENARIO_GOALS, TODAY, BASE_DIMENSIONS)
        text = format_statistics(report)
        assert "✅ Идеальные дни (8/8): 1" in text
        assert "⭐️ Среднее выполнение: 8.0/8" in text
        assert "🗓 Последние 14 дней: 🟩" in text
        assert "📖 Коран ≥20стр: 1/1" in text

    def test_setup_prompt_shows_default(self):
        assert "по умолчанию (=500)" in setup_prompt(1)
