from ibadah_tracker.core import best_streak, compute_streaks, current_streak
from ibadah_tracker.models import DayRecord, empty_day

from conftest import SCENARIO_GOALS, TODAY, active_day


class TestComputeStreaks:

    def test_empty_history(self):
        streaks = compute_streaks({}, TODAY, SCENARIO_GOALS)
        assert streaks.current == 0
        assert streaks.best == 0

    def test_today_inactive_breaks_current(self):
        days = {
            "2026-02-27": active_day(),
            "2026-02-28": active_day(),
            "2026-03-01": empty_day(),
        }
        streaks = compute_streaks(days, TODAY, SCENARIO_GOALS)
        assert streaks.current == 0
        assert streaks.best == 2

    def test_three_active_days(self):
        days = {
            "2026-02-27": active_day(),
            "2026-02-28": active_day(),
            "2026-03-01": active_day(),
        }
        streaks = compute_streaks(days, TODAY, SCENARIO_GOALS)
        assert streaks.current == 3
        assert streaks.best == 3

    def test_today_missing(self):
        days = {"2026-02-28": active_day()}
        assert current_streak(days, TODAY, SCENARIO_GOALS) == 0

    def test_current_crosses_month_boundary(self):
        days = {key: active_day() for key in ("2026-02-26", "2026-02-27", "2026-02-28", "2026-03-01")}
        days["2026-02-25"] = DayRecord()
        assert current_streak(days, TODAY, SCENARIO_GOALS) == 4

    def test_lookback_is_capped(self):
        days = {"2026-03-01": active_day(), "2026-02-28": active_day(), "2026-02-27": active_day()}
        assert current_streak(days, TODAY, SCENARIO_GOALS, max_lookback=2) == 2


class TestBestStreak:

    def test_inactive_day_resets_run(self):
        days = {
            "2026-02-20": active_day(),
            "2026-02-21": active_day(),
            "2026-02-22": active_day(),
            "2026-02-23": empty_day(),
            "2026-02-24": active_day(),
        }
        assert best_streak(days, SCENARIO_GOALS) == 3

    def test_missing_dates_do_not_break_run(self):
        days = {
            "2026-02-20": active_day(),
            "2026-02-22": active_day(),
        }
        assert best_streak(days, SCENARIO_GOALS) == 2

    def test_stored_keys_counted_across_gaps(self):
        days = {
            "2026-02-20": active_day(),
            "2026-02-21": active_day(),
            "2026-02-25": active_day(),
            "2026-02-26": empty_day(),
            "2026-02-27": active_day(),
        }
        assert best_streak(days, SCENARIO_GOALS) == 3

    def test_unsorted_input_is_sorted(self):
        days = {
            "2026-02-22": active_day(),
            "2026-02-20": active_day(),
            "2026-02-21": active_day(),
        }
        assert best_streak(days, SCENARIO_GOALS) == 3

    def test_no_active_days(self):
        assert best_streak({"2026-02-20": empty_day()}, SCENARIO_GOALS) == 0
