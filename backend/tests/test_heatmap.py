from ibadah_tracker.core import BASE_DIMENSIONS, HEATMAP_PLACEHOLDER, render_heatmap
from ibadah_tracker.models import DayRecord, empty_day

from conftest import ALL_PRAYERS, SCENARIO_GOALS, perfect_day


def _keys(n):
    return [f"2026-02-{day:02d}" for day in range(1, n + 1)]


class TestRenderHeatmap:

    def test_no_days_gives_placeholder(self):
        assert render_heatmap([], {}, SCENARIO_GOALS) == [HEATMAP_PLACEHOLDER]

    def test_fewer_days_than_window(self):
        keys = ["2026-02-27", "2026-02-28", "2026-03-01"]
        days = {
            "2026-02-27": empty_day(),
            "2026-02-28": DayRecord(mosque=ALL_PRAYERS, taraweeh=True, tahajjud=True, quran_pages=20),
            "2026-03-01": perfect_day(),
        }
        symbols = render_heatmap(keys, days, SCENARIO_GOALS, window=14, dimensions=BASE_DIMENSIONS)
        assert symbols == ["🟥", "🟨", "🟩"]

    def test_trailing_window(self):
        keys = _keys(20)
        days = {k: empty_day() for k in keys}
        days[keys[-1]] = perfect_day()
        symbols = render_heatmap(keys, days, SCENARIO_GOALS)
        assert len(symbols) == 14
        assert symbols[-1] == "🟩"
        assert set(symbols[:-1]) == {"🟥"}

    def test_missing_record_scored_as_empty(self):
        assert render_heatmap(["2026-02-01"], {}, SCENARIO_GOALS) == ["🟥"]
