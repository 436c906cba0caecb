import pytest

from ibadah_tracker.storage import JsonFileStorage

DATE = "2026-03-01"


class TestDays:

    def test_missing_day(self, storage):
        assert storage.get_day("1", DATE) is None

    def test_ensure_day_is_idempotent(self, storage):
        storage.increment("1", DATE, "quran_pages", 4)
        record = storage.ensure_day("1", DATE)
        assert record.quran_pages == 4

    def test_increment_is_additive(self, storage):
        storage.increment("1", DATE, "istighfar_count", 100)
        record = storage.increment("1", DATE, "istighfar_count", 33)
        assert record.istighfar_count == 133

    def test_toggle_flag_and_prayer(self, storage):
        assert storage.toggle("1", DATE, "taraweeh").taraweeh is True
        assert storage.toggle("1", DATE, "taraweeh").taraweeh is False
        record = storage.toggle("1", DATE, "mosque.fajr")
        assert record.mosque.fajr is True
        assert record.mosque_count() == 1

    def test_unknown_fields_rejected(self, storage):
        with pytest.raises(ValueError):
            storage.increment("1", DATE, "taraweeh", 1)
        with pytest.raises(ValueError):
            storage.toggle("1", DATE, "quran_pages")
        with pytest.raises(ValueError):
            storage.toggle("1", DATE, "mosque.jumuah")

    def test_reset_day(self, storage):
        storage.increment("1", DATE, "quran_pages", 10)
        storage.toggle("1", DATE, "mosque.isha")
        storage.reset_day("1", DATE)
        record = storage.get_day("1", DATE)
        assert record.quran_pages == 0
        assert record.mosque_count() == 0

    def test_get_days_sorted_and_filtered(self, storage):
        for date in ["2026-03-02", "2026-02-27", "2026-03-01", "2026-02-28"]:
            storage.ensure_day("1", date)
        assert list(storage.get_days("1")) == ["2026-02-27", "2026-02-28", "2026-03-01", "2026-03-02"]
        assert list(storage.get_days("1", start_date="2026-02-28", end_date="2026-03-01")) == ["2026-02-28", "2026-03-01"]
        assert list(storage.get_days("1", limit=2)) == ["2026-03-01", "2026-03-02"]

    def test_days_are_per_user(self, storage):
        storage.increment("1", DATE, "dua_count", 1)
        assert storage.get_days("2") == {}


class TestUsers:

    def test_ensure_user(self, storage):
        user = storage.ensure_user("1", chat_id=100)
        assert user.chat_id == 100
        assert user.setup_done is False
        assert user.goals is None
        assert storage.ensure_user("1").chat_id == 100

    def test_partial_goals(self, storage):
        storage.ensure_user("1")
        storage.save_goal("1", "quran_pages", 5)
        goals = storage.get_goals("1")
        assert goals.quran_pages == 5
        assert goals.istighfar_count == 500

    def test_goals_of_unknown_user(self, storage):
        assert storage.get_goals("nobody") is None

    def test_setup_done_listing(self, storage):
        storage.ensure_user("1", chat_id=1)
        storage.ensure_user("2", chat_id=2)
        storage.set_setup_done("2", True)
        assert [u.user_id for u in storage.users_with_setup_done()] == ["2"]

    def test_best_streak_only_grows(self, storage):
        storage.ensure_user("1")
        storage.update_best_streak("1", 5)
        storage.update_best_streak("1", 3)
        assert storage.get_user("1").best_streak == 5

    def test_delete_all(self, storage):
        storage.ensure_user("1")
        storage.ensure_day("1", "2026-02-28")
        storage.ensure_day("1", DATE)
        assert storage.delete_all("1") == 2
        assert storage.get_user("1") is None
        assert storage.get_days("1") == {}


class TestPersistence:

    def test_reload_from_file(self, tmp_path):
        path = str(tmp_path / "nested" / "tracker.json")
        first = JsonFileStorage(path)
        first.ensure_user("1", chat_id=7)
        first.save_goal("1", "dua_count", 9)
        first.increment("1", DATE, "charity_amount", 150)

        second = JsonFileStorage(path)
        assert second.get_user("1").chat_id == 7
        assert second.get_goals("1").dua_count == 9
        assert second.get_day("1", DATE).charity_amount == 150
