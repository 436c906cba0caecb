from ibadah_tracker.models import DEFAULT_GOALS, DayRecord, Goals, UserModel, resolve_goals


class TestDayRecord:
    """Stored documents are normalised into complete records"""

    def test_empty_document_gives_empty_day(self):
        record = DayRecord()
        assert record.quran_pages == 0
        assert record.mosque_count() == 0
        assert record.taraweeh is False
        assert record.charity_amount == 0

    def test_missing_and_none_fields_default(self):
        record = DayRecord(**{"quran_pages": None, "mosque": None, "tahajjud": None, "user_id": "1", "date": "2026-03-01"})
        assert record.quran_pages == 0
        assert record.mosque.fajr is False
        assert record.tahajjud is False

    def test_negative_and_garbage_numbers_clamped(self):
        record = DayRecord(quran_pages=-5, istighfar_count="abc", charity_amount=-10.5, dua_count="4")
        assert record.quran_pages == 0
        assert record.istighfar_count == 0
        assert record.charity_amount == 0
        assert record.dua_count == 4

    def test_partial_mosque(self):
        record = DayRecord(mosque={"fajr": True, "isha": True})
        assert record.mosque_count() == 2
        assert record.value("mosque.isha") is True
        assert record.value("mosque.asr") is False


class TestGoals:

    def test_defaults(self):
        assert DEFAULT_GOALS.quran_pages == 20
        assert DEFAULT_GOALS.istighfar_count == 500
        assert DEFAULT_GOALS.dhikr_count == 100
        assert DEFAULT_GOALS.charity_amount == 100
        assert DEFAULT_GOALS.dua_count == 3

    def test_partial_stored_goals_fall_back_per_field(self):
        goals = Goals.from_stored({"quran_pages": 5, "dhikr_count": None})
        assert goals.quran_pages == 5
        assert goals.dhikr_count == 100
        assert goals.dua_count == 3

    def test_negative_goal_clamped(self):
        assert Goals(quran_pages=-3).quran_pages == 0

    def test_resolve_none(self):
        assert resolve_goals(None) == DEFAULT_GOALS
        assert resolve_goals(Goals(dua_count=7)).dua_count == 7


class TestUserModel:

    def test_from_document(self):
        user = UserModel.from_document("42", {"_id": "42", "chat_id": 42, "goals": {"quran_pages": 10}, "setup_done": True})
        assert user.user_id == "42"
        assert user.goals.quran_pages == 10
        assert user.goals.istighfar_count == 500
        assert user.setup_done is True

    def test_from_document_without_goals(self):
        user = UserModel.from_document("7", {"_id": "7"})
        assert user.goals is None
        assert user.best_streak == 0

    def test_legacy_fields_ignored(self):
        user = UserModel.from_document("7", {"_id": "7", "tz": "Europe/Moscow"})
        assert "tz" not in user.model_dump()

    def test_timestamps_are_utc_aware(self):
        assert UserModel(user_id="1").created_at.tzinfo is not None
        assert DayRecord().updated_at.utcoffset().total_seconds() == 0
