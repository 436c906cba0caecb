import pytest
from datetime import datetime

from ibadah_tracker.clock import Clock
from ibadah_tracker.models import DayRecord, Goals
from ibadah_tracker.storage import JsonFileStorage

TODAY = "2026-03-01"

ALL_PRAYERS = {"fajr": True, "dhuhr": True, "asr": True, "maghrib": True, "isha": True}

SCENARIO_GOALS = Goals(quran_pages=20, istighfar_count=500, dhikr_count=100, charity_amount=100, dua_count=3)


def make_day(**fields) -> DayRecord:
    return DayRecord(**fields)


def perfect_day(goals: Goals = SCENARIO_GOALS) -> DayRecord:
    return DayRecord(
        quran_pages=goals.quran_pages,
        mosque=ALL_PRAYERS,
        taraweeh=True,
        tahajjud=True,
        morning_remembrance=True,
        evening_remembrance=True,
        duha=True,
        istighfar_count=goals.istighfar_count,
        dhikr_count=goals.dhikr_count,
        charity_amount=goals.charity_amount,
        dua_count=goals.dua_count,
    )


def active_day() -> DayRecord:
    return DayRecord(taraweeh=True)


@pytest.fixture
def clock():
    return Clock("Europe/Moscow", "2026-02-18", now=lambda tz: datetime(2026, 3, 1, 12, 0, tzinfo=tz))


@pytest.fixture
def storage(tmp_path):
    return JsonFileStorage(str(tmp_path / "tracker.json"))
