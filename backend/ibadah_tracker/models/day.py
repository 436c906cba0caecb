from pydantic import BaseModel, Field, field_validator
from typing import Any
from datetime import datetime, timezone

PRAYERS = ("fajr", "dhuhr", "asr", "maghrib", "isha")

# Накопительные поля, изменяются только прибавлением
COUNTER_FIELDS = ("quran_pages", "istighfar_count", "dhikr_count", "charity_amount", "dua_count")

# Счётчики в штуках, без дробной части
WHOLE_COUNTER_FIELDS = ("quran_pages", "istighfar_count", "dhikr_count", "dua_count")

# Отметки-галочки
FLAG_FIELDS = ("taraweeh", "tahajjud", "morning_remembrance", "evening_remembrance", "duha")

TOGGLE_FIELDS = FLAG_FIELDS + tuple(f"mosque.{prayer}" for prayer in PRAYERS)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def non_negative(value: Any, cast=int):
    """Missing, malformed or negative numbers count as zero."""
    if value is None:
        return cast(0)
    try:
        number = cast(float(value))
    except (TypeError, ValueError):
        return cast(0)
    return number if number > 0 else cast(0)


class MosqueAttendance(BaseModel):
    fajr: bool = False
    dhuhr: bool = False
    asr: bool = False
    maghrib: bool = False
    isha: bool = False

    @field_validator(*PRAYERS, mode="before")
    @classmethod
    def _coerce_flag(cls, value: Any) -> bool:
        return bool(value)

    def count(self) -> int:
        return sum(1 for prayer in PRAYERS if getattr(self, prayer))


class DayRecord(BaseModel):
    """One user's marks for one calendar day.

    Always fully populated: whatever is missing in the stored document
    takes the default of an empty day.
    """

    quran_pages: int = Field(default=0, description="Страниц Корана")
    mosque: MosqueAttendance = Field(default_factory=MosqueAttendance, description="Намазы в мечети")
    taraweeh: bool = Field(default=False, description="Таравих")
    tahajjud: bool = Field(default=False, description="Тахаджуд")
    morning_remembrance: bool = Field(default=False, description="Утренние азкары")
    evening_remembrance: bool = Field(default=False, description="Вечерние азкары")
    duha: bool = Field(default=False, description="Духа")
    istighfar_count: int = Field(default=0, description="Истигфар")
    dhikr_count: int = Field(default=0, description="Зикр")
    charity_amount: float = Field(default=0, description="Садака")
    dua_count: int = Field(default=0, description="Дуа")
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator(*WHOLE_COUNTER_FIELDS, mode="before")
    @classmethod
    def _clamp_count(cls, value: Any) -> int:
        return non_negative(value)

    @field_validator("charity_amount", mode="before")
    @classmethod
    def _clamp_amount(cls, value: Any) -> float:
        return non_negative(value, float)

    @field_validator(*FLAG_FIELDS, mode="before")
    @classmethod
    def _coerce_flag(cls, value: Any) -> bool:
        return bool(value)

    @field_validator("mosque", mode="before")
    @classmethod
    def _coerce_mosque(cls, value: Any):
        return value if value is not None else {}

    @field_validator("updated_at", mode="before")
    @classmethod
    def _default_timestamp(cls, value: Any):
        return value if value is not None else utc_now()

    def mosque_count(self) -> int:
        return self.mosque.count()

    def value(self, field: str):
        """Read a counter, a flag or a dotted mosque field like ``mosque.fajr``."""
        if field.startswith("mosque."):
            return getattr(self.mosque, field.split(".", 1)[1])
        return getattr(self, field)


def empty_day() -> DayRecord:
    return DayRecord()
