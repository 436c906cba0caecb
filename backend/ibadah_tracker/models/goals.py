from pydantic import BaseModel, Field, field_validator
from typing import Any, Optional

from .day import non_negative

GOAL_FIELDS = ("quran_pages", "istighfar_count", "dhikr_count", "charity_amount", "dua_count")


class Goals(BaseModel):
    quran_pages: int = Field(default=20, description="Страниц Корана в день")
    istighfar_count: int = Field(default=500, description="Истигфар в день")
    dhikr_count: int = Field(default=100, description="Зикр в день")
    charity_amount: float = Field(default=100, description="Садака в день (₽)")
    dua_count: int = Field(default=3, description="Дуа в день")

    @field_validator("quran_pages", "istighfar_count", "dhikr_count", "dua_count", mode="before")
    @classmethod
    def _clamp_count(cls, value: Any) -> int:
        return non_negative(value)

    @field_validator("charity_amount", mode="before")
    @classmethod
    def _clamp_amount(cls, value: Any) -> float:
        return non_negative(value, float)

    @classmethod
    def from_stored(cls, data: Optional[dict]) -> "Goals":
        """Build goals from a possibly partial stored document.

        Every goal the user has not set yet falls back to its default.
        """
        if not data:
            return cls()
        return cls(**{k: v for k, v in data.items() if k in GOAL_FIELDS and v is not None})


DEFAULT_GOALS = Goals()


def resolve_goals(goals: Optional[Goals]) -> Goals:
    return goals if goals is not None else DEFAULT_GOALS
