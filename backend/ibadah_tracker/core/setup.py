"""Goal setup wizard.

Five steps in a fixed order, one per quantitative goal. A step accepts a
non-negative number or the "use default" word; anything else keeps the
wizard on the same step.
"""
from dataclasses import dataclass
from typing import Optional

from ..models import DEFAULT_GOALS

DEFAULT_WORDS = ("по умолчанию", "default")


@dataclass(frozen=True)
class SetupStep:
    key: str
    question: str

    @property
    def default(self):
        return getattr(DEFAULT_GOALS, self.key)


SETUP_STEPS = (
    SetupStep("quran_pages", "📖 Сколько страниц Корана в день?"),
    SetupStep("istighfar_count", "🤍 Истигфар в день (кол-во)?"),
    SetupStep("dhikr_count", "📿 Зикр в день (кол-во)?"),
    SetupStep("charity_amount", "💰 Садака в день (₽)?"),
    SetupStep("dua_count", "🤲 Дуа в день (раз)?"),
)


@dataclass(frozen=True)
class SetupTransition:
    step: int
    accepted: bool
    key: Optional[str] = None
    value: Optional[float] = None
    next_step: Optional[int] = None  # None, когда мастер завершён или ввод отклонён

    @property
    def complete(self) -> bool:
        return self.accepted and self.next_step is None


def parse_amount(text: str) -> Optional[int]:
    """Parse a non-negative number typed by the user.

    A comma works as the decimal separator and the result is rounded to a
    whole number. Returns None for anything that is not such a number.
    """
    raw = (text or "").strip().replace(",", ".")
    try:
        number = float(raw)
    except ValueError:
        return None
    if number != number or number < 0 or number == float("inf"):
        return None
    return int(number + 0.5)


def advance(step: int, text: str) -> SetupTransition:
    """Apply one answer to the wizard sitting at ``step``."""
    current = SETUP_STEPS[step]
    answer = (text or "").strip().lower()
    if answer in DEFAULT_WORDS:
        value = current.default
    else:
        value = parse_amount(answer)
        if value is None:
            return SetupTransition(step=step, accepted=False)

    next_step = step + 1
    return SetupTransition(
        step=step,
        accepted=True,
        key=current.key,
        value=value,
        next_step=next_step if next_step < len(SETUP_STEPS) else None,
    )
