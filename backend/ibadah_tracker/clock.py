from datetime import date, datetime
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from .core.streaks import format_key, parse_key


class Clock:
    """Time source bound to one configured time zone.

    ``campaign_start`` is an optional ``YYYY-MM-DD`` (e.g. the first day of
    Ramadan) used only to label days.
    """

    def __init__(self, tz_name: str, campaign_start: Optional[str] = None,
                 now: Optional[Callable[[ZoneInfo], datetime]] = None):
        self.tz = ZoneInfo(tz_name)
        self.campaign_start = parse_key(campaign_start) if campaign_start else None
        self._now = now or (lambda tz: datetime.now(tz))

    def now(self) -> datetime:
        return self._now(self.tz)

    def today(self) -> date:
        return self.now().date()

    def today_key(self) -> str:
        return format_key(self.today())

    def days_since(self, reference: date) -> int:
        return (self.today() - reference).days

    def campaign_day(self) -> Optional[int]:
        """1-based day of the campaign, None before it starts or when unset."""
        if self.campaign_start is None:
            return None
        day = self.days_since(self.campaign_start) + 1
        return day if day >= 1 else None
