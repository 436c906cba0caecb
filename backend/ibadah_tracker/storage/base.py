from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from ..models import COUNTER_FIELDS, TOGGLE_FIELDS, DayRecord, Goals, GOAL_FIELDS, UserModel


def check_counter_field(field: str):
    if field not in COUNTER_FIELDS:
        raise ValueError(f"Unknown counter field: {field}")


def check_toggle_field(field: str):
    if field not in TOGGLE_FIELDS:
        raise ValueError(f"Unknown toggle field: {field}")


def check_goal_field(field: str):
    if field not in GOAL_FIELDS:
        raise ValueError(f"Unknown goal field: {field}")


class TrackerStorage(ABC):
    """Per-user users and day records.

    Increments and toggles of one user-day must not lose concurrent updates;
    each backend makes them atomic on its own.
    """

    # ----- days -----

    @abstractmethod
    def get_day(self, user_id: str, date: str) -> Optional[DayRecord]:
        ...

    @abstractmethod
    def get_days(self, user_id: str, start_date: Optional[str] = None,
                 end_date: Optional[str] = None, limit: Optional[int] = None) -> Dict[str, DayRecord]:
        """Days keyed by date, ascending. ``limit`` keeps the most recent days."""

    @abstractmethod
    def ensure_day(self, user_id: str, date: str) -> DayRecord:
        """Create an empty day if it does not exist yet."""

    @abstractmethod
    def increment(self, user_id: str, date: str, field: str, amount: float) -> DayRecord:
        ...

    @abstractmethod
    def toggle(self, user_id: str, date: str, field: str) -> DayRecord:
        """Flip a flag; ``mosque.<prayer>`` addresses a single prayer."""

    @abstractmethod
    def reset_day(self, user_id: str, date: str) -> DayRecord:
        ...

    # ----- users -----

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[UserModel]:
        ...

    @abstractmethod
    def ensure_user(self, user_id: str, chat_id: Optional[int] = None) -> UserModel:
        ...

    @abstractmethod
    def save_goal(self, user_id: str, field: str, value: float):
        ...

    @abstractmethod
    def set_setup_done(self, user_id: str, done: bool):
        ...

    @abstractmethod
    def users_with_setup_done(self) -> List[UserModel]:
        ...

    @abstractmethod
    def update_best_streak(self, user_id: str, best: int):
        """Raise the stored best streak if ``best`` is higher."""

    @abstractmethod
    def delete_all(self, user_id: str) -> int:
        """Remove the user and all their days. Returns the number of days removed."""

    def get_goals(self, user_id: str) -> Optional[Goals]:
        user = self.get_user(user_id)
        return user.goals if user else None
