import json
import logging
import os
import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional

from ..models import DayRecord, UserModel, empty_day
from .base import TrackerStorage, check_counter_field, check_goal_field, check_toggle_field

logger = logging.getLogger(__name__)


class JsonFileStorage(TrackerStorage):
    """Whole dataset in one JSON file, rewritten after every change.

    Layout: ``{"users": {user_id: {...}}, "days": {user_id: {date: {...}}}}``.
    A single lock serialises all mutations.
    """

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()
        self._data = self._load()

    def _load(self) -> dict:
        if not os.path.exists(self.path):
            return {"users": {}, "days": {}}
        with open(self.path, encoding="utf-8") as f:
            data = json.load(f)
        data.setdefault("users", {})
        data.setdefault("days", {})
        logger.info("Loaded %d users from %s", len(data["users"]), self.path)
        return data

    def _save(self):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(self._data, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, self.path)

    def _user_days(self, user_id: str) -> dict:
        return self._data["days"].setdefault(user_id, {})

    def _ensure_day_doc(self, user_id: str, date: str) -> dict:
        days = self._user_days(user_id)
        if date not in days:
            days[date] = empty_day().model_dump(mode="json")
        return days[date]

    # ----- days -----

    def get_day(self, user_id: str, date: str) -> Optional[DayRecord]:
        with self._lock:
            doc = self._data["days"].get(user_id, {}).get(date)
            return DayRecord(**doc) if doc else None

    def get_days(self, user_id, start_date=None, end_date=None, limit=None) -> Dict[str, DayRecord]:
        with self._lock:
            days = self._data["days"].get(user_id, {})
            keys = sorted(
                k for k in days
                if (not start_date or k >= start_date) and (not end_date or k <= end_date)
            )
            if limit:
                keys = keys[-limit:]
            return {k: DayRecord(**days[k]) for k in keys}

    def ensure_day(self, user_id: str, date: str) -> DayRecord:
        with self._lock:
            existed = date in self._user_days(user_id)
            doc = self._ensure_day_doc(user_id, date)
            if not existed:
                self._save()
            return DayRecord(**doc)

    def increment(self, user_id: str, date: str, field: str, amount: float) -> DayRecord:
        check_counter_field(field)
        with self._lock:
            doc = self._ensure_day_doc(user_id, date)
            doc[field] = (doc.get(field) or 0) + amount
            doc["updated_at"] = datetime.now(timezone.utc).isoformat()
            self._save()
            return DayRecord(**doc)

    def toggle(self, user_id: str, date: str, field: str) -> DayRecord:
        check_toggle_field(field)
        with self._lock:
            doc = self._ensure_day_doc(user_id, date)
            target = doc
            if field.startswith("mosque."):
                target = doc.setdefault("mosque", {})
                field = field.split(".", 1)[1]
            target[field] = not target.get(field, False)
            doc["updated_at"] = datetime.now(timezone.utc).isoformat()
            self._save()
            return DayRecord(**doc)

    def reset_day(self, user_id: str, date: str) -> DayRecord:
        with self._lock:
            record = empty_day()
            self._user_days(user_id)[date] = record.model_dump(mode="json")
            self._save()
            return record

    # ----- users -----

    def get_user(self, user_id: str) -> Optional[UserModel]:
        with self._lock:
            doc = self._data["users"].get(user_id)
            return UserModel.from_document(user_id, doc) if doc else None

    def ensure_user(self, user_id: str, chat_id: Optional[int] = None) -> UserModel:
        with self._lock:
            users = self._data["users"]
            if user_id not in users:
                users[user_id] = {
                    "created_at": datetime.now(timezone.utc).isoformat(),
                    "chat_id": chat_id,
                    "setup_done": False,
                    "best_streak": 0,
                }
            elif chat_id is not None:
                users[user_id]["chat_id"] = chat_id
            self._save()
            return UserModel.from_document(user_id, users[user_id])

    def _user_doc(self, user_id: str) -> dict:
        return self._data["users"].setdefault(user_id, {"created_at": datetime.now(timezone.utc).isoformat()})

    def save_goal(self, user_id: str, field: str, value: float):
        check_goal_field(field)
        with self._lock:
            doc = self._user_doc(user_id)
            if not doc.get("goals"):
                doc["goals"] = {}
            doc["goals"][field] = value
            self._save()

    def set_setup_done(self, user_id: str, done: bool):
        with self._lock:
            self._user_doc(user_id)["setup_done"] = done
            self._save()

    def users_with_setup_done(self) -> List[UserModel]:
        with self._lock:
            return [
                UserModel.from_document(user_id, doc)
                for user_id, doc in self._data["users"].items()
                if doc.get("setup_done")
            ]

    def update_best_streak(self, user_id: str, best: int):
        with self._lock:
            doc = self._data["users"].get(user_id)
            if doc is not None and best > doc.get("best_streak", 0):
                doc["best_streak"] = best
                self._save()

    def delete_all(self, user_id: str) -> int:
        with self._lock:
            removed = len(self._data["days"].pop(user_id, {}))
            self._data["users"].pop(user_id, None)
            self._save()
            return removed
