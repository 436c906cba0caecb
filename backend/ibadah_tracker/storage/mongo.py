from datetime import datetime, timezone
from typing import Dict, List, Optional

from pymongo import ReturnDocument

from ..models import DayRecord, UserModel, empty_day
from .base import TrackerStorage, check_counter_field, check_goal_field, check_toggle_field


def _empty_document(exclude=()) -> dict:
    doc = empty_day().model_dump()
    for field in exclude:
        doc.pop(field, None)
    return doc


class MongoStorage(TrackerStorage):
    """MongoDB backend: ``users`` and ``days`` collections."""

    def __init__(self, db):
        self.users = db["users"]
        self.days = db["days"]

    # ----- days -----

    def get_day(self, user_id: str, date: str) -> Optional[DayRecord]:
        doc = self.days.find_one({"user_id": user_id, "date": date}, {"_id": 0})
        return DayRecord(**doc) if doc else None

    def get_days(self, user_id, start_date=None, end_date=None, limit=None) -> Dict[str, DayRecord]:
        query = {"user_id": user_id}
        if start_date or end_date:
            query["date"] = {}
            if start_date:
                query["date"]["$gte"] = start_date
            if end_date:
                query["date"]["$lte"] = end_date

        cursor = self.days.find(query, {"_id": 0}).sort("date", -1)
        if limit:
            cursor = cursor.limit(limit)
        docs = sorted(cursor, key=lambda d: d["date"])
        return {doc["date"]: DayRecord(**doc) for doc in docs}

    def ensure_day(self, user_id: str, date: str) -> DayRecord:
        doc = self.days.find_one_and_update(
            {"user_id": user_id, "date": date},
            {"$setOnInsert": _empty_document()},
            upsert=True,
            projection={"_id": 0},
            return_document=ReturnDocument.AFTER,
        )
        return DayRecord(**doc)

    def increment(self, user_id: str, date: str, field: str, amount: float) -> DayRecord:
        check_counter_field(field)
        doc = self.days.find_one_and_update(
            {"user_id": user_id, "date": date},
            {
                "$inc": {field: amount},
                "$set": {"updated_at": datetime.now(timezone.utc)},
                "$setOnInsert": _empty_document(exclude=(field, "updated_at")),
            },
            upsert=True,
            projection={"_id": 0},
            return_document=ReturnDocument.AFTER,
        )
        return DayRecord(**doc)

    def toggle(self, user_id: str, date: str, field: str) -> DayRecord:
        check_toggle_field(field)
        self.ensure_day(user_id, date)
        # Пайплайн-обновление: чтение и запись флага за одну атомарную операцию
        doc = self.days.find_one_and_update(
            {"user_id": user_id, "date": date},
            [{"$set": {field: {"$not": [f"${field}"]}, "updated_at": datetime.now(timezone.utc)}}],
            projection={"_id": 0},
            return_document=ReturnDocument.AFTER,
        )
        return DayRecord(**doc)

    def reset_day(self, user_id: str, date: str) -> DayRecord:
        record = empty_day()
        self.days.replace_one(
            {"user_id": user_id, "date": date},
            {"user_id": user_id, "date": date, **record.model_dump()},
            upsert=True,
        )
        return record

    # ----- users -----

    def get_user(self, user_id: str) -> Optional[UserModel]:
        doc = self.users.find_one({"_id": user_id})
        return UserModel.from_document(user_id, doc) if doc else None

    def ensure_user(self, user_id: str, chat_id: Optional[int] = None) -> UserModel:
        on_insert = {"created_at": datetime.now(timezone.utc), "setup_done": False, "best_streak": 0}
        update = {"$setOnInsert": on_insert}
        if chat_id is not None:
            update["$set"] = {"chat_id": chat_id}
        else:
            on_insert["chat_id"] = None

        doc = self.users.find_one_and_update(
            {"_id": user_id}, update, upsert=True, return_document=ReturnDocument.AFTER
        )
        return UserModel.from_document(user_id, doc)

    def save_goal(self, user_id: str, field: str, value: float):
        check_goal_field(field)
        self.users.update_one({"_id": user_id}, {"$set": {f"goals.{field}": value}}, upsert=True)

    def set_setup_done(self, user_id: str, done: bool):
        self.users.update_one({"_id": user_id}, {"$set": {"setup_done": done}}, upsert=True)

    def users_with_setup_done(self) -> List[UserModel]:
        return [UserModel.from_document(doc["_id"], doc) for doc in self.users.find({"setup_done": True})]

    def update_best_streak(self, user_id: str, best: int):
        self.users.update_one({"_id": user_id}, {"$max": {"best_streak": best}})

    def delete_all(self, user_id: str) -> int:
        result = self.days.delete_many({"user_id": user_id})
        self.users.delete_one({"_id": user_id})
        return result.deleted_count
