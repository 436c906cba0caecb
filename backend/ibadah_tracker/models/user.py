from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from .day import utc_now
from .goals import Goals


class UserModel(BaseModel):
    user_id: str
    chat_id: Optional[int] = None
    created_at: datetime = Field(default_factory=utc_now)
    goals: Optional[Goals] = Field(default=None, description="Цели, None до настройки")
    setup_done: bool = Field(default=False, description="Мастер целей пройден")
    best_streak: int = Field(default=0, description="Лучший стрик за всё время")

    @classmethod
    def from_document(cls, user_id: str, document: dict) -> "UserModel":
        data = {k: v for k, v in document.items() if k != "_id"}
        data["user_id"] = user_id
        if data.get("goals") is not None:
            data["goals"] = Goals.from_stored(data["goals"])
        return cls(**data)
