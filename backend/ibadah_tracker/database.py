from functools import lru_cache

from pymongo import ASCENDING, MongoClient

from .config import MONGODB_URL, DATABASE_NAME


@lru_cache(maxsize=None)
def get_database(url: str = MONGODB_URL, name: str = DATABASE_NAME):
    client = MongoClient(url, tz_aware=False)
    return client[name]


def create_indexes(db):
    # Коллекции: users (_id = id пользователя Telegram), days (один документ на пользователя и дату)
    db["users"].create_index("setup_done")
    db["days"].create_index([("user_id", ASCENDING), ("date", ASCENDING)], unique=True)
