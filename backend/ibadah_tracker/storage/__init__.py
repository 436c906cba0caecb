from .base import TrackerStorage
from .json_file import JsonFileStorage
from .mongo import MongoStorage


def create_storage(backend: str, json_path: str = None) -> TrackerStorage:
    if backend == "mongo":
        from ..database import create_indexes, get_database

        db = get_database()
        create_indexes(db)
        return MongoStorage(db)
    if backend == "json":
        return JsonFileStorage(json_path)
    raise ValueError(f"Unknown storage backend: {backend!r}")
