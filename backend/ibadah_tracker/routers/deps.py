from functools import lru_cache

from fastapi import Header, HTTPException

from .. import config
from ..clock import Clock
from ..core.dimensions import DimensionSet, get_dimension_set
from ..storage import TrackerStorage, create_storage


@lru_cache(maxsize=None)
def get_storage() -> TrackerStorage:
    return create_storage(config.STORAGE_BACKEND, config.JSON_STORE_PATH)


@lru_cache(maxsize=None)
def get_clock() -> Clock:
    return Clock(config.TZ, config.RAMADAN_START or None)


@lru_cache(maxsize=None)
def get_dimensions() -> DimensionSet:
    return get_dimension_set(config.DIMENSION_SET)


def verify_api_token(authorization: str = Header(...)):
    """Проверка Bearer-токена из Header"""
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid Authorization header")
    if not config.API_TOKEN or authorization[7:] != config.API_TOKEN:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
