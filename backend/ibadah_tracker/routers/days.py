import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from typing import Dict, Optional

from ..clock import Clock
from ..models import DayRecord, WHOLE_COUNTER_FIELDS
from ..storage import TrackerStorage
from .deps import get_clock, get_storage, verify_api_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/days", tags=["days"], dependencies=[Depends(verify_api_token)])


class IncrementRequest(BaseModel):
    field: str
    amount: float


class ToggleRequest(BaseModel):
    field: str


@router.get("/{user_id}", response_model=Dict[str, DayRecord])
async def get_days(
    user_id: str,
    start_date: Optional[str] = Query(default=None),
    end_date: Optional[str] = Query(default=None),
    limit: int = Query(default=30, ge=1, le=400),
    storage: TrackerStorage = Depends(get_storage),
):
    """Отметки по дням, по возрастанию даты"""
    return storage.get_days(user_id, start_date=start_date, end_date=end_date, limit=limit)


@router.post("/{user_id}/today/increment", response_model=DayRecord)
async def increment_today(
    user_id: str,
    request: IncrementRequest,
    storage: TrackerStorage = Depends(get_storage),
    clock: Clock = Depends(get_clock),
):
    """Прибавить к накопительному полю за сегодня"""
    amount = request.amount
    if amount < 0:
        raise HTTPException(status_code=400, detail="Amount must be 0 or greater")
    if request.field in WHOLE_COUNTER_FIELDS:
        if not amount.is_integer():
            raise HTTPException(status_code=400, detail=f"{request.field} takes whole numbers only")
        amount = int(amount)
    try:
        return storage.increment(user_id, clock.today_key(), request.field, amount)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/{user_id}/today/toggle", response_model=DayRecord)
async def toggle_today(
    user_id: str,
    request: ToggleRequest,
    storage: TrackerStorage = Depends(get_storage),
    clock: Clock = Depends(get_clock),
):
    """Переключить галочку за сегодня (mosque.<намаз> для мечети)"""
    try:
        return storage.toggle(user_id, clock.today_key(), request.field)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/{user_id}/today/reset", response_model=DayRecord)
async def reset_today(
    user_id: str,
    storage: TrackerStorage = Depends(get_storage),
    clock: Clock = Depends(get_clock),
):
    """Сбросить сегодняшние отметки"""
    return storage.reset_day(user_id, clock.today_key())


@router.delete("/{user_id}")
async def wipe_user(user_id: str, storage: TrackerStorage = Depends(get_storage)):
    """Удалить пользователя и всю историю дней"""
    removed = storage.delete_all(user_id)
    logger.info("Wiped user %s via API (%d days)", user_id, removed)
    return {"success": True, "deleted_days": removed}
