from fastapi import APIRouter, Depends
from pydantic import BaseModel
from typing import List, Optional

from ..clock import Clock
from ..core.dimensions import DimensionSet
from ..models import DayRecord, DayScore, Goals, RemainingItem, StatisticsReport
from ..storage import TrackerStorage
from ..tracker import today_summary, user_statistics
from .deps import get_clock, get_dimensions, get_storage, verify_api_token

router = APIRouter(prefix="/stats", tags=["statistics"], dependencies=[Depends(verify_api_token)])


class TodayResponse(BaseModel):
    date: str
    campaign_day: Optional[int] = None
    record: DayRecord
    goals: Goals
    score: DayScore
    remaining: List[RemainingItem]


@router.get("/{user_id}", response_model=StatisticsReport)
async def get_statistics(
    user_id: str,
    storage: TrackerStorage = Depends(get_storage),
    clock: Clock = Depends(get_clock),
    dimensions: DimensionSet = Depends(get_dimensions),
):
    """Статистика за всю историю пользователя"""
    return user_statistics(storage, user_id, clock, dimensions)


@router.get("/{user_id}/today", response_model=TodayResponse)
async def get_today(
    user_id: str,
    storage: TrackerStorage = Depends(get_storage),
    clock: Clock = Depends(get_clock),
    dimensions: DimensionSet = Depends(get_dimensions),
):
    """Сегодняшний результат и что осталось по целям"""
    record, goals, score, remaining = today_summary(storage, user_id, clock, dimensions)
    return TodayResponse(
        date=clock.today_key(),
        campaign_day=clock.campaign_day(),
        record=record,
        goals=goals,
        score=score,
        remaining=remaining,
    )
