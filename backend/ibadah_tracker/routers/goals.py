from fastapi import APIRouter, Depends, HTTPException

from ..clock import Clock
from ..models import GOAL_FIELDS, Goals, resolve_goals
from ..storage import TrackerStorage
from .deps import get_clock, get_storage, verify_api_token

router = APIRouter(prefix="/goals", tags=["goals"], dependencies=[Depends(verify_api_token)])


@router.get("/{user_id}")
async def get_goals(
    user_id: str,
    storage: TrackerStorage = Depends(get_storage),
    clock: Clock = Depends(get_clock),
):
    """Цели пользователя (или значения по умолчанию)"""
    user = storage.get_user(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    return {
        **resolve_goals(user.goals).model_dump(),
        "configured": user.goals is not None,
        "setup_done": user.setup_done,
        "campaign_day": clock.campaign_day(),
    }


@router.put("/{user_id}")
async def update_goals(
    user_id: str,
    goals: Goals,
    storage: TrackerStorage = Depends(get_storage),
):
    """Сохранить все цели разом"""
    storage.ensure_user(user_id)
    for field in GOAL_FIELDS:
        storage.save_goal(user_id, field, getattr(goals, field))
    storage.set_setup_done(user_id, True)

    return {"success": True, "goals": goals.model_dump()}
