from fastapi import APIRouter, HTTPException, Depends
from typing import List

from core.models import Habit, Session
from services.tracker import HealthTracker
from ..dependencies import get_tracker, get_session
from ..schemas import HabitCreate, HabitUpdate, HabitOut

router = APIRouter(prefix="/api/habits", tags=["habits"])


def _habit_out(habit: Habit) -> HabitOut:
    return HabitOut(**habit.to_dict())


@router.get("", response_model=List[HabitOut])
async def list_habits(
    tracker: HealthTracker = Depends(get_tracker),
    session: Session = Depends(get_session)
):
    """
    Привычки в порядке отображения (по имени)
    """
    return [_habit_out(h) for h in tracker.list_habits(session)]


@router.post("", response_model=HabitOut, status_code=201)
async def add_habit(
    request: HabitCreate,
    tracker: HealthTracker = Depends(get_tracker),
    session: Session = Depends(get_session)
):
    habit_id = tracker.add_habit(session, request.name, request.color)
    return _habit_out(session.document.habits[habit_id])


@router.patch("/{habit_id}", response_model=HabitOut)
async def rename_habit(
    habit_id: str,
    request: HabitUpdate,
    tracker: HealthTracker = Depends(get_tracker),
    session: Session = Depends(get_session)
):
    if not tracker.rename_habit(session, habit_id, request.name):
        raise HTTPException(status_code=404, detail="Привычка не найдена")
    return _habit_out(session.document.habits[habit_id])


@router.delete("/{habit_id}", status_code=204)
async def remove_habit(
    habit_id: str,
    tracker: HealthTracker = Depends(get_tracker),
    session: Session = Depends(get_session)
):
    """
    Удалить привычку; отметки в истории тоже снимаются, записи дней остаются
    """
    if not tracker.remove_habit(session, habit_id):
        raise HTTPException(status_code=404, detail="Привычка не найдена")
