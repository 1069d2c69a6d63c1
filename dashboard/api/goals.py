from fastapi import APIRouter, HTTPException, Depends

from core.models import Session
from services.tracker import HealthTracker
from ..dependencies import DashboardState, get_state, get_tracker, get_session
from ..schemas import GoalCreate, GoalUpdate, GoalOut, GoalsOut

router = APIRouter(prefix="/api/goals", tags=["goals"])


def _goals_out(state: DashboardState, session: Session, year_month: str) -> GoalsOut:
    progress = state.tracker.list_goals(session, year_month)
    return GoalsOut(
        year_month=year_month,
        goals=[GoalOut(**item.to_dict()) for item in progress],
        celebrate=bool(state.pop_celebrations())
    )


@router.get("/{year_month}", response_model=GoalsOut)
async def list_goals(
    year_month: str,
    state: DashboardState = Depends(get_state),
    session: Session = Depends(get_session)
):
    """
    Цели месяца с процентом выполнения
    """
    return _goals_out(state, session, year_month)


@router.post("/{year_month}", response_model=GoalsOut, status_code=201)
async def add_goal(
    year_month: str,
    request: GoalCreate,
    state: DashboardState = Depends(get_state),
    session: Session = Depends(get_session)
):
    state.tracker.add_goal(session, year_month, request.title, request.target)
    return _goals_out(state, session, year_month)


@router.patch("/{year_month}/{goal_id}", response_model=GoalsOut)
async def edit_goal(
    year_month: str,
    goal_id: str,
    request: GoalUpdate,
    state: DashboardState = Depends(get_state),
    session: Session = Depends(get_session)
):
    if not state.tracker.edit_goal(session, goal_id, request.title, request.target, year_month):
        raise HTTPException(status_code=404, detail="Цель не найдена")
    return _goals_out(state, session, year_month)


@router.delete("/{year_month}/{goal_id}", status_code=204)
async def remove_goal(
    year_month: str,
    goal_id: str,
    tracker: HealthTracker = Depends(get_tracker),
    session: Session = Depends(get_session)
):
    if not tracker.remove_goal(session, goal_id, year_month):
        raise HTTPException(status_code=404, detail="Цель не найдена")
