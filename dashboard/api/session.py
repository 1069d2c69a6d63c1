from fastapi import APIRouter, Depends
from typing import List

from core.models import Session
from services.tracker import HealthTracker
from ..dependencies import DashboardState, get_state, get_tracker, get_session
from ..schemas import SessionRequest, SessionInfo

router = APIRouter(prefix="/api/session", tags=["session"])


def _session_info(session: Session) -> SessionInfo:
    document = session.document
    return SessionInfo(
        username=session.username,
        habits_count=len(document.habits),
        entries_count=len(document.entries),
        goal_months=sorted(document.goals.keys())
    )


@router.post("", response_model=SessionInfo)
async def load_user(
    request: SessionRequest,
    state: DashboardState = Depends(get_state)
):
    """
    Загрузить пользователя (новый пользователь создаётся пустым)
    """
    state.session = state.tracker.load_user(request.username)
    state.celebrations.clear()
    return _session_info(state.session)


@router.get("", response_model=SessionInfo)
async def get_current_session(session: Session = Depends(get_session)):
    return _session_info(session)


@router.get("/known", response_model=List[str])
async def get_known_usernames(tracker: HealthTracker = Depends(get_tracker)):
    """
    Пользователи с сохранёнными данными
    """
    return tracker.known_usernames()
