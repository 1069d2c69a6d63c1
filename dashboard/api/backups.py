from fastapi import APIRouter, HTTPException, Depends
from typing import Any, Dict, List

from core.models import Session
from database.backup import BackupManager
from ..dependencies import DashboardState, get_state, get_session

router = APIRouter(prefix="/api/backups", tags=["backups"])


def _backup_manager(state: DashboardState) -> BackupManager:
    if state.tracker.backup_manager is None:
        raise HTTPException(status_code=404, detail="Резервное копирование отключено")
    return state.tracker.backup_manager


@router.get("", response_model=List[Dict[str, Any]])
async def list_backups(
    state: DashboardState = Depends(get_state),
    session: Session = Depends(get_session)
):
    return _backup_manager(state).list_backups(session.username)


@router.post("", response_model=Dict[str, Any], status_code=201)
async def create_backup(
    state: DashboardState = Depends(get_state),
    session: Session = Depends(get_session)
):
    path = _backup_manager(state).create_backup(session.username)
    if path is None:
        raise HTTPException(status_code=404, detail="Нет сохранённых данных")
    return {"name": path.name}


@router.post("/restore/{name}", response_model=Dict[str, Any])
async def restore_backup(
    name: str,
    state: DashboardState = Depends(get_state),
    session: Session = Depends(get_session)
):
    """
    Восстановить данные из резервной копии и перезагрузить пользователя
    """
    if not _backup_manager(state).restore_backup(session.username, name):
        raise HTTPException(status_code=404, detail="Резервная копия не найдена")

    state.session = state.tracker.load_user(session.username)
    return {"restored": name, "username": session.username}
