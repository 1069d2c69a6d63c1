import re
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Query, UploadFile
from fastapi.responses import Response

from core.models import Session
from services import transfer
from services.tracker import HealthTracker
from ..dependencies import DashboardState, get_state, get_tracker, get_session
from ..schemas import ImportResult

router = APIRouter(prefix="/api", tags=["transfer"])

_UNSAFE_FILENAME_CHARS = re.compile(r'[^A-Za-z0-9._-]')


def _attachment_headers(filename: str) -> dict:
    """Content-Disposition с ASCII-именем и UTF-8 именем по RFC 5987"""
    fallback = _UNSAFE_FILENAME_CHARS.sub("_", filename)
    return {
        "Content-Disposition": f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"
    }


@router.get("/export")
async def export_json(
    tracker: HealthTracker = Depends(get_tracker),
    session: Session = Depends(get_session)
):
    """
    Скачать данные пользователя в JSON
    """
    filename, content = tracker.export_json(session)
    return Response(
        content=content.encode("utf-8"),
        media_type="application/json",
        headers=_attachment_headers(filename)
    )


@router.get("/export/csv")
async def export_csv(
    tracker: HealthTracker = Depends(get_tracker),
    session: Session = Depends(get_session)
):
    filename = f"{session.username}-healthtracker.csv"
    return Response(
        content=tracker.export_csv(session),
        media_type="text/csv",
        headers=_attachment_headers(filename)
    )


@router.post("/import", response_model=ImportResult)
async def import_file(
    file: UploadFile = File(...),
    mode: str = Query(transfer.MODE_MERGE, pattern="^(merge|replace)$"),
    state: DashboardState = Depends(get_state),
    session: Session = Depends(get_session)
):
    """
    Импорт файла: merge - объединить с текущими данными, replace - заменить
    """
    payload = transfer.parse_payload(await file.read())
    document = state.tracker.import_payload(session, payload, mode)
    state.celebrations.clear()

    return ImportResult(
        mode=mode,
        source_username=payload["username"],
        habits_count=len(document.habits),
        entries_count=len(document.entries),
        goal_months=len(document.goals)
    )
