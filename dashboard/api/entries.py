from fastapi import APIRouter, Depends

from core.models import Entry, Session
from services.tracker import HealthTracker
from ..dependencies import DashboardState, get_state, get_tracker, get_session
from ..schemas import EntryOut, NotesUpdate, ToggleOut

router = APIRouter(prefix="/api/entries", tags=["entries"])


def _entry_out(date: str, entry: Entry) -> EntryOut:
    return EntryOut(
        date=date,
        notes=entry.notes,
        completed=dict(entry.completed),
        completed_ids=entry.completed_ids()
    )


@router.get("/{date}", response_model=EntryOut)
async def get_entry(
    date: str,
    tracker: HealthTracker = Depends(get_tracker),
    session: Session = Depends(get_session)
):
    return _entry_out(date, tracker.get_entry(session, date))


@router.post("/{date}/toggle/{habit_id}", response_model=ToggleOut)
async def toggle_completion(
    date: str,
    habit_id: str,
    state: DashboardState = Depends(get_state),
    session: Session = Depends(get_session)
):
    """
    Переключить отметку привычки за день
    """
    completed = state.tracker.toggle_completion(session, habit_id, date)
    return ToggleOut(
        date=date,
        habit_id=habit_id,
        completed=completed,
        celebrate=bool(state.pop_celebrations())
    )


@router.put("/{date}/notes", response_model=EntryOut)
async def set_notes(
    date: str,
    request: NotesUpdate,
    tracker: HealthTracker = Depends(get_tracker),
    session: Session = Depends(get_session)
):
    tracker.set_notes(session, date, request.notes)
    return _entry_out(date, tracker.get_entry(session, date))
