from fastapi import APIRouter, Depends

from core.models import Session, validate_year_month
from services.tracker import HealthTracker
from utils.datetime_utils import first_weekday, shift_month
from ..dependencies import get_tracker, get_session
from ..schemas import CalendarDot, CalendarDay, CalendarOut

router = APIRouter(prefix="/api/calendar", tags=["calendar"])

MAX_DOTS = 4
UNLABELED_COLOR = "#9ca3af"


@router.get("/{year_month}", response_model=CalendarOut)
async def get_month(
    year_month: str,
    tracker: HealthTracker = Depends(get_tracker),
    session: Session = Depends(get_session)
):
    """
    Сетка месяца: по каждому дню до четырёх цветных отметок
    """
    validate_year_month(year_month)
    habits = session.document.habits
    days = []

    for day in tracker.month_overview(session, year_month):
        dots = []
        for habit_id in day["completed"][:MAX_DOTS]:
            # Привычка могла быть удалена - рисуем без подписи
            habit = habits.get(habit_id)
            dots.append(CalendarDot(
                habit_id=habit_id,
                color=habit.color if habit else UNLABELED_COLOR,
                label=habit.name if habit else None
            ))

        days.append(CalendarDay(
            date=day["date"],
            day=int(day["date"][-2:]),
            dots=dots,
            completed_count=len(day["completed"]),
            has_notes=day["has_notes"]
        ))

    return CalendarOut(
        year_month=year_month,
        first_weekday=first_weekday(year_month),
        prev_month=shift_month(year_month, -1),
        next_month=shift_month(year_month, 1),
        days=days
    )
