from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Dict, Union


class HealthCheck(BaseModel):
    status: str
    service: str
    version: str
    timestamp: float

# ===== СЕССИЯ =====

class SessionRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)

    @field_validator('username')
    @classmethod
    def validate_username(cls, v):
        if not v.strip():
            raise ValueError('Введите имя пользователя')
        return v.strip()


class SessionInfo(BaseModel):
    username: str
    habits_count: int
    entries_count: int
    goal_months: List[str] = []

# ===== ПРИВЫЧКИ =====

class HabitCreate(BaseModel):
    name: str = Field(..., max_length=100)
    color: Optional[str] = None


class HabitUpdate(BaseModel):
    name: str = Field(..., max_length=100)


class HabitOut(BaseModel):
    id: str
    name: str
    color: str

# ===== ЗАПИСИ =====

class NotesUpdate(BaseModel):
    notes: str = Field("", max_length=10000)


class EntryOut(BaseModel):
    date: str
    notes: str
    completed: Dict[str, bool] = {}
    completed_ids: List[str] = []


class ToggleOut(BaseModel):
    date: str
    habit_id: str
    completed: bool
    celebrate: bool = False

# ===== ЦЕЛИ =====

class GoalCreate(BaseModel):
    title: str = Field(..., max_length=200)
    target: Union[int, str]


class GoalUpdate(BaseModel):
    title: str = Field(..., max_length=200)
    target: Optional[Union[int, str]] = None


class GoalOut(BaseModel):
    id: str
    title: str
    target: int
    year_month: str
    completions: int
    percent: int
    reached: bool


class GoalsOut(BaseModel):
    year_month: str
    goals: List[GoalOut] = []
    celebrate: bool = False

# ===== КАЛЕНДАРЬ =====

class CalendarDot(BaseModel):
    habit_id: str
    color: str
    label: Optional[str] = None


class CalendarDay(BaseModel):
    date: str
    day: int
    dots: List[CalendarDot] = []
    completed_count: int = 0
    has_notes: bool = False


class CalendarOut(BaseModel):
    year_month: str
    first_weekday: int  # 0 - воскресенье
    prev_month: str
    next_month: str
    days: List[CalendarDay] = []

# ===== ИМПОРТ =====

class ImportResult(BaseModel):
    mode: str
    source_username: str
    habits_count: int
    entries_count: int
    goal_months: int
