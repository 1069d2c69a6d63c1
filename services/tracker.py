# services/tracker.py

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from core.models import Document, Entry, Goal, Habit, Session, ValidationError
from core.habits import HabitRegistry
from core.entries import EntryLedger
from core.goals import GoalProgress, GoalTracker, TargetListener
from database.backup import BackupManager
from database.storage import FileStorage
from database.store import DataStore
from services import transfer
from utils.datetime_utils import iter_month_dates
from utils.validators import is_valid_username

logger = logging.getLogger(__name__)


class HealthTracker:
    """
    Точка входа для слоя представления

    Объединяет хранилище и компоненты документа вокруг сессии:
    - загрузка пользователя и стартовые привычки
    - привычки, отметки по дням, заметки
    - цели на месяц и события их достижения
    - экспорт и импорт
    """

    def __init__(self, store: DataStore, backup_manager: Optional[BackupManager] = None,
                 seed_default_habits: bool = False, default_habit_color: Optional[str] = None):
        self.store = store
        self.backup_manager = backup_manager
        self.seed_default_habits = seed_default_habits

        self.habits = HabitRegistry(store, default_habit_color)
        self.entries = EntryLedger(store)
        self.goals = GoalTracker(store, self.entries)

    # ===== ПОЛЬЗОВАТЕЛЬ =====

    def load_user(self, username: str) -> Session:
        """Загрузить документ пользователя (новый пользователь получает пустой)"""
        if not is_valid_username(username):
            raise ValidationError("Введите имя пользователя")

        username = username.strip()
        is_new = not self.store.exists(username)
        session = Session(username=username, document=self.store.load(username))

        if self.seed_default_habits and self.habits.ensure_default_habits(session):
            logger.info(f"Seeded default habits for '{username}'")
        elif is_new:
            self.store.save(username, session.document)

        logger.info(f"Loaded user '{username}' ({'new' if is_new else 'existing'})")
        return session

    def known_usernames(self) -> List[str]:
        return self.store.list_usernames()

    def on_target_reached(self, listener: TargetListener) -> None:
        self.goals.add_listener(listener)

    # ===== ПРИВЫЧКИ =====

    def add_habit(self, session: Session, name: str, color: Optional[str] = None) -> str:
        return self.habits.add_habit(session, name, color)

    def rename_habit(self, session: Session, habit_id: str, new_name: str) -> bool:
        return self.habits.rename_habit(session, habit_id, new_name)

    def remove_habit(self, session: Session, habit_id: str) -> bool:
        return self.habits.remove_habit(session, habit_id)

    def list_habits(self, session: Session) -> List[Habit]:
        return self.habits.list_habits(session)

    # ===== ЗАПИСИ =====

    def get_entry(self, session: Session, iso_date: str) -> Entry:
        return self.entries.get_entry(session, iso_date)

    def toggle_completion(self, session: Session, habit_id: str, iso_date: str) -> bool:
        """Переключить отметку и проверить цели месяца этой даты"""
        value = self.entries.toggle_completion(session, habit_id, iso_date)
        self.goals.check_goals(session, iso_date[:7])
        return value

    def set_notes(self, session: Session, iso_date: str, text: str) -> None:
        self.entries.set_notes(session, iso_date, text)

    def completed_habit_ids(self, session: Session, iso_date: str) -> List[str]:
        return self.entries.completed_habit_ids(session, iso_date)

    def month_overview(self, session: Session, year_month: str) -> List[Dict[str, Any]]:
        """Дни месяца с выполненными привычками и наличием заметок"""
        completion_days = set(self.entries.completion_days(session, year_month))
        overview = []
        for iso_date in iter_month_dates(year_month):
            entry = session.document.entries.get(iso_date) or Entry()
            overview.append({
                "date": iso_date,
                "completed": entry.completed_ids(),
                "has_notes": bool(entry.notes),
                "completion_day": iso_date in completion_days
            })
        return overview

    # ===== ЦЕЛИ =====

    def add_goal(self, session: Session, year_month: str, title: str, target: Any) -> str:
        return self.goals.add_goal(session, year_month, title, target)

    def edit_goal(self, session: Session, goal_id: str, new_title: str,
                  new_target: Any = None, year_month: Optional[str] = None) -> bool:
        return self.goals.edit_goal(session, goal_id, new_title, new_target, year_month)

    def remove_goal(self, session: Session, goal_id: str, year_month: Optional[str] = None) -> bool:
        return self.goals.remove_goal(session, goal_id, year_month)

    def list_goals(self, session: Session, year_month: str) -> List[GoalProgress]:
        """Цели месяца с прогрессом; выполненные цели порождают события"""
        return self.goals.check_goals(session, year_month)

    def compute_progress(self, session: Session, goal: Goal, year_month: str) -> int:
        return self.goals.compute_progress(session, goal, year_month)

    # ===== ЭКСПОРТ / ИМПОРТ =====

    def export_payload(self, session: Session) -> Dict[str, Any]:
        return transfer.export_payload(session.username, session.document)

    def export_json(self, session: Session) -> Tuple[str, str]:
        """Имя файла и содержимое для скачивания"""
        payload = self.export_payload(session)
        return transfer.export_filename(session.username), transfer.dumps_payload(payload)

    def export_csv(self, session: Session) -> bytes:
        return transfer.export_entries_csv(session.document)

    def import_payload(self, session: Session, payload: Any, mode: str = transfer.MODE_MERGE) -> Document:
        """Применить файл импорта к сессии и сохранить"""
        document = transfer.import_payload(session.document, payload, mode)

        if mode == transfer.MODE_REPLACE and self.backup_manager is not None:
            self.backup_manager.create_backup(session.username)

        session.document = document
        self.store.save(session.username, session.document)
        return document


def create_tracker(data_dir: Optional[Path] = None) -> HealthTracker:
    """Трекер с файловым хранилищем по настройкам приложения"""
    from config import config

    store = DataStore(FileStorage(data_dir or config.storage.data_dir), config.storage.key_prefix)
    backup_manager = BackupManager(store, config.storage.backup_dir, config.storage.max_backups)
    return HealthTracker(
        store,
        backup_manager,
        seed_default_habits=config.tracker.seed_default_habits,
        default_habit_color=config.tracker.default_habit_color
    )


__all__ = ['HealthTracker', 'create_tracker']
