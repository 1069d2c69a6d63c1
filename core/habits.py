#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HealthTracker - Habit Registry
Создание, переименование и удаление привычек в документе пользователя

Версия: 1.0.0
Дата: 2025-06-20
"""

import logging
import unicodedata
from typing import List, Optional

from core.models import Habit, Session, DEFAULT_HABIT_COLOR, validate_text
from database.store import DataStore

logger = logging.getLogger(__name__)

# Привычки, которые получает новый пользователь
DEFAULT_HABITS = (
    ("Run / Cardio 30m", "#06b6d4"),
    ("Stretch / Mobility", "#4ade80"),
)


def _collation_key(name: str) -> str:
    """Имя без диакритики и регистра: 'Éclair' сортируется как 'eclair'"""
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold()


def habit_sort_key(habit: Habit):
    """Порядок отображения: по имени без учёта регистра и диакритики, затем по id"""
    return (_collation_key(habit.name), habit.name.casefold(), habit.id)


class HabitRegistry:
    """CRUD над привычками документа"""

    def __init__(self, store: DataStore, default_color: Optional[str] = None):
        self.store = store
        self.default_color = default_color or DEFAULT_HABIT_COLOR

    def add_habit(self, session: Session, name: str, color: Optional[str] = None) -> str:
        """Добавить привычку, вернуть её id"""
        habit = Habit.create(name, color or self.default_color)

        while habit.id in session.document.habits:
            habit = Habit.create(name, habit.color)

        session.document.habits[habit.id] = habit
        self.store.save(session.username, session.document)

        logger.info(f"Added habit {habit.id} for '{session.username}'")
        return habit.id

    def get_habit(self, session: Session, habit_id: str) -> Optional[Habit]:
        return session.document.habits.get(habit_id)

    def rename_habit(self, session: Session, habit_id: str, new_name: str) -> bool:
        """Переименовать привычку; неизвестный id - ничего не делаем"""
        habit = session.document.habits.get(habit_id)
        if habit is None:
            return False

        habit.name = validate_text(new_name, max_length=100, field_name="name")
        self.store.save(session.username, session.document)
        return True

    def remove_habit(self, session: Session, habit_id: str) -> bool:
        """Удалить привычку и её отметки во всех записях (сами записи остаются)"""
        if habit_id not in session.document.habits:
            return False

        del session.document.habits[habit_id]

        touched = 0
        for entry in session.document.entries.values():
            if habit_id in entry.completed:
                del entry.completed[habit_id]
                touched += 1

        self.store.save(session.username, session.document)

        logger.info(f"Removed habit {habit_id} for '{session.username}', cleaned {touched} entries")
        return True

    def list_habits(self, session: Session) -> List[Habit]:
        return sorted(session.document.habits.values(), key=habit_sort_key)

    def ensure_default_habits(self, session: Session) -> List[str]:
        """Заполнить стартовые привычки, если у пользователя их нет"""
        if session.document.habits:
            return []

        created = []
        for name, color in DEFAULT_HABITS:
            habit = Habit.create(name, color)
            session.document.habits[habit.id] = habit
            created.append(habit.id)

        self.store.save(session.username, session.document)
        return created


__all__ = ['DEFAULT_HABITS', 'habit_sort_key', 'HabitRegistry']
