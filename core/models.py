#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HealthTracker - Core Data Models
Модели документа пользователя: привычки, записи по дням, цели на месяц

Версия: 1.0.0
Дата: 2025-06-20
"""

import copy
import uuid
import logging
from typing import Dict, List, Any
from dataclasses import dataclass, field

from utils.validators import is_valid_color, is_valid_date, is_valid_year_month

logger = logging.getLogger(__name__)

DEFAULT_HABIT_COLOR = "#06b6d4"

# ===== VALIDATION HELPERS =====

class ValidationError(Exception):
    """Ошибка валидации данных"""
    pass


def new_id() -> str:
    """128-битный случайный идентификатор"""
    return uuid.uuid4().hex


def validate_text(text: str, min_length: int = 1, max_length: int = 1000, field_name: str = "text") -> str:
    """Валидация текстовых полей"""
    if not isinstance(text, str):
        raise ValidationError(f"{field_name} должен быть строкой")

    text = text.strip()
    if len(text) < min_length:
        raise ValidationError(f"{field_name} должен содержать минимум {min_length} символов")

    if len(text) > max_length:
        raise ValidationError(f"{field_name} должен содержать максимум {max_length} символов")

    return text


def validate_color(color: str) -> str:
    if not is_valid_color(color):
        raise ValidationError(f"Неверный формат цвета: {color!r}")
    return color.lower()


def validate_iso_date(value: str) -> str:
    if not is_valid_date(value):
        raise ValidationError(f"Неверный формат даты: {value!r}")
    return value


def validate_year_month(value: str) -> str:
    if not is_valid_year_month(value):
        raise ValidationError(f"Неверный формат месяца: {value!r}")
    return value


def validate_target(target: Any) -> int:
    """Цель - положительное целое число (строка с числом тоже подходит)"""
    if isinstance(target, bool):
        raise ValidationError("target должен быть положительным целым числом")

    if isinstance(target, str):
        try:
            target = int(target.strip(), 10)
        except ValueError:
            raise ValidationError("target должен быть положительным целым числом")

    if not isinstance(target, int) or target <= 0:
        raise ValidationError("target должен быть положительным целым числом")

    return target


def _require_mapping(value: Any, field_name: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ValidationError(f"{field_name} должен быть объектом")
    return value


def _optional_mapping(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    """Раздел документа; отсутствующий или null - пустой"""
    value = data.get(key)
    if value is None:
        return {}
    return _require_mapping(value, key)

# ===== CORE MODELS =====

@dataclass
class Habit:
    """Привычка"""
    id: str
    name: str
    color: str = DEFAULT_HABIT_COLOR

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "color": self.color}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Habit":
        data = _require_mapping(data, "habit")
        if not isinstance(data.get("id"), str) or not isinstance(data.get("name"), str):
            raise ValidationError("habit должен содержать строковые id и name")
        return cls(
            id=data["id"],
            name=data["name"],
            color=data.get("color") or DEFAULT_HABIT_COLOR
        )

    @classmethod
    def create(cls, name: str, color: str = DEFAULT_HABIT_COLOR) -> "Habit":
        return cls(
            id=new_id(),
            name=validate_text(name, max_length=100, field_name="name"),
            color=validate_color(color)
        )


@dataclass
class Entry:
    """Заметки и отметки выполнения за один день"""
    notes: str = ""
    completed: Dict[str, bool] = field(default_factory=dict)

    @property
    def has_completion(self) -> bool:
        """День засчитывается, если выполнена хотя бы одна привычка"""
        return any(self.completed.values())

    def completed_ids(self) -> List[str]:
        return [habit_id for habit_id, done in self.completed.items() if done]

    def to_dict(self) -> Dict[str, Any]:
        return {"notes": self.notes, "completed": dict(self.completed)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Entry":
        data = _require_mapping(data, "entry")
        notes = data.get("notes")
        if notes is None:
            notes = ""
        if not isinstance(notes, str):
            raise ValidationError("notes должен быть строкой")
        completed = _optional_mapping(data, "completed")
        return cls(notes=notes, completed={str(k): bool(v) for k, v in completed.items()})


@dataclass
class Goal:
    """Цель на месяц: количество дней с выполненными привычками"""
    id: str
    title: str
    target: int

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "title": self.title, "target": self.target}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Goal":
        data = _require_mapping(data, "goal")
        target = data.get("target")
        if not isinstance(data.get("id"), str) or not isinstance(data.get("title"), str):
            raise ValidationError("goal должен содержать строковые id и title")
        if isinstance(target, bool) or not isinstance(target, int):
            raise ValidationError("goal.target должен быть целым числом")
        return cls(id=data["id"], title=data["title"], target=target)

    @classmethod
    def create(cls, title: str, target: Any) -> "Goal":
        return cls(
            id=new_id(),
            title=validate_text(title, max_length=200, field_name="title"),
            target=validate_target(target)
        )


@dataclass
class Document:
    """Полный документ пользователя"""
    habits: Dict[str, Habit] = field(default_factory=dict)
    entries: Dict[str, Entry] = field(default_factory=dict)
    goals: Dict[str, List[Goal]] = field(default_factory=dict)

    CATEGORIES = ("habits", "entries", "goals")

    @property
    def is_empty(self) -> bool:
        return not (self.habits or self.entries or self.goals)

    def copy(self) -> "Document":
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация в словарь"""
        return {
            "habits": {k: v.to_dict() for k, v in self.habits.items()},
            "entries": {k: v.to_dict() for k, v in self.entries.items()},
            "goals": {k: [g.to_dict() for g in v] for k, v in self.goals.items()}
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Document":
        """Десериализация из словаря. Отсутствующие разделы - пустые"""
        data = _require_mapping(data, "data")

        habits = {}
        for habit_id, habit_data in _optional_mapping(data, "habits").items():
            habit = Habit.from_dict(habit_data)
            if habit.id != habit_id:
                raise ValidationError(f"habits[{habit_id}] содержит другой id: {habit.id!r}")
            habits[habit_id] = habit

        entries = {}
        for iso_date, entry_data in _optional_mapping(data, "entries").items():
            entries[validate_iso_date(iso_date)] = Entry.from_dict(entry_data)

        goals = {}
        for year_month, goal_list in _optional_mapping(data, "goals").items():
            if not isinstance(goal_list, list):
                raise ValidationError(f"goals[{year_month}] должен быть списком")
            goals[validate_year_month(year_month)] = [Goal.from_dict(g) for g in goal_list]

        return cls(habits=habits, entries=entries, goals=goals)


@dataclass
class Session:
    """Активный пользователь и его загруженный документ"""
    username: str
    document: Document = field(default_factory=Document)

# ===== EXPORT =====

__all__ = [
    'ValidationError', 'DEFAULT_HABIT_COLOR',
    'new_id', 'validate_text', 'validate_color', 'validate_iso_date', 'validate_year_month', 'validate_target',
    'Habit', 'Entry', 'Goal', 'Document', 'Session'
]
