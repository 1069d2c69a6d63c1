#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HealthTracker - Goal Tracker
Цели на месяц и расчёт прогресса по дням с выполненными привычками

Прогресс цели = число "дней выполнения" месяца (дней, где отмечена хотя бы
одна привычка), делённое на target, в процентах, не более 100.
Достижение 100% сообщается подписчикам событием TargetReached; сам расчёт
прогресса документ не меняет и событий не порождает.

Версия: 1.0.0
Дата: 2025-06-20
"""

import math
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from core.entries import EntryLedger
from core.models import Goal, Session, validate_text, validate_target, validate_year_month
from database.store import DataStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TargetReached:
    """Событие: цель месяца выполнена"""
    username: str
    year_month: str
    goal_id: str
    percent: int


@dataclass
class GoalProgress:
    """Цель с рассчитанным прогрессом"""
    goal: Goal
    year_month: str
    completions: int
    percent: int

    @property
    def reached(self) -> bool:
        return self.percent >= 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.goal.to_dict(),
            "year_month": self.year_month,
            "completions": self.completions,
            "percent": self.percent,
            "reached": self.reached
        }


TargetListener = Callable[[TargetReached], None]


class GoalTracker:
    """Цели по месяцам"""

    def __init__(self, store: DataStore, ledger: Optional[EntryLedger] = None):
        self.store = store
        self.ledger = ledger or EntryLedger(store)
        self.listeners: List[TargetListener] = []

    # ===== СОБЫТИЯ =====

    def add_listener(self, listener: TargetListener) -> None:
        """Подписаться на события достижения цели"""
        self.listeners.append(listener)

    def remove_listener(self, listener: TargetListener) -> None:
        if listener in self.listeners:
            self.listeners.remove(listener)

    def _emit(self, event: TargetReached) -> None:
        for listener in list(self.listeners):
            try:
                listener(event)
            except Exception as e:
                logger.warning(f"Target listener failed for goal {event.goal_id}: {e}")

    # ===== CRUD =====

    def list_goals(self, session: Session, year_month: str) -> List[Goal]:
        validate_year_month(year_month)
        return list(session.document.goals.get(year_month, []))

    def add_goal(self, session: Session, year_month: str, title: str, target: Any) -> str:
        """Добавить цель на месяц, вернуть её id"""
        validate_year_month(year_month)
        goal = Goal.create(title, target)

        goals = session.document.goals.setdefault(year_month, [])
        while any(g.id == goal.id for g in goals):
            goal = Goal.create(title, goal.target)

        goals.append(goal)
        self.store.save(session.username, session.document)

        logger.info(f"Added goal {goal.id} for '{session.username}' in {year_month}")
        return goal.id

    def find_goal(self, session: Session, goal_id: str,
                  year_month: Optional[str] = None) -> Optional[Tuple[str, Goal]]:
        """Найти цель; без year_month ищем во всех месяцах"""
        if year_month is not None:
            months = [validate_year_month(year_month)]
        else:
            months = sorted(session.document.goals.keys())

        for month in months:
            for goal in session.document.goals.get(month, []):
                if goal.id == goal_id:
                    return month, goal
        return None

    def edit_goal(self, session: Session, goal_id: str, new_title: str,
                  new_target: Any = None, year_month: Optional[str] = None) -> bool:
        """Изменить название и цель; new_target=None оставляет прежнее значение"""
        found = self.find_goal(session, goal_id, year_month)
        if found is None:
            return False

        _, goal = found
        title = validate_text(new_title, max_length=200, field_name="title")
        target = goal.target if new_target is None else validate_target(new_target)

        goal.title = title
        goal.target = target
        self.store.save(session.username, session.document)
        return True

    def remove_goal(self, session: Session, goal_id: str, year_month: Optional[str] = None) -> bool:
        found = self.find_goal(session, goal_id, year_month)
        if found is None:
            return False

        month, _ = found
        session.document.goals[month] = [g for g in session.document.goals[month] if g.id != goal_id]
        self.store.save(session.username, session.document)

        logger.info(f"Removed goal {goal_id} for '{session.username}' in {month}")
        return True

    # ===== ПРОГРЕСС =====

    def count_completion_days(self, session: Session, year_month: str) -> int:
        return len(self.ledger.completion_days(session, year_month))

    @staticmethod
    def percent_for(completions: int, target: int) -> int:
        effective_target = target if target > 0 else 1
        # Округление половины вверх
        return min(100, math.floor(completions / effective_target * 100 + 0.5))

    def compute_progress(self, session: Session, goal: Goal, year_month: str) -> int:
        """Процент выполнения цели за месяц"""
        return self.percent_for(self.count_completion_days(session, year_month), goal.target)

    def progress_for_month(self, session: Session, year_month: str) -> List[GoalProgress]:
        completions = self.count_completion_days(session, year_month)
        return [
            GoalProgress(goal=goal, year_month=year_month, completions=completions,
                         percent=self.percent_for(completions, goal.target))
            for goal in session.document.goals.get(year_month, [])
        ]

    def check_goals(self, session: Session, year_month: str) -> List[GoalProgress]:
        """Рассчитать цели месяца и сообщить о выполненных"""
        progress = self.progress_for_month(session, year_month)

        for item in progress:
            if item.reached:
                self._emit(TargetReached(
                    username=session.username,
                    year_month=year_month,
                    goal_id=item.goal.id,
                    percent=item.percent
                ))

        return progress


__all__ = ['TargetReached', 'GoalProgress', 'GoalTracker']
