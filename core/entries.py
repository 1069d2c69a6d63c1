#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HealthTracker - Entry Ledger
Отметки выполнения привычек и заметки по датам

Версия: 1.0.0
Дата: 2025-06-20
"""

import logging
from typing import List

from core.models import Entry, Session, validate_iso_date, validate_year_month
from database.store import DataStore
from utils.datetime_utils import iter_month_dates

logger = logging.getLogger(__name__)


class EntryLedger:
    """Записи по дням"""

    def __init__(self, store: DataStore):
        self.store = store

    def get_entry(self, session: Session, iso_date: str) -> Entry:
        """Запись за дату или пустая по умолчанию (без создания)"""
        validate_iso_date(iso_date)
        return session.document.entries.get(iso_date) or Entry()

    def _entry_for_update(self, session: Session, iso_date: str) -> Entry:
        validate_iso_date(iso_date)
        return session.document.entries.setdefault(iso_date, Entry())

    def toggle_completion(self, session: Session, habit_id: str, iso_date: str) -> bool:
        """Переключить отметку привычки за день, вернуть новое значение"""
        entry = self._entry_for_update(session, iso_date)
        entry.completed[habit_id] = not entry.completed.get(habit_id, False)
        self.store.save(session.username, session.document)
        return entry.completed[habit_id]

    def set_notes(self, session: Session, iso_date: str, text: str) -> None:
        """Заменить заметки за день целиком"""
        if not isinstance(text, str):
            text = str(text)
        entry = self._entry_for_update(session, iso_date)
        entry.notes = text
        self.store.save(session.username, session.document)

    def completed_habit_ids(self, session: Session, iso_date: str) -> List[str]:
        """Все выполненные привычки за день в порядке добавления"""
        return self.get_entry(session, iso_date).completed_ids()

    def completion_days(self, session: Session, year_month: str) -> List[str]:
        """Даты месяца, в которые выполнена хотя бы одна привычка"""
        validate_year_month(year_month)
        entries = session.document.entries
        return [
            iso_date for iso_date in iter_month_dates(year_month)
            if iso_date in entries and entries[iso_date].has_completion
        ]


__all__ = ['EntryLedger']
