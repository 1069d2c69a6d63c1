#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HealthTracker - Data Store
Загрузка и сохранение документа пользователя целиком, одним снимком

Версия: 1.0.0
Дата: 2025-06-20
"""

import json
import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional
from dataclasses import dataclass

from core.models import Document, ValidationError
from database.storage import StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)

LoadFailureCallback = Callable[[str, Exception], None]


@dataclass
class StoreStats:
    """Статистика хранилища"""
    load_count: int = 0
    save_count: int = 0
    error_count: int = 0
    last_save: Optional[str] = None
    last_error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'load_count': self.load_count,
            'save_count': self.save_count,
            'error_count': self.error_count,
            'last_save': self.last_save,
            'last_error': self.last_error
        }


class DataStore:
    """Хранилище документов по имени пользователя"""

    def __init__(self, storage, key_prefix: Optional[str] = None):
        if key_prefix is None:
            from config import config
            key_prefix = config.storage.key_prefix

        self.storage = storage
        self.key_prefix = key_prefix
        self.stats = StoreStats()
        self.load_failure_callbacks: List[LoadFailureCallback] = []

    def storage_key(self, username: str) -> str:
        return f"{self.key_prefix}:{username}"

    def load(self, username: str) -> Document:
        """Загрузить документ; при отсутствии или повреждении - пустой"""
        self.stats.load_count += 1

        try:
            raw = self.storage.get_item(self.storage_key(username))
        except StorageReadError as e:
            self._report_load_failure(username, e)
            return Document()

        if not raw:
            logger.info(f"No stored document for '{username}', starting empty")
            return Document()

        try:
            return Document.from_dict(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as e:
            self._report_load_failure(username, e)
            return Document()

    def save(self, username: str, document: Document) -> None:
        """Записать весь документ, заменив предыдущий снимок"""
        payload = json.dumps(document.to_dict(), ensure_ascii=False)

        try:
            self.storage.set_item(self.storage_key(username), payload)
        except StorageWriteError as e:
            self.stats.error_count += 1
            self.stats.last_error = str(e)
            logger.error(f"Failed to save document for '{username}': {e}")
            raise

        self.stats.save_count += 1
        self.stats.last_save = datetime.now().isoformat()
        logger.debug(f"Saved document for '{username}'")

    def exists(self, username: str) -> bool:
        """Есть ли сохранённые данные (в том числе нечитаемые)"""
        try:
            return self.storage.get_item(self.storage_key(username)) is not None
        except StorageReadError as e:
            logger.warning(f"Stored document for '{username}' exists but is unreadable: {e}")
            return True

    def delete(self, username: str) -> bool:
        """Удалить сохранённый документ"""
        removed = self.storage.remove_item(self.storage_key(username))
        if removed:
            logger.info(f"Deleted stored document for '{username}'")
        return removed

    def list_usernames(self) -> List[str]:
        """Имена пользователей, для которых есть сохранённые данные"""
        prefix = f"{self.key_prefix}:"
        return sorted(key[len(prefix):] for key in self.storage.keys() if key.startswith(prefix))

    def add_load_failure_callback(self, callback: LoadFailureCallback) -> None:
        """Добавить callback для повреждённых документов"""
        self.load_failure_callbacks.append(callback)

    def get_stats(self) -> Dict[str, Any]:
        return self.stats.to_dict()

    def _report_load_failure(self, username: str, error: Exception) -> None:
        self.stats.error_count += 1
        self.stats.last_error = str(error)
        logger.error(f"Stored document for '{username}' is unreadable, using empty document: {error}")

        for callback in self.load_failure_callbacks:
            try:
                callback(username, error)
            except Exception as e:
                logger.warning(f"Load failure callback failed: {e}")


__all__ = ['StoreStats', 'DataStore']
