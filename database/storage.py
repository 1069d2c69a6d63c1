#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HealthTracker - Storage Backends
Хранилище "ключ -> JSON-строка" для снимков документов

Версия: 1.0.0
Дата: 2025-06-20
"""

import os
import threading
import logging
from pathlib import Path
from typing import Dict, List, Optional
from urllib.parse import quote, unquote

logger = logging.getLogger(__name__)

# ===== EXCEPTIONS =====

class StorageError(Exception):
    """Базовое исключение для ошибок хранилища"""
    pass


class StorageReadError(StorageError):
    """Ошибка чтения из хранилища"""
    pass


class StorageWriteError(StorageError):
    """Ошибка записи в хранилище (например, нет места)"""
    pass

# ===== BACKENDS =====

class MemoryStorage:
    """Хранилище в памяти (тесты, встраивание)"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> bool:
        return self._items.pop(key, None) is not None

    def keys(self) -> List[str]:
        return list(self._items.keys())


class FileStorage:
    """Файловое хранилище: один JSON-файл на ключ"""

    SUFFIX = ".json"

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self.file_lock = threading.RLock()

    def path_for(self, key: str) -> Path:
        """Имя файла - ключ с экранированными небезопасными символами"""
        return self.data_dir / f"{quote(key, safe='')}{self.SUFFIX}"

    def get_item(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None

        try:
            with open(path, 'r', encoding='utf-8') as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(f"Failed to read {path}: {e}") from e

    def set_item(self, key: str, value: str) -> None:
        """Атомарная запись через временный файл"""
        path = self.path_for(key)
        temp_file = path.with_suffix('.tmp')

        with self.file_lock:
            try:
                self.data_dir.mkdir(parents=True, exist_ok=True)
                with open(temp_file, 'w', encoding='utf-8') as f:
                    f.write(value)
                os.replace(temp_file, path)
            except OSError as e:
                # Очищаем временный файл в случае ошибки
                if temp_file.exists():
                    temp_file.unlink()
                raise StorageWriteError(f"Failed to write {path}: {e}") from e

    def remove_item(self, key: str) -> bool:
        path = self.path_for(key)
        with self.file_lock:
            if path.exists():
                path.unlink()
                return True
        return False

    def keys(self) -> List[str]:
        if not self.data_dir.exists():
            return []
        return sorted(unquote(p.name[:-len(self.SUFFIX)]) for p in self.data_dir.glob(f"*{self.SUFFIX}"))


__all__ = [
    'StorageError',
    'StorageReadError',
    'StorageWriteError',
    'MemoryStorage',
    'FileStorage'
]
