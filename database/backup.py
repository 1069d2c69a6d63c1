#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HealthTracker - Backup Manager
Сжатые резервные копии сохранённых документов

Версия: 1.0.0
Дата: 2025-06-20
"""

import gzip
import re
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from database.store import DataStore

logger = logging.getLogger(__name__)


class BackupManager:
    """Менеджер резервных копий"""

    def __init__(self, store: DataStore, backup_dir: Path, max_backups: int = 10):
        self.store = store
        self.backup_dir = Path(backup_dir)
        self.max_backups = max_backups

    def _prefix(self, username: str) -> str:
        return f"backup_{quote(username, safe='')}_"

    def _is_backup_of(self, username: str, name: str) -> bool:
        pattern = re.escape(self._prefix(username)) + r"\d{8}_\d{6}_\d{6}\.json\.gz"
        return re.fullmatch(pattern, name) is not None

    def create_backup(self, username: str) -> Optional[Path]:
        """Создать резервную копию текущего снимка пользователя"""
        key = self.store.storage_key(username)
        raw = self.store.storage.get_item(key)
        if raw is None:
            logger.warning(f"Nothing to back up for '{username}'")
            return None

        self.backup_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S_%f')
        backup_path = self.backup_dir / f"{self._prefix(username)}{timestamp}.json.gz"

        with gzip.open(backup_path, 'wt', encoding='utf-8') as f_out:
            f_out.write(raw)

        logger.info(f"Backup created: {backup_path}")
        self._cleanup_old_backups(username)
        return backup_path

    def backup_all(self) -> List[Path]:
        """Резервные копии всех пользователей"""
        created = []
        for username in self.store.list_usernames():
            path = self.create_backup(username)
            if path:
                created.append(path)
        return created

    def restore_backup(self, username: str, backup_name: str) -> bool:
        """Восстановить снимок пользователя из резервной копии"""
        backup_path = self.backup_dir / backup_name
        if not self._is_backup_of(username, backup_name) or not backup_path.exists():
            logger.error(f"Backup {backup_name} not found for '{username}'")
            return False

        with gzip.open(backup_path, 'rt', encoding='utf-8') as f_in:
            raw = f_in.read()

        self.store.storage.set_item(self.store.storage_key(username), raw)
        logger.info(f"Backup restored from {backup_path} for '{username}'")
        return True

    def list_backups(self, username: str) -> List[Dict[str, Any]]:
        """Получить список резервных копий пользователя, новые первыми"""
        backups = []

        for backup_file in self._backup_files(username):
            stat = backup_file.stat()
            backups.append({
                'name': backup_file.name,
                'size_kb': round(stat.st_size / 1024, 2),
                'created': datetime.fromtimestamp(stat.st_mtime).isoformat()
            })

        return backups

    def _backup_files(self, username: str) -> List[Path]:
        if not self.backup_dir.exists():
            return []
        # Имя содержит метку времени, поэтому сортировка по имени хронологическая
        files = self.backup_dir.glob(f"{self._prefix(username)}*.json.gz")
        return sorted((p for p in files if self._is_backup_of(username, p.name)), reverse=True)

    def _cleanup_old_backups(self, username: str) -> None:
        """Удалить старые резервные копии"""
        for backup in self._backup_files(username)[self.max_backups:]:
            backup.unlink()
            logger.info(f"Removed old backup: {backup}")


__all__ = ['BackupManager']
