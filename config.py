#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HealthTracker - Configuration
Централизованная конфигурация трекера с валидацией

Версия: 1.0.0
Дата: 2025-06-20
"""

import os
import sys
from pathlib import Path
from typing import Dict, Any
from dataclasses import dataclass
from enum import Enum

import pytz

from utils.validators import is_valid_color


class Environment(Enum):
    """Среды выполнения"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


class LogLevel(Enum):
    """Уровни логирования"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class StorageConfig:
    """Конфигурация хранилища документов"""
    data_dir: Path
    backup_dir: Path
    key_prefix: str = "healthtracker"
    backup_interval_hours: int = 6
    max_backups: int = 10
    auto_backup: bool = True


@dataclass
class ServerConfig:
    """Конфигурация веб-дашборда"""
    host: str = "0.0.0.0"
    port: int = 8080
    debug_mode: bool = False


@dataclass
class TrackerSettings:
    """Поведение трекера"""
    timezone: str = "UTC"
    celebration_cooldown: float = 2.6  # секунды
    seed_default_habits: bool = True
    default_habit_color: str = "#06b6d4"


def _env_flag(key: str, default: str) -> bool:
    return os.getenv(key, default).lower() == 'true'


class TrackerConfig:
    """Главный класс конфигурации"""

    def __init__(self):
        self.environment = Environment(os.getenv('ENVIRONMENT', 'development'))
        self._load_config()
        self._validate_config()

    def _load_config(self):
        """Загрузка конфигурации из переменных окружения"""

        # Директории
        self.data_dir = Path(os.getenv('DATA_DIR', 'data'))
        self.backup_dir = Path(os.getenv('BACKUP_DIR', 'backups'))
        self.log_dir = Path(os.getenv('LOG_DIR', 'logs'))

        # Хранилище
        self.storage = StorageConfig(
            data_dir=self.data_dir,
            backup_dir=self.backup_dir,
            key_prefix=os.getenv('STORAGE_KEY_PREFIX', 'healthtracker'),
            backup_interval_hours=int(os.getenv('BACKUP_INTERVAL_HOURS', 6)),
            max_backups=int(os.getenv('MAX_BACKUPS', 10)),
            auto_backup=_env_flag('AUTO_BACKUP', 'true')
        )

        # Сервер
        self.server = ServerConfig(
            host=os.getenv('HOST', '0.0.0.0'),
            port=int(os.getenv('PORT', 8080)),
            debug_mode=_env_flag('DEBUG_MODE', 'false')
        )

        # Трекер
        self.tracker = TrackerSettings(
            timezone=os.getenv('TIMEZONE', 'UTC'),
            celebration_cooldown=float(os.getenv('CELEBRATION_COOLDOWN', 2.6)),
            seed_default_habits=_env_flag('SEED_DEFAULT_HABITS', 'true'),
            default_habit_color=os.getenv('DEFAULT_HABIT_COLOR', '#06b6d4')
        )

        # Логирование
        self.log_level = LogLevel(os.getenv('LOG_LEVEL', 'INFO').upper())
        self.log_to_file = _env_flag('LOG_TO_FILE', 'false')
        self.log_format = os.getenv(
            'LOG_FORMAT',
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        )

    def _validate_config(self):
        """Валидация конфигурации"""
        errors = []

        if not self.storage.key_prefix or ':' in self.storage.key_prefix:
            errors.append("STORAGE_KEY_PREFIX не может быть пустым или содержать ':'")

        if self.storage.max_backups < 1:
            errors.append("MAX_BACKUPS должен быть положительным числом")

        if self.storage.backup_interval_hours < 1:
            errors.append("BACKUP_INTERVAL_HOURS должен быть положительным числом")

        if not 1024 <= self.server.port <= 65535:
            errors.append(f"Порт {self.server.port} вне допустимого диапазона (1024-65535)")

        if self.tracker.timezone not in pytz.all_timezones_set:
            errors.append(f"Неизвестный часовой пояс: {self.tracker.timezone}")

        if self.tracker.celebration_cooldown < 0:
            errors.append("CELEBRATION_COOLDOWN не может быть отрицательным")

        if not is_valid_color(self.tracker.default_habit_color):
            errors.append(f"Неверный цвет DEFAULT_HABIT_COLOR: {self.tracker.default_habit_color}")

        if errors:
            raise ValueError("Ошибки конфигурации:\n" + "\n".join(f"• {error}" for error in errors))

    def ensure_directories(self):
        """Создание необходимых директорий"""
        directories = [self.data_dir, self.backup_dir]
        if self.log_to_file:
            directories.append(self.log_dir)

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    def get_logging_config(self) -> Dict[str, Any]:
        """Получение конфигурации логирования"""
        handlers = ['console']
        config_handlers: Dict[str, Any] = {
            'console': {
                'class': 'logging.StreamHandler',
                'level': self.log_level.value,
                'formatter': 'default',
                'stream': sys.stdout
            }
        }

        if self.log_to_file:
            handlers.append('file')
            config_handlers['file'] = {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': self.log_level.value,
                'formatter': 'default',
                'filename': str(self.log_dir / f"healthtracker_{self.environment.value}.log"),
                'maxBytes': 10485760,  # 10MB
                'backupCount': 5,
                'encoding': 'utf-8'
            }

        return {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': self.log_format,
                    'datefmt': '%Y-%m-%d %H:%M:%S'
                }
            },
            'handlers': config_handlers,
            'loggers': {
                '': {
                    'level': self.log_level.value,
                    'handlers': handlers,
                    'propagate': False
                },
                'apscheduler': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                },
                'uvicorn.access': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                }
            }
        }

    def is_development(self) -> bool:
        """Проверка режима разработки"""
        return self.environment == Environment.DEVELOPMENT


# Глобальный экземпляр конфигурации
config = TrackerConfig()

__all__ = [
    'config',
    'TrackerConfig',
    'Environment',
    'LogLevel',
    'StorageConfig',
    'ServerConfig',
    'TrackerSettings'
]
