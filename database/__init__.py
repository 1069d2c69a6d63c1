"""
Хранилище документов HealthTracker
"""

from .storage import StorageError, StorageReadError, StorageWriteError, MemoryStorage, FileStorage
from .store import DataStore, StoreStats
from .backup import BackupManager

__all__ = [
    'StorageError',
    'StorageReadError',
    'StorageWriteError',
    'MemoryStorage',
    'FileStorage',
    'DataStore',
    'StoreStats',
    'BackupManager'
]
