# services/__init__.py

"""
Модуль сервисов HealthTracker

Содержит экспорт/импорт документа, ограничение празднований и фасад
HealthTracker, через который работает слой представления.
"""

from . import transfer
from .transfer import ImportValidationError, MODE_MERGE, MODE_REPLACE
from .celebration import CelebrationThrottle
from .tracker import HealthTracker, create_tracker

__all__ = [
    'transfer',
    'ImportValidationError',
    'MODE_MERGE',
    'MODE_REPLACE',
    'CelebrationThrottle',
    'HealthTracker',
    'create_tracker'
]
