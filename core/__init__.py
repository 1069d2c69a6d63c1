#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HealthTracker - Core Package
Модель документа. Компоненты, изменяющие документ, лежат в
core.habits, core.entries и core.goals
"""

from .models import (
    ValidationError,
    Habit,
    Entry,
    Goal,
    Document,
    Session
)

__all__ = [
    # Exceptions
    'ValidationError',

    # Models
    'Habit',
    'Entry',
    'Goal',
    'Document',
    'Session'
]
