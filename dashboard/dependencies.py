#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HealthTracker - Dashboard Dependencies
Состояние дашборда и провайдеры для FastAPI

Версия: 1.0.0
Дата: 2025-06-20
"""

import logging
from typing import List, Optional

from fastapi import HTTPException, Request, status

from core.goals import TargetReached
from core.models import Session
from services.celebration import CelebrationThrottle
from services.tracker import HealthTracker

logger = logging.getLogger(__name__)

CELEBRATION_REASON = "target_reached"


class DashboardState:
    """Активная сессия дашборда и события празднования"""

    def __init__(self, tracker: HealthTracker, throttle: Optional[CelebrationThrottle] = None):
        self.tracker = tracker
        self.throttle = throttle or CelebrationThrottle()
        self.session: Optional[Session] = None
        self.celebrations: List[TargetReached] = []
        self.scheduler = None

        tracker.on_target_reached(self._on_target_reached)

    def _on_target_reached(self, event: TargetReached) -> None:
        if self.session is None or event.username != self.session.username:
            return
        if self.throttle.trigger(CELEBRATION_REASON):
            logger.info(f"🎉 Goal {event.goal_id} reached in {event.year_month}")
            self.celebrations.append(event)

    def pop_celebrations(self) -> List[TargetReached]:
        events, self.celebrations = self.celebrations, []
        return events


def get_state(request: Request) -> DashboardState:
    return request.app.state.dashboard


def get_tracker(request: Request) -> HealthTracker:
    return get_state(request).tracker


def get_session(request: Request) -> Session:
    """Активная сессия; без неё изменять нечего"""
    session = get_state(request).session
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Сначала загрузите пользователя"
        )
    return session
