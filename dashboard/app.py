#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HealthTracker Web Dashboard - FastAPI Application
Веб-интерфейс трекера: привычки, календарь, заметки, цели, импорт/экспорт

Версия: 1.0.0
Дата: 2025-06-20
"""

import time
import logging
from contextlib import asynccontextmanager
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from config import config
from core.models import ValidationError
from database.storage import StorageError
from services.celebration import CelebrationThrottle
from services.tracker import HealthTracker, create_tracker
from utils.logger import setup_logger
from dashboard.api import routers
from dashboard.dependencies import DashboardState
from dashboard.schemas import HealthCheck

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def _start_backup_scheduler(state: DashboardState) -> Optional[AsyncIOScheduler]:
    """Периодическое резервное копирование всех пользователей"""
    backup_manager = state.tracker.backup_manager
    if backup_manager is None or not config.storage.auto_backup:
        return None

    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        backup_manager.backup_all,
        IntervalTrigger(hours=config.storage.backup_interval_hours),
        id='periodic_backup',
        replace_existing=True
    )
    scheduler.start()
    logger.info(f"Backup scheduler started (every {config.storage.backup_interval_hours}h)")
    return scheduler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения"""
    state: DashboardState = app.state.dashboard

    # Startup
    setup_logger()
    config.ensure_directories()
    logger.info("🚀 Starting HealthTracker dashboard...")
    logger.info(f"📊 Stored users: {len(state.tracker.known_usernames())}")

    state.scheduler = _start_backup_scheduler(state)
    logger.info(f"🌐 Dashboard listening on http://{config.server.host}:{config.server.port}")

    yield

    # Shutdown
    logger.info("🛑 Stopping HealthTracker dashboard...")
    if state.scheduler and state.scheduler.running:
        state.scheduler.shutdown(wait=False)


def create_app(tracker: Optional[HealthTracker] = None,
               throttle: Optional[CelebrationThrottle] = None) -> FastAPI:
    """Создание FastAPI приложения"""
    app = FastAPI(
        title="HealthTracker Dashboard",
        description="Трекер ежедневных привычек, заметок и целей на месяц",
        version=VERSION,
        docs_url="/api/docs" if config.server.debug_mode else None,
        redoc_url=None,
        lifespan=lifespan
    )
    app.state.dashboard = DashboardState(tracker or create_tracker(), throttle)
    app.state.start_time = time.time()

    # ===== MIDDLEWARE =====

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ===== ERROR HANDLERS =====

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(f"Storage error on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=500,
            content={"detail": f"Ошибка хранилища данных: {exc}"}
        )

    # ===== ROUTES =====

    @app.get("/health", response_model=HealthCheck)
    async def health_check():
        return HealthCheck(
            status="healthy",
            service="healthtracker-dashboard",
            version=VERSION,
            timestamp=time.time()
        )

    for router in routers:
        app.include_router(router)

    return app


def main():
    """Запуск дашборда через uvicorn"""
    uvicorn.run(
        "dashboard.app:create_app",
        factory=True,
        host=config.server.host,
        port=config.server.port,
        reload=config.is_development() and config.server.debug_mode,
        log_config=None
    )


if __name__ == "__main__":
    main()
