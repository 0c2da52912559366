"""Personnel Records API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PersonnelError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from personnel.api.error_handlers import register_error_handlers
from personnel.api.routes import (
    departments, dept_emp, dept_manager, employees, health, salaries, titles,
)
from personnel.config import get_settings
from personnel.infrastructure.database import init_db
from personnel.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info(
        f"Personnel API started (employee writer: {settings.employee_writer})",
    )
    yield
    await manager.dispose()
    logger.info("Personnel API shutting down")


app = FastAPI(
    title="Personnel Records API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(employees.router)
app.include_router(departments.router)
app.include_router(dept_emp.router)
app.include_router(dept_manager.router)
app.include_router(salaries.router)
app.include_router(titles.router)

register_error_handlers(app)
