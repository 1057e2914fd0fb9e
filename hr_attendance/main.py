"""HR Attendance — FastAPI Application Factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from hr_attendance.attendance.router import holidays_router
from hr_attendance.attendance.router import router as attendance_router
from hr_attendance.common.exceptions import register_exception_handlers
from hr_attendance.common.rate_limit import limiter
from hr_attendance.config import settings
from hr_attendance.core_hr.router import departments_router, employees_router
from hr_attendance.database import engine
from hr_attendance.leave.router import (
    deduction_router,
    leave_balances_router,
    leave_requests_router,
    leave_types_router,
)

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown events."""
    logger.info("HR Attendance starting (%s)", settings.ENVIRONMENT)
    yield
    await engine.dispose()
    logger.info("HR Attendance stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    configure_logging()

    app = FastAPI(
        title="HR Attendance",
        description="Attendance tracking, leave balances and automatic leave deduction",
        version="1.0.0",
        docs_url="/api/docs" if settings.ENVIRONMENT != "production" else None,
        redoc_url="/api/redoc" if settings.ENVIRONMENT != "production" else None,
        lifespan=lifespan,
    )

    # Exception handlers (RFC 7807)
    register_exception_handlers(app)

    # Rate limiting (slowapi)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/health", tags=["system"])
    async def health_check():
        return {
            "status": "healthy",
            "version": "1.0.0",
            "environment": settings.ENVIRONMENT,
        }

    # Register routers
    app.include_router(employees_router, prefix="/api/employees", tags=["employees"])
    app.include_router(departments_router, prefix="/api/departments", tags=["departments"])
    app.include_router(attendance_router, prefix="/api/attendance", tags=["attendance"])
    app.include_router(holidays_router, prefix="/api/holidays", tags=["holidays"])
    app.include_router(leave_types_router, prefix="/api/leave-types", tags=["leave"])
    app.include_router(leave_requests_router, prefix="/api/leave-requests", tags=["leave"])
    app.include_router(
        leave_balances_router, prefix="/api/leave-balances", tags=["leave-balances"],
    )
    app.include_router(
        deduction_router, prefix="/api/leave-deduction", tags=["leave-deduction"],
    )

    return app


app = create_app()
