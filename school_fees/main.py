"""Main FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from school_fees.api.v1.router import api_router
from school_fees.core.config import settings
from school_fees.core.database import engine
from school_fees.core.exceptions import AppException
from school_fees.core.scheduler import start_scheduler, stop_scheduler
from school_fees.middleware.logging import RequestLoggingMiddleware

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# Suppress noisy SQLAlchemy logs
logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


def format_validation_error(exc: RequestValidationError) -> str:
    """Render the first pydantic error as ``field: message``."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    error = errors[0]
    location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    message = error.get("msg", "Invalid value")
    if location:
        return f"{'.'.join(location)}: {message}"
    return message


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    if settings.SCHEDULER_ENABLED:
        start_scheduler()
    yield
    logger.info("Shutting down application")
    stop_scheduler()
    engine.dispose()


def create_application() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="""
School fee and attendance management API.

## Features

- **Classes & Students**: Class registry with per-student monthly fee components
- **Fee Records**: Monthly generation, partial payments, overdue sweep
- **Attendance**: One record per student per day, bulk marking, reports
- **Teachers**: Accounts, profiles and class assignments
- **Dashboard**: Collection statistics and trends

## Authentication

All endpoints except login, register and logout require an
`Authorization: Bearer <token>` header. Administrative writes require the
ADMIN role; marking attendance requires the TEACHER role.

## Responses

Successful responses are wrapped as `{"data": ...}`; failures as
`{"error": "Human readable message"}`.
        """,
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middlewares
    app.add_middleware(RequestLoggingMiddleware)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.detail,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": format_validation_error(exc)},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "An internal server error occurred"},
        )

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint for load balancers and monitoring."""
        return {
            "status": "healthy",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
        }

    # Include API router
    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    return app


# Create app instance
app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "school_fees.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
