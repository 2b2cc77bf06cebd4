"""Mini Trello API - Main Application Module.

This module initializes the FastAPI application with configuration,
middleware, routing, and lifecycle management for the project board service.
"""

import logging
import sys
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path

# Add the project root to Python path if running directly
if __name__ == "__main__":
    project_root = Path(__file__).parent.parent
    sys.path.insert(0, str(project_root))

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.core.logging_config import setup_logging
from app.database import AsyncSessionLocal, engine
from app.schemas.base import ErrorResponseSchema
from models import Base

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Manage application lifecycle events."""
    logger.info("Starting %s v%s (%s)", settings.app_name, settings.version, settings.environment.value)

    # Development mode: create tables if they don't exist
    if settings.is_development:
        logger.info("Development mode: creating/updating database tables")
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    yield

    logger.info("Shutting down %s", settings.app_name)
    await engine.dispose()


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _error_response(
    request: Request,
    status_code: int,
    message: str,
    error_code: str,
    details=None,
    headers=None,
) -> JSONResponse:
    body = ErrorResponseSchema(
        message=message,
        error_code=error_code,
        details=details,
        timestamp=_now(),
        request_id=getattr(request.state, "request_id", None),
    )
    return JSONResponse(
        status_code=status_code, content=body.model_dump(mode="json"), headers=headers
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    setup_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Collaborative project boards with ordered task lists and tasks",
        version=settings.version,
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    # Add middleware
    setup_middleware(app)

    # Add exception handlers
    setup_exception_handlers(app)

    # Include routers
    setup_routers(app)

    return app


def setup_middleware(app: FastAPI):
    """Configure application middleware."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request ID middleware
    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


def setup_exception_handlers(app: FastAPI):
    """Configure global exception handlers."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Application exceptions carry a structured detail
        if isinstance(exc.detail, dict) and "message" in exc.detail:
            message = exc.detail["message"]
            error_code = exc.detail.get("error_code", "HTTP_ERROR")
            details = exc.detail.get("details")
        else:
            message = str(exc.detail) if exc.detail else "An error occurred"
            error_code = "HTTP_ERROR"
            details = None

        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, message)

        return _error_response(
            request,
            exc.status_code,
            message,
            error_code,
            details,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # field -> message, body/query/path prefix dropped
        errors = {}
        for error in exc.errors():
            loc = [
                str(part) for part in error.get("loc", []) if part not in ("body", "query", "path")
            ]
            field = ".".join(loc) or "request"
            errors.setdefault(field, str(error.get("msg", "Validation error")))

        return _error_response(request, 422, "Validation error", "VALIDATION_ERROR", errors)


def setup_routers(app: FastAPI):
    """Configure application routers."""
    from app.domains.admin.controller import router as admin_router
    from app.domains.project.controller import router as project_router
    from app.domains.task.controller import router as task_router
    from app.domains.task_list.controller import router as task_list_router
    from app.domains.user.controller import router as user_router

    @app.get("/health")
    async def health_check():
        """Health check endpoint with a database round trip."""
        db_status = "healthy"
        try:
            async with AsyncSessionLocal() as db:
                await db.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error("Database health check failed: %s", e)
            db_status = "unhealthy"

        body = {
            "status": "healthy" if db_status == "healthy" else "degraded",
            "version": settings.version,
            "environment": settings.environment.value,
            "timestamp": _now().isoformat(),
            "services": {"database": db_status},
        }
        return JSONResponse(status_code=200 if db_status == "healthy" else 503, content=body)

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "name": settings.app_name,
            "version": settings.version,
            "description": "Projects, ordered task lists and tasks with shared membership",
            "docs_url": "/docs" if settings.is_development else None,
        }

    # Include domain routers
    app.include_router(user_router)
    app.include_router(project_router)
    app.include_router(task_list_router)
    app.include_router(task_router)
    app.include_router(admin_router)


# Create the application instance
app = create_app()


def main():
    """Entry point for running the application directly."""
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_level=settings.log_level.value.lower(),
    )


if __name__ == "__main__":
    main()
