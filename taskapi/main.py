"""
FastAPI application entry point for the Task API.

This module:
- Configures the FastAPI application with middleware and routers
- Sets up structured logging with structlog
- Implements global exception handlers for consistent error responses
- Creates the database schema on startup

Design decisions:
- Structured logging (JSON in prod, console in dev)
- Validation failures are reported as 400 with per-field messages
- Request timing middleware for performance monitoring
"""

import logging
import time
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskapi import __version__
from taskapi.api.routes import task
from taskapi.config import settings
from taskapi.core.exceptions import ErrorCode, TaskAPIError
from taskapi.models.database import create_tables

# ===== Structured Logging Configuration =====

logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer() if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        logging.getLevelName(settings.log_level.upper())
    ),
)

logger = structlog.get_logger()

# Location prefixes FastAPI puts in front of field names
_LOCATION_PARTS = ("body", "path", "query", "header", "cookie")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifecycle manager for FastAPI application.

    Startup creates the tasks table if it does not exist yet.
    """
    logger.info(
        "application_starting",
        service="Task API",
        version=__version__,
        environment=settings.app_env,
        log_level=settings.log_level,
        cors_origins=settings.cors_origins
    )
    create_tables()

    yield

    logger.info("application_shutting_down")


app = FastAPI(
    title="Task API",
    description="REST API for creating, listing, updating and completing tasks",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ===== Middleware Configuration =====

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["*"],
    max_age=600,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Log all incoming requests with timing information.

    Adds X-Process-Time header to response for debugging.
    """
    start_time = time.time()

    logger.info(
        "request_started",
        method=request.method,
        path=request.url.path,
        client_ip=request.client.host if request.client else "unknown",
    )

    try:
        response = await call_next(request)
    except Exception as exc:
        # Unhandled errors still get the timing header and completion log
        response = await generic_error_handler(request, exc)

    process_time = time.time() - start_time

    logger.info(
        "request_completed",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        process_time_ms=round(process_time * 1000, 2)
    )

    response.headers["X-Process-Time"] = str(round(process_time, 3))
    return response


# ===== Global Exception Handlers =====


@app.exception_handler(TaskAPIError)
async def task_api_error_handler(request: Request, exc: TaskAPIError):
    """
    Handle application errors with structured responses.

    Response format:
    {
        "error": "Task 7 not found",
        "error_code": "TASK_001",
        "details": {"task_id": 7}
    }
    """
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "task_api_error",
        error_code=exc.error_code.value,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        cause=repr(exc.__cause__) if exc.__cause__ else None,
        path=request.url.path
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


def _field_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in _LOCATION_PARTS:
            loc = loc[1:]
        if error.get("type") == "json_invalid":
            # loc holds a character offset, not a field
            loc = []
        errors.append({
            "field": ".".join(loc) or "body",
            "message": error.get("msg", "Invalid value"),
        })
    return errors


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """
    Handle Pydantic validation errors as 400 Bad Request.

    Response format:
    {
        "error": "Title is required",
        "error_code": "VAL_001",
        "details": [{"field": "title", "message": "Title is required"}]
    }
    """
    errors = _field_errors(exc)

    logger.warning(
        "validation_error",
        errors=errors,
        path=request.url.path
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": errors[0]["message"] if errors else "Invalid request data",
            "error_code": ErrorCode.VALIDATION_ERROR.value,
            "details": errors
        }
    )


@app.exception_handler(Exception)
async def generic_error_handler(request: Request, exc: Exception):
    """
    Catch-all handler for unexpected exceptions.

    Logs the full exception and returns a generic body so internals never
    reach the client.
    """
    logger.exception(
        "unexpected_error",
        error_type=type(exc).__name__,
        error_message=str(exc),
        path=request.url.path
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error. Please try again.",
            "error_code": ErrorCode.INTERNAL_ERROR.value,
            "reference_id": f"err_{int(time.time())}"
        }
    )


# ===== Router Registration =====

app.include_router(task.router)

# ===== Core Endpoints =====


@app.get("/")
async def root():
    """Service information and endpoint map."""
    return {
        "service": "Task API",
        "version": __version__,
        "status": "operational",
        "environment": settings.app_env,
        "documentation": "/docs" if not settings.is_production else None,
        "endpoints": {
            "health": "/health",
            "tasks": task.router.prefix,
        }
    }


@app.get("/health")
async def health():
    """Health check endpoint for load balancers and monitoring."""
    return {
        "status": "healthy",
        "environment": settings.app_env,
        "version": __version__,
        "timestamp": int(time.time())
    }


if __name__ == "__main__":
    uvicorn.run(
        "taskapi.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.is_development,
        log_level=settings.log_level,
    )
