"""FastAPI application initialization."""

from contextlib import asynccontextmanager
from uuid import uuid4

from dotenv import load_dotenv

# Load environment variables before anything else
load_dotenv()

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blog_api.api.auth import router as auth_router
from blog_api.api.middleware import CorrelationIdMiddleware
from blog_api.api.routes import router
from blog_api.config import get_settings
from blog_api.errors import BlogApiError
from blog_api.services.logging_service import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = structlog.get_logger(__name__)

    try:
        from blog_api.database import init_database, run_migrations

        await init_database()
        await run_migrations()
        logger.info("database_initialized")
    except Exception as e:
        logger.warning(
            "database_initialization_failed",
            error=str(e),
            note="Continuing without database - auth endpoints will return 500",
        )

    logger.info("application_started", log_level=settings.log_level)

    yield

    try:
        from blog_api.database import close_database

        await close_database()
    except Exception as e:
        logger.warning("database_close_failed", error=str(e))

    logger.info("application_shutdown")


app = FastAPI(
    title="Blog API",
    description="Blog platform backend: registration, login and token sessions",
    version="0.1.0",
    lifespan=lifespan,
)


def _correlation_id(request: Request) -> str:
    return getattr(request.state, "correlation_id", None) or str(uuid4())


def _error_response(status_code: int, message: str, code: str, correlation_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "message": message,
            "code": code,
            "correlation_id": correlation_id,
        },
        headers={"X-Correlation-Id": correlation_id},
    )


@app.exception_handler(BlogApiError)
async def blog_api_exception_handler(request: Request, exc: BlogApiError) -> JSONResponse:
    """Render a core error with the status its kind maps to."""
    correlation_id = _correlation_id(request)
    logger = structlog.get_logger()

    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        "request_failed",
        correlation_id=correlation_id,
        error_code=exc.code,
        status_code=exc.status_code,
        detail=exc.message,
    )

    return _error_response(exc.status_code, exc.message, exc.code, correlation_id)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors with a 400 and the first field error."""
    correlation_id = _correlation_id(request)
    logger = structlog.get_logger()

    errors = exc.errors()
    if errors:
        first_error = errors[0]
        field = ".".join(str(loc) for loc in first_error.get("loc", ["unknown"]))
        message = first_error.get("msg", "Validation failed")
        detail = f"Field '{field}': {message}"
    else:
        detail = "Request validation failed"

    logger.warning("validation_error", correlation_id=correlation_id, detail=detail)

    return _error_response(400, detail, "VALIDATION_ERROR", correlation_id)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback and answer 500."""
    correlation_id = _correlation_id(request)
    structlog.get_logger().exception("unhandled_exception", correlation_id=correlation_id)
    return _error_response(500, "Internal Server Error", "INTERNAL_ERROR", correlation_id)


# CORS middleware for browser clients; cookies need credentials allowed
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(CorrelationIdMiddleware)

app.include_router(auth_router)
app.include_router(router)
