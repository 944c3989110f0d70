"""Main FastAPI application for the chat admin backend.

Entry point for the application. Configures:
- FastAPI app with settings
- CORS middleware
- Exception handlers
- Route registration
"""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import get_app_config, get_cors_config, get_settings, setup_logging
from dependencies import get_firestore_service
from errors import AdminError
from responses import (
    error_response,
    http_error_response,
    internal_error_response,
    validation_error_response,
)
from router import router as api_router

# Setup logging
setup_logging(get_settings().log_level)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Management
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - startup and shutdown."""
    # Startup
    logger.info("Starting chat admin backend...")

    try:
        settings = get_settings()
        logger.info("Environment: %s", settings.environment)
        logger.info("App ID: %s", settings.app_id)
        if not settings.admin_emails:
            logger.warning(
                "ADMIN_EMAILS is empty; only callers with the '%s' claim are admins",
                settings.admin_claim,
            )

        # Test Firestore connection
        firestore = get_firestore_service()
        firestore_health = await firestore.health_check()
        if firestore_health.get("status") != "healthy":
            logger.error("Firestore unhealthy: %s", firestore_health)
            raise RuntimeError(f"Firestore health check failed: {firestore_health}")
        logger.info(
            "✓ Firestore connected (latency: %sms)", firestore_health.get("latency_ms")
        )

        logger.info("Chat admin backend started successfully")

    except Exception as e:
        logger.error("Startup validation failed: %s", e)
        raise

    yield

    # Shutdown
    logger.info("Shutting down chat admin backend...")


# Create FastAPI app with lifespan
app_config = get_app_config()
app = FastAPI(lifespan=lifespan, **app_config)

# Add CORS middleware
cors_config = get_cors_config()
app.add_middleware(CORSMiddleware, **cors_config)


# =============================================================================
# Middleware
# =============================================================================


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add request ID to all requests for tracing."""
    request_id = str(uuid.uuid4())[:8]
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id

    return response


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(AdminError)
async def admin_error_handler(request: Request, exc: AdminError) -> JSONResponse:
    """Handle tagged admin errors raised outside handlers."""
    request_id = getattr(request.state, "request_id", None)
    return error_response(exc, request_id=request_id)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Handle Pydantic validation errors as invalid arguments."""
    request_id = getattr(request.state, "request_id", None)

    first_error = exc.errors()[0] if exc.errors() else {}
    field_name = first_error.get("loc", ["unknown"])[-1]

    return validation_error_response(
        str(field_name), jsonable_encoder(exc.errors()), request_id=request_id
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Handle HTTP exceptions (unknown routes, wrong methods)."""
    request_id = getattr(request.state, "request_id", None)
    return http_error_response(exc.status_code, str(exc.detail), request_id)


@app.exception_handler(Exception)
async def general_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle unhandled exceptions."""
    request_id = getattr(request.state, "request_id", None)

    logger.exception("Unhandled exception: %s", exc)

    return internal_error_response(exc, request_id=request_id)


# =============================================================================
# Routes
# =============================================================================

# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint - shows API info."""
    return {
        "name": app_config["title"],
        "description": app_config["description"],
        "docs": "/api/docs",
        "health": "/api/health",
    }


# =============================================================================
# Development Server
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
