"""Storefront API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, exception handlers and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from storefront.api.announcements import router as announcements_router
from storefront.api.banners import router as banners_router
from storefront.api.brands import router as brands_router
from storefront.api.carts import router as carts_router
from storefront.api.categories import router as categories_router
from storefront.api.contacts import router as contacts_router
from storefront.api.health import router as health_router
from storefront.api.middleware import setup_middleware
from storefront.api.orders import router as orders_router
from storefront.api.products import router as products_router
from storefront.api.reviews import router as reviews_router
from storefront.domain.exceptions import DomainError
from storefront.infrastructure.config import settings
from storefront.infrastructure.database import MongoDatabase
from storefront.infrastructure.log import configure_logging

configure_logging(settings.log_level, debug=settings.debug)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    # Startup
    logger.info(
        "Starting Storefront API",
        version=settings.api_version,
        debug=settings.debug,
        database=settings.mongodb_database,
    )

    database = MongoDatabase.from_settings(settings)
    database.ensure_indexes()
    app.state.database = database

    yield

    # Shutdown
    logger.info("Shutting down Storefront API")
    database.close()


app = FastAPI(
    title="Storefront API",
    description="REST backend for an e-commerce storefront",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request ID correlation
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(products_router)
app.include_router(categories_router)
app.include_router(brands_router)
app.include_router(carts_router)
app.include_router(orders_router)
app.include_router(reviews_router)
app.include_router(banners_router)
app.include_router(announcements_router)
app.include_router(contacts_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


def error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: dict | list | None = None,
) -> JSONResponse:
    """Render the standard error envelope."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error_code": error_code,
            "message": message,
            "details": details if details is not None else {},
            "request_id": getattr(request.state, "request_id", None),
        },
    )


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    """Render domain errors with the status code their class declares."""
    logger.info(
        "Domain error",
        path=request.url.path,
        error_code=exc.error_code,
        error=exc.message,
    )
    return error_response(
        request,
        exc.status_code,
        exc.error_code,
        exc.message,
        exc.details,
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions with consistent format."""
    detail = exc.detail
    if isinstance(detail, dict):
        error_code = detail.get("error_code", "ERROR")
        message = detail.get("message", str(detail))
        details = detail.get("details", {})
    else:
        error_code = "ERROR"
        message = str(detail)
        details = {}

    return error_response(request, exc.status_code, error_code, message, details)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors with consistent format."""
    details = [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    return error_response(
        request,
        422,
        "VALIDATION_ERROR",
        "Request validation failed",
        details,
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Handle uncaught exceptions with consistent format."""
    logger.exception(
        "Unhandled exception in handler",
        path=request.url.path,
        method=request.method,
        error=str(exc),
    )
    return error_response(
        request,
        500,
        "INTERNAL_ERROR",
        "An internal error occurred",
    )
