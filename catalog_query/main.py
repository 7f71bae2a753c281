"""Catalog Query API main application module.

This module initializes the FastAPI application and configures
middleware, routers, error handlers and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalog_query.api.categories import router as categories_router
from catalog_query.api.dependencies import close_catalog_service
from catalog_query.api.health import router as health_router
from catalog_query.api.middleware import setup_middleware
from catalog_query.api.products import router as products_router
from catalog_query.domain.exceptions import (
    DataFormatError,
    DomainError,
    InvalidQueryError,
    NetworkError,
    NotFoundError,
)
from catalog_query.infrastructure.config import settings
from catalog_query.infrastructure.log_config import configure_logging

configure_logging(settings.log_level, json=settings.log_json)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    logger.info(
        "Starting Catalog Query API",
        version=settings.api_version,
        product_source_url=settings.product_source_url,
        cache_max_entries=settings.cache_max_entries,
    )

    yield

    await close_catalog_service()
    logger.info("Shutting down Catalog Query API")


app = FastAPI(
    title="Catalog Query API",
    description="Cached, paginated product queries over a remote catalog",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_middleware(app)

app.include_router(health_router, tags=["Health"])
app.include_router(products_router)
app.include_router(categories_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


# Checked in order; the first matching class wins.
_ERROR_STATUS: list[tuple[type[DomainError], int, str]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND, "NOT_FOUND"),
    (InvalidQueryError, 422, "INVALID_QUERY"),
    (NetworkError, status.HTTP_502_BAD_GATEWAY, "UPSTREAM_UNAVAILABLE"),
    (DataFormatError, status.HTTP_502_BAD_GATEWAY, "UPSTREAM_BAD_PAYLOAD"),
]


def _error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: dict | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error_code": error_code,
            "message": message,
            "details": details or {},
            "request_id": getattr(request.state, "request_id", None),
        },
    )


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Map catalog errors to HTTP responses."""
    for error_cls, status_code, error_code in _ERROR_STATUS:
        if isinstance(exc, error_cls):
            break
    else:
        status_code, error_code = status.HTTP_500_INTERNAL_SERVER_ERROR, "DOMAIN_ERROR"

    logger.warning(
        "Catalog request failed",
        path=request.url.path,
        error_code=error_code,
        error=exc.message,
    )
    return _error_response(request, status_code, error_code, exc.message, exc.details)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions with consistent format."""
    return _error_response(request, exc.status_code, "ERROR", str(exc.detail))


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions with consistent format."""
    logger.exception(
        "Unhandled exception in handler",
        path=request.url.path,
        method=request.method,
        error=str(exc),
    )
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        "An internal error occurred",
    )
