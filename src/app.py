"""FastAPI application factory for the shipment tracking API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.config import settings
from src.database.engine import engine
from src.exceptions import AppException, ConflictException, StoreException
from src.middleware.request_id import RequestIdLogFilter, RequestIdMiddleware

logger = logging.getLogger(__name__)

# Keyed by client IP; one default limit for every route
limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] [%(request_id)s] %(message)s"


def configure_logging() -> None:
    """Root logging at ``settings.log_level``, with the request ID on every line."""
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, RequestIdLogFilter) for f in handler.filters):
            handler.addFilter(RequestIdLogFilter())


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Shipment tracker starting (environment=%s)", settings.environment)
    yield
    await engine.dispose()


# ---------------------------------------------------------------------------
# Error envelope
# ---------------------------------------------------------------------------


def _error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: list | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or [],
                "requestId": getattr(request.state, "request_id", "unknown"),
            }
        },
    )


def _field_name(loc: tuple | list) -> str:
    # ("body", "quantity") -> "quantity"; query and path locations keep their prefix
    parts = [str(part) for part in loc]
    if parts and parts[0] == "body":
        parts = parts[1:]
    return ".".join(parts)


async def handle_app_exception(request: Request, exc: AppException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s: %s", exc.code, exc.message)
    return _error_response(request, exc.status_code, exc.code, exc.message, exc.details)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"field": _field_name(err.get("loc", ())), "message": err.get("msg", "")}
        for err in exc.errors()
    ]
    return _error_response(request, 422, "VALIDATION_ERROR", "Validation failed", details)


async def handle_store_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Map store failures onto the envelope.

    Constraint violations that slipped past the service checks (a racing
    duplicate shipment number, a company deleted while an order was being
    added) become conflicts; anything else means the store is unavailable.
    """
    if isinstance(exc, IntegrityError):
        logger.warning("Store rejected write: %s", exc.orig)
        domain_exc: AppException = ConflictException("The change conflicts with existing data.")
    else:
        logger.error("Store error: %s", exc)
        domain_exc = StoreException("The data store could not complete the request.")
    return await handle_app_exception(request, domain_exc)


async def handle_rate_limit(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return _error_response(request, 429, "RATE_LIMITED", f"Rate limit exceeded: {exc.detail}")


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc)
    return _error_response(request, 500, "INTERNAL_ERROR", "An unexpected error occurred.")


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    configure_logging()

    application = FastAPI(
        title="Shipment Tracker API",
        description="Inbound shipments, their company and Amazon orders, and stock status.",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )
    application.state.limiter = limiter

    # Last added runs first: request ID, then CORS, then rate limiting
    application.add_middleware(SlowAPIMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    application.add_middleware(RequestIdMiddleware)

    from src.api.v1 import v1_router

    application.include_router(v1_router)

    application.add_exception_handler(AppException, handle_app_exception)
    application.add_exception_handler(RequestValidationError, handle_request_validation)
    application.add_exception_handler(SQLAlchemyError, handle_store_error)
    application.add_exception_handler(RateLimitExceeded, handle_rate_limit)
    application.add_exception_handler(Exception, handle_unexpected)

    @application.get("/health")
    async def health_check() -> dict:
        return {"status": "ok", "environment": settings.environment}

    return application


app = create_app()
