"""FastAPI application entry point.

Run with ``uvicorn eventra.main:app``.
"""

from contextlib import asynccontextmanager
import uuid

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import RequestResponseEndpoint
from structlog import contextvars

from eventra.api.deps import get_glossary, get_translator
from eventra.api.main import api_router
from eventra.core.config import settings
from eventra.core.db import init_db
from eventra.core.exceptions import AppException, RateLimitError
from eventra.core.logging import get_logger, setup_logging
from eventra.core.rate_limit import limiter
from eventra.i18n import (
    LocaleMiddleware,
    get_locale,
    init_translations,
    translate_with_fallback,
)

setup_logging()
logger = get_logger(__name__)


def custom_generate_unique_id(route: APIRoute) -> str:
    """OpenAPI operation IDs of the form {tag}-{route_name}."""
    if route.tags:
        return f"{route.tags[0]}-{route.name}"
    return route.name


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_translations()
    init_db()

    # An invalid glossary table aborts startup here
    glossary = get_glossary()
    translator = get_translator()

    logger.info(
        "application_startup",
        environment=settings.ENVIRONMENT,
        supported_locales=settings.SUPPORTED_LOCALES,
        default_locale=settings.DEFAULT_LOCALE,
        translate_provider=translator.provider.name,
        glossary_terms=len(glossary),
        backfill_on_read=settings.LOCALIZATION_BACKFILL_ON_READ,
        geocoding_enabled=settings.GEOCODING_ENABLED,
    )
    yield
    logger.info("application_shutdown")


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render AppException subclasses as JSON in the request locale."""
    locale = get_locale()
    message = exc.message
    if exc.message_key:
        message = translate_with_fallback(
            exc.message_key, locale, fallback=exc.message, **exc.params
        )

    logger.warning(
        "app_exception",
        error_code=exc.error_code,
        message=exc.message,
        status_code=exc.status_code,
        locale=locale,
        path=request.url.path,
    )

    content = exc.to_dict()
    content["message"] = message
    return JSONResponse(status_code=exc.status_code, content=content)


async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Render slowapi rejections in the same localized error shape."""
    return await app_exception_handler(request, RateLimitError(limit=str(exc.detail)))


async def add_request_id(request: Request, call_next: RequestResponseEndpoint) -> Response:
    """Bind a request ID to the log context and echo it back."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    contextvars.clear_contextvars()
    contextvars.bind_contextvars(request_id=request_id)

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


async def add_security_headers(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    if settings.ENVIRONMENT == "production":
        response.headers["Strict-Transport-Security"] = (
            "max-age=31536000; includeSubDomains"
        )
    return response


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
        lifespan=lifespan,
        generate_unique_id_function=custom_generate_unique_id,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(AppException, app_exception_handler)

    app.middleware("http")(add_request_id)
    app.middleware("http")(add_security_headers)

    if settings.all_cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.all_cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
            allow_headers=["Accept", "Accept-Language", "Content-Type", "X-Request-ID"],
            expose_headers=["Content-Language", "X-Request-ID"],
        )
        logger.info("cors_configured", origins=settings.all_cors_origins)

    app.include_router(api_router, prefix=settings.API_V1_STR)

    # Added last so it is the outermost layer and error responses get the locale too
    app.add_middleware(LocaleMiddleware, default_locale=settings.DEFAULT_LOCALE)

    return app


app = create_app()


@app.get("/health", tags=["health"])
async def root_health():
    return {"status": "ok", "service": settings.PROJECT_NAME}
