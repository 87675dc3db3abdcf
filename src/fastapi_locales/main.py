"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from pathlib import Path
import uuid

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from structlog import contextvars

from fastapi_locales.api.main import api_router
from fastapi_locales.core.config import LocaleSettings, get_settings
from fastapi_locales.core.exceptions import LocalesError
from fastapi_locales.core.logging import get_logger, setup_logging
from fastapi_locales.i18n import (
    ResourceLoader,
    get_locale,
    install_locales,
    is_language_tag,
    translate,
)

logger = get_logger(__name__)

# Messages shipped with the package; application DIRS override them
TRANSLATIONS_DIR = Path(__file__).parent / "translations"


def create_app(
    settings: LocaleSettings | None = None,
    loader: ResourceLoader | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    setup_logging(settings)

    if loader is None:
        loader = ResourceLoader(
            [TRANSLATIONS_DIR, *settings.resource_dirs],
            default_locale=settings.DEFAULT_LOCALE,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        logger.info(
            "application_startup",
            environment=settings.ENVIRONMENT,
            debug=settings.DEBUG,
            default_locale=settings.DEFAULT_LOCALE,
            locales=loader.locales,
        )
        yield
        logger.info("application_shutdown")

    app = FastAPI(title="fastapi-locales", lifespan=lifespan)

    @app.exception_handler(LocalesError)
    async def locales_exception_handler(
        request: Request, exc: LocalesError
    ) -> JSONResponse:
        """Handle all LocalesError subclasses with consistent JSON format.

        Translates error messages into the request locale.
        """
        locale = get_locale()

        translated_message = exc.message
        if exc.message_key:
            translated = translate(exc.message_key, exc.params)
            if translated != exc.message_key:
                translated_message = translated

        logger.warning(
            "locales_exception",
            error_code=exc.error_code,
            message=exc.message,
            translated_message=translated_message,
            locale=locale,
            status_code=exc.status_code,
            details=exc.details,
            path=str(request.url.path),
        )

        content = exc.to_dict()
        content["message"] = translated_message

        headers = {"Content-Language": locale} if is_language_tag(locale) else None
        return JSONResponse(
            status_code=exc.status_code,
            content=content,
            headers=headers,
        )

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        """Add unique request ID to each request for tracing."""
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        contextvars.clear_contextvars()
        contextvars.bind_contextvars(request_id=request_id)

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    @app.get("/health", tags=["health"])
    async def root_health():
        """Root health check endpoint."""
        return {"status": "ok", "message": translate("health_ok")}

    app.include_router(api_router, prefix="/v1")

    # Added last so it runs as the outermost layer
    install_locales(app, settings, loader)

    return app


app = create_app()
