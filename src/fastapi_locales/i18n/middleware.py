"""Locale middleware.

Creates one locale context per request and makes it reachable from:
- request.state (under LOCALE_CONTEXT_KEY, plus the bound translator
  under FUNCTION_NAME)
- the module-level translate()/get_locale() helpers, via contextvar

The locale itself is resolved lazily, the first time something asks
for it. Queued locale cookies are flushed when the response starts,
and Content-Language is added if the locale was resolved by then and
is a plain language tag.

Uses pure ASGI middleware to avoid BaseHTTPMiddleware's contextvars issues.
See: https://github.com/encode/starlette/discussions/1729
"""

from fastapi import FastAPI
from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from fastapi_locales.core.config import LocaleSettings
from fastapi_locales.core.logging import get_logger
from fastapi_locales.i18n.context import (
    LOCALE_CONTEXT_KEY,
    reset_current_translator,
    set_current_translator,
)
from fastapi_locales.i18n.loader import ResourceLoader
from fastapi_locales.i18n.request import is_language_tag
from fastapi_locales.i18n.translator import Locales, set_installed_locales

logger = get_logger(__name__)

# ASGI messages that carry response headers
_RESPONSE_START_TYPES = frozenset({"http.response.start", "websocket.accept"})


class LocaleMiddleware:
    """Pure ASGI middleware attaching a locale context to every request."""

    def __init__(self, app: ASGIApp, locales: Locales) -> None:
        self.app = app
        self.locales = locales

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI interface."""
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        ctx = self.locales.context_for(scope)
        translator = self.locales.bind(ctx)

        if "state" not in scope:
            scope["state"] = {}
        scope["state"][LOCALE_CONTEXT_KEY] = ctx
        scope["state"][self.locales.function_name] = translator

        token = set_current_translator(translator)

        async def send_with_locale(message: Message) -> None:
            """Flush locale cookies and add Content-Language on response start."""
            if message["type"] in _RESPONSE_START_TYPES:
                headers = MutableHeaders(raw=list(message.get("headers", [])))
                pending = ctx.pending_cookies
                ctx.apply_pending_cookies(headers)
                if is_language_tag(ctx.locale) and "content-language" not in headers:
                    headers["Content-Language"] = ctx.locale
                message["headers"] = headers.raw
                if pending:
                    logger.info(
                        "locale_cookie_written",
                        locale=ctx.locale,
                        path=scope.get("path"),
                    )

            await send(message)

        try:
            await self.app(scope, receive, send_with_locale)
        finally:
            reset_current_translator(token)


def install_locales(
    app: FastAPI,
    settings: LocaleSettings | None = None,
    loader: ResourceLoader | None = None,
) -> Locales:
    """Attach locale support to ``app``.

    Stores the Locales object on ``app.state.locales`` and adds
    LocaleMiddleware as the outermost layer. The module-level
    get_locale() falls back to its DEFAULT_LOCALE outside a request.
    """
    locales = Locales(settings, loader)
    app.state.locales = locales
    set_installed_locales(locales)
    app.add_middleware(LocaleMiddleware, locales=locales)
    return locales
