"""Translation entry points.

Locales is the extension object an application creates once. It owns
the immutable settings, the resolver, the renderer and the resource
loader, and translates on behalf of a per-request locale context.

Inside a request handled by LocaleMiddleware (or a locale_scope block)
the module-level translate() and get_locale() helpers use the
translator bound to the current context.
"""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from starlette.types import Scope

from fastapi_locales.core.config import LocaleSettings, get_settings
from fastapi_locales.i18n.context import (
    RequestLocaleState,
    get_current_translator,
    reset_current_translator,
    set_current_translator,
)
from fastapi_locales.i18n.loader import ResourceLoader
from fastapi_locales.i18n.renderer import MessageRenderer
from fastapi_locales.i18n.request import HttpLocaleContext, LocaleContext
from fastapi_locales.i18n.resolver import LocaleResolver


class Translator:
    """Translation function bound to one locale context.

    Callable, so it can be exposed directly under FUNCTION_NAME:
    ``__("greeting", {"name": "Ana"})``.
    """

    def __init__(self, locales: "Locales", ctx: LocaleContext) -> None:
        self.locales = locales
        self.ctx = ctx

    @property
    def locale(self) -> str:
        return self.locales.get_locale(self.ctx)

    def translate(self, key: str | None = None, *args: Any) -> str:
        return self.locales.translate(self.ctx, key, *args)

    def __call__(self, key: str | None = None, *args: Any) -> str:
        return self.translate(key, *args)


class Locales:
    """Locale resolution and message rendering for an application."""

    def __init__(
        self,
        settings: LocaleSettings | None = None,
        loader: ResourceLoader | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        if loader is None:
            loader = ResourceLoader(
                self.settings.resource_dirs,
                default_locale=self.settings.DEFAULT_LOCALE,
            )
        self.loader = loader
        self.resolver = LocaleResolver(self.settings)
        self.renderer = MessageRenderer()

    @property
    def function_name(self) -> str:
        return self.settings.FUNCTION_NAME

    def context_for(self, scope: Scope) -> HttpLocaleContext:
        """Create the locale context for an ASGI http/websocket scope."""
        return HttpLocaleContext(scope)

    def bind(self, ctx: LocaleContext) -> Translator:
        return Translator(self, ctx)

    def get_locale(self, ctx: LocaleContext) -> str:
        """Resolved locale for ``ctx`` (resolving it on first use)."""
        return self.resolver.resolve(ctx)

    def attach_resources(self, ctx: LocaleContext) -> None:
        """Attach the loaded bundle for the context's resolved locale."""
        ctx.attach_resource_mapping(self.loader.get(self.get_locale(ctx)))

    def translate(self, ctx: LocaleContext, key: str | None = None, *args: Any) -> str:
        """Render ``key`` in the locale of ``ctx``.

        ``translate(ctx)`` with no key always returns "".
        """
        if key is None:
            return ""

        locale = self.get_locale(ctx)
        if ctx.locale_state.resource is None:
            ctx.attach_resource_mapping(self.loader.get(locale))
        return self.renderer.render(
            ctx.locale_state.resource, key, *args, locale=locale
        )


@contextmanager
def locale_scope(
    locales: Locales, locale: str | None = None
) -> Generator[Translator, None, None]:
    """Bind a translator for code running outside a request.

    With ``locale`` given it is used as-is (no alias remapping, no
    cookies); otherwise the default locale applies.

    Usage:
        with locale_scope(locales, "de_DE") as __:
            subject = __("email.subject", {"name": user.name})
    """
    ctx = LocaleContext(RequestLocaleState(locale=locale))
    translator = locales.bind(ctx)
    token = set_current_translator(translator)
    try:
        yield translator
    finally:
        reset_current_translator(token)


_fallback_renderer = MessageRenderer()

# Most recently installed Locales, consulted outside any request
_installed_locales: Locales | None = None


def set_installed_locales(locales: Locales | None) -> None:
    global _installed_locales
    _installed_locales = locales


def translate(key: str | None = None, *args: Any) -> str:
    """Translate with the current request's translator.

    Outside a request the key itself is rendered with the arguments,
    as for a missing translation.
    """
    if key is None:
        return ""
    translator = get_current_translator()
    if translator is None:
        return _fallback_renderer.render(None, key, *args)
    return translator.translate(key, *args)


def get_locale() -> str:
    """Resolved locale of the current request, else DEFAULT_LOCALE.

    Outside a request the default comes from the Locales installed on
    the application, or from the environment when none is installed.
    """
    translator = get_current_translator()
    if translator is not None:
        return translator.locale
    if _installed_locales is not None:
        return _installed_locales.settings.DEFAULT_LOCALE
    return get_settings().DEFAULT_LOCALE
