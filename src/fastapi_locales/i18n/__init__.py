"""Per-request locale resolution and message rendering.

The locale for a request is picked from, in order: the ``locale`` query
parameter, the ``locale`` cookie, the Accept-Language header, and the
configured default. The decision is remembered for the request and
stored in the cookie for later requests.

Messages are looked up by key in the resolved locale's resource bundle
and rendered with ``{0}``-style, ``{name}``-style or printf-style
arguments.
"""

from fastapi_locales.i18n.context import (
    LOCALE_CONTEXT_KEY,
    RequestLocaleState,
    get_current_translator,
)
from fastapi_locales.i18n.deps import (
    LocaleContextDep,
    LocaleDep,
    LocalesDep,
    TranslatorDep,
    locale_context_processor,
)
from fastapi_locales.i18n.loader import ResourceLoader
from fastapi_locales.i18n.middleware import LocaleMiddleware, install_locales
from fastapi_locales.i18n.negotiation import parse_accept_language
from fastapi_locales.i18n.renderer import MessageRenderer, classify_args
from fastapi_locales.i18n.request import (
    HttpLocaleContext,
    LocaleContext,
    is_language_tag,
)
from fastapi_locales.i18n.resolver import LocaleResolver
from fastapi_locales.i18n.translator import (
    Locales,
    Translator,
    get_locale,
    locale_scope,
    translate,
)

__all__ = [
    "LOCALE_CONTEXT_KEY",
    "HttpLocaleContext",
    "LocaleContext",
    "LocaleContextDep",
    "LocaleDep",
    "LocaleMiddleware",
    "LocaleResolver",
    "Locales",
    "LocalesDep",
    "MessageRenderer",
    "RequestLocaleState",
    "ResourceLoader",
    "Translator",
    "TranslatorDep",
    "classify_args",
    "get_current_translator",
    "get_locale",
    "install_locales",
    "is_language_tag",
    "locale_context_processor",
    "locale_scope",
    "parse_accept_language",
    "translate",
]
