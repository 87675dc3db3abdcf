"""fastapi-locales: locale resolution and message rendering for FastAPI."""

from fastapi_locales.core.config import LocaleSettings, get_settings, parse_duration
from fastapi_locales.core.exceptions import (
    ConfigurationError,
    InvalidDurationError,
    LocaleNotFoundError,
    LocalesError,
    ResourceLoadError,
)
from fastapi_locales.i18n import (
    Locales,
    ResourceLoader,
    Translator,
    get_locale,
    install_locales,
    locale_scope,
    translate,
)

__all__ = [
    "ConfigurationError",
    "InvalidDurationError",
    "LocaleNotFoundError",
    "LocaleSettings",
    "Locales",
    "LocalesError",
    "ResourceLoadError",
    "ResourceLoader",
    "Translator",
    "get_locale",
    "get_settings",
    "install_locales",
    "locale_scope",
    "parse_duration",
    "translate",
]
