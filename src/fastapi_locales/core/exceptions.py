"""Exception hierarchy for fastapi-locales.

All custom exceptions inherit from LocalesError, which provides:
- Machine-readable error codes
- HTTP status codes (for errors surfaced through the API)
- i18n support via message_key and params
- Optional details dict for additional context

Request-time lookups never raise; these errors belong to startup
(configuration, resource loading) and to the demo API.
"""

from typing import Any


class LocalesError(Exception):
    """Base exception for all fastapi-locales errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
        *,
        message_key: str | None = None,
        params: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        self.message_key = message_key
        self.params = params or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dict for JSON serialization."""
        result: dict[str, Any] = {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }
        if self.message_key:
            result["message_key"] = self.message_key
        return result


class ConfigurationError(LocalesError):
    """Invalid configuration or application wiring."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            "CONFIGURATION_ERROR",
            500,
            details,
            message_key="error_configuration",
        )


class InvalidDurationError(ConfigurationError, ValueError):
    """A duration setting (e.g. COOKIE_MAX_AGE) could not be parsed.

    Also a ValueError so pydantic validators report it as a
    validation error.
    """

    def __init__(self, value: Any):
        super().__init__(
            f"Invalid duration: {value!r}",
            {"value": repr(value)},
        )
        self.value = value


class ResourceLoadError(LocalesError):
    """A locale resource file is unreadable or has the wrong shape."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Failed to load locale resource {path}: {reason}",
            "RESOURCE_LOAD_FAILED",
            500,
            {"path": path, "reason": reason},
        )


class LocaleNotFoundError(LocalesError):
    """No resource bundle is loaded for the requested locale."""

    def __init__(self, locale: str):
        super().__init__(
            f"Locale not found: {locale}",
            "LOCALE_NOT_FOUND",
            404,
            {"locale": locale},
            message_key="error_locale_not_found",
            params={"locale": locale},
        )
