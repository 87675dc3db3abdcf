"""Per-request locale resolution.

The first non-empty source wins:
- the locale already resolved for this request
- DEFAULT_LOCALE for contexts without HTTP capability
- the QUERY_FIELD query parameter, e.g. ?locale=en-US
- the COOKIE_FIELD cookie
- the first non-wildcard Accept-Language entry
- DEFAULT_LOCALE
"""

from typing import Any, cast

from fastapi_locales.core.config import LocaleSettings
from fastapi_locales.core.logging import get_logger
from fastapi_locales.i18n.request import HttpCapabilities

logger = get_logger(__name__)


def first_negotiated(languages: str | list[str] | None) -> str | None:
    """Pick the preferred language from a negotiation result.

    A leading wildcard is skipped in favour of the next entry.
    """
    if not languages:
        return None
    if isinstance(languages, str):
        return languages
    if languages[0] == "*":
        languages = languages[1:]
    return languages[0] if languages else None


class LocaleResolver:
    """Resolves and persists the locale for a request."""

    def __init__(self, settings: LocaleSettings) -> None:
        self.settings = settings

    def resolve(self, ctx: Any) -> str:
        """Return the locale for the request behind ``ctx``.

        The first call per request decides; the result is memoized on
        ``ctx.locale_state`` and written to the locale cookie when it
        differs from the cookie and the response has not started.
        """
        state = ctx.locale_state
        if state.locale:
            return state.locale

        if not getattr(ctx, "is_http", False):
            return self.settings.DEFAULT_LOCALE

        http = cast(HttpCapabilities, ctx)
        cookie_locale = http.get_cookie(self.settings.COOKIE_FIELD)

        source = "query"
        locale = http.get_query_param(self.settings.QUERY_FIELD)
        if not locale:
            source = "cookie"
            locale = cookie_locale
        if not locale:
            source = "header"
            locale = first_negotiated(http.negotiate_languages())
        if not locale:
            source = "default"
            locale = self.settings.DEFAULT_LOCALE

        locale = self.settings.LOCALE_ALIAS.get(locale, locale)

        if cookie_locale != locale and not http.has_response_started():
            http.set_cookie(
                self.settings.COOKIE_FIELD,
                locale,
                max_age=self.settings.COOKIE_MAX_AGE,
                http_only=False,
            )
            logger.debug(
                "locale_cookie_written",
                locale=locale,
                previous=cookie_locale,
            )

        logger.debug("locale_resolved", locale=locale, source=source)
        return state.remember(locale)
