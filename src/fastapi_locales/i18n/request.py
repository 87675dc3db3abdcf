"""Locale contexts: what the resolver and renderer need from a request.

LocaleContext is the minimal per-request holder (state only) and is
what background jobs and scripts use. HttpLocaleContext adapts an ASGI
http/websocket scope and adds the query, cookie, header and
response-state capabilities that locale resolution reads.
"""

from collections.abc import Mapping
from http.cookies import SimpleCookie
import re
from typing import Protocol, runtime_checkable
from urllib.parse import quote, unquote

from starlette.datastructures import MutableHeaders
from starlette.requests import HTTPConnection
from starlette.types import Scope

from fastapi_locales.i18n.context import RequestLocaleState
from fastapi_locales.i18n.negotiation import parse_accept_language

# Locale identifiers allowed in response headers, e.g. "en", "zh_CN", "sr-Latn-RS"
LANGUAGE_TAG_RE = re.compile(r"[A-Za-z0-9]+(?:[_-][A-Za-z0-9]+)*")


@runtime_checkable
class HttpCapabilities(Protocol):
    """Capabilities of an HTTP-capable locale context."""

    locale_state: RequestLocaleState

    def get_query_param(self, name: str) -> str | None: ...

    def get_cookie(self, name: str) -> str | None: ...

    def set_cookie(
        self, name: str, value: str, *, max_age: int, http_only: bool = False
    ) -> None: ...

    def negotiate_languages(self) -> str | list[str] | None: ...

    def has_response_started(self) -> bool: ...


def is_language_tag(value: str | None) -> bool:
    """Whether ``value`` is safe to send as a Content-Language value."""
    return value is not None and LANGUAGE_TAG_RE.fullmatch(value) is not None


class LocaleContext:
    """Per-request locale holder without any HTTP capability.

    Resolution against a plain LocaleContext always yields the default
    locale and never touches cookies.
    """

    is_http = False

    def __init__(self, state: RequestLocaleState | None = None) -> None:
        self.locale_state = state or RequestLocaleState()

    @property
    def locale(self) -> str | None:
        return self.locale_state.locale

    def attach_resource_mapping(self, mapping: Mapping[str, str] | None) -> None:
        """Attach the key -> text mapping used when rendering messages."""
        self.locale_state.attach_resource_mapping(mapping)


class HttpLocaleContext(LocaleContext):
    """Locale context over an ASGI http or websocket scope.

    Cookie writes are queued and emitted as Set-Cookie headers by
    apply_pending_cookies() when the response starts. Once the response
    has started, has_response_started() is true and resolution no
    longer writes cookies.
    """

    is_http = True

    def __init__(self, scope: Scope, state: RequestLocaleState | None = None) -> None:
        super().__init__(state)
        self.connection = HTTPConnection(scope)
        self._pending_cookies: dict[str, str] = {}
        self._response_started = False

    def get_query_param(self, name: str) -> str | None:
        return self.connection.query_params.get(name)

    def get_cookie(self, name: str) -> str | None:
        value = self.connection.cookies.get(name)
        if value is None:
            return None
        return unquote(value)

    def set_cookie(
        self, name: str, value: str, *, max_age: int, http_only: bool = False
    ) -> None:
        """Queue a Set-Cookie header for ``name``.

        The value is percent-encoded so any locale string (non-ASCII,
        control characters) fits in a latin-1 header; get_cookie()
        decodes it again.
        """
        cookie: SimpleCookie = SimpleCookie()
        cookie[name] = quote(value, safe="")
        cookie[name]["max-age"] = max_age
        cookie[name]["path"] = "/"
        cookie[name]["samesite"] = "lax"
        if http_only:
            cookie[name]["httponly"] = True
        self._pending_cookies[name] = cookie.output(header="").strip()

    def negotiate_languages(self) -> list[str]:
        return parse_accept_language(self.connection.headers.get("accept-language"))

    def has_response_started(self) -> bool:
        return self._response_started

    @property
    def pending_cookies(self) -> list[str]:
        """Set-Cookie header values not yet sent."""
        return list(self._pending_cookies.values())

    def apply_pending_cookies(self, headers: MutableHeaders) -> None:
        """Append queued cookies to response headers and mark the response started."""
        for value in self._pending_cookies.values():
            headers.append("set-cookie", value)
        self._pending_cookies.clear()
        self._response_started = True
