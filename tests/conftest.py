"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from fastapi_locales.core.config import LocaleSettings
from fastapi_locales.i18n.loader import ResourceLoader
from fastapi_locales.i18n.request import LocaleContext

BUNDLES = {
    "en_US": {
        "greeting": "Hello, {name}!",
        "welcome": "Welcome",
        "items": "%s items",
        "pair": "{0} and {1}",
        "empty": "",
        "error_locale_not_found": "Locale {locale} is not available",
    },
    "zh_CN": {
        "greeting": "你好，{name}！",
        "welcome": "欢迎",
        "error_locale_not_found": "语言 {locale} 不可用",
    },
    "zh_TW": {
        "greeting": "你好，{name}！",
        "welcome": "歡迎",
    },
    "fr_FR": {
        "greeting": "Bonjour, {name} !",
        "welcome": "Bienvenue",
        "items": "%s articles",
    },
}


class FakeLocaleContext(LocaleContext):
    """HTTP-capable locale context backed by plain values.

    Records cookie writes instead of emitting headers.
    """

    is_http = True

    def __init__(
        self,
        query: dict[str, str] | None = None,
        cookies: dict[str, str] | None = None,
        languages: str | list[str] | None = None,
        started: bool = False,
    ) -> None:
        super().__init__()
        self.query = query or {}
        self.cookies = cookies or {}
        self.languages = languages
        self.started = started
        self.cookie_writes: list[tuple[str, str, int, bool]] = []

    def get_query_param(self, name: str) -> str | None:
        return self.query.get(name)

    def get_cookie(self, name: str) -> str | None:
        return self.cookies.get(name)

    def set_cookie(
        self, name: str, value: str, *, max_age: int, http_only: bool = False
    ) -> None:
        self.cookie_writes.append((name, value, max_age, http_only))

    def negotiate_languages(self) -> str | list[str] | None:
        return self.languages

    def has_response_started(self) -> bool:
        return self.started


@pytest.fixture
def settings():
    return LocaleSettings(
        DEFAULT_LOCALE="en_US",
        LOCALE_ALIAS={"zh-TW": "zh_TW", "zh-CN": "zh_CN"},
        DIRS=[],
    )


@pytest.fixture
def loader():
    return ResourceLoader.from_mapping(BUNDLES, default_locale="en_US")


@pytest.fixture
def make_context():
    return FakeLocaleContext
