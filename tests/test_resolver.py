"""Tests for per-request locale resolution."""

from __future__ import annotations

import pytest

from fastapi_locales.core.config import LocaleSettings
from fastapi_locales.i18n.context import RequestLocaleState
from fastapi_locales.i18n.request import LocaleContext
from fastapi_locales.i18n.resolver import LocaleResolver, first_negotiated

ONE_YEAR = 31557600


@pytest.fixture
def resolver(settings):
    return LocaleResolver(settings)


class TestPrecedence:
    def test_query_wins_over_cookie_and_header(self, resolver, make_context):
        ctx = make_context(
            query={"locale": "fr_FR"},
            cookies={"locale": "zh_CN"},
            languages=["de-DE", "en"],
        )
        assert resolver.resolve(ctx) == "fr_FR"
        assert ctx.cookie_writes == [("locale", "fr_FR", ONE_YEAR, False)]

    def test_cookie_wins_over_header(self, resolver, make_context):
        ctx = make_context(cookies={"locale": "zh_CN"}, languages=["de-DE"])
        assert resolver.resolve(ctx) == "zh_CN"
        assert ctx.cookie_writes == []

    def test_header_first_entry(self, resolver, make_context):
        ctx = make_context(languages=["de-DE", "en"])
        assert resolver.resolve(ctx) == "de-DE"
        assert ctx.cookie_writes == [("locale", "de-DE", ONE_YEAR, False)]

    def test_header_skips_leading_wildcard(self, resolver, make_context):
        ctx = make_context(languages=["*", "ja"])
        assert resolver.resolve(ctx) == "ja"

    def test_header_only_wildcard_falls_back_to_default(self, resolver, make_context):
        ctx = make_context(languages=["*"])
        assert resolver.resolve(ctx) == "en_US"

    def test_header_single_string(self, resolver, make_context):
        ctx = make_context(languages="ko")
        assert resolver.resolve(ctx) == "ko"

    def test_no_signals_uses_default(self, resolver, make_context):
        ctx = make_context()
        assert resolver.resolve(ctx) == "en_US"
        assert ctx.cookie_writes == [("locale", "en_US", ONE_YEAR, False)]

    def test_empty_query_falls_through_to_cookie(self, resolver, make_context):
        ctx = make_context(query={"locale": ""}, cookies={"locale": "fr_FR"})
        assert resolver.resolve(ctx) == "fr_FR"

    def test_custom_field_names(self, make_context):
        resolver = LocaleResolver(
            LocaleSettings(QUERY_FIELD="lang", COOKIE_FIELD="lang_pref", DIRS=[])
        )
        ctx = make_context(
            query={"locale": "fr_FR", "lang": "ja"},
            cookies={"locale": "zh_CN"},
        )
        assert resolver.resolve(ctx) == "ja"
        assert ctx.cookie_writes[0][0] == "lang_pref"


class TestAlias:
    def test_query_alias_is_canonicalized(self, resolver, make_context):
        ctx = make_context(query={"locale": "zh-TW"})
        assert resolver.resolve(ctx) == "zh_TW"
        assert ctx.cookie_writes == [("locale", "zh_TW", ONE_YEAR, False)]

    def test_header_alias_is_canonicalized(self, resolver, make_context):
        ctx = make_context(languages=["zh-CN", "zh"])
        assert resolver.resolve(ctx) == "zh_CN"
        assert ctx.cookie_writes[0][1] == "zh_CN"

    def test_no_write_when_cookie_holds_canonical_value(self, resolver, make_context):
        ctx = make_context(query={"locale": "zh-TW"}, cookies={"locale": "zh_TW"})
        assert resolver.resolve(ctx) == "zh_TW"
        assert ctx.cookie_writes == []

    def test_rewrite_when_cookie_holds_alias(self, resolver, make_context):
        ctx = make_context(cookies={"locale": "zh-TW"})
        assert resolver.resolve(ctx) == "zh_TW"
        assert ctx.cookie_writes == [("locale", "zh_TW", ONE_YEAR, False)]


class TestCookieWrites:
    def test_query_equal_to_cookie_does_not_rewrite(self, resolver, make_context):
        ctx = make_context(query={"locale": "fr_FR"}, cookies={"locale": "fr_FR"})
        assert resolver.resolve(ctx) == "fr_FR"
        assert ctx.cookie_writes == []

    def test_response_started_skips_write(self, resolver, make_context):
        ctx = make_context(query={"locale": "fr_FR"}, started=True)
        assert resolver.resolve(ctx) == "fr_FR"
        assert ctx.cookie_writes == []

    def test_cookie_max_age_from_settings(self, make_context):
        resolver = LocaleResolver(LocaleSettings(COOKIE_MAX_AGE="30d", DIRS=[]))
        ctx = make_context(query={"locale": "fr_FR"})
        resolver.resolve(ctx)
        assert ctx.cookie_writes == [("locale", "fr_FR", 30 * 86400, False)]


class TestMemoization:
    def test_resolve_is_idempotent(self, resolver, make_context):
        ctx = make_context(query={"locale": "fr_FR"})
        assert resolver.resolve(ctx) == "fr_FR"
        ctx.query["locale"] = "ja"
        assert resolver.resolve(ctx) == "fr_FR"
        assert len(ctx.cookie_writes) == 1

    def test_memoized_state_short_circuits(self, resolver, make_context):
        ctx = make_context(query={"locale": "fr_FR"})
        ctx.locale_state.remember("ja")
        assert resolver.resolve(ctx) == "ja"
        assert ctx.cookie_writes == []

    def test_state_is_written_once(self):
        state = RequestLocaleState()
        assert state.remember("fr_FR") == "fr_FR"
        assert state.remember("ja") == "fr_FR"
        assert state.locale == "fr_FR"


class TestNonHttpContext:
    def test_plain_context_gets_default(self, resolver):
        ctx = LocaleContext()
        assert resolver.resolve(ctx) == "en_US"
        assert not ctx.locale_state.is_resolved

    def test_object_without_probe_gets_default(self, resolver):
        class Bare:
            locale_state = RequestLocaleState()

        assert resolver.resolve(Bare()) == "en_US"

    def test_preset_locale_is_honoured(self, resolver):
        ctx = LocaleContext(RequestLocaleState(locale="fr_FR"))
        assert resolver.resolve(ctx) == "fr_FR"


class TestFirstNegotiated:
    @pytest.mark.parametrize(
        "languages, expected",
        [
            (None, None),
            ([], None),
            ("", None),
            ("en", "en"),
            (["fr", "en"], "fr"),
            (["*", "fr"], "fr"),
            (["*"], None),
        ],
    )
    def test_first_negotiated(self, languages, expected):
        assert first_negotiated(languages) == expected
