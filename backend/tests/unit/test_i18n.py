"""Tests for eventra.i18n locale handling and message catalogs."""

import pytest

from eventra.i18n import (
    Locale,
    get_locale_direction,
    normalize_locale,
    parse_accept_language,
    translate,
    translate_with_fallback,
)


class TestNormalizeLocale:
    """Tests for normalize_locale()."""

    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ("ar", Locale.AR),
            ("AR", Locale.AR),
            ("ar-IQ", Locale.AR),
            ("ku_IQ", Locale.KU),
            ("ckb", Locale.KU),
            (" en ", Locale.EN),
        ],
    )
    def test_known_codes(self, code, expected):
        """normalize_locale() maps variants onto supported locales."""
        assert normalize_locale(code) == expected

    def test_unknown_uses_default(self):
        """normalize_locale() falls back to the default locale."""
        assert normalize_locale("fr") == Locale.AR
        assert normalize_locale(None, default="en") == Locale.EN

    def test_direction(self):
        """Arabic and Kurdish are right-to-left."""
        assert get_locale_direction("ar") == "rtl"
        assert get_locale_direction("ku") == "rtl"
        assert get_locale_direction("en") == "ltr"


class TestParseAcceptLanguage:
    """Tests for parse_accept_language()."""

    def test_quality_ordering(self):
        """parse_accept_language() picks the highest quality supported language."""
        assert parse_accept_language("fr;q=0.9,ku;q=0.8,ar;q=0.5") == "ku"

    def test_sorani_code(self):
        """parse_accept_language() maps ckb to ku."""
        assert parse_accept_language("ckb-IQ") == "ku"

    def test_no_match(self):
        """parse_accept_language() returns None for unsupported languages."""
        assert parse_accept_language("de-DE,fr") is None
        assert parse_accept_language(None) is None


class TestMessageCatalogs:
    """Tests for translated API messages."""

    def test_interpolation(self):
        """translate() fills parameters into the message."""
        assert translate("error_not_found_with_id", "en", resource="Event", id="x1") == (
            "Event not found: x1"
        )

    @pytest.mark.parametrize("locale", ["ar", "ku"])
    def test_catalogs_cover_english_keys(self, locale):
        """Every message key exists in the Arabic and Kurdish catalogs."""
        for key in ("error_internal", "error_rate_limit", "message_event_deleted"):
            assert translate(key, locale) != translate(key, "en")

    def test_unsupported_locale_uses_english(self):
        """translate() falls back to English for unsupported locales."""
        assert translate("message_event_deleted", "fr") == "Event deleted successfully"

    def test_fallback_for_unknown_key(self):
        """translate_with_fallback() returns the fallback for missing keys."""
        assert translate_with_fallback("no_such_key", "en", fallback="x") == "x"
