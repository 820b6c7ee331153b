"""Tests for eventra.localization.resolver module."""

import itertools

import pytest

from eventra.i18n import Locale
from eventra.localization import fallback_chain, resolve_locale


class TestResolveLocale:
    """Tests for resolve_locale()."""

    def test_requested_locale_available(self):
        """resolve_locale() returns the requested locale when present."""
        assert resolve_locale(Locale.KU, [Locale.EN, Locale.KU]) == Locale.KU

    def test_falls_back_along_fallback_order(self):
        """resolve_locale() walks the fallback order when requested is missing."""
        assert resolve_locale("ar", ["en", "ku"]) == Locale.KU

    def test_fallback_order_is_respected(self):
        """resolve_locale() prefers earlier fallback entries."""
        available = [Locale.KU, Locale.AR]
        assert resolve_locale(Locale.EN, available) == Locale.AR
        assert (
            resolve_locale(Locale.EN, available, fallback_order=[Locale.KU, Locale.AR])
            == Locale.KU
        )

    def test_first_available_when_no_fallback_matches(self):
        """resolve_locale() returns the first available locale as a last resort."""
        assert resolve_locale(Locale.AR, [Locale.EN]) == Locale.EN
        assert resolve_locale(Locale.AR, ["en"], fallback_order=[]) == Locale.EN

    def test_empty_available_returns_none(self):
        """resolve_locale() returns None instead of raising when nothing exists."""
        assert resolve_locale(Locale.AR, []) is None

    def test_unknown_codes_are_ignored(self):
        """resolve_locale() skips codes outside the supported set."""
        assert resolve_locale("fr", ["de", "en"]) == Locale.EN
        assert resolve_locale("ar", ["de"]) is None

    def test_accepts_generators(self):
        """resolve_locale() works with one-shot iterables."""
        available = (code for code in ["en", "ku"])
        assert resolve_locale("ar", available) == Locale.KU

    @pytest.mark.parametrize("requested", list(Locale))
    def test_total_and_deterministic(self, requested):
        """resolve_locale() returns a member of any non-empty available set, every time."""
        for size in range(1, len(Locale) + 1):
            for available in itertools.permutations(Locale, size):
                first = resolve_locale(requested, available)
                assert first in available
                assert resolve_locale(requested, available) == first


class TestFallbackChain:
    """Tests for fallback_chain()."""

    def test_requested_first(self):
        """fallback_chain() starts with the requested locale."""
        assert fallback_chain(Locale.EN) == [Locale.EN, Locale.AR, Locale.KU]

    def test_deduplicates(self):
        """fallback_chain() lists each locale once."""
        assert fallback_chain(Locale.AR) == [Locale.AR, Locale.KU]
