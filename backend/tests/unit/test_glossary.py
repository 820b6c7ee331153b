"""Tests for eventra.localization.glossary module."""

import json

import pytest

from eventra.core.exceptions import ConfigurationError, GlossaryConfigurationError
from eventra.i18n import Locale
from eventra.localization import DEFAULT_GLOSSARY, Glossary, GlossaryEntry


class TestGlossaryApply:
    """Tests for Glossary.apply()."""

    def test_replaces_whole_word(self, glossary):
        """apply() rewrites a canonical term for the target locale."""
        assert glossary.apply("Event Night", Locale.KU) == "بۆنە Night"

    def test_longer_term_wins(self, glossary):
        """apply() does not corrupt 'Events' with the 'Event' rule."""
        assert glossary.apply("Events this week", "ar") == "فعاليات this week"

    def test_no_match_inside_words(self, glossary):
        """apply() leaves terms embedded in other words alone."""
        assert glossary.apply("Eventual Freedom", "ar") == "Eventual Freedom"

    def test_case_sensitive(self, glossary):
        """apply() only matches terms as authored."""
        assert glossary.apply("free event", "ar") == "free event"

    def test_multiple_terms(self, glossary):
        """apply() rewrites every occurrence in one pass."""
        result = glossary.apply("Free Event, Register on WhatsApp", "ar")
        assert result == "مجاني فعالية, سجل on واتساب"

    def test_adjacent_to_non_latin_text(self, glossary):
        """apply() matches terms next to punctuation and other scripts."""
        assert glossary.apply("(Event)", "ku") == "(بۆنە)"

    def test_unknown_locale_passthrough(self, glossary):
        """apply() returns text unchanged for locales without entries."""
        assert glossary.apply("Event Night", Locale.EN) == "Event Night"
        assert glossary.apply("Event Night", "fr") == "Event Night"

    def test_empty_text(self, glossary):
        """apply() passes empty text through."""
        assert glossary.apply("", Locale.AR) == ""

    @pytest.mark.parametrize(
        "text",
        ["Event Night", "Events and Event", "Free WhatsApp Register", "nothing here"],
    )
    @pytest.mark.parametrize("locale", [Locale.AR, Locale.KU])
    def test_idempotent(self, glossary, text, locale):
        """apply() twice equals apply() once."""
        once = glossary.apply(text, locale)
        assert glossary.apply(once, locale) == once


class TestGlossaryValidation:
    """Tests for glossary loading and validation."""

    def test_default_glossary_is_valid(self):
        """The built-in table passes validation."""
        glossary = Glossary(DEFAULT_GLOSSARY)
        assert len(glossary) == 10
        assert set(glossary.locales) == {Locale.AR, Locale.KU}

    def test_rejects_target_containing_source_term(self):
        """validate() rejects substitutions that would be rewritten again."""
        table = {"ar": {"Event": "Big Event", "Big": "كبير"}}
        with pytest.raises(GlossaryConfigurationError) as exc_info:
            Glossary(table)
        assert exc_info.value.locale == "ar"
        assert isinstance(exc_info.value, ConfigurationError)

    def test_validation_can_be_deferred(self):
        """Glossary(validate=False) loads without checking."""
        glossary = Glossary({"ar": {"Event": "Event"}}, validate=False)
        with pytest.raises(GlossaryConfigurationError):
            glossary.validate()

    def test_rejects_unknown_locale(self):
        """Glossary() rejects locale codes outside the supported set."""
        with pytest.raises(GlossaryConfigurationError) as exc_info:
            Glossary({"fr": {"Event": "Événement"}})
        assert exc_info.value.locale == "fr"
        assert exc_info.value.term is None
        assert exc_info.value.error_code == "GLOSSARY_CONFIGURATION_ERROR"

    def test_iterates_entries(self, glossary):
        """Iterating a glossary yields GlossaryEntry records."""
        entries = list(glossary)
        assert GlossaryEntry("Event", Locale.KU, "بۆنە") in entries

    def test_terms_for(self, glossary):
        """terms_for() returns a copy of one locale's table."""
        terms = glossary.terms_for("ar")
        terms["Event"] = "changed"
        assert glossary.terms_for("ar")["Event"] == "فعالية"
        assert glossary.terms_for(Locale.EN) == {}

    def test_from_file(self, tmp_path):
        """from_file() loads a JSON table."""
        path = tmp_path / "glossary.json"
        path.write_text(
            json.dumps({"ku": {"Concert": "کۆنسێرت"}}, ensure_ascii=False),
            encoding="utf-8",
        )
        glossary = Glossary.from_file(path)
        assert glossary.apply("Concert tonight", "ku") == "کۆنسێرت tonight"
