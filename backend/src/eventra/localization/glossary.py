"""Glossary post-processing for translated text.

Machine translation is inconsistent with domain vocabulary ("Event" comes
back as several different Arabic words). After translation every
whole-word occurrence of a canonical term is replaced with the fixed
localized form from this table.

Matchers are compiled once per table load. Substitution is a single pass
over the text, so applying the glossary twice gives the same result as
applying it once as long as no target term contains a source term of the
same locale; Glossary.validate() enforces that when the table is loaded.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
import json
from pathlib import Path
import re

from eventra.core.exceptions import GlossaryConfigurationError
from eventra.core.logging import get_logger
from eventra.i18n.config import Locale

logger = get_logger(__name__)

DEFAULT_GLOSSARY: dict[str, dict[str, str]] = {
    "ar": {
        "Event": "فعالية",
        "Events": "فعاليات",
        "Register": "سجل",
        "Free": "مجاني",
        "WhatsApp": "واتساب",
    },
    "ku": {
        "Event": "بۆنە",
        "Events": "بۆنەکان",
        "Register": "تۆماركردن",
        "Free": "به‌خۆڕایی",
        "WhatsApp": "واتساپ",
    },
}


@dataclass(frozen=True)
class GlossaryEntry:
    source_term: str
    locale: Locale
    target_term: str


def _compile_terms(terms: list[str]) -> re.Pattern[str]:
    # Longest first so overlapping alternatives prefer the full term
    ordered = sorted(terms, key=len, reverse=True)
    alternation = "|".join(re.escape(term) for term in ordered)
    return re.compile(rf"(?<!\w)(?:{alternation})(?!\w)")


class Glossary:
    """Per-locale table of canonical term substitutions.

    Matching is whole-word and case-sensitive as authored.
    """

    def __init__(self, table: Mapping[str, Mapping[str, str]], validate: bool = True):
        self._table: dict[Locale, dict[str, str]] = {}
        for code, terms in table.items():
            try:
                locale = Locale(code)
            except ValueError as e:
                raise GlossaryConfigurationError(str(code)) from e
            cleaned = {src: dst for src, dst in terms.items() if src}
            if cleaned:
                self._table[locale] = dict(cleaned)

        self._matchers: dict[Locale, re.Pattern[str]] = {
            locale: _compile_terms(list(terms))
            for locale, terms in self._table.items()
        }

        if validate:
            self.validate()

    @classmethod
    def from_file(cls, path: str | Path) -> "Glossary":
        """Load a glossary from a JSON file shaped like DEFAULT_GLOSSARY."""
        with Path(path).open(encoding="utf-8") as fh:
            table = json.load(fh)
        glossary = cls(table)
        logger.info("glossary_loaded", path=str(path), entries=len(glossary))
        return glossary

    def __len__(self) -> int:
        return sum(len(terms) for terms in self._table.values())

    def __iter__(self) -> Iterator[GlossaryEntry]:
        for locale, terms in self._table.items():
            for source_term, target_term in terms.items():
                yield GlossaryEntry(source_term, locale, target_term)

    @property
    def locales(self) -> list[Locale]:
        return list(self._table)

    def terms_for(self, locale: Locale | str) -> dict[str, str]:
        return dict(self._table.get(Locale(locale), {}))

    def validate(self) -> None:
        """Reject tables whose substitutions would not be idempotent.

        Raises:
            GlossaryConfigurationError: If a target term contains a whole-word
                source term of the same locale.
        """
        for locale, terms in self._table.items():
            matcher = self._matchers[locale]
            for target_term in terms.values():
                match = matcher.search(target_term)
                if match:
                    raise GlossaryConfigurationError(locale.value, match.group(0))

    def apply(self, text: str, locale: Locale | str) -> str:
        """Replace every whole-word canonical term with its localized form.

        Text for locales without glossary entries is returned unchanged.

        Example:
            glossary.apply("Event Night", "ku")  # "بۆنە Night"
        """
        if not text:
            return text
        try:
            target = Locale(locale)
        except ValueError:
            return text
        matcher = self._matchers.get(target)
        if matcher is None:
            return text
        terms = self._table[target]
        return matcher.sub(lambda m: terms[m.group(0)], text)
