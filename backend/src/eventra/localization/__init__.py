"""Localization of event content.

- glossary: fixed term substitutions applied after translation
- resolver: locale fallback resolution
- provider: machine translation providers and the fail-safe translator
- store: translation persistence boundary (imports the events models)
- pipeline: localize and backfill orchestration (imports the events models)

Only the modules that do not depend on the events package are re-exported
here, so that ``eventra.events.models`` can import localization records.
"""

from eventra.localization.glossary import DEFAULT_GLOSSARY, Glossary, GlossaryEntry
from eventra.localization.models import (
    TRANSLATED_FIELDS,
    BackfillResult,
    BackfillStatus,
    LocaleBackfill,
    LocalizedText,
    TranslationRecord,
)
from eventra.localization.provider import (
    GoogleTranslateProvider,
    MachineTranslator,
    NoopTranslationProvider,
    RestTranslateProvider,
    TranslationProvider,
    build_translation_provider,
)
from eventra.localization.resolver import fallback_chain, resolve_locale

__all__ = [
    "DEFAULT_GLOSSARY",
    "TRANSLATED_FIELDS",
    "BackfillResult",
    "BackfillStatus",
    "Glossary",
    "GlossaryEntry",
    "GoogleTranslateProvider",
    "LocaleBackfill",
    "LocalizedText",
    "MachineTranslator",
    "NoopTranslationProvider",
    "RestTranslateProvider",
    "TranslationProvider",
    "TranslationRecord",
    "build_translation_provider",
    "fallback_chain",
    "resolve_locale",
]
