"""Backend internationalization (i18n) module.

Declares the supported content locales (English, Arabic, Kurdish) and
provides request locale handling plus translated API messages.

Uses python-i18n library with flat JSON catalogs per locale.
"""

from eventra.i18n.config import (
    DEFAULT_FALLBACK_ORDER,
    DEFAULT_LOCALE,
    DEFAULT_SOURCE_LOCALE,
    SUPPORTED_LOCALE_CODES,
    SUPPORTED_LOCALES,
    Locale,
    SupportedLocale,
    get_locale_direction,
    is_supported_locale,
    normalize_locale,
)
from eventra.i18n.context import get_locale, reset_locale, set_locale
from eventra.i18n.middleware import LocaleMiddleware, parse_accept_language
from eventra.i18n.translator import (
    init_translations,
    translate,
    translate_with_fallback,
)

__all__ = [
    "DEFAULT_FALLBACK_ORDER",
    "DEFAULT_LOCALE",
    "DEFAULT_SOURCE_LOCALE",
    "SUPPORTED_LOCALES",
    "SUPPORTED_LOCALE_CODES",
    "Locale",
    "LocaleMiddleware",
    "SupportedLocale",
    "get_locale",
    "get_locale_direction",
    "init_translations",
    "is_supported_locale",
    "normalize_locale",
    "parse_accept_language",
    "reset_locale",
    "set_locale",
    "translate",
    "translate_with_fallback",
]
