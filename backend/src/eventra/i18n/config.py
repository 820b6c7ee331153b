"""i18n configuration and supported content locales.

This is the single place where locales are declared. Everything that is
keyed by locale (event translations, glossary, API messages) uses these
codes.
"""

from enum import Enum
from typing import Literal, NamedTuple


class Locale(str, Enum):
    """Supported content locales."""

    EN = "en"
    AR = "ar"
    KU = "ku"

    def __str__(self) -> str:
        return self.value


class SupportedLocale(NamedTuple):
    """A supported locale with its metadata."""

    code: Locale
    name: str
    native_name: str
    direction: Literal["ltr", "rtl"]


SUPPORTED_LOCALES: tuple[SupportedLocale, ...] = (
    SupportedLocale(Locale.EN, "English", "English", "ltr"),
    SupportedLocale(Locale.AR, "Arabic", "العربية", "rtl"),
    SupportedLocale(Locale.KU, "Kurdish", "کوردی", "rtl"),
)

# Set of valid locale codes for fast lookup
SUPPORTED_LOCALE_CODES: frozenset[str] = frozenset(
    loc.code.value for loc in SUPPORTED_LOCALES
)

# Default locale when none specified
DEFAULT_LOCALE = Locale.AR

# Locales tried, in order, when an event has no translation in the requested one
DEFAULT_FALLBACK_ORDER: tuple[Locale, ...] = (Locale.AR, Locale.KU)

# Locale that event content is authored in when the author does not say
DEFAULT_SOURCE_LOCALE = Locale.EN


def is_supported_locale(code: str) -> bool:
    """Check if a locale code is supported."""
    return code in SUPPORTED_LOCALE_CODES


def normalize_locale(code: str | None, default: str = DEFAULT_LOCALE) -> Locale:
    """Normalize a locale code to a supported locale.

    Handles cases like:
    - "AR" -> "ar"
    - "ar-IQ" -> "ar"
    - "ckb" -> "ku"

    Returns ``default`` if no match found.
    """
    if not code:
        return Locale(default)

    code = code.strip().lower()

    # Exact match
    if code in SUPPORTED_LOCALE_CODES:
        return Locale(code)

    # Try base language (before hyphen or underscore)
    base = code.replace("_", "-").split("-")[0]
    if base in SUPPORTED_LOCALE_CODES:
        return Locale(base)

    # Central Kurdish (Sorani) is published as "ckb"
    if base == "ckb":
        return Locale.KU

    return Locale(default)


def get_locale_direction(code: str) -> Literal["ltr", "rtl"]:
    """Return the text direction for a locale code."""
    for loc in SUPPORTED_LOCALES:
        if loc.code == code:
            return loc.direction
    return "ltr"
