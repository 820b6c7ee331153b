"""Locale fallback resolution for translated content.

Given the locale a caller asked for and the locales an entity actually has
translations in, pick exactly one of the available locales.
"""

from collections.abc import Iterable, Sequence

from eventra.i18n.config import DEFAULT_FALLBACK_ORDER, Locale


def _as_locale(code: Locale | str) -> Locale | None:
    try:
        return Locale(code)
    except ValueError:
        return None


def resolve_locale(
    requested: Locale | str,
    available: Iterable[Locale | str],
    fallback_order: Sequence[Locale | str] = DEFAULT_FALLBACK_ORDER,
) -> Locale | None:
    """Pick the best available locale for a request.

    Resolution order:
    1. The requested locale, if available
    2. The first locale of ``fallback_order`` that is available
    3. The first available locale, in the iteration order of ``available``

    Unknown codes are ignored wherever they appear. Returns None when
    nothing is available; callers render empty fields instead of failing.

    Example:
        resolve_locale("ar", ["en", "ku"])  # Locale.KU
    """
    present = [
        locale for locale in map(_as_locale, available) if locale is not None
    ]
    if not present:
        return None

    requested_locale = _as_locale(requested)
    if requested_locale in present:
        return requested_locale

    for candidate in map(_as_locale, fallback_order):
        if candidate in present:
            return candidate

    return present[0]


def fallback_chain(
    requested: Locale | str,
    fallback_order: Sequence[Locale | str] = DEFAULT_FALLBACK_ORDER,
) -> list[Locale]:
    """Return the ordered, de-duplicated list of locales tried for a request."""
    chain: list[Locale] = []
    for locale in map(_as_locale, (requested, *fallback_order)):
        if locale is not None and locale not in chain:
            chain.append(locale)
    return chain
