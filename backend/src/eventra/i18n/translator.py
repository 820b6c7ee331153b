"""API message catalogs (python-i18n).

Fixed strings such as error messages come from the flat JSON files in
``translations/``. Event content is translated by ``eventra.localization``,
not here.
"""

from functools import cache
from pathlib import Path

import i18n  # type: ignore[import-untyped]

from eventra.i18n.config import Locale, is_supported_locale
from eventra.i18n.context import get_locale

TRANSLATIONS_DIR = Path(__file__).parent / "translations"

# Catalog used for unsupported locales and for keys missing in a catalog
MESSAGE_FALLBACK_LOCALE = Locale.EN.value


@cache
def init_translations() -> None:
    """Point python-i18n at the catalogs. Safe to call repeatedly."""
    i18n.set("file_format", "json")
    i18n.set("filename_format", "{locale}.{format}")
    # Catalogs are flat {key: message} objects without a locale root
    i18n.set("skip_locale_root_data", True)
    i18n.set("fallback", MESSAGE_FALLBACK_LOCALE)
    i18n.set("enable_memoization", True)
    i18n.load_path.append(str(TRANSLATIONS_DIR))


def translate(
    key: str,
    locale: str | None = None,
    **params: str | int | float,
) -> str:
    """Look up ``key`` in the catalog for ``locale`` (default: request locale).

    Placeholders use ``%{name}`` syntax. Unknown keys come back unchanged.

    Example:
        translate("error_not_found_with_id", "ku", resource="Event", id="x1")
    """
    init_translations()

    code = str(locale or get_locale())
    if not is_supported_locale(code):
        code = MESSAGE_FALLBACK_LOCALE

    result: str = i18n.t(key, locale=code, **params)
    return result


def translate_with_fallback(
    key: str,
    locale: str | None = None,
    fallback: str | None = None,
    **params: str | int | float,
) -> str:
    """Like translate(), but return ``fallback`` when the key is unknown."""
    result = translate(key, locale, **params)
    if result == key and fallback is not None:
        return fallback
    return result
