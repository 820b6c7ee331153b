from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Query
from sqlmodel import Session

from eventra.core.config import Settings, get_settings
from eventra.core.db import get_db
from eventra.core.geocode import Geocoder
from eventra.i18n import Locale, normalize_locale, set_locale
from eventra.localization import (
    DEFAULT_GLOSSARY,
    Glossary,
    MachineTranslator,
    build_translation_provider,
)
from eventra.localization.pipeline import LocalizationPipeline
from eventra.localization.store import SQLTranslationStore

SettingsDep = Annotated[Settings, Depends(get_settings)]
SessionDep = Annotated[Session, Depends(get_db)]


@lru_cache
def get_glossary() -> Glossary:
    """Load and validate the glossary once per process."""
    settings = get_settings()
    if settings.GLOSSARY_PATH:
        return Glossary.from_file(settings.GLOSSARY_PATH)
    return Glossary(DEFAULT_GLOSSARY)


@lru_cache
def get_translator() -> MachineTranslator:
    return MachineTranslator(build_translation_provider(get_settings()), get_glossary())


@lru_cache
def get_geocoder() -> Geocoder:
    return Geocoder.from_settings(get_settings())


TranslatorDep = Annotated[MachineTranslator, Depends(get_translator)]
GeocoderDep = Annotated[Geocoder, Depends(get_geocoder)]


def get_pipeline(
    session: SessionDep,
    translator: TranslatorDep,
    settings: SettingsDep,
) -> LocalizationPipeline:
    return LocalizationPipeline(
        store=SQLTranslationStore(session),
        translator=translator,
        supported_locales=settings.supported_locales,
        fallback_order=settings.fallback_order,
    )


PipelineDep = Annotated[LocalizationPipeline, Depends(get_pipeline)]


def get_request_locale(
    settings: SettingsDep,
    lang: Annotated[
        str | None, Query(description="Content locale (en, ar, ku)", max_length=16)
    ] = None,
) -> Locale:
    """Resolve the ``lang`` query parameter to a supported locale.

    Missing or unrecognized values fall back to DEFAULT_LOCALE. The result
    also becomes the request locale for API messages.
    """
    locale = normalize_locale(lang, default=settings.DEFAULT_LOCALE)
    if locale.value not in settings.SUPPORTED_LOCALES:
        locale = Locale(settings.DEFAULT_LOCALE)
    set_locale(locale.value)
    return locale


RequestLocale = Annotated[Locale, Depends(get_request_locale)]
