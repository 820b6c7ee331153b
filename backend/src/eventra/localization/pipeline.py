"""Entity localization pipeline.

Combines the fallback resolver, the machine translator (with glossary) and a
translation store to:

- project an event into a single requested locale (``localize``)
- generate and persist the locales an event is missing (``backfill``)

Backfill translates the fields of each target locale concurrently and
processes target locales concurrently. Each locale is persisted with a single
atomic upsert, retried once with backoff; a locale that still fails is
reported as failed and leaves no row behind. The record in the event's source
locale is never overwritten.
"""

import asyncio
from collections.abc import Iterable, Sequence
import uuid

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from eventra.core.exceptions import PersistenceError
from eventra.core.logging import get_logger
from eventra.events.models import Event, LocalizedEvent
from eventra.i18n.config import DEFAULT_FALLBACK_ORDER, Locale
from eventra.localization.models import (
    BackfillResult,
    BackfillStatus,
    LocaleBackfill,
    LocalizedText,
    TranslationRecord,
)
from eventra.localization.provider import MachineTranslator
from eventra.localization.resolver import resolve_locale
from eventra.localization.store import TranslationStore

logger = get_logger(__name__)

# One retry after the first failed write
PERSIST_ATTEMPTS = 2


def localize_text(
    translations: Iterable[TranslationRecord],
    requested_locale: Locale | str,
    fallback_order: Sequence[Locale | str] = DEFAULT_FALLBACK_ORDER,
) -> LocalizedText:
    """Resolve text fields for ``requested_locale`` from available records."""
    by_locale: dict[Locale, TranslationRecord] = {}
    for record in translations:
        by_locale.setdefault(record.locale, record)

    requested = Locale(requested_locale)
    chosen = resolve_locale(requested, by_locale.keys(), fallback_order)
    if chosen is None:
        return LocalizedText(requested_locale=requested)

    record = by_locale[chosen]
    return LocalizedText(
        requested_locale=requested,
        locale=chosen,
        title=record.title or "",
        description=record.description or "",
        location=record.location or "",
    )


class LocalizationPipeline:
    """Localize events and backfill their missing translations.

    Args:
        store: Where translation records are read from and written to
        translator: Fail-safe machine translator (provider + glossary)
        supported_locales: Locales backfill targets, in order
        fallback_order: Locales tried after the requested one
        retry_wait_seconds: Base backoff before the persistence retry
    """

    def __init__(
        self,
        store: TranslationStore,
        translator: MachineTranslator,
        supported_locales: Sequence[Locale | str] = tuple(Locale),
        fallback_order: Sequence[Locale | str] = DEFAULT_FALLBACK_ORDER,
        retry_wait_seconds: float = 0.5,
    ):
        self.store = store
        self.translator = translator
        self.supported_locales = [Locale(code) for code in supported_locales]
        self.fallback_order = [Locale(code) for code in fallback_order]
        self.retry_wait_seconds = retry_wait_seconds

    def localize(
        self,
        entity: Event,
        translations: Iterable[TranslationRecord],
        requested_locale: Locale | str,
    ) -> LocalizedEvent:
        """Project ``entity`` into ``requested_locale``.

        Never fails on missing translations: fields fall back along the
        fallback chain and end up empty when nothing is available.
        """
        text = localize_text(translations, requested_locale, self.fallback_order)
        return LocalizedEvent.from_event(entity, text)

    async def localize_with_backfill(
        self,
        entity: Event,
        requested_locale: Locale | str,
    ) -> LocalizedEvent:
        """Localize, translating and storing the requested locale first if missing."""
        requested = Locale(requested_locale)
        translations = self.store.get_translations(entity.id)
        if requested in self.supported_locales and requested not in {
            record.locale for record in translations
        }:
            result = await self.backfill(
                entity.id,
                source_locale=entity.source_locale,
                targets=[requested],
                translations=translations,
            )
            if result.status_for(requested) in (
                BackfillStatus.CREATED,
                BackfillStatus.UPDATED,
            ):
                translations = self.store.get_translations(entity.id)
        return self.localize(entity, translations, requested)

    async def backfill(
        self,
        entity_id: uuid.UUID,
        source_locale: Locale | str | None = None,
        targets: Sequence[Locale | str] | None = None,
        overwrite: bool = False,
        translations: list[TranslationRecord] | None = None,
    ) -> BackfillResult:
        """Generate and persist translations for missing locales.

        Args:
            entity_id: Entity whose translations are backfilled
            source_locale: Locale the entity was authored in
            targets: Locales to fill; defaults to all supported locales
            overwrite: Re-translate locales that already exist (never the
                source locale)
            translations: Already loaded records, to skip a store read

        Returns:
            Per-locale outcome. Failures are reported, not raised.
        """
        if translations is None:
            translations = self.store.get_translations(entity_id)
        by_locale = {record.locale: record for record in translations}

        source = self._pick_source(by_locale, source_locale)
        result = BackfillResult(
            entity_id=entity_id,
            source_locale=source.locale if source else None,
        )
        if source is None:
            logger.info("backfill_no_source", entity_id=str(entity_id))
            return result

        wanted = set(self.supported_locales if targets is None else map(Locale, targets))
        ordered_targets = [
            locale for locale in self.supported_locales if locale in wanted
        ]

        pending: list[Locale] = []
        for locale in ordered_targets:
            if locale == source.locale or (locale in by_locale and not overwrite):
                result.locales.append(
                    LocaleBackfill(locale=locale, status=BackfillStatus.SKIPPED)
                )
            else:
                pending.append(locale)

        outcomes = await asyncio.gather(
            *(self._backfill_locale(entity_id, source, locale) for locale in pending)
        )
        result.locales.extend(outcomes)
        result.locales.sort(key=lambda item: ordered_targets.index(item.locale))

        logger.info(
            "backfill_completed",
            entity_id=str(entity_id),
            source_locale=source.locale.value,
            statuses={item.locale.value: item.status.value for item in result.locales},
        )
        return result

    def _pick_source(
        self,
        by_locale: dict[Locale, TranslationRecord],
        source_locale: Locale | str | None,
    ) -> TranslationRecord | None:
        if source_locale is not None and Locale(source_locale) in by_locale:
            return by_locale[Locale(source_locale)]
        # Authoring record missing: translate from whatever the fallback chain finds
        preferred = Locale(source_locale) if source_locale is not None else Locale.EN
        chosen = resolve_locale(
            preferred,
            by_locale.keys(),
            self.fallback_order,
        )
        return by_locale[chosen] if chosen else None

    async def _backfill_locale(
        self,
        entity_id: uuid.UUID,
        source: TranslationRecord,
        target: Locale,
    ) -> LocaleBackfill:
        translated = await self.translator.translate_record(source, target)

        try:
            created = await self._persist(entity_id, translated)
        except PersistenceError as e:
            logger.warning(
                "backfill_locale_failed",
                entity_id=str(entity_id),
                locale=target.value,
                error=e.message,
            )
            return LocaleBackfill(
                locale=target, status=BackfillStatus.FAILED, error=e.message
            )

        return LocaleBackfill(
            locale=target,
            status=BackfillStatus.CREATED if created else BackfillStatus.UPDATED,
        )

    async def _persist(self, entity_id: uuid.UUID, record: TranslationRecord) -> bool:
        created = False
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(PERSIST_ATTEMPTS),
            wait=wait_exponential(multiplier=self.retry_wait_seconds),
            retry=retry_if_exception_type(PersistenceError),
            reraise=True,
        ):
            with attempt:
                created = self.store.upsert_translation(entity_id, record)
        return created
