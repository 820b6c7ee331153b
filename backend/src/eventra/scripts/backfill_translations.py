"""Backfill missing event translations for every stored event.

Translates each event from its source locale into the supported locales it
does not have yet, using the configured translation provider and glossary.

Usage:
    python -m eventra.scripts.backfill_translations [--locale ku] [--overwrite] [--dry-run]
"""

import argparse
import asyncio

from sqlmodel import Session, select

from eventra.api.deps import get_glossary
from eventra.core.config import settings
from eventra.core.db import engine
from eventra.core.logging import get_logger, setup_logging
from eventra.events import Event
from eventra.i18n import Locale
from eventra.localization import (
    BackfillStatus,
    MachineTranslator,
    build_translation_provider,
)
from eventra.localization.pipeline import LocalizationPipeline
from eventra.localization.store import SQLTranslationStore

logger = get_logger(__name__)


def get_all_events(session: Session) -> list[Event]:
    return list(session.exec(select(Event).order_by(Event.date)).all())


async def main(
    locales: list[Locale] | None = None,
    overwrite: bool = False,
    dry_run: bool = False,
) -> None:
    """Main backfill logic.

    Args:
        locales: Target locales; all supported locales when None
        overwrite: Re-translate locales that already exist
        dry_run: Only report which locales are missing
    """
    logger.info("backfill_started", dry_run=dry_run, overwrite=overwrite)

    translator = MachineTranslator(build_translation_provider(settings), get_glossary())
    if not translator.enabled:
        logger.warning("translation_provider_disabled")

    with Session(engine) as session:
        store = SQLTranslationStore(session)
        pipeline = LocalizationPipeline(
            store=store,
            translator=translator,
            supported_locales=settings.supported_locales,
            fallback_order=settings.fallback_order,
        )
        events = get_all_events(session)
        targets = locales or settings.supported_locales

        totals = {status: 0 for status in BackfillStatus}
        for i, event in enumerate(events, 1):
            if dry_run:
                present = {record.locale for record in store.get_translations(event.id)}
                missing = [locale.value for locale in targets if locale not in present]
                logger.info(
                    "dry_run_missing_locales",
                    progress=f"{i}/{len(events)}",
                    public_id=event.public_id,
                    missing=missing,
                )
                continue

            result = await pipeline.backfill(
                event.id,
                source_locale=event.source_locale,
                targets=targets,
                overwrite=overwrite,
            )
            for item in result.locales:
                totals[item.status] += 1

        logger.info(
            "backfill_finished",
            total_events=len(events),
            dry_run=dry_run,
            **{status.value: count for status, count in totals.items()},
        )

    if not dry_run:
        print("\n" + "=" * 60)
        print("BACKFILL COMPLETE")
        print("=" * 60)
        print(f"Events processed: {len(events)}")
        for status, count in totals.items():
            print(f"Locales {status.value}: {count}")


if __name__ == "__main__":
    setup_logging()

    parser = argparse.ArgumentParser(description="Backfill missing event translations")
    parser.add_argument(
        "--locale",
        action="append",
        choices=[locale.value for locale in Locale],
        help="Target locale (repeatable); defaults to all supported locales",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Re-translate locales that already exist (never the source locale)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List missing locales without translating",
    )
    args = parser.parse_args()

    asyncio.run(
        main(
            locales=[Locale(code) for code in args.locale] if args.locale else None,
            overwrite=args.overwrite,
            dry_run=args.dry_run,
        )
    )
