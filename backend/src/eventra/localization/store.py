"""Persistence boundary for translation records.

The pipeline talks to a TranslationStore; SQLTranslationStore implements
it on top of the event_translation table. Every upsert runs in its own
transaction so one locale's text is written completely or not at all.
"""

from typing import Protocol
import uuid

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from eventra.core.exceptions import PersistenceError
from eventra.core.logging import get_logger
from eventra.core.uow import atomic
from eventra.events.models import EventTranslation
from eventra.localization.models import TRANSLATED_FIELDS, TranslationRecord

logger = get_logger(__name__)


class TranslationStore(Protocol):
    def get_translations(self, entity_id: uuid.UUID) -> list[TranslationRecord]: ...

    def upsert_translation(
        self, entity_id: uuid.UUID, record: TranslationRecord
    ) -> bool:
        """Create or replace one locale's translation; True if created."""
        ...


class SQLTranslationStore:
    """TranslationStore backed by the event_translation table."""

    def __init__(self, session: Session):
        self.session = session

    def get_translations(self, entity_id: uuid.UUID) -> list[TranslationRecord]:
        statement = (
            select(EventTranslation)
            .where(EventTranslation.event_id == entity_id)
            .order_by(EventTranslation.locale)
        )
        records: list[TranslationRecord] = []
        for row in self.session.exec(statement).all():
            try:
                records.append(TranslationRecord.model_validate(row))
            except ValidationError:
                logger.warning(
                    "translation_row_skipped",
                    entity_id=str(entity_id),
                    locale=row.locale,
                )
        return records

    def upsert_translation(
        self, entity_id: uuid.UUID, record: TranslationRecord
    ) -> bool:
        """Create or update the (entity_id, locale) row in one transaction.

        Raises:
            PersistenceError: If the write fails; nothing is committed.
        """
        try:
            with atomic(self.session, "translation upsert") as uow:
                existing = uow.session.exec(
                    select(EventTranslation).where(
                        EventTranslation.event_id == entity_id,
                        EventTranslation.locale == record.locale.value,
                    )
                ).first()
                created = existing is None
                row = existing or EventTranslation(
                    event_id=entity_id, locale=record.locale.value
                )
                for field in TRANSLATED_FIELDS:
                    setattr(row, field, getattr(record, field))
                uow.session.add(row)
                uow.flush()
        except SQLAlchemyError as e:
            logger.warning(
                "translation_upsert_failed",
                entity_id=str(entity_id),
                locale=record.locale.value,
                error=str(e),
            )
            raise PersistenceError("event translation", type(e).__name__) from e

        logger.debug(
            "translation_upserted",
            entity_id=str(entity_id),
            locale=record.locale.value,
            created=created,
        )
        return created
