from datetime import datetime
import secrets
from typing import Any
import uuid

from pydantic import ValidationError
from sqlalchemy import Column, String, UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from eventra.core.base_models import (
    IdentifiedTable,
    PaginatedResponse,
    TimestampedPublic,
    TimestampedTable,
)
from eventra.core.logging import get_logger
from eventra.i18n.config import DEFAULT_SOURCE_LOCALE, Locale
from eventra.localization.models import BackfillResult, LocalizedText

logger = get_logger(__name__)

# 6 random bytes -> 8 URL-safe characters
PUBLIC_ID_BYTES = 6


def generate_public_id() -> str:
    return secrets.token_urlsafe(PUBLIC_ID_BYTES)


class EventBase(SQLModel):
    date: datetime
    category: str = Field(default="", max_length=100)
    image_url: str = Field(default="", max_length=2048)
    whatsapp_group: str = Field(default="", max_length=2048)
    whatsapp_phone: str = Field(default="", max_length=32)
    contact_method: str = Field(default="", max_length=32)
    city: str = Field(default="", max_length=100, index=True)


class Event(EventBase, TimestampedTable, table=True):
    public_id: str = Field(
        default_factory=generate_public_id,
        sa_column=Column(String(32), unique=True, index=True, nullable=False),
    )
    latitude: float | None = Field(default=None, nullable=True)
    longitude: float | None = Field(default=None, nullable=True)
    # Locale the content was authored in; its translation is never overwritten
    source_locale: str = Field(default=DEFAULT_SOURCE_LOCALE.value, max_length=8)

    translations: list["EventTranslation"] = Relationship(
        back_populates="event",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "passive_deletes": True,
            "order_by": "EventTranslation.locale",
        },
    )


class EventTranslationBase(SQLModel):
    locale: str = Field(max_length=8)
    title: str = Field(default="", max_length=255)
    description: str = Field(default="")
    location: str = Field(default="", max_length=500)


class EventTranslation(EventTranslationBase, IdentifiedTable, table=True):
    __tablename__ = "event_translation"
    __table_args__ = (
        UniqueConstraint("event_id", "locale", name="uq_event_translation_locale"),
    )

    event_id: uuid.UUID = Field(
        foreign_key="event.id", nullable=False, ondelete="CASCADE", index=True
    )
    event: Event = Relationship(back_populates="translations")


class EventCreate(EventBase):
    title: str = Field(min_length=1, max_length=255)
    description: str = ""
    location: str = Field(default="", max_length=500)
    locale: Locale = DEFAULT_SOURCE_LOCALE


class EventImportItem(SQLModel):
    """One row of a bulk import.

    Rows without a title or date, or that fail EventCreate validation (e.g. an
    over-long title), are skipped.
    """

    title: str | None = None
    date: datetime | None = None
    description: str = ""
    location: str = ""
    category: str = ""
    image_url: str = ""
    whatsapp_group: str = ""
    whatsapp_phone: str = ""
    contact_method: str = ""
    city: str = ""
    locale: Locale = DEFAULT_SOURCE_LOCALE

    def to_create(self) -> EventCreate | None:
        if not self.title or self.date is None:
            return None
        data: dict[str, Any] = self.model_dump()
        try:
            return EventCreate.model_validate(data)
        except ValidationError as e:
            logger.info(
                "event_import_item_invalid",
                fields=sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]}),
            )
            return None


class EventImport(SQLModel):
    events: list[EventImportItem]


class EventTranslationPublic(EventTranslationBase):
    pass


class EventPublic(EventBase, TimestampedPublic):
    id: uuid.UUID
    public_id: str
    latitude: float | None = None
    longitude: float | None = None
    source_locale: str
    translations: list[EventTranslationPublic] = []


class EventCreated(SQLModel):
    event: EventPublic
    backfill: BackfillResult


class EventsImported(SQLModel):
    count: int
    skipped: int
    events: list[EventPublic]


class LocalizedEvent(EventBase):
    """An event with its text fields resolved to a single locale."""

    id: uuid.UUID
    public_id: str
    latitude: float | None = None
    longitude: float | None = None
    source_locale: str
    requested_locale: Locale
    locale: Locale | None = None
    title: str = ""
    description: str = ""
    location: str = ""

    @classmethod
    def from_event(cls, event: Event, text: LocalizedText) -> "LocalizedEvent":
        return cls(
            id=event.id,
            public_id=event.public_id,
            date=event.date,
            category=event.category,
            image_url=event.image_url,
            whatsapp_group=event.whatsapp_group,
            whatsapp_phone=event.whatsapp_phone,
            contact_method=event.contact_method,
            city=event.city,
            latitude=event.latitude,
            longitude=event.longitude,
            source_locale=event.source_locale,
            requested_locale=text.requested_locale,
            locale=text.locale,
            title=text.title,
            description=text.description,
            location=text.location,
        )


LocalizedEvents = PaginatedResponse[LocalizedEvent]


class BackfillRequest(SQLModel):
    locales: list[Locale] | None = None
    overwrite: bool = False


Event.model_rebuild()
EventTranslation.model_rebuild()
