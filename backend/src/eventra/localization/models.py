"""Records exchanged between the localization pipeline and its store.

These are explicit, validated shapes; ORM rows are converted into them at
the store boundary so the pipeline never handles untyped ORM objects.
"""

from enum import Enum
import uuid

from pydantic import BaseModel, ConfigDict, Field, computed_field

from eventra.i18n.config import Locale

# Text fields translated per locale; a locale is written with all of them or none
TRANSLATED_FIELDS: tuple[str, ...] = ("title", "description", "location")


class TranslationRecord(BaseModel):
    """One locale's text for a translatable entity."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    locale: Locale
    title: str = ""
    description: str = ""
    location: str = ""


class LocalizedText(BaseModel):
    """Text fields resolved for one requested locale.

    ``locale`` is the locale actually used, or None when the entity has no
    translations at all (fields are then empty strings).
    """

    requested_locale: Locale
    locale: Locale | None = None
    title: str = ""
    description: str = ""
    location: str = ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_fallback(self) -> bool:
        return self.locale != self.requested_locale


class BackfillStatus(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"
    FAILED = "failed"


class LocaleBackfill(BaseModel):
    locale: Locale
    status: BackfillStatus
    error: str | None = None


class BackfillResult(BaseModel):
    """Outcome of one backfill run, one entry per target locale."""

    entity_id: uuid.UUID
    source_locale: Locale | None = None
    locales: list[LocaleBackfill] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def complete(self) -> bool:
        return all(item.status != BackfillStatus.FAILED for item in self.locales)

    def status_for(self, locale: Locale) -> BackfillStatus | None:
        for item in self.locales:
            if item.locale == locale:
                return item.status
        return None
