from typing import Annotated, Any

from fastapi import APIRouter, Depends, Path, Query, Request
from sqlmodel import Session

from eventra.api.deps import (
    GeocoderDep,
    PipelineDep,
    RequestLocale,
    SessionDep,
    SettingsDep,
)
from eventra.core.base_models import Message
from eventra.core.exceptions import ResourceNotFoundError
from eventra.core.geocode import Geocoder
from eventra.core.logging import get_logger
from eventra.core.rate_limit import (
    BACKFILL_RATE_LIMIT,
    EVENT_IMPORT_RATE_LIMIT,
    EVENT_WRITE_RATE_LIMIT,
    limiter,
)
from eventra.events import (
    BackfillRequest,
    Event,
    EventCreate,
    EventCreated,
    EventImport,
    EventPublic,
    EventsImported,
    LocalizedEvent,
    LocalizedEvents,
    create_event,
    delete_event,
    get_event_by_public_id,
    get_events,
)
from eventra.i18n import translate
from eventra.localization import BackfillResult, TranslationRecord
from eventra.localization.pipeline import LocalizationPipeline

logger = get_logger(__name__)

router = APIRouter(prefix="/events", tags=["events"])


def get_event_or_404(
    session: SessionDep,
    public_id: Annotated[str, Path(description="Public event ID", max_length=32)],
) -> Event:
    event = get_event_by_public_id(session=session, public_id=public_id)
    if not event:
        raise ResourceNotFoundError("Event", public_id)
    return event


EventDep = Annotated[Event, Depends(get_event_or_404)]


async def _create_translated_event(
    session: Session,
    geocoder: Geocoder,
    pipeline: LocalizationPipeline,
    event_in: EventCreate,
) -> tuple[Event, BackfillResult]:
    """Geocode, store and auto-translate one event into the other locales."""
    point = await geocoder.geocode(event_in.location)
    event = create_event(
        session=session,
        event_in=event_in,
        latitude=point.lat if point else None,
        longitude=point.lon if point else None,
    )
    backfill = await pipeline.backfill(event.id, source_locale=event.source_locale)
    session.refresh(event)
    return event, backfill


@router.get("/", response_model=LocalizedEvents)
def read_events(
    session: SessionDep,
    pipeline: PipelineDep,
    locale: RequestLocale,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=100)] = 100,
    category: str | None = None,
    city: str | None = None,
) -> Any:
    """List events ordered by date, each resolved to the requested locale."""
    events, count = get_events(
        session=session, skip=skip, limit=limit, category=category, city=city
    )
    data = [
        pipeline.localize(event, pipeline.store.get_translations(event.id), locale)
        for event in events
    ]
    return LocalizedEvents(data=data, count=count)


@router.post("/", response_model=EventCreated)
@limiter.limit(EVENT_WRITE_RATE_LIMIT)
async def create_event_endpoint(
    request: Request,  # Required for rate limiter
    session: SessionDep,
    geocoder: GeocoderDep,
    pipeline: PipelineDep,
    event_in: EventCreate,
) -> Any:
    """Create an event and translate it into the other supported locales.

    Translation failures do not fail the request: the affected locales are
    reported in ``backfill`` and can be retried with the backfill endpoint.
    """
    event, backfill = await _create_translated_event(
        session, geocoder, pipeline, event_in
    )
    logger.info(
        "event_created",
        event_id=str(event.id),
        public_id=event.public_id,
        source_locale=event.source_locale,
        geocoded=event.latitude is not None,
    )
    return EventCreated(event=EventPublic.model_validate(event), backfill=backfill)


@router.post("/import", response_model=EventsImported)
@limiter.limit(EVENT_IMPORT_RATE_LIMIT)
async def import_events_endpoint(
    request: Request,  # Required for rate limiter
    session: SessionDep,
    geocoder: GeocoderDep,
    pipeline: PipelineDep,
    payload: EventImport,
) -> Any:
    """Bulk create events. Items without a title or date are skipped."""
    created: list[EventPublic] = []
    skipped = 0
    for item in payload.events:
        event_in = item.to_create()
        if event_in is None:
            skipped += 1
            continue
        event, _ = await _create_translated_event(session, geocoder, pipeline, event_in)
        created.append(EventPublic.model_validate(event))

    logger.info("events_imported", count=len(created), skipped=skipped)
    return EventsImported(count=len(created), skipped=skipped, events=created)


@router.get("/{public_id}", response_model=LocalizedEvent)
async def read_event(
    event: EventDep,
    pipeline: PipelineDep,
    settings: SettingsDep,
    locale: RequestLocale,
) -> Any:
    """Get one event resolved to the requested locale.

    With LOCALIZATION_BACKFILL_ON_READ enabled a missing locale is
    translated and stored before the event is returned.
    """
    if settings.LOCALIZATION_BACKFILL_ON_READ:
        return await pipeline.localize_with_backfill(event, locale)
    return pipeline.localize(event, pipeline.store.get_translations(event.id), locale)


@router.get("/{public_id}/translations", response_model=list[TranslationRecord])
def read_event_translations(event: EventDep, pipeline: PipelineDep) -> Any:
    """List every stored translation of an event."""
    return pipeline.store.get_translations(event.id)


@router.post("/{public_id}/translations/backfill", response_model=BackfillResult)
@limiter.limit(BACKFILL_RATE_LIMIT)
async def backfill_event_translations(
    request: Request,  # Required for rate limiter
    event: EventDep,
    pipeline: PipelineDep,
    backfill_in: BackfillRequest | None = None,
) -> Any:
    """Translate the locales an event is missing.

    ``locales`` limits the targets; ``overwrite`` re-translates existing
    locales. The event's source locale is never overwritten.
    """
    backfill_in = backfill_in or BackfillRequest()
    return await pipeline.backfill(
        event.id,
        source_locale=event.source_locale,
        targets=backfill_in.locales,
        overwrite=backfill_in.overwrite,
    )


@router.delete("/{public_id}", response_model=Message)
def delete_event_endpoint(session: SessionDep, event: EventDep) -> Any:
    """Delete an event and all of its translations."""
    event_id = str(event.id)
    delete_event(session=session, db_event=event)
    logger.info("event_deleted", event_id=event_id)
    return Message(message=translate("message_event_deleted"))

