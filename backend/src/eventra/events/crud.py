import uuid

from sqlmodel import Session, select

from eventra.core.db import paginate
from eventra.core.uow import atomic
from eventra.events.models import Event, EventCreate, EventTranslation


def create_event(
    *,
    session: Session,
    event_in: EventCreate,
    latitude: float | None = None,
    longitude: float | None = None,
) -> Event:
    """Create an event together with its source-locale translation.

    Both rows are written in one transaction.

    Args:
        session: Database session
        event_in: Event creation data; its text is in ``event_in.locale``
        latitude: Geocoded latitude, if known
        longitude: Geocoded longitude, if known

    Returns:
        Created event object
    """
    with atomic(session, "event create") as uow:
        db_event = Event.model_validate(
            event_in,
            update={
                "latitude": latitude,
                "longitude": longitude,
                "source_locale": event_in.locale.value,
            },
        )
        uow.session.add(db_event)
        uow.flush()

        uow.session.add(
            EventTranslation(
                event_id=db_event.id,
                locale=event_in.locale.value,
                title=event_in.title,
                description=event_in.description,
                location=event_in.location,
            )
        )

    session.refresh(db_event)
    return db_event


def get_event(*, session: Session, event_id: uuid.UUID) -> Event | None:
    """Get an event by ID."""
    return session.get(Event, event_id)


def get_event_by_public_id(*, session: Session, public_id: str) -> Event | None:
    """Get an event by its public (shareable) ID."""
    statement = select(Event).where(Event.public_id == public_id)
    return session.exec(statement).first()


def get_events(
    *,
    session: Session,
    skip: int = 0,
    limit: int = 100,
    category: str | None = None,
    city: str | None = None,
) -> tuple[list[Event], int]:
    """Get events ordered by date with pagination.

    Args:
        session: Database session
        skip: Number of events to skip
        limit: Maximum number of events to return
        category: Only events in this category
        city: Only events in this city

    Returns:
        Tuple of (list of events, total count)
    """
    statement = select(Event)
    if category:
        statement = statement.where(Event.category == category)
    if city:
        statement = statement.where(Event.city == city)

    return paginate(session, statement, skip=skip, limit=limit, order_by=Event.date)


def delete_event(*, session: Session, db_event: Event) -> None:
    """Delete an event; its translations are removed with it."""
    session.delete(db_event)
    session.commit()
