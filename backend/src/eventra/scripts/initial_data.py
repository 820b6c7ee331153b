"""Script to create the schema and seed a few sample events."""

from datetime import datetime, timedelta, timezone
import logging

from sqlmodel import Session, func, select

from eventra.core.db import engine, init_db
from eventra.events import Event, EventCreate, create_event
from eventra.i18n import Locale

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def sample_events(now: datetime) -> list[EventCreate]:
    return [
        EventCreate(
            title="Baghdad Book Fair",
            description="Publishers and readers meet on Al-Mutanabbi Street.",
            location="Al-Mutanabbi Street, Baghdad",
            city="Baghdad",
            category="culture",
            date=now + timedelta(days=7),
            contact_method="whatsapp",
            locale=Locale.EN,
        ),
        EventCreate(
            title="ليلة موسيقى العود",
            description="أمسية موسيقية مفتوحة للجميع.",
            location="المسرح الوطني، بغداد",
            city="Baghdad",
            category="music",
            date=now + timedelta(days=14),
            locale=Locale.AR,
        ),
        EventCreate(
            title="بازاڕی دەستکرد",
            description="بازاڕێکی هەفتانە بۆ کاری دەستی.",
            location="قەڵای هەولێر",
            city="Erbil",
            category="market",
            date=now + timedelta(days=21),
            locale=Locale.KU,
        ),
    ]


def init() -> None:
    """Create tables and seed sample events into an empty database."""
    init_db(engine)
    with Session(engine) as session:
        count = session.exec(select(func.count()).select_from(Event)).one()
        if count:
            logger.info(f"Database already has {count} events, skipping seed")
            return

        now = datetime.now(timezone.utc).replace(hour=18, minute=0, second=0, microsecond=0)
        for event_in in sample_events(now):
            event = create_event(session=session, event_in=event_in)
            logger.info(f"Created event: {event.public_id} ({event_in.locale.value})")


def main() -> None:
    logger.info("Creating initial data")
    init()
    logger.info("Initial data created")


if __name__ == "__main__":
    main()
