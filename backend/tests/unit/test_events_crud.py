"""Tests for eventra.events CRUD and schemas."""

from datetime import datetime, timedelta, timezone

from sqlmodel import select

from eventra.events import (
    EventCreate,
    EventImportItem,
    EventTranslation,
    create_event,
    delete_event,
    get_event,
    get_event_by_public_id,
    get_events,
)
from eventra.events.models import generate_public_id
from eventra.i18n import Locale

START = datetime(2026, 11, 1, 18, tzinfo=timezone.utc)


def make_event(session, title="Event Night", city="Erbil", days=0, **kwargs):
    return create_event(
        session=session,
        event_in=EventCreate(
            title=title, city=city, date=START + timedelta(days=days), **kwargs
        ),
    )


class TestCreateEvent:
    """Tests for create_event()."""

    def test_stores_source_translation(self, session):
        """create_event() writes the event and its source-locale text together."""
        event = make_event(session, locale=Locale.KU, location="Erbil Citadel")

        assert event.source_locale == "ku"
        assert [(t.locale, t.title, t.location) for t in event.translations] == [
            ("ku", "Event Night", "Erbil Citadel")
        ]

    def test_coordinates(self, session):
        """create_event() keeps geocoded coordinates."""
        event = create_event(
            session=session,
            event_in=EventCreate(title="Picnic", date=START),
            latitude=33.31,
            longitude=44.36,
        )
        assert (event.latitude, event.longitude) == (33.31, 44.36)

    def test_lookups(self, session):
        """Events are found by ID and by public ID."""
        event = make_event(session)

        assert get_event(session=session, event_id=event.id) == event
        assert get_event_by_public_id(session=session, public_id=event.public_id) == event
        assert get_event_by_public_id(session=session, public_id="nope") is None


class TestGetEvents:
    """Tests for get_events()."""

    def test_ordered_by_date_with_count(self, session):
        """get_events() orders by date and reports the unpaginated total."""
        make_event(session, title="Later", days=5)
        make_event(session, title="Sooner", days=1)
        make_event(session, title="Latest", days=9)

        events, count = get_events(session=session, skip=1, limit=1)

        assert count == 3
        assert [e.translations[0].title for e in events] == ["Later"]

    def test_filters(self, session):
        """get_events() filters by city and category."""
        make_event(session, city="Basra", category="food")
        make_event(session, city="Erbil", category="food")
        make_event(session, city="Erbil", category="music")

        events, count = get_events(session=session, city="Erbil", category="food")

        assert count == 1
        assert events[0].city == "Erbil"


class TestDeleteEvent:
    def test_cascades_to_translations(self, session):
        """delete_event() removes the event's translations too."""
        event = make_event(session)
        event_id = event.id

        delete_event(session=session, db_event=event)

        assert get_event(session=session, event_id=event_id) is None
        rows = session.exec(
            select(EventTranslation).where(EventTranslation.event_id == event_id)
        ).all()
        assert rows == []


class TestSchemas:
    def test_public_id_is_short_and_url_safe(self):
        """generate_public_id() yields 8 URL-safe characters."""
        public_id = generate_public_id()
        assert len(public_id) == 8
        assert all(c.isalnum() or c in "-_" for c in public_id)

    def test_import_item_requires_title_and_date(self):
        """EventImportItem.to_create() returns None for incomplete rows."""
        assert EventImportItem(title="Concert").to_create() is None
        assert EventImportItem(date=START).to_create() is None

        event_in = EventImportItem(title="Concert", date=START, locale="ar").to_create()
        assert event_in is not None
        assert event_in.locale == Locale.AR

    def test_import_item_failing_create_validation_is_skipped(self):
        """to_create() returns None instead of raising for an over-long title."""
        assert EventImportItem(title="x" * 300, date=START).to_create() is None
        long_category = EventImportItem(title="Concert", date=START, category="c" * 101)
        assert long_category.to_create() is None
