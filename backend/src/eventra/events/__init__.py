from eventra.events.crud import (
    create_event,
    delete_event,
    get_event,
    get_event_by_public_id,
    get_events,
)
from eventra.events.models import (
    BackfillRequest,
    Event,
    EventBase,
    EventCreate,
    EventCreated,
    EventImport,
    EventImportItem,
    EventPublic,
    EventsImported,
    EventTranslation,
    EventTranslationPublic,
    LocalizedEvent,
    LocalizedEvents,
)

__all__ = [
    # Models
    "BackfillRequest",
    "Event",
    "EventBase",
    "EventCreate",
    "EventCreated",
    "EventImport",
    "EventImportItem",
    "EventPublic",
    "EventTranslation",
    "EventTranslationPublic",
    "EventsImported",
    "LocalizedEvent",
    "LocalizedEvents",
    # CRUD
    "create_event",
    "delete_event",
    "get_event",
    "get_event_by_public_id",
    "get_events",
]
