"""Transaction boundary for writes that must land together.

An event and its source translation are created in one unit, and each
backfilled locale is upserted in its own unit, so a failure never leaves a
partially written event or translation behind.
"""

from collections.abc import Generator
from contextlib import contextmanager

from sqlmodel import Session

from eventra.core.db import engine
from eventra.core.logging import get_logger

logger = get_logger(__name__)


class UnitOfWork:
    """One database transaction on a session.

    ``atomic()`` commits it when the block exits cleanly and rolls it back
    when the block raises.
    """

    def __init__(self, session: Session, name: str = "transaction"):
        self.session = session
        self.name = name
        self.finished = False

    def flush(self) -> None:
        """Send pending rows to the database, e.g. to obtain generated keys."""
        self.session.flush()

    def commit(self) -> None:
        if self.finished:
            return
        self.session.commit()
        self.finished = True
        logger.debug("uow_committed", unit=self.name)

    def rollback(self) -> None:
        if self.finished:
            return
        self.session.rollback()
        self.finished = True
        logger.debug("uow_rolled_back", unit=self.name)


@contextmanager
def atomic(
    session: Session | None = None,
    name: str = "transaction",
) -> Generator[UnitOfWork, None, None]:
    """Run a block of writes as a single transaction.

    Args:
        session: Session to use; a new one on the default engine is opened
            and closed here when omitted
        name: Label for debug logs

    Usage:
        with atomic(session, "event create") as uow:
            uow.session.add(event)
            uow.flush()
            uow.session.add(EventTranslation(event_id=event.id, locale="en"))
    """
    own_session = session is None
    db_session = Session(engine) if session is None else session
    uow = UnitOfWork(db_session, name)

    try:
        yield uow
        uow.commit()
    except Exception:
        uow.rollback()
        raise
    finally:
        if own_session:
            db_session.close()
