"""Block until the database accepts connections.

Run before the API server (and before ``initial_data``) in containers where
PostgreSQL may still be starting.

Usage:
    python -m eventra.scripts.backend_pre_start
"""

from sqlalchemy import Engine
from sqlmodel import Session, select
from tenacity import RetryCallState, retry, stop_after_delay, wait_fixed

from eventra.core.db import engine
from eventra.core.logging import get_logger, setup_logging

logger = get_logger(__name__)

MAX_WAIT_SECONDS = 5 * 60
POLL_INTERVAL_SECONDS = 1


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "database_not_ready",
        attempt=retry_state.attempt_number,
        error=str(error),
    )


@retry(
    stop=stop_after_delay(MAX_WAIT_SECONDS),
    wait=wait_fixed(POLL_INTERVAL_SECONDS),
    before_sleep=_log_retry,
    reraise=True,
)
def wait_for_database(db_engine: Engine) -> None:
    with Session(db_engine) as session:
        session.exec(select(1))


def main() -> None:
    setup_logging()
    logger.info("database_wait_started", max_wait_seconds=MAX_WAIT_SECONDS)
    wait_for_database(engine)
    logger.info("database_ready")


if __name__ == "__main__":
    main()
