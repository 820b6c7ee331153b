from collections.abc import Generator
from typing import Any, TypeVar

from sqlalchemy import Engine, event
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine, func, select
from sqlmodel.sql.expression import SelectOfScalar

from eventra.core.config import settings

IN_MEMORY_SQLITE_URLS = ("sqlite://", "sqlite:///:memory:")


def build_engine(url: str, echo: bool = False) -> Engine:
    """Create the SQLAlchemy engine for a database URL.

    SQLite gets foreign key enforcement switched on so that deleting an
    event cascades to its translations like it does on PostgreSQL.
    """
    if url.startswith("sqlite"):
        kwargs: dict[str, Any] = {}
        if url in IN_MEMORY_SQLITE_URLS:
            # One shared connection, otherwise every session sees an empty database
            kwargs["poolclass"] = StaticPool
        sqlite_engine = create_engine(
            url, echo=echo, connect_args={"check_same_thread": False}, **kwargs
        )
        event.listen(sqlite_engine, "connect", _enable_sqlite_foreign_keys)
        return sqlite_engine

    return create_engine(
        url,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        pool_recycle=3600,
        echo=echo,
    )


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


engine = build_engine(
    settings.SQLALCHEMY_DATABASE_URI,
    echo=settings.DEBUG and settings.ENVIRONMENT == "local",
)


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


def init_db(db_engine: Engine | None = None) -> None:
    """Create all tables that do not exist yet."""
    # Import models so they register on SQLModel.metadata
    from eventra.events.models import Event, EventTranslation  # noqa: F401

    SQLModel.metadata.create_all(db_engine or engine)


T = TypeVar("T", bound=SQLModel)


def paginate(
    session: Session,
    statement: SelectOfScalar[T],
    skip: int = 0,
    limit: int = 100,
    order_by: InstrumentedAttribute[Any] | None = None,
) -> tuple[list[T], int]:
    """Return one page of ``statement`` and the total row count it matches."""
    count_statement = select(func.count()).select_from(statement.subquery())
    count = session.exec(count_statement).one()

    if order_by is not None:
        statement = statement.order_by(order_by)

    results = session.exec(statement.offset(skip).limit(limit)).all()
    return list(results), count
