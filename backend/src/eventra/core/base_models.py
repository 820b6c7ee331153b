"""Shared SQLModel building blocks.

Tables compose ``IdentifiedTable`` (UUID key) or ``TimestampedTable`` (UUID
key plus created/updated times); public schemas that expose the times mix in
``TimestampedPublic``.
"""

from datetime import UTC, datetime
from typing import Generic, TypeVar
import uuid

from sqlmodel import Field, SQLModel

T = TypeVar("T")


def utcnow() -> datetime:
    return datetime.now(UTC)


class IdentifiedTable(SQLModel):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)


class TimestampedTable(IdentifiedTable):
    created_at: datetime = Field(default_factory=utcnow)
    # Refreshed by the database layer on every UPDATE of the row
    updated_at: datetime = Field(
        default_factory=utcnow, sa_column_kwargs={"onupdate": utcnow}
    )


class TimestampedPublic(SQLModel):
    created_at: datetime
    updated_at: datetime


class Message(SQLModel):
    message: str


class PaginatedResponse(SQLModel, Generic[T]):
    """A page of ``data`` plus ``count``, the total number of matching rows."""

    data: list[T]
    count: int
