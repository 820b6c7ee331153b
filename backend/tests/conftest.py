"""Shared fixtures.

Settings are read from the environment when ``eventra`` is first imported,
so the test environment is set up here before any application import.
"""

from collections.abc import Generator
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "local"
os.environ["TRANSLATE_PROVIDER"] = "none"
os.environ["GEOCODING_ENABLED"] = "false"
os.environ["LOCALIZATION_BACKFILL_ON_READ"] = "false"

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from eventra.core.db import engine, init_db  # noqa: E402
from eventra.i18n import Locale  # noqa: E402
from eventra.localization import (  # noqa: E402
    DEFAULT_GLOSSARY,
    Glossary,
    MachineTranslator,
)


class FakeProvider:
    """Provider that tags text with the target locale and records calls."""

    name = "fake"

    def __init__(self):
        self.calls: list[tuple[str, Locale, Locale | None]] = []

    async def translate(
        self, text: str, target: Locale, source: Locale | None = None
    ) -> str:
        self.calls.append((text, target, source))
        return f"[{target.value}] {text}"


@pytest.fixture
def glossary() -> Glossary:
    return Glossary(DEFAULT_GLOSSARY)


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def translator(fake_provider, glossary) -> MachineTranslator:
    return MachineTranslator(fake_provider, glossary)


@pytest.fixture
def session() -> Generator[Session, None, None]:
    SQLModel.metadata.drop_all(engine)
    init_db(engine)
    with Session(engine) as db_session:
        yield db_session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def client(session, translator) -> Generator[TestClient, None, None]:
    from eventra.api.deps import get_db, get_translator
    from eventra.main import app

    app.dependency_overrides[get_db] = lambda: session
    app.dependency_overrides[get_translator] = lambda: translator
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
