"""Pytest configuration and fixtures."""

import os

# Point the app at SQLite before review_relay builds its engine
os.environ["DATABASE_URL"] = os.getenv("TEST_DATABASE_URL", "sqlite://")
os.environ["ENVIRONMENT"] = "development"

from collections.abc import Generator  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from review_relay.api import notify  # noqa: E402
from review_relay.config.settings import Settings  # noqa: E402
from review_relay.database.store import RelayStore  # noqa: E402
from review_relay.main import app  # noqa: E402
from review_relay.models.records import Base, UserIdentity  # noqa: E402
from review_relay.relay.dispatcher import WebhookDispatcher  # noqa: E402

TEST_SECRET = "test-secret"  # pragma: allowlist secret
TEST_WEBHOOK_URL = "https://hooks.example.test/services/T000/B000"


@pytest.fixture
def relay_url() -> str:
    """Return the relay endpoint path."""
    return "/api/slack"


@pytest.fixture
def relay_settings() -> Settings:
    """Settings with a known secret and webhook URL."""
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        relay_secret=TEST_SECRET,
        slack_webhook_url=TEST_WEBHOOK_URL,
    )


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Provide a session on a fresh in-memory database with relay tables."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def store(db_session: Session) -> RelayStore:
    """RelayStore seeded with a small identity map."""
    db_session.add_all(
        [
            UserIdentity(github_username="alice", slack_member_id="UALICE"),
            UserIdentity(github_username="bob", slack_member_id="UBOB"),
            UserIdentity(github_username="carol", slack_member_id=None),
        ]
    )
    db_session.commit()
    return RelayStore(db_session)


@pytest.fixture
def dispatcher() -> AsyncMock:
    """Dispatcher double recording sent payloads."""
    return AsyncMock(spec=WebhookDispatcher)


@pytest.fixture
def valid_event() -> dict:
    """Return a valid categorized review request body."""
    return {
        "reviewers": ["alice", "bob"],
        "repository": "acme/api",
        "pr_id": 7,
        "pr_url": "https://github.com/acme/api/pull/7",
        "pr_title": "Add login",
        "category": "feature",
    }


@pytest.fixture
def client(
    relay_settings: Settings, store: RelayStore, dispatcher: AsyncMock
) -> Generator[TestClient, None, None]:
    """Return a TestClient with settings, store and dispatcher overridden."""
    app.dependency_overrides[notify.get_settings] = lambda: relay_settings
    app.dependency_overrides[notify.get_store] = lambda: store
    app.dependency_overrides[notify.get_dispatcher] = lambda: dispatcher
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Headers carrying the correct relay credential."""
    return {"X-Relay-Secret": TEST_SECRET, "Content-Type": "application/json"}
