"""Shared fixtures: a temporary SQLite store, a session on it, and an API client."""

from collections.abc import Callable, Generator
from datetime import date, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from main import app
from product_transactions.core.db import Transaction, create_session_factory, get_engine, init_db

THIS_YEAR = date.today().year


def dated(month: int, day: int, hour: int = 0) -> datetime:
    """Return a datetime in the current year."""
    return datetime(THIS_YEAR, month, day, hour)


@pytest.fixture
def session(tmp_path) -> Generator[Session, None, None]:
    """Session on a fresh SQLite database."""
    engine = get_engine(f"sqlite:///{tmp_path / 'store.db'}")
    init_db(engine)
    db = create_session_factory(engine)()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def client(tmp_path, monkeypatch) -> Generator[TestClient, None, None]:
    """API client whose lifespan opens a fresh SQLite database."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'api.db'}")
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def client_session(client) -> Generator[Session, None, None]:
    """Session on the database behind ``client``."""
    db = client.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def _adder(db: Session) -> Callable[..., None]:
    def add(*rows: dict) -> None:
        db.add_all([Transaction(**row) for row in rows])
        db.commit()

    return add


@pytest.fixture
def add_transactions(session) -> Callable[..., None]:
    """Insert transaction rows into ``session``'s database."""
    return _adder(session)


@pytest.fixture
def add_api_transactions(client_session) -> Callable[..., None]:
    """Insert transaction rows into the database behind ``client``."""
    return _adder(client_session)
