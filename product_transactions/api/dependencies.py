"""FastAPI dependencies for DI (settings, DB session).

The engine and session factory are created once by the application lifespan and
kept on ``app.state``; each request borrows its own session from that factory.
"""

from collections.abc import Generator

from fastapi import Request
from sqlalchemy.orm import Session

from product_transactions.core.settings import get_settings  # noqa: F401


def get_db(request: Request) -> Generator[Session, None, None]:
    """Provide a request-scoped SQLAlchemy session from the application's store handle."""
    session = request.app.state.session_factory()
    try:
        yield session
    finally:
        session.close()
