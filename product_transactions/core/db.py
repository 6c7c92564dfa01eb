"""DB schema and connection helpers for the Product Transactions API."""

from collections.abc import Iterable
from typing import Any

from sqlalchemy import Column, DateTime, Float, Integer, String, Text, create_engine, insert, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Base = declarative_base()


class Transaction(Base):
    """A product sale record as persisted in the store."""

    __tablename__ = "transactions"
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=True)
    date_of_sale = Column(DateTime, nullable=True, index=True)
    category = Column(String, nullable=True)


def get_engine(database_url: str | None = None) -> Engine:
    """Create a SQLAlchemy engine using the given or configured database URL."""
    if database_url is None:
        from product_transactions.core.settings import get_settings

        database_url = get_settings().database_url
    return create_engine(database_url)


def init_db(engine: Engine) -> None:
    """Verify the store is reachable and ensure the transactions table exists."""
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    Base.metadata.create_all(engine)


def create_session_factory(engine: Engine) -> sessionmaker:
    """Return a session factory bound to the engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def bulk_insert_transactions(session: Session, rows: Iterable[dict[str, Any]]) -> int:
    """Insert transaction rows in one statement and commit; return the row count."""
    rows = list(rows)
    if not rows:
        return 0
    session.execute(insert(Transaction), rows)
    session.commit()
    return len(rows)
