"""Seed the transactions store from the external product transaction feed."""

from typing import Any

import pandas as pd
import requests
from sqlalchemy.orm import Session

from product_transactions.core.db import bulk_insert_transactions
from product_transactions.core.errors import SeedError
from product_transactions.core.settings import Settings
from product_transactions.core.utils import get_logger

logger = get_logger("product-transactions.seed")

SEED_FIELDS = ["title", "description", "price", "dateOfSale", "category"]


def to_transaction_rows(payload: Any) -> list[dict[str, Any]]:
    """Map raw feed objects to transaction rows ready for insertion.

    Only the known fields are kept. ``dateOfSale`` is parsed into a naive UTC
    datetime and ``price`` into a float; missing values become None.
    """
    if not isinstance(payload, list):
        msg = f"Expected a JSON array of transactions, got {type(payload).__name__}"
        raise SeedError(msg)
    frame = pd.DataFrame(payload, columns=SEED_FIELDS)
    try:
        frame["dateOfSale"] = pd.to_datetime(frame["dateOfSale"], utc=True, format="ISO8601").dt.tz_convert(None)
        frame["price"] = pd.to_numeric(frame["price"], errors="raise").astype("float64")
    except (ValueError, TypeError) as exc:
        raise SeedError(f"Malformed transaction data: {exc}") from exc
    frame = frame.rename(columns={"dateOfSale": "date_of_sale"}).astype(object)
    frame = frame.where(frame.notna(), None)
    rows = frame.to_dict(orient="records")
    for row in rows:
        if row["date_of_sale"] is not None:
            row["date_of_sale"] = row["date_of_sale"].to_pydatetime()
    return rows


class SeedLoader:
    """SeedLoader fetches the transaction feed and appends it to the store."""

    def __init__(self, session: Session, settings: Settings) -> None:
        """Initialize SeedLoader with a DB session and the feed settings."""
        self.session = session
        self.seed_url = settings.seed_url
        self.timeout = settings.seed_timeout

    def fetch(self) -> Any:
        """Download and decode the JSON feed."""
        logger.info(f"Fetching seed data from {self.seed_url}")
        try:
            response = requests.get(self.seed_url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as exc:
            raise SeedError(f"Failed to fetch seed data: {exc}") from exc

    def initialize(self) -> int:
        """Fetch, map and bulk insert the feed; return the number of inserted rows.

        Existing rows are kept, so running this twice duplicates the data.
        """
        rows = to_transaction_rows(self.fetch())
        logger.info(f"Loaded {len(rows)} transactions from seed feed")
        inserted = bulk_insert_transactions(self.session, rows)
        logger.info(f"Inserted {inserted} transactions")
        return inserted


def run_seed(session: Session, settings: Settings) -> int:
    """Top-level function to seed the store using SeedLoader."""
    return SeedLoader(session, settings).initialize()


if __name__ == "__main__":
    from product_transactions.core.db import create_session_factory, get_engine, init_db
    from product_transactions.core.settings import get_settings

    settings = get_settings()
    engine = get_engine(settings.database_url)
    init_db(engine)
    session = create_session_factory(engine)()
    try:
        run_seed(session, settings)
    finally:
        session.close()
