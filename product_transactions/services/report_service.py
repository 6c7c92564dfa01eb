"""Monthly reports over stored transactions.

Every report is scoped to one calendar month of the current year. The month is
resolved and validated before any query runs, so an unknown month name never
reaches the store.
"""

import calendar
import math
from datetime import date, datetime
from types import MappingProxyType
from typing import NamedTuple

import pandas as pd
from sqlalchemy import func, select
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from product_transactions.core.db import Transaction
from product_transactions.core.errors import InvalidMonthError
from product_transactions.core.models import CategoryCount, CombinedReport, PriceRangeCount, Statistics

MONTHS = MappingProxyType(
    {
        "january": 0,
        "february": 1,
        "march": 2,
        "april": 3,
        "may": 4,
        "june": 5,
        "july": 6,
        "august": 7,
        "september": 8,
        "october": 9,
        "november": 10,
        "december": 11,
    }
)

# Upper bounds are inclusive: (-inf, 100], (100, 200], ..., (900, inf).
PRICE_BINS = [-math.inf, 100, 200, 300, 400, 500, 600, 700, 800, 900, math.inf]
PRICE_LABELS = [
    "0-100",
    "101-200",
    "201-300",
    "301-400",
    "401-500",
    "501-600",
    "601-700",
    "701-800",
    "801-900",
    "901-above",
]


class MonthRange(NamedTuple):
    """First and last day of a calendar month, both at midnight."""

    start_date: datetime
    end_date: datetime


def month_index(month: str) -> int:
    """Resolve a full English month name (any case) to its zero-based index."""
    try:
        return MONTHS[month.lower()]
    except KeyError:
        raise InvalidMonthError(month) from None


def month_range(month: str, today: date | None = None) -> MonthRange:
    """Return the first and last day of ``month`` in the current year."""
    index = month_index(month)
    year = (today or date.today()).year
    last_day = calendar.monthrange(year, index + 1)[1]
    return MonthRange(datetime(year, index + 1, 1), datetime(year, index + 1, last_day))


def _in_range(bounds: MonthRange) -> ColumnElement[bool]:
    return Transaction.date_of_sale.between(bounds.start_date, bounds.end_date)


def statistics(session: Session, month: str, today: date | None = None) -> Statistics:
    """Count and total the sales in ``month``.

    ``notSoldItems`` counts records dated before the month starts.
    """
    bounds = month_range(month, today)
    sold_items = session.scalar(select(func.count()).select_from(Transaction).where(_in_range(bounds)))
    total_sales = session.scalar(select(func.coalesce(func.sum(Transaction.price), 0)).where(_in_range(bounds)))
    not_sold_items = session.scalar(
        select(func.count()).select_from(Transaction).where(Transaction.date_of_sale < bounds.start_date)
    )
    return Statistics(
        total_sales=float(total_sales or 0),
        sold_items=sold_items or 0,
        not_sold_items=not_sold_items or 0,
    )


def bucket_prices(prices: list[float | None]) -> list[PriceRangeCount]:
    """Histogram prices into the fixed price buckets, in bucket order.

    A missing price is counted in the last bucket.
    """
    series = pd.Series(prices, dtype="float64")
    buckets = pd.cut(series, bins=PRICE_BINS, labels=PRICE_LABELS, right=True)
    counts = {label: int(count) for label, count in buckets.value_counts().items()}
    counts[PRICE_LABELS[-1]] = counts.get(PRICE_LABELS[-1], 0) + int(series.isna().sum())
    return [PriceRangeCount(range=label, count=counts.get(label, 0)) for label in PRICE_LABELS]


def bar_chart(session: Session, month: str, today: date | None = None) -> list[PriceRangeCount]:
    """Price histogram of the transactions sold in ``month``."""
    bounds = month_range(month, today)
    prices = session.scalars(select(Transaction.price).where(_in_range(bounds))).all()
    return bucket_prices(list(prices))


def pie_chart(session: Session, month: str, today: date | None = None) -> list[CategoryCount]:
    """Per-category transaction counts for ``month``."""
    bounds = month_range(month, today)
    stmt = (
        select(Transaction.category, func.count().label("count"))
        .where(_in_range(bounds))
        .group_by(Transaction.category)
    )
    return [CategoryCount(category=row.category, count=row.count) for row in session.execute(stmt)]


def combined(session: Session, month: str, today: date | None = None) -> CombinedReport:
    """All three monthly reports for the same month."""
    month_index(month)
    return CombinedReport(
        statistics=statistics(session, month, today),
        bar_chart=bar_chart(session, month, today),
        pie_chart=pie_chart(session, month, today),
    )
