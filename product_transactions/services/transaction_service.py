"""Search and pagination over stored transactions."""

from sqlalchemy import false, func, or_, select
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from product_transactions.core.db import Transaction
from product_transactions.core.models import TransactionOut, TransactionPage
from product_transactions.core.utils import parse_float

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10


def search_predicate(search: str = "") -> ColumnElement[bool]:
    """Build the OR predicate matching title, description or price against ``search``.

    An empty search leaves the price branch as "price is present", so every
    priced record matches. A non-numeric search makes the price branch match nothing.
    """
    if search:
        number = parse_float(search)
        price_clause = Transaction.price == number if number is not None else false()
    else:
        price_clause = Transaction.price.is_not(None)
    return or_(
        Transaction.title.icontains(search, autoescape=True),
        Transaction.description.icontains(search, autoescape=True),
        price_clause,
    )


def list_transactions(
    session: Session,
    page: int = DEFAULT_PAGE,
    per_page: int = DEFAULT_PER_PAGE,
    search: str = "",
) -> TransactionPage:
    """Return one page of transactions matching ``search`` and the total match count.

    ``per_page=0`` returns every match from the page offset onwards.
    """
    if page < 1:
        msg = f"page must be 1 or greater, got {page}"
        raise ValueError(msg)
    if per_page < 0:
        msg = f"perPage must not be negative, got {per_page}"
        raise ValueError(msg)
    predicate = search_predicate(search)
    stmt = select(Transaction).where(predicate).order_by(Transaction.id).offset((page - 1) * per_page)
    if per_page:
        stmt = stmt.limit(per_page)
    rows = session.scalars(stmt).all()
    total = session.scalar(select(func.count()).select_from(Transaction).where(predicate))
    return TransactionPage(
        transactions=[TransactionOut.model_validate(row) for row in rows],
        total=total or 0,
    )
