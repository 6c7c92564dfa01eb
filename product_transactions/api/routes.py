"""FastAPI endpoints for the Product Transactions API.

This module defines the routes for seeding the store, listing and searching
transactions, and the monthly statistics, bar chart, pie chart and combined
reports. Month-scoped routes reject unknown month names before opening any query.
"""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from product_transactions.api.dependencies import get_db, get_settings
from product_transactions.core.errors import ServerError
from product_transactions.core.models import (
    CategoryCount,
    CombinedReport,
    InitializeResult,
    PriceRangeCount,
    Statistics,
    TransactionPage,
)
from product_transactions.core.settings import Settings
from product_transactions.core.utils import get_logger
from product_transactions.services import report_service, transaction_service
from product_transactions.workers.seed_loader import run_seed

router = APIRouter()
logger = get_logger("product-transactions.api")

INVALID_MONTH_RESPONSE = {
    "description": "Unknown month name.",
    "content": {"application/json": {"example": {"message": "Invalid month"}}},
}
SERVER_ERROR_RESPONSE = {
    "description": "Store or upstream failure.",
    "content": {"application/json": {"example": {"message": "Failed to retrieve statistics", "error": "..."}}},
}


def _server_error(message: str, exc: Exception) -> ServerError:
    logger.exception(message)
    return ServerError(message, exc)


@router.get("/", response_class=PlainTextResponse, summary="Liveness check")
def home() -> str:
    """Return a plain-text liveness message."""
    return "Homepage"


@router.get(
    "/initialize",
    response_model=InitializeResult,
    summary="Seed the store from the external transaction feed",
    description=(
        "Fetch the product transaction feed and append every record to the store. "
        "Existing records are kept, so calling this twice duplicates the data."
    ),
    responses={500: SERVER_ERROR_RESPONSE},
)
def initialize(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)) -> InitializeResult:
    """Seed the store from the configured feed."""
    logger.info("Received initialize request")
    try:
        inserted = run_seed(db, settings)
    except Exception as exc:
        raise _server_error("Failed to initialize database", exc) from exc
    return InitializeResult(message="Database initialized successfully", inserted=inserted)


@router.get(
    "/transactions",
    response_model=TransactionPage,
    summary="List and search transactions",
    description=(
        "Return one page of transactions and the total number of matches.\n\n"
        "`search` matches title or description case-insensitively, or the price exactly "
        "when it parses as a number."
    ),
    responses={500: SERVER_ERROR_RESPONSE},
)
def list_transactions(
    page: str = Query(str(transaction_service.DEFAULT_PAGE)),
    per_page: str = Query(str(transaction_service.DEFAULT_PER_PAGE), alias="perPage"),
    search: str = "",
    db: Session = Depends(get_db),
) -> TransactionPage:
    """List transactions matching ``search``.

    Paging values are parsed here so that malformed ones fail like any other store error.
    """
    logger.info(f"Listing transactions: page={page}, perPage={per_page}, search={search!r}")
    try:
        return transaction_service.list_transactions(db, page=int(page), per_page=int(per_page), search=search)
    except Exception as exc:
        raise _server_error("Failed to retrieve transactions", exc) from exc


@router.get(
    "/statistics/{month}",
    response_model=Statistics,
    summary="Monthly sales statistics",
    responses={400: INVALID_MONTH_RESPONSE, 500: SERVER_ERROR_RESPONSE},
)
def get_statistics(month: str, db: Session = Depends(get_db)) -> Statistics:
    """Total sales, sold items and items dated before the month."""
    report_service.month_index(month)
    try:
        return report_service.statistics(db, month)
    except Exception as exc:
        raise _server_error("Failed to retrieve statistics", exc) from exc


@router.get(
    "/bar-chart/{month}",
    response_model=list[PriceRangeCount],
    summary="Monthly price-range histogram",
    responses={400: INVALID_MONTH_RESPONSE, 500: SERVER_ERROR_RESPONSE},
)
def get_bar_chart(month: str, db: Session = Depends(get_db)) -> list[PriceRangeCount]:
    """Count the month's transactions per price bucket."""
    report_service.month_index(month)
    try:
        return report_service.bar_chart(db, month)
    except Exception as exc:
        raise _server_error("Failed to retrieve bar chart data", exc) from exc


@router.get(
    "/pie-chart/{month}",
    response_model=list[CategoryCount],
    summary="Monthly category breakdown",
    responses={400: INVALID_MONTH_RESPONSE, 500: SERVER_ERROR_RESPONSE},
)
def get_pie_chart(month: str, db: Session = Depends(get_db)) -> list[CategoryCount]:
    """Count the month's transactions per category."""
    report_service.month_index(month)
    try:
        return report_service.pie_chart(db, month)
    except Exception as exc:
        raise _server_error("Failed to retrieve pie chart data", exc) from exc


@router.get(
    "/combined/{month}",
    response_model=CombinedReport,
    summary="Statistics, bar chart and pie chart in one response",
    responses={400: INVALID_MONTH_RESPONSE, 500: SERVER_ERROR_RESPONSE},
)
def get_combined(month: str, db: Session = Depends(get_db)) -> CombinedReport:
    """All three monthly reports for ``month``."""
    report_service.month_index(month)
    try:
        return report_service.combined(db, month)
    except Exception as exc:
        raise _server_error("Failed to retrieve combined data", exc) from exc
