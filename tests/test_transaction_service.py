"""Tests for transaction search and pagination."""

import pytest

from product_transactions.services.transaction_service import list_transactions
from tests.conftest import dated


def test_default_page_returns_first_ten_and_full_total(session, add_transactions) -> None:
    """Defaults return ten records and count every priced record."""
    add_transactions(*[{"title": f"Item {i}", "price": float(i), "date_of_sale": dated(3, 1)} for i in range(25)])
    page = list_transactions(session)
    if len(page.transactions) != 10 or page.total != 25:
        msg = f"Expected 10 of 25, got {len(page.transactions)} of {page.total}"
        raise AssertionError(msg)
    if [t.title for t in page.transactions][:2] != ["Item 0", "Item 1"]:
        raise AssertionError("Expected insertion order")


def test_pages_are_offset_by_per_page(session, add_transactions) -> None:
    """Page N skips (N-1) * perPage records."""
    add_transactions(*[{"title": f"Item {i}", "price": float(i)} for i in range(7)])
    page = list_transactions(session, page=3, per_page=3)
    if [t.title for t in page.transactions] != ["Item 6"] or page.total != 7:
        msg = f"Unexpected page: {page}"
        raise AssertionError(msg)


def test_zero_per_page_returns_all_from_offset(session, add_transactions) -> None:
    """A zero page size applies no limit."""
    add_transactions(*[{"title": f"Item {i}", "price": float(i)} for i in range(12)])
    page = list_transactions(session, page=1, per_page=0)
    if len(page.transactions) != 12 or page.total != 12:
        msg = f"Expected all 12, got {len(page.transactions)} of {page.total}"
        raise AssertionError(msg)


@pytest.mark.parametrize(("page", "per_page"), [(0, 10), (-1, 10), (1, -5)])
def test_unusable_paging_raises(session, page: int, per_page: int) -> None:
    """Pages start at 1 and page sizes cannot be negative."""
    with pytest.raises(ValueError):
        list_transactions(session, page=page, per_page=per_page)


def test_numeric_search_matches_price_or_text(session, add_transactions) -> None:
    """A numeric search ORs exact price with title/description substring matches."""
    add_transactions(
        {"title": "Backpack", "description": "Roomy", "price": 150.0},
        {"title": "Model 150 speaker", "description": "Loud", "price": 20.0},
        {"title": "Lamp", "description": "Fits 150W bulbs", "price": 35.0},
        {"title": "Chair", "description": "Oak", "price": 151.0},
    )
    page = list_transactions(session, search="150")
    titles = sorted(t.title for t in page.transactions)
    if titles != ["Backpack", "Lamp", "Model 150 speaker"] or page.total != 3:
        msg = f"Unexpected matches: {titles}"
        raise AssertionError(msg)


def test_text_search_is_case_insensitive(session, add_transactions) -> None:
    """Title and description matches ignore case; price branch matches nothing."""
    add_transactions(
        {"title": "Mens Cotton Jacket", "description": "warm", "price": 55.99},
        {"title": "Ring", "description": "A JACKET accessory", "price": 10.0},
        {"title": "Ring", "description": "Silver", "price": 12.0},
    )
    page = list_transactions(session, search="jacket")
    if page.total != 2:
        msg = f"Expected 2 matches, got {page.total}"
        raise AssertionError(msg)


def test_search_treats_wildcards_literally(session, add_transactions) -> None:
    """Percent signs in a search are matched as text."""
    add_transactions(
        {"title": "50% off hat", "description": "", "price": 5.0},
        {"title": "Hat", "description": "", "price": 6.0},
    )
    page = list_transactions(session, search="%")
    if [t.title for t in page.transactions] != ["50% off hat"]:
        msg = f"Unexpected matches: {page.transactions}"
        raise AssertionError(msg)


def test_empty_search_skips_unpriced_untitled_records(session, add_transactions) -> None:
    """With no search the price branch requires a price to be present."""
    add_transactions({"title": None, "description": None, "price": None}, {"title": None, "price": 9.0})
    page = list_transactions(session)
    if page.total != 1:
        msg = f"Expected 1 match, got {page.total}"
        raise AssertionError(msg)
