"""Pydantic models for the Product Transactions API.

These are the wire shapes returned by the HTTP handlers: serialized transactions,
the paged listing, and the three monthly reports plus their combination.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field


class TransactionOut(BaseModel):
    """Pydantic model representing a stored transaction."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    title: str | None = None
    description: str | None = None
    price: float | None = None
    date_of_sale: datetime | None = Field(default=None, alias="dateOfSale")
    category: str | None = None


class TransactionPage(BaseModel):
    """One page of transactions plus the total number of matches."""

    transactions: list[TransactionOut]
    total: int


class Statistics(BaseModel):
    """Monthly sales statistics."""

    model_config = ConfigDict(populate_by_name=True)

    total_sales: float = Field(alias="totalSales")
    sold_items: int = Field(alias="soldItems")
    not_sold_items: int = Field(alias="notSoldItems")


class PriceRangeCount(BaseModel):
    """Number of transactions falling into one price bucket."""

    range: str
    count: int


class CategoryCount(BaseModel):
    """Number of transactions in one category."""

    category: str | None
    count: int

    @computed_field(alias="_id")  # type: ignore[misc]
    @property
    def group_id(self) -> str | None:
        """Grouping key, identical to the category."""
        return self.category


class CombinedReport(BaseModel):
    """Statistics, bar chart and pie chart for the same month."""

    model_config = ConfigDict(populate_by_name=True)

    statistics: Statistics
    bar_chart: list[PriceRangeCount] = Field(alias="barChart")
    pie_chart: list[CategoryCount] = Field(alias="pieChart")


class InitializeResult(BaseModel):
    """Outcome of seeding the store."""

    message: str
    inserted: int
