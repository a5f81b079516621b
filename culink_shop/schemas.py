from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Item(BaseModel):
    """
    A single inventory line: what we stock, how many are left, and the guiding price.
    Only the Ledger changes quantity_remaining; callers receive copies.
    """

    model_config = ConfigDict(validate_assignment=True)

    name: str = Field(..., min_length=1)
    quantity_remaining: int = Field(default=0, ge=0)
    unit_cost: float = Field(..., gt=0)

    @property
    def business_worth(self) -> float:
        return self.quantity_remaining * self.unit_cost


class Sale(BaseModel):
    """
    An immutable record of a quantity of an item sold at a given price on a given day.
    Only the calendar date matters, so any datetime passed in is reduced to its date.
    """

    model_config = ConfigDict(frozen=True)

    item_name: str
    quantity: int = Field(..., gt=0)
    unit_price: float = Field(..., gt=0)
    sold_on: date

    @field_validator("sold_on", mode="before")
    @classmethod
    def _drop_time_of_day(cls, value):
        if isinstance(value, datetime):
            return value.date()
        return value

    @property
    def total(self) -> float:
        return self.quantity * self.unit_price


class ParsedLine(BaseModel):
    """One line of pasted import text, either a usable record or an error message."""

    model_config = ConfigDict(frozen=True)

    raw_line: str
    name: Optional[str] = None
    quantity: Optional[int] = None
    unit_cost: Optional[float] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, raw_line: str, name: str, quantity: int, unit_cost: float) -> "ParsedLine":
        return cls(raw_line=raw_line, name=name, quantity=quantity, unit_cost=unit_cost)

    @classmethod
    def failure(cls, raw_line: str, error: str) -> "ParsedLine":
        return cls(raw_line=raw_line, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None


class RankedEntry(BaseModel):
    item_name: str
    value: int | float


class DashboardSummary(BaseModel):
    """Headline numbers for a date range, as shown on the dashboard."""

    start: date
    end: date
    revenue: float = 0.0
    transactions: int = Field(default=0, ge=0)
    distinct_items: int = Field(default=0, ge=0)
    top_by_quantity: list[RankedEntry] = Field(default_factory=list)
    top_by_revenue: list[RankedEntry] = Field(default_factory=list)
    inventory_worth: float = 0.0
