"""
Read-only sales analytics over a ledger's sale log.

Every function takes the sales to look at plus inclusive calendar-date bounds.
Times of day are dropped before comparing, and a range whose start is after its
end simply matches nothing.
"""

import logging
from datetime import date, datetime
from typing import Iterable, Optional

import pandas as pd

from . import settings
from .schemas import DashboardSummary, RankedEntry, Sale
from .utils import date_only

logger = logging.getLogger(__name__)

SALE_COLUMNS = ["item_name", "quantity", "unit_price", "sold_on", "total"]


def sales_on(sales: Iterable[Sale], day: date | datetime) -> list[Sale]:
    target = date_only(day)
    return [s for s in sales if s.sold_on == target]


def sales_between(
    sales: Iterable[Sale], start: date | datetime, end: date | datetime
) -> list[Sale]:
    lo, hi = date_only(start), date_only(end)
    return [s for s in sales if lo <= s.sold_on <= hi]


def to_frame(sales: Iterable[Sale]) -> pd.DataFrame:
    """Flattens sales into a DataFrame, keeping log order."""
    rows = [
        {
            "item_name": s.item_name,
            "quantity": s.quantity,
            "unit_price": s.unit_price,
            "sold_on": s.sold_on,
            "total": s.total,
        }
        for s in sales
    ]
    return pd.DataFrame(rows, columns=SALE_COLUMNS)


def revenue_between(sales: Iterable[Sale], start: date | datetime, end: date | datetime) -> float:
    return float(sum(s.total for s in sales_between(sales, start, end)))


def transactions_between(sales: Iterable[Sale], start: date | datetime, end: date | datetime) -> int:
    return len(sales_between(sales, start, end))


def distinct_items_sold_between(
    sales: Iterable[Sale], start: date | datetime, end: date | datetime
) -> int:
    return len({s.item_name for s in sales_between(sales, start, end)})


def _top_between(
    sales: Iterable[Sale],
    start: date | datetime,
    end: date | datetime,
    column: str,
    top_n: int,
) -> pd.Series:
    """
    Sums `column` per item for sales in range and returns the top_n largest.
    groupby(sort=False) keeps first-appearance order and the stable sort preserves it on ties.
    """
    if top_n <= 0:
        return pd.Series(dtype="float64")

    df = to_frame(sales_between(sales, start, end))
    if df.empty:
        return pd.Series(dtype="float64")

    totals = df.groupby("item_name", sort=False)[column].sum()
    totals = totals.sort_values(ascending=False, kind="stable")
    return totals.head(top_n)


def top_by_qty_between(
    sales: Iterable[Sale],
    start: date | datetime,
    end: date | datetime,
    top_n: Optional[int] = None,
) -> list[RankedEntry]:
    """Best sellers by summed quantity, highest first."""
    top_n = settings.DEFAULT_TOP_N if top_n is None else top_n
    totals = _top_between(sales, start, end, "quantity", top_n)
    return [RankedEntry(item_name=name, value=int(qty)) for name, qty in totals.items()]


def top_by_revenue_between(
    sales: Iterable[Sale],
    start: date | datetime,
    end: date | datetime,
    top_n: Optional[int] = None,
) -> list[RankedEntry]:
    """Best sellers by summed revenue (quantity x transacted price), highest first."""
    top_n = settings.DEFAULT_TOP_N if top_n is None else top_n
    totals = _top_between(sales, start, end, "total", top_n)
    return [
        RankedEntry(item_name=name, value=float(revenue))
        for name, revenue in totals.items()
    ]


def dashboard_summary(
    sales: Iterable[Sale],
    start: date | datetime,
    end: date | datetime,
    top_n: Optional[int] = None,
    inventory_worth: float = 0.0,
) -> DashboardSummary:
    """Bundles the dashboard numbers for [start, end]."""
    sales = list(sales)
    summary = DashboardSummary(
        start=date_only(start),
        end=date_only(end),
        revenue=revenue_between(sales, start, end),
        transactions=transactions_between(sales, start, end),
        distinct_items=distinct_items_sold_between(sales, start, end),
        top_by_quantity=top_by_qty_between(sales, start, end, top_n),
        top_by_revenue=top_by_revenue_between(sales, start, end, top_n),
        inventory_worth=inventory_worth,
    )
    logger.debug(
        f"Dashboard {summary.start} → {summary.end}: {summary.transactions} sale(s), "
        f"revenue {summary.revenue}."
    )
    return summary
