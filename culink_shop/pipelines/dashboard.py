import logging
from datetime import date
from typing import Optional

from culink_shop import analytics, data_handler, utils
from culink_shop.ledger import Ledger
from culink_shop.pipeline import DataPipeline
from culink_shop.schemas import DashboardSummary, Sale

logger = logging.getLogger(__name__)


class DashboardPipeline(DataPipeline):
    """Sale log -> range summary -> console report and optional webhook post."""

    def __init__(
        self,
        ledger: Ledger,
        start: date,
        end: date,
        top_n: Optional[int] = None,
        post: bool = False,
        test_mode: bool = False,
    ):
        super().__init__("dashboard", ledger, test_mode=test_mode)
        self.start = start
        self.end = end
        self.top_n = top_n
        self.post = post

    def run(self) -> DashboardSummary:
        # An empty range is still a valid report (all zeros), so never short-circuit.
        summary = self.transform(self.extract())
        return self.load(summary)

    def extract(self) -> list[Sale]:
        return analytics.sales_between(self.ledger.sales, self.start, self.end)

    def transform(self, raw_data: list[Sale]) -> DashboardSummary:
        return analytics.dashboard_summary(
            raw_data,
            self.start,
            self.end,
            self.top_n,
            inventory_worth=self.ledger.inventory_worth(),
        )

    def load(self, records: DashboardSummary) -> DashboardSummary:
        span = utils.format_range(records.start, records.end)
        logger.info(f"\n--- Total Sales ({span}) ---")
        logger.info(utils.format_money(records.revenue))
        logger.info(f"Transactions: {records.transactions}")
        logger.info(f"Distinct items sold: {records.distinct_items}")
        logger.info(f"Inventory worth: {utils.format_money(records.inventory_worth)}")

        logger.info(f"\n--- Top-Selling by Quantity ({span}) ---")
        if not records.top_by_quantity:
            logger.info("No sales in selected range.")
        for entry in records.top_by_quantity:
            logger.info(f"{entry.item_name}: Qty {entry.value}")

        logger.info(f"\n--- Top-Selling by Revenue ({span}) ---")
        if not records.top_by_revenue:
            logger.info("No sales in selected range.")
        for entry in records.top_by_revenue:
            logger.info(f"{entry.item_name}: {utils.format_money(entry.value)}")

        if self.post and not self.test_mode:
            data_handler.post_to_webhook(records)
        elif self.post:
            logger.info("🧪 Test Mode: Skipping webhook post.")
        return records
