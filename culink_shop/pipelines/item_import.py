import logging
from typing import Optional

from culink_shop import parsers, settings
from culink_shop.ledger import Ledger
from culink_shop.pipeline import DataPipeline
from culink_shop.schemas import ParsedLine

logger = logging.getLogger(__name__)


class ItemImportPipeline(DataPipeline):
    """Pasted text -> parsed lines -> restock/add on the ledger."""

    def __init__(
        self,
        ledger: Ledger,
        text: str,
        first_row_header: Optional[bool] = None,
        test_mode: bool = False,
    ):
        super().__init__("item import", ledger, test_mode=test_mode)
        self.text = text
        self.first_row_header = (
            settings.FIRST_ROW_HEADER if first_row_header is None else first_row_header
        )
        self.rejected: list[ParsedLine] = []

    def extract(self) -> list[ParsedLine]:
        logger.info("--- Parsing Pasted Rows ---")
        return parsers.parse_pasted_text(self.text, first_row_header=self.first_row_header)

    def transform(self, raw_data: list[ParsedLine]) -> list[ParsedLine]:
        valid = [line for line in raw_data if line.ok]
        self.rejected = [line for line in raw_data if not line.ok]

        logger.info(f"Preview ({len(valid)} valid / {len(raw_data)} total)")
        for line in self.rejected:
            logger.warning(f"  > ⚠️  Skipping '{line.raw_line}': {line.error}")
        return valid

    def load(self, records: list[ParsedLine]) -> int:
        if self.test_mode:
            logger.info("🧪 Test Mode: Not applying rows to the ledger.")
            return 0
        return self.ledger.import_parsed(records)
