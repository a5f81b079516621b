import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from culink_shop.ledger import Ledger

logger = logging.getLogger(__name__)


class DataPipeline(ABC):
    """
    Abstract base class for the shop's data pipelines (Item import, Dashboard report).
    Follows an Extract -> Transform -> Load (ETL) pattern against a Ledger.
    """

    def __init__(self, name: str, ledger: Ledger, test_mode: bool = False):
        self.name = name
        self.ledger = ledger
        self.test_mode = test_mode

    def run(self) -> Optional[Any]:
        """
        Orchestrates the pipeline execution. Returns whatever load() returns,
        or None when nothing could be extracted or transformed.
        """
        logger.info(f"🚀 STEP: {self.name.upper()}")
        logger.info("-" * 30)

        # --- 1. EXTRACT ---
        raw_data = self.extract()
        if not raw_data:
            logger.warning(f"⚠️ No data extracted for {self.name}.")
            return None

        # --- 2. TRANSFORM ---
        records = self.transform(raw_data)
        if records is None:
            logger.error(f"❌ Transformation failed for {self.name}.")
            return None

        # --- 3. LOAD ---
        result = self.load(records)

        logger.info(f"✅ {self.name.capitalize()} Pipeline Finished.")
        logger.info("=" * 60)
        return result

    @abstractmethod
    def extract(self) -> Any:
        """Gathers the raw input for this pipeline."""
        pass

    @abstractmethod
    def transform(self, raw_data: Any) -> Optional[Any]:
        """Validates and shapes the raw input; returns None on failure."""
        pass

    @abstractmethod
    def load(self, records: Any) -> Any:
        """Applies the records to the ledger or publishes them."""
        pass
