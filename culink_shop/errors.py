"""
Error kinds raised inside the shop core.

None of these escape the public Ledger or parser API: the Ledger records them in
its error slot and the parser turns them into failed ParsedLine records.
"""


class LedgerError(Exception):
    """Base class for every recoverable shop error."""


class ValidationError(LedgerError):
    """Malformed input to a mutating operation (empty name, non-positive numbers)."""


class NotFoundError(LedgerError):
    """The referenced item does not exist in the inventory."""


class InsufficientStockError(LedgerError):
    def __init__(self, available: int):
        self.available = available
        super().__init__(f"Insufficient stock. Available: {available}.")


class ParseLineError(LedgerError):
    """A single pasted line failed column-count or field checks."""
