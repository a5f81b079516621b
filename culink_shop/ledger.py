import logging
from datetime import date, datetime
from typing import Callable, Iterable, Optional

import pydantic

from . import settings
from .errors import InsufficientStockError, LedgerError, NotFoundError, ValidationError
from .schemas import Item, ParsedLine, Sale

logger = logging.getLogger(__name__)

Observer = Callable[["Ledger"], None]


def _first_problem(error: pydantic.ValidationError) -> str:
    problem = error.errors()[0]
    field = ".".join(str(part) for part in problem["loc"])
    return f"Invalid {field}: {problem['msg']}."


class Ledger:
    """
    Owns the shop's inventory and its append-only sales log.

    Mutations go through add_item() and record_sale() only. Neither raises for bad
    input: failures leave state untouched and land in the error slot (last_error),
    and observers are notified after every call, successful or not.
    Readers get snapshots; the backing dict and list never leave this class.
    """

    def __init__(self, seed: Optional[Iterable[tuple[str, int, float]]] = None):
        self._items: dict[str, Item] = {}  # keyed by lower-cased name, insertion ordered
        self._sales: list[Sale] = []
        self._observers: list[Observer] = []
        self._error = ""
        self._error_kind: Optional[type[LedgerError]] = None

        for name, quantity, unit_cost in seed or []:
            self._items[name.strip().lower()] = Item(
                name=name.strip(), quantity_remaining=quantity, unit_cost=unit_cost
            )

    @classmethod
    def seeded(cls) -> "Ledger":
        """A ledger stocked with the configured starting inventory."""
        return cls(seed=settings.SEED_ITEMS)

    # --- Read-only views ---

    @property
    def items(self) -> tuple[Item, ...]:
        return tuple(item.model_copy() for item in self._items.values())

    @property
    def sales(self) -> tuple[Sale, ...]:
        return tuple(self._sales)

    @property
    def last_error(self) -> str:
        return self._error

    @property
    def last_error_kind(self) -> Optional[type[LedgerError]]:
        return self._error_kind

    def find_item(self, name: str) -> Optional[Item]:
        item = self._items.get((name or "").strip().lower())
        return item.model_copy() if item else None

    def search_items(self, query: str) -> list[Item]:
        """Case-insensitive substring search over item names. Empty query returns everything."""
        needle = (query or "").strip().lower()
        return [
            item.model_copy()
            for key, item in self._items.items()
            if not needle or needle in key
        ]

    def inventory_worth(self) -> float:
        return sum(item.business_worth for item in self._items.values())

    # --- Observers ---

    def subscribe(self, callback: Observer) -> None:
        if callback not in self._observers:
            self._observers.append(callback)

    def unsubscribe(self, callback: Observer) -> None:
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self) -> None:
        for callback in list(self._observers):
            try:
                callback(self)
            except Exception:
                logger.exception(f"❌ Ledger observer {callback!r} failed.")

    def _fail(self, error: LedgerError) -> None:
        self._error = str(error)
        self._error_kind = type(error)
        logger.warning(f"⚠️ {self._error}")

    def _succeed(self) -> None:
        self._error = ""
        self._error_kind = None

    # --- Mutations ---

    def add_item(self, name: str, quantity: int, unit_cost: float) -> None:
        """
        Adds a new item, or restocks an existing one matched case-insensitively.
        A restock keeps the item's original unit cost.
        """
        try:
            clean_name = (name or "").strip()
            if not clean_name or not quantity > 0 or not unit_cost > 0:
                raise ValidationError(
                    "Provide valid item name, quantity (>0), and unit cost (>0)."
                )

            key = clean_name.lower()
            existing = self._items.get(key)
            if existing is not None:
                existing.quantity_remaining += quantity
                logger.info(
                    f"Restocked '{existing.name}' by {quantity} (now {existing.quantity_remaining})."
                )
            else:
                self._items[key] = Item(
                    name=clean_name, quantity_remaining=quantity, unit_cost=unit_cost
                )
                logger.info(f"Added '{clean_name}': {quantity} @ {unit_cost}.")
            self._succeed()
        except LedgerError as e:
            self._fail(e)
        except pydantic.ValidationError as e:
            self._fail(ValidationError(_first_problem(e)))
        finally:
            self._notify()

    def record_sale(
        self,
        item_name: str,
        quantity: int,
        sold_on: Optional[date | datetime] = None,
        unit_price_override: Optional[float] = None,
    ) -> bool:
        """
        Sells `quantity` of an item, deducting stock and appending a Sale.
        The override price is used when given and positive, otherwise the item's unit cost.
        Returns False (with last_error set) when the item is unknown, the quantity is
        not positive, or there is not enough stock.
        """
        try:
            item = self._items.get((item_name or "").strip().lower())
            if item is None:
                raise NotFoundError(f'Item "{item_name}" not found.')
            if not quantity > 0:
                raise ValidationError("Quantity must be > 0.")
            if quantity > item.quantity_remaining:
                raise InsufficientStockError(item.quantity_remaining)

            if unit_price_override is not None and unit_price_override > 0:
                price = unit_price_override
            else:
                price = item.unit_cost

            sale = Sale(
                item_name=item.name,
                quantity=quantity,
                unit_price=price,
                sold_on=sold_on or date.today(),
            )
            item.quantity_remaining -= quantity
            self._sales.append(sale)
            self._succeed()
            logger.info(f"Sold {item.name} x{quantity} @ {price}.")
            return True
        except LedgerError as e:
            self._fail(e)
            return False
        except pydantic.ValidationError as e:
            self._fail(ValidationError(_first_problem(e)))
            return False
        finally:
            self._notify()

    def import_parsed(self, lines: Iterable[ParsedLine]) -> int:
        """Applies every valid parsed line through add_item(). Returns how many were applied."""
        applied = 0
        for line in lines:
            if not line.ok:
                continue
            self.add_item(line.name, line.quantity, line.unit_cost)
            if not self._error:
                applied += 1
        logger.info(f"Imported {applied} item line(s).")
        return applied
