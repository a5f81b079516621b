import argparse
import logging
import sys
from datetime import date
from pathlib import Path

from culink_shop import settings, utils
from culink_shop.ledger import Ledger
from culink_shop.logger import setup_logger
from culink_shop.pipelines.dashboard import DashboardPipeline
from culink_shop.pipelines.item_import import ItemImportPipeline

logger = logging.getLogger(__name__)


def show_inventory(ledger: Ledger, query: str = "") -> None:
    items = ledger.search_items(query)
    logger.info(f"--- Inventory ({len(items)} item(s)) ---")
    for it in items:
        logger.info(
            f"{it.name}  Unit: {utils.format_money(it.unit_cost)}   "
            f"Stock: {it.quantity_remaining}   Worth: {utils.format_money(it.business_worth)}"
        )


def iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a YYYY-MM-DD date, got '{value}'")


def _resolve_range(args) -> tuple[date, date]:
    if args.start or args.end:
        return args.start or date.today(), args.end or date.today()
    return utils.RANGE_PRESETS[args.preset]()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Culink Shop inventory, sales and dashboard")
    sub = parser.add_subparsers(dest="command", required=True)

    inv = sub.add_parser("inventory", help="List inventory items")
    inv.add_argument("--search", default="", help="Case-insensitive name filter")

    imp = sub.add_parser("import", help="Import items from a pasted-text file")
    imp.add_argument("file", help="Text file with name, quantity, unit cost rows")
    imp.add_argument(
        "--header",
        dest="first_row_header",
        action=argparse.BooleanOptionalAction,
        default=settings.FIRST_ROW_HEADER,
        help="Skip the first row as a header (--no-header treats it as data)",
    )

    sell = sub.add_parser("sell", help="Record a sale")
    sell.add_argument("item")
    sell.add_argument("quantity", type=int)
    sell.add_argument("--price", type=float, help="Selling price; defaults to the unit cost")
    sell.add_argument("--date", type=iso_date, help="Sale date as YYYY-MM-DD; defaults to today")

    dash = sub.add_parser("dashboard", help="Show sales analytics for a date range")
    dash.add_argument("--preset", choices=sorted(utils.RANGE_PRESETS), default="today")
    dash.add_argument("--start", type=iso_date, help="Range start as YYYY-MM-DD")
    dash.add_argument("--end", type=iso_date, help="Range end as YYYY-MM-DD")
    dash.add_argument("--top", type=int, default=settings.DEFAULT_TOP_N)
    dash.add_argument("--post", action="store_true", help="Post the summary to WEBHOOK_URL")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Runs one command against a freshly seeded ledger."""
    setup_logger()
    args = build_parser().parse_args(argv)
    ledger = Ledger.seeded()

    if args.command == "inventory":
        show_inventory(ledger, args.search)
        return 0

    if args.command == "import":
        text = Path(args.file).read_text(encoding="utf-8")
        pipeline = ItemImportPipeline(ledger, text, first_row_header=args.first_row_header)
        pipeline.run()
        show_inventory(ledger)
        return 0 if not pipeline.rejected else 1

    if args.command == "sell":
        ok = ledger.record_sale(args.item, args.quantity, args.date, args.price)
        if not ok:
            logger.error(f"❌ {ledger.last_error}")
            return 1
        sale = ledger.sales[-1]
        logger.info(
            f"Recorded: {sale.item_name} x{sale.quantity} @ {utils.format_money(sale.unit_price)}"
        )
        return 0

    start, end = _resolve_range(args)
    DashboardPipeline(ledger, start, end, top_n=args.top, post=args.post).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
