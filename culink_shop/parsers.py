import logging
import re
from typing import Optional

from .errors import ParseLineError
from .schemas import ParsedLine

logger = logging.getLogger(__name__)

LINE_SPLIT = re.compile(r"\r?\n")
FIELD_SPLIT = re.compile(r"[,\t;]")
NON_INT_CHARS = re.compile(r"[^0-9\-]")
NON_DECIMAL_CHARS = re.compile(r"[^0-9.\-]")
ROW_INDEX = re.compile(r"[+-]?[0-9]+")

EXPECTED_COLUMNS = 3


def _to_int(raw: str) -> Optional[int]:
    cleaned = NON_INT_CHARS.sub("", raw)
    try:
        return int(cleaned)
    except ValueError:
        return None


def _to_float(raw: str) -> Optional[float]:
    cleaned = NON_DECIMAL_CHARS.sub("", raw)
    try:
        return float(cleaned)
    except ValueError:
        return None


def _is_row_index(field: str) -> bool:
    return ROW_INDEX.fullmatch(field) is not None


def _parse_line(line: str) -> ParsedLine:
    """
    Turns one pasted line into a success record.
    Raises ParseLineError when the line cannot be used.
    """
    parts = [part.strip() for part in FIELD_SPLIT.split(line)]
    parts = [part for part in parts if part]

    if len(parts) < EXPECTED_COLUMNS:
        raise ParseLineError(
            f"Expected 3 columns (name, quantity, unit cost). Found {len(parts)}."
        )

    # A leading integer on a wide row is a spreadsheet row number, not a name.
    columns = parts
    if _is_row_index(parts[0]) and len(parts) >= 4:
        columns = parts[1:]

    name = columns[0]
    quantity = _to_int(columns[1])
    unit_cost = _to_float(columns[2])

    if not name:
        raise ParseLineError("Item name is empty.")
    if quantity is None or quantity <= 0:
        raise ParseLineError("Quantity must be a positive integer.")
    if unit_cost is None or unit_cost <= 0:
        raise ParseLineError("Unit cost must be a positive number.")

    return ParsedLine.success(line, name, quantity, unit_cost)


def parse_pasted_text(text: str, first_row_header: bool = True) -> list[ParsedLine]:
    """
    Parses pasted tabular text (comma, semicolon or tab separated) into one
    ParsedLine per non-blank line, in input order.

    - Blank lines are ignored entirely.
    - When first_row_header is set, the first non-blank line is skipped.
    - Bad lines become error records; parsing always continues.
    """
    lines = [line for line in LINE_SPLIT.split(text or "") if line.strip()]
    if first_row_header:
        lines = lines[1:]

    parsed: list[ParsedLine] = []
    for line in lines:
        try:
            parsed.append(_parse_line(line))
        except ParseLineError as e:
            parsed.append(ParsedLine.failure(line, str(e)))

    ok_count = sum(1 for p in parsed if p.ok)
    logger.debug(f"Parsed {len(parsed)} pasted lines ({ok_count} valid).")
    return parsed
