"""
Row cleaning for statement sheets.
Handles boilerplate trimming, amount canonicalization and credit/debit bucketing.
"""
import re
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from core.logger import setup_logger
from core.parsing import SheetGrid
from core.schema import Bucket, OutputRecord, RowOutcome, SheetLayout

logger = setup_logger(__name__)

# Plain or scientific decimal, optional sign, no inner whitespace
_DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

# Magnitude limit of a double; beyond it the amount is treated as unparsable
MAX_AMOUNT_EXPONENT = 308


def trim_boilerplate(sheet: SheetGrid, layout: SheetLayout) -> None:
    """
    Drop the report header and footer rows from a sheet in place.

    The header rows go first; the footer count is then taken against
    what is left, removing the last row one at a time.

    Args:
        sheet: Sheet to trim
        layout: Statement layout with header/footer row counts
    """
    for _ in range(layout.header_rows):
        sheet.remove_row(1)

    for _ in range(layout.footer_rows):
        if not len(sheet):
            break
        sheet.remove_row(len(sheet))


def clean_amount_text(raw: str) -> str:
    """Strip thousands separators from an amount cell."""
    return raw.replace(",", "")


def parse_amount(text: str) -> Optional[Decimal]:
    """
    Parse a cleaned amount string.

    Args:
        text: Amount without thousands separators

    Returns:
        Decimal value, or None if the text is not a plain decimal number
        or its magnitude is outside the range of a double
    """
    if not _DECIMAL_PATTERN.fullmatch(text):
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_zero() and abs(value.adjusted()) > MAX_AMOUNT_EXPONENT:
        return None
    return value


def format_amount(value: Decimal) -> str:
    """
    Render a decimal in minimal fixed-point form.

    "1234.50" -> "1234.5", "1e3" -> "1000", "0.00" -> "0"
    """
    if value.is_zero():
        return "0"
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def extract_row(row: List[str], row_index: int, layout: SheetLayout) -> RowOutcome:
    """
    Turn one trimmed sheet row into a record or a skip.

    Args:
        row: Row cells as text
        row_index: 0-based position of the row after trimming
        layout: Statement layout with column positions

    Returns:
        RowOutcome holding the record and its bucket, or the skip reason
    """
    if row_index == 0:
        return RowOutcome.skip("header row")
    if len(row) < layout.min_row_width:
        return RowOutcome.skip(f"short row ({len(row)} cells)")

    amount_text = clean_amount_text(row[layout.amount_column])
    if amount_text == "" or amount_text == layout.amount_header_token:
        return RowOutcome.skip("no amount")

    amount = parse_amount(amount_text)
    if amount is None:
        logger.warning(f"Error parsing amount: {amount_text!r} (row {row_index})")
        return RowOutcome.skip(f"unparsable amount {amount_text!r}")

    reference = row[layout.reference_column]
    memo = row[layout.memo_column]

    # Sign is read from the text, so "-0" is still a credit
    if amount_text.startswith("-"):
        record = OutputRecord(reference=reference, memo=memo, amount=format_amount(amount.copy_negate()))
        return RowOutcome.keep(record, Bucket.CREDIT)

    record = OutputRecord(reference=reference, memo=memo, amount=format_amount(amount))
    return RowOutcome.keep(record, Bucket.DEBIT)
