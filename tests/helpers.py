"""
Builders for synthetic statement rows and sheets.
"""
from typing import List, Sequence

WIDTH = 39
REFERENCE_COL = 0
MEMO_COL = 24
AMOUNT_COL = 37


def statement_row(reference: str, memo: str, amount, width: int = WIDTH) -> List:
    """Build a full-width data row with the balance column filled."""
    row = [""] * width
    row[REFERENCE_COL] = reference
    row[MEMO_COL] = memo
    row[AMOUNT_COL] = amount
    row[width - 1] = "BAL"
    return row


def statement_sheet(
    data_rows: Sequence[List],
    header_rows: int = 25,
    footer_rows: int = 14
) -> List[List]:
    """
    Wrap data rows in report boilerplate.

    The sheet is header_rows of title lines, one column header row,
    the data rows, then footer_rows of totals lines.
    """
    rows: List[List] = [[f"Report line {i + 1}"] for i in range(header_rows)]
    rows.append(statement_row("Reference", "Description", "Amount"))
    rows.extend(data_rows)
    rows.extend([f"Footer line {i + 1}"] for i in range(footer_rows))
    return rows
