"""
Workbook loading with merge normalization.
Turns every worksheet into a mutable grid of text rows.
"""
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Iterator, List, Optional

from openpyxl import load_workbook
from openpyxl.worksheet.worksheet import Worksheet

from core.exceptions import FormatError
from core.logger import setup_logger

logger = setup_logger(__name__)


def _percent_decimals(number_format: str) -> Optional[int]:
    """Decimal places of a percent format, None if the format is not a percentage."""
    section = number_format.split(";")[0]
    if "%" not in section:
        return None
    body = section.split("%")[0]
    if "." not in body:
        return 0
    return body.split(".", 1)[1].count("0")


def cell_to_text(value: Any, number_format: str = "General") -> str:
    """
    Render a cell value as plain text.

    Percent formats are applied ("0%" shows 0.05 as "5%"); other
    numbers are written without grouping or currency symbols.

    Args:
        value: Raw openpyxl cell value
        number_format: Excel number format of the cell

    Returns:
        Text form of the value, "" for empty cells
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (int, float)):
        decimals = _percent_decimals(number_format or "General")
        if decimals is not None:
            return f"{value * 100:.{decimals}f}%"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


class SheetGrid:
    """
    Rows of one worksheet as text, with positional row removal.

    Row numbers passed to ``remove_row`` are 1-indexed and refer to the
    live sequence: every removal shifts the following rows up by one.
    """

    def __init__(self, name: str, rows: List[List[str]]):
        self.name = name
        self.rows = rows

    def __len__(self) -> int:
        return len(self.rows)

    def remove_row(self, row_number: int) -> None:
        """
        Remove a row by its current 1-indexed position.

        Positions past the last row are ignored.

        Raises:
            FormatError: If row_number is below 1
        """
        if row_number < 1:
            raise FormatError(
                f"Invalid row number {row_number} in sheet {self.name}",
                details={"sheet": self.name, "row_number": row_number}
            )
        if row_number <= len(self.rows):
            del self.rows[row_number - 1]


def unmerge_all(worksheet: Worksheet) -> int:
    """
    Split every merged range so each cell is addressable on its own.

    The top-left cell keeps the value, the remaining cells become empty.

    Args:
        worksheet: Worksheet to modify in place

    Returns:
        Number of ranges unmerged
    """
    ranges = [str(cell_range) for cell_range in worksheet.merged_cells.ranges]
    for cell_range in ranges:
        worksheet.unmerge_cells(cell_range)
    return len(ranges)


def read_rows(worksheet: Worksheet) -> List[List[str]]:
    """
    Read a worksheet as rows of text.

    Each row ends at its last non-empty cell, so rows differ in length;
    a blank row inside the sheet is kept as an empty list.
    """
    rows = []
    for row in worksheet.iter_rows():
        texts = [cell_to_text(cell.value, cell.number_format) for cell in row]
        while texts and texts[-1] == "":
            texts.pop()
        rows.append(texts)
    return rows


def iter_sheets(file_path: str) -> Iterator[SheetGrid]:
    """
    Open a workbook and yield its sheets in workbook order.

    Args:
        file_path: Path to .xlsx file

    Yields:
        SheetGrid for each worksheet, merges already normalized

    Raises:
        FormatError: If the file is missing, not a workbook, or a sheet
            cannot be restructured
    """
    path = Path(file_path)
    if not path.exists():
        raise FormatError(
            f"File not found: {file_path}",
            details={"file_path": file_path}
        )

    try:
        # Formula cells carry their cached result
        workbook = load_workbook(file_path, data_only=True)
    except Exception as e:
        logger.error(f"Failed to open workbook {path.name}: {e}")
        raise FormatError(
            "Invalid workbook format",
            details={"file_path": file_path, "error": str(e)}
        )

    try:
        for worksheet in workbook.worksheets:
            try:
                merged = unmerge_all(worksheet)
                rows = read_rows(worksheet)
            except Exception as e:
                logger.error(f"Failed to read sheet {worksheet.title}: {e}")
                raise FormatError(
                    f"Unable to read sheet {worksheet.title}",
                    details={"file_path": file_path, "sheet": worksheet.title, "error": str(e)}
                )

            logger.debug(f"Sheet {worksheet.title}: {len(rows)} rows, {merged} merged ranges split")
            yield SheetGrid(worksheet.title, rows)
    finally:
        workbook.close()
