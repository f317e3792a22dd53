"""
Statement cleaning service.
Runs every sheet of a workbook through trimming and row extraction.
"""
from typing import List, Optional, Tuple

from core.exceptions import EmptyResultError
from core.exporters import ledger_to_csv
from core.logger import setup_logger
from core.normalize import extract_row, trim_boilerplate
from core.parsing import SheetGrid, iter_sheets
from core.schema import Bucket, Ledger, OutputRecord, SheetLayout

logger = setup_logger(__name__)


class StatementService:
    """Service that splits a statement workbook into credits and debits."""

    def __init__(self, layout: Optional[SheetLayout] = None):
        """
        Initialize statement service.

        Args:
            layout: Statement layout; the default report layout if omitted
        """
        self.layout = layout or SheetLayout()

    def process_sheet(
        self,
        sheet: SheetGrid,
        credits: List[OutputRecord],
        debits: List[OutputRecord]
    ) -> None:
        """
        Trim one sheet and append its records to the running tables.

        Args:
            sheet: Sheet with merges already normalized
            credits: Credit records collected so far
            debits: Debit records collected so far
        """
        trim_boilerplate(sheet, self.layout)

        if not len(sheet):
            logger.info(f"No rows found in sheet {sheet.name}.")
            return

        counts = {Bucket.CREDIT: 0, Bucket.DEBIT: 0}
        skipped = 0
        for row_index, row in enumerate(sheet.rows):
            outcome = extract_row(row, row_index, self.layout)
            if outcome.skipped:
                skipped += 1
                logger.debug(f"Sheet {sheet.name} row {row_index} skipped: {outcome.skip_reason}")
                continue

            target = credits if outcome.bucket is Bucket.CREDIT else debits
            target.append(outcome.record)
            counts[outcome.bucket] += 1

        logger.info(
            f"Sheet {sheet.name}: {counts[Bucket.CREDIT]} credits, "
            f"{counts[Bucket.DEBIT]} debits, {skipped} rows skipped"
        )

    def transform(self, file_path: str) -> Ledger:
        """
        Clean a workbook into a ledger.

        Args:
            file_path: Path to .xlsx file

        Returns:
            Ledger with credits and debits across all sheets

        Raises:
            FormatError: If the workbook cannot be opened or restructured
        """
        logger.info(f"Cleaning statement workbook: {file_path}")

        credits: List[OutputRecord] = []
        debits: List[OutputRecord] = []
        for sheet in iter_sheets(file_path):
            self.process_sheet(sheet, credits, debits)

        ledger = Ledger(credits=tuple(credits), debits=tuple(debits))
        logger.info(f"Workbook total: {len(ledger.credits)} credits, {len(ledger.debits)} debits")
        return ledger

    def clean_file(self, file_path: str) -> Tuple[str, str]:
        """
        Clean a workbook and render both tables as CSV.

        Args:
            file_path: Path to .xlsx file

        Returns:
            Tuple of (credits_csv, debits_csv)

        Raises:
            FormatError: If the workbook cannot be opened or restructured
            EmptyResultError: If no record was extracted
        """
        ledger = self.transform(file_path)
        if ledger.is_empty:
            raise EmptyResultError(
                "No data processed from the file",
                details={"file_path": file_path}
            )
        return ledger_to_csv(ledger)
