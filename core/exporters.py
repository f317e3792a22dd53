"""
CSV and zip exporters for the cleaned ledger.
"""
import io
import zipfile
from typing import Sequence, Tuple

import pandas as pd

from core.exceptions import ExportError
from core.logger import setup_logger
from core.schema import Ledger, OutputRecord

logger = setup_logger(__name__)

CREDITS_FILENAME = "credits.csv"
DEBITS_FILENAME = "debits.csv"
ARCHIVE_FILENAME = "processed_files.zip"

_COLUMNS = ["reference", "memo", "amount"]


def records_to_csv(records: Sequence[OutputRecord]) -> str:
    """
    Render records as headerless CSV text, one line per record.

    Args:
        records: Records in output order

    Returns:
        CSV text with "\\n" line endings, "" when there are no records
    """
    if not records:
        return ""

    df = pd.DataFrame([record.as_row() for record in records], columns=_COLUMNS, dtype=object)
    return df.to_csv(index=False, header=False, lineterminator="\n")


def ledger_to_csv(ledger: Ledger) -> Tuple[str, str]:
    """
    Render both sides of a ledger.

    Returns:
        Tuple of (credits_csv, debits_csv)
    """
    return records_to_csv(ledger.credits), records_to_csv(ledger.debits)


def build_archive(credits_csv: str, debits_csv: str) -> bytes:
    """
    Package the two CSV texts into an in-memory zip archive.

    Both members are always written, even when empty.

    Args:
        credits_csv: Credits table
        debits_csv: Debits table

    Returns:
        Zip archive bytes

    Raises:
        ExportError: If the archive cannot be written
    """
    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(buffer, mode="w", compression=zipfile.ZIP_DEFLATED) as archive:
            archive.writestr(CREDITS_FILENAME, credits_csv.encode("utf-8"))
            archive.writestr(DEBITS_FILENAME, debits_csv.encode("utf-8"))
    except Exception as e:
        logger.error(f"Failed to build archive: {e}")
        raise ExportError(
            str(e),
            details={"error": str(e)}
        )

    return buffer.getvalue()
