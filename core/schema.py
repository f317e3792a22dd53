"""
Pydantic models for the statement layout and the cleaned ledger.
"""
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Bucket(str, Enum):
    """Output table a record belongs to."""
    CREDIT = "credit"
    DEBIT = "debit"


class SheetLayout(BaseModel):
    """
    Fixed positions of the statement report.

    Rows are counted from 1 for trimming, columns from 0 for extraction.
    """
    model_config = ConfigDict(frozen=True)

    header_rows: int = Field(default=25, ge=0, description="Boilerplate rows dropped from the top")
    footer_rows: int = Field(default=14, ge=0, description="Boilerplate rows dropped from the bottom")
    reference_column: int = Field(default=0, ge=0)
    memo_column: int = Field(default=24, ge=0)
    amount_column: int = Field(default=37, ge=0)
    min_row_width: int = Field(default=39, ge=1, description="Rows with fewer cells are skipped")
    amount_header_token: str = Field(default="Amount", description="Amount cell text of a repeated header row")

    @model_validator(mode="after")
    def validate_width_covers_columns(self):
        """Every extracted column must be readable once a row passes the width guard."""
        widest = max(self.reference_column, self.memo_column, self.amount_column)
        if self.min_row_width <= widest:
            raise ValueError(
                f"min_row_width ({self.min_row_width}) must exceed the highest "
                f"extracted column index ({widest})"
            )
        return self


class OutputRecord(BaseModel):
    """One cleaned statement line: reference, memo and a non-negative amount."""
    model_config = ConfigDict(frozen=True)

    reference: str
    memo: str
    amount: str

    def as_row(self) -> Tuple[str, str, str]:
        return (self.reference, self.memo, self.amount)


class RowOutcome(BaseModel):
    """
    Result of extracting a single row.

    Exactly one of ``record`` (with its ``bucket``) or ``skip_reason`` is set.
    """
    model_config = ConfigDict(frozen=True)

    record: Optional[OutputRecord] = None
    bucket: Optional[Bucket] = None
    skip_reason: Optional[str] = None

    @classmethod
    def skip(cls, reason: str) -> "RowOutcome":
        return cls(skip_reason=reason)

    @classmethod
    def keep(cls, record: OutputRecord, bucket: Bucket) -> "RowOutcome":
        return cls(record=record, bucket=bucket)

    @property
    def skipped(self) -> bool:
        return self.record is None


class Ledger(BaseModel):
    """Credits and debits extracted from one workbook, in sheet row order."""
    model_config = ConfigDict(frozen=True)

    credits: Tuple[OutputRecord, ...] = ()
    debits: Tuple[OutputRecord, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.credits and not self.debits
