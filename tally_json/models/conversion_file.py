from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

"""ConversionFile domain model and FileStatus enum.

ConversionFile is the processing context for one input workbook, tracking it
from discovery to one of three outcomes. EMPTY and FAILED are deliberately
separate: a workbook that was read fine but produced no vouchers is not the
same problem as a workbook that could not be read at all.
"""


class FileStatus(Enum):
    """Status enum for ConversionFile processing lifecycle.

    State transitions: pending → processing → (success | empty | failed)

    - PENDING: File discovered but not yet processed
    - PROCESSING: File is currently being converted
    - SUCCESS: Vouchers built and JSON written
    - EMPTY: File read, but zero voucher records resulted (nothing written)
    - FAILED: File could not be read, mapped or written
    """
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(frozen=True)
class ConversionFile:
    """Processing context and outcome for a single workbook."""
    path: Path                           # Full path to the workbook
    name: str                            # File name
    sheet_name: str | None = None        # Sheet actually read
    start_time: datetime | None = None   # Processing start (UTC)
    end_time: datetime | None = None     # Processing end (UTC)
    status: FileStatus = FileStatus.PENDING
    total_rows: int = 0                  # Data rows read (empty rows excluded)
    voucher_count: int = 0               # Voucher records written
    mapping: dict[str, int] | None = None  # Effective field -> column mapping
    output_path: Path | None = None      # JSON written (None for stdout / no output)
    error: str | None = None             # Failure reason summary
