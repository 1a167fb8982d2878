from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""One line of the run's error log.

A workbook either converts as a whole or fails as a whole, so records name
the workbook and, where it got that far, the sheet that was read. ``row`` is
kept for the log's fixed shape; file-level failures carry ``FILE_LEVEL_ROW``.
Key set and formats are pinned by tally_json/contracts/error_log_schema.json.
"""

__all__ = [
    "ErrorRecord",
    "FILE_LEVEL_ROW",
    "FILE_LEVEL_SHEET",
]

FILE_LEVEL_ROW = -1
FILE_LEVEL_SHEET = "<FILE_LEVEL>"


def _utc_stamp() -> str:
    return datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


@dataclass(frozen=True)
class ErrorRecord:
    timestamp: str  # UTC, trailing "Z"
    file: str
    sheet: str
    row: int  # -1: whole file
    error_type: str  # READ_ERROR, MAPPING_ERROR, ...
    message: str

    @classmethod
    def create(
        cls,
        file: str,
        sheet: str | None = None,
        row: int = FILE_LEVEL_ROW,
        error_type: str = "READ_ERROR",
        message: str = "",
    ) -> ErrorRecord:
        """Stamp a record with the current time; ``sheet=None`` means file level."""
        return cls(_utc_stamp(), file, sheet or FILE_LEVEL_SHEET, row, error_type, message)

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
