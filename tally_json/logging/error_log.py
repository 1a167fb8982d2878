from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import FILE_LEVEL_ROW, ErrorRecord

"""Run error log (JSON Lines).

Failed workbooks are collected while the run goes on and written in one go at
the end, to ``logs/errors-<run start, UTC>.log``. A clean run leaves no file
behind.
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

DEFAULT_LOGS_DIR = Path("./logs")


class ErrorLogBuffer:
    """Pending error records of one run.

    The file name is fixed at construction, so repeated flushes of the same
    run append to one file.
    """

    def __init__(self, logs_dir: Path | None = None, *, started: datetime | None = None) -> None:
        self.logs_dir = logs_dir if logs_dir is not None else DEFAULT_LOGS_DIR
        started = started or datetime.now(UTC)
        self.file_path = self.logs_dir / f"errors-{started:%Y%m%d-%H%M%S}.log"
        self._pending: list[ErrorRecord] = []

    def add(
        self, file: str, error_type: str, message: str, *, sheet: str | None = None
    ) -> ErrorRecord:
        """Record a file-level failure and return the record."""
        record = ErrorRecord.create(file, sheet, FILE_LEVEL_ROW, error_type, message)
        self._pending.append(record)
        return record

    def append(self, record: ErrorRecord) -> None:
        self._pending.append(record)

    @property
    def records(self) -> list[ErrorRecord]:
        return list(self._pending)

    def __len__(self) -> int:
        return len(self._pending)

    def flush(self) -> Path | None:
        """Write pending records; returns the log path, or None when nothing was pending."""
        if not self._pending:
            return None
        self.logs_dir.mkdir(parents=True, exist_ok=True)
        text = "".join(record.to_json_line() + "\n" for record in self._pending)
        with self.file_path.open("a", encoding="utf-8") as fh:
            fh.write(text)
        self._pending.clear()
        return self.file_path
