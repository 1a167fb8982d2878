from __future__ import annotations

import sys
from collections import Counter
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

from ..models.conversion_file import FileStatus

"""Workbook progress bar (tqdm).

Shown only on an interactive terminal and drawn on stderr, so log lines, CI
output and ``--stdout`` JSON never contain control sequences.
"""

__all__ = [
    "ConversionProgress",
    "is_tty_enabled",
]

BAR_LABEL = "Converting"


def is_tty_enabled() -> bool:
    return sys.stderr.isatty()


class ConversionProgress:
    """Iterate over a run's workbooks while keeping a progress bar current.

    Iteration yields each workbook path, naming it in the bar while it is
    converted; ``record`` adds the workbook's outcome to the bar's counters.
    """

    def __init__(self, files: Sequence[Path], *, enabled: bool | None = None) -> None:
        self.files = list(files)
        self.enabled = is_tty_enabled() if enabled is None else enabled
        self.outcomes: Counter[FileStatus] = Counter()
        self.vouchers = 0
        self.pbar: TqdmType[Any] | None = None
        if self.enabled:
            self.pbar = tqdm(
                total=len(self.files),
                desc=BAR_LABEL,
                unit="wb",
                file=sys.stderr,
                leave=False,
                dynamic_ncols=True,
                ascii=True,
            )

    def __iter__(self) -> Iterator[Path]:
        for path in self.files:
            if self.pbar is not None:
                self.pbar.set_description_str(f"{BAR_LABEL} {path.name}")
            yield path
            if self.pbar is not None:
                self.pbar.update(1)

    def record(self, status: FileStatus, vouchers: int = 0) -> None:
        self.outcomes[status] += 1
        self.vouchers += vouchers
        if self.pbar is not None:
            self.pbar.set_postfix(
                ok=self.outcomes[FileStatus.SUCCESS],
                empty=self.outcomes[FileStatus.EMPTY],
                failed=self.outcomes[FileStatus.FAILED],
                vch=self.vouchers,
                refresh=False,
            )

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ConversionProgress:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
