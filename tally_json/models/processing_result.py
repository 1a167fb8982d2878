from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Processing result models for the voucher converter.

ProcessingResult aggregates one run over several workbooks and feeds the
SUMMARY line; FileStat keeps the per-file detail.
"""


@dataclass(frozen=True)
class FileStat:
    """Per-file conversion statistics."""
    file_name: str  # ファイル名
    status: str  # success/empty/failed
    voucher_count: int  # 生成伝票数
    elapsed_seconds: float  # ファイル処理時間
    output_path: str | None = None  # 出力 JSON パス


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results and summary output for a conversion run."""
    success_files: int
    empty_files: int  # read fine, zero vouchers
    failed_files: int
    total_vouchers: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float  # end - start
    throughput_vouchers_per_sec: float  # total_vouchers / elapsed
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.empty_files + self.failed_files
