from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering for a conversion run."""


def _format_number(value: float) -> str:
    # integers without decimals, tiny values without scientific notation
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(value)


def render_summary_line(result: ProcessingResult) -> str:
    """Render the SUMMARY line.

    Format:
    SUMMARY files={total}/{total} success={s} empty={e} failed={f}
    vouchers={v} elapsed_sec={t} throughput_vps={r}

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2025, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2025, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = ProcessingResult(
        ...     success_files=1, empty_files=0, failed_files=0, total_vouchers=1000,
        ...     start_time=start, end_time=end,
        ...     elapsed_seconds=2.0, throughput_vouchers_per_sec=500.0
        ... )
        >>> render_summary_line(result)
        'SUMMARY files=1/1 success=1 empty=0 failed=0 vouchers=1000 elapsed_sec=2 throughput_vps=500'
    """
    total = result.total_files
    return (
        f"SUMMARY files={total}/{total} "
        f"success={result.success_files} "
        f"empty={result.empty_files} "
        f"failed={result.failed_files} "
        f"vouchers={result.total_vouchers} "
        f"elapsed_sec={_format_number(result.elapsed_seconds)} "
        f"throughput_vps={_format_number(result.throughput_vouchers_per_sec)}"
    )
