from __future__ import annotations

import logging
import sys
from collections.abc import Mapping, Sequence
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any, TextIO

from ..config.loader import ImportConfig
from ..excel.reader import SheetHeaderError, SheetReadError, read_sheet
from ..logging.error_log import ErrorLogBuffer
from ..models.conversion_file import ConversionFile, FileStatus
from ..models.document import OutputDocument
from ..models.field_catalog import FIELD_CATALOG
from ..models.processing_result import FileStat, ProcessingResult
from ..tally.column_mapper import ColumnMapper, ColumnMapping, MappingError, apply_overrides
from ..tally.dates import DateNormalizer
from ..tally.identifiers import IdentifierGenerator
from ..tally.voucher_builder import ConversionError, VoucherBuilder
from .progress import ConversionProgress

"""Service orchestration for the voucher converter.

Coordinates one run: find workbooks, convert each one independently, write
one JSON document per workbook, aggregate metrics. A workbook that fails does
not stop the others; its problem goes to the error log and the run result.
"""

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Fatal run-level error (bad source directory, invalid invocation)."""


def scan_excel_files(directory: Path) -> list[Path]:
    """Scan directory for .xlsx files (non-recursive, sorted by name).

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        return sorted(
            (p for p in directory.iterdir() if p.is_file() and p.suffix == ".xlsx"),
            key=lambda p: p.name,
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def output_path_for(source: Path, output_directory: Path, today: date | None = None) -> Path:
    """``<output>/tally_import_<stem>_<YYYY-MM-DD>.json`` (UTC date)."""
    day = today or datetime.now(UTC).date()
    return output_directory / f"tally_import_{source.stem}_{day.isoformat()}.json"


def write_document(document: OutputDocument, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(document.to_json() + "\n", encoding="utf-8")
    return path


def unmapped_required_fields(mapping: Mapping[str, int]) -> list[str]:
    return [f.key for f in FIELD_CATALOG if f.required and f.key not in mapping]


def resolve_mapping(
    headers: Sequence[Any],
    config_overrides: Mapping[str, Any] | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> ColumnMapping:
    """Auto mapping, then config overrides, then CLI overrides (last wins).

    Raises:
        MappingError: an override cannot be applied to these headers
    """
    mapping = ColumnMapper().map(headers)
    mapping = apply_overrides(mapping, config_overrides, headers)
    return apply_overrides(mapping, cli_overrides, headers)


def _failed(
    file_path: Path,
    start_time: datetime,
    error_log: ErrorLogBuffer,
    error_type: str,
    message: str,
    sheet_name: str | None = None,
    total_rows: int = 0,
    mapping: ColumnMapping | None = None,
) -> ConversionFile:
    error_log.add(file_path.name, error_type, message, sheet=sheet_name)
    logger.error("file=%s %s: %s", file_path.name, error_type, message)
    return ConversionFile(
        path=file_path,
        name=file_path.name,
        sheet_name=sheet_name,
        start_time=start_time,
        end_time=datetime.now(UTC),
        status=FileStatus.FAILED,
        total_rows=total_rows,
        mapping=mapping,
        error=message,
    )


def convert_file(
    file_path: Path,
    config: ImportConfig,
    error_log: ErrorLogBuffer,
    *,
    cli_overrides: Mapping[str, Any] | None = None,
    identifiers: IdentifierGenerator | None = None,
    stream: TextIO | None = None,
) -> ConversionFile:
    """Convert a single workbook.

    The JSON goes to ``stream`` when given, otherwise to the configured output
    directory. Returns the file's outcome; conversion problems are recorded in
    ``error_log`` rather than raised.
    """
    start_time = datetime.now(UTC)

    try:
        sheet = read_sheet(
            file_path, sheet_name=config.sheet_name, keep_na_strings=config.keep_na_strings
        )
    except SheetReadError as e:
        return _failed(file_path, start_time, error_log, "READ_ERROR", str(e))
    except SheetHeaderError as e:
        return _failed(file_path, start_time, error_log, "HEADER_ERROR", str(e), config.sheet_name)

    try:
        mapping = resolve_mapping(sheet.headers, config.column_overrides, cli_overrides)
    except MappingError as e:
        return _failed(
            file_path, start_time, error_log, "MAPPING_ERROR", str(e),
            sheet.sheet_name, total_rows=len(sheet.rows),
        )

    logger.debug("file=%s sheet=%s headers=%s mapping=%s", file_path.name, sheet.sheet_name, sheet.headers, mapping)
    missing = unmapped_required_fields(mapping)
    if missing:
        logger.warning(
            "file=%s unmapped required field(s): %s (defaults applied)", file_path.name, ", ".join(missing)
        )

    builder = VoucherBuilder(
        config.run,
        identifiers=identifiers,
        normalizer=DateNormalizer(config.tzinfo),
    )
    try:
        document = builder.build(sheet.rows, mapping)
    except ConversionError as e:
        return _failed(
            file_path, start_time, error_log, "CONVERSION_ERROR", str(e),
            sheet.sheet_name, total_rows=len(sheet.rows), mapping=mapping,
        )

    if len(document) == 0:
        logger.warning("file=%s sheet=%s produced no vouchers (no data rows)", file_path.name, sheet.sheet_name)
        return ConversionFile(
            path=file_path,
            name=file_path.name,
            sheet_name=sheet.sheet_name,
            start_time=start_time,
            end_time=datetime.now(UTC),
            status=FileStatus.EMPTY,
            total_rows=len(sheet.rows),
            mapping=mapping,
        )

    output_path: Path | None = None
    try:
        if stream is not None:
            stream.write(document.to_json() + "\n")
        else:
            output_path = write_document(
                document, output_path_for(file_path, Path(config.output_directory))
            )
    except OSError as e:
        return _failed(
            file_path, start_time, error_log, "WRITE_ERROR", str(e),
            sheet.sheet_name, total_rows=len(sheet.rows), mapping=mapping,
        )

    logger.info(
        "file=%s vouchers=%d type=%s output=%s",
        file_path.name,
        len(document),
        config.run.voucher_type.value,
        output_path if output_path is not None else "<stdout>",
    )
    return ConversionFile(
        path=file_path,
        name=file_path.name,
        sheet_name=sheet.sheet_name,
        start_time=start_time,
        end_time=datetime.now(UTC),
        status=FileStatus.SUCCESS,
        total_rows=len(sheet.rows),
        voucher_count=len(document),
        mapping=mapping,
        output_path=output_path,
    )


def process_all(
    config: ImportConfig,
    inputs: Sequence[Path] | None = None,
    *,
    cli_overrides: Mapping[str, Any] | None = None,
    to_stdout: bool = False,
    identifiers: IdentifierGenerator | None = None,
    error_log: ErrorLogBuffer | None = None,
) -> ProcessingResult:
    """Convert every workbook of the run.

    Args:
        config: Import configuration
        inputs: Explicit workbook paths; None scans ``config.source_directory``
        cli_overrides: Mapping overrides from the command line
        to_stdout: Write the JSON to stdout instead of files (single input only)
        identifiers: Identifier source shared by all files of the run

    Raises:
        ProcessingError: For fatal errors that prevent processing
    """
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer()

    if inputs is None:
        file_paths = scan_excel_files(Path(config.source_directory))
    else:
        file_paths = list(inputs)
    if to_stdout and len(file_paths) > 1:
        raise ProcessingError(f"--stdout needs exactly one input file (got {len(file_paths)})")

    file_stats: list[FileStat] = []
    stream = sys.stdout if to_stdout else None

    with ConversionProgress(file_paths, enabled=False if to_stdout else None) as progress:
        for file_path in progress:
            file_result = convert_file(
                file_path,
                config,
                error_log,
                cli_overrides=cli_overrides,
                identifiers=identifiers,
                stream=stream,
            )
            progress.record(file_result.status, file_result.voucher_count)

            elapsed = 0.0
            if file_result.start_time and file_result.end_time:
                elapsed = (file_result.end_time - file_result.start_time).total_seconds()
            file_stats.append(
                FileStat(
                    file_name=file_result.name,
                    status=file_result.status.value,
                    voucher_count=file_result.voucher_count,
                    elapsed_seconds=elapsed,
                    output_path=str(file_result.output_path) if file_result.output_path else None,
                )
            )

    log_path = error_log.flush()
    if log_path is not None:
        logger.info("error log written: %s", log_path)

    counts = progress.outcomes
    total_vouchers = progress.vouchers
    end_time = datetime.now(UTC)
    elapsed_seconds = (end_time - start_time).total_seconds()
    throughput = total_vouchers / elapsed_seconds if elapsed_seconds > 0 else 0.0

    return ProcessingResult(
        success_files=counts[FileStatus.SUCCESS],
        empty_files=counts[FileStatus.EMPTY],
        failed_files=counts[FileStatus.FAILED],
        total_vouchers=total_vouchers,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed_seconds,
        throughput_vouchers_per_sec=throughput,
        file_stats=file_stats,
    )
