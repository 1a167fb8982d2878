from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from ..config.loader import ConfigError, ImportConfig, load_config, resolve_config_path
from ..excel.reader import SheetHeaderError, SheetReadError, read_sheet, write_template
from ..logging.init import log_summary, redirect, set_debug, setup_logging
from ..models.field_catalog import FIELD_CATALOG, FIELD_KEYS
from ..models.run_config import VoucherType
from ..services.orchestrator import (
    ProcessingError,
    process_all,
    resolve_mapping,
    scan_excel_files,
)
from ..services.summary import render_summary_line
from ..tally.column_mapper import MappingError

"""CLI entrypoint.

Flow:
- Load .env, then config (YAML + schema + env overrides)
- Collect workbooks (positional paths, or scan source_directory for .xlsx)
- Convert each workbook to a Tally import JSON, print SUMMARY

Exit codes: 0 every file success/empty, 2 any file failed, 1 fatal.
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

SAMPLE_ROWS = 3


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv.

    override=True により .env の値で既存環境変数を上書きする。
    """
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="tally-json", description="Spreadsheet ledger -> Tally voucher import JSON"
    )
    p.add_argument("inputs", nargs="*", help="Workbooks to convert (default: scan source_directory)")
    p.add_argument("--config", help="Config file (default: $TALLY_JSON_CONFIG or config/import.yml)")
    p.add_argument(
        "--map",
        action="append",
        default=[],
        metavar="FIELD=COLUMN",
        help="Override a field mapping with a column index or header name; -1 clears it",
    )
    p.add_argument(
        "--voucher-type", choices=[v.value for v in VoucherType], help="Voucher type for this run"
    )
    p.add_argument("--stdout", action="store_true", help="Write the JSON to stdout (single input)")
    p.add_argument(
        "--inspect-data", action="store_true", help="Print headers, suggested mapping & first rows then exit"
    )
    p.add_argument("--template", metavar="PATH", help="Write an example import workbook and exit")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _parse_map_args(items: list[str]) -> dict[str, Any]:
    """``["partyname=Customer", "unit=-1"]`` -> ``{"partyname": "Customer", "unit": "-1"}``."""
    overrides: dict[str, Any] = {}
    for item in items:
        key, sep, value = item.partition("=")
        key = key.strip().lower()
        if not sep or not key or not value.strip():
            raise MappingError(f"invalid --map '{item}' (expected FIELD=COLUMN)")
        if key not in FIELD_KEYS:
            raise MappingError(f"unknown field '{key}' (known: {', '.join(FIELD_KEYS)})")
        overrides[key] = value.strip()
    return overrides


def _display(value: Any) -> Any:
    return value.isoformat() if hasattr(value, "isoformat") else value


def _inspect_data(cfg: ImportConfig, inputs: list[Path] | None, cli_overrides: dict[str, Any]) -> int:
    files = inputs if inputs is not None else scan_excel_files(Path(cfg.source_directory))
    if not files:
        print("inspect: no .xlsx files")
        return EXIT_SUCCESS_ALL
    for f in files:
        print(f"FILE: {f.name}")
        try:
            sheet = read_sheet(f, sheet_name=cfg.sheet_name, keep_na_strings=cfg.keep_na_strings)
        except (SheetReadError, SheetHeaderError) as e:
            print(f"  read_error: {e}")
            continue
        print(f"  SHEET: {sheet.sheet_name} rows={len(sheet.rows)} cols={sheet.headers}")
        try:
            mapping = resolve_mapping(sheet.headers, cfg.column_overrides, cli_overrides)
        except MappingError as e:
            print(f"  mapping_error: {e}")
            continue
        for field in FIELD_CATALOG:
            label = f"{field.label}{'*' if field.required else ''}"
            index = mapping.get(field.key)
            if index is None:
                print(f"    {field.key:<14} {label:<12} -> (default)")
            else:
                print(f"    {field.key:<14} {label:<12} -> [{index}] {sheet.headers[index]}")
        sample = [[_display(v) for v in row] for row in sheet.rows[:SAMPLE_ROWS]]
        print("    sample_rows=", sample)
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む (テストで [] を渡すケース)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.stdout:
        # JSON owns stdout; log lines move to stderr
        redirect(sys.stderr)
    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    if args.template:
        path = write_template(Path(args.template))
        logger.info(f"template written: {path}")
        return EXIT_SUCCESS_ALL

    _load_env_file(Path(".env"), override=True)
    try:
        cfg = load_config(resolve_config_path(args.config))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    if args.voucher_type:
        cfg = replace(cfg, run=replace(cfg.run, voucher_type=VoucherType(args.voucher_type)))

    try:
        cli_overrides = _parse_map_args(args.map)
    except MappingError as e:
        logger.error(f"mapping: {e}")
        return EXIT_FATAL

    inputs = [Path(p) for p in args.inputs] or None
    if inputs is None:
        directory = Path(cfg.source_directory)
        if not directory.exists():
            logger.error(f"directory not found: {directory}")
            return EXIT_FATAL
        logger.info(f"Processing files from: {directory}")

    if args.inspect_data:
        return _inspect_data(cfg, inputs, cli_overrides)

    try:
        result = process_all(cfg, inputs, cli_overrides=cli_overrides, to_stdout=args.stdout)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    summary_line = render_summary_line(result)
    log_summary(summary_line[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
