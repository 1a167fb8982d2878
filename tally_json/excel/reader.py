from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

"""Workbook reader and template writer.

先頭行をヘッダ行、2行目以降をデータ行として扱う。
全セルが空の行は除外する (変換対象外)。

Cells come back positionally (list per row) because the column mapping is
index based; NaN cells become ``None``.
"""

__all__ = [
    "SheetData",
    "SheetHeaderError",
    "SheetReadError",
    "read_sheet",
    "normalize_sheet",
    "write_template",
    "TEMPLATE_ROWS",
]


class SheetReadError(Exception):
    """Raised when a workbook cannot be opened or parsed."""


class SheetHeaderError(Exception):
    """Raised when the sheet has no header row."""


@dataclass
class SheetData:
    sheet_name: str
    headers: list[str]
    rows: list[list[Any]]  # 正規化済 (位置 -> 値)


TEMPLATE_ROWS: list[list[Any]] = [
    ["Date", "Voucher No", "Party Name", "Party GST", "Stock Item", "Quantity",
     "Unit", "Rate", "Amount", "Godown", "Batch", "Narration"],
    ["2025-01-15", "INV-001", "ABC Trading Co", "27AABCU9603R1ZM", "Product A", 100,
     "Nos", 50, 5000, "Main Godown", "Batch-001", "Sale of goods"],
    ["2025-01-15", "INV-002", "XYZ Enterprises", "27AABCU9603R1ZN", "Product B", 50,
     "Kgs", 120, 6000, "Warehouse 1", "Batch-002", "Sale of materials"],
]


def _na_options(keep_na_strings: list[str] | None) -> dict[str, Any]:
    # Pandas default NA values を取得し、keep_na_strings を除外
    if not keep_na_strings:
        return {"keep_default_na": True, "na_values": None}
    import pandas._libs.parsers as parsers

    custom_na = parsers.STR_NA_VALUES - set(keep_na_strings)
    return {"keep_default_na": False, "na_values": list(custom_na)}


def read_raw_sheet(
    path: Path, sheet_name: str | None = None, keep_na_strings: list[str] | None = None
) -> tuple[str, pd.DataFrame]:
    """Read one sheet (first by default) without header interpretation.

    Raises:
        SheetReadError: file missing, not a workbook, or sheet not present
    """
    try:
        xls = pd.ExcelFile(path)
    except Exception as e:  # OSError / ValueError / zipfile.BadZipFile on corrupt files
        raise SheetReadError(f"cannot open workbook '{path}': {e}") from e
    with xls:
        names = [str(n) for n in xls.sheet_names]
        if not names:
            raise SheetReadError(f"workbook '{path}' has no sheets")
        target = names[0] if sheet_name is None else sheet_name
        if target not in names:
            raise SheetReadError(f"sheet '{target}' not found in '{path}' (sheets={names})")
        try:
            df = xls.parse(target, header=None, **_na_options(keep_na_strings))
        except Exception as e:
            raise SheetReadError(f"cannot parse sheet '{target}' of '{path}': {e}") from e
    return target, df


def _cell(value: Any) -> Any:
    if pd.isna(value):
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    return value


def _is_empty_row(row: list[Any]) -> bool:
    return all(v is None or v == "" for v in row)


def normalize_sheet(df: pd.DataFrame, sheet_name: str) -> SheetData:
    """Split a raw DataFrame into trimmed headers and non-empty data rows.

    Raises:
        SheetHeaderError: the sheet has no rows at all
    """
    if df.shape[0] < 1:
        raise SheetHeaderError(f"sheet '{sheet_name}' has no header row")
    headers = [
        "" if pd.isna(h) else str(h).strip()
        for h in df.iloc[0].tolist()
    ]
    rows: list[list[Any]] = []
    for raw in df.iloc[1:].itertuples(index=False, name=None):
        row = [_cell(v) for v in raw]
        if _is_empty_row(row):
            continue
        rows.append(row)
    return SheetData(sheet_name=sheet_name, headers=headers, rows=rows)


def read_sheet(
    path: Path, sheet_name: str | None = None, keep_na_strings: list[str] | None = None
) -> SheetData:
    """Read a workbook sheet into headers + positional rows."""
    name, df = read_raw_sheet(path, sheet_name=sheet_name, keep_na_strings=keep_na_strings)
    return normalize_sheet(df, name)


def write_template(path: Path) -> Path:
    """Write the example import workbook (sheet ``Template``)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame(TEMPLATE_ROWS).to_excel(writer, sheet_name="Template", header=False, index=False)
    return path
