# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path

import pandas as pd
import pytest

from tally_json.logging.init import reset_logging


TEMPLATE_HEADERS = [
    "Date", "Voucher No", "Party Name", "Party GST", "Stock Item", "Quantity",
    "Unit", "Rate", "Amount", "Godown", "Batch", "Narration",
]


def make_workbook(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
    """Create a real .xlsx file; each sheet is written without pandas header/index."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for sheet, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
    return path


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        for var in ("TALLY_JSON_CONFIG", "TALLY_VOUCHER_TYPE", "TALLY_DEFAULT_GODOWN", "TALLY_SALES_LEDGER"):
            monkeypatch.delenv(var, raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
output_directory: ./output
voucher_type: Sales
default_godown_name: Main Location
default_sales_ledger_name: Sales
timezone: UTC
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def ledger_rows() -> list[list[object]]:
    return [
        TEMPLATE_HEADERS,
        ["2025-01-15", "INV-001", "ABC Trading Co", "27AABCU9603R1ZM", "Product A", 100,
         "Nos", 50, 5000, "Main Godown", "Batch-001", "Sale of goods"],
        ["2025-01-16", "INV-002", "XYZ Enterprises", "27AABCU9603R1ZN", "Product B", 50,
         "Kgs", 120, 6000, "Warehouse 1", "Batch-002", "Sale of materials"],
    ]


@pytest.fixture()
def workbook_factory(temp_workdir: Path) -> Callable[..., Path]:
    def _make(name: str, rows: list[list[object]], sheet: str = "Sheet1") -> Path:
        return make_workbook(temp_workdir / "data" / name, {sheet: rows})
    return _make


@pytest.fixture()
def clean_logging():
    reset_logging()
    yield
    reset_logging()
