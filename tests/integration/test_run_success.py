from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

import pandas as pd
import pytest

from tally_json.cli import main as cli_main

"""Integration test: successful multi-file run through the CLI.

Real workbooks in, Tally import JSON files out; SUMMARY counts must agree with
the documents written.
"""


def _make_excel_file(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
    """Create a real Excel file with one or more sheets."""
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for sheet_name, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    return path


@pytest.fixture
def two_workbooks(temp_workdir: Path, write_config: Any) -> dict[str, Path]:
    data_dir = temp_workdir / "data"
    sales = _make_excel_file(data_dir / "january.xlsx", {
        "Sales": [
            ["Date", "Bill No", "Customer", "GSTIN", "Product", "Qty", "UOM", "Rate", "Total"],
            [45672, "S-1", "Acme Ltd", "27AAACA1234A1Z5", "Widget", 10, "Pcs", 25, 250],
            [45673, "S-2", "Beta Co", None, "Gadget", 4, "Box", 12.5, None],
            [None, None, None, None, None, None, None, None, None],
            [45674, "S-3", "Gamma", None, "Widget", 1, "Pcs", 25, 25],
        ],
        "Notes": [["ignored"], ["sheet"]],
    })
    returns = _make_excel_file(data_dir / "february.xlsx", {
        "Sheet1": [
            ["Date", "Voucher No", "Party Name", "Stock Item", "Quantity", "Amount", "Narration"],
            ["2025-02-01", "R-1", "Acme Ltd", "Widget", 2, 50, "damaged"],
        ],
    })
    return {"sales": sales, "returns": returns}


def _documents(temp_workdir: Path) -> dict[str, dict]:
    out = {}
    for path in (temp_workdir / "output").glob("tally_import_*.json"):
        stem = re.match(r"tally_import_(.+)_\d{4}-\d{2}-\d{2}\.json", path.name).group(1)
        out[stem] = json.loads(path.read_text(encoding="utf-8"))
    return out


def test_multi_file_run(two_workbooks, temp_workdir: Path, capsys, clean_logging):
    code = cli_main([])
    out = capsys.readouterr().out

    assert code == 0
    assert "SUMMARY files=2/2 success=2 empty=0 failed=0 vouchers=4" in out
    docs = _documents(temp_workdir)
    assert set(docs) == {"january", "february"}

    jan = docs["january"]["tallymessage"]
    assert [r["vouchernumber"] for r in jan] == ["S-1", "S-2", "S-3"]
    assert [r["date"] for r in jan] == ["20250115", "20250116", "20250117"]
    assert jan[0]["partyname"] == "Acme Ltd"
    assert jan[0]["basicbuyerssalestaxno"] == "27AAACA1234A1Z5"
    assert jan[1]["basicbuyerssalestaxno"] == ""
    inv = jan[1]["allinventoryentries"][0]
    assert inv["stockitemname"] == "Gadget"
    assert inv["amount"] == "50.00"
    assert inv["actualqty"] == " 4.00 Box"
    assert jan[2]["alterid"] == "12319"

    feb = docs["february"]["tallymessage"]
    assert feb[0]["narration"] == "damaged"
    assert feb[0]["date"] == "20250201"
    # unmapped rate column falls back to 0
    assert feb[0]["allinventoryentries"][0]["rate"] == "0.00/Nos."
    assert not list((temp_workdir / "logs").glob("errors-*.log"))


def test_guids_unique_across_files(two_workbooks, temp_workdir: Path, capsys, clean_logging):
    assert cli_main([]) == 0
    guids = [
        rec["guid"]
        for doc in _documents(temp_workdir).values()
        for rec in doc["tallymessage"]
    ]
    assert len(guids) == len(set(guids)) == 4


def test_named_sheet_from_config(two_workbooks, temp_workdir: Path, capsys, clean_logging):
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(cfg.read_text(encoding="utf-8") + "sheet_name: Sales\n", encoding="utf-8")
    code = cli_main([])
    out = capsys.readouterr().out
    # february.xlsx has no "Sales" sheet
    assert code == 2
    assert "success=1 empty=0 failed=1" in out
