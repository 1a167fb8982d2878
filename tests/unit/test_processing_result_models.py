from __future__ import annotations

import json
from dataclasses import FrozenInstanceError
from datetime import UTC, datetime
from pathlib import Path

import pytest

from tally_json.models import (
    ConversionFile,
    FileStat,
    FileStatus,
    OutputDocument,
    ProcessingResult,
    RunConfiguration,
    VoucherType,
)


def test_file_status_values():
    assert [s.value for s in FileStatus] == ["pending", "processing", "success", "empty", "failed"]


def test_conversion_file_defaults():
    cf = ConversionFile(path=Path("data/a.xlsx"), name="a.xlsx")
    assert cf.status is FileStatus.PENDING
    assert cf.voucher_count == 0
    assert cf.output_path is None
    with pytest.raises(FrozenInstanceError):
        cf.status = FileStatus.SUCCESS  # type: ignore[misc]


def test_processing_result_totals():
    now = datetime.now(UTC)
    result = ProcessingResult(
        success_files=3,
        empty_files=1,
        failed_files=2,
        total_vouchers=120,
        start_time=now,
        end_time=now,
        elapsed_seconds=1.5,
        throughput_vouchers_per_sec=80.0,
        file_stats=[FileStat("a.xlsx", "success", 120, 1.2, "output/a.json")],
    )
    assert result.total_files == 6
    assert result.file_stats[0].output_path == "output/a.json"


def test_run_configuration_defaults():
    run = RunConfiguration()
    assert run.voucher_type is VoucherType.SALES
    assert run.default_godown_name == "Main Location"
    assert run.default_sales_ledger_name == "Sales"


def test_output_document_json():
    doc = OutputDocument(tallymessage=({"partyname": "Café"},))
    assert len(doc) == 1
    assert doc.to_dict() == {"tallymessage": [{"partyname": "Café"}]}
    assert json.loads(doc.to_json()) == doc.to_dict()
    assert "Café" in doc.to_json()
    assert "\n" not in doc.to_json(indent=None)
