from __future__ import annotations

import json
from pathlib import Path

import jsonschema
import pytest

import tally_json
from tally_json.models.field_catalog import FIELD_KEYS
from tally_json.models.run_config import VoucherType

"""Config JSON schema contract test."""

SCHEMA_PATH = Path(tally_json.__file__).resolve().parent / "contracts" / "config_schema.json"


@pytest.fixture(scope="module")
def schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def test_minimal_config_valid(schema):
    jsonschema.validate({"source_directory": "./data"}, schema)


def test_full_config_valid(schema):
    jsonschema.validate(
        {
            "source_directory": "./data",
            "output_directory": "./output",
            "voucher_type": "Debit Note",
            "default_godown_name": "Main Location",
            "default_sales_ledger_name": "Sales",
            "sheet_name": None,
            "timezone": "Asia/Kolkata",
            "keep_na_strings": ["NA", "N/A"],
            "column_overrides": {"partyname": "Customer", "rate": 7, "unit": -1},
        },
        schema,
    )


def test_schema_voucher_types_match_enum(schema):
    assert schema["properties"]["voucher_type"]["enum"] == [v.value for v in VoucherType]


def test_schema_override_fields_match_catalog(schema):
    assert schema["properties"]["column_overrides"]["propertyNames"]["enum"] == list(FIELD_KEYS)


@pytest.mark.parametrize(
    "config",
    [
        {},
        {"source_directory": ""},
        {"source_directory": "./data", "voucher_type": "Invoice"},
        {"source_directory": "./data", "column_overrides": {"customer": 1}},
        {"source_directory": "./data", "column_overrides": {"rate": 1.5}},
        {"source_directory": "./data", "keep_na_strings": "NA"},
        {"source_directory": "./data", "database": {"host": "x"}},
    ],
)
def test_invalid_configs_rejected(schema, config):
    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate(config, schema)
