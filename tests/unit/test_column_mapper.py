from __future__ import annotations

import pytest

from tally_json.models.field_catalog import FIELD_CATALOG, FIELD_KEYS, TallyField, get_field
from tally_json.tally.column_mapper import (
    ColumnMapper,
    MappingError,
    apply_overrides,
    auto_map_columns,
)

TEMPLATE_HEADERS = [
    "Date", "Voucher No", "Party Name", "Party GST", "Stock Item", "Quantity",
    "Unit", "Rate", "Amount", "Godown", "Batch", "Narration",
]


def test_catalog_order_and_required_flags():
    assert FIELD_KEYS == (
        "date", "vouchernumber", "partyname", "partygstno", "stockitemname", "quantity",
        "unit", "rate", "amount", "godownname", "batchname", "narration",
    )
    required = {f.key for f in FIELD_CATALOG if f.required}
    assert required == {"date", "vouchernumber", "partyname", "stockitemname", "quantity", "rate", "amount"}


def test_get_field():
    assert get_field("amount").label == "Amount"
    with pytest.raises(KeyError):
        get_field("nope")


def test_header_contains_pattern():
    mapping = auto_map_columns(["Invoice Date", "Qty", "Rate", "Total"])
    assert mapping == {"date": 0, "vouchernumber": 0, "quantity": 1, "rate": 2, "amount": 3}
    assert "partyname" not in mapping


def test_pattern_contains_header():
    assert auto_map_columns(["Qt"]) == {"quantity": 0}


def test_matching_is_case_insensitive():
    assert auto_map_columns(["PARTY"]) == {"partyname": 0}


def test_blank_header_matches_every_field():
    assert auto_map_columns([""]) == {key: 0 for key in FIELD_KEYS}
    assert auto_map_columns([None]) == {key: 0 for key in FIELD_KEYS}


def test_columns_are_not_reserved():
    mapping = auto_map_columns(["Item Description", "Narration"])
    assert mapping["stockitemname"] == 0
    assert mapping["narration"] == 0


def test_first_matching_column_wins():
    # "Customer" appears later than "Name", column order decides
    assert auto_map_columns(["Name", "Customer"])["partyname"] == 0


def test_template_headers_map_to_own_columns_except_rate():
    mapping = auto_map_columns(TEMPLATE_HEADERS)
    expected = {key: i for i, key in enumerate(FIELD_KEYS)}
    # "unit price" contains "unit", so rate lands on the Unit column
    expected["rate"] = 6
    assert mapping == expected


def test_non_text_headers_are_stringified():
    assert auto_map_columns([2024, "qty"]) == {"quantity": 1}


def test_mapper_with_custom_catalog():
    catalog = (TallyField("amount", "Amount", True, ("sum",)),)
    assert ColumnMapper(catalog).map(["Date", "Sum Total"]) == {"amount": 1}


def test_empty_headers_give_empty_mapping():
    assert auto_map_columns([]) == {}


class TestApplyOverrides:
    headers = ["Date", "Customer", "Qty", "Price"]

    def test_index_override(self):
        out = apply_overrides({"partyname": 1}, {"partyname": 3}, self.headers)
        assert out == {"partyname": 3}

    def test_digit_string_override(self):
        assert apply_overrides({}, {"quantity": "2"}, self.headers) == {"quantity": 2}

    def test_header_name_override_is_case_insensitive(self):
        out = apply_overrides({}, {"partyname": "  customer "}, self.headers)
        assert out == {"partyname": 1}

    def test_negative_clears_field(self):
        base = {"date": 0, "vouchernumber": 0}
        assert apply_overrides(base, {"vouchernumber": -1}, self.headers) == {"date": 0}
        assert apply_overrides(base, {"vouchernumber": "-1"}, self.headers) == {"date": 0}

    def test_clearing_unmapped_field_is_noop(self):
        assert apply_overrides({"date": 0}, {"unit": -1}, self.headers) == {"date": 0}

    def test_returns_copy(self):
        base = {"date": 0}
        out = apply_overrides(base, {"date": 2}, self.headers)
        assert base == {"date": 0}
        assert out == {"date": 2}

    def test_no_overrides(self):
        base = {"date": 0}
        out = apply_overrides(base, None, self.headers)
        assert out == base and out is not base

    def test_unknown_field(self):
        with pytest.raises(MappingError, match="unknown field"):
            apply_overrides({}, {"customer": 1}, self.headers)

    def test_missing_header(self):
        with pytest.raises(MappingError, match="not found"):
            apply_overrides({}, {"partyname": "Client"}, self.headers)

    def test_index_out_of_range(self):
        with pytest.raises(MappingError, match="out of range"):
            apply_overrides({}, {"rate": 4}, self.headers)

    @pytest.mark.parametrize("target", [True, 1.5, None, "--1", "---3", "1-"])
    def test_invalid_target_type(self, target):
        with pytest.raises(MappingError):
            apply_overrides({}, {"rate": target}, self.headers)


@pytest.mark.parametrize(
    "headers",
    [TEMPLATE_HEADERS, ["Invoice Date", "Qty", "Rate", "Total"], ["", "x", None], ["Misc"] * 5],
)
def test_mapping_is_deterministic_and_in_range(headers):
    first = auto_map_columns(headers)
    assert first == auto_map_columns(headers)
    assert all(0 <= index < len(headers) for index in first.values())
