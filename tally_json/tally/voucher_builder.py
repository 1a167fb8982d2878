from __future__ import annotations

import logging
import math
import numbers
import re
from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any

import pandas as pd

from ..models.document import OutputDocument
from ..models.run_config import RunConfiguration
from .dates import DateNormalizer
from .identifiers import IdentifierGenerator
from .voucher_template import (
    ACCOUNTING_ALLOCATION_TEMPLATE,
    ALTERID_BASE,
    BATCH_ALLOCATION_TEMPLATE,
    INVENTORY_ENTRY_TEMPLATE,
    LEDGER_ENTRY_TEMPLATE,
    MASTERID_BASE,
    OLD_AUDIT_ENTRY_IDS,
    VCHKEY_SUFFIX,
    VOUCHER_METADATA,
    VOUCHER_TEMPLATE,
    VOUCHERKEY_BASE,
    VOUCHERRETAINKEY_BASE,
)

"""Voucher builder: spreadsheet rows -> Tally voucher records.

One record per row, in row order. Every field is resolved through the column
mapping and falls back to a fixed default when unmapped or empty; malformed
numbers become 0 and malformed dates take the lossy text fallback, so a bad
cell never aborts the run. Only a wrongly shaped input (rows that are not
sequences, non-integer mapping values) raises.
"""

__all__ = [
    "ConversionError",
    "InputShapeError",
    "VoucherBuilder",
    "build_vouchers",
    "parse_number",
]

logger = logging.getLogger(__name__)

DEFAULT_PARTY_NAME = "Cash"
DEFAULT_STOCK_ITEM_NAME = "Default Item"
DEFAULT_UNIT = "Nos."
DEFAULT_BATCH_NAME = "Primary Batch"

# leading numeric prefix, the way lenient spreadsheet parsing reads "100 kg"
_NUMERIC_PREFIX = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class ConversionError(ValueError):
    """Base exception for conversion failures."""


class InputShapeError(ConversionError):
    """Raised when rows or mapping are not in the expected positional form."""


def _is_blank(value: Any) -> bool:
    if value is None or value is pd.NaT or value is pd.NA or value is False:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, (numbers.Real, Decimal)) and not isinstance(value, bool):
        return value == 0
    return value == ""


def _text(value: Any, default: str) -> str:
    if _is_blank(value):
        return default
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def parse_number(value: Any) -> float:
    """Parse a cell as float; anything unparsable or non-finite is 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (numbers.Real, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value)
        if match is None:
            return 0.0
        number = float(match.group(0))
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def _money(value: float) -> str:
    return f"{value:.2f}"


def _quantity(quantity: float, unit: str) -> str:
    return f" {quantity:.2f} {unit}"


def _audit_ids() -> list[Any]:
    head, tail = OLD_AUDIT_ENTRY_IDS
    return [dict(head), tail]


def _specialize(template: Mapping[str, Any], **values: Any) -> dict[str, Any]:
    unknown = values.keys() - template.keys()
    if unknown:
        raise KeyError(f"not in template: {sorted(unknown)}")
    record = dict(template)
    record.update(values)
    return record


def _insert_after(record: dict[str, Any], anchor: str, key: str, value: Any) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for k, v in record.items():
        out[k] = v
        if k == anchor:
            out[key] = value
    return out


def _check_shape(rows: Any, mapping: Any) -> None:
    if isinstance(rows, (str, bytes)) or not isinstance(rows, Sequence):
        raise InputShapeError(f"rows must be a sequence of rows, got {type(rows).__name__}")
    for index, row in enumerate(rows):
        if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
            raise InputShapeError(f"row {index} is not a sequence of cells: {type(row).__name__}")
    if not isinstance(mapping, Mapping):
        raise InputShapeError(f"mapping must be a mapping, got {type(mapping).__name__}")
    for key, index in mapping.items():
        if isinstance(index, bool) or not isinstance(index, int):
            raise InputShapeError(f"mapping for '{key}' must be a column index, got {index!r}")


class VoucherBuilder:
    """Build Tally voucher records for one run configuration."""

    def __init__(
        self,
        config: RunConfiguration,
        identifiers: IdentifierGenerator | None = None,
        normalizer: DateNormalizer | None = None,
    ) -> None:
        self.config = config
        self.identifiers = identifiers or IdentifierGenerator()
        self.normalizer = normalizer or DateNormalizer()

    def build(self, rows: Sequence[Sequence[Any]], mapping: Mapping[str, int]) -> OutputDocument:
        """Build one voucher per row.

        Raises:
            InputShapeError: rows or mapping not in positional form
        """
        _check_shape(rows, mapping)
        records = tuple(self.build_record(row, index, mapping) for index, row in enumerate(rows))
        logger.debug("built %d voucher(s) type=%s", len(records), self.config.voucher_type.value)
        return OutputDocument(tallymessage=records)

    def build_record(
        self, row: Sequence[Any], index: int, mapping: Mapping[str, int]
    ) -> dict[str, Any]:
        def cell(key: str) -> Any:
            column = mapping.get(key)
            if column is None or column < 0 or column >= len(row):
                return None
            return row[column]

        config = self.config
        voucher_type = config.voucher_type.value

        date = self.normalizer.normalize(cell("date"))
        voucher_number = _text(cell("vouchernumber"), f"VCH-{index + 1}")
        party_name = _text(cell("partyname"), DEFAULT_PARTY_NAME)
        stock_item_name = _text(cell("stockitemname"), DEFAULT_STOCK_ITEM_NAME)
        quantity = parse_number(cell("quantity"))
        unit = _text(cell("unit"), DEFAULT_UNIT)
        rate = parse_number(cell("rate"))
        amount = parse_number(cell("amount")) or quantity * rate
        godown_name = _text(cell("godownname"), config.default_godown_name)
        batch_name = _text(cell("batchname"), DEFAULT_BATCH_NAME)
        party_gst_no = _text(cell("partygstno"), "")
        narration = _text(cell("narration"), "")

        guid = self.identifiers.generate()
        remote_id = self.identifiers.remote_id(index + 1)

        item_amount = _money(amount)
        qty_text = _quantity(quantity, unit)

        batch_allocation = _specialize(
            BATCH_ALLOCATION_TEMPLATE,
            godownname=godown_name,
            batchname=batch_name,
            amount=item_amount,
            actualqty=qty_text,
            billedqty=qty_text,
        )
        accounting_allocation = _specialize(
            ACCOUNTING_ALLOCATION_TEMPLATE,
            oldauditentryids=_audit_ids(),
            ledgername=config.default_sales_ledger_name,
            amount=item_amount,
        )
        inventory_entry = _specialize(
            INVENTORY_ENTRY_TEMPLATE,
            stockitemname=stock_item_name,
            rate=f"{rate:.2f}/{unit}",
            amount=item_amount,
            actualqty=qty_text,
            billedqty=qty_text,
            batchallocations=[batch_allocation],
            accountingallocations=[accounting_allocation],
        )
        ledger_entry = _specialize(
            LEDGER_ENTRY_TEMPLATE,
            oldauditentryids=_audit_ids(),
            ledgername=party_name,
            amount=_money(-amount),
        )
        metadata = _specialize(
            VOUCHER_METADATA,
            remoteid=remote_id,
            vchkey=guid + VCHKEY_SUFFIX,
            vchtype=voucher_type,
        )
        voucher = _specialize(
            VOUCHER_TEMPLATE,
            metadata=metadata,
            oldauditentryids=_audit_ids(),
            date=date,
            vchstatusdate=date,
            guid=guid,
            vouchertypename=voucher_type,
            partyname=party_name,
            partyledgername=party_name,
            vouchernumber=voucher_number,
            basicbuyername=party_name,
            basicbasepartyname=party_name,
            vchstatusvouchertype=voucher_type,
            basicbuyerssalestaxno=party_gst_no,
            vouchertypeorigname=voucher_type,
            effectivedate=date,
            alterid=str(ALTERID_BASE + index),
            masterid=str(MASTERID_BASE + index),
            voucherkey=str(VOUCHERKEY_BASE + index),
            voucherretainkey=str(VOUCHERRETAINKEY_BASE + index),
            allinventoryentries=[inventory_entry],
            ledgerentries=[ledger_entry],
        )
        if narration:
            voucher = _insert_after(voucher, "vouchernumber", "narration", narration)
        return voucher


def build_vouchers(
    rows: Sequence[Sequence[Any]],
    mapping: Mapping[str, int],
    config: RunConfiguration,
    identifiers: IdentifierGenerator | None = None,
    normalizer: DateNormalizer | None = None,
) -> OutputDocument:
    """Convert rows to the Tally import document (see VoucherBuilder.build)."""
    return VoucherBuilder(config, identifiers=identifiers, normalizer=normalizer).build(rows, mapping)
