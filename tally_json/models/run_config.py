from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Run configuration models for the Tally voucher converter.

RunConfiguration carries the per-run choices that are not derived from the
spreadsheet: which voucher type to emit and which godown / sales ledger to
fall back on when the sheet does not name one.
"""

__all__ = [
    "VoucherType",
    "RunConfiguration",
    "DEFAULT_GODOWN_NAME",
    "DEFAULT_SALES_LEDGER_NAME",
]

DEFAULT_GODOWN_NAME = "Main Location"
DEFAULT_SALES_LEDGER_NAME = "Sales"


class VoucherType(Enum):
    """Voucher types accepted by the Tally import template.

    The value is the literal written into ``vouchertypename`` and the other
    voucher-type slots of each record.
    """
    SALES = "Sales"
    SALES_BUSY = "Sales Busy"
    PURCHASE = "Purchase"
    PURCHASE_BUSY = "Purchase Busy"
    RECEIPT = "Receipt"
    PAYMENT = "Payment"
    JOURNAL = "Journal"
    CONTRA = "Contra"
    CREDIT_NOTE = "Credit Note"
    DEBIT_NOTE = "Debit Note"

    @classmethod
    def parse(cls, text: str) -> VoucherType:
        """Resolve a voucher type from its display value (case-insensitive).

        Raises:
            ValueError: if ``text`` names no known voucher type
        """
        wanted = text.strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        allowed = ", ".join(m.value for m in cls)
        raise ValueError(f"unknown voucher type '{text}' (allowed: {allowed})")


@dataclass(frozen=True)
class RunConfiguration:
    """Options applied to every voucher of one conversion run."""
    voucher_type: VoucherType = VoucherType.SALES
    default_godown_name: str = DEFAULT_GODOWN_NAME  # used when no godown column/cell
    default_sales_ledger_name: str = DEFAULT_SALES_LEDGER_NAME  # accounting allocation ledger
