from __future__ import annotations

from dataclasses import dataclass

"""Field catalog for spreadsheet -> Tally column mapping.

The catalog is an explicitly ordered tuple: field order decides which field
claims a header first, and the auto mapper walks it front to back. Pattern
order inside a field is kept as listed even though matching only asks whether
any pattern hits.
"""

__all__ = [
    "TallyField",
    "FIELD_CATALOG",
    "FIELD_KEYS",
    "get_field",
]


@dataclass(frozen=True)
class TallyField:
    """One logical accounting field that a spreadsheet column can feed."""
    key: str  # mapping key (lower-case, no spaces)
    label: str  # human label shown when reviewing a mapping
    required: bool  # warn when left unmapped
    patterns: tuple[str, ...]  # lower-case substrings for header matching


FIELD_CATALOG: tuple[TallyField, ...] = (
    TallyField("date", "Date", True,
               ("date", "dt", "voucher date", "invoice date", "bill date")),
    TallyField("vouchernumber", "Voucher No", True,
               ("voucher", "invoice", "bill", "number", "no", "vch no", "inv no", "vch")),
    TallyField("partyname", "Party Name", True,
               ("party", "customer", "vendor", "supplier", "buyer", "name", "ledger", "account")),
    TallyField("partygstno", "Party GST", False,
               ("gst", "gstin", "gst no", "tax no")),
    TallyField("stockitemname", "Stock Item", True,
               ("item", "stock", "product", "goods", "material", "description", "particular")),
    TallyField("quantity", "Quantity", True,
               ("qty", "quantity", "units", "nos", "pcs")),
    TallyField("unit", "Unit", False,
               ("unit", "uom", "measure")),
    TallyField("rate", "Rate", True,
               ("rate", "price", "unit price", "mrp", "per")),
    TallyField("amount", "Amount", True,
               ("amount", "value", "total", "net amount", "net")),
    TallyField("godownname", "Godown", False,
               ("godown", "warehouse", "location", "store")),
    TallyField("batchname", "Batch", False,
               ("batch", "lot", "batch no")),
    TallyField("narration", "Narration", False,
               ("narration", "remarks", "description", "notes", "comment")),
)

FIELD_KEYS: tuple[str, ...] = tuple(f.key for f in FIELD_CATALOG)


def get_field(key: str) -> TallyField:
    """Look up a catalog entry by key.

    Raises:
        KeyError: if ``key`` is not a catalog field
    """
    for field in FIELD_CATALOG:
        if field.key == key:
            return field
    raise KeyError(key)
