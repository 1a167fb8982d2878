"""Converter core: column mapping, date/identifier helpers and voucher building.

Everything here is pure and synchronous; reading workbooks and writing JSON
live in ``tally_json.excel`` and ``tally_json.services``.
"""

from .column_mapper import ColumnMapper, ColumnMapping, MappingError, apply_overrides, auto_map_columns
from .dates import DateNormalizer, format_tally_date
from .identifiers import IdentifierGenerator, generate_guid
from .voucher_builder import (
    ConversionError,
    InputShapeError,
    VoucherBuilder,
    build_vouchers,
    parse_number,
)

__all__ = [
    "ColumnMapper",
    "ColumnMapping",
    "MappingError",
    "apply_overrides",
    "auto_map_columns",
    "DateNormalizer",
    "format_tally_date",
    "IdentifierGenerator",
    "generate_guid",
    "ConversionError",
    "InputShapeError",
    "VoucherBuilder",
    "build_vouchers",
    "parse_number",
]
