"""Domain models for the spreadsheet -> Tally voucher JSON converter.

This package contains the configuration, catalog, document and processing
result classes shared by the converter core, the orchestrator and the CLI.
"""

from .conversion_file import ConversionFile, FileStatus
from .document import OutputDocument
from .error_record import ErrorRecord
from .field_catalog import FIELD_CATALOG, FIELD_KEYS, TallyField, get_field
from .processing_result import FileStat, ProcessingResult
from .run_config import RunConfiguration, VoucherType

__all__ = [
    # Configuration models
    "RunConfiguration",
    "VoucherType",
    # Mapping catalog
    "FIELD_CATALOG",
    "FIELD_KEYS",
    "TallyField",
    "get_field",
    # Output
    "OutputDocument",
    # Processing models
    "ConversionFile",
    "FileStatus",
    "FileStat",
    "ProcessingResult",
    "ErrorRecord",
]
