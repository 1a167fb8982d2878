"""Spreadsheet ledger -> Tally voucher-import JSON converter."""

__version__ = "0.1.0"
