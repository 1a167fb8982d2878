from __future__ import annotations

import math
import numbers
import re
from datetime import date, datetime, tzinfo
from decimal import Decimal
from typing import Any

import pandas as pd

"""Date normalization to Tally's 8-digit ``YYYYMMDD`` text.

Spreadsheet cells reach the converter as serial numbers (1900 date system),
free text, or already-parsed date objects. All three end up as the same
``YYYYMMDD`` string. When parsing fails the original text is kept with its
``-`` and ``/`` separators removed; that fallback is best effort and is not
guaranteed to be a real calendar date.
"""

__all__ = [
    "DateNormalizer",
    "format_tally_date",
    "SERIAL_EPOCH_OFFSET",
]

# Serial number of 1970-01-01 in the 1900 date system
SERIAL_EPOCH_OFFSET = 25569
SECONDS_PER_DAY = 86400

_SEPARATORS = re.compile(r"[-/]")


def _is_absent(value: Any) -> bool:
    if value is None or value is pd.NaT or value is pd.NA:
        return True
    if isinstance(value, bool):
        return True  # booleans carry no date
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, (numbers.Real, Decimal)):
        return value == 0
    if isinstance(value, str):
        return value == ""
    return False


class DateNormalizer:
    """Convert heterogeneous date values to ``YYYYMMDD``.

    ``tz`` is the zone in which serial numbers and zone-aware values are read
    as calendar dates. ``None`` means the process's local zone.
    """

    def __init__(self, tz: tzinfo | None = None) -> None:
        self.tz = tz

    def normalize(self, value: Any) -> str:
        if _is_absent(value):
            return ""
        moment = self._to_date(value)
        if moment is None:
            return _SEPARATORS.sub("", str(value))
        return f"{moment.year}{moment.month:02d}{moment.day:02d}"

    __call__ = normalize

    def _to_date(self, value: Any) -> date | None:
        if isinstance(value, (numbers.Real, Decimal)):
            return self._from_serial(float(value))
        if isinstance(value, str):
            return self._from_text(value)
        if isinstance(value, datetime):
            return self._localize(value)
        if isinstance(value, date):
            return value
        return None

    def _from_serial(self, serial: float) -> datetime | None:
        if not math.isfinite(serial):
            return None
        seconds = (serial - SERIAL_EPOCH_OFFSET) * SECONDS_PER_DAY
        try:
            if self.tz is None:
                return datetime.fromtimestamp(seconds)
            return datetime.fromtimestamp(seconds, tz=self.tz)
        except (OverflowError, OSError, ValueError):
            return None

    def _from_text(self, text: str) -> datetime | None:
        try:
            parsed = pd.to_datetime(text.strip(), errors="coerce")
        except (TypeError, ValueError, OverflowError):
            return None
        if parsed is pd.NaT or pd.isna(parsed):
            return None
        return self._localize(parsed.to_pydatetime())

    def _localize(self, moment: datetime) -> datetime:
        # naive values are taken at face value; aware ones are read in our zone
        if moment.tzinfo is None:
            return moment
        return moment.astimezone(self.tz)


def format_tally_date(value: Any, tz: tzinfo | None = None) -> str:
    """Shortcut for ``DateNormalizer(tz).normalize(value)``."""
    return DateNormalizer(tz).normalize(value)
