from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from ..models.field_catalog import FIELD_CATALOG, FIELD_KEYS, TallyField

"""Heuristic spreadsheet column -> Tally field mapping.

The auto mapping is a suggestion meant to be reviewed (``--inspect-data``)
and corrected with overrides before converting. Matching rules:

- fields are tried in catalog order, headers by increasing column index;
- a header matches when its lower-cased text contains a pattern or a
  pattern contains the header text;
- the first matching column wins, so column order beats pattern specificity;
- columns are not reserved, two fields may land on the same column.

Because of the "pattern contains header" direction a blank header matches the
first field that reaches it.
"""

__all__ = [
    "ColumnMapping",
    "ColumnMapper",
    "MappingError",
    "auto_map_columns",
    "apply_overrides",
]

ColumnMapping = dict[str, int]

_INDEX_TEXT = re.compile(r"-?\d+")


class MappingError(ValueError):
    """Raised when a mapping override names an unknown field or column."""


def _header_text(header: Any) -> str:
    if header is None:
        return ""
    return str(header).lower()


class ColumnMapper:
    def __init__(self, catalog: Sequence[TallyField] = FIELD_CATALOG) -> None:
        self.catalog = tuple(catalog)

    def map(self, headers: Sequence[Any]) -> ColumnMapping:
        """Guess a field -> column index mapping from header texts. Never raises."""
        texts = [_header_text(h) for h in headers]
        mapping: ColumnMapping = {}
        for field in self.catalog:
            index = self._first_match(field.patterns, texts)
            if index is not None:
                mapping[field.key] = index
        return mapping

    @staticmethod
    def _first_match(patterns: Sequence[str], texts: Sequence[str]) -> int | None:
        for index, text in enumerate(texts):
            for pattern in patterns:
                if pattern in text or text in pattern:
                    return index
        return None


def auto_map_columns(headers: Sequence[Any]) -> ColumnMapping:
    return ColumnMapper().map(headers)


def _resolve_column(field_key: str, target: Any, headers: Sequence[Any]) -> int:
    if isinstance(target, bool):
        raise MappingError(f"invalid column for '{field_key}': {target!r}")
    if isinstance(target, int):
        if target >= len(headers):
            raise MappingError(
                f"column index {target} for '{field_key}' out of range (columns={len(headers)})"
            )
        return target
    if isinstance(target, str):
        stripped = target.strip()
        if _INDEX_TEXT.fullmatch(stripped):
            return _resolve_column(field_key, int(stripped), headers)
        wanted = stripped.lower()
        for index, header in enumerate(headers):
            if _header_text(header).strip() == wanted:
                return index
        raise MappingError(f"header '{target}' for '{field_key}' not found in sheet")
    raise MappingError(f"invalid column for '{field_key}': {target!r}")


def apply_overrides(
    mapping: Mapping[str, int],
    overrides: Mapping[str, Any] | None,
    headers: Sequence[Any],
) -> ColumnMapping:
    """Return a copy of ``mapping`` with user overrides applied.

    An override value is a column index, a digit string, or a header name
    (matched case-insensitively after trimming). A negative index clears the
    field so its default is used.

    Raises:
        MappingError: unknown field key, header name not present, or an index
            past the last column
    """
    result: ColumnMapping = dict(mapping)
    if not overrides:
        return result
    for field_key, target in overrides.items():
        if field_key not in FIELD_KEYS:
            raise MappingError(f"unknown field '{field_key}' (known: {', '.join(FIELD_KEYS)})")
        index = _resolve_column(field_key, target, headers)
        if index < 0:
            result.pop(field_key, None)
        else:
            result[field_key] = index
    return result
