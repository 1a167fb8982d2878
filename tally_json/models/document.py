from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

"""OutputDocument model: the Tally import payload produced by one conversion."""

__all__ = [
    "OutputDocument",
]


@dataclass(frozen=True)
class OutputDocument:
    """Ordered voucher records, one per input row, in input order."""
    tallymessage: tuple[dict[str, Any], ...]

    def __len__(self) -> int:
        return len(self.tallymessage)

    def to_dict(self) -> dict[str, Any]:
        return {"tallymessage": list(self.tallymessage)}

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize to the JSON text Tally imports.

        Control characters (the ``\\u0004`` GST-class marker) stay escaped;
        non-ASCII party / item names are written as-is.
        """
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
