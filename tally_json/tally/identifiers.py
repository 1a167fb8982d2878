from __future__ import annotations

import random
import uuid
from typing import Protocol

"""Identifier generation for voucher records.

Identifiers only have to be unique within one conversion run, so the source
of randomness is an ordinary PRNG and is injectable: tests pass a seeded
``random.Random`` to get reproducible output.
"""

__all__ = [
    "IdentifierGenerator",
    "RandomSource",
    "generate_guid",
]

REMOTE_ID_SEQUENCE_WIDTH = 8


class RandomSource(Protocol):
    def getrandbits(self, k: int) -> int: ...


_default_source = random.Random()


class IdentifierGenerator:
    """Produce v4-layout GUIDs and row-suffixed remote ids."""

    def __init__(self, rng: RandomSource | None = None) -> None:
        self.rng: RandomSource = rng if rng is not None else _default_source

    def generate(self) -> str:
        """Return a 36-char ``8-4-4-4-12`` lower-case hex identifier.

        The version nibble is ``4`` and the variant nibble one of ``8 9 a b``.
        """
        return str(uuid.UUID(int=self.rng.getrandbits(128), version=4))

    def remote_id(self, sequence: int) -> str:
        """Return a fresh GUID suffixed with ``-`` and the 1-based row number.

        The zero-padded suffix keeps remote ids distinct across rows even if
        two generated GUIDs were to collide.
        """
        return f"{self.generate()}-{sequence:0{REMOTE_ID_SEQUENCE_WIDTH}d}"


def generate_guid() -> str:
    """Generate one GUID from the shared default source."""
    return IdentifierGenerator().generate()
