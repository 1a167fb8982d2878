from __future__ import annotations

import random
import re

from tally_json.tally.identifiers import IdentifierGenerator, generate_guid

GUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$")


class ZeroBits:
    def getrandbits(self, k: int) -> int:
        return 0


def test_generate_has_v4_layout():
    gen = IdentifierGenerator(random.Random(7))
    for _ in range(50):
        assert GUID_RE.match(gen.generate())


def test_generate_sets_version_and_variant_bits():
    assert IdentifierGenerator(ZeroBits()).generate() == "00000000-0000-4000-8000-000000000000"


def test_seeded_source_is_reproducible():
    a = IdentifierGenerator(random.Random(42))
    b = IdentifierGenerator(random.Random(42))
    assert [a.generate() for _ in range(3)] == [b.generate() for _ in range(3)]


def test_identifiers_unique_within_run():
    gen = IdentifierGenerator(random.Random(1))
    ids = {gen.generate() for _ in range(1000)}
    assert len(ids) == 1000


def test_remote_id_suffix_is_zero_padded_sequence():
    gen = IdentifierGenerator(random.Random(3))
    rid = gen.remote_id(1)
    guid, suffix = rid[:36], rid[36:]
    assert GUID_RE.match(guid)
    assert suffix == "-00000001"
    assert gen.remote_id(123).endswith("-00000123")


def test_remote_id_uses_fresh_guid():
    gen = IdentifierGenerator(random.Random(5))
    assert gen.remote_id(1)[:36] != gen.remote_id(1)[:36]


def test_generate_guid_default_source():
    assert GUID_RE.match(generate_guid())
