"""Tests for seeded tie-breaking."""

import hashlib
import random

import pytest

from selector import InvariantViolation, choose, derive_topic_seed

NAMES = ["Actix Web", "Axum", "Rocket"]


class TestDeriveTopicSeed:
    """Topic seed derivation."""

    def test_matches_digest_layout(self):
        digest = hashlib.sha256(b"backend" + (42).to_bytes(8, "little")).digest()
        assert derive_topic_seed("backend", 42) == int.from_bytes(digest[:8], "little")

    def test_fits_in_64_bits(self):
        assert 0 <= derive_topic_seed("database", 2 ** 64 - 1) < 2 ** 64

    def test_topic_changes_seed(self):
        assert derive_topic_seed("backend", 42) != derive_topic_seed("frontend", 42)

    def test_seed_changes_seed(self):
        assert derive_topic_seed("backend", 42) != derive_topic_seed("backend", 43)

    def test_unicode_topic(self):
        digest = hashlib.sha256("bäckend".encode("utf-8") + (0).to_bytes(8, "little")).digest()
        assert derive_topic_seed("bäckend", 0) == int.from_bytes(digest[:8], "little")


class TestChoose:
    """Choosing among tied names."""

    def test_single_name(self):
        assert choose("backend", 42, ["Axum"]) == "Axum"

    def test_empty_names(self):
        with pytest.raises(InvariantViolation):
            choose("backend", 42, [])

    def test_invariant_violation_is_not_user_error(self):
        assert issubclass(InvariantViolation, RuntimeError)

    def test_reproducible(self):
        assert choose("backend", 7, NAMES) == choose("backend", 7, NAMES)

    def test_uses_seeded_generator(self):
        rng = random.Random(derive_topic_seed("backend", 42))
        assert choose("backend", 42, NAMES) == NAMES[rng.randrange(len(NAMES))]

    def test_result_is_member(self):
        for seed in range(20):
            assert choose("queue", seed, NAMES) in NAMES

    def test_every_option_reachable(self):
        picks = {choose("backend", seed, NAMES) for seed in range(100)}
        assert picks == set(NAMES)

    def test_depends_on_order_given(self):
        seed = 42
        index = NAMES.index(choose("backend", seed, NAMES))
        reversed_names = list(reversed(NAMES))
        assert choose("backend", seed, reversed_names) == reversed_names[index]
