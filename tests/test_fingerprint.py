"""Tests for canonical hashing of blueprints and plans."""

import hashlib
import re

import pytest

from selector import SelectionEngine, blueprint_fingerprint, fingerprint, plan_fingerprint, seal_plan, verify_plan
from selector.fingerprint import canonical_json

HASH_PATTERN = re.compile(r"^sha256:[0-9a-f]{64}$")


class TestCanonicalJson:
    """Canonical serialization."""

    def test_sorted_compact(self):
        assert canonical_json({"b": 1, "a": [1, 2]}) == '{"a":[1,2],"b":1}'

    def test_non_ascii_kept(self):
        assert canonical_json({"name": "café"}) == '{"name":"café"}'

    def test_nan_rejected(self):
        with pytest.raises(ValueError):
            canonical_json({"x": float("nan")})

    def test_model_uses_wire_names(self, blueprint):
        text = canonical_json(blueprint)
        assert '"global":true' in text
        assert "is_global" not in text
        assert "prefs" not in text


class TestFingerprint:
    """Hash format and sensitivity."""

    def test_format(self):
        assert HASH_PATTERN.match(fingerprint({"a": 1}))

    def test_digest(self):
        expected = hashlib.sha256(b'{"a":1}').hexdigest()
        assert fingerprint({"a": 1}) == f"sha256:{expected}"

    def test_key_order_irrelevant(self):
        assert fingerprint({"a": 1, "b": 2}) == fingerprint({"b": 2, "a": 1})

    def test_blueprint_fingerprint_stable(self, make_blueprint):
        assert blueprint_fingerprint(make_blueprint()) == blueprint_fingerprint(make_blueprint())

    def test_blueprint_fingerprint_changes(self, make_blueprint):
        assert blueprint_fingerprint(make_blueprint()) != blueprint_fingerprint(make_blueprint(goals=["Other"]))


class TestPlanSealing:
    """Plan hash over the plan with plan_hash blanked."""

    @pytest.fixture
    def plan(self, catalog, blueprint):
        return SelectionEngine(catalog, 42).select(blueprint)

    def test_engine_output_is_sealed(self, plan):
        assert HASH_PATTERN.match(plan.meta.plan_hash)
        assert plan.meta.plan_hash == plan_fingerprint(plan)

    def test_plan_hash_ignores_recorded_hash(self, plan):
        unsealed = plan.model_copy(update={"meta": plan.meta.model_copy(update={"plan_hash": ""})})
        assert plan_fingerprint(unsealed) == plan.meta.plan_hash
        assert seal_plan(unsealed) == plan

    def test_verify(self, plan):
        assert verify_plan(plan)

    def test_tampered_plan_fails_verification(self, plan):
        tampered = plan.model_copy(update={
            "estimated": plan.estimated.model_copy(update={"monthly_cost_usd": 1.0}),
        })
        assert not verify_plan(tampered)

    def test_tampered_hash_fails_verification(self, plan):
        tampered = plan.model_copy(update={"meta": plan.meta.model_copy(update={"plan_hash": "sha256:" + "0" * 64})})
        assert not verify_plan(tampered)
