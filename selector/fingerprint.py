"""Canonical content hashing of blueprints and plans."""

import hashlib
import json
from typing import Any

from pydantic import BaseModel

from contracts import Blueprint, StackPlan

ALGORITHM = "sha256"


def canonical_json(obj: Any) -> str:
    """Deterministic serialization: sorted keys, no whitespace, no NaN."""
    if isinstance(obj, BaseModel):
        obj = obj.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def fingerprint(obj: Any) -> str:
    """Algorithm-tagged hex digest, e.g. 'sha256:<64 hex chars>'."""
    digest = hashlib.sha256(canonical_json(obj).encode("utf-8")).hexdigest()
    return f"{ALGORITHM}:{digest}"


def blueprint_fingerprint(blueprint: Blueprint) -> str:
    return fingerprint(blueprint)


def plan_fingerprint(plan: StackPlan) -> str:
    """Hash of the plan with its own plan_hash field blanked."""
    unsealed = plan.model_copy(update={"meta": plan.meta.model_copy(update={"plan_hash": ""})})
    return fingerprint(unsealed)


def seal_plan(draft: StackPlan) -> StackPlan:
    """Return a copy of a fully assembled plan with its plan_hash filled in."""
    sealed_meta = draft.meta.model_copy(update={"plan_hash": plan_fingerprint(draft)})
    return draft.model_copy(update={"meta": sealed_meta})


def verify_plan(plan: StackPlan) -> bool:
    """True if the plan's recorded plan_hash matches its content."""
    return plan.meta.plan_hash == plan_fingerprint(plan)
