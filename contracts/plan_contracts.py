"""Plan contracts: the engine's output document."""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class Decision(BaseModel):
    """Per-category outcome: choice, reasons, alternatives and score."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    topic: str = Field(..., description="Category name")
    choice: str = Field(..., description="Chosen candidate (AI choices joined by ', ')")
    reasons: List[str] = Field(..., min_length=1)
    alternatives: List[str] = Field(default_factory=list, max_length=3)
    score: float = Field(..., description="Weighted score of the chosen candidate")


class Service(BaseModel):
    """A deployable service in the resolved stack."""
    model_config = ConfigDict(frozen=True)

    name: str
    kind: str
    language: str
    framework: str
    runtime: str
    build: str
    tests: str


class Stack(BaseModel):
    """One choice per category; the AI category holds up to two."""
    model_config = ConfigDict(frozen=True)

    language: str
    services: Optional[List[Service]] = None
    frontend: str
    backend: str
    database: str
    cache: str
    queue: str
    ai: List[str]
    infra: str
    ci_cd: str


class Estimated(BaseModel):
    """Cost estimate for the resolved stack."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    monthly_cost_usd: float
    egress_gb: Optional[float] = None
    notes: Optional[List[str]] = None


class Meta(BaseModel):
    """Reproducibility data: seed and fingerprints."""
    model_config = ConfigDict(frozen=True)

    seed: int
    blueprint_hash: str
    plan_hash: str


class StackPlan(BaseModel):
    """Full output: decisions (score descending), stack, estimate, meta."""
    model_config = ConfigDict(frozen=True)

    decisions: List[Decision]
    stack: Stack
    estimated: Estimated
    meta: Meta
