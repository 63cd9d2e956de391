"""Rules contracts: scoring weights and the per-category technology catalog."""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Dict, List, Optional
from enum import Enum


class Category(str, Enum):
    """Technology categories, in the order the engine resolves them.

    Language comes first because backend admissibility depends on it.
    """
    LANGUAGE = "language"
    BACKEND = "backend"
    FRONTEND = "frontend"
    DATABASE = "database"
    CACHE = "cache"
    QUEUE = "queue"
    AI = "ai"
    INFRA = "infra"
    CI_CD = "ci_cd"


SELECTION_ORDER = tuple(Category)


class Weights(BaseModel):
    """Scoring weights; intended to sum to 1.0."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    quality: float = Field(..., ge=0)
    slo: float = Field(..., ge=0)
    cost: float = Field(..., ge=0)
    security: float = Field(..., ge=0)
    ops: float = Field(..., ge=0)

    @property
    def total(self) -> float:
        return self.quality + self.slo + self.cost + self.security + self.ops


class Metrics(BaseModel):
    """Candidate metrics, each intended to lie in [0, 1]."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    quality: float
    slo: float
    cost: float
    security: float
    ops: float


class Requirements(BaseModel):
    """Inter-category requirements of a candidate."""
    model_config = ConfigDict(frozen=True)

    language: Optional[str] = Field(None, description="Language this candidate needs")


class Candidate(BaseModel):
    """A technology option with metrics, cost and region support."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    name: str = Field(..., min_length=1)
    requires: Optional[Requirements] = None
    persistence: Optional[str] = Field(None, description="Persistence tag: kv, sql or both")
    metrics: Metrics
    regions: List[str] = Field(..., description="Supported regions; '*' or 'global' match everything")
    monthly_cost_base: float = Field(0.0, ge=0, description="Base monthly cost in USD")
    notes: List[str] = Field(default_factory=list)

    @property
    def required_language(self) -> Optional[str]:
        return self.requires.language if self.requires else None


class CandidateCategories(BaseModel):
    """Candidate lists for each of the nine fixed categories."""
    model_config = ConfigDict(frozen=True)

    language: List[Candidate]
    backend: List[Candidate]
    frontend: List[Candidate]
    database: List[Candidate]
    cache: List[Candidate]
    queue: List[Candidate]
    ai: List[Candidate]
    infra: List[Candidate]
    ci_cd: List[Candidate]

    @model_validator(mode="after")
    def validate_unique_names(self) -> "CandidateCategories":
        """Candidate names must be unique within a category."""
        for category in Category:
            seen = set()
            for candidate in self.for_category(category):
                if candidate.name in seen:
                    raise ValueError(
                        f"Duplicate candidate '{candidate.name}' in category '{category.value}'"
                    )
                seen.add(candidate.name)
        return self

    def for_category(self, category: Category) -> List[Candidate]:
        return getattr(self, category.value)


class ComplianceRequirement(BaseModel):
    """Features a compliance regime requires from the stack."""
    model_config = ConfigDict(frozen=True)

    required_features: List[str] = Field(default_factory=list)


class RulesDocument(BaseModel):
    """Complete technology catalog plus scoring weights."""
    model_config = ConfigDict(frozen=True)

    version: int
    weights: Weights
    candidates: CandidateCategories
    compliance_requirements: Dict[str, ComplianceRequirement] = Field(default_factory=dict)
