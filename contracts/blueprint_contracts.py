"""Blueprint contracts: the declarative project description fed to the engine."""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from enum import Enum

from .rules_contracts import Category


class PersistenceType(str, Enum):
    """Kind of data persistence the project needs."""
    KV = "kv"
    SQL = "sql"
    BOTH = "both"


class ComplianceType(str, Enum):
    """Compliance regimes the stack must support."""
    AUDIT_LOG = "audit-log"
    SBOM = "sbom"
    PCI = "pci"
    SOX = "sox"
    HIPAA = "hipaa"


class LanguageMode(str, Enum):
    """Single-language restriction."""
    RUST = "rust"
    GO = "go"
    TS = "ts"

    @property
    def candidate_name(self) -> str:
        """Name of the language candidate this mode pins the selection to."""
        return {
            LanguageMode.RUST: "Rust",
            LanguageMode.GO: "Go",
            LanguageMode.TS: "TypeScript",
        }[self]


class Constraints(BaseModel):
    """Hard limits every chosen candidate must respect."""
    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    monthly_cost_usd_max: Optional[float] = Field(None, description="Monthly cost cap in USD")
    persistence: Optional[PersistenceType] = Field(None, description="Required database persistence tag")
    region_allow: Optional[List[str]] = Field(None, description="Allowed deployment regions")
    compliance: Optional[List[ComplianceType]] = Field(None, description="Compliance flags")


class TrafficProfile(BaseModel):
    """Traffic characteristics that adjust candidate scores."""
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True, allow_inf_nan=False)

    rps_peak: float = Field(..., description="Peak requests per second")
    is_global: bool = Field(..., alias="global", description="Served to a global audience")
    latency_sensitive: bool = Field(..., description="Latency is a primary concern")


class Preferences(BaseModel):
    """Soft per-category preference lists; never cause a selection to fail."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    language: Optional[List[str]] = None
    backend: Optional[List[str]] = None
    frontend: Optional[List[str]] = None
    database: Optional[List[str]] = None
    cache: Optional[List[str]] = None
    queue: Optional[List[str]] = None
    ai: Optional[List[str]] = None
    infra: Optional[List[str]] = None
    ci_cd: Optional[List[str]] = None

    def for_category(self, category: Category) -> Optional[List[str]]:
        """Return the preference list declared for a category, if any."""
        return getattr(self, category.value)


class Blueprint(BaseModel):
    """Input requirements for technology stack selection."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    project_name: str = Field(..., description="Project name")
    goals: List[str] = Field(..., description="Ordered project goals")
    constraints: Constraints = Field(default_factory=Constraints)
    traffic_profile: TrafficProfile = Field(...)
    prefs: Optional[Preferences] = Field(None)
    single_language_mode: Optional[LanguageMode] = Field(None)

    def has_compliance(self, flag: ComplianceType) -> bool:
        """True if the blueprint declares the given compliance flag."""
        return flag in (self.constraints.compliance or [])
