"""Pydantic contracts for Stackforge.

Every document that crosses a seam (blueprint in, rules in, plan out) is
typed through these contracts.
"""

from .rules_contracts import (
    Category,
    SELECTION_ORDER,
    Weights,
    Metrics,
    Requirements,
    Candidate,
    CandidateCategories,
    ComplianceRequirement,
    RulesDocument,
)

from .blueprint_contracts import (
    PersistenceType,
    ComplianceType,
    LanguageMode,
    Constraints,
    TrafficProfile,
    Preferences,
    Blueprint,
)

from .plan_contracts import (
    Decision,
    Service,
    Stack,
    Estimated,
    Meta,
    StackPlan,
)

__all__ = [
    # Rules
    "Category",
    "SELECTION_ORDER",
    "Weights",
    "Metrics",
    "Requirements",
    "Candidate",
    "CandidateCategories",
    "ComplianceRequirement",
    "RulesDocument",
    # Blueprint
    "PersistenceType",
    "ComplianceType",
    "LanguageMode",
    "Constraints",
    "TrafficProfile",
    "Preferences",
    "Blueprint",
    # Plan
    "Decision",
    "Service",
    "Stack",
    "Estimated",
    "Meta",
    "StackPlan",
]
