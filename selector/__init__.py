"""Selection engine: constraint filtering, scoring, tie-breaking and fingerprinting."""

from .errors import (
    StackforgeError,
    ParseError,
    ValidationError,
    PlanValidationError,
    NoCandidateError,
    BudgetExceededError,
    IoError,
    InvariantViolation,
)
from .catalog import RulesCatalog
from .loader import load_blueprint, validate_blueprint, validate_stack_plan
from .constraints import admissible, rejection_reason
from .scorer import Scorer
from .tie_breaker import choose, derive_topic_seed
from .cost_controller import CostController, CostLineItem
from .fingerprint import fingerprint, blueprint_fingerprint, plan_fingerprint, seal_plan, verify_plan
from .engine import SelectionEngine, build_engine

__all__ = [
    # Errors
    "StackforgeError",
    "ParseError",
    "ValidationError",
    "PlanValidationError",
    "NoCandidateError",
    "BudgetExceededError",
    "IoError",
    "InvariantViolation",
    # Components
    "RulesCatalog",
    "load_blueprint",
    "validate_blueprint",
    "validate_stack_plan",
    "admissible",
    "rejection_reason",
    "Scorer",
    "choose",
    "derive_topic_seed",
    "CostController",
    "CostLineItem",
    "fingerprint",
    "blueprint_fingerprint",
    "plan_fingerprint",
    "seal_plan",
    "verify_plan",
    # Engine
    "SelectionEngine",
    "build_engine",
]
