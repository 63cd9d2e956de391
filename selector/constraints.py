"""Hard-constraint filtering: decides whether a candidate is admissible."""

import logging
from typing import Optional

from contracts import Blueprint, Candidate, Category

logger = logging.getLogger(__name__)

WILDCARD_REGIONS = frozenset({"*", "global"})


def region_allowed(candidate: Candidate, blueprint: Blueprint) -> bool:
    allowed = blueprint.constraints.region_allow
    if allowed is None:
        return True
    return any(r in WILDCARD_REGIONS or r in allowed for r in candidate.regions)


def within_cost_cap(candidate: Candidate, blueprint: Blueprint) -> bool:
    """Per-candidate check; the running total is enforced by the cost controller."""
    cap = blueprint.constraints.monthly_cost_usd_max
    return cap is None or candidate.monthly_cost_base <= cap


def persistence_matches(candidate: Candidate, blueprint: Blueprint, category: Category) -> bool:
    """Exact tag match: 'both' does not satisfy 'kv' or 'sql', nor the reverse."""
    requested = blueprint.constraints.persistence
    if category is not Category.DATABASE or requested is None:
        return True
    return candidate.persistence == requested.value


def language_compatible(candidate: Candidate, chosen_language: Optional[str]) -> bool:
    required = candidate.required_language
    if required is None or chosen_language is None:
        return True
    return required == chosen_language


def rejection_reason(
    candidate: Candidate,
    blueprint: Blueprint,
    category: Category,
    chosen_language: Optional[str] = None,
) -> Optional[str]:
    """Name of the first rule the candidate fails, or None if admissible."""
    if not region_allowed(candidate, blueprint):
        return "region"
    if not within_cost_cap(candidate, blueprint):
        return "monthly_cost"
    if not persistence_matches(candidate, blueprint, category):
        return "persistence"
    if not language_compatible(candidate, chosen_language):
        return "language"
    return None


def admissible(
    candidate: Candidate,
    blueprint: Blueprint,
    category: Category,
    chosen_language: Optional[str] = None,
) -> bool:
    """True when the candidate passes every hard constraint."""
    reason = rejection_reason(candidate, blueprint, category, chosen_language)
    if reason is not None:
        logger.debug("Rejected %s candidate %r: %s constraint", category.value, candidate.name, reason)
        return False
    return True
