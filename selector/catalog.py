"""Rules catalog: parses the rules document and answers candidate lookups."""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import yaml
from pydantic import ValidationError as PydanticValidationError

from config import settings
from contracts import (
    Candidate,
    Category,
    ComplianceRequirement,
    RulesDocument,
    Weights,
)
from selector.errors import ParseError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RulesCatalog:
    """Read-only view over a loaded RulesDocument.

    Safe to share between threads: nothing here mutates after load.
    """

    document: RulesDocument

    @classmethod
    def load(cls, text: str, strict_weights: Optional[bool] = None) -> "RulesCatalog":
        """Parse rules text (YAML or JSON).

        Args:
            text: Rules document text
            strict_weights: Reject weight sums away from 1.0; defaults to settings

        Raises:
            ParseError: text is not a mapping of the expected shape
            ValidationError: strict weight check failed
        """
        try:
            payload = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ParseError("rules", str(exc)) from exc

        if not isinstance(payload, dict):
            raise ParseError("rules", "rules document must be a mapping")

        try:
            document = RulesDocument.model_validate(payload)
        except PydanticValidationError as exc:
            raise ParseError("rules", str(exc)) from exc

        strict = settings.strict_weights if strict_weights is None else strict_weights
        check_weight_sum(document.weights, strict)
        return cls(document)

    @property
    def version(self) -> int:
        return self.document.version

    @property
    def weights(self) -> Weights:
        return self.document.weights

    @property
    def compliance_requirements(self) -> Dict[str, ComplianceRequirement]:
        return self.document.compliance_requirements

    def candidates(self, category: Category) -> Tuple[Candidate, ...]:
        """Candidates of a category in source order."""
        return tuple(self.document.candidates.for_category(category))

    def get(self, category: Category, name: str) -> Candidate:
        for candidate in self.document.candidates.for_category(category):
            if candidate.name == name:
                return candidate
        raise KeyError(f"Unknown {category.value} candidate: {name}")

    def base_cost(self, category: Category, name: str) -> float:
        """Base monthly cost of a named candidate."""
        return self.get(category, name).monthly_cost_base


def check_weight_sum(weights: Weights, strict: bool) -> None:
    """Warn (or, when strict, fail) if the weights do not sum to 1.0.

    The scorer divides by a fixed 1.15, which only bounds scores to [0, 1]
    when the weights sum to exactly 1.0.
    """
    total = weights.total
    if abs(total - 1.0) <= settings.weight_sum_tolerance:
        return
    if strict:
        raise ValidationError(
            "weights",
            f"weights must sum to 1.0 (got {total:.6f})",
        )
    logger.warning("Rules weights sum to %.6f instead of 1.0; scores may leave [0, 1]", total)
