"""Selection engine: turns a blueprint plus rules into a StackPlan.

Each category is resolved in SELECTION_ORDER through the same pipeline:
hard constraints -> soft preferences -> scoring -> ranking -> tie-break.
A select() call is a pure function of (rules, seed, blueprint); any failure
aborts the whole call and no partial plan is returned.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from config import settings
from contracts import (
    Blueprint,
    Candidate,
    Category,
    ComplianceType,
    Decision,
    Estimated,
    Meta,
    SELECTION_ORDER,
    Stack,
    StackPlan,
)
from selector.catalog import RulesCatalog
from selector.constraints import admissible
from selector.cost_controller import CostController
from selector.errors import NoCandidateError, ValidationError
from selector.fingerprint import blueprint_fingerprint, seal_plan
from selector.scorer import Scorer
from selector.tie_breaker import MAX_SEED, choose

logger = logging.getLogger(__name__)

TIE_EPSILON = 0.001
MAX_ALTERNATIVES = 3
AI_CHOICES = 2
AI_ALTERNATIVES = 2

HIGH_SCORE_THRESHOLD = 0.8
LATENCY_SLO_THRESHOLD = 0.85
COMPLIANCE_SECURITY_THRESHOLD = 0.85

Ranked = List[Tuple[Candidate, float]]


def apply_preferences(
    candidates: Sequence[Candidate],
    blueprint: Blueprint,
    category: Category,
) -> List[Candidate]:
    """Restrict to preferred names when that leaves something; otherwise keep all."""
    pool = list(candidates)
    if blueprint.prefs is None:
        return pool
    preferred_names = blueprint.prefs.for_category(category)
    if not preferred_names:
        return pool
    preferred = [c for c in pool if c.name in preferred_names]
    return preferred or pool


@dataclass(frozen=True)
class SelectionEngine:
    """Immutable value built from (rules, seed); safe to call concurrently."""

    catalog: RulesCatalog
    seed: int = 42
    scorer: Scorer = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not 0 <= self.seed <= MAX_SEED:
            raise ValidationError("seed", f"seed must be an unsigned 64-bit integer (got {self.seed})")
        object.__setattr__(self, "scorer", Scorer(self.catalog.weights))

    @classmethod
    def from_text(cls, rules_text: str, seed: int = 42, strict_weights: Optional[bool] = None) -> "SelectionEngine":
        """Build an engine straight from rules text."""
        return cls(RulesCatalog.load(rules_text, strict_weights=strict_weights), seed)

    def select(self, blueprint: Blueprint) -> StackPlan:
        """Resolve every category and assemble the sealed plan.

        Raises:
            NoCandidateError: a category has nothing admissible
            BudgetExceededError: the chosen stack exceeds the cost cap
        """
        logger.info("Starting stack selection for %r (seed %d)", blueprint.project_name, self.seed)
        costs = CostController(blueprint.constraints.monthly_cost_usd_max)
        decisions: List[Decision] = []
        chosen = {}
        language: Optional[str] = None

        for category in SELECTION_ORDER:
            if category is Category.AI:
                decision, names = self._select_ai(blueprint, language)
            else:
                decision = self._select_single(category, blueprint, language)
                names = [decision.choice]
                if category is Category.LANGUAGE:
                    language = decision.choice

            for name in names:
                costs.record(category, name, self.catalog.base_cost(category, name))
            chosen[category] = names
            decisions.append(decision)

        costs.enforce()

        stack = Stack(
            language=chosen[Category.LANGUAGE][0],
            frontend=chosen[Category.FRONTEND][0],
            backend=chosen[Category.BACKEND][0],
            database=chosen[Category.DATABASE][0],
            cache=chosen[Category.CACHE][0],
            queue=chosen[Category.QUEUE][0],
            ai=list(chosen[Category.AI]),
            infra=chosen[Category.INFRA][0],
            ci_cd=chosen[Category.CI_CD][0],
        )
        # reverse=True keeps the sort stable for equal scores
        decisions.sort(key=lambda d: d.score, reverse=True)

        draft = StackPlan(
            decisions=decisions,
            stack=stack,
            estimated=Estimated(
                monthly_cost_usd=costs.total_cost_usd,
                notes=self._estimate_notes(blueprint, costs) or None,
            ),
            meta=Meta(
                seed=self.seed,
                blueprint_hash=blueprint_fingerprint(blueprint),
                plan_hash="",
            ),
        )
        plan = seal_plan(draft)
        logger.info(
            "Selected stack for %r: %s (monthly cost $%.2f)",
            blueprint.project_name,
            ", ".join(f"{c.value}={'/'.join(chosen[c])}" for c in SELECTION_ORDER),
            plan.estimated.monthly_cost_usd,
        )
        return plan

    def _admissible(
        self,
        category: Category,
        candidates: Sequence[Candidate],
        blueprint: Blueprint,
        language: Optional[str],
    ) -> List[Candidate]:
        passed = [c for c in candidates if admissible(c, blueprint, category, language)]
        if not passed:
            raise NoCandidateError(category.value)
        return passed

    def _rank(self, category: Category, candidates: Sequence[Candidate], blueprint: Blueprint) -> Ranked:
        """Score and sort descending; equal scores keep catalog order."""
        scored = []
        for candidate in candidates:
            score = self.scorer.score(candidate.metrics, blueprint)
            logger.debug(
                "Scored %s candidate %r: %.4f %s",
                category.value,
                candidate.name,
                score,
                {k: round(v, 4) for k, v in self.scorer.breakdown(candidate.metrics).items()},
            )
            scored.append((candidate, score))
        scored.sort(key=lambda pair: pair[1], reverse=True)
        return scored

    def _select_single(self, category: Category, blueprint: Blueprint, language: Optional[str]) -> Decision:
        candidates = self.catalog.candidates(category)
        if category is Category.LANGUAGE and blueprint.single_language_mode is not None:
            wanted = blueprint.single_language_mode.candidate_name
            candidates = [c for c in candidates if c.name == wanted]

        pool = apply_preferences(self._admissible(category, candidates, blueprint, language), blueprint, category)
        ranked = self._rank(category, pool, blueprint)

        top_score = ranked[0][1]
        tied = [c.name for c, score in ranked if abs(score - top_score) < TIE_EPSILON]
        choice = choose(category.value, self.seed, tied) if len(tied) > 1 else ranked[0][0].name
        candidate, score = next((c, s) for c, s in ranked if c.name == choice)

        alternatives = [c.name for c, _ in ranked if c.name != choice][:MAX_ALTERNATIVES]
        return Decision(
            topic=category.value,
            choice=choice,
            reasons=self._reasons(category, candidate, score, blueprint, language),
            alternatives=alternatives,
            score=score,
        )

    def _select_ai(self, blueprint: Blueprint, language: Optional[str]) -> Tuple[Decision, List[str]]:
        """Top two AI providers are chosen together; the next two are alternatives."""
        pool = self._admissible(Category.AI, self.catalog.candidates(Category.AI), blueprint, language)
        ranked = self._rank(Category.AI, pool, blueprint)

        choices = [c.name for c, _ in ranked[:AI_CHOICES]]
        alternatives = [c.name for c, _ in ranked[AI_CHOICES:AI_CHOICES + AI_ALTERNATIVES]]
        reasons = ["Selected based on quality and cost balance"]
        if len(choices) > 1:
            reasons.append("Multiple AI providers for redundancy")

        decision = Decision(
            topic=Category.AI.value,
            choice=", ".join(choices),
            reasons=reasons,
            alternatives=alternatives,
            score=ranked[0][1],
        )
        return decision, choices

    def _reasons(
        self,
        category: Category,
        candidate: Candidate,
        score: float,
        blueprint: Blueprint,
        language: Optional[str],
    ) -> List[str]:
        reasons = []
        depends_on_language = category is Category.BACKEND or candidate.required_language is not None
        if language is not None and depends_on_language:
            reasons.append(f"Compatible with {language} language")
        if score > HIGH_SCORE_THRESHOLD:
            reasons.append("High overall score across all metrics")
        if blueprint.traffic_profile.latency_sensitive and candidate.metrics.slo > LATENCY_SLO_THRESHOLD:
            reasons.append("Excellent performance for latency-sensitive workload")

        if blueprint.constraints.compliance:
            if candidate.metrics.security > COMPLIANCE_SECURITY_THRESHOLD:
                reasons.append("Strong security features for compliance requirements")
            if blueprint.has_compliance(ComplianceType.HIPAA):
                reasons.append("HIPAA-compliant infrastructure support")
            if blueprint.has_compliance(ComplianceType.SOX):
                reasons.append("SOX compliance with audit trail capabilities")

        if candidate.notes:
            reasons.append(candidate.notes[0])

        if not reasons:
            reasons.append(f"Selected based on optimal {category.value} score")
        return reasons

    def _estimate_notes(self, blueprint: Blueprint, costs: CostController) -> List[str]:
        notes = []
        for flag in blueprint.constraints.compliance or []:
            requirement = self.catalog.compliance_requirements.get(flag.value)
            if requirement and requirement.required_features:
                notes.append(f"{flag.value} requires: {', '.join(requirement.required_features)}")
        budget = costs.budget_note()
        if budget:
            notes.append(budget)
        return notes


def build_engine(rules_text: str, seed: Optional[int] = None) -> SelectionEngine:
    """Engine with the configured default seed when none is given."""
    return SelectionEngine.from_text(rules_text, settings.default_seed if seed is None else seed)
