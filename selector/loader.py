"""Blueprint parsing and the semantic checks applied to blueprints and plans.

Structural validation is pydantic's job; the checks here cover the rules a
schema cannot express (non-empty names, non-negative numbers, score range).
"""

import json
import logging
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from contracts import Blueprint, Category, StackPlan
from selector.errors import ParseError, PlanValidationError, ValidationError

logger = logging.getLogger(__name__)


def _parse_structured_text(text: str) -> Any:
    """YAML first, JSON as fallback."""
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as yaml_exc:
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            raise ParseError("blueprint", str(yaml_exc)) from yaml_exc


def load_blueprint(text: str) -> Blueprint:
    """Parse blueprint text (YAML or JSON) and run the semantic checks.

    Raises:
        ParseError: malformed text, unknown fields or missing required fields
        ValidationError: a field value breaks a semantic rule
    """
    payload = _parse_structured_text(text)
    if not isinstance(payload, dict):
        raise ParseError("blueprint", "blueprint must be a mapping")

    try:
        blueprint = Blueprint.model_validate(payload)
    except PydanticValidationError as exc:
        raise ParseError("blueprint", str(exc)) from exc

    validate_blueprint(blueprint)
    logger.debug("Loaded blueprint %r with %d goal(s)", blueprint.project_name, len(blueprint.goals))
    return blueprint


def validate_blueprint(blueprint: Blueprint) -> None:
    if not blueprint.project_name.strip():
        raise ValidationError("project_name", "project_name cannot be empty")

    if not blueprint.goals:
        raise ValidationError("goals", "goals cannot be empty")

    if blueprint.traffic_profile.rps_peak < 0:
        raise ValidationError("traffic_profile.rps_peak", "rps_peak must be non-negative")

    cap = blueprint.constraints.monthly_cost_usd_max
    if cap is not None and cap < 0:
        raise ValidationError(
            "constraints.monthly_cost_usd_max",
            "monthly_cost_usd_max must be non-negative",
        )


def validate_stack_plan(plan: StackPlan) -> None:
    """Semantic checks on a finished plan.

    Raises:
        PlanValidationError: naming the first offending field
    """
    if plan.estimated.monthly_cost_usd < 0:
        raise PlanValidationError(
            "estimated.monthly_cost_usd",
            "monthly_cost_usd must be non-negative",
        )

    for decision in plan.decisions:
        if not 0.0 <= decision.score <= 1.0:
            raise PlanValidationError(
                f"decisions.{decision.topic}.score",
                f"Score for {decision.topic} must be between 0 and 1",
            )

    for category in Category:
        value = getattr(plan.stack, category.value)
        if category is Category.AI:
            if not 1 <= len(value) <= 2 or not all(value):
                raise PlanValidationError("stack.ai", "stack.ai must hold one or two choices")
        elif not value:
            raise PlanValidationError(f"stack.{category.value}", f"stack.{category.value} cannot be empty")
