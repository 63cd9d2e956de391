"""Adapters between contracts and their external renderings.

Pure functions: no I/O, no logging.
"""

import json
from typing import Any, Dict, List, Tuple

from contracts import Category, StackPlan


def plan_to_dict(plan: StackPlan) -> Dict[str, Any]:
    """Dump a plan as plain JSON-compatible data using wire field names."""
    return plan.model_dump(mode="json", by_alias=True, exclude_none=True)


def plan_to_json(plan: StackPlan, indent: int = 2) -> str:
    """Render a plan as pretty JSON text (the plan's external encoding)."""
    return json.dumps(plan_to_dict(plan), indent=indent, ensure_ascii=False)


def plan_from_json(text: str) -> StackPlan:
    """Parse plan JSON text back into a StackPlan."""
    return StackPlan.model_validate_json(text)


def stack_summary(plan: StackPlan) -> List[Tuple[str, str]]:
    """(category, choice) rows in selection order; AI choices joined by ', '."""
    rows = []
    for category in Category:
        value = getattr(plan.stack, category.value)
        if isinstance(value, list):
            value = ", ".join(value)
        rows.append((category.value, value))
    return rows
