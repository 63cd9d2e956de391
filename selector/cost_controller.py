"""Cost controller for aggregating stack costs and enforcing the budget cap.

One controller is created per selection call, so nothing here is shared
between concurrent calls.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any

from contracts import Category
from selector.errors import BudgetExceededError


@dataclass(frozen=True)
class CostLineItem:
    """Base monthly cost of one chosen candidate."""
    category: Category
    name: str
    monthly_cost_usd: float


@dataclass
class CostController:
    """Tracks chosen-candidate costs against an optional monthly cap."""

    max_cost_usd: Optional[float] = None
    line_items: List[CostLineItem] = field(default_factory=list)

    def record(self, category: Category, name: str, monthly_cost_usd: float) -> None:
        """Add a chosen candidate's base cost to the ledger."""
        self.line_items.append(CostLineItem(category, name, monthly_cost_usd))

    @property
    def total_cost_usd(self) -> float:
        """Total monthly cost of everything recorded so far."""
        return sum(item.monthly_cost_usd for item in self.line_items)

    @property
    def remaining_budget_usd(self) -> Optional[float]:
        """Remaining budget in USD, or None without a cap."""
        if self.max_cost_usd is None:
            return None
        return max(0.0, self.max_cost_usd - self.total_cost_usd)

    @property
    def is_budget_exceeded(self) -> bool:
        """Strictly over the cap; landing exactly on it is allowed."""
        return self.max_cost_usd is not None and self.total_cost_usd > self.max_cost_usd

    def enforce(self) -> None:
        """Raise BudgetExceededError if the total is over the cap."""
        if self.is_budget_exceeded:
            raise BudgetExceededError(self.max_cost_usd, self.total_cost_usd)

    def get_cost_by_category(self) -> Dict[str, float]:
        """Cost breakdown by category (AI sums both chosen providers)."""
        costs: Dict[str, float] = {}
        for item in self.line_items:
            key = item.category.value
            costs[key] = costs.get(key, 0.0) + item.monthly_cost_usd
        return costs

    def budget_used_percent(self) -> Optional[float]:
        if self.max_cost_usd is None:
            return None
        if self.max_cost_usd == 0:
            return 0.0 if self.total_cost_usd == 0 else 100.0
        return round(self.total_cost_usd / self.max_cost_usd * 100, 1)

    def budget_note(self) -> Optional[str]:
        """Human-readable utilisation line for the plan estimate."""
        percent = self.budget_used_percent()
        if percent is None:
            return None
        return f"Budget utilisation: {percent}% of ${self.max_cost_usd:.2f} monthly cap"

    def generate_manifest(self) -> Dict[str, Any]:
        """Generate a cost manifest for audit output."""
        total = self.total_cost_usd
        return {
            "summary": {
                "total_cost_usd": round(total, 2),
                "max_budget_usd": self.max_cost_usd,
                "budget_used_percent": self.budget_used_percent(),
                "within_budget": not self.is_budget_exceeded,
            },
            "by_category": {k: round(v, 2) for k, v in self.get_cost_by_category().items()},
            "line_items": [
                {
                    "category": item.category.value,
                    "name": item.name,
                    "monthly_cost_usd": round(item.monthly_cost_usd, 2),
                }
                for item in self.line_items
            ],
        }
