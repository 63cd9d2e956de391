"""Plan runner - file-level pipeline around the selection engine.

The plan runner is the entry point used by the CLI that:
1. Reads the blueprint and rules files
2. Builds a SelectionEngine and runs the selection
3. Validates the produced plan
4. Writes the plan (and optionally a cost manifest)
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from contracts import Category, StackPlan
from contracts.adapters import plan_from_json, plan_to_json
from orchestrator.observability import timed_operation
from selector import (
    CostController,
    IoError,
    ParseError,
    RulesCatalog,
    SelectionEngine,
    load_blueprint,
    validate_stack_plan,
    verify_plan,
)
from config import settings

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass(frozen=True)
class PlanResult:
    """Outcome of a successful plan run."""
    plan: StackPlan
    plan_json: str
    output_path: Optional[Path] = None
    manifest_path: Optional[Path] = None


def read_text(path: PathLike) -> str:
    """Read a UTF-8 file, mapping OS failures to IoError."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise IoError(str(path), exc.strerror or str(exc)) from exc


def write_text(path: PathLike, content: str) -> Path:
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise IoError(str(path), exc.strerror or str(exc), action="write") from exc
    return target


def cost_manifest(catalog: RulesCatalog, plan: StackPlan, max_cost_usd: Optional[float]) -> Dict[str, Any]:
    """Rebuild the cost ledger of a finished plan for audit output."""
    controller = CostController(max_cost_usd)
    for category in Category:
        names = getattr(plan.stack, category.value)
        for name in names if isinstance(names, list) else [names]:
            controller.record(category, name, catalog.base_cost(category, name))
    return controller.generate_manifest()


class PlanRunner:
    """Runs blueprint files through the selection engine."""

    def __init__(
        self,
        rules_path: Optional[PathLike] = None,
        seed: Optional[int] = None,
        strict_weights: Optional[bool] = None,
    ):
        """Initialize the runner.

        Args:
            rules_path: Rules catalog file (default: settings.rules_path)
            seed: Tie-break seed (default: settings.default_seed)
            strict_weights: Reject rules whose weights do not sum to 1.0
        """
        self.rules_path = Path(rules_path) if rules_path else settings.get_rules_path()
        self.seed = settings.default_seed if seed is None else seed
        self.strict_weights = strict_weights
        self._catalog: Optional[RulesCatalog] = None

    @property
    def catalog(self) -> RulesCatalog:
        """Rules catalog, loaded once per runner."""
        if self._catalog is None:
            self._catalog = RulesCatalog.load(read_text(self.rules_path), strict_weights=self.strict_weights)
        return self._catalog

    def run(
        self,
        blueprint_path: PathLike,
        out_path: Optional[PathLike] = None,
        write_manifest: bool = False,
    ) -> PlanResult:
        """Produce a plan for one blueprint file.

        Args:
            blueprint_path: Blueprint file (YAML or JSON)
            out_path: Where to write the plan JSON; nothing is written when None
            write_manifest: Also write cost_manifest.json next to the plan

        Returns:
            PlanResult with the plan and the paths written
        """
        with timed_operation("run_plan"):
            content = read_text(blueprint_path)
            logger.info("Validating blueprint %s (%d bytes)", blueprint_path, len(content))
            blueprint = load_blueprint(content)

            engine = SelectionEngine(self.catalog, self.seed)
            plan = engine.select(blueprint)
            validate_stack_plan(plan)

            plan_json = plan_to_json(plan)
            output_path = None
            manifest_path = None
            if out_path is not None:
                output_path = write_text(out_path, plan_json)
                if write_manifest:
                    manifest = cost_manifest(
                        self.catalog, plan, blueprint.constraints.monthly_cost_usd_max
                    )
                    manifest_path = write_text(
                        output_path.parent / "cost_manifest.json", json.dumps(manifest, indent=2)
                    )

        return PlanResult(plan, plan_json, output_path, manifest_path)


def load_plan(path: PathLike) -> StackPlan:
    """Read a plan JSON file."""
    text = read_text(path)
    try:
        return plan_from_json(text)
    except ValueError as exc:
        raise ParseError("plan", str(exc)) from exc


def verify_plan_file(path: PathLike) -> bool:
    """True if the plan file's recorded fingerprint matches its content."""
    return verify_plan(load_plan(path))
