#!/usr/bin/env python3
"""Time blueprint parsing and stack selection against the default catalog.

Usage:
  python scripts/bench_selection.py                 # 1000 iterations each
  python scripts/bench_selection.py --iterations 200
"""

import argparse
import sys
import time
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from rich.console import Console  # noqa: E402
from rich.table import Table  # noqa: E402

from config import settings  # noqa: E402
from selector import RulesCatalog, SelectionEngine, load_blueprint, validate_stack_plan  # noqa: E402

BLUEPRINT_YAML = """
project_name: "benchmark-project"
goals:
  - "Build a high-performance web application"
  - "Support global users"
constraints:
  monthly_cost_usd_max: 1000
  region_allow: ["us-east-1", "eu-west-1"]
traffic_profile:
  rps_peak: 50000
  global: true
  latency_sensitive: true
prefs:
  database: ["PostgreSQL", "Redis"]
"""


def bench(label, fn, iterations):
    """Return (label, total seconds, microseconds per call)."""
    start = time.perf_counter()
    for _ in range(iterations):
        fn()
    elapsed = time.perf_counter() - start
    return label, elapsed, elapsed / iterations * 1_000_000


def main():
    ap = argparse.ArgumentParser(description="Benchmark stack selection")
    ap.add_argument("--iterations", type=int, default=1000, help="Iterations per benchmark")
    ap.add_argument("--rules", default=settings.rules_path, help="Rules catalog file")
    args = ap.parse_args()

    rules_text = Path(args.rules).read_text(encoding="utf-8")
    catalog = RulesCatalog.load(rules_text)
    blueprint = load_blueprint(BLUEPRINT_YAML)
    engine = SelectionEngine(catalog, 42)
    plan = engine.select(blueprint)

    results = [
        bench("blueprint_validation", lambda: load_blueprint(BLUEPRINT_YAML), args.iterations),
        bench("rules_load", lambda: RulesCatalog.load(rules_text), args.iterations),
        bench("selection_algorithm", lambda: engine.select(blueprint), args.iterations),
        bench("stack_validation", lambda: validate_stack_plan(plan), args.iterations),
    ]

    table = Table(title=f"Selection benchmarks ({args.iterations} iterations)")
    table.add_column("Benchmark")
    table.add_column("Total (s)", justify="right")
    table.add_column("Per call (µs)", justify="right")
    for label, total, per_call in results:
        table.add_row(label, f"{total:.3f}", f"{per_call:.1f}")
    Console().print(table)


if __name__ == "__main__":
    main()
