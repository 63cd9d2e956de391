"""Orchestrator module: file-level plan runs and logging setup."""

from .observability import configure_logging, timed_operation
from .plan_runner import (
    PlanRunner,
    PlanResult,
    cost_manifest,
    load_plan,
    read_text,
    verify_plan_file,
    write_text,
)

__all__ = [
    "configure_logging",
    "timed_operation",
    "PlanRunner",
    "PlanResult",
    "cost_manifest",
    "load_plan",
    "read_text",
    "verify_plan_file",
    "write_text",
]
