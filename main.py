#!/usr/bin/env python3
"""Stackforge CLI - recommend a technology stack from a blueprint.

Usage:
    # Plan to stdout with the default catalog and seed
    python main.py plan -f ./blueprint.yaml

    # Custom rules and seed, written to a file with a cost manifest
    python main.py plan -f ./blueprint.json --rules ./rules.yaml --seed 7 --out ./outputs/plan.json --manifest

    # Check a plan's fingerprint
    python main.py verify ./outputs/plan.json
"""

import sys
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from contracts.adapters import stack_summary
from orchestrator import PlanRunner, configure_logging, verify_plan_file
from selector import (
    BudgetExceededError,
    NoCandidateError,
    PlanValidationError,
    StackforgeError,
)
from config import settings

EXIT_INPUT_ERROR = 1
EXIT_OUTPUT_ERROR = 2
EXIT_NO_STACK = 3

console = Console(stderr=True)


def exit_code_for(error: StackforgeError) -> int:
    """Map an error to the CLI exit code."""
    if isinstance(error, PlanValidationError):
        return EXIT_OUTPUT_ERROR
    if isinstance(error, (NoCandidateError, BudgetExceededError)):
        return EXIT_NO_STACK
    # ParseError, input ValidationError, IoError
    return EXIT_INPUT_ERROR


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Verbose logging (INFO) to stderr")
@click.option("--debug", is_flag=True, help="Debug logging, including per-candidate scores")
def main(verbose: bool, debug: bool):
    """Stackforge: deterministic technology stack selection."""
    level = "DEBUG" if debug else "INFO" if verbose else settings.log_level
    configure_logging(level, console)


@main.command()
@click.option(
    "--file", "-f", "file",
    required=True,
    help="Input blueprint file (YAML or JSON)"
)
@click.option(
    "--seed",
    type=click.IntRange(min=0, max=2 ** 64 - 1),
    default=None,
    help=f"Seed for deterministic tie-breaking (default: {settings.default_seed})"
)
@click.option(
    "--rules", "rules_path",
    default=None,
    help="Rules catalog file (default: resources/rules.yaml)"
)
@click.option(
    "--out", "out",
    default=None,
    help="Output file (default: stdout)"
)
@click.option(
    "--manifest",
    is_flag=True,
    help="Write cost_manifest.json next to --out"
)
@click.option(
    "--strict",
    is_flag=True,
    help="Reject rules whose weights do not sum to 1.0"
)
def plan(file: str, seed: Optional[int], rules_path: Optional[str], out: Optional[str], manifest: bool, strict: bool):
    """Generate a technology stack plan from a blueprint."""
    runner = PlanRunner(rules_path=rules_path, seed=seed, strict_weights=True if strict else None)
    try:
        result = runner.run(file, out_path=out, write_manifest=manifest)
    except StackforgeError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(exit_code_for(e))

    if result.output_path is None:
        click.echo(result.plan_json)
        return

    table = Table(title=f"Stack plan (seed {result.plan.meta.seed})")
    table.add_column("Category", style="dim")
    table.add_column("Choice", style="green")
    for category, choice in stack_summary(result.plan):
        table.add_row(category, choice)
    console.print(table)
    console.print(f"[green]Monthly cost:[/green] ${result.plan.estimated.monthly_cost_usd:.2f}")
    console.print(f"[bold]Output saved to:[/bold] {result.output_path}")
    if result.manifest_path:
        console.print(f"[bold]Cost manifest:[/bold] {result.manifest_path}")


@main.command()
@click.argument("plan_file")
def verify(plan_file: str):
    """Check that a plan's recorded fingerprint matches its content."""
    try:
        ok = verify_plan_file(plan_file)
    except StackforgeError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(exit_code_for(e))

    if ok:
        console.print("[green]✓ Plan fingerprint matches[/green]")
    else:
        console.print("[red]✗ Plan fingerprint does not match its content[/red]")
        sys.exit(EXIT_OUTPUT_ERROR)


if __name__ == "__main__":
    main()
