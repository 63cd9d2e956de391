"""Shared fixtures: rules catalogs from tests/fixtures and a blueprint factory."""

from pathlib import Path

import pytest

from contracts import Blueprint
from selector import RulesCatalog

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def fixture_text(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


def blueprint_data(**overrides) -> dict:
    """Plain blueprint mapping; keyword arguments replace top-level keys."""
    data = {
        "project_name": "test-project",
        "goals": ["Build a web application", "Support global users"],
        "constraints": {"monthly_cost_usd_max": 1000},
        "traffic_profile": {"rps_peak": 1000, "global": True, "latency_sensitive": False},
    }
    data.update(overrides)
    return data


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def rules_text() -> str:
    return fixture_text("rules.yaml")


@pytest.fixture
def catalog(rules_text) -> RulesCatalog:
    return RulesCatalog.load(rules_text)


@pytest.fixture
def minimal_catalog() -> RulesCatalog:
    """One candidate per category."""
    return RulesCatalog.load(fixture_text("minimal_rules.yaml"))


@pytest.fixture
def tied_catalog() -> RulesCatalog:
    """Three backends with identical metrics, everything else single."""
    return RulesCatalog.load(fixture_text("tied_rules.yaml"))


@pytest.fixture
def make_blueprint():
    """Factory: make_blueprint(constraints={...}, prefs={...}) -> Blueprint."""
    def _make(**overrides) -> Blueprint:
        return Blueprint.model_validate(blueprint_data(**overrides))
    return _make


@pytest.fixture
def blueprint(make_blueprint) -> Blueprint:
    return make_blueprint()
