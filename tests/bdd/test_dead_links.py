"""Behaviour tests for dead-link checking of the navigation model.

These pytest-bdd scenarios build a :class:`SiteDescriptor` step by step and
run :class:`LinkChecker` against an in-memory content set, covering a
resolving sidebar link, a missing document, and a loopback URL exempted by an
ignore pattern. The feature file ``dead_links.feature`` drives the scenarios.

Usage
-----
Run ``pytest tests/bdd/test_dead_links.py -v``. No files or network access
are needed.
"""

from __future__ import annotations

import re
import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from webaudio_pages.config import NavEntry, SidebarGroup, SiteDescriptor
from webaudio_pages.content import ContentTree
from webaudio_pages.links import LinkChecker, LinkDiagnostic

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "dead_links.feature"
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {"patterns": [], "content": []}


@given(
    parsers.parse('a sidebar group "{group}" linking "{label}" to "{target}"')
)
def given_sidebar(
    scenario_state: ScenarioState, group: str, label: str, target: str
) -> None:
    """Record a single-entry sidebar group."""
    scenario_state["sidebar"] = (SidebarGroup(group, (NavEntry(label, target),)),)


@given(parsers.parse('the content set contains "{path}"'))
def given_content(scenario_state: ScenarioState, path: str) -> None:
    """Add a document path to the content set."""
    scenario_state["content"].append(path)


@given("the content set is empty")
def given_empty_content(scenario_state: ScenarioState) -> None:
    """Leave the content set without documents."""
    scenario_state["content"] = []


@given(parsers.parse('the dead-link ignore pattern "{pattern}"'))
def given_pattern(scenario_state: ScenarioState, pattern: str) -> None:
    """Register a dead-link ignore pattern."""
    scenario_state["patterns"].append(re.compile(pattern))


@when("I check the site links")
def when_check(scenario_state: ScenarioState) -> None:
    """Run navigation link checking for the assembled descriptor."""
    site = SiteDescriptor(
        title="Scenario",
        sidebar=scenario_state["sidebar"],
        dead_link_ignore_patterns=tuple(scenario_state["patterns"]),
    )
    checker = LinkChecker(site, ContentTree(scenario_state["content"]))
    scenario_state["diagnostics"] = checker.check_navigation()


@then("no dead links are reported")
def then_no_dead_links(scenario_state: ScenarioState) -> None:
    """Assert the check passed."""
    diagnostics = typ.cast("list[LinkDiagnostic]", scenario_state["diagnostics"])
    assert diagnostics == [], f"expected no dead links, got {diagnostics!r}"


@then(parsers.parse('an "{reason}" diagnostic names "{target}"'))
def then_diagnostic(scenario_state: ScenarioState, reason: str, target: str) -> None:
    """Assert exactly one diagnostic with the given reason and target."""
    diagnostics = typ.cast("list[LinkDiagnostic]", scenario_state["diagnostics"])
    assert [(d.reason, d.target) for d in diagnostics] == [(reason, target)], (
        f"expected one {reason!r} diagnostic for {target!r}, got {diagnostics!r}"
    )
