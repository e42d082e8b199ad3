"""Behaviour tests for composing site navigation using pytest-bdd.

These scenarios build a site from an in-memory configuration and content
catalog and check the resolved sidebar, the unresolved-reference report and
the duplicate social platform failure.

Usage
-----
Run ``pytest tests/bdd/test_site_navigation.py -v``.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from docsnav.build import SiteBuilder
from docsnav.catalog import MappingCatalog
from docsnav.config import (
    DuplicateSocialPlatformError,
    Group,
    Link,
    ResolvedPage,
    SitePath,
    UnresolvedReferenceError,
    parse_site_config,
)

if typ.TYPE_CHECKING:
    from docsnav.build import ResolvedSite

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "site_navigation.feature"
)
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]

IDENTITY: dict[str, typ.Any] = {
    "title": "Portainer MCP",
    "description": "Model Context Protocol server for Portainer",
    "site": "https://portainer.github.io",
}


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Share mutable scenario data across pytest-bdd steps."""
    return {}


@given("a site config with a Home link and a Guides group")
def given_home_and_guides(scenario_state: ScenarioState) -> None:
    scenario_state["config"] = parse_site_config(
        {
            **IDENTITY,
            "sidebar": [
                {"label": "Home", "link": "/"},
                {
                    "label": "Guides",
                    "items": [{"label": "Meta-Tools", "slug": "guides/meta-tools"}],
                },
            ],
        }
    )


@given(parsers.parse('a site config declaring the "{platform}" platform twice'))
def given_duplicate_social(scenario_state: ScenarioState, platform: str) -> None:
    scenario_state["config"] = parse_site_config(
        {
            **IDENTITY,
            "social": [
                {"icon": platform, "href": "https://github.com/portainer"},
                {"icon": platform, "href": "https://github.com/portainer/mcp"},
            ],
            "sidebar": [{"label": "Home", "link": "/"}],
        }
    )


@given(parsers.parse('a content catalog containing the "{slug}" page'))
def given_catalog(scenario_state: ScenarioState, slug: str) -> None:
    scenario_state["catalog"] = MappingCatalog({slug: f"/{slug}/"})


@given("an empty content catalog")
def given_empty_catalog(scenario_state: ScenarioState) -> None:
    scenario_state["catalog"] = MappingCatalog({})


@when("the site is built")
def when_site_built(scenario_state: ScenarioState) -> None:
    """Run the build and keep either the resolved site or the failure."""
    builder = SiteBuilder(scenario_state["config"], scenario_state["catalog"])
    scenario_state["builder"] = builder
    try:
        scenario_state["site"] = builder.run()
    except (DuplicateSocialPlatformError, UnresolvedReferenceError) as exc:
        scenario_state["error"] = exc


@then(parsers.parse('the navigation has a "{label}" link to "{path}"'))
def then_top_level_link(scenario_state: ScenarioState, label: str, path: str) -> None:
    site = typ.cast("ResolvedSite", scenario_state["site"])
    assert Link(label=label, target=SitePath(path)) in site.navigation.entries


@then(parsers.parse('the "{group}" group links "{label}" to "{path}"'))
def then_group_link(
    scenario_state: ScenarioState, group: str, label: str, path: str
) -> None:
    site = typ.cast("ResolvedSite", scenario_state["site"])
    (found,) = [
        entry
        for entry in site.navigation.entries
        if isinstance(entry, Group) and entry.label == group
    ]
    (child,) = found.children
    assert isinstance(child, Link)
    assert child.label == label
    assert isinstance(child.target, ResolvedPage)
    assert child.target.path == path


@then(parsers.parse('the build fails with an unresolved reference to "{slug}"'))
def then_unresolved(scenario_state: ScenarioState, slug: str) -> None:
    error = scenario_state["error"]
    assert isinstance(error, UnresolvedReferenceError)
    assert error.slugs == (slug,)
    assert scenario_state["builder"].failure is error


@then(parsers.parse('the unresolved reference is located at "{location}"'))
def then_unresolved_location(scenario_state: ScenarioState, location: str) -> None:
    error = typ.cast("UnresolvedReferenceError", scenario_state["error"])
    (reference,) = error.references
    assert reference.label_path == tuple(location.split(" > "))


@then(parsers.parse('the build fails because "{platform}" is declared twice'))
def then_duplicate_social(scenario_state: ScenarioState, platform: str) -> None:
    error = scenario_state["error"]
    assert isinstance(error, DuplicateSocialPlatformError)
    assert error.platform == platform
    assert "site" not in scenario_state
