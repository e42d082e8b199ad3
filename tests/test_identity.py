"""Unit tests for site identity validation.

These tests cover :func:`docsnav.config.resolve_identity`: required text
fields, canonical URL and base path rules, and social link handling including
duplicate platform detection.

Usage
-----
Run ``pytest tests/test_identity.py -v`` to execute the suite.
"""

from __future__ import annotations

import dataclasses as dc

import pytest

from docsnav.config import (
    DuplicateSocialPlatformError,
    InvalidIdentityError,
    InvalidUrlError,
    RawIdentity,
    SocialLink,
    resolve_identity,
)

BASE_IDENTITY = RawIdentity(
    title="Portainer MCP",
    description="Model Context Protocol server for Portainer container management",
    site="https://portainer.github.io",
    base="/portainer-mcp",
    social=(
        {
            "icon": "github",
            "label": "GitHub",
            "href": "https://github.com/portainer/portainer-mcp",
        },
    ),
)


def test_resolves_complete_identity() -> None:
    """A complete identity block should pass through with normalised fields."""
    identity = resolve_identity(BASE_IDENTITY)
    assert identity.title == "Portainer MCP"
    assert identity.canonical_url == "https://portainer.github.io"
    assert identity.base_path == "/portainer-mcp"
    assert identity.social_links == (
        SocialLink(
            platform="github",
            label="GitHub",
            href="https://github.com/portainer/portainer-mcp",
        ),
    ), f"unexpected social links: {identity.social_links!r}"


@pytest.mark.parametrize("field", ["title", "description"])
@pytest.mark.parametrize("value", [None, "", "   "])
def test_blank_text_fields_are_rejected(field: str, value: str | None) -> None:
    """Title and description must be non-empty after trimming."""
    raw = dc.replace(BASE_IDENTITY, **{field: value})
    with pytest.raises(InvalidIdentityError) as excinfo:
        resolve_identity(raw)
    assert excinfo.value.field == field
    assert excinfo.value.kind == "InvalidIdentity"


def test_text_fields_are_trimmed() -> None:
    identity = resolve_identity(dc.replace(BASE_IDENTITY, title="  Docs  "))
    assert identity.title == "Docs"


def test_missing_site_is_an_identity_error() -> None:
    with pytest.raises(InvalidIdentityError) as excinfo:
        resolve_identity(dc.replace(BASE_IDENTITY, site=None))
    assert excinfo.value.field == "site"


@pytest.mark.parametrize(
    "site",
    [
        "http://portainer.github.io",
        "portainer.github.io",
        "https://",
        "https:///path-only",
        "ftp://portainer.github.io",
        "https://bad host.io",
    ],
)
def test_canonical_url_must_be_absolute_https(site: str) -> None:
    """The canonical URL must parse as an absolute https URL with a host."""
    with pytest.raises(InvalidUrlError) as excinfo:
        resolve_identity(dc.replace(BASE_IDENTITY, site=site))
    assert excinfo.value.field == "site"
    assert excinfo.value.value == site


def test_canonical_url_trailing_slash_is_dropped() -> None:
    identity = resolve_identity(dc.replace(BASE_IDENTITY, site="https://a.dev/"))
    assert identity.canonical_url == "https://a.dev"


@pytest.mark.parametrize(
    ("base", "expected"),
    [
        (None, "/"),
        ("/", "/"),
        ("/docs/", "/docs"),
        ("//docs//v2/", "/docs/v2"),
    ],
)
def test_base_path_is_normalised(base: str | None, expected: str) -> None:
    identity = resolve_identity(dc.replace(BASE_IDENTITY, base=base))
    assert identity.base_path == expected, (
        f"expected base {expected!r} for {base!r}, got {identity.base_path!r}"
    )


@pytest.mark.parametrize("base", ["docs", "/docs/../secret", "/./docs"])
def test_invalid_base_paths_are_rejected(base: str) -> None:
    with pytest.raises(InvalidIdentityError) as excinfo:
        resolve_identity(dc.replace(BASE_IDENTITY, base=base))
    assert excinfo.value.field == "base"


def test_absolute_url_joins_canonical_and_base() -> None:
    identity = resolve_identity(BASE_IDENTITY)
    assert (
        identity.absolute_url("/guides/meta-tools/")
        == "https://portainer.github.io/portainer-mcp/guides/meta-tools/"
    )
    assert identity.absolute_url() == "https://portainer.github.io/portainer-mcp/"


def test_duplicate_social_platform_is_rejected() -> None:
    """Two social entries sharing a platform tag fail with the platform name."""
    raw = dc.replace(
        BASE_IDENTITY,
        social=(
            {"platform": "github", "label": "Code", "href": "https://github.com/a"},
            {"platform": "github", "label": "Mirror", "href": "https://github.com/b"},
        ),
    )
    with pytest.raises(DuplicateSocialPlatformError) as excinfo:
        resolve_identity(raw)
    assert excinfo.value.platform == "github"
    assert excinfo.value.kind == "DuplicateSocialPlatform"


def test_social_label_defaults_to_platform_name() -> None:
    raw = dc.replace(
        BASE_IDENTITY,
        social=(
            {"icon": "discord", "href": "https://discord.gg/example"},
            {"icon": "github", "href": "https://github.com/example"},
        ),
    )
    identity = resolve_identity(raw)
    assert [link.label for link in identity.social_links] == ["Discord", "GitHub"], (
        "expected default labels in declaration order"
    )


def test_social_href_must_be_absolute() -> None:
    raw = dc.replace(BASE_IDENTITY, social=({"icon": "github", "href": "/github"},))
    with pytest.raises(InvalidUrlError) as excinfo:
        resolve_identity(raw)
    assert excinfo.value.field == "social[0].href"


def test_unknown_social_platform_is_rejected() -> None:
    raw = dc.replace(
        BASE_IDENTITY, social=({"icon": "myspace", "href": "https://myspace.com/x"},)
    )
    with pytest.raises(InvalidIdentityError) as excinfo:
        resolve_identity(raw)
    assert excinfo.value.field == "social[0].icon"


def test_social_entry_without_href_is_rejected() -> None:
    raw = dc.replace(BASE_IDENTITY, social=({"icon": "github"},))
    with pytest.raises(InvalidIdentityError) as excinfo:
        resolve_identity(raw)
    assert excinfo.value.field == "social[0]"
