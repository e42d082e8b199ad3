"""Load and validate documentation site configuration.

This subpackage parses the project's ``site.yaml`` file into an immutable
:class:`SiteConfig`, validates the site identity with
:func:`resolve_identity`, and turns the raw ``sidebar`` list into a
:class:`NavigationTree` with :func:`build_tree`. Errors derive from
:class:`SiteConfigError` and carry the field name or sidebar label path needed
to fix the configuration.

Examples
--------
>>> from pathlib import Path
>>> from docsnav.config import build_tree, load_site_config, resolve_identity
>>> config = load_site_config(Path("docs/site.yaml"))  # doctest: +SKIP
>>> identity = resolve_identity(config.identity)  # doctest: +SKIP
>>> tree = build_tree(config.sidebar, config.sidebar_max_depth)  # doctest: +SKIP
>>> [entry.label for entry in tree.entries]  # doctest: +SKIP
['Home', 'Getting Started', 'Guides', 'Reference', 'Development']
"""

from .identity import resolve_identity
from .loader import load_site_config, parse_site_config
from .models import (
    DEFAULT_MAX_DEPTH,
    Badge,
    ContentRef,
    DuplicateSocialPlatformError,
    EmptyGroupError,
    ExternalUrl,
    Group,
    InvalidIdentityError,
    InvalidLink,
    InvalidNavEntryError,
    InvalidUrlError,
    Link,
    LinkTarget,
    MaxDepthExceededError,
    NavEntry,
    NavigationTree,
    NavWarning,
    RawIdentity,
    ResolvedPage,
    SiteConfig,
    SiteConfigError,
    SiteIdentity,
    SitePath,
    SocialLink,
    UnresolvedReference,
    UnresolvedReferenceError,
)
from .sidebar import build_tree

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "Badge",
    "ContentRef",
    "DuplicateSocialPlatformError",
    "EmptyGroupError",
    "ExternalUrl",
    "Group",
    "InvalidIdentityError",
    "InvalidLink",
    "InvalidNavEntryError",
    "InvalidUrlError",
    "Link",
    "LinkTarget",
    "MaxDepthExceededError",
    "NavEntry",
    "NavWarning",
    "NavigationTree",
    "RawIdentity",
    "ResolvedPage",
    "SiteConfig",
    "SiteConfigError",
    "SiteIdentity",
    "SitePath",
    "SocialLink",
    "UnresolvedReference",
    "UnresolvedReferenceError",
    "build_tree",
    "load_site_config",
    "parse_site_config",
    "resolve_identity",
]
