"""Validate and resolve a documentation site's identity and navigation.

This package turns a declarative site configuration (title, canonical URL,
social links, sidebar) into an immutable, fully resolved value that a
documentation-rendering host such as Astro Starlight can consume.

Exports
-------
- ``app``: Cyclopts application behind the ``docsnav`` console script.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``build_site``: Run identity validation, sidebar building and slug
  resolution in one call.

Examples
--------
>>> from docsnav import build_site
>>> from docsnav.catalog import MappingCatalog
>>> from docsnav.config import parse_site_config
>>> config = parse_site_config(
...     {
...         "title": "Docs",
...         "description": "Manual",
...         "site": "https://docs.example.com",
...         "sidebar": [{"label": "Setup", "slug": "setup"}],
...     }
... )
>>> site = build_site(config, MappingCatalog({"setup": "/setup/"}))
>>> site.navigation.entries[0].target.path
'/setup/'
"""

from __future__ import annotations

from .build import build_site
from .cli import app, main

__all__ = ["app", "build_site", "main"]
