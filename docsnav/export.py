"""Serialise a resolved site for the documentation-rendering host.

Two formats are supported:

* :func:`render_json` emits the plain nested value produced by
  :func:`to_builtins`, with every site-relative href already prefixed by the
  base path, for hosts that consume JSON.
* :class:`StarlightConfigRenderer` renders an ``astro.config.mjs`` module for
  Astro Starlight from the ``starlight_config.jinja`` template. Starlight adds
  the base path itself, so sidebar links are emitted without it.

Examples
--------
>>> from docsnav.export import render_json
>>> payload = render_json(site)  # doctest: +SKIP
>>> payload.splitlines()[0]  # doctest: +SKIP
'{'
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import msgspec.json as msgspec_json
from jinja2 import Environment, FileSystemLoader, select_autoescape

from .config.models import (
    ContentRef,
    ExternalUrl,
    Group,
    Link,
    ResolvedPage,
    SitePath,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .build import ResolvedSite
    from .config.models import Badge, LinkTarget, NavEntry, SiteIdentity

    SourceLookup = cabc.Callable[[str], str | None]


def to_builtins(
    site: ResolvedSite, *, source_for: SourceLookup | None = None
) -> dict[str, typ.Any]:
    """Return ``site`` as plain dicts, lists, strings and booleans.

    Parameters
    ----------
    site : ResolvedSite
        Output of :class:`docsnav.build.SiteBuilder`.
    source_for : callable, optional
        Maps a page slug to its project-relative source file (for example
        :meth:`docsnav.catalog.DirectoryCatalog.source_for`). When given and the
        site has an edit link template, page links gain an ``editUrl``.
    """
    lookup = source_for if site.edit_link is not None else None
    return {
        "identity": _identity_builtins(site.identity),
        "navigation": [
            _entry_builtins(entry, site=site, source_for=lookup)
            for entry in site.navigation.entries
        ],
        "editLink": (
            {"baseUrl": site.edit_link.base_url} if site.edit_link is not None else None
        ),
        "customCss": list(site.custom_css),
        "lastUpdated": site.last_updated,
    }


def render_json(
    site: ResolvedSite, *, source_for: SourceLookup | None = None, indent: int = 2
) -> str:
    """Encode :func:`to_builtins` output as indented JSON text."""
    encoded = msgspec_json.encode(to_builtins(site, source_for=source_for))
    return msgspec_json.format(encoded, indent=indent).decode("utf-8") + "\n"


class StarlightConfigRenderer:
    """Render an Astro Starlight configuration module from a resolved site."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        """Initialise the Jinja environment.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing ``starlight_config.jinja``. Defaults to the
            ``docsnav/templates`` directory.
        """
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        # Keep declaration order; the sidebar order is the display order.
        self.env.policies["json.dumps_kwargs"] = {"sort_keys": False}
        self.template = self.env.get_template("starlight_config.jinja")

    def render(self, site: ResolvedSite) -> str:
        identity = site.identity
        context = {
            "identity": identity,
            "social": [
                {"icon": link.platform, "label": link.label, "href": link.href}
                for link in identity.social_links
            ],
            "edit_link": site.edit_link.base_url if site.edit_link else None,
            "sidebar": [_starlight_entry(entry) for entry in site.navigation.entries],
            "custom_css": list(site.custom_css),
            "last_updated": site.last_updated,
        }
        return self.template.render(**context)


def _identity_builtins(identity: SiteIdentity) -> dict[str, typ.Any]:
    return {
        "title": identity.title,
        "description": identity.description,
        "site": identity.canonical_url,
        "base": identity.base_path,
        "social": [
            {"icon": link.platform, "label": link.label, "href": link.href}
            for link in identity.social_links
        ],
    }


def _entry_builtins(
    entry: NavEntry,
    *,
    site: ResolvedSite,
    source_for: SourceLookup | None,
) -> dict[str, typ.Any]:
    match entry:
        case Group(label=label, children=children, collapsed=collapsed):
            data: dict[str, typ.Any] = {
                "label": label,
                "items": [
                    _entry_builtins(child, site=site, source_for=source_for)
                    for child in children
                ],
            }
            if collapsed:
                data["collapsed"] = True
        case Link(label=label, target=target, attrs=attrs):
            data = {"label": label, "href": _href(target, site.identity)}
            if attrs:
                data["attrs"] = dict(attrs)
            if isinstance(target, ResolvedPage) and source_for is not None:
                source = source_for(target.slug)
                if source is not None and site.edit_link is not None:
                    data["editUrl"] = site.edit_link.url_for(source)
        case _:
            typ.assert_never(entry)
    if entry.badge is not None:
        data["badge"] = _badge_builtins(entry.badge)
    return data


def _starlight_entry(entry: NavEntry) -> dict[str, typ.Any]:
    match entry:
        case Group(label=label, children=children, collapsed=collapsed):
            data: dict[str, typ.Any] = {
                "label": label,
                "items": [_starlight_entry(child) for child in children],
            }
            if collapsed:
                data["collapsed"] = True
        case Link(label=label, target=target, attrs=attrs):
            data = {"label": label, "link": _href(target, None)}
            if attrs:
                data["attrs"] = dict(attrs)
        case _:
            typ.assert_never(entry)
    if entry.badge is not None:
        data["badge"] = _badge_builtins(entry.badge)
    return data


def _href(target: LinkTarget, identity: SiteIdentity | None) -> str:
    """Return a resolved target's href, base-prefixed when ``identity`` is set."""
    match target:
        case ExternalUrl(href=href):
            return href
        case ResolvedPage(href=path) | SitePath(path=path):
            return identity.site_path(path) if identity is not None else path
        case ContentRef(slug=slug):
            msg = f"Cannot export unresolved content reference '{slug}'."
            raise ValueError(msg)
        case _:
            typ.assert_never(target)


def _badge_builtins(badge: Badge) -> dict[str, str]:
    return {"text": badge.text, "variant": badge.variant}


__all__ = ["StarlightConfigRenderer", "render_json", "to_builtins"]
