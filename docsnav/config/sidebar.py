"""Build the navigation tree from raw ``sidebar`` entries.

The sidebar is declared as an ordered list of mappings. Each mapping is either
a leaf (``link`` for a URL or site path, ``slug`` for a content page) or a
group (``items`` holding further entries). :func:`build_tree` classifies every
entry, validates it, and returns an immutable :class:`NavigationTree` whose
order matches the declaration order exactly. Content slugs are left as
:class:`ContentRef` targets for :func:`docsnav.resolver.resolve_references`.

Examples
--------
>>> from docsnav.config import build_tree
>>> tree = build_tree(
...     [
...         {"label": "Home", "link": "/"},
...         {"label": "Guides", "items": [{"label": "Setup", "slug": "guides/setup"}]},
...     ]
... )
>>> [entry.label for entry in tree.entries]
['Home', 'Guides']
"""

from __future__ import annotations

import collections
import collections.abc as cabc
import logging
import typing as typ

from .helpers import (
    _build_badge,
    _has_dot_segments,
    _normalize_attrs,
    _optional_str,
    _parse_content_ref,
)
from .models import (
    DEFAULT_MAX_DEPTH,
    ContentRef,
    EmptyGroupError,
    ExternalUrl,
    Group,
    InvalidNavEntryError,
    Link,
    MaxDepthExceededError,
    NavEntry,
    NavigationTree,
    NavWarning,
    SitePath,
)

if typ.TYPE_CHECKING:
    from .models import Badge

logger = logging.getLogger(__name__)

DUPLICATE_SLUG = "duplicate-slug"


def build_tree(
    raw_entries: cabc.Sequence[typ.Any], max_depth: int = DEFAULT_MAX_DEPTH
) -> NavigationTree:
    """Build an unresolved navigation tree from raw sidebar entries.

    Parameters
    ----------
    raw_entries : Sequence
        Ordered sidebar entries as loaded from the configuration file.
    max_depth : int, optional
        Maximum group nesting depth; a top-level group has depth 1.

    Returns
    -------
    NavigationTree
        Tree in declaration order. Duplicate slugs are reported through
        :attr:`NavigationTree.warnings` and the module logger.

    Raises
    ------
    ValueError
        If ``max_depth`` is not a positive integer.
    InvalidNavEntryError
        If an entry is not a mapping, lacks a label, mixes leaf and group
        keys, has a slug with ``.`` or ``..`` segments, or has a non-boolean
        ``collapsed``.
    EmptyGroupError
        If a group declares no items. An entry with neither ``link`` nor
        ``slug`` is a group, so a bare label fails here too.
    MaxDepthExceededError
        If a group sits deeper than ``max_depth``.
    """
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
        msg = f"max_depth must be a positive integer, got {max_depth!r}"
        raise ValueError(msg)
    entries = _build_entries(raw_entries, parents=(), depth=0, max_depth=max_depth)
    warnings = _duplicate_slug_warnings(entries)
    for warning in warnings:
        logger.warning(warning.message)
    return NavigationTree(entries=entries, warnings=warnings)


def _build_entries(
    raw_entries: cabc.Sequence[typ.Any],
    *,
    parents: tuple[str, ...],
    depth: int,
    max_depth: int,
) -> tuple[NavEntry, ...]:
    return tuple(
        _build_entry(raw, parents=parents, depth=depth, max_depth=max_depth)
        for raw in raw_entries
    )


def _build_entry(
    raw: object,
    *,
    parents: tuple[str, ...],
    depth: int,
    max_depth: int,
) -> NavEntry:
    """Classify a single raw entry and build the matching Link or Group."""
    if not isinstance(raw, cabc.Mapping):
        msg = f"must be a mapping, got {type(raw).__name__}"
        raise InvalidNavEntryError(parents, msg)
    label = _optional_str(raw.get("label"))
    if label is None:
        raise InvalidNavEntryError(parents, "requires a non-empty 'label'")
    path = (*parents, label)
    badge = _entry_badge(raw, path)

    match raw:
        case {"items": _, "link": _} | {"items": _, "slug": _}:
            msg = "cannot combine 'items' with 'link' or 'slug'"
            raise InvalidNavEntryError(path, msg)
        case {"link": _, "slug": _}:
            raise InvalidNavEntryError(path, "cannot declare both 'link' and 'slug'")
        case {"link": link}:
            href = _optional_str(link)
            if href is None:
                raise InvalidNavEntryError(path, "has an empty 'link'")
            target = SitePath(href) if href.startswith("/") else ExternalUrl(href)
        case {"slug": slug}:
            ref = _parse_content_ref(str(slug)) if slug is not None else None
            if ref is None:
                raise InvalidNavEntryError(path, "has an empty 'slug'")
            if _has_dot_segments(ref.slug):
                msg = f"has '.' or '..' segments in 'slug' {slug!r}"
                raise InvalidNavEntryError(path, msg)
            target = ref
        case _:
            # Without a leaf target the entry is a group, even if 'items' is absent.
            return _build_group(
                raw.get("items"),
                path=path,
                depth=depth + 1,
                max_depth=max_depth,
                collapsed=_collapsed(raw.get("collapsed"), path),
                badge=badge,
            )

    attrs = raw.get("attrs")
    if attrs is not None and not isinstance(attrs, cabc.Mapping):
        raise InvalidNavEntryError(path, "has non-mapping 'attrs'")
    return Link(label=label, target=target, badge=badge, attrs=_normalize_attrs(attrs))


def _build_group(
    items: object,
    *,
    path: tuple[str, ...],
    depth: int,
    max_depth: int,
    collapsed: bool,
    badge: Badge | None,
) -> Group:
    if depth > max_depth:
        raise MaxDepthExceededError(path, max_depth)
    match items:
        case None | []:
            raise EmptyGroupError(path)
        case list() | tuple():
            children = _build_entries(
                items, parents=path, depth=depth, max_depth=max_depth
            )
        case _:
            raise InvalidNavEntryError(path, "has non-list 'items'")
    return Group(label=path[-1], children=children, collapsed=collapsed, badge=badge)


def _collapsed(value: object, path: tuple[str, ...]) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise InvalidNavEntryError(path, "has non-boolean 'collapsed'")
    return value


def _entry_badge(raw: typ.Mapping[str, typ.Any], path: tuple[str, ...]) -> Badge | None:
    payload = raw.get("badge")
    badge = _build_badge(payload)
    if payload is not None and badge is None:
        raise InvalidNavEntryError(path, f"has an invalid 'badge' {payload!r}")
    return badge


def _duplicate_slug_warnings(entries: tuple[NavEntry, ...]) -> tuple[NavWarning, ...]:
    """Return one warning per slug referenced from more than one leaf."""
    locations: dict[str, list[tuple[str, ...]]] = collections.defaultdict(list)
    for label_path, link in NavigationTree(entries).iter_links():
        if isinstance(link.target, ContentRef):
            locations[link.target.slug].append(label_path)
    warnings: list[NavWarning] = []
    for slug, paths in locations.items():
        if len(paths) < 2:
            continue
        where = "; ".join(" > ".join(path) for path in paths)
        message = f"Slug '{slug}' appears {len(paths)} times in the sidebar: {where}"
        warnings.append(
            NavWarning(code=DUPLICATE_SLUG, message=message, label_paths=tuple(paths))
        )
    return tuple(warnings)


__all__ = ["DUPLICATE_SLUG", "build_tree"]
