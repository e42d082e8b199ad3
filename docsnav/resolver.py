"""Resolve sidebar content references against a content catalog.

:func:`resolve_references` walks the navigation tree in document order
(depth-first, left to right). Every :class:`ContentRef` leaf is looked up in
the catalog; external URLs are checked but never looked up. Failures are
collected for the whole tree so that a single build reports every broken
link, and no partially resolved tree is ever returned.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .config.helpers import _is_absolute_url
from .config.models import (
    ContentRef,
    ExternalUrl,
    Group,
    InvalidLink,
    InvalidUrlError,
    Link,
    NavEntry,
    NavigationTree,
    ResolvedPage,
    SitePath,
    UnresolvedReference,
    UnresolvedReferenceError,
)

if typ.TYPE_CHECKING:
    from .catalog import ContentCatalog


class _Problems(typ.NamedTuple):
    unresolved: list[UnresolvedReference]
    invalid: list[InvalidLink]


def resolve_references(
    tree: NavigationTree, catalog: ContentCatalog
) -> NavigationTree:
    """Return a copy of ``tree`` with every content slug resolved to a page path.

    Parameters
    ----------
    tree : NavigationTree
        Tree produced by :func:`docsnav.config.build_tree`.
    catalog : ContentCatalog
        Lookup used for ``slug`` entries; queried once per content leaf.

    Returns
    -------
    NavigationTree
        Fully resolved tree; warnings from the input tree are carried over.

    Raises
    ------
    UnresolvedReferenceError
        If any slug is unknown to the catalog. Lists every unresolved slug with
        its label path, plus any invalid external links found in the same pass.
    InvalidUrlError
        If every slug resolved but one or more external links are not absolute
        http(s) URLs.
    """
    problems = _Problems(unresolved=[], invalid=[])
    entries = _resolve_entries(tree.entries, (), catalog, problems)
    if problems.unresolved:
        raise UnresolvedReferenceError(
            problems.unresolved, invalid_links=problems.invalid
        )
    if problems.invalid:
        first = problems.invalid[0]
        raise InvalidUrlError(
            " > ".join(first.label_path), first.href, links=tuple(problems.invalid)
        )
    return NavigationTree(entries=entries, warnings=tree.warnings)


def _resolve_entries(
    entries: tuple[NavEntry, ...],
    parents: tuple[str, ...],
    catalog: ContentCatalog,
    problems: _Problems,
) -> tuple[NavEntry, ...]:
    resolved: list[NavEntry] = []
    for entry in entries:
        path = (*parents, entry.label)
        match entry:
            case Group(children=children):
                children = _resolve_entries(children, path, catalog, problems)
                resolved.append(dc.replace(entry, children=children))
            case Link(target=ContentRef(slug=slug, anchor=anchor)):
                page_path = catalog.lookup(slug)
                if page_path is None:
                    problems.unresolved.append(UnresolvedReference(slug, path))
                    resolved.append(entry)
                    continue
                target = ResolvedPage(slug=slug, path=page_path, anchor=anchor)
                resolved.append(dc.replace(entry, target=target))
            case Link(target=ExternalUrl(href=href)):
                if not _is_absolute_url(href):
                    problems.invalid.append(InvalidLink(href, path))
                resolved.append(entry)
            case Link(target=SitePath() | ResolvedPage()):
                resolved.append(entry)
            case _:
                typ.assert_never(entry)
    return tuple(resolved)


__all__ = ["resolve_references"]
