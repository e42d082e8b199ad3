"""Typed dataclasses describing documentation site configuration structures."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

if typ.TYPE_CHECKING:
    import collections.abc as cabc

DEFAULT_MAX_DEPTH = 6


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""

    kind = "SiteConfig"


class InvalidIdentityError(SiteConfigError):
    """Raised when a required identity field is missing or malformed."""

    kind = "InvalidIdentity"

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"Site identity field '{field}' {reason}.")


class InvalidUrlError(SiteConfigError):
    """Raised when a URL in the configuration is not an acceptable absolute URL."""

    kind = "InvalidUrl"

    def __init__(
        self,
        field: str,
        value: str,
        *,
        links: tuple[InvalidLink, ...] = (),
    ) -> None:
        self.field = field
        self.value = value
        self.links = links
        if links:
            details = "; ".join(
                f"{' > '.join(link.label_path)} -> {link.href!r}" for link in links
            )
            msg = f"Navigation links must be absolute http(s) URLs: {details}"
        else:
            msg = f"'{field}' is not a valid absolute URL: {value!r}"
        super().__init__(msg)


class DuplicateSocialPlatformError(SiteConfigError):
    """Raised when two social links share the same platform tag."""

    kind = "DuplicateSocialPlatform"

    def __init__(self, platform: str) -> None:
        self.platform = platform
        super().__init__(f"Social platform '{platform}' is declared more than once.")


class InvalidNavEntryError(SiteConfigError):
    """Raised when a sidebar entry has an unrecognised or malformed shape."""

    kind = "InvalidNavEntry"

    def __init__(self, label_path: tuple[str, ...], reason: str) -> None:
        self.label_path = label_path
        self.reason = reason
        where = " > ".join(label_path) or "<root>"
        super().__init__(f"Sidebar entry at {where} {reason}.")


class EmptyGroupError(SiteConfigError):
    """Raised when a sidebar group declares no items."""

    kind = "EmptyGroup"

    def __init__(self, label_path: tuple[str, ...]) -> None:
        self.label_path = label_path
        super().__init__(
            f"Sidebar group {' > '.join(label_path)} must contain at least one item."
        )


class MaxDepthExceededError(SiteConfigError):
    """Raised when sidebar groups nest deeper than the configured limit."""

    kind = "MaxDepthExceeded"

    def __init__(self, label_path: tuple[str, ...], max_depth: int) -> None:
        self.label_path = label_path
        self.max_depth = max_depth
        super().__init__(
            f"Sidebar group {' > '.join(label_path)} exceeds the maximum nesting "
            f"depth of {max_depth}."
        )


@dc.dataclass(frozen=True, slots=True)
class UnresolvedReference:
    """A content slug the catalog could not resolve, with its sidebar location."""

    slug: str
    label_path: tuple[str, ...]


@dc.dataclass(frozen=True, slots=True)
class InvalidLink:
    """An external sidebar link whose href is not an absolute URL."""

    href: str
    label_path: tuple[str, ...]


class UnresolvedReferenceError(SiteConfigError):
    """Raised with every sidebar slug missing from the content catalog."""

    kind = "UnresolvedReference"

    def __init__(
        self,
        references: cabc.Sequence[UnresolvedReference],
        *,
        invalid_links: cabc.Sequence[InvalidLink] = (),
    ) -> None:
        self.references = tuple(references)
        self.invalid_links = tuple(invalid_links)
        lines = [
            f"  - {ref.slug!r} at {' > '.join(ref.label_path)}"
            for ref in self.references
        ]
        msg = f"{len(self.references)} unresolved sidebar reference(s):\n" + "\n".join(
            lines
        )
        if self.invalid_links:
            msg += f"\n{len(self.invalid_links)} invalid external link(s) also found."
        super().__init__(msg)

    @property
    def slugs(self) -> tuple[str, ...]:
        """Return the unresolved slugs in document order."""
        return tuple(ref.slug for ref in self.references)


@dc.dataclass(frozen=True, slots=True)
class SocialLink:
    """A social network link shown in the site header."""

    platform: str
    label: str
    href: str


@dc.dataclass(frozen=True, slots=True)
class RawIdentity:
    """Identity fields exactly as they appear in the configuration file."""

    title: str | None = None
    description: str | None = None
    site: str | None = None
    base: str | None = None
    social: tuple[typ.Mapping[str, typ.Any], ...] = ()


@dc.dataclass(frozen=True, slots=True)
class SiteIdentity:
    """Validated global identity of the documentation site."""

    title: str
    description: str
    canonical_url: str
    base_path: str = "/"
    social_links: tuple[SocialLink, ...] = ()

    def site_path(self, path: str) -> str:
        """Return ``path`` prefixed with the site's base path."""
        if self.base_path == "/":
            return path if path.startswith("/") else f"/{path}"
        return f"{self.base_path}/{path.lstrip('/')}"

    def absolute_url(self, path: str = "/") -> str:
        """Return the canonical absolute URL for a site-relative ``path``."""
        return f"{self.canonical_url}{self.site_path(path)}"


@dc.dataclass(frozen=True, slots=True)
class ContentRef:
    """An unresolved reference to a content page by slug."""

    slug: str
    anchor: str | None = None


@dc.dataclass(frozen=True, slots=True)
class ExternalUrl:
    """A link leaving the documentation site."""

    href: str


@dc.dataclass(frozen=True, slots=True)
class SitePath:
    """A site-relative link that bypasses the content catalog."""

    path: str


@dc.dataclass(frozen=True, slots=True)
class ResolvedPage:
    """A content reference after lookup in the content catalog."""

    slug: str
    path: str
    anchor: str | None = None

    @property
    def href(self) -> str:
        """Return the page path including any anchor fragment."""
        if self.anchor:
            return f"{self.path}#{self.anchor}"
        return self.path


LinkTarget = ContentRef | ExternalUrl | SitePath | ResolvedPage


@dc.dataclass(frozen=True, slots=True)
class Badge:
    """Short label decorating a sidebar entry."""

    text: str
    variant: str = "default"


@dc.dataclass(frozen=True, slots=True)
class Link:
    """A leaf sidebar entry pointing at a page or URL."""

    label: str
    target: LinkTarget
    badge: Badge | None = None
    attrs: tuple[tuple[str, str], ...] = ()


@dc.dataclass(frozen=True, slots=True)
class Group:
    """A labelled sidebar section containing further entries."""

    label: str
    children: tuple[NavEntry, ...]
    collapsed: bool = False
    badge: Badge | None = None


NavEntry = Link | Group


@dc.dataclass(frozen=True, slots=True)
class NavWarning:
    """Non-fatal observation about the navigation tree."""

    code: str
    message: str
    label_paths: tuple[tuple[str, ...], ...] = ()


@dc.dataclass(frozen=True, slots=True)
class NavigationTree:
    """Ordered, immutable sidebar hierarchy."""

    entries: tuple[NavEntry, ...]
    warnings: tuple[NavWarning, ...] = ()

    def iter_links(self) -> cabc.Iterator[tuple[tuple[str, ...], Link]]:
        """Yield ``(label_path, link)`` pairs in document order."""
        yield from _iter_links(self.entries, ())

    @property
    def is_resolved(self) -> bool:
        """Return True when no leaf still targets an unresolved ContentRef."""
        return not any(
            isinstance(link.target, ContentRef) for _, link in self.iter_links()
        )


def _iter_links(
    entries: tuple[NavEntry, ...], parents: tuple[str, ...]
) -> cabc.Iterator[tuple[tuple[str, ...], Link]]:
    for entry in entries:
        match entry:
            case Link(label=label):
                yield (*parents, label), entry
            case Group(label=label, children=children):
                yield from _iter_links(children, (*parents, label))


@dc.dataclass(frozen=True, slots=True)
class SiteConfig:
    """Raw site configuration as loaded, prior to validation."""

    identity: RawIdentity
    sidebar: tuple[typ.Any, ...] = ()
    edit_link_base_url: str | None = None
    custom_css: tuple[str, ...] = ()
    last_updated: bool = False
    sidebar_max_depth: int = DEFAULT_MAX_DEPTH
    source: Path | None = None


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
]
