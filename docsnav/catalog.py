"""Content catalogs mapping page slugs to canonical site paths.

The navigation resolver only needs ``lookup(slug)``; anything with that method
satisfies :class:`ContentCatalog`. Two implementations ship here:

* :class:`MappingCatalog` wraps an in-memory ``{slug: path}`` mapping, which is
  what tests and embedding build tools usually have at hand.
* :class:`DirectoryCatalog` scans a Starlight-style content directory
  (``src/content/docs`` by default) once, deriving slugs from file paths the
  same way the host does, and remembers each page's source file so edit links
  can be generated.

Examples
--------
>>> from docsnav.catalog import MappingCatalog
>>> catalog = MappingCatalog({"guides/setup": "/guides/setup/"})
>>> catalog.lookup("guides/setup")
'/guides/setup/'
>>> catalog.lookup("missing") is None
True
"""

from __future__ import annotations

import types
import typing as typ
from pathlib import Path

if typ.TYPE_CHECKING:
    import collections.abc as cabc

DEFAULT_CONTENT_DIR = Path("src/content/docs")
CONTENT_SUFFIXES = frozenset({".md", ".mdx", ".markdoc"})
INDEX_SLUG = "index"


@typ.runtime_checkable
class ContentCatalog(typ.Protocol):
    """Read-only lookup from content slug to canonical page path."""

    def lookup(self, slug: str) -> str | None:
        """Return the page path for ``slug`` or None when it is unknown."""
        ...


class MappingCatalog:
    """Catalog backed by a fixed slug to path mapping."""

    def __init__(self, entries: cabc.Mapping[str, str]) -> None:
        self._entries = types.MappingProxyType(dict(entries))

    def lookup(self, slug: str) -> str | None:
        return self._entries.get(slug)

    def slugs(self) -> tuple[str, ...]:
        return tuple(self._entries)


class DirectoryCatalog:
    """Catalog built from the markdown files under a content directory."""

    def __init__(
        self, project_root: Path, *, content_dir: Path = DEFAULT_CONTENT_DIR
    ) -> None:
        """Scan ``project_root / content_dir`` for content pages.

        Parameters
        ----------
        project_root : Path
            Root of the documentation project; source paths reported by
            :meth:`source_for` are relative to it.
        content_dir : Path, optional
            Content directory relative to ``project_root``.

        Raises
        ------
        FileNotFoundError
            If the content directory does not exist.
        """
        self.project_root = project_root
        self.content_root = project_root / content_dir
        if not self.content_root.is_dir():
            msg = f"Content directory '{self.content_root}' not found."
            raise FileNotFoundError(msg)
        self._sources = types.MappingProxyType(self._scan())

    def _scan(self) -> dict[str, Path]:
        sources: dict[str, Path] = {}
        for path in sorted(self.content_root.rglob("*")):
            if not path.is_file() or path.suffix.lower() not in CONTENT_SUFFIXES:
                continue
            slug = slug_for_file(path.relative_to(self.content_root))
            # First file wins when ``foo.md`` and ``foo/index.md`` collide.
            sources.setdefault(slug, path.relative_to(self.project_root))
        return sources

    def lookup(self, slug: str) -> str | None:
        if slug not in self._sources:
            return None
        return path_for_slug(slug)

    def slugs(self) -> tuple[str, ...]:
        return tuple(self._sources)

    def source_for(self, slug: str) -> str | None:
        """Return the project-relative source file for ``slug``, if known."""
        source = self._sources.get(slug)
        return source.as_posix() if source is not None else None


def slug_for_file(relative: Path) -> str:
    """Derive the content slug for a file path relative to the content root.

    >>> slug_for_file(Path("Guides/Meta-Tools.md"))
    'guides/meta-tools'
    >>> slug_for_file(Path("reference/index.mdx"))
    'reference'
    >>> slug_for_file(Path("index.md"))
    'index'
    """
    parts = [*relative.parent.parts, relative.stem]
    if len(parts) > 1 and parts[-1].lower() == INDEX_SLUG:
        parts.pop()
    return "/".join(part.lower().replace(" ", "-") for part in parts)


def path_for_slug(slug: str) -> str:
    """Return the canonical, trailing-slash site path for ``slug``.

    >>> path_for_slug("guides/meta-tools")
    '/guides/meta-tools/'
    >>> path_for_slug("index")
    '/'
    """
    if slug == INDEX_SLUG:
        return "/"
    return f"/{slug}/"


__all__ = [
    "DEFAULT_CONTENT_DIR",
    "ContentCatalog",
    "DirectoryCatalog",
    "MappingCatalog",
    "path_for_slug",
    "slug_for_file",
]
