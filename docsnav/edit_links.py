"""Format "edit this page" links from the configured ``editLink.baseUrl``."""

from __future__ import annotations

import dataclasses as dc
from urllib.parse import quote, urljoin

from .config.helpers import _is_absolute_url
from .config.models import InvalidUrlError

EDIT_LINK_FIELD = "editLink.baseUrl"


@dc.dataclass(frozen=True, slots=True)
class EditLinkTemplate:
    """Base URL that page source paths are appended to.

    >>> template = EditLinkTemplate("https://github.com/o/r/edit/main/docs")
    >>> template.url_for("src/content/docs/guides/setup.md")
    'https://github.com/o/r/edit/main/docs/src/content/docs/guides/setup.md'
    """

    base_url: str

    def __post_init__(self) -> None:
        base = self.base_url.strip()
        if not _is_absolute_url(base):
            raise InvalidUrlError(EDIT_LINK_FIELD, self.base_url)
        if not base.endswith("/"):
            base = f"{base}/"
        object.__setattr__(self, "base_url", base)

    def url_for(self, source_path: str) -> str:
        """Return the edit URL for a project-relative source file path."""
        relative = source_path.strip()
        while relative.startswith(("./", "/")):
            relative = relative.removeprefix("./").lstrip("/")
        return urljoin(self.base_url, quote(relative))


__all__ = ["EDIT_LINK_FIELD", "EditLinkTemplate"]
