"""Drive a single documentation configuration build from raw config to host input.

A build walks a fixed sequence of stages::

    RAW -> IDENTITY_VALIDATED -> TREE_BUILT -> REFERENCES_RESOLVED

and lands in FAILED from any of them. Each stage either advances or fails the
whole build; there is no retry and no partial result. A :class:`SiteBuilder` is
single-use: construct a fresh one from the raw
:class:`~docsnav.config.SiteConfig` to rebuild.

>>> from pathlib import Path
>>> from docsnav.build import build_site
>>> from docsnav.catalog import MappingCatalog
>>> from docsnav.config import load_site_config
>>> config = load_site_config(Path("docs/site.yaml"))  # doctest: +SKIP
>>> site = build_site(config, MappingCatalog({}))  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import enum
import logging
import typing as typ

from .config import build_tree, resolve_identity
from .edit_links import EditLinkTemplate
from .resolver import resolve_references

if typ.TYPE_CHECKING:
    from .catalog import ContentCatalog
    from .config import NavigationTree, NavWarning, SiteConfig, SiteIdentity

logger = logging.getLogger(__name__)


class BuildStage(enum.StrEnum):
    """Position of a build in its lifecycle."""

    RAW = "raw"
    IDENTITY_VALIDATED = "identity-validated"
    TREE_BUILT = "tree-built"
    REFERENCES_RESOLVED = "references-resolved"
    FAILED = "failed"


@dc.dataclass(frozen=True, slots=True)
class ResolvedSite:
    """Validated configuration handed to the rendering host."""

    identity: SiteIdentity
    navigation: NavigationTree
    edit_link: EditLinkTemplate | None = None
    custom_css: tuple[str, ...] = ()
    last_updated: bool = False

    @property
    def warnings(self) -> tuple[NavWarning, ...]:
        return self.navigation.warnings


class SiteBuilder:
    """Validate identity, build the sidebar tree, and resolve its references."""

    def __init__(
        self,
        config: SiteConfig,
        catalog: ContentCatalog,
        *,
        max_depth: int | None = None,
    ) -> None:
        """Prepare a build for ``config``.

        Parameters
        ----------
        config : SiteConfig
            Raw configuration snapshot, usually from
            :func:`docsnav.config.load_site_config`.
        catalog : ContentCatalog
            Lookup used to resolve sidebar slugs.
        max_depth : int, optional
            Override for ``config.sidebar_max_depth``.
        """
        self.config = config
        self.catalog = catalog
        self.max_depth = config.sidebar_max_depth if max_depth is None else max_depth
        self.stage = BuildStage.RAW
        self.failure: Exception | None = None

    def run(self) -> ResolvedSite:
        """Execute every stage and return the resolved site.

        Raises
        ------
        SiteConfigError
            Any validation or resolution error; ``stage`` is left at
            :attr:`BuildStage.FAILED` and ``failure`` holds the exception.
        RuntimeError
            If the builder has already run.
        """
        if self.stage is not BuildStage.RAW:
            msg = f"Build already ran (stage: {self.stage})."
            raise RuntimeError(msg)
        try:
            identity = resolve_identity(self.config.identity)
            edit_link = self._edit_link()
            self._advance(BuildStage.IDENTITY_VALIDATED)
            tree = build_tree(self.config.sidebar, self.max_depth)
            self._advance(BuildStage.TREE_BUILT)
            navigation = resolve_references(tree, self.catalog)
            self._advance(BuildStage.REFERENCES_RESOLVED)
        except Exception as exc:
            self.failure = exc
            self.stage = BuildStage.FAILED
            logger.info("Site build failed (%s): %s", type(exc).__name__, exc)
            raise
        return ResolvedSite(
            identity=identity,
            navigation=navigation,
            edit_link=edit_link,
            custom_css=self.config.custom_css,
            last_updated=self.config.last_updated,
        )

    def _advance(self, stage: BuildStage) -> None:
        logger.debug("Site build %s -> %s", self.stage, stage)
        self.stage = stage

    def _edit_link(self) -> EditLinkTemplate | None:
        if self.config.edit_link_base_url is None:
            return None
        return EditLinkTemplate(self.config.edit_link_base_url)


def build_site(
    config: SiteConfig, catalog: ContentCatalog, *, max_depth: int | None = None
) -> ResolvedSite:
    """Run a one-off :class:`SiteBuilder` and return its resolved site."""
    return SiteBuilder(config, catalog, max_depth=max_depth).run()


__all__ = ["BuildStage", "ResolvedSite", "SiteBuilder", "build_site"]
