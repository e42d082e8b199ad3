"""Load the documentation site YAML file into an immutable SiteConfig."""

from __future__ import annotations

import typing as typ

from ruamel.yaml import YAML

from .helpers import _optional_str
from .models import DEFAULT_MAX_DEPTH, RawIdentity, SiteConfig, SiteConfigError

if typ.TYPE_CHECKING:
    from pathlib import Path


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing site identity and navigation.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML site configuration (for example,
        ``docs/site.yaml``).

    Returns
    -------
    SiteConfig
        Raw configuration snapshot. Identity and sidebar are validated later by
        :class:`docsnav.build.SiteBuilder`; this loader only checks structure.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    SiteConfigError
        If the top-level YAML structure is not a mapping or a known key holds a
        value of the wrong type.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from docsnav.config import load_site_config
    >>> config = load_site_config(Path("docs/site.yaml"))  # doctest: +SKIP
    >>> config.identity.title  # doctest: +SKIP
    'Portainer MCP'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    return parse_site_config(loaded, source=path)


def parse_site_config(
    raw: typ.Mapping[str, typ.Any], *, source: Path | None = None
) -> SiteConfig:
    """Build a SiteConfig from an already-parsed mapping."""
    if not isinstance(raw, dict):
        msg = "Top-level configuration must be a mapping."
        raise SiteConfigError(msg)

    identity = RawIdentity(
        title=_optional_str(raw.get("title")),
        description=_optional_str(raw.get("description")),
        site=_optional_str(raw.get("site")),
        base=_optional_str(raw.get("base")),
        social=_social_entries(raw.get("social")),
    )

    sidebar = raw.get("sidebar") or []
    if not isinstance(sidebar, list):
        msg = "'sidebar' must be a list of entries."
        raise SiteConfigError(msg)

    return SiteConfig(
        identity=identity,
        sidebar=tuple(sidebar),
        edit_link_base_url=_edit_link_base_url(raw.get("editLink")),
        custom_css=_custom_css(raw.get("customCss")),
        last_updated=_bool_option(raw.get("lastUpdated"), "lastUpdated"),
        sidebar_max_depth=_max_depth(raw.get("sidebarMaxDepth")),
        source=source,
    )


def _social_entries(value: object) -> tuple[typ.Mapping[str, typ.Any], ...]:
    """Return social entries as mappings, accepting the legacy ``{icon: href}`` form."""
    match value:
        case None:
            return ()
        case list() as items:
            for index, item in enumerate(items):
                if not isinstance(item, dict):
                    msg = f"'social[{index}]' must be a mapping."
                    raise SiteConfigError(msg)
            return tuple(items)
        case dict() as mapping:
            return tuple({"icon": icon, "href": href} for icon, href in mapping.items())
        case _:
            msg = "'social' must be a list of links or a mapping of platform to URL."
            raise SiteConfigError(msg)


def _edit_link_base_url(value: object) -> str | None:
    match value:
        case None:
            return None
        case {"baseUrl": base_url}:
            return _optional_str(base_url)
        case dict():
            return None
        case _:
            msg = "'editLink' must be a mapping with a 'baseUrl'."
            raise SiteConfigError(msg)


def _custom_css(value: object) -> tuple[str, ...]:
    match value:
        case None:
            return ()
        case str() as single:
            return (single,)
        case list() as sheets:
            return tuple(text for sheet in sheets if (text := _optional_str(sheet)))
        case _:
            msg = "'customCss' must be a list of stylesheet paths."
            raise SiteConfigError(msg)


def _bool_option(value: object, key: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        msg = f"'{key}' must be true or false."
        raise SiteConfigError(msg)
    return value


def _max_depth(value: object) -> int:
    if value is None:
        return DEFAULT_MAX_DEPTH
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        msg = "'sidebarMaxDepth' must be a positive integer."
        raise SiteConfigError(msg)
    return value


__all__ = ["load_site_config", "parse_site_config"]
