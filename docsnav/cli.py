"""Cyclopts CLI entrypoint for validating and exporting documentation site config.

The ``docsnav`` console script loads a site configuration, scans the project's
content directory for pages, and runs the full build: identity validation,
sidebar construction and slug resolution. ``docsnav check`` reports problems
without writing anything; ``docsnav export`` writes the resolved result either
as JSON or as an Astro Starlight config module.

Examples
--------
Validate the configuration of the project in ``docs/``:

>>> from docsnav.cli import app
>>> app(["check", "--project-root", "docs"])  # doctest: +SKIP

Write the resolved navigation as JSON:

>>> app(
...     ["export", "--format", "json", "--output", "dist/site.json"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter
from ruamel.yaml.error import YAMLError

from .build import SiteBuilder
from .catalog import DEFAULT_CONTENT_DIR, DirectoryCatalog
from .config import Group, SiteConfigError, load_site_config
from .export import StarlightConfigRenderer, render_json

if typ.TYPE_CHECKING:
    from .build import ResolvedSite

DEFAULT_PROJECT_ROOT = Path("docs")
DEFAULT_CONFIG_NAME = "site.yaml"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

ExportFormat = typ.Literal["json", "starlight"]

app = App(name="docsnav", config=cyclopts.config.Env("DOCSNAV_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def _build(
    project_root: Path, config: Path | None, content_dir: Path
) -> tuple[ResolvedSite, DirectoryCatalog]:
    """Load config and content from ``project_root`` and run a full build.

    Raises
    ------
    SystemExit
        With status 1 when the configuration is invalid; the error is printed
        to stderr.
    """
    config_path = config or project_root / DEFAULT_CONFIG_NAME
    try:
        site_config = load_site_config(config_path)
        catalog = DirectoryCatalog(project_root, content_dir=content_dir)
        site = SiteBuilder(site_config, catalog).run()
    except (SiteConfigError, YAMLError, FileNotFoundError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    return site, catalog


def _count_entries(site: ResolvedSite) -> tuple[int, int]:
    links = sum(1 for _ in site.navigation.iter_links())
    pending = list(site.navigation.entries)
    groups = 0
    while pending:
        entry = pending.pop()
        if isinstance(entry, Group):
            groups += 1
            pending.extend(entry.children)
    return links, groups


@app.command(help="Validate the site identity and sidebar against the content.")
def check(
    *,
    project_root: typ.Annotated[
        Path,
        Parameter(help="Documentation project root", env_var="DOCSNAV_PROJECT_ROOT"),
    ] = DEFAULT_PROJECT_ROOT,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Path to site config (default: <root>/site.yaml)"),
    ] = None,
    content_dir: typ.Annotated[
        Path, Parameter(help="Content directory relative to the project root")
    ] = DEFAULT_CONTENT_DIR,
    verbose: bool = False,
) -> None:
    """Run a full build and print a summary.

    Parameters
    ----------
    project_root : Path, optional
        Directory holding the site config and content directory.
    config : Path or None, optional
        Explicit configuration file; defaults to ``<project_root>/site.yaml``.
    content_dir : Path, optional
        Content directory relative to ``project_root``.
    verbose : bool, optional
        Log build stage transitions.

    Raises
    ------
    SystemExit
        With status 1 when validation or resolution fails.
    """
    _configure_logging(verbose=verbose)
    site, _ = _build(project_root, config, content_dir)
    links, groups = _count_entries(site)
    summary = f"ok: {site.identity.title} - {links} links in {groups} groups"
    if site.warnings:
        summary = f"{summary} ({len(site.warnings)} warnings)"
    print(summary)


@app.command(help="Write the resolved site configuration for the rendering host.")
def export(
    *,
    project_root: typ.Annotated[
        Path,
        Parameter(help="Documentation project root", env_var="DOCSNAV_PROJECT_ROOT"),
    ] = DEFAULT_PROJECT_ROOT,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Path to site config (default: <root>/site.yaml)"),
    ] = None,
    content_dir: typ.Annotated[
        Path, Parameter(help="Content directory relative to the project root")
    ] = DEFAULT_CONTENT_DIR,
    format: typ.Annotated[  # noqa: A002 - mirrors the --format flag
        ExportFormat, Parameter(help="Output format")
    ] = "json",
    output: typ.Annotated[
        Path | None, Parameter(help="Destination file (default: stdout)")
    ] = None,
) -> None:
    """Build the site and write it in the requested format.

    Parameters
    ----------
    project_root : Path, optional
        Directory holding the site config and content directory.
    config : Path or None, optional
        Explicit configuration file; defaults to ``<project_root>/site.yaml``.
    content_dir : Path, optional
        Content directory relative to ``project_root``.
    format : {"json", "starlight"}, optional
        ``json`` writes the plain nested value; ``starlight`` writes an
        ``astro.config.mjs`` module.
    output : Path or None, optional
        File to write; printed to stdout when omitted.
    """
    _configure_logging(verbose=False)
    site, catalog = _build(project_root, config, content_dir)
    if format == "starlight":
        rendered = StarlightConfigRenderer().render(site)
    else:
        rendered = render_json(site, source_for=catalog.source_for)
    if output is None:
        sys.stdout.write(rendered)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(rendered, encoding="utf-8")
    print(f"wrote {_format_path(output)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``docsnav`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
