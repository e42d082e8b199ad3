"""Site identity validation: title, description, URLs and social links."""

from __future__ import annotations

import typing as typ

from .helpers import (
    SOCIAL_PLATFORMS,
    _has_dot_segments,
    _is_absolute_url,
    _normalize_base_path,
    _optional_str,
)
from .models import (
    DuplicateSocialPlatformError,
    InvalidIdentityError,
    InvalidUrlError,
    RawIdentity,
    SiteIdentity,
    SocialLink,
)


def resolve_identity(raw: RawIdentity) -> SiteIdentity:
    """Validate the raw identity block and return a normalised SiteIdentity.

    Parameters
    ----------
    raw : RawIdentity
        Identity fields as read from the configuration file.

    Returns
    -------
    SiteIdentity
        Identity with trimmed text, a canonical URL without trailing slash,
        a normalised base path, and ordered social links.

    Raises
    ------
    InvalidIdentityError
        If ``title``, ``description`` or ``site`` is missing, the base path is
        malformed, or a social entry is incomplete or uses an unknown platform.
    InvalidUrlError
        If the canonical URL is not an absolute ``https`` URL or a social
        ``href`` is not an absolute URL.
    DuplicateSocialPlatformError
        If two social entries share a platform tag.

    Examples
    --------
    >>> from docsnav.config import RawIdentity, resolve_identity
    >>> identity = resolve_identity(
    ...     RawIdentity(title="Docs", description="Manual", site="https://a.dev/")
    ... )
    >>> identity.canonical_url, identity.base_path
    ('https://a.dev', '/')
    """
    title = _require_text(raw.title, "title")
    description = _require_text(raw.description, "description")
    canonical_url = _resolve_canonical_url(raw.site)
    base_path = _resolve_base_path(raw.base)
    social_links = _build_social_links(raw.social)
    return SiteIdentity(
        title=title,
        description=description,
        canonical_url=canonical_url,
        base_path=base_path,
        social_links=social_links,
    )


def _require_text(value: object | None, field: str) -> str:
    text = _optional_str(value)
    if text is None:
        raise InvalidIdentityError(field, "is required and must not be blank")
    return text


def _resolve_canonical_url(value: str | None) -> str:
    site = _optional_str(value)
    if site is None:
        raise InvalidIdentityError("site", "is required and must not be blank")
    if not _is_absolute_url(site, schemes=("https",)):
        raise InvalidUrlError("site", site)
    return site.rstrip("/")


def _resolve_base_path(value: str | None) -> str:
    base = _optional_str(value)
    if base is None:
        return "/"
    if not base.startswith("/"):
        raise InvalidIdentityError("base", f"must start with '/', got {base!r}")
    if _has_dot_segments(base):
        msg = f"must not contain '.' or '..' segments, got {base!r}"
        raise InvalidIdentityError("base", msg)
    return _normalize_base_path(base)


def _build_social_links(
    entries: tuple[typ.Mapping[str, typ.Any], ...],
) -> tuple[SocialLink, ...]:
    """Build social links, rejecting unknown platforms and duplicates."""
    links: list[SocialLink] = []
    seen: set[str] = set()
    for index, entry in enumerate(entries):
        field = f"social[{index}]"
        match entry:
            case {"icon": platform, "href": href, **rest}:
                pass
            case {"platform": platform, "href": href, **rest}:
                pass
            case _:
                raise InvalidIdentityError(field, "requires 'icon' and 'href'")
        tag = _optional_str(platform)
        if tag is None or tag not in SOCIAL_PLATFORMS:
            msg = f"names an unknown platform {platform!r}"
            raise InvalidIdentityError(f"{field}.icon", msg)
        if tag in seen:
            raise DuplicateSocialPlatformError(tag)
        seen.add(tag)
        url = _optional_str(href)
        if url is None or not _is_absolute_url(url):
            raise InvalidUrlError(f"{field}.href", str(href))
        label = _optional_str(rest.get("label")) or SOCIAL_PLATFORMS[tag]
        links.append(SocialLink(platform=tag, label=label, href=url))
    return tuple(links)


__all__ = ["resolve_identity"]
