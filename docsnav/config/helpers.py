"""Utility helpers shared by the docsnav configuration builders."""

from __future__ import annotations

import typing as typ
from urllib.parse import urlsplit

from .models import Badge, ContentRef

# Platform tag -> default display label, in the order the host lists them.
SOCIAL_PLATFORMS: dict[str, str] = {
    "github": "GitHub",
    "gitlab": "GitLab",
    "bitbucket": "Bitbucket",
    "codeberg": "Codeberg",
    "discord": "Discord",
    "gitter": "Gitter",
    "matrix": "Matrix",
    "slack": "Slack",
    "zulip": "Zulip",
    "mastodon": "Mastodon",
    "blueSky": "Bluesky",
    "x.com": "X",
    "twitter": "Twitter",
    "threads": "Threads",
    "linkedin": "LinkedIn",
    "youtube": "YouTube",
    "twitch": "Twitch",
    "instagram": "Instagram",
    "facebook": "Facebook",
    "reddit": "Reddit",
    "telegram": "Telegram",
    "stackOverflow": "Stack Overflow",
    "npm": "npm",
    "patreon": "Patreon",
    "openCollective": "Open Collective",
    "rss": "RSS",
}

BADGE_VARIANTS = frozenset({"default", "note", "tip", "caution", "danger", "success"})


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _is_absolute_url(
    value: str, *, schemes: tuple[str, ...] = ("http", "https")
) -> bool:
    """Return True when ``value`` parses as a URL with an allowed scheme and host."""
    if not value or any(char.isspace() for char in value):
        return False
    try:
        parsed = urlsplit(value)
        port_ok = parsed.port is None or parsed.port > 0
    except ValueError:
        return False
    return parsed.scheme.lower() in schemes and bool(parsed.hostname) and port_ok


def _has_dot_segments(path: str) -> bool:
    """Return True when any ``/``-separated segment is ``.`` or ``..``."""
    return any(segment in (".", "..") for segment in path.split("/"))


def _normalize_base_path(value: str) -> str:
    """Collapse repeated slashes and drop a trailing slash unless root."""
    segments = [segment for segment in value.split("/") if segment]
    if not segments:
        return "/"
    return "/" + "/".join(segments)


def _parse_content_ref(raw: str) -> ContentRef | None:
    """Split a raw ``slug`` value into a ContentRef, or None when blank."""
    slug, _, anchor = raw.strip().partition("#")
    slug = slug.strip().strip("/")
    if not slug:
        return None
    return ContentRef(slug=slug, anchor=anchor.strip() or None)


def _build_badge(payload: object) -> Badge | None:
    """Build a Badge from a bare string or a ``{text, variant}`` mapping.

    Returns None for anything unrecognised, including unknown variants; callers
    decide whether that is an error.
    """
    match payload:
        case None:
            return None
        case str() as text if text.strip():
            return Badge(text=text.strip())
        case {"text": text, **rest} if _optional_str(text):
            variant = _optional_str(rest.get("variant")) or "default"
            if variant not in BADGE_VARIANTS:
                return None
            return Badge(text=str(text).strip(), variant=variant)
        case _:
            return None


def _normalize_attrs(
    payload: typ.Mapping[str, object] | None,
) -> tuple[tuple[str, str], ...]:
    """Return HTML attribute pairs sorted by name, dropping ``None`` values."""
    if not payload:
        return ()
    pairs = (
        (str(key), str(value)) for key, value in payload.items() if value is not None
    )
    return tuple(sorted(pairs))


__all__ = [
    "BADGE_VARIANTS",
    "SOCIAL_PLATFORMS",
    "_build_badge",
    "_has_dot_segments",
    "_is_absolute_url",
    "_normalize_attrs",
    "_normalize_base_path",
    "_optional_str",
    "_parse_content_ref",
]
