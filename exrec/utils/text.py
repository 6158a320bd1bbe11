"""Text helpers."""

from __future__ import annotations

import re

EXPORT_SUFFIXES = {"json": ".json", "md": ".md", "markdown": ".md"}


def slugify(value: str, max_len: int = 50) -> str:
    """Generate filesystem-safe slug."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
    if not slug:
        slug = "session"
    return slug[:max_len].rstrip("-")


def export_filename(title: str, export_format: str) -> str:
    """File name for a session export, e.g. ``morning-mobility.md``."""
    try:
        suffix = EXPORT_SUFFIXES[export_format.lower()]
    except KeyError:
        raise ValueError(f"Unsupported export format: {export_format}") from None
    return f"{slugify(title)}{suffix}"
