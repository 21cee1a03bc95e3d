"""Utility helpers for string normalization and URL handling."""

from __future__ import annotations

import posixpath
import re
from urllib.parse import urlparse

SLUG_PATTERN = re.compile(r"[^a-z0-9]+")
FILENAME_PATTERN = re.compile(r"[^A-Za-z0-9._-]")
SIZE_SEGMENT_PATTERN = re.compile(r"/max/\d+/")


def slugify(value: str, fallback: str = "post") -> str:
    """Generate a filesystem-friendly slug using ASCII characters only."""
    normalized = value.encode("ascii", "ignore").decode("ascii")
    normalized = normalized.lower()
    normalized = SLUG_PATTERN.sub("-", normalized).strip("-")
    return normalized or fallback


def sanitize_filename(value: str, fallback: str = "image") -> str:
    """Replace every character outside ``[A-Za-z0-9._-]`` with an underscore."""
    return FILENAME_PATTERN.sub("_", value) or fallback


def filename_from_url(url: str) -> str:
    """Derive a safe filename from the last segment of a URL path."""
    return sanitize_filename(posixpath.basename(urlparse(url).path))


def upgrade_image_url(url: str, width: int = 2000) -> str:
    """Request a larger rendition from CDN URLs carrying a ``/max/<n>/`` segment."""
    return SIZE_SEGMENT_PATTERN.sub(f"/max/{width}/", url, count=1)
