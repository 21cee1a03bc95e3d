"""HTML parsing and metadata extraction for exported posts."""

from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path

from bs4 import BeautifulSoup, Tag

from .config import BODY_SELECTOR, SUMMARY_SELECTOR, TITLE_SELECTOR
from .errors import DocumentError
from .models import DocumentMetadata, SourceFile

logger = logging.getLogger("medium_import")


def load_source(path: Path) -> SourceFile:
    """Read an export file from disk."""
    try:
        content = path.read_bytes()
    except OSError as exc:
        raise DocumentError(f"Failed to read file {path}: {exc}") from exc
    return SourceFile(path=path, content=content)


def parse_document(source: SourceFile) -> BeautifulSoup:
    """Parse export markup into a mutable tree.

    Input is decoded as UTF-8 with invalid bytes replaced, and
    ``html.parser`` repairs unclosed tags and leaves unknown entities as
    text, so only input with no markup at all is rejected.
    """
    if not source.content.strip():
        raise DocumentError(f"{source.name} is empty")
    markup = source.content.decode("utf-8", errors="replace")
    if "\ufffd" in markup:
        logger.warning("%s contains invalid UTF-8; undecodable bytes replaced", source.name)
    return BeautifulSoup(markup, "html.parser")


def find_body(soup: BeautifulSoup) -> Tag:
    """Return the single section holding the article content."""
    body = soup.select_one(BODY_SELECTOR)
    if body is None:
        raise DocumentError("No body section found")
    return body


def _text_of(soup: BeautifulSoup, selector: str) -> str:
    node = soup.select_one(selector)
    if node is None:
        return ""
    return node.get_text().strip()


def extract_title(soup: BeautifulSoup, path: Path) -> str:
    return _text_of(soup, TITLE_SELECTOR) or path.stem


def extract_summary(soup: BeautifulSoup) -> str:
    return _text_of(soup, SUMMARY_SELECTOR)


def parse_created(path: Path) -> dt.datetime:
    """Parse the ``YYYY-MM-DD`` token preceding the first underscore of a filename."""
    token = path.name.split("_", 1)[0]
    try:
        day = dt.datetime.strptime(token, "%Y-%m-%d")
    except ValueError as exc:
        raise DocumentError(
            f"Filename {path.name} does not start with a date token: {token!r}"
        ) from exc
    return dt.datetime(day.year, day.month, day.day, tzinfo=dt.timezone.utc)


def extract_metadata(soup: BeautifulSoup, path: Path) -> DocumentMetadata:
    """Collect title, summary and creation timestamp for a post."""
    metadata = DocumentMetadata(
        title=extract_title(soup, path),
        summary=extract_summary(soup),
        created=parse_created(path),
    )
    logger.debug("Extracted metadata for %s: %s", path.name, metadata.title)
    return metadata
