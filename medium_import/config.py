"""Configuration objects and export-format constants for the importer."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_OWNER_ID = 1
DEFAULT_IMAGE_WIDTH = 2000
DEFAULT_FETCH_TIMEOUT = 30.0
ALT_FALLBACK_SPACE = "space"
ALT_FALLBACK_TITLE = "title"
ALT_FALLBACK_CHOICES = (ALT_FALLBACK_SPACE, ALT_FALLBACK_TITLE)

# Markers emitted by the Medium HTML export.
TITLE_SELECTOR = "h1.p-name"
SUMMARY_SELECTOR = 'section[data-field="subtitle"].p-summary'
BODY_SELECTOR = 'section[data-field="body"]'
TITLE_HEADING_CLASS = "graf--title"
BOILERPLATE_PHRASE = "To stay up to date"
HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
DOWNGRADED_HEADING_TAGS = ["h2", "h3", "h4", "h5", "h6"]


@dataclass
class ImportConfig:
    """Settings that control how exported posts become content records."""

    owner_id: int = DEFAULT_OWNER_ID
    alt_fallback: str = ALT_FALLBACK_SPACE
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
    image_width: int = DEFAULT_IMAGE_WIDTH
    placeholder_tag: str = "drupal-media"
    placeholder_entity_type: str = "media"
    placeholder_align: str = "center"
    placeholder_view_mode: str = "wide"
    content_type: str = "featured_content"
    text_format: str = "standard"

    def __post_init__(self) -> None:
        if self.alt_fallback not in ALT_FALLBACK_CHOICES:
            raise ValueError(
                f"alt_fallback must be one of {ALT_FALLBACK_CHOICES}, got {self.alt_fallback!r}"
            )
