"""Placeholder construction and body serialization."""

from __future__ import annotations

import re
from typing import Optional

from bs4 import BeautifulSoup, Tag
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from .config import ImportConfig
from .models import MediaAsset

_INVALID_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


class BodyFormatter(HTMLFormatter):
    """Minimal entity substitution that keeps source attribute order and escapes quotes."""

    def __init__(self) -> None:
        super().__init__(entity_substitution=EntitySubstitution.substitute_xml)

    def attributes(self, tag: Tag):
        if tag.attrs is None:
            return []
        return list(tag.attrs.items())

    def attribute_value(self, value: str) -> str:
        return super().attribute_value(value).replace('"', "&quot;")


BODY_FORMATTER = BodyFormatter()


def clean_attribute_text(value: str) -> str:
    """Substitute characters that cannot appear in markup with U+FFFD."""
    return _INVALID_CHARS.sub("\ufffd", value)


def build_placeholder(
    soup: BeautifulSoup,
    asset: MediaAsset,
    config: ImportConfig,
    caption: Optional[str] = None,
) -> Tag:
    """Create the element a rendering layer resolves back to ``asset``."""
    attrs = {
        "data-entity-type": config.placeholder_entity_type,
        "data-entity-uuid": asset.identifier,
        "data-align": config.placeholder_align,
        "data-view-mode": config.placeholder_view_mode,
    }
    if caption:
        attrs["data-caption"] = clean_attribute_text(caption)
    return soup.new_tag(config.placeholder_tag, attrs=attrs)


def serialize_body(body: Tag) -> str:
    """Render the children of the body container, in order, as HTML."""
    return body.decode_contents(formatter=BODY_FORMATTER)
