"""Structural clean-up applied to the post body before image handling."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Tag

from .config import (
    BOILERPLATE_PHRASE,
    DOWNGRADED_HEADING_TAGS,
    HEADING_TAGS,
    TITLE_HEADING_CLASS,
)

logger = logging.getLogger("medium_import")


def remove_first_rule(body: Tag) -> bool:
    """Drop the section divider the export places before the first paragraph."""
    rule = body.find("hr")
    if rule is None:
        return False
    rule.decompose()
    return True


def remove_title_headings(body: Tag) -> int:
    """Remove headings repeating the post title inside the body."""
    headings = body.find_all(HEADING_TAGS, class_=TITLE_HEADING_CLASS)
    for heading in headings:
        heading.decompose()
    return len(headings)


def downgrade_headings(soup: BeautifulSoup, body: Tag) -> int:
    """Replace h2-h6 with paragraphs holding the same children."""
    headings = body.find_all(DOWNGRADED_HEADING_TAGS)
    for heading in headings:
        paragraph = soup.new_tag("p")
        for child in list(heading.contents):
            paragraph.append(child.extract())
        heading.replace_with(paragraph)
    return len(headings)


def remove_boilerplate_quotes(body: Tag, phrase: str = BOILERPLATE_PHRASE) -> int:
    removed = 0
    for quote in body.find_all("blockquote"):
        if phrase in quote.get_text():
            quote.extract()
            removed += 1
    return removed


def normalize_body(soup: BeautifulSoup, body: Tag) -> None:
    """Apply the clean-up steps in order; later steps rely on earlier removals."""
    rule_removed = remove_first_rule(body)
    titles = remove_title_headings(body)
    downgraded = downgrade_headings(soup, body)
    quotes = remove_boilerplate_quotes(body)
    logger.debug(
        "Normalized body (rule removed: %s, title headings: %d, downgraded: %d, boilerplate quotes: %d)",
        rule_removed,
        titles,
        downgraded,
        quotes,
    )
