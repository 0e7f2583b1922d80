"""Resilient text helpers for HTML-bearing payload fields."""

from __future__ import annotations

import html
import logging
import re

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

_WS = re.compile(r"\s+")
_TAG = re.compile(r"<[^>]*>?")

# Elements whose boundaries separate words in rendered text
_BLOCK_TAGS = ["p", "div", "br", "li", "ul", "ol", "h1", "h2", "h3", "h4", "h5", "h6", "tr", "td"]


def normalize_ws(text: str) -> str:
    return _WS.sub(" ", (text or "").strip())


def strip_html(value: str | None) -> str:
    """
    Convert an HTML fragment to plain text.

    Entities are decoded, script/style content is dropped and whitespace is
    collapsed. Never raises: if the markup cannot be parsed, tags are removed
    with a regex and the remaining text is returned.
    """
    if value is None:
        return ""
    if not isinstance(value, str):
        return str(value)

    try:
        soup = BeautifulSoup(value, "html.parser")
        for t in soup(["script", "style", "noscript"]):
            t.extract()
        for t in soup.find_all(_BLOCK_TAGS):
            t.insert_after(" ")
        return normalize_ws(soup.get_text())
    except Exception as e:
        logger.debug(f"HTML parsing failed, falling back to tag stripping: {e}")
        return normalize_ws(html.unescape(_TAG.sub(" ", value)))
