"""Degraded plain-text extraction used when conversion cannot proceed."""

from __future__ import annotations

import logging
import re
from html.parser import HTMLParser

logger = logging.getLogger(__name__)

_TAG = re.compile(r"<[^>]*>")


class _TextCollector(HTMLParser):
    """Collect text nodes in document order, dropping all markup."""

    RAW_TEXT_TAGS = {"iframe", "noembed", "noframes", "script", "style", "textarea", "title", "xmp"}

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self._parts: list[str] = []
        self._raw_tag: str | None = None

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag in self.RAW_TEXT_TAGS:
            self._raw_tag = tag

    def handle_endtag(self, tag: str) -> None:
        if tag == self._raw_tag:
            self._raw_tag = None

    def handle_data(self, data: str) -> None:
        if self._raw_tag is None:
            self._parts.append(data)

    def close(self) -> None:
        # A tag cut off at end of input is left unparsed; it is markup, not text.
        if self.rawdata.startswith("<"):
            self.rawdata = ""
        super().close()

    def get_text(self) -> str:
        return "".join(self._parts)


def strip_tags(html: str) -> str:
    """Remove anything that looks like a tag."""
    return _TAG.sub("", html)


def extract_text(html: str) -> str:
    """Return the text content of *html*; never raises."""
    try:
        collector = _TextCollector()
        collector.feed(html)
        collector.close()
        return collector.get_text()
    except Exception as e:
        logger.debug("Tokenizer fallback failed (%s); stripping tags", e)
        return strip_tags(html)
