"""URL resolution and Markdown link/image markup."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .inline import escape_ascii_punctuation

_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")
_URL_STRIPPED = re.compile(r"[\t\r\n]")
_DESTINATION_SPECIAL = re.compile(r"[\\()]")
_POINTY_SPECIAL = re.compile(r"[\\<>]")


def to_url(href: str, base_url: str = "") -> str:
    """Resolve *href* against *base_url*.

    Absolute URLs and fragment links pass through; protocol-relative URLs get
    ``https:``; anything else is appended to the base (``/`` when unknown).
    No dot-segment or percent-encoding normalization happens here.
    """
    if href.startswith("//"):
        return f"https:{href}"
    if href.startswith("#") or _SCHEME.match(href):
        return href

    base = base_url or "/"
    if base.endswith("/") and href.startswith("/"):
        return base + href[1:]
    if not base.endswith("/") and not href.startswith("/"):
        return f"{base}/{href}"
    return base + href


def escape_url(url: str) -> str:
    """Make *url* safe to use as a Markdown link destination."""
    url = _URL_STRIPPED.sub("", url)
    if " " in url:
        return "<" + _POINTY_SPECIAL.sub(lambda m: "\\" + m.group(), url) + ">"
    return _DESTINATION_SPECIAL.sub(lambda m: "\\" + m.group(), url)


def _title_clause(title: str | bool | None) -> str:
    if not isinstance(title, str) or not title:
        return ""
    return f' "{escape_ascii_punctuation(title)}"'


@dataclass
class LinkCapture:
    """Stash for an open anchor: its attributes and the interrupted line buffer.

    Only the text since the last flush becomes the label.  A ``BR`` or ``P``
    inside the anchor flushes the label text before it, ahead of the stashed
    line, so ``text <a>one<br>two</a>`` emits ``one`` first and links only
    ``two``.
    """

    href: str | None
    title: str | None
    saved_line: str


def format_link(label: str, href: str | None, title: str | None, base_url: str) -> str:
    if not href or not href.strip():
        return label
    url = escape_url(to_url(href.strip(), base_url))
    return f"[{label}]({url}{_title_clause(title)})"


def format_image(alt: str | bool | None, src: str | bool | None, title: str | bool | None,
                 base_url: str) -> str:
    alt_text = escape_ascii_punctuation(alt) if isinstance(alt, str) else ""
    source = src.strip() if isinstance(src, str) else ""
    url = escape_url(to_url(source, base_url))
    return f"![{alt_text}]({url}{_title_clause(title)})"
