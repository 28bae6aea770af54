"""Inline text handling: whitespace normalization, escaping, emphasis markers."""

from __future__ import annotations

import re

# INVISIBLE SEPARATOR; keeps emphasis markers from fusing with adjacent text.
SEP = "\u2063"

MARKERS = {"strong": "**", "emphasis": "_"}

_ASCII_PUNCTUATION = re.compile(r"[!-/:-@\[-`{-~]")
_LAYOUT_WHITESPACE = re.compile(r" *\n+")
_TRAILING_SPACE = re.compile(r"[ \t]+\n+")
_HORIZONTAL_SPACE = re.compile(r"[ \t]+")
_LINE_BREAKS = re.compile(r"[\f\n]+")


def escape_ascii_punctuation(plaintext: str) -> str:
    """Backslash-escape every ASCII punctuation character."""
    return _ASCII_PUNCTUATION.sub(lambda m: "\\" + m.group(), plaintext)


def is_layout_whitespace(text: str) -> bool:
    """True for text that is only spaces followed by newlines (indentation between tags)."""
    return _LAYOUT_WHITESPACE.fullmatch(text) is not None


def normalize_whitespace(text: str) -> str:
    text = _TRAILING_SPACE.sub("\n", text)
    text = _HORIZONTAL_SPACE.sub(" ", text)
    return _LINE_BREAKS.sub("\n", text)


class InlineFormatting:
    """Depth counters for strong and emphasis.

    Markers are only produced on the outermost open and close, so nested
    ``<b><b>..</b></b>`` renders as a single pair.  Closers without a
    matching opener are ignored.
    """

    def __init__(self) -> None:
        self._depth = {kind: 0 for kind in MARKERS}

    def toggle(self, kind: str, is_closer: bool) -> str:
        depth = self._depth[kind]
        marker = MARKERS[kind]
        if is_closer:
            if depth == 0:
                return ""
            self._depth[kind] = depth - 1
            return marker + SEP if depth == 1 else ""
        self._depth[kind] = depth + 1
        return SEP + marker if depth == 0 else ""
