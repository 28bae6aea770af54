"""HTML token scanner backed by html5lib.

html5lib builds the tree the way a browser would (implied end tags, adoption
agency, foster parenting), and its tree walker replays that tree as a flat
token stream.  This module turns the stream into the pull-style scanner the
converter consumes: one token at a time, with the ancestor path available at
every position.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

import html5lib
from html5lib.constants import namespaces
from html5lib.treewalkers import concatenateCharacterTokens

from .base import COMMENT_NODE, TEXT_NODE, ScannerConstructionError, TokenType

logger = logging.getLogger(__name__)

# Elements whose content is raw text; reported as a single token.
ATOMIC_ELEMENTS = frozenset({
    "IFRAME", "NOEMBED", "NOFRAMES", "SCRIPT", "STYLE", "TEXTAREA", "TITLE", "XMP",
})

# Tokenizer errors raised when the input ends in the middle of markup.
TRUNCATION_ERRORS = frozenset({
    "eof-in-tag-name",
    "expected-attribute-name-but-got-eof",
    "eof-in-attribute-name",
    "expected-end-of-tag-name-but-got-eof",
    "expected-attribute-value-but-got-eof",
    "eof-in-attribute-value-double-quote",
    "eof-in-attribute-value-single-quote",
    "eof-in-attribute-value-no-quotes",
    "unexpected-EOF-after-solidus-in-tag",
    "eof-in-comment",
    "eof-in-comment-end-dash",
    "eof-in-comment-double-dash",
    "eof-in-comment-end-space-state",
    "eof-in-comment-end-bang-state",
    "expected-doctype-name-but-got-eof",
    "eof-in-doctype-name",
    "eof-in-doctype",
})


@dataclass
class Token:
    kind: TokenType
    name: str
    is_closer: bool = False
    attributes: dict[str, str] = field(default_factory=dict)
    text: str = ""
    breadcrumbs: list[str] = field(default_factory=list)


class Html5Scanner:
    """Scanner over a fully parsed HTML document.

    Breadcrumbs follow the position of the current token: an opener's path
    ends with the element itself, a closer's path no longer contains the
    element being closed.
    """

    def __init__(self, tree, errors: list[tuple]) -> None:
        self._tokens = self._walk(tree)
        self._current: Token | None = None
        self._last_error = next(
            (code for _, code, _ in reversed(errors) if code in TRUNCATION_ERRORS),
            None,
        )

    @classmethod
    def create_full_parser(cls, html: str) -> Html5Scanner:
        """Parse a complete document and return a scanner positioned before it.

        Raises:
            ScannerConstructionError: If html5lib cannot build a tree.
        """
        parser = html5lib.HTMLParser(
            tree=html5lib.getTreeBuilder("etree"), namespaceHTMLElements=False,
        )
        try:
            tree = parser.parse(html)
        except Exception as e:
            raise ScannerConstructionError(f"Cannot parse HTML: {e}") from e
        if tree is None:
            raise ScannerConstructionError("Parser produced no document")
        logger.debug("Parsed %d characters with %d parse errors", len(html), len(parser.errors))
        return cls(tree, parser.errors)

    # ------------------------------------------------------------------
    # Token stream
    # ------------------------------------------------------------------

    def _walk(self, tree) -> Iterator[Token]:
        walker = html5lib.getTreeWalker("etree")
        stack: list[str] = []
        atomic: Token | None = None

        for item in concatenateCharacterTokens(walker(tree)):
            kind = item["type"]

            if atomic is not None:
                # Only text can appear inside a raw text element.
                if kind == "Characters":
                    atomic.text += item["data"]
                elif kind == "EndTag":
                    stack.pop()
                    yield atomic
                    atomic = None
                continue

            if kind in ("StartTag", "EmptyTag"):
                name = _element_name(item)
                attributes = {attr: value for (_, attr), value in item["data"].items()}
                token = Token(TokenType.TAG, name, attributes=attributes)
                stack.append(name)
                token.breadcrumbs = list(stack)
                if kind == "EmptyTag":
                    stack.pop()
                elif name in ATOMIC_ELEMENTS:
                    atomic = token
                    continue
                yield token
            elif kind == "EndTag":
                stack.pop()
                yield Token(
                    TokenType.TAG, _element_name(item), is_closer=True, breadcrumbs=list(stack),
                )
            elif kind == "Characters":
                yield Token(TokenType.TEXT, TEXT_NODE, text=item["data"], breadcrumbs=list(stack))
            elif kind == "Comment":
                yield Token(TokenType.COMMENT, COMMENT_NODE, text=item["data"], breadcrumbs=list(stack))

    def next_token(self) -> bool:
        """Advance to the next token; return False once the document is exhausted."""
        self._current = next(self._tokens, None)
        return self._current is not None

    # ------------------------------------------------------------------
    # Introspection of the current token
    # ------------------------------------------------------------------

    def get_token_type(self) -> TokenType | None:
        return self._current.kind if self._current else None

    def get_token_name(self) -> str | None:
        return self._current.name if self._current else None

    def is_tag_closer(self) -> bool:
        return bool(self._current and self._current.is_closer)

    def get_attribute(self, name: str) -> str | bool | None:
        """Return an attribute of the current opener.

        The parsed tree keeps no distinction between ``<x a>`` and ``<x a="">``,
        so an empty value is reported as a boolean attribute (``True``).
        """
        if self._current is None or self._current.is_closer:
            return None
        value = self._current.attributes.get(name.lower())
        if value is None:
            return None
        return value if value != "" else True

    def get_modifiable_text(self) -> str:
        return self._current.text if self._current else ""

    def get_breadcrumbs(self) -> list[str]:
        return list(self._current.breadcrumbs) if self._current else []

    def class_list(self) -> list[str]:
        """Unique class names of the current opener, in source order."""
        value = self.get_attribute("class")
        if not isinstance(value, str):
            return []
        return list(dict.fromkeys(value.split()))

    def get_last_error(self) -> str | None:
        return self._last_error


def _element_name(item: dict) -> str:
    """Upper-case HTML element names; foreign elements keep their local name."""
    namespace = item.get("namespace")
    if namespace in (None, namespaces["html"]):
        return item["name"].upper()
    return item["name"]
