"""HTML to Markdown conversion.

The converter pulls tokens from a scanner and renders them into a line
buffer.  Block structure (quotes, lists, code, headings) never goes into the
buffer directly; it is applied as line prefixes each time the buffer is
flushed, so wrapping and nesting are resolved in one place.
"""

from __future__ import annotations

import logging

from .base import (
    ScannerConstructionError,
    ScannerParseError,
    TokenScanner,
    TokenType,
)
from .blocks import HEADING_TAGS, LIST_TAGS, BlockContext, LinePrefix
from .fallback import extract_text
from .inline import (
    InlineFormatting,
    escape_ascii_punctuation,
    is_layout_whitespace,
    normalize_whitespace,
)
from .languages import infer_language
from .links import LinkCapture, format_image, format_link, to_url
from .scanner import Html5Scanner
from .wrap import split_words, wrap_words

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 80

# Output shorter than this after a flagged parse error is not trusted.
MIN_OUTPUT_LENGTH = 50

FLUSH_ON_CLOSE = frozenset({"BLOCKQUOTE", "LI", "PRE"}) | HEADING_TAGS

FENCE = "```"


def preprocess_input_stream(html: str) -> str:
    """Normalize CRLF and CR line endings to LF."""
    return html.replace("\r\n", "\n").replace("\r", "\n")


class HtmlToMarkdown:
    """Single-use HTML to Markdown converter.

    All layout state lives on the instance and is rebuilt by every call to
    :meth:`convert`; share nothing between concurrent conversions.
    """

    def __init__(self, base_url: str | None = None, width: int = DEFAULT_WIDTH) -> None:
        self.width = width
        self._initial_base_url = base_url or ""
        self._reset()

    def _reset(self) -> None:
        self.base_url = self._initial_base_url
        self._line = ""
        self._output: list[str] = []
        self._blocks = BlockContext()
        self._inline = InlineFormatting()
        self._link: LinkCapture | None = None

    def convert(self, html: str) -> str:
        """Convert *html* to Markdown, degrading to plain text on failure."""
        self._reset()
        source = preprocess_input_stream(html)
        try:
            scanner = Html5Scanner.create_full_parser(source)
        except ScannerConstructionError as e:
            logger.debug("Scanner unavailable, extracting text: %s", e)
            return extract_text(source)

        try:
            return self.process(scanner)
        except ScannerParseError as e:
            logger.debug("Parse error %s left almost no output, extracting text", e)
            return extract_text(html)
        except Exception:
            logger.warning("Unexpected fault while converting HTML, extracting text", exc_info=True)
            return extract_text(html)

    def process(self, scanner: TokenScanner) -> str:
        """Run the token loop over *scanner* and return the Markdown.

        Raises:
            ScannerParseError: If the scanner flagged an error and the output
                is too short to be trusted.
        """
        while scanner.next_token():
            kind = scanner.get_token_type()
            if kind is TokenType.TEXT:
                self._handle_text(scanner)
            elif kind is TokenType.TAG:
                self._handle_tag(scanner)

        last_error = scanner.get_last_error()
        if last_error and len(self.markdown) < MIN_OUTPUT_LENGTH:
            raise ScannerParseError(last_error)

        self._flush()
        return self.markdown.strip()

    @property
    def markdown(self) -> str:
        return "".join(self._output)

    # ------------------------------------------------------------------
    # Token handlers
    # ------------------------------------------------------------------

    def _handle_text(self, scanner: TokenScanner) -> None:
        text = scanner.get_modifiable_text()
        if not text or is_layout_whitespace(text):
            return

        breadcrumbs = scanner.get_breadcrumbs()
        if "PRE" in breadcrumbs:
            self._line += text
        elif "CODE" in breadcrumbs:
            # Code spans are literal; backslash escapes would show.
            self._line += normalize_whitespace(text)
        else:
            self._line += normalize_whitespace(escape_ascii_punctuation(text))

    def _handle_tag(self, scanner: TokenScanner) -> None:
        tag = scanner.get_token_name()
        is_closer = scanner.is_tag_closer()

        if is_closer:
            if tag in FLUSH_ON_CLOSE and self._line.strip():
                self._flush()
            self._blocks.leave(tag)

        if tag == "A":
            if is_closer:
                self._close_link()
            else:
                href = scanner.get_attribute("href")
                title = scanner.get_attribute("title")
                self._link = LinkCapture(
                    href=href if isinstance(href, str) else None,
                    title=title if isinstance(title, str) else None,
                    saved_line=self._line,
                )
                self._line = ""
        elif tag in ("B", "STRONG"):
            self._line += self._inline.toggle("strong", is_closer)
        elif tag in ("I", "EM"):
            self._line += self._inline.toggle("emphasis", is_closer)
        elif tag == "BASE":
            href = scanner.get_attribute("href")
            if not self.base_url and isinstance(href, str) and href.strip():
                self.base_url = to_url(href.strip(), self.base_url)
        elif tag == "BR":
            self._flush(hard_break=bool(self._line))
        elif tag == "CODE":
            if "PRE" in scanner.get_breadcrumbs():
                self._flush()
                self._line += FENCE
                if not is_closer:
                    self._line += infer_language(scanner.class_list(), scanner.get_attribute)
                self._flush()
            else:
                self._line += "`"
        elif tag in HEADING_TAGS:
            if is_closer:
                self._line = self._line.strip()
                self._flush()
            else:
                self._flush()
                self._line += "\n"
                self._flush()
                self._line += "#" * int(tag[1]) + " "
        elif tag == "HR":
            self._flush()
            # '*' rather than '-' so it never reads as a setext underline.
            self._line += "***"
            self._flush()
        elif tag == "IMG":
            self._line += format_image(
                scanner.get_attribute("alt"),
                scanner.get_attribute("src"),
                scanner.get_attribute("title"),
                self.base_url,
            )
        elif tag == "LI":
            if not is_closer:
                if self._line.strip():
                    self._flush()
                breadcrumbs = scanner.get_breadcrumbs()
                if len(breadcrumbs) >= 2 and breadcrumbs[-2] in LIST_TAGS:
                    self._blocks.start_item()
        elif tag in LIST_TAGS:
            self._flush()
            if is_closer:
                self._blocks.close_list()
            else:
                self._blocks.open_list(ordered=tag == "OL")
        elif tag in ("BLOCKQUOTE", "P"):
            self._flush()

        if not is_closer:
            self._blocks.enter(tag)

    def _close_link(self) -> None:
        if self._link is None:
            return
        label = self._line.strip()
        self._line = self._link.saved_line
        self._line += format_link(label, self._link.href, self._link.title, self.base_url)
        self._link = None

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def _flush(self, hard_break: bool = False) -> None:
        """Move the line buffer into the output under the current block prefixes."""
        prefix = self._blocks.prefix()
        line, self._line = self._line, ""

        if prefix.no_newlines:
            text = (prefix.first + line.strip()).rstrip()
            if text:
                self._emit([text], prefix)
            else:
                self._blank()
            return

        if prefix.in_pre:
            if not line:
                self._blank()
                return
            rows = line.split("\n")
            if len(rows) > 1 and rows[-1] == "":
                rows.pop()
            self._emit(
                [prefix.first + rows[0]] + [prefix.continuation + row for row in rows[1:]],
                prefix,
            )
            return

        line = line.strip()
        if not line:
            self._blank()
            return
        lines = wrap_words(split_words(line), self.width, prefix.first, prefix.continuation)
        if hard_break:
            lines[-1] += "  "
        self._emit(lines, prefix)

    def _emit(self, lines: list[str], prefix: LinePrefix) -> None:
        self._output.extend(f"{line}\n" for line in lines)
        if prefix.item is not None:
            prefix.item.marker_emitted = True

    def _blank(self) -> None:
        # At most one blank line in a row, and none at the very start.
        if self._output and self._output[-1] != "\n":
            self._output.append("\n")


def convert(html: str | bytes, base_url: str | None = None, width: int = DEFAULT_WIDTH) -> str:
    """Convert an HTML document to Markdown.

    Args:
        html: HTML source; bytes are decoded as UTF-8.
        base_url: Base for relative links.  When omitted, the first
            ``<base href>`` in the document is used, else ``/``.
        width: Target line width in grapheme clusters.

    Returns:
        Markdown text.  Never raises: malformed input degrades to plain text.
    """
    if isinstance(html, bytes):
        html = html.decode("utf-8", errors="replace")
    elif not isinstance(html, str):
        html = "" if html is None else str(html)
    if not isinstance(base_url, str):
        base_url = None
    if isinstance(width, bool) or not isinstance(width, int) or width < 1:
        width = DEFAULT_WIDTH
    return HtmlToMarkdown(base_url=base_url, width=width).convert(html)
