"""html-to-md: convert HTML documents to readable, wrapped CommonMark."""

from __future__ import annotations

from .base import ScannerConstructionError, ScannerParseError, TokenScanner, ToolResult
from .converter import DEFAULT_WIDTH, HtmlToMarkdown, convert

__all__ = [
    "DEFAULT_WIDTH",
    "HtmlToMarkdown",
    "ScannerConstructionError",
    "ScannerParseError",
    "TokenScanner",
    "ToolResult",
    "convert",
]
