"""Tool endpoint: ``{html, baseUrl?, width?}`` in, ``{text}`` out."""

from __future__ import annotations

import logging

from .base import ToolResult
from .converter import DEFAULT_WIDTH, convert

logger = logging.getLogger(__name__)

TOOL_NAME = "html_to_markdown"
ERROR_PREFIX = "Error converting HTML to Markdown: "

INPUT_SCHEMA = {
    "type": "object",
    "properties": {
        "html": {"type": "string", "description": "HTML document or fragment to convert"},
        "baseUrl": {"type": "string", "description": "Base URL for relative links"},
        "width": {"type": "integer", "minimum": 1, "description": "Line width to wrap at"},
    },
    "required": ["html"],
}


def _validate(payload: object) -> tuple[str, str | None, int]:
    if not isinstance(payload, dict):
        raise ValueError("request must be an object")

    html = payload.get("html")
    if not isinstance(html, str):
        raise ValueError("'html' must be a string")

    base_url = payload.get("baseUrl")
    if base_url is not None and not isinstance(base_url, str):
        raise ValueError("'baseUrl' must be a string")

    width = payload.get("width", DEFAULT_WIDTH)
    if isinstance(width, bool) or not isinstance(width, int) or width < 1:
        raise ValueError("'width' must be a positive integer")

    return html, base_url or None, width


def convert_html_to_markdown(payload: object) -> ToolResult:
    """Validate a tool request and convert its HTML."""
    try:
        html, base_url, width = _validate(payload)
    except ValueError as e:
        logger.debug("Rejected tool request: %s", e)
        return ToolResult(text=f"{ERROR_PREFIX}{e}", is_error=True)
    return ToolResult(text=convert(html, base_url=base_url, width=width))


def handle_request(payload: object) -> dict:
    """Return the JSON-ready response for a tool request."""
    return convert_html_to_markdown(payload).to_payload()
