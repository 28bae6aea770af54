"""Protocol, token kinds, failure types, and result dataclass for conversion."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable

TEXT_NODE = "#text"
COMMENT_NODE = "#comment"


class TokenType(Enum):
    TAG = "tag"
    TEXT = "text"
    COMMENT = "comment"


class ScannerConstructionError(Exception):
    """No token scanner could be built for the input."""


class ScannerParseError(Exception):
    """The scanner flagged a fault in the markup and output is unusable."""


@runtime_checkable
class TokenScanner(Protocol):
    """Pull-based HTML token source with ancestor context.

    One scanner belongs to exactly one conversion call.
    """

    def next_token(self) -> bool: ...
    def get_token_type(self) -> TokenType | None: ...
    def get_token_name(self) -> str | None: ...
    def is_tag_closer(self) -> bool: ...
    def get_attribute(self, name: str) -> str | bool | None: ...
    def get_modifiable_text(self) -> str: ...
    def get_breadcrumbs(self) -> list[str]: ...
    def class_list(self) -> list[str]: ...
    def get_last_error(self) -> str | None: ...


@dataclass
class ToolResult:
    """Result returned by the tool endpoint."""

    text: str
    is_error: bool = False

    def to_payload(self) -> dict:
        payload: dict = {"text": self.text}
        if self.is_error:
            payload["isError"] = True
        return payload
