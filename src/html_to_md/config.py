"""Conversion defaults from ``.html-to-md.toml``.

Example::

    [convert]
    width = 100
    base_url = "https://example.com"
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from .converter import DEFAULT_WIDTH

CONFIG_FILENAME = ".html-to-md.toml"


@dataclass
class ConvertOptions:
    """Options passed through to :func:`html_to_md.convert`."""

    width: int = DEFAULT_WIDTH
    base_url: str | None = None


def load_config(config_path: Path | None = None) -> ConvertOptions:
    """Load conversion options from a TOML file.

    Args:
        config_path: Path to the config file.  Defaults to
            ``.html-to-md.toml`` in the current working directory.

    Returns:
        The options; defaults when the file does not exist.

    Raises:
        ValueError: If the file is not valid TOML or a value has the wrong
            type.
    """
    if config_path is None:
        config_path = Path.cwd() / CONFIG_FILENAME
    if not config_path.exists():
        return ConvertOptions()

    try:
        with open(config_path, "rb") as f:
            config = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in {config_path}: {e}") from e

    section = config.get("convert", {})
    if not isinstance(section, dict):
        raise ValueError(f"[convert] in {config_path} must be a table")

    options = ConvertOptions()
    if "width" in section:
        width = section["width"]
        if isinstance(width, bool) or not isinstance(width, int) or width < 1:
            raise ValueError(f"convert.width must be a positive integer (got {width!r})")
        options.width = width
    if "base_url" in section:
        base_url = section["base_url"]
        if not isinstance(base_url, str):
            raise ValueError(f"convert.base_url must be a string (got {base_url!r})")
        options.base_url = base_url or None
    return options
