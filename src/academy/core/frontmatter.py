"""Front-matter parsing for markdown content files.

A content file starts with a YAML block fenced by "---" lines:

    ---
    title: Variables and Data Types
    order: 1
    ---
    # Body starts here
"""

from __future__ import annotations

import datetime as dt
import re
from pathlib import Path
from typing import Any

import yaml

# Opening fence, YAML payload, closing fence (payload may be empty)
FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(?P<yaml>.*?)(?:\r?\n)?^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


class FrontMatterError(Exception):
    """Raised when a front-matter block cannot be parsed."""

    def __init__(self, message: str, path: Path | None = None):
        self.path = path
        location = f" in {path}" if path else ""
        super().__init__(f"Invalid front-matter{location}: {message}")


def _normalize_value(value: Any) -> Any:
    """Turn YAML dates into ISO strings, recursively."""
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    if isinstance(value, list):
        return [_normalize_value(v) for v in value]
    if isinstance(value, dict):
        return {k: _normalize_value(v) for k, v in value.items()}
    return value


def parse_frontmatter(text: str, path: Path | None = None) -> tuple[dict[str, Any], str]:
    """Split a markdown document into metadata and body.

    Args:
        text: Full file contents
        path: Source file, used in error messages only

    Returns:
        Tuple of (metadata dict, body). Documents without front-matter
        return an empty dict and the text unchanged.

    Raises:
        FrontMatterError: If the YAML is malformed or not a mapping
    """
    # Editors on Windows like to prepend a BOM
    text = text.lstrip("\ufeff")

    match = FRONTMATTER_PATTERN.match(text)
    if match is None:
        return {}, text

    try:
        data = yaml.safe_load(match.group("yaml"))
    except yaml.YAMLError as e:
        raise FrontMatterError(str(e), path) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"expected a mapping, got {type(data).__name__}", path
        )

    body = text[match.end():]
    return _normalize_value(data), body


def read_markdown_file(path: Path) -> tuple[dict[str, Any], str]:
    """Read a markdown file and parse its front-matter.

    Raises:
        FileNotFoundError: If the file doesn't exist
        FrontMatterError: If the front-matter is malformed or the file is not UTF-8
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise FrontMatterError(f"not valid UTF-8 ({e.reason} at byte {e.start})", path) from e
    return parse_frontmatter(text, path)
