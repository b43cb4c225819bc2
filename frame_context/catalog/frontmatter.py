# Copyright (c) 2026 Frame Contributors. All Rights Reserved.

"""
Frontmatter — Split, parse and render YAML frontmatter in Markdown files.

A document starts with a ``---`` line, YAML, and a closing ``---`` line.
Documents without that header have empty metadata and the whole text as
body.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Tuple

import yaml

from frame_context.core.errors import FrontmatterError

_FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(.*?)(?:\r?\n)?^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


def split_frontmatter(content: str) -> Tuple[str, str]:
    """Return (yaml_text, body). yaml_text is "" when there is no header."""
    if content.startswith("\ufeff"):
        content = content[1:]
    match = _FRONTMATTER_RE.match(content)
    if not match:
        return "", content
    return match.group(1), content[match.end():]


def parse_frontmatter(content: str) -> Tuple[Dict[str, Any], str]:
    """
    Parse a Markdown document into (metadata, body).

    Raises FrontmatterError when the header is not valid YAML or is not a
    mapping.
    """
    yaml_text, body = split_frontmatter(content)
    if not yaml_text.strip():
        return {}, body
    try:
        meta = yaml.safe_load(yaml_text)
    except yaml.YAMLError as e:
        raise FrontmatterError(str(e)) from e
    if meta is None:
        return {}, body
    if not isinstance(meta, dict):
        raise FrontmatterError(f"expected a mapping, got {type(meta).__name__}")
    return meta, body


def render_frontmatter(meta: Dict[str, Any], body: str) -> str:
    """Serialize metadata + body back into a Markdown document."""
    if not meta:
        return body
    header = yaml.safe_dump(
        meta,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
    return f"---\n{header}---\n{body}"
