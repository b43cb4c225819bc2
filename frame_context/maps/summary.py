# Copyright (c) 2026 Frame Contributors. All Rights Reserved.

"""
Record summaries for the records map.

Precomputed ``summary_3`` / ``summary_1`` always win. Otherwise an excerpt
of the body is generated, or a placeholder is used when generation is
turned off.
"""

from __future__ import annotations

import re

from frame_context.catalog.frontmatter import split_frontmatter
from frame_context.catalog.models import BaseMetadata

NO_SUMMARY = "(no summary)"
DEFAULT_EXCERPT_CHARS = 300

_HEADING_RE = re.compile(r"^#+\s+", re.MULTILINE)
_WHITESPACE_RE = re.compile(r"\s+")


def fallback_excerpt(content: str, limit: int = DEFAULT_EXCERPT_CHARS) -> str:
    """Body text without heading markers, whitespace collapsed, truncated with '...'."""
    _yaml, body = split_frontmatter(content)
    text = _HEADING_RE.sub("", body)
    text = _WHITESPACE_RE.sub(" ", text).strip()
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def extract_summary(
    metadata: BaseMetadata,
    content: str,
    include_fallback: bool = True,
    limit: int = DEFAULT_EXCERPT_CHARS,
) -> str:
    if metadata.summary_3:
        return metadata.summary_3
    if metadata.summary_1:
        return metadata.summary_1
    if not include_fallback:
        return NO_SUMMARY
    return fallback_excerpt(content, limit)
