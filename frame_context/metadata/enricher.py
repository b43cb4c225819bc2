# Copyright (c) 2026 Frame Contributors. All Rights Reserved.

"""
Metadata Enricher — Fill missing frontmatter fields by heuristics.

For every Markdown file under a directory, infer ``type``, ``id`` and
(for data) ``doc_type``, ``date`` and ``tags``. Existing keys are kept
unless ``overwrite`` is set. Nothing is written unless ``write`` is set.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from frame_context.catalog.frontmatter import parse_frontmatter, render_frontmatter
from frame_context.catalog.loader import date_from_filename
from frame_context.catalog.models import DocType
from frame_context.core.errors import FrontmatterError

logger = logging.getLogger("frame.metadata")

STOPWORDS = frozenset({
    "the", "and", "for", "that", "this", "with", "from", "they", "their",
    "have", "will", "were", "what", "when", "where", "which", "your", "you",
    "our", "about", "into", "over", "under", "after", "before", "between",
    "because", "these", "those", "there", "here", "also", "just", "than",
    "then", "them", "been", "more", "most", "some", "such", "very", "make",
    "made", "does", "did", "doing", "done", "can", "could", "should",
    "would", "may", "might", "must", "not", "no", "yes",
})

CONTENT_DATE_RE = re.compile(r"\b(20\d{2}-\d{2}-\d{2})\b")
SPEAKER_LINE_RE = re.compile(r"^[A-Z][A-Z0-9 _-]{1,30}:\s+", re.MULTILINE)
TABLE_LINE_RE = re.compile(r"^\s*\|.+\|\s*$", re.MULTILINE)
LEADING_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}[_-]?")


class EnrichOptions(BaseModel):
    type: Literal["skill", "tool", "profile", "data"] = "data"
    doc_type: Optional[DocType] = None
    max_tags: int = Field(default=5, ge=0)
    id_prefix: Optional[str] = None
    overwrite: bool = False
    write: bool = False


@dataclass
class EnrichmentChange:
    path: Path
    changed: bool
    frontmatter: Dict[str, Any]


def to_id(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "_", text.lower()).strip("_")


def infer_date(filename: str, content: str) -> Optional[str]:
    """Filename prefix wins over the first date mentioned in the content."""
    from_name = date_from_filename(filename)
    if from_name:
        return from_name
    match = CONTENT_DATE_RE.search(content)
    return match.group(1) if match else None


def infer_doc_type(content: str, fallback: Optional[DocType] = None) -> DocType:
    lower = content.lower()
    if TABLE_LINE_RE.search(content):
        return DocType.TABLE
    if "transcript" in lower or SPEAKER_LINE_RE.search(content):
        return DocType.TRANSCRIPT
    if "journal" in lower or "diary" in lower:
        return DocType.JOURNAL
    if "collateral" in lower or "one-pager" in lower:
        return DocType.COLLATERAL
    if "report" in lower or "article" in lower:
        return DocType.ARTICLE
    return fallback or DocType.ARTICLE


def infer_tags(content: str, max_tags: int) -> List[str]:
    """Most frequent tokens (len >= 4, not stopwords); ties broken alphabetically."""
    cleaned = re.sub(r"[^\w\s-]", " ", content).lower()
    tokens = [t for t in cleaned.split() if len(t) >= 4 and t not in STOPWORDS]
    counts = Counter(tokens)
    ranked = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    return [token for token, _ in ranked[:max_tags]]


def build_frontmatter(
    file_path: Path,
    body: str,
    existing: Dict[str, Any],
    options: EnrichOptions,
) -> Dict[str, Any]:
    """Merge inferred fields into ``existing`` without mutating it."""
    stem = file_path.stem
    id_base = LEADING_DATE_RE.sub("", stem)
    entity_id = to_id(f"{options.id_prefix}_{id_base}" if options.id_prefix else id_base)

    result = dict(existing)

    def set_if_missing(key: str, value: Any) -> None:
        if options.overwrite or result.get(key) is None:
            result[key] = value

    set_if_missing("type", options.type)
    set_if_missing("id", entity_id)
    if options.type == "data":
        set_if_missing("doc_type", infer_doc_type(body, options.doc_type).value)
        inferred_date = infer_date(file_path.name, body)
        if inferred_date:
            set_if_missing("date", inferred_date)
    tags = infer_tags(body, options.max_tags)
    if tags:
        set_if_missing("tags", tags)
    return result


def enrich_directory(source_dir: str | Path, options: EnrichOptions) -> List[EnrichmentChange]:
    """
    Enrich every ``*.md`` below ``source_dir``.

    Raises FileNotFoundError if the directory does not exist. Files whose
    frontmatter cannot be parsed are skipped with a warning.
    """
    root = Path(source_dir).resolve()
    if not root.is_dir():
        raise FileNotFoundError(f"Source directory does not exist: {root}")

    changes: List[EnrichmentChange] = []
    for file_path in sorted(root.rglob("*.md")):
        raw = file_path.read_text(encoding="utf-8")
        try:
            existing, body = parse_frontmatter(raw)
        except FrontmatterError as e:
            logger.warning("Skipping %s: %s", file_path, e)
            continue

        updated = build_frontmatter(file_path, body, existing, options)
        rendered = render_frontmatter(updated, body)
        changed = updated != existing
        if changed and options.write:
            file_path.write_text(rendered, encoding="utf-8")
        logger.info("%s: %s", "Updated" if changed else "No changes", file_path)
        changes.append(EnrichmentChange(path=file_path, changed=changed, frontmatter=updated))

    if not options.write:
        logger.info("Dry run complete. Re-run with write enabled to apply changes.")
    return changes
