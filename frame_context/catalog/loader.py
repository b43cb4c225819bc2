# Copyright (c) 2026 Frame Contributors. All Rights Reserved.

"""
Catalog Loader — Scan every configured source and build the entity catalog.

Each source root may contain ``skills/``, ``tools/``, ``profiles/`` and
``data/`` directories of Markdown files with YAML frontmatter. A document
that cannot be used is skipped with a warning; a duplicate id anywhere
aborts the whole load.

``load_catalog()`` returns a brand-new dict on every call. Nothing is
cached between calls, so a reload never exposes a half-built catalog.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from pydantic import ValidationError

from frame_context.catalog.frontmatter import parse_frontmatter
from frame_context.catalog.models import Catalog, Entity, FileRef, parse_metadata
from frame_context.catalog.sources import SourceConfig, SourceRegistry, load_source_registry
from frame_context.core.config import get_settings
from frame_context.core.errors import DuplicateEntityError, FrontmatterError
from frame_context.core.logging import ContextAdapter
from frame_context.core.metrics import frame_metrics

logger = logging.getLogger("frame.loader")

# Directory name → expected metadata type
ENTITY_DIRS: Dict[str, str] = {
    "skills": "skill",
    "tools": "tool",
    "profiles": "profile",
    "data": "data",
}

FILENAME_DATE_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})")


def date_from_filename(file_path: str | Path) -> Optional[str]:
    """Leading YYYY-MM-DD token of a file's stem, if any."""
    match = FILENAME_DATE_RE.match(Path(file_path).stem)
    return match.group(1) if match else None


def _iter_markdown(type_dir: Path) -> Iterator[Path]:
    return iter(sorted(p for p in type_dir.rglob("*.md") if p.is_file()))


def _load_document(
    file_path: Path,
    expected_type: str,
    source_name: str,
    source_root: Path,
) -> Optional[Entity]:
    """Parse one Markdown file into an Entity, or None (with a warning) if unusable."""
    rel_path = file_path.relative_to(source_root).as_posix()
    log = ContextAdapter(logger, {"source": source_name, "path": rel_path})

    try:
        content = file_path.read_text(encoding="utf-8")
        raw, _body = parse_frontmatter(content)
    except (OSError, UnicodeDecodeError, FrontmatterError) as e:
        log.warning("Skipping %s: %s", file_path, e)
        return None

    if not raw.get("type") or not raw.get("id"):
        log.warning("Skipping %s: missing type or id", file_path)
        return None

    if raw["type"] != expected_type:
        log.warning(
            "Skipping %s: type mismatch (%s vs %s)",
            file_path, raw["type"], expected_type,
        )
        return None

    # Date derivation happens on the in-memory copy only
    if expected_type == "data" and not raw.get("date"):
        derived = date_from_filename(file_path)
        if derived:
            raw = {**raw, "date": derived}

    try:
        metadata = parse_metadata(raw)
    except ValidationError as e:
        log.warning(
            "Skipping %s: invalid metadata (%d errors): %s",
            file_path, e.error_count(), e.errors()[0].get("msg", ""),
        )
        return None

    return Entity(metadata=metadata, ref=FileRef(source=source_name, path=rel_path))


def load_entities_from_source(
    source: SourceConfig,
    registry: SourceRegistry,
) -> List[Entity]:
    """Load all valid entities of one source, in directory then path order."""
    source_root = registry.resolve_root(source)
    if not source_root.exists():
        logger.warning(
            "Source path does not exist, skipping: %s -> %s",
            source.name, source_root, extra={"source": source.name},
        )
        return []

    entities: List[Entity] = []
    for dir_name, expected_type in ENTITY_DIRS.items():
        type_dir = source_root / dir_name
        if not type_dir.is_dir():
            continue
        for file_path in _iter_markdown(type_dir):
            entity = _load_document(file_path, expected_type, source.name, source_root)
            if entity is None:
                frame_metrics.inc("documents_skipped")
                continue
            entities.append(entity)
    return entities


def load_catalog(
    project_root: str | Path,
    registry: Optional[SourceRegistry] = None,
    *,
    test_mode: Optional[bool] = None,
) -> Catalog:
    """
    Build the full catalog for a project.

    Args:
        project_root: Directory holding frame/sources.yaml.
        registry: Pre-loaded source registry (loaded from disk if None).
        test_mode: Include sources marked ``ignore``. Defaults to
            FRAME_MODE=test / FRAME_TEST_MODE=true.

    Raises:
        SourcesConfigNotFoundError: no source registry.
        DuplicateEntityError: the same id appears twice.
    """
    settings = get_settings()
    if registry is None:
        registry = load_source_registry(project_root, settings.SOURCES_FILE)
    if test_mode is None:
        test_mode = settings.is_test_mode

    catalog: Catalog = {}
    for source in registry:
        if source.ignore and not test_mode:
            logger.debug("Ignoring source %s (not in test mode)", source.name)
            continue
        for entity in load_entities_from_source(source, registry):
            existing = catalog.get(entity.id)
            if existing is not None:
                frame_metrics.inc("duplicate_ids")
                raise DuplicateEntityError(entity.id, existing.ref.key, entity.ref.key)
            catalog[entity.id] = entity

    frame_metrics.inc("entities_loaded", len(catalog))
    frame_metrics.set_gauge("catalog_size", len(catalog))
    logger.info("Loaded %d entities from %d sources", len(catalog), len(registry))
    return catalog


def describe_catalog(catalog: Catalog) -> Iterator[str]:
    """Printable one-line summaries, ``id (type) from source:path``."""
    for entity_id, entity in catalog.items():
        yield f"{entity_id} ({entity.type}) from {entity.ref.key}"
