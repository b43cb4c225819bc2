# Copyright (c) 2026 Frame Contributors. All Rights Reserved.

"""
Records Map Builder — Browsable indexes over all data records.

Writes two files into ``<project_root>/maps/`` on every build:

  records_tree.txt  — records grouped by doc_type, selected ones marked
  records_map.md    — one index card per record: ref, date, type, summary

Both use the same order: doc_type rank, then date (newest first, undated
last), then path. In incremental mode summaries are reused from
``records_cache.json`` for files the ChangeDetector reports as unchanged.
"""

from __future__ import annotations

import datetime as dt
import functools
import logging
import shutil
from pathlib import Path
from typing import AbstractSet, Dict, Iterable, List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field

from frame_context.catalog.loader import load_catalog
from frame_context.catalog.models import Catalog, DataMetadata, Entity, FileRef
from frame_context.catalog.resolver import OUTPUTS_SOURCE, ReferenceResolver
from frame_context.core.config import get_settings
from frame_context.core.metrics import frame_metrics
from frame_context.maps.cache import CACHE_FILENAME, load_cache, write_cache
from frame_context.maps.changes import ALL_CHANGED, ChangeDetector, ChangeSet, GitChangeDetector
from frame_context.maps.summary import DEFAULT_EXCERPT_CHARS, extract_summary

logger = logging.getLogger("frame.maps")

MAPS_DIR = "maps"
TREE_FILENAME = "records_tree.txt"
MAP_FILENAME = "records_map.md"

OTHER_DOC_TYPE = "other"
DOC_TYPE_ORDER: Tuple[str, ...] = (
    "transcript", "journal", "article", "collateral", "table", OTHER_DOC_TYPE,
)
_DOC_TYPE_RANK: Dict[str, int] = {name: i for i, name in enumerate(DOC_TYPE_ORDER)}


class MapBuilderOptions(BaseModel):
    include_fallback_summaries: bool = True
    output_ref_source: str = OUTPUTS_SOURCE
    incremental: bool = False
    fallback_summary_chars: int = Field(default=DEFAULT_EXCERPT_CHARS, gt=0)


class MapBuildResult(BaseModel):
    maps: List[FileRef]
    generated_at: str
    notes: str


# ── Ordering ────────────────────────────────────────────────

def doc_type_of(entity: Entity) -> str:
    metadata = entity.metadata
    if isinstance(metadata, DataMetadata) and metadata.doc_type is not None:
        return metadata.doc_type.value
    return OTHER_DOC_TYPE


def date_of(entity: Entity) -> Optional[str]:
    metadata = entity.metadata
    return metadata.date if isinstance(metadata, DataMetadata) else None


def compare_records(a: Entity, b: Entity) -> int:
    """doc_type rank asc, then date desc (dated first), then path asc."""
    a_rank = _DOC_TYPE_RANK.get(doc_type_of(a), len(DOC_TYPE_ORDER))
    b_rank = _DOC_TYPE_RANK.get(doc_type_of(b), len(DOC_TYPE_ORDER))
    if a_rank != b_rank:
        return a_rank - b_rank

    a_date, b_date = date_of(a), date_of(b)
    if a_date and b_date:
        if a_date != b_date:
            return -1 if a_date > b_date else 1
    elif a_date:
        return -1
    elif b_date:
        return 1

    if a.ref.path != b.ref.path:
        return -1 if a.ref.path < b.ref.path else 1
    return 0


def sort_records(entities: Iterable[Entity]) -> List[Entity]:
    return sorted(entities, key=functools.cmp_to_key(compare_records))


# ── Rendering ───────────────────────────────────────────────

def humanize(entity_id: str) -> str:
    return entity_id.replace("_", " ")


def render_records_tree(entities: Sequence[Entity], selected_ids: AbstractSet[str]) -> str:
    lines: List[str] = ["Records Tree", "=" * 50, ""]

    groups: Dict[str, List[Entity]] = {}
    for entity in sort_records(entities):
        groups.setdefault(doc_type_of(entity), []).append(entity)

    for doc_type in DOC_TYPE_ORDER:
        members = groups.get(doc_type)
        if not members:
            continue
        lines.append(f"{doc_type.capitalize()}s:")
        for entity in members:
            marker = "[SELECTED] " if entity.id in selected_ids else ""
            date = date_of(entity)
            date_str = f" ({date})" if date else ""
            lines.append(f"  {marker}{humanize(entity.id)}{date_str}")
        lines.append("")

    return "\n".join(lines)


def ref_string(entity: Entity) -> str:
    return f"ref:{entity.ref.source}:{entity.type}:{entity.id}"


def format_map_entry(entity: Entity, summary: str) -> str:
    date = date_of(entity)
    date_str = f" {date}" if date else ""
    doc_type = doc_type_of(entity)
    doc_type_str = f" ({doc_type})" if doc_type != OTHER_DOC_TYPE else ""
    head = f"- [{ref_string(entity)}]{date_str}{doc_type_str} —"

    summary_lines = [line.strip() for line in summary.split("\n") if line.strip()]
    if len(summary_lines) > 1:
        return head + "\n" + "\n".join(f"  {line}" for line in summary_lines)
    return f"{head} {summary.strip()}"


def render_records_map(entries: Sequence[Tuple[Entity, str]]) -> str:
    lines: List[str] = [
        "# Records Map",
        "",
        "Index cards for all data records, sorted by doc_type, date (desc), filename.",
        "",
    ]
    for entity, summary in entries:
        lines.append(format_map_entry(entity, summary))
        lines.append("")
    return "\n".join(lines)


# ── Output area ─────────────────────────────────────────────

def clean_maps_dir(
    project_root: str | Path,
    maps_dir: str = MAPS_DIR,
    keep: AbstractSet[str] = frozenset(),
) -> int:
    """Delete every file and folder in the maps directory except ``keep``. Returns count removed."""
    target = Path(project_root).resolve() / maps_dir
    if not target.exists():
        return 0
    removed = 0
    for entry in target.iterdir():
        if entry.name in keep:
            continue
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()
        removed += 1
    return removed


# ── Builder ─────────────────────────────────────────────────

class RecordsMapBuilder:
    """
    Generates records_tree.txt and records_map.md.

    Usage:
        builder = RecordsMapBuilder(project_root, resolver)
        result = builder.build(catalog, selected_ids={"weekly_sync"})
    """

    def __init__(
        self,
        project_root: str | Path,
        resolver: Optional[ReferenceResolver] = None,
        options: Optional[MapBuilderOptions] = None,
        change_detector: Optional[ChangeDetector] = None,
        maps_dir: str = MAPS_DIR,
    ) -> None:
        self.project_root = Path(project_root).resolve()
        self._resolver = resolver or ReferenceResolver(self.project_root)
        self.options = options or MapBuilderOptions()
        self._detector: ChangeDetector = change_detector or GitChangeDetector(
            get_settings().GIT_TIMEOUT_SECONDS,
        )
        self._maps_dir = maps_dir

    @property
    def maps_path(self) -> Path:
        return self.project_root / self._maps_dir

    def build(
        self,
        catalog: Optional[Catalog] = None,
        selected_ids: AbstractSet[str] = frozenset(),
    ) -> MapBuildResult:
        """
        Regenerate both maps (and the cache in incremental mode).

        Args:
            catalog: Loaded catalog; loaded from the project if None.
            selected_ids: Record ids to mark [SELECTED] in the tree.
        """
        if catalog is None:
            catalog = load_catalog(self.project_root, self._resolver.registry)

        with frame_metrics.timed("map_build_ms"):
            records = self._write_maps(catalog, selected_ids)
        frame_metrics.inc("map_builds")
        logger.info("Built records maps: %d records", len(records))

        source = self.options.output_ref_source
        return MapBuildResult(
            maps=[
                FileRef(source=source, path=f"{self._maps_dir}/{TREE_FILENAME}"),
                FileRef(source=source, path=f"{self._maps_dir}/{MAP_FILENAME}"),
            ],
            generated_at=dt.datetime.now(dt.timezone.utc).isoformat(),
            notes=f"Generated {len(records)} record entries",
        )

    def _write_maps(self, catalog: Catalog, selected_ids: AbstractSet[str]) -> List[Entity]:
        """Write tree, index and (incremental) cache. Returns records in map order."""
        records = sort_records(e for e in catalog.values() if e.type == "data")

        cache_path = self.maps_path / CACHE_FILENAME
        cached = load_cache(cache_path) if self.options.incremental else {}

        summaries: Dict[str, str] = {}
        entries: List[Tuple[Entity, str]] = []
        change_sets: Dict[str, ChangeSet] = {}
        for entity in records:
            summary = cached.get(entity.ref.key)
            if summary is None or self._is_changed(entity, change_sets):
                content = self._resolver.read(entity.ref)
                summary = extract_summary(
                    entity.metadata,
                    content,
                    include_fallback=self.options.include_fallback_summaries,
                    limit=self.options.fallback_summary_chars,
                )
                frame_metrics.inc("summaries_recomputed")
            else:
                frame_metrics.inc("summaries_reused")
            summaries[entity.ref.key] = summary
            entries.append((entity, summary))

        tree_text = render_records_tree(records, selected_ids)
        map_text = render_records_map(entries)

        self.maps_path.mkdir(parents=True, exist_ok=True)
        clean_maps_dir(self.project_root, self._maps_dir, keep={CACHE_FILENAME})
        (self.maps_path / TREE_FILENAME).write_text(tree_text, encoding="utf-8")
        (self.maps_path / MAP_FILENAME).write_text(map_text, encoding="utf-8")
        if self.options.incremental:
            write_cache(cache_path, summaries)
        return records

    def _is_changed(self, entity: Entity, change_sets: Dict[str, ChangeSet]) -> bool:
        if not self.options.incremental:
            return True
        source_name = entity.ref.source
        if source_name not in change_sets:
            source = self._resolver.registry.get(source_name)
            if source is None:
                change_sets[source_name] = ALL_CHANGED
            else:
                root = self._resolver.registry.resolve_root(source)
                change_sets[source_name] = self._detector.changed_paths(root)
        return entity.ref.path in change_sets[source_name]
