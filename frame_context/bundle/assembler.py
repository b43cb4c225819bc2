# Copyright (c) 2026 Frame Contributors. All Rights Reserved.

"""
Bundle Assembler — One ordered context artifact per request.

    context_read_order = profile → skills → tools → maps → records

Maps always come before full records so a reader sees the lightweight
index before any full document. The bundle holds references only; the
tree preview is the single piece of inlined content.
"""

from __future__ import annotations

import datetime as dt
import json
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

from frame_context.catalog.loader import load_catalog
from frame_context.catalog.models import Catalog, FileRef
from frame_context.catalog.resolver import OUTPUTS_SOURCE, ReferenceResolver
from frame_context.core.metrics import frame_metrics
from frame_context.curation.curator import CurationResult, CuratorLimits, curate
from frame_context.maps.builder import (
    MAPS_DIR,
    TREE_FILENAME,
    MapBuilderOptions,
    MapBuildResult,
    RecordsMapBuilder,
)
from frame_context.maps.changes import ChangeDetector
from frame_context.maps.summary import DEFAULT_EXCERPT_CHARS

logger = logging.getLogger("frame.bundle")

BUNDLE_FILENAME = "context_bundle.json"


class ContextBundle(BaseModel):
    """Terminal artifact handed to the downstream agent."""

    original_request: str
    profile: Optional[FileRef] = None
    skills: List[FileRef] = Field(default_factory=list)
    tools: List[FileRef] = Field(default_factory=list)
    records: List[FileRef] = Field(default_factory=list)
    maps: List[FileRef] = Field(default_factory=list)
    context_read_order: List[FileRef] = Field(default_factory=list)
    records_tree_preview: str = ""
    notes: str = ""


class BundleOptions(BaseModel):
    request: str = Field(..., min_length=1)
    run_dir: Optional[str] = None
    output_ref_source: str = OUTPUTS_SOURCE
    include_fallback_summaries: bool = True
    incremental: bool = False
    fallback_summary_chars: int = Field(default=DEFAULT_EXCERPT_CHARS, gt=0)
    limits: CuratorLimits = Field(default_factory=CuratorLimits)


def build_read_order(curation: CurationResult, maps: List[FileRef]) -> List[FileRef]:
    order: List[FileRef] = []
    if curation.profile:
        order.append(curation.profile.ref)
    order.extend(s.ref for s in curation.skills)
    order.extend(t.ref for t in curation.tools)
    order.extend(maps)
    order.extend(r.ref for r in curation.records)
    return order


def pick_tree_ref(maps: List[FileRef]) -> Optional[FileRef]:
    for ref in maps:
        if ref.path.endswith(TREE_FILENAME):
            return ref
    return maps[0] if maps else None


class BundleAssembler:
    """
    Curates, rebuilds maps and assembles a ContextBundle.

    Usage:
        assembler = BundleAssembler(project_root)
        bundle = assembler.build(BundleOptions(request="latest sync notes"))
    """

    def __init__(
        self,
        project_root: str | Path,
        resolver: Optional[ReferenceResolver] = None,
        change_detector: Optional[ChangeDetector] = None,
        maps_dir: str = MAPS_DIR,
    ) -> None:
        self.project_root = Path(project_root).resolve()
        self._resolver = resolver or ReferenceResolver(self.project_root)
        self._detector = change_detector
        self._maps_dir = maps_dir

    def build(
        self,
        options: BundleOptions,
        catalog: Optional[Catalog] = None,
        now: Optional[dt.datetime] = None,
    ) -> ContextBundle:
        with frame_metrics.timed("bundle_build_ms"):
            bundle = self._assemble(options, catalog, now)
        frame_metrics.inc("bundles_built")
        return bundle

    def _assemble(
        self,
        options: BundleOptions,
        catalog: Optional[Catalog],
        now: Optional[dt.datetime],
    ) -> ContextBundle:
        if catalog is None:
            catalog = load_catalog(self.project_root, self._resolver.registry)

        curation = curate(options.request, catalog, options.limits, now=now)

        map_builder = RecordsMapBuilder(
            self.project_root,
            self._resolver,
            MapBuilderOptions(
                include_fallback_summaries=options.include_fallback_summaries,
                output_ref_source=options.output_ref_source,
                incremental=options.incremental,
                fallback_summary_chars=options.fallback_summary_chars,
            ),
            change_detector=self._detector,
            maps_dir=self._maps_dir,
        )
        map_result: MapBuildResult = map_builder.build(catalog, curation.selected_record_ids)

        tree_ref = pick_tree_ref(map_result.maps)
        preview = self._resolver.read(tree_ref) if tree_ref else ""

        bundle = ContextBundle(
            original_request=options.request,
            profile=curation.profile.ref if curation.profile else None,
            skills=[s.ref for s in curation.skills],
            tools=[t.ref for t in curation.tools],
            records=[r.ref for r in curation.records],
            maps=map_result.maps,
            context_read_order=build_read_order(curation, map_result.maps),
            records_tree_preview=preview,
            notes=curation.notes,
        )

        if options.run_dir:
            path = self.write(bundle, options.run_dir)
            logger.info("Context bundle written to: %s", path)
        return bundle

    def write(self, bundle: ContextBundle, run_dir: str | Path) -> Path:
        """Persist the bundle as JSON. Errors propagate."""
        target_dir = self.project_root / run_dir
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / BUNDLE_FILENAME
        path.write_text(
            json.dumps(bundle.model_dump(mode="json"), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        return path
