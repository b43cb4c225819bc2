# Copyright (c) 2026 Frame Contributors. All Rights Reserved.

"""
Frame API — Catalog resources and build tools over HTTP.

Handlers are plain ``def``: catalog loading, map writes and git run
blocking, so FastAPI dispatches them to its threadpool.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from frame_context.bundle.assembler import BundleAssembler, BundleOptions, ContextBundle
from frame_context.catalog.loader import load_catalog
from frame_context.catalog.resolver import OUTPUTS_SOURCE, ReferenceResolver
from frame_context.core.config import get_settings
from frame_context.curation.curator import CuratorLimits
from frame_context.maps.builder import MapBuilderOptions, MapBuildResult, RecordsMapBuilder
from frame_context.api.resources import ResourceContent, ResourceInfo, list_resources, read_resource

router = APIRouter(prefix="/api", tags=["frame"])


def get_project_root() -> Path:
    return get_settings().project_root_path


class BuildRecordsMapRequest(BaseModel):
    includeFallbackSummaries: bool = True
    outputRefSource: str = OUTPUTS_SOURCE
    incremental: bool = False


class ContextBuildRequest(BaseModel):
    request: str = Field(..., min_length=1)
    maxSkills: Optional[int] = Field(default=None, ge=0)
    maxTools: Optional[int] = Field(default=None, ge=0)
    maxRecords: Optional[int] = Field(default=None, ge=0)


@router.get("/resources", response_model=List[ResourceInfo])
def list_all_resources(project_root: Path = Depends(get_project_root)):
    """List catalog entities and generated maps."""
    catalog = load_catalog(project_root)
    return list_resources(catalog, project_root, get_settings().MAPS_DIR)


@router.get("/resources/read", response_model=ResourceContent)
def read_one_resource(
    uri: str = Query(..., min_length=1),
    project_root: Path = Depends(get_project_root),
):
    """Read one resource by frame:// URI."""
    resolver = ReferenceResolver(project_root)
    catalog = load_catalog(project_root, resolver.registry)
    return read_resource(uri, catalog, resolver, get_settings().MAPS_DIR)


@router.post("/tools/build-records-map", response_model=MapBuildResult)
def build_records_map(
    req: BuildRecordsMapRequest,
    project_root: Path = Depends(get_project_root),
):
    """Build records tree and map files for data entities."""
    settings = get_settings()
    builder = RecordsMapBuilder(
        project_root,
        options=MapBuilderOptions(
            include_fallback_summaries=req.includeFallbackSummaries,
            output_ref_source=req.outputRefSource,
            incremental=req.incremental,
            fallback_summary_chars=settings.FALLBACK_SUMMARY_CHARS,
        ),
        maps_dir=settings.MAPS_DIR,
    )
    return builder.build()


@router.post("/tools/context-build", response_model=ContextBundle)
def context_build(
    req: ContextBuildRequest,
    project_root: Path = Depends(get_project_root),
):
    """Build a context bundle (profile + skills + tools + records + maps) for a request."""
    settings = get_settings()
    limits = CuratorLimits(
        max_skills=req.maxSkills if req.maxSkills is not None else settings.MAX_SKILLS,
        max_tools=req.maxTools if req.maxTools is not None else settings.MAX_TOOLS,
        max_records=req.maxRecords if req.maxRecords is not None else settings.MAX_RECORDS,
    )
    assembler = BundleAssembler(project_root, maps_dir=settings.MAPS_DIR)
    return assembler.build(BundleOptions(
        request=req.request,
        output_ref_source=settings.OUTPUT_REF_SOURCE,
        include_fallback_summaries=settings.INCLUDE_FALLBACK_SUMMARIES,
        fallback_summary_chars=settings.FALLBACK_SUMMARY_CHARS,
        limits=limits,
    ))
