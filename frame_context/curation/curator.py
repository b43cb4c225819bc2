# Copyright (c) 2026 Frame Contributors. All Rights Reserved.

"""
Curator — Pick a profile, skills, tools and records for a request.

Every entity is scored independently, partitioned by type and ranked.
Equal scores are ordered by id so repeated runs select the same items.
Zero matches are not an error: selection just comes back shorter.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

from frame_context.catalog.models import Catalog, Entity
from frame_context.core.metrics import frame_metrics
from frame_context.curation.scorer import score_entity

logger = logging.getLogger("frame.curator")


class CuratorLimits(BaseModel):
    max_skills: int = Field(default=3, ge=0)
    max_tools: int = Field(default=3, ge=0)
    max_records: int = Field(default=8, ge=0)


@dataclass
class ScoredEntity:
    entity: Entity
    score: int


@dataclass
class CurationResult:
    """Selected entities plus human-readable notes."""
    profile: Optional[Entity] = None
    skills: List[Entity] = field(default_factory=list)
    tools: List[Entity] = field(default_factory=list)
    records: List[Entity] = field(default_factory=list)
    notes: str = ""

    @property
    def selected_record_ids(self) -> set[str]:
        return {r.id for r in self.records}

    def to_dict(self) -> Dict[str, object]:
        def dump(e: Entity) -> Dict[str, object]:
            return e.model_dump(mode="json", exclude_none=True)

        return {
            "profile": dump(self.profile) if self.profile else None,
            "skills": [dump(e) for e in self.skills],
            "tools": [dump(e) for e in self.tools],
            "records": [dump(e) for e in self.records],
            "notes": self.notes,
        }


def rank(
    entities: Iterable[Entity],
    request: str,
    now: Optional[dt.datetime] = None,
) -> List[ScoredEntity]:
    """Score and sort: highest score first, then id ascending."""
    scored = [ScoredEntity(e, score_entity(e, request, now)) for e in entities]
    scored.sort(key=lambda s: (-s.score, s.entity.id))
    return scored


def _build_notes(result: CurationResult) -> str:
    parts: List[str] = []
    if result.profile:
        parts.append(f"Selected profile: {result.profile.id}")
    if result.skills:
        parts.append(f"Selected {len(result.skills)} skill(s)")
    if result.tools:
        parts.append(f"Selected {len(result.tools)} tool(s)")
    if result.records:
        parts.append(f"Selected {len(result.records)} record(s) based on relevance")
    if not parts:
        return "No entities selected."
    return ". ".join(parts) + "."


def curate(
    request: str,
    catalog: Catalog,
    limits: Optional[CuratorLimits] = None,
    now: Optional[dt.datetime] = None,
) -> CurationResult:
    """
    Select the best-fitting entities of each type for a request.

    Args:
        request: Free-text user request.
        catalog: Output of load_catalog().
        limits: Max skills / tools / records (defaults 3 / 3 / 8).
        now: Reference time for the recency bonus (defaults to now).
    """
    limits = limits or CuratorLimits()

    partitions: Dict[str, List[Entity]] = {"profile": [], "skill": [], "tool": [], "data": []}
    for entity in catalog.values():
        partitions[entity.type].append(entity)

    profiles = rank(partitions["profile"], request, now)
    skills = rank(partitions["skill"], request, now)
    tools = rank(partitions["tool"], request, now)
    records = rank(partitions["data"], request, now)

    result = CurationResult(
        profile=profiles[0].entity if profiles else None,
        skills=[s.entity for s in skills[:limits.max_skills]],
        tools=[s.entity for s in tools[:limits.max_tools]],
        records=[s.entity for s in records[:limits.max_records]],
    )
    result.notes = _build_notes(result)

    frame_metrics.inc("curations")
    logger.info(
        "Curated request: profile=%s skills=%d tools=%d records=%d",
        result.profile.id if result.profile else None,
        len(result.skills), len(result.tools), len(result.records),
    )
    return result
