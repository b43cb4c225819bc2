# Copyright (c) 2026 Frame Contributors. All Rights Reserved.

"""
Scorer — Deterministic relevance score of one entity for a request.

    score = 10 × tag hits
          + 15 × trigger hits
          + quality bonus   (best 20, high 15, medium 10, low 5)
          + status bonus    (stable 15, reviewed 10, candidate 5, draft 0)
          + recency bonus   (data only, when the request asks for recent items)

Matching is plain substring search on the lowercased request.
"""

from __future__ import annotations

import datetime as dt
from typing import Dict, Optional

from frame_context.catalog.models import DataMetadata, Entity, Quality, Status

TAG_WEIGHT = 10
TRIGGER_WEIGHT = 15

QUALITY_SCORES: Dict[Quality, int] = {
    Quality.BEST: 20,
    Quality.HIGH: 15,
    Quality.MEDIUM: 10,
    Quality.LOW: 5,
}

STATUS_SCORES: Dict[Status, int] = {
    Status.STABLE: 15,
    Status.REVIEWED: 10,
    Status.CANDIDATE: 5,
    Status.DRAFT: 0,
}

RECENCY_KEYWORDS = ("latest", "most recent", "last meeting", "recent", "last")
RECENCY_MAX_BONUS = 20
RECENCY_WINDOW_DAYS = 30


def has_recency_intent(request: str) -> bool:
    request_lower = request.lower()
    return any(kw in request_lower for kw in RECENCY_KEYWORDS)


def recency_bonus(date_str: str, today: dt.date) -> int:
    """
    20 - floor(age / 2) for records at most 30 days old, else 0.

    Age is counted in whole calendar days. Dates in the future count as
    age 0. Unparseable dates get no bonus.
    """
    try:
        record_date = dt.date.fromisoformat(date_str)
    except ValueError:
        return 0
    age = max((today - record_date).days, 0)
    if age > RECENCY_WINDOW_DAYS:
        return 0
    return RECENCY_MAX_BONUS - age // 2


def score_entity(
    entity: Entity,
    request: str,
    now: Optional[dt.datetime] = None,
) -> int:
    """Score a single entity against a request string."""
    metadata = entity.metadata
    request_lower = request.lower()
    score = 0

    for tag in metadata.tags or []:
        if tag in request_lower:
            score += TAG_WEIGHT

    # Triggers are more specific intent signals than tags
    for trigger in metadata.triggers or []:
        if trigger in request_lower:
            score += TRIGGER_WEIGHT

    if metadata.quality is not None:
        score += QUALITY_SCORES.get(metadata.quality, 0)
    if metadata.status is not None:
        score += STATUS_SCORES.get(metadata.status, 0)

    if isinstance(metadata, DataMetadata) and metadata.date and has_recency_intent(request):
        today = (now or dt.datetime.now()).date()
        score += recency_bonus(metadata.date, today)

    return score
