# Copyright (c) 2026 Frame Contributors. All Rights Reserved.
"""Unit tests for entity scoring."""

import datetime as dt

import pytest

from frame_context.catalog.models import Entity, FileRef, parse_metadata
from frame_context.curation.scorer import has_recency_intent, recency_bonus, score_entity

NOW = dt.datetime(2026, 2, 10, 12, 0, 0)
TODAY = NOW.date()


def make(entity_type, entity_id, **fields):
    metadata = parse_metadata({"type": entity_type, "id": entity_id, **fields})
    return Entity(metadata=metadata, ref=FileRef(source="default", path=f"{entity_type}s/{entity_id}.md"))


class TestKeywordScoring:
    def test_no_fields_scores_zero(self):
        assert score_entity(make("skill", "bare"), "anything at all") == 0

    def test_tag_hits(self):
        e = make("skill", "s", tags=["summary", "meeting", "budget"])
        assert score_entity(e, "Meeting summary please") == 20

    def test_trigger_hits(self):
        e = make("skill", "s", triggers=["summary"])
        assert score_entity(e, "give me a summary") == 15

    def test_substring_match(self):
        e = make("tool", "t", tags=["sum"])
        assert score_entity(e, "summary") == 10

    def test_duplicates_count_each_time(self):
        e = make("skill", "s", triggers=["summary", "summary"])
        assert score_entity(e, "summary") == 30

    def test_tags_and_triggers_combined(self):
        e = make("skill", "s", tags=["notes"], triggers=["summary"])
        assert score_entity(e, "summary of my notes") == 25


class TestQualityStatus:
    @pytest.mark.parametrize("quality,expected", [
        ("best", 20), ("high", 15), ("medium", 10), ("low", 5),
    ])
    def test_quality(self, quality, expected):
        assert score_entity(make("profile", "p", quality=quality), "x") == expected

    @pytest.mark.parametrize("status,expected", [
        ("stable", 15), ("reviewed", 10), ("candidate", 5), ("draft", 0),
    ])
    def test_status(self, status, expected):
        assert score_entity(make("profile", "p", status=status), "x") == expected

    def test_combined(self):
        e = make("profile", "p", status="stable", quality="high")
        assert score_entity(e, "x") == 30


class TestRecency:
    def test_intent_keywords(self):
        assert has_recency_intent("What happened at the LAST meeting?")
        assert has_recency_intent("most recent notes")
        assert has_recency_intent("latest")
        assert not has_recency_intent("summarize the plan")

    @pytest.mark.parametrize("age,expected", [
        (0, 20), (1, 20), (2, 19), (29, 6), (30, 5), (31, 0), (90, 0),
    ])
    def test_bonus_by_age(self, age, expected):
        date_str = (TODAY - dt.timedelta(days=age)).isoformat()
        assert recency_bonus(date_str, TODAY) == expected

    def test_future_date_counts_as_today(self):
        assert recency_bonus("2026-03-01", TODAY) == 20

    def test_unparseable_date(self):
        assert recency_bonus("not-a-date", TODAY) == 0

    def test_applied_with_intent(self):
        e = make("data", "d", date="2026-02-10")
        assert score_entity(e, "latest notes", now=NOW) == 20

    def test_cutoff_at_31_days(self):
        within = make("data", "within", date="2026-01-11")
        outside = make("data", "outside", date="2026-01-10")
        assert score_entity(within, "recent notes", now=NOW) == 5
        assert score_entity(outside, "recent notes", now=NOW) == 0

    def test_not_applied_without_intent(self):
        e = make("data", "d", date="2026-02-10")
        assert score_entity(e, "the notes", now=NOW) == 0

    def test_undated_record(self):
        assert score_entity(make("data", "d"), "latest", now=NOW) == 0

    def test_other_types_ignore_recency(self):
        e = make("skill", "s", tags=["latest"])
        assert score_entity(e, "latest", now=NOW) == 10
