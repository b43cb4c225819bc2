# Copyright (c) 2026 Frame Contributors. All Rights Reserved.
"""Unit tests for record summaries."""

from frame_context.catalog.models import parse_metadata
from frame_context.maps.summary import NO_SUMMARY, extract_summary, fallback_excerpt


class TestFallbackExcerpt:
    def test_strips_headings_and_whitespace(self):
        content = "# Weekly Sync\n\n## Agenda\n\nBudget   review\nand   planning.\n"
        assert fallback_excerpt(content) == "Weekly Sync Agenda Budget review and planning."

    def test_skips_frontmatter(self):
        content = "---\nid: x\ntype: data\n---\n# Title\nBody text\n"
        assert fallback_excerpt(content) == "Title Body text"

    def test_truncates(self):
        assert fallback_excerpt("abcdefghijklmnop", limit=10) == "abcdefghij..."

    def test_exact_limit_not_truncated(self):
        assert fallback_excerpt("abcdefghij", limit=10) == "abcdefghij"

    def test_empty_body(self):
        assert fallback_excerpt("---\nid: x\n---\n") == ""


class TestExtractSummary:
    def test_summary_3_wins(self):
        meta = parse_metadata({
            "type": "data", "id": "d",
            "summary_1": "one line", "summary_3": ["a", "b", "c"],
        })
        assert extract_summary(meta, "body") == "a\nb\nc"

    def test_summary_1(self):
        meta = parse_metadata({"type": "data", "id": "d", "summary_1": "one line"})
        assert extract_summary(meta, "body") == "one line"

    def test_fallback(self):
        meta = parse_metadata({"type": "data", "id": "d"})
        assert extract_summary(meta, "# Notes\nSome text") == "Notes Some text"

    def test_fallback_limit(self):
        meta = parse_metadata({"type": "data", "id": "d"})
        assert extract_summary(meta, "x" * 50, limit=20) == "x" * 20 + "..."

    def test_fallback_disabled(self):
        meta = parse_metadata({"type": "data", "id": "d"})
        assert extract_summary(meta, "# Notes", include_fallback=False) == NO_SUMMARY
