# Copyright (c) 2026 Frame Contributors. All Rights Reserved.
"""Unit tests for structured logging."""

import json
import logging
import sys

from frame_context.core.logging import (
    ContextAdapter,
    StructuredFormatter,
    TextFormatter,
    setup_logging,
)


def _record(msg, *args, **extra):
    record = logging.LogRecord(
        name="frame.loader",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=args,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    def test_basic_fields(self):
        out = json.loads(StructuredFormatter().format(_record("Skipping %s", "a.md")))
        assert out["level"] == "WARNING"
        assert out["module"] == "frame.loader"
        assert out["message"] == "Skipping a.md"
        assert "timestamp" in out
        assert "source" not in out

    def test_context_fields(self):
        record = _record("bad", source="default", path="data/a.md", entity_id="a")
        out = json.loads(StructuredFormatter().format(record))
        assert out["source"] == "default"
        assert out["path"] == "data/a.md"
        assert out["entity_id"] == "a"

    def test_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record("failed")
            record.exc_info = sys.exc_info()
        out = json.loads(StructuredFormatter().format(record))
        assert "ValueError: boom" in out["exception"]


class TestSetupLogging:
    def test_json_handler(self, restore_root_logger):
        setup_logging("DEBUG", "json")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, StructuredFormatter)

    def test_text_handler(self, restore_root_logger):
        setup_logging("warning", "text")
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert not isinstance(root.handlers[0].formatter, StructuredFormatter)

    def test_unknown_level_falls_back_to_info(self, restore_root_logger):
        setup_logging("CHATTY")
        assert logging.getLogger().level == logging.INFO


class TestTextFormatter:
    def test_plain_message(self):
        text = TextFormatter().format(_record("Skipping %s", "a.md"))
        assert text == "WARNING frame.loader: Skipping a.md"

    def test_source_and_path_suffix(self):
        record = _record("bad", source="default", path="data/a.md")
        assert TextFormatter().format(record).endswith(" [default:data/a.md]")

    def test_no_suffix_without_path(self):
        record = _record("bad", source="default")
        assert "[" not in TextFormatter().format(record)


class TestContextAdapter:
    def test_binds_context(self, caplog):
        log = ContextAdapter(logging.getLogger("frame.loader"), {"source": "default", "path": "a.md"})
        with caplog.at_level(logging.WARNING, logger="frame.loader"):
            log.warning("Skipping a.md")
        record = caplog.records[-1]
        assert record.source == "default"
        assert record.path == "a.md"

    def test_call_extra_overrides_bound(self, caplog):
        log = ContextAdapter(logging.getLogger("frame.loader"), {"source": "default"})
        with caplog.at_level(logging.WARNING, logger="frame.loader"):
            log.warning("dup", extra={"source": "other", "entity_id": "x"})
        record = caplog.records[-1]
        assert record.source == "other"
        assert record.entity_id == "x"
