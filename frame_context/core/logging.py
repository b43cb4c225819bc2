# Copyright (c) 2026 Frame Contributors. All Rights Reserved.

"""
Structured Logging — JSON format with catalog context.

Records may carry ``source``, ``entity_id`` and ``path`` (via ``extra=`` or
a ContextAdapter); both formatters render them when present.
"""

from __future__ import annotations

import datetime as dt
import json
import logging
import sys
from typing import Any, Dict, MutableMapping, Tuple

CONTEXT_KEYS = ("source", "entity_id", "path")


def _context_of(record: logging.LogRecord) -> Dict[str, Any]:
    return {key: getattr(record, key) for key in CONTEXT_KEYS if getattr(record, key, None)}


class StructuredFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": dt.datetime.fromtimestamp(record.created, tz=dt.timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "message": record.getMessage(),
            **_context_of(record),
        }
        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """``LEVEL logger: message [source:path]`` for terminals."""

    def __init__(self) -> None:
        super().__init__("%(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        ctx = _context_of(record)
        if "source" in ctx and "path" in ctx:
            text += f" [{ctx['source']}:{ctx['path']}]"
        return text


class ContextAdapter(logging.LoggerAdapter):
    """Logger bound to a source / entity / path."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """
    Configure root logging for the CLI and the API server.

    Logs go to stderr so JSON results printed on stdout stay parseable.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(TextFormatter() if fmt == "text" else StructuredFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
