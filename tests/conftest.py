# Copyright (c) 2026 Frame Contributors. All Rights Reserved.

"""
Shared test fixtures for all Frame tests.

``project_root`` is an empty on-disk project with a source registry;
``sample_project`` fills its default source with a small catalog.
"""

import datetime as dt
import logging
from pathlib import Path
from typing import Any, Dict

import pytest
import yaml

from frame_context.core.config import reset_settings
from frame_context.core.metrics import frame_metrics

SOURCES_YAML = """\
sources:
  - name: default
    path: ./sources/default
  - name: test-source
    path: ./sources/test-source
    ignore: true
"""

NOW = dt.datetime(2026, 2, 10, 12, 0, 0)


def _write_doc(path: Path, meta: Dict[str, Any], body: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if meta:
        header = yaml.safe_dump(meta, sort_keys=False, allow_unicode=True)
        path.write_text(f"---\n{header}---\n{body}", encoding="utf-8")
    else:
        path.write_text(body, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Isolate every test from FRAME_* env vars, cached settings and metrics."""
    import os

    for key in list(os.environ):
        if key.startswith("FRAME_"):
            monkeypatch.delenv(key, raising=False)
    reset_settings()
    frame_metrics.reset()
    yield
    reset_settings()


@pytest.fixture
def restore_root_logger():
    """Undo setup_logging() changes to the root logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def write_doc():
    """Write a Markdown file with YAML frontmatter."""
    return _write_doc


@pytest.fixture
def now() -> dt.datetime:
    return NOW


@pytest.fixture
def project_root(tmp_path) -> Path:
    """Project with frame/sources.yaml and an empty default source."""
    (tmp_path / "frame").mkdir()
    (tmp_path / "frame" / "sources.yaml").write_text(SOURCES_YAML, encoding="utf-8")
    (tmp_path / "sources" / "default").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def source_root(project_root) -> Path:
    return project_root / "sources" / "default"


@pytest.fixture
def sample_project(project_root, source_root) -> Path:
    """A small catalog: 2 profiles, 2 skills, 1 tool, 3 records, 1 ignored skill."""
    _write_doc(source_root / "profiles" / "analyst.md", {
        "type": "profile", "id": "analyst",
        "status": "stable", "quality": "high", "tags": ["analysis"],
    }, "# Analyst\n\nCareful and concise.\n")
    _write_doc(source_root / "profiles" / "drafter.md", {
        "type": "profile", "id": "drafter", "status": "draft",
    }, "# Drafter\n")
    _write_doc(source_root / "skills" / "summarize.md", {
        "type": "skill", "id": "summarize",
        "triggers": ["summary"], "tags": ["notes"], "status": "reviewed",
    }, "# Summarize\n\nWrite three bullet points.\n")
    _write_doc(source_root / "skills" / "translate.md", {
        "type": "skill", "id": "translate", "triggers": ["translate"],
    }, "# Translate\n")
    _write_doc(source_root / "tools" / "search.md", {
        "type": "tool", "id": "search", "tags": ["search"],
    }, "# Search\n")
    _write_doc(source_root / "data" / "2026-02-05_weekly_sync.md", {
        "type": "data", "id": "weekly_sync", "doc_type": "transcript",
        "tags": ["summary", "meeting"], "summary_1": "Weekly sync notes.",
    }, "# Weekly Sync\n\nALICE: status update\nBOB: all good\n")
    _write_doc(source_root / "data" / "2026-01-20_q1_plan.md", {
        "type": "data", "id": "q1_plan", "doc_type": "article", "tags": ["planning"],
    }, "# Q1 Plan\n\nRoadmap and budget for the quarter.\n")
    _write_doc(source_root / "data" / "journal" / "reflections.md", {
        "type": "data", "id": "reflections", "doc_type": "journal", "date": "2026-02-08",
    }, "# Reflections\n\nWhat went well this week.\n")

    ignored = project_root / "sources" / "test-source"
    _write_doc(ignored / "skills" / "fixture_skill.md", {
        "type": "skill", "id": "fixture_skill", "triggers": ["fixture"],
    }, "# Fixture\n")
    return project_root
