# Copyright (c) 2026 Frame Contributors. All Rights Reserved.
"""Unit tests for the distribution metadata."""

from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")

PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


@pytest.fixture
def project():
    return tomllib.loads(PYPROJECT.read_text(encoding="utf-8"))["project"]


class TestPyproject:
    def test_no_readme_declared(self, project):
        assert "readme" not in project

    def test_console_script(self, project):
        assert project["scripts"]["frame-context"] == "frame_context.cli:main"
