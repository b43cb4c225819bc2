# Copyright (c) 2026 Frame Contributors. All Rights Reserved.

"""
Frame Configuration — Environment-driven settings.

All configuration is loaded from environment variables (or .env file).
Uses FRAME_ prefix, e.g. FRAME_PROJECT_ROOT, FRAME_MODE=test.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class FrameSettings(BaseSettings):
    """Catalog / curation configuration loaded from environment."""

    # ── Layout ────────────────────────────────────────────────
    PROJECT_ROOT: str = Field(
        default=".",
        description="Project root holding frame/sources.yaml and maps/",
    )
    SOURCES_FILE: str = Field(
        default="frame/sources.yaml",
        description="Source registry path, relative to the project root",
    )
    MAPS_DIR: str = Field(
        default="maps",
        description="Generated maps directory, relative to the project root",
    )

    # ── Execution mode ────────────────────────────────────────
    MODE: str = Field(
        default="dev",
        description="Execution context: dev | test",
    )
    TEST_MODE: bool = Field(
        default=False,
        description="Opt in to sources marked ignore: true",
    )

    # ── Logging ───────────────────────────────────────────────
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(
        default="json",
        description="json | text",
    )

    # ── Curator limits ────────────────────────────────────────
    MAX_SKILLS: int = Field(default=3, ge=0)
    MAX_TOOLS: int = Field(default=3, ge=0)
    MAX_RECORDS: int = Field(default=8, ge=0)

    # ── Map builder ───────────────────────────────────────────
    OUTPUT_REF_SOURCE: str = Field(
        default="outputs",
        description="Source name used in refs to generated maps",
    )
    INCLUDE_FALLBACK_SUMMARIES: bool = Field(
        default=True,
        description="Generate an excerpt when a record has no summary_1/summary_3",
    )
    FALLBACK_SUMMARY_CHARS: int = Field(
        default=300,
        gt=0,
        description="Excerpt length for generated summaries",
    )
    GIT_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="Timeout for each git change-detection command",
    )

    # ── Helpers ───────────────────────────────────────────────

    @property
    def is_test_mode(self) -> bool:
        return self.MODE.lower() == "test" or self.TEST_MODE

    @property
    def project_root_path(self) -> Path:
        return Path(self.PROJECT_ROOT).resolve()

    model_config = {
        "env_prefix": "FRAME_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }


_settings_singleton: FrameSettings | None = None


def get_settings() -> FrameSettings:
    """Return a cached FrameSettings singleton."""
    global _settings_singleton
    if _settings_singleton is None:
        _settings_singleton = FrameSettings()
    return _settings_singleton


def reset_settings() -> None:
    """Drop the cached singleton so the next get_settings() re-reads env."""
    global _settings_singleton
    _settings_singleton = None
