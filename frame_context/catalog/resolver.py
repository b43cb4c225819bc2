# Copyright (c) 2026 Frame Contributors. All Rights Reserved.

"""
Reference Resolver — Turn a FileRef into an absolute path or file content.

    FileRef("outputs", "maps/records_map.md") → <project_root>/maps/records_map.md
    FileRef("default", "data/x.md")           → <default source root>/data/x.md
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from frame_context.catalog.models import FileRef
from frame_context.catalog.sources import SourceRegistry, load_source_registry
from frame_context.core.config import get_settings
from frame_context.core.errors import (
    ReferenceNotFoundError,
    SourcePathNotFoundError,
    UnknownSourceError,
)

OUTPUTS_SOURCE = "outputs"


class ReferenceResolver:
    """Resolves references against the source registry (or the project root)."""

    def __init__(
        self,
        project_root: str | Path,
        registry: Optional[SourceRegistry] = None,
    ) -> None:
        self.project_root = Path(project_root).resolve()
        self._registry = registry

    @property
    def registry(self) -> SourceRegistry:
        if self._registry is None:
            self._registry = load_source_registry(
                self.project_root, get_settings().SOURCES_FILE,
            )
        return self._registry

    def resolve(self, ref: FileRef) -> Path:
        """
        Absolute path of an existing file.

        Raises UnknownSourceError, SourcePathNotFoundError or
        ReferenceNotFoundError depending on which step fails.
        """
        if ref.source == OUTPUTS_SOURCE:
            base = self.project_root
        else:
            source = self.registry.get(ref.source)
            if source is None:
                raise UnknownSourceError(ref.source)
            base = self.registry.resolve_root(source)
            if not base.exists():
                raise SourcePathNotFoundError(ref.source, str(base))

        resolved = (base / ref.path).resolve()
        if not resolved.is_relative_to(base) or not resolved.is_file():
            raise ReferenceNotFoundError(ref.source, ref.path, str(resolved))
        return resolved

    def read(self, ref: FileRef) -> str:
        return self.resolve(ref).read_text(encoding="utf-8")
