# Copyright (c) 2026 Frame Contributors. All Rights Reserved.

"""
Source Registry — Named content sources loaded from frame/sources.yaml.

    sources:
      - name: default
        path: ./sources/default
      - name: test-source
        path: ./sources/test-source
        ignore: true

Relative paths resolve against the project root. A source whose directory
is missing is not an error here; the loader skips it with a warning.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from frame_context.core.errors import SourcesConfigError, SourcesConfigNotFoundError

logger = logging.getLogger("frame.sources")

DEFAULT_SOURCES_FILE = "frame/sources.yaml"


class SourceConfig(BaseModel):
    """One entry of the source registry."""
    name: str = Field(..., min_length=1)
    path: str = Field(..., min_length=1)
    ignore: bool = False


class SourcesFile(BaseModel):
    sources: List[SourceConfig] = Field(default_factory=list)


class SourceRegistry:
    """Lookup of source name → configured root directory."""

    def __init__(self, project_root: str | Path, sources: List[SourceConfig]) -> None:
        self.project_root = Path(project_root).resolve()
        self._sources: Dict[str, SourceConfig] = {}
        for source in sources:
            if source.name in self._sources:
                logger.warning(
                    "Source '%s' declared twice; keeping the first entry", source.name,
                )
                continue
            self._sources[source.name] = source

    def get(self, name: str) -> Optional[SourceConfig]:
        return self._sources.get(name)

    def resolve_root(self, source: SourceConfig) -> Path:
        """Absolute root directory of a source (may not exist)."""
        path = Path(source.path).expanduser()
        if path.is_absolute():
            return path.resolve()
        return (self.project_root / path).resolve()

    def names(self) -> List[str]:
        return list(self._sources.keys())

    def __iter__(self) -> Iterator[SourceConfig]:
        return iter(self._sources.values())

    def __len__(self) -> int:
        return len(self._sources)

    def __contains__(self, name: str) -> bool:
        return name in self._sources


def load_source_registry(
    project_root: str | Path,
    sources_file: str = DEFAULT_SOURCES_FILE,
) -> SourceRegistry:
    """
    Load the source registry for a project.

    Raises SourcesConfigNotFoundError if the file is missing and
    SourcesConfigError if it is not a valid registry.
    """
    root = Path(project_root).resolve()
    path = root / sources_file
    if not path.exists():
        raise SourcesConfigNotFoundError(str(path))

    with open(path, "r", encoding="utf-8") as f:
        try:
            config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise SourcesConfigError(str(path), str(e)) from e

    if not isinstance(config, dict):
        raise SourcesConfigError(str(path), "top level must be a mapping")
    try:
        parsed = SourcesFile.model_validate(config)
    except ValidationError as e:
        raise SourcesConfigError(str(path), str(e)) from e

    logger.debug("Loaded %d sources from %s", len(parsed.sources), path)
    return SourceRegistry(root, parsed.sources)
