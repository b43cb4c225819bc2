# Copyright (c) 2026 Frame Contributors. All Rights Reserved.

"""
Frame Errors — Fatal conditions that abort a load, resolve, or build.

Recoverable problems (a single malformed document, a missing source
directory) are logged and skipped instead; they never raise.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class FrameError(Exception):
    """Base error with a stable code and structured details."""

    status_code: int = 500

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class SourcesConfigNotFoundError(FrameError):
    def __init__(self, path: str):
        super().__init__(
            code="SOURCES_CONFIG_NOT_FOUND",
            message=f"Sources config not found: {path}",
            details={"path": path},
        )


class SourcesConfigError(FrameError):
    def __init__(self, path: str, reason: str):
        super().__init__(
            code="SOURCES_CONFIG_INVALID",
            message=f"Invalid sources config {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class DuplicateEntityError(FrameError):
    status_code = 409

    def __init__(self, entity_id: str, first: str, second: str):
        self.entity_id = entity_id
        self.first = first
        self.second = second
        super().__init__(
            code="DUPLICATE_ENTITY_ID",
            message=f'Duplicate ID "{entity_id}" found:\n  {first}\n  {second}',
            details={"entity_id": entity_id, "locations": [first, second]},
        )


class UnknownSourceError(FrameError):
    status_code = 404

    def __init__(self, source: str):
        super().__init__(
            code="UNKNOWN_SOURCE",
            message=f"Unknown source: {source}",
            details={"source": source},
        )


class SourcePathNotFoundError(FrameError):
    status_code = 404

    def __init__(self, source: str, path: str):
        super().__init__(
            code="SOURCE_PATH_NOT_FOUND",
            message=f"Source path does not exist: {source} -> {path}",
            details={"source": source, "path": path},
        )


class ReferenceNotFoundError(FrameError):
    status_code = 404

    def __init__(self, source: str, rel_path: str, resolved: str):
        super().__init__(
            code="FILE_NOT_FOUND",
            message=f"File not found: {source}:{rel_path} -> {resolved}",
            details={"source": source, "path": rel_path, "resolved": resolved},
        )


class FrontmatterError(FrameError):
    status_code = 422

    def __init__(self, reason: str):
        super().__init__(
            code="FRONTMATTER_INVALID",
            message=f"Invalid frontmatter: {reason}",
        )


class InvalidResourceURIError(FrameError):
    status_code = 400

    def __init__(self, uri: str, reason: str):
        super().__init__(
            code="INVALID_RESOURCE_URI",
            message=f'Malformed URI: "{uri}". {reason}',
            details={"uri": uri},
        )


class ResourceNotFoundError(FrameError):
    status_code = 404

    def __init__(self, what: str):
        super().__init__(
            code="RESOURCE_NOT_FOUND",
            message=f"{what} not found",
        )
