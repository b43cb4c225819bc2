# Copyright (c) 2026 Frame Contributors. All Rights Reserved.

"""
Catalog Models — Typed entity metadata and portable file references.

Entity metadata is a discriminated union on ``type``: each variant only
carries the fields that make sense for it (``doc_type`` and ``date`` exist
on data records only). Optional fields default to ``None`` so every
consumer has to handle the absent case.
"""

from __future__ import annotations

import datetime as dt
import re
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class FileRef(BaseModel):
    """Pointer to a file: source name + path relative to that source's root."""

    model_config = ConfigDict(frozen=True)

    source: str = Field(..., min_length=1)
    path: str = Field(..., min_length=1)

    @field_validator("path")
    @classmethod
    def path_must_be_relative(cls, v: str) -> str:
        v = v.replace("\\", "/")
        if v.startswith("/") or re.match(r"^[A-Za-z]:/", v):
            raise ValueError(f"FileRef path must be relative, got '{v}'")
        return v

    @property
    def key(self) -> str:
        """Cache / error-message form: ``source:path``."""
        return f"{self.source}:{self.path}"


class Status(str, Enum):
    DRAFT = "draft"
    CANDIDATE = "candidate"
    REVIEWED = "reviewed"
    STABLE = "stable"


class Quality(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    BEST = "best"


class DocType(str, Enum):
    TRANSCRIPT = "transcript"
    JOURNAL = "journal"
    ARTICLE = "article"
    COLLATERAL = "collateral"
    TABLE = "table"


def _lowercase_list(v: Any) -> Any:
    if v is None:
        return None
    if isinstance(v, str):
        v = [v]
    if isinstance(v, list):
        return [str(item).strip().lower() for item in v if str(item).strip()]
    return v


class BaseMetadata(BaseModel):
    """Fields shared by every entity type."""

    model_config = ConfigDict(extra="allow", use_enum_values=False, coerce_numbers_to_str=True)

    id: str = Field(..., min_length=1)
    tags: Optional[List[str]] = None
    triggers: Optional[List[str]] = None
    requires: Optional[List[str]] = None
    status: Optional[Status] = None
    quality: Optional[Quality] = None
    quality_note: Optional[str] = None
    quality_as_of: Optional[str] = None
    curated_by: Optional[str] = None
    summary_1: Optional[str] = None
    summary_3: Optional[str] = None

    @field_validator("tags", "triggers", mode="before")
    @classmethod
    def normalize_keywords(cls, v: Any) -> Any:
        return _lowercase_list(v)

    @field_validator("summary_3", mode="before")
    @classmethod
    def join_bullets(cls, v: Any) -> Any:
        if isinstance(v, list):
            return "\n".join(str(item) for item in v)
        return v

    @field_validator("quality_as_of", mode="before")
    @classmethod
    def date_to_str(cls, v: Any) -> Any:
        if isinstance(v, (dt.date, dt.datetime)):
            return v.isoformat()
        return v


class ProfileMetadata(BaseMetadata):
    type: Literal["profile"] = "profile"


class SkillMetadata(BaseMetadata):
    type: Literal["skill"] = "skill"


class ToolMetadata(BaseMetadata):
    type: Literal["tool"] = "tool"


class DataMetadata(BaseMetadata):
    type: Literal["data"] = "data"
    doc_type: Optional[DocType] = None
    date: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, v: Any) -> Any:
        # YAML turns bare 2026-02-05 into a date object
        if isinstance(v, dt.datetime):
            return v.date().isoformat()
        if isinstance(v, dt.date):
            return v.isoformat()
        if isinstance(v, str) and not ISO_DATE_RE.match(v.strip()):
            raise ValueError(f"date must be YYYY-MM-DD, got '{v}'")
        return v.strip() if isinstance(v, str) else v


EntityMetadata = Annotated[
    Union[ProfileMetadata, SkillMetadata, ToolMetadata, DataMetadata],
    Field(discriminator="type"),
]

ENTITY_TYPES = ("profile", "skill", "tool", "data")

_metadata_adapter: TypeAdapter = TypeAdapter(EntityMetadata)


def parse_metadata(raw: Dict[str, Any]) -> Union[ProfileMetadata, SkillMetadata, ToolMetadata, DataMetadata]:
    """Validate a frontmatter dict into the matching metadata variant."""
    return _metadata_adapter.validate_python(raw)


class Entity(BaseModel):
    """One curatable Markdown document."""

    metadata: EntityMetadata
    ref: FileRef

    @property
    def id(self) -> str:
        return self.metadata.id

    @property
    def type(self) -> str:
        return self.metadata.type


Catalog = Dict[str, Entity]
