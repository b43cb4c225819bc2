# Copyright (c) 2026 Frame Contributors. All Rights Reserved.

"""
Resource addressing — ``frame://`` URIs for entities and generated maps.

    frame://<source>/<type>/<id>      one catalog entity
    frame://outputs/map/<filename>    records_tree.txt / records_map.md
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel

from frame_context.catalog.models import Catalog, Entity
from frame_context.catalog.resolver import OUTPUTS_SOURCE, ReferenceResolver
from frame_context.core.errors import InvalidResourceURIError, ResourceNotFoundError
from frame_context.maps.builder import MAP_FILENAME, MAPS_DIR, TREE_FILENAME

SCHEME = "frame"
MAP_FILES = (TREE_FILENAME, MAP_FILENAME)


class ResourceInfo(BaseModel):
    uri: str
    name: str
    description: str
    mimeType: str


class ResourceContent(BaseModel):
    uri: str
    mimeType: str
    text: str


@dataclass(frozen=True)
class ResourceAddress:
    source: str
    kind: str  # entity type, or "map"
    name: str  # entity id, or map filename

    @property
    def is_map(self) -> bool:
        return self.kind == "map"


def entity_uri(entity: Entity) -> str:
    return f"{SCHEME}://{entity.ref.source}/{entity.type}/{entity.id}"


def map_uri(filename: str) -> str:
    return f"{SCHEME}://{OUTPUTS_SOURCE}/map/{filename}"


def mime_type_for(filename: str) -> str:
    return "text/markdown" if filename.endswith(".md") else "text/plain"


def parse_resource_uri(uri: str) -> ResourceAddress:
    try:
        parsed = urlparse(uri)
    except ValueError as e:
        raise InvalidResourceURIError(uri, str(e)) from e
    if not parsed.scheme or not parsed.netloc:
        raise InvalidResourceURIError(uri, "Invalid URI format")
    if parsed.scheme != SCHEME:
        raise InvalidResourceURIError(uri, f"Unsupported URI scheme: {parsed.scheme}:")

    parts = [p for p in parsed.path.split("/") if p]
    if len(parts) != 2:
        raise InvalidResourceURIError(uri, "Expected frame://<source>/<type>/<id>")
    return ResourceAddress(source=parsed.netloc, kind=parts[0], name=parts[1])


def list_resources(
    catalog: Catalog,
    project_root: Path,
    maps_dir: str = MAPS_DIR,
) -> List[ResourceInfo]:
    resources = [
        ResourceInfo(
            uri=entity_uri(entity),
            name=entity.id,
            description=f"Frame {entity.type}: {entity.id}",
            mimeType="text/markdown",
        )
        for entity in catalog.values()
    ]
    maps_path = project_root / maps_dir
    for filename in MAP_FILES:
        if (maps_path / filename).is_file():
            resources.append(ResourceInfo(
                uri=map_uri(filename),
                name=filename,
                description=f"Frame map: {filename}",
                mimeType=mime_type_for(filename),
            ))
    return resources


def find_entity(catalog: Catalog, address: ResourceAddress) -> Optional[Entity]:
    entity = catalog.get(address.name)
    if entity and entity.ref.source == address.source and entity.type == address.kind:
        return entity
    return None


def read_resource(
    uri: str,
    catalog: Catalog,
    resolver: ReferenceResolver,
    maps_dir: str = MAPS_DIR,
) -> ResourceContent:
    address = parse_resource_uri(uri)

    if address.is_map:
        if address.name not in MAP_FILES:
            raise ResourceNotFoundError(f"Map {address.name}")
        path = resolver.project_root / maps_dir / address.name
        if not path.is_file():
            raise ResourceNotFoundError(f"Map {address.name}")
        return ResourceContent(
            uri=uri,
            mimeType=mime_type_for(address.name),
            text=path.read_text(encoding="utf-8"),
        )

    entity = find_entity(catalog, address)
    if entity is None:
        raise ResourceNotFoundError(f"Entity {address.source}/{address.kind}/{address.name}")
    return ResourceContent(uri=uri, mimeType="text/markdown", text=resolver.read(entity.ref))
