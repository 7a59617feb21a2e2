"""
Mapping metadata for document classes.

Entity definitions use the same layout as the schema files:

    User:
      inherits: [BaseEntity]
      fields: {email: {type: String, required: true}}
      unique: [[email]]
      index: [[createdAt]]

Entities marked `abstract: true` (or listed under `_inherited_entities`) are
mapped superclasses: they contribute fields and indexes to the entities that
inherit from them but are never stored in a collection of their own.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

from ..common import Schema
from .exceptions import MappingError, ModelNotFound

logger = logging.getLogger(__name__)


class ClassMetadata(BaseModel):
    name: str
    collection: str
    is_mapped_superclass: bool = False
    parents: List[str] = Field(default_factory=list)
    fields: Dict[str, Any] = Field(default_factory=dict)
    uniques: List[List[str]] = Field(default_factory=list)
    indexes: List[List[str]] = Field(default_factory=list)


class MetadataFactory:
    """Resolves entity definitions (with inheritance) into ClassMetadata."""

    def __init__(self, entities: Dict[str, Dict[str, Any]], superclasses: Iterable[str] = ()):
        self._entities = entities
        self._superclasses = set(superclasses)
        self._metadata: Dict[str, ClassMetadata] = {}
        for name in entities:
            self._metadata[name] = self._load(name, [])

    @classmethod
    def from_schema(cls, schema: Schema) -> "MetadataFactory":
        return cls(schema.all_entities(), superclasses=schema.abstract_entities().keys())

    @classmethod
    def from_classes(cls, *classes: type) -> "MetadataFactory":
        """Build from classes carrying a `_metadata` dict (named by `entity` or the class name)."""
        entities: Dict[str, Dict[str, Any]] = {}
        for klass in classes:
            md = getattr(klass, "_metadata", None)
            if md is None:
                raise MappingError(message=f"{klass.__name__} has no _metadata")
            entities[md.get("entity", klass.__name__)] = md
        return cls(entities)

    def get_all_metadata(self) -> List[ClassMetadata]:
        return list(self._metadata.values())

    def get_metadata_for(self, name: str) -> ClassMetadata:
        # exact name first, then case-insensitive
        if name in self._metadata:
            return self._metadata[name]
        for entity, metadata in self._metadata.items():
            if entity.lower() == name.lower():
                return metadata
        raise ModelNotFound(name)

    def has_metadata_for(self, name: str) -> bool:
        if name in self._metadata:
            return True
        return any(entity.lower() == name.lower() for entity in self._metadata)

    def _load(self, name: str, chain: List[str]) -> ClassMetadata:
        if name in chain:
            raise MappingError(message=f"Cyclic inheritance: {' -> '.join(chain + [name])}")
        definition = self._entities.get(name)
        if definition is None:
            raise MappingError(message=f"Unknown parent entity '{name}' inherited by '{chain[-1]}'")

        parents = list(definition.get("inherits") or [])
        fields: Dict[str, Any] = {}
        uniques: List[List[str]] = []
        indexes: List[List[str]] = []
        for parent in parents:
            parent_md = self._load(parent, chain + [name])
            fields.update(parent_md.fields)
            _extend(uniques, parent_md.uniques)
            _extend(indexes, parent_md.indexes)

        # the entity's own definitions win over inherited ones
        fields.update(definition.get("fields") or {})
        _extend(uniques, definition.get("unique") or [])
        _extend(indexes, definition.get("index") or [])
        # a field list declared unique does not also need a plain index
        indexes = [idx for idx in indexes if idx not in uniques]

        is_superclass = bool(definition.get("abstract", False)) or name in self._superclasses
        metadata = ClassMetadata(
            name=name,
            collection=definition.get("collection") or name.lower(),
            is_mapped_superclass=is_superclass,
            parents=parents,
            fields=fields,
            uniques=uniques,
            indexes=indexes,
        )
        if not chain:
            logger.debug(f"Loaded metadata for {name} ({len(fields)} fields, superclass={is_superclass})")
        return metadata


def _extend(target: List[List[str]], field_lists: Optional[Iterable[Any]]) -> None:
    for fields in field_lists or []:
        if isinstance(fields, str):
            fields = [fields]
        fields = list(fields)
        if fields and fields not in target:
            target.append(fields)
