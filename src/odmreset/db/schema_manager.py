"""
Collection and index management for the classes mapped by a DocumentManager.
"""

import logging
from typing import TYPE_CHECKING, Dict, List, Tuple

import pymongo

from .metadata import ClassMetadata

if TYPE_CHECKING:
    from .document_manager import DocumentManager

IndexKeys = Tuple[Tuple[str, int], ...]
IndexDef = Tuple[IndexKeys, bool]

ID_INDEX = "_id_"


class SchemaManager:
    """Creates, updates and drops collections and indexes from class metadata.

    Mapped superclasses are skipped by every operation.
    """

    def __init__(self, document_manager: "DocumentManager"):
        self.dm = document_manager
        self.logger = logging.getLogger(__name__)

    def ensure_indexes(self) -> None:
        """Create any missing declared index on every concrete collection"""
        for metadata in self._concrete_metadata():
            self.ensure_document_indexes(metadata.name)

    def ensure_document_indexes(self, name: str) -> None:
        """Create missing declared indexes.

        An existing index on the same keys with a different unique flag is left as is
        (MongoDB refuses a second index on identical keys); update_document_indexes replaces it.
        """
        collection = self.dm.get_document_collection(name)
        existing = self._existing_indexes(name)
        existing_keys = {keys: idx_name for idx_name, (keys, _) in existing.items()}
        for keys, unique in self.get_declared_indexes(name):
            if (keys, unique) in existing.values():
                continue
            if keys in existing_keys:
                self.logger.warning(
                    f"Index '{existing_keys[keys]}' on {collection.name} conflicts with declared unique={unique}, skipped"
                )
                continue
            index_name = collection.create_index(list(keys), unique=unique)
            self.logger.debug(f"Created index {index_name} on {collection.name}, unique={unique}")

    def update_indexes(self) -> None:
        """Ensure declared indexes and drop the ones no longer declared"""
        for metadata in self._concrete_metadata():
            self.update_document_indexes(metadata.name)

    def update_document_indexes(self, name: str) -> None:
        collection = self.dm.get_document_collection(name)
        needed = set(self.get_declared_indexes(name))
        for idx_name, definition in self._existing_indexes(name).items():
            # Always keep _id_
            if idx_name == ID_INDEX:
                continue
            if definition not in needed:
                self.logger.info(f"Dropping unused index '{idx_name}' on {collection.name}")
                collection.drop_index(idx_name)
        self.ensure_document_indexes(name)

    def delete_indexes(self) -> None:
        for metadata in self._concrete_metadata():
            self.delete_document_indexes(metadata.name)

    def delete_document_indexes(self, name: str) -> None:
        collection = self.dm.get_document_collection(name)
        for idx_name in self._existing_indexes(name):
            if idx_name != ID_INDEX:
                collection.drop_index(idx_name)
                self.logger.debug(f"Deleted index {idx_name} on {collection.name}")

    def create_collections(self) -> None:
        db = self.dm.get_database()
        existing = set(db.list_collection_names())
        for metadata in self._concrete_metadata():
            if metadata.collection not in existing:
                db.create_collection(metadata.collection)
                self.logger.debug(f"Created collection {metadata.collection}")

    def drop_collections(self) -> None:
        for metadata in self._concrete_metadata():
            self.dm.get_document_collection(metadata.name).drop()
            self.logger.debug(f"Dropped collection {metadata.collection}")

    def get_declared_indexes(self, name: str) -> List[IndexDef]:
        """Declared indexes as (keys, unique) pairs, keys being ((field, direction), ...)"""
        metadata = self.dm.get_metadata_factory().get_metadata_for(name)
        declared: List[IndexDef] = []
        for fields in metadata.uniques:
            declared.append((_keys(fields), True))
        for fields in metadata.indexes:
            declared.append((_keys(fields), False))
        return declared

    def _existing_indexes(self, name: str) -> Dict[str, IndexDef]:
        collection = self.dm.get_document_collection(name)
        parsed: Dict[str, IndexDef] = {}
        for idx_name, idx_info in collection.index_information().items():
            key_fields = tuple(
                (field, direction if isinstance(direction, str) else int(direction))
                for field, direction in idx_info['key']
            )
            parsed[idx_name] = (key_fields, bool(idx_info.get('unique', False)))
        return parsed

    def _concrete_metadata(self) -> List[ClassMetadata]:
        return [
            md for md in self.dm.get_metadata_factory().get_all_metadata()
            if not md.is_mapped_superclass
        ]


def _keys(fields: List[str]) -> IndexKeys:
    return tuple((field, pymongo.ASCENDING) for field in fields)
