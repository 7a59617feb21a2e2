"""
Document manager: metadata, collection access and schema operations
for one MongoDB database.
"""

import logging
from typing import Optional

from pymongo.collection import Collection
from pymongo.database import Database

from .exceptions import MappingError
from .metadata import MetadataFactory
from .schema_manager import SchemaManager

logger = logging.getLogger(__name__)


class DocumentManager:
    """Binds a pymongo database to the metadata of the classes mapped into it"""

    def __init__(self, database: Database, metadata_factory: MetadataFactory):
        self._db = database
        self._metadata_factory = metadata_factory
        self._schema_manager: Optional[SchemaManager] = None

    def get_metadata_factory(self) -> MetadataFactory:
        return self._metadata_factory

    def get_database(self) -> Database:
        return self._db

    def get_document_collection(self, name: str) -> Collection:
        """Get the collection a mapped class is stored in"""
        metadata = self._metadata_factory.get_metadata_for(name)
        if metadata.is_mapped_superclass:
            raise MappingError(message=f"{metadata.name} is a mapped superclass and has no collection")
        return self._db[metadata.collection]

    def get_schema_manager(self) -> SchemaManager:
        if self._schema_manager is None:
            self._schema_manager = SchemaManager(self)
        return self._schema_manager

    def close(self) -> None:
        """Close the underlying client connection"""
        self._db.client.close()
        logger.info(f"DocumentManager: Connection to {self._db.name} closed")
