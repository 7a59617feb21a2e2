"""
Document mapping layer used by the schema resetter.

Architecture:
- ManagerRegistry: Named lookup of document managers
- DocumentManager: Metadata, collection access and schema manager for one database
- MetadataFactory: Resolved ClassMetadata (inheritance, mapped superclasses)
- SchemaManager: Collection and index management
"""

from .document_manager import DocumentManager
from .exceptions import ManagerNotFound, MappingError, ModelNotFound
from .metadata import ClassMetadata, MetadataFactory
from .registry import ManagerRegistry
from .schema_manager import SchemaManager

__all__ = [
    'ClassMetadata', 'DocumentManager', 'ManagerNotFound', 'ManagerRegistry',
    'MappingError', 'MetadataFactory', 'ModelNotFound', 'SchemaManager',
]
