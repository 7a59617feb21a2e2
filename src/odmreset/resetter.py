"""
Schema resetters used to isolate test runs.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from .db.registry import ManagerRegistry

logger = logging.getLogger(__name__)


class SchemaResetter(ABC):

    @abstractmethod
    def reset_schema(self) -> None:
        """Drop all mapped data and rebuild the schema"""
        pass


class ODMSchemaResetter(SchemaResetter):
    """
    Drops every mapped collection of the managers to reset, then re-ensures their indexes.

    Mapped superclasses have no collection and are skipped. Errors from the registry
    or the driver propagate as-is, so a failure part way leaves the schema partially reset.
    """

    def __init__(self, registry: ManagerRegistry, manager_names: Optional[Sequence[str]] = None):
        self.registry = registry
        self.manager_names = list(manager_names) if manager_names else None

    def reset_schema(self) -> None:
        for manager_name in self.managers_to_reset():
            manager = self.registry.get_manager(manager_name)
            for metadata in manager.get_metadata_factory().get_all_metadata():
                if metadata.is_mapped_superclass:
                    continue

                manager.get_document_collection(metadata.name).drop()
                logger.debug(f"Dropped collection {metadata.collection} of {metadata.name}")

            manager.get_schema_manager().ensure_indexes()
            logger.info(f"Schema reset for manager '{manager_name}'")

    def managers_to_reset(self) -> List[str]:
        if self.manager_names:
            return list(self.manager_names)
        return [self.registry.get_default_manager_name()]
