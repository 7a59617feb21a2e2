"""
Registry of named document managers.
"""

import logging
from typing import Any, Dict, List, Optional

from pymongo import MongoClient

from ..common import Schema
from ..config import DEFAULT_MANAGER, normalize_managers, resolve_default_manager
from .document_manager import DocumentManager
from .exceptions import ManagerNotFound
from .metadata import MetadataFactory

logger = logging.getLogger(__name__)


class ManagerRegistry:
    """
    Maps logical names to DocumentManager instances.

    Usage:
        registry = ManagerRegistry.from_config(Config.initialize("config.json"))
        dm = registry.get_manager()            # default manager
        dm = registry.get_manager("audit")     # named manager
    """

    def __init__(self, managers: Dict[str, DocumentManager], default_manager_name: Optional[str] = None):
        if default_manager_name is not None and default_manager_name not in managers:
            raise ManagerNotFound(default_manager_name)
        self._managers = dict(managers)
        self._default_name = default_manager_name

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "ManagerRegistry":
        """
        Build one DocumentManager per configured manager.

        Args:
            config: Loaded configuration. Either a "managers" mapping of
                    name -> {db_uri, db_name, schema} or top level db_uri/db_name/schema
                    keys describing a single "default" manager.
        """
        managers: Dict[str, DocumentManager] = {}
        for name, params in normalize_managers(config).items():
            client: MongoClient = MongoClient(params["db_uri"])
            schema_file = params.get("schema")
            factory = MetadataFactory.from_schema(Schema(schema_file)) if schema_file else MetadataFactory({})
            managers[name] = DocumentManager(client[params["db_name"]], factory)
            logger.info(f"ManagerRegistry: Registered manager '{name}' for {params['db_name']}")

        return cls(managers, config.get("default_manager"))

    def get_manager(self, name: Optional[str] = None) -> DocumentManager:
        if name is None:
            name = self.get_default_manager_name()
        manager = self._managers.get(name)
        if manager is None:
            raise ManagerNotFound(name)
        return manager

    def get_default_manager_name(self) -> str:
        name = resolve_default_manager(self._managers, self._default_name)
        if name is None:
            raise ManagerNotFound(DEFAULT_MANAGER, "No document managers registered")
        return name

    def get_manager_names(self) -> List[str]:
        return list(self._managers.keys())

    def get_managers(self) -> Dict[str, DocumentManager]:
        return dict(self._managers)

    def close(self) -> None:
        """Close every manager's connection"""
        for manager in self._managers.values():
            manager.close()
