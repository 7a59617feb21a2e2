"""
Mapping and registry exceptions. Driver errors (pymongo.errors.*) are never wrapped.
"""


class ModelNotFound(Exception):
    """Raised when a requested mapped class is not found"""

    def __init__(self, entity_type: str, message=None):
        self.entity_type = entity_type
        self.message = message or f"Mapped class not found for entity type: {entity_type}"
        super().__init__(self.message)


class ManagerNotFound(Exception):
    """Raised when the registry has no document manager under the requested name"""

    def __init__(self, name: str, message=None):
        self.name = name
        self.message = message or f"Document manager not found: {name}"
        super().__init__(self.message)


class MappingError(Exception):
    """Raised for invalid entity mappings (unknown parents, cycles, superclass collections)."""

    def __init__(self, e=None, message=None):
        if message:
            super().__init__(message)
        elif e:
            super().__init__(str(e))
        else:
            super().__init__("Invalid mapping")
        self.error = e
        self.message = message
