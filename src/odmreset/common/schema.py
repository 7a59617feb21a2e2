from typing import Dict, Any
import yaml

class Schema:

    RESERVED_TYPES = { "ISODate", "ObjectId" }

    def __init__(self, schema_path: str):
        self.schema: Dict[str, Any] = {}
        with open(schema_path, "r") as file:
            self.schema = yaml.safe_load(file) or {}

    def concrete_entities(self, reserved_types=RESERVED_TYPES) -> dict:
        entities = self.all_entities(reserved_types)
        # Remove all inherited entities from concrete entities
        for inherited in self.inherited_entities():
            if inherited in entities:
                del entities[inherited]
        return {name: e for name, e in entities.items() if not e.get("abstract", False)}

    def abstract_entities(self, reserved_types=RESERVED_TYPES) -> dict:
        concrete = self.concrete_entities(reserved_types)
        return {
            name: e for name, e in self.all_entities(reserved_types).items()
            if name not in concrete
        }

    def inherited_entities(self) -> list:
        inherited = self.schema.get('_inherited_entities') or []
        return list(inherited)

    def all_entities(self, reserved_types=RESERVED_TYPES) -> dict:
        return self._get_attribute('_entities', reserved_types)

    def entity(self, entity_name: str, reserved_types=RESERVED_TYPES) -> dict:
        return self.all_entities(reserved_types)[entity_name]

    def _get_attribute(self, object_name: str, reserved_types=RESERVED_TYPES) -> dict:
        entity_obj = self.schema.get(object_name) or {}

        # Extract entity schemas, skipping reserved types and metadata keys
        entity_schemas = {
            name: details for name, details in entity_obj.items()
            if name not in reserved_types and isinstance(details, dict)
        }

        return entity_schemas

    def full_schema(self):
        return self.schema
