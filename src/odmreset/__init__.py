from .resetter import ODMSchemaResetter, SchemaResetter

__all__ = ['ODMSchemaResetter', 'SchemaResetter']
