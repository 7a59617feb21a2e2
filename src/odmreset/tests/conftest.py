"""Shared fixtures for odmreset tests."""

import mongomock
import pytest

from odmreset.config import Config
from odmreset.db import DocumentManager, ManagerRegistry, MetadataFactory

ENTITIES = {
    "BaseEntity": {
        "abstract": True,
        "fields": {
            "createdAt": {"type": "ISODate", "autoGenerate": True},
            "updatedAt": {"type": "ISODate", "autoUpdate": True},
        },
        "index": [["createdAt"]],
    },
    "User": {
        "inherits": ["BaseEntity"],
        "fields": {
            "email": {"type": "String", "required": True},
            "username": {"type": "String", "required": True},
        },
        "unique": [["email"], ["username"]],
    },
    "Account": {
        "inherits": ["BaseEntity"],
        "fields": {"name": {"type": "String"}, "ownerId": {"type": "ObjectId"}},
        "unique": [["name", "ownerId"]],
        "collection": "accounts",
    },
    "Audit": {
        "fields": {"action": {"type": "String"}},
    },
}


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    monkeypatch.setattr(Config, "_config", {})


@pytest.fixture
def mongo_client():
    """In-memory MongoDB via mongomock."""
    client = mongomock.MongoClient()
    yield client
    client.close()


@pytest.fixture
def metadata_factory():
    return MetadataFactory(ENTITIES)


@pytest.fixture
def document_manager(mongo_client, metadata_factory):
    return DocumentManager(mongo_client["odmreset_test"], metadata_factory)


@pytest.fixture
def registry(mongo_client, document_manager):
    reporting = DocumentManager(
        mongo_client["odmreset_reporting"],
        MetadataFactory({"Report": {"fields": {"title": {"type": "String"}}, "unique": [["title"]]}}),
    )
    return ManagerRegistry({"default": document_manager, "reporting": reporting})


@pytest.fixture(scope="session")
def odm_registry():
    """Replaces the plugin's live-MongoDB registry with a mongomock one."""
    client = mongomock.MongoClient()
    dm = DocumentManager(client["odmreset_plugin"], MetadataFactory(ENTITIES))
    registry = ManagerRegistry({"default": dm})
    yield registry
    registry.close()
