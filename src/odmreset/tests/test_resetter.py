from unittest.mock import MagicMock

import pytest

from odmreset import ODMSchemaResetter, SchemaResetter
from odmreset.db import ClassMetadata, DocumentManager, ManagerNotFound, ManagerRegistry, MetadataFactory


def _index_keys(collection):
    return {
        tuple(field for field, _ in info["key"]): info.get("unique", False)
        for name, info in collection.index_information().items()
        if name != "_id_"
    }


def _seed(document_manager):
    db = document_manager.get_database()
    db["user"].insert_many([{"email": "a@x.io", "username": "a"}, {"email": "b@x.io", "username": "b"}])
    db["accounts"].insert_one({"name": "main", "ownerId": 1})
    db["audit"].insert_one({"action": "login"})
    db["baseentity"].insert_one({"marker": "not mapped to a collection"})


def test_schema_resetter_is_abstract():
    with pytest.raises(TypeError):
        SchemaResetter()


def test_reset_empties_concrete_collections(registry, document_manager):
    _seed(document_manager)

    ODMSchemaResetter(registry).reset_schema()

    db = document_manager.get_database()
    for collection in ("user", "accounts", "audit"):
        assert db[collection].count_documents({}) == 0


def test_reset_never_drops_superclass_collection(registry, document_manager):
    _seed(document_manager)

    ODMSchemaResetter(registry).reset_schema()

    assert document_manager.get_database()["baseentity"].count_documents({}) == 1


def test_reset_recreates_declared_indexes(registry, document_manager):
    db = document_manager.get_database()
    db["user"].create_index("legacy")

    ODMSchemaResetter(registry).reset_schema()

    assert _index_keys(db["user"]) == {("email",): True, ("username",): True, ("createdAt",): False}
    assert _index_keys(db["accounts"]) == {("name", "ownerId"): True, ("createdAt",): False}


def test_reset_twice_is_idempotent(registry, document_manager):
    _seed(document_manager)
    resetter = ODMSchemaResetter(registry)

    resetter.reset_schema()
    db = document_manager.get_database()
    first = {name: _index_keys(db[name]) for name in ("user", "accounts", "audit")}
    resetter.reset_schema()
    second = {name: _index_keys(db[name]) for name in ("user", "accounts", "audit")}

    assert first == second
    assert db["user"].count_documents({}) == 0


def test_reset_only_touches_default_manager(registry, mongo_client):
    mongo_client["odmreset_reporting"]["report"].insert_one({"title": "q1"})

    ODMSchemaResetter(registry).reset_schema()

    assert mongo_client["odmreset_reporting"]["report"].count_documents({}) == 1


def test_reset_named_managers(registry, mongo_client, document_manager):
    _seed(document_manager)
    mongo_client["odmreset_reporting"]["report"].insert_one({"title": "q1"})

    resetter = ODMSchemaResetter(registry, ["reporting"])
    assert resetter.managers_to_reset() == ["reporting"]
    resetter.reset_schema()

    assert mongo_client["odmreset_reporting"]["report"].count_documents({}) == 0
    assert document_manager.get_database()["user"].count_documents({}) == 2


def test_default_managers_to_reset(registry):
    assert ODMSchemaResetter(registry).managers_to_reset() == ["default"]


def test_unknown_manager_propagates(registry):
    with pytest.raises(ManagerNotFound):
        ODMSchemaResetter(registry, ["missing"]).reset_schema()


def test_drop_failure_propagates_and_stops():
    failing = RuntimeError("connection lost")
    collection = MagicMock()
    collection.drop.side_effect = failing
    manager = MagicMock()
    manager.get_metadata_factory.return_value.get_all_metadata.return_value = [
        ClassMetadata(name="Base", collection="base", is_mapped_superclass=True),
        ClassMetadata(name="User", collection="user"),
    ]
    manager.get_document_collection.return_value = collection
    registry = MagicMock()
    registry.get_default_manager_name.return_value = "default"
    registry.get_manager.return_value = manager

    with pytest.raises(RuntimeError) as exc:
        ODMSchemaResetter(registry).reset_schema()

    assert exc.value is failing
    manager.get_document_collection.assert_called_once_with("User")
    manager.get_schema_manager.assert_not_called()


def test_plugin_fixture_resets_before_test(reset_schema, odm_registry):
    users = odm_registry.get_manager().get_document_collection("User")
    assert users.count_documents({}) == 0
    assert "email_1" in users.index_information()
    users.insert_one({"email": "left@behind.io", "username": "left"})


def test_plugin_fixture_isolates_tests(reset_schema, odm_registry):
    users = odm_registry.get_manager().get_document_collection("User")
    assert users.count_documents({}) == 0


def test_reset_with_names_differing_only_in_case(mongo_client):
    db = mongo_client["odmreset_case"]
    factory = MetadataFactory({
        "Node": {"abstract": True},
        "node": {"collection": "nodes", "unique": [["label"]]},
    })
    registry = ManagerRegistry({"default": DocumentManager(db, factory)})
    db["nodes"].insert_one({"label": "root"})

    ODMSchemaResetter(registry).reset_schema()

    assert db["nodes"].count_documents({}) == 0
    assert "label_1" in db["nodes"].index_information()
