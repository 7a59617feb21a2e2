"""
pytest fixtures for resetting the document schema between tests.

    def test_signup(reset_schema, odm_registry):
        users = odm_registry.get_manager().get_document_collection("User")
        assert users.count_documents({}) == 0

Point the plugin at a config with `--odm-config path/to/config.json` or the
`odm_config` ini option, or override the `odm_registry` fixture.
"""

import pytest

from .config import Config
from .db.registry import ManagerRegistry
from .resetter import ODMSchemaResetter
from .utils import set_log_level


def pytest_addoption(parser):
    group = parser.getgroup("odmreset")
    group.addoption("--odm-config", action="store", default=None,
                    help="JSON config describing the document managers to reset")
    parser.addini("odm_config", "JSON config describing the document managers to reset", default="")


@pytest.fixture(scope="session")
def odm_registry(pytestconfig):
    config_file = pytestconfig.getoption("odm_config") or pytestconfig.getini("odm_config")
    config = Config.initialize(config_file or "")
    set_log_level(config.get("log_level", "info"))
    registry = ManagerRegistry.from_config(config)
    yield registry
    registry.close()


@pytest.fixture(scope="session")
def odm_schema_resetter(odm_registry):
    return ODMSchemaResetter(odm_registry, Config.get("reset_managers"))


@pytest.fixture
def reset_schema(odm_schema_resetter):
    odm_schema_resetter.reset_schema()
    yield odm_schema_resetter
