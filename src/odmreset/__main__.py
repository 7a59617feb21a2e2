#!/usr/bin/env python3
"""
Reset the document schema from the command line.

    python -m odmreset <config.json> [manager ...]
"""
import sys

from .config import Config
from .db.registry import ManagerRegistry
from .resetter import ODMSchemaResetter
from .utils import set_log_level


def reset(config_file: str, manager_names=None) -> None:
    config = Config.initialize(config_file)
    set_log_level(config.get("log_level", "info"))

    registry = ManagerRegistry.from_config(config)
    try:
        ODMSchemaResetter(registry, manager_names).reset_schema()
    finally:
        registry.close()


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) < 1:
        print("Usage: python -m odmreset <config.json> [manager ...]")
        return 1
    reset(argv[0], argv[1:] or None)
    print("Schema reset completed successfully.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
