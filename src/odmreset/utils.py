import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional

# Package logger, configured from the config's log_level
logger = logging.getLogger("odmreset")

LOG_LEVELS = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
}


def set_log_level(level: str) -> None:
    """Set the logging level for every odmreset logger."""
    log_level = LOG_LEVELS.get(level.upper())
    if log_level is None:
        logger.warning(f"Unknown log level '{level}', keeping {logging.getLevelName(logger.level)}")
        return
    logger.setLevel(log_level)
    # hosts that configured the root logger already get our records through propagation
    if not logger.handlers and not logging.getLogger().handlers:
        logger.propagate = False
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s: %(message)s'))
        logger.addHandler(console_handler)
    for handler in logger.handlers:
        handler.setLevel(log_level)


def load_settings(config_file: Optional[Path]) -> Dict[str, Any]:
    if not config_file:
        return {}
    try:
        with open(config_file, 'r') as config_handle:
            return json.load(config_handle)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Could not read settings from {config_file}: {e}")
        return {}
