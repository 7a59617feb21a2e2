from pathlib import Path
from typing import Dict, Any, Iterable, Optional, Tuple
import logging
from .utils import load_settings

logger = logging.getLogger(__name__)

DEFAULT_MANAGER = 'default'

DEFAULTS: Dict[str, Any] = {
    'db_uri': 'mongodb://localhost:27017',
    'db_name': 'default_db',
    'log_level': 'info',
}


class Config:
    """Static configuration class - no instances, only class methods"""
    _config: Dict[str, Any] = {}

    @classmethod
    def initialize(cls, config_file: str) -> Dict[str, Any]:
        """Initialize the config with values from config file"""
        cls._config = cls._load_system_config(config_file)
        return cls._config

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        """Get a configuration value by key"""
        return cls._config.get(key, default)

    @classmethod
    def get_db_params(cls) -> Tuple[str, str]:
        """Get database parameters of the default manager"""
        params = cls.managers()[cls.default_manager_name()]
        return params['db_uri'], params['db_name']

    @classmethod
    def managers(cls) -> Dict[str, Dict[str, Any]]:
        return normalize_managers(cls._config)

    @classmethod
    def default_manager_name(cls) -> str:
        return resolve_default_manager(cls.managers(), cls._config.get('default_manager'))

    @classmethod
    def _load_system_config(cls, config_file: str) -> Dict[str, Any]:
        """
        Load and return the configuration from config.json.
        If the file is not found, return default configuration values.
        """
        if len(config_file) > 0:
            config_path = Path(config_file)
            if config_path.exists():
                return {**DEFAULTS, **load_settings(config_path)}
        logger.warning(f'Configuration file "{config_file}" not found. Using defaults.')
        return dict(DEFAULTS)


def normalize_managers(config: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    """
    Return {name: {db_uri, db_name, schema}}.

    A config without a "managers" object describes a single manager named "default"
    from its top level db_uri/db_name/schema keys. Named managers inherit any of those
    keys they do not set themselves.
    """
    base = {
        'db_uri': config.get('db_uri', DEFAULTS['db_uri']),
        'db_name': config.get('db_name', DEFAULTS['db_name']),
        'schema': config.get('schema'),
    }
    managers = config.get('managers')
    if not managers:
        return {DEFAULT_MANAGER: base}
    return {name: {**base, **(params or {})} for name, params in managers.items()}


def resolve_default_manager(names: Iterable[str], default_manager: Optional[str] = None) -> Optional[str]:
    """The explicit default, else a manager named "default", else the first name."""
    if default_manager is not None:
        return default_manager
    names = list(names)
    if DEFAULT_MANAGER in names:
        return DEFAULT_MANAGER
    return names[0] if names else None
