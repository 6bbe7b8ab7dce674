"""
Configuration loading utilities for the data model.

This module loads the optional config.yaml (schema directory, logging and
display settings) and merges it over the built-in defaults.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional
import logging
from copy import deepcopy

from .exceptions import ConfigurationLoadError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.yaml")


def deep_merge(base_dict: Dict[str, Any], update_dict: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge two dictionaries, with update_dict taking precedence.

    Args:
        base_dict: Base dictionary (defaults)
        update_dict: Dictionary to merge in (user config)

    Returns:
        Merged dictionary
    """
    result = deepcopy(base_dict)

    for key, value in update_dict.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = deepcopy(value)

    return result


def get_default_config() -> Dict[str, Any]:
    """
    Get default configuration.

    Returns:
        Dictionary with default configuration
    """
    return {
        'app': {
            'name': 'Template Data Model',
            'version': '1.0.0',
            'debug': False
        },
        'schema': {
            'directory': 'schemas',
            'primary_schema': 'default_schema.yaml',
            'fallback_schema': 'default_schema.yaml'
        },
        'logging': {
            'level': 'INFO',
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        },
        'display': {
            'indent': '  '
        }
    }


def load_config(config_path: Optional[Path] = None, strict: bool = False) -> Dict[str, Any]:
    """
    Load configuration merged over the defaults.

    Args:
        config_path: Optional path to config file (defaults to config.yaml)
        strict: Raise instead of falling back to defaults when the file is unreadable

    Returns:
        Complete configuration dictionary

    Raises:
        ConfigurationLoadError: If strict and the file cannot be read or parsed
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    config_path = Path(config_path)

    default_config = get_default_config()

    if not config_path.exists():
        logger.debug(f"Configuration file not found: {config_path}, using defaults")
        return default_config

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            user_config = yaml.safe_load(f)
    except (yaml.YAMLError, OSError) as e:
        if strict:
            raise ConfigurationLoadError(config_path, e)
        logger.error(f"Failed to read configuration file {config_path}: {e}")
        logger.info("Using default configuration")
        return default_config

    if user_config is None:
        logger.warning(f"Configuration file is empty: {config_path}")
        return default_config

    if not isinstance(user_config, dict):
        if strict:
            raise ConfigurationLoadError(
                config_path, TypeError(f"top level is {type(user_config).__name__}, expected a mapping")
            )
        logger.error(f"Configuration file is not a valid dictionary: {config_path}")
        logger.info("Using default configuration")
        return default_config

    config = deep_merge(default_config, user_config)
    if not validate_config(config):
        if strict:
            raise ConfigurationLoadError(config_path, ValueError("invalid configuration structure"))
        logger.error(f"Configuration file has an invalid structure: {config_path}")
        logger.info("Using default configuration")
        return default_config

    logger.info(f"Successfully loaded configuration from {config_path}")
    return config


def validate_config(config: Dict[str, Any]) -> bool:
    """
    Validate configuration structure.

    Args:
        config: Configuration dictionary to validate

    Returns:
        True if configuration is valid, False otherwise
    """
    for section in ('app', 'schema', 'logging', 'display'):
        if not isinstance(config.get(section), dict):
            logger.warning(f"Missing required configuration section: {section}")
            return False

    schema = config['schema']
    for key in ('directory', 'primary_schema'):
        if not isinstance(schema.get(key), str) or not schema.get(key):
            logger.warning(f"schema.{key} must be a non-empty string")
            return False

    level = config['logging'].get('level', 'INFO')
    if not isinstance(level, str):
        logger.warning("logging.level must be a string")
        return False

    if not isinstance(config['display'].get('indent', '  '), str):
        logger.warning("display.indent must be a string")
        return False

    return True


def get_config_value(config: Dict[str, Any], section: str, key: str, default: Any = None) -> Any:
    """
    Get a specific configuration value.

    Args:
        config: Configuration dictionary
        section: Configuration section (e.g., 'schema', 'logging')
        key: Configuration key within section
        default: Default value if not found

    Returns:
        Configuration value or default
    """
    values = config.get(section, {})
    if not isinstance(values, dict):
        return default
    return values.get(key, default)
