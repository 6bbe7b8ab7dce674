"""
Logging setup driven by the configuration's logging section.
"""

import logging
from typing import Any, Dict, Optional

from .config_loader import get_config_value, get_default_config

logger = logging.getLogger(__name__)


def get_logging_level(level_str):
    """Map string logging level to logging constant."""
    level_map = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL
    }
    if not isinstance(level_str, str):
        return logging.INFO
    return level_map.get(level_str.upper(), logging.INFO)


def setup_logging(config: Optional[Dict[str, Any]] = None, level: Optional[str] = None) -> int:
    """
    Configure root logging from configuration.

    Args:
        config: Configuration dictionary (defaults are used when omitted)
        level: Level name overriding the configured one

    Returns:
        The numeric level that was applied
    """
    if config is None:
        config = get_default_config()

    level_str = level or get_config_value(config, 'logging', 'level', 'INFO')
    log_format = get_config_value(
        config, 'logging', 'format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    log_level = get_logging_level(level_str)

    logging.basicConfig(level=log_level, format=log_format)
    logging.getLogger().setLevel(log_level)
    logger.debug(f"Logging configured to level: {level_str}")
    return log_level
