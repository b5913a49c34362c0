"""
Centralized logging configuration for the file service.
"""

import logging
import sys
from typing import List, Optional

from .config import AppConfig

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _resolve_level(config: AppConfig) -> int:
    return getattr(logging, config.log_level.upper(), logging.INFO)


def setup_logging(config: Optional[AppConfig] = None) -> None:
    """
    Setup centralized logging configuration.

    Logs go to stdout, and additionally to ``config.log_file`` when one is
    configured (its parent directory is created on demand).

    Args:
        config: AppConfig instance, uses default if None
    """
    if config is None:
        from .config import config as default_config
        config = default_config

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if config.log_file is not None:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(config.log_file, encoding='utf-8'))

    logging.basicConfig(level=_resolve_level(config), format=LOG_FORMAT, handlers=handlers)


def get_logger(name: str, config: Optional[AppConfig] = None) -> logging.Logger:
    """
    Get a logger at the configured level.

    Args:
        name: Logger name (usually __name__)
        config: AppConfig instance, uses default if None

    Returns:
        Configured logger instance
    """
    if config is None:
        from .config import config as default_config
        config = default_config

    logger = logging.getLogger(name)
    logger.setLevel(_resolve_level(config))
    return logger
