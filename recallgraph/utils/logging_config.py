"""
Centralized logging configuration for the recall engine.

Services log their initialization at INFO, pipeline sizes (retrieved
memories, graph nodes and edges, bulk tag updates) at DEBUG, and fail-closed
store reads at WARNING. Store write failures are logged at ERROR before
MemoryStoreError is raised. An unknown LOG_LEVEL falls back to INFO.
"""

import logging
import sys
from typing import Optional

from .config import AppConfig


def setup_logging(config: Optional[AppConfig] = None) -> None:
    """
    Setup centralized logging configuration.

    Args:
        config: AppConfig instance, uses default if None
    """
    if config is None:
        from .config import config as default_config
        config = default_config

    logging.basicConfig(level=getattr(logging, config.log_level.upper(), logging.INFO),
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                        handlers=[logging.StreamHandler(sys.stdout)])


def get_logger(name: str, config: Optional[AppConfig] = None) -> logging.Logger:
    """
    Get a logger with proper configuration.

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
    logger.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))
    return logger
