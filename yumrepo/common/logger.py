"""Logging for the yum repository material.

Loggers are configured from the ``logging`` section of the configuration
file: console output always, a rotating log file when enabled.
"""

import logging
import logging.handlers
import os
from typing import Optional

from .config import YumRepoConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logger(name: str, config: Optional[YumRepoConfig] = None) -> logging.Logger:
    """Set up a logger from configuration.

    Args:
        name: Logger name, normally ``"yumrepo"``
        config: Configuration supplying level, log directory, file logging
            and rotation settings

    Returns:
        Configured logger instance

    Raises:
        ValueError: If the configured level is unknown
    """
    config = config or YumRepoConfig()
    logger = logging.getLogger(name)

    level = config.log_level.upper()
    if level not in LOG_LEVELS:
        raise ValueError(
            f"Invalid log level: {config.log_level}. Must be one of: {', '.join(LOG_LEVELS)}"
        )
    logger.setLevel(getattr(logging, level))

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if config.file_logging:
        os.makedirs(config.log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            os.path.join(config.log_dir, f"{name}.log"),
            maxBytes=config.log_max_bytes,
            backupCount=config.log_backup_count,
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``yumrepo`` namespace.

    Args:
        name: Component name, e.g. ``"poller"``

    Returns:
        Logger instance
    """
    if name == "yumrepo" or name.startswith("yumrepo."):
        return logging.getLogger(name)
    return logging.getLogger(f"yumrepo.{name}")
