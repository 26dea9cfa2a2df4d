"""Common utilities for the yum repository material."""

from .logger import setup_logger, get_logger
from .config import YumRepoConfig, load_config, load_typed_config

__all__ = ["YumRepoConfig", "get_logger", "load_config", "load_typed_config", "setup_logger"]
