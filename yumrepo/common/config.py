"""Configuration management for the yum repository material.

Handles loading of the optional YAML configuration file that tunes how
the query tool is invoked and how the HTTP connection check behaves.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


DEFAULT_CONFIG_PATH = "/etc/yum-repo-material/config.yaml"

# Environment variable naming an alternate configuration file
CONFIG_PATH_ENV = "YUM_REPO_CONFIG"


@dataclass
class YumRepoConfig:
    """Top-level configuration for the yum repository material."""

    repoquery_command: str = "repoquery"
    home_dir: Optional[str] = None
    tmp_dir: Optional[str] = None
    http_timeout: float = 30.0
    log_level: str = "INFO"
    log_dir: str = "/var/log/yum-repo-material"
    file_logging: bool = False
    log_max_bytes: int = 10485760  # 10MB
    log_backup_count: int = 5


def parse_config(config_dict: Dict[str, Any]) -> YumRepoConfig:
    """Parse the full configuration dictionary.

    Args:
        config_dict: Full configuration dictionary

    Returns:
        YumRepoConfig instance
    """
    query = config_dict.get("query", {}) or {}
    http = config_dict.get("http", {}) or {}
    logging_dict = config_dict.get("logging", {}) or {}
    defaults = YumRepoConfig()

    return YumRepoConfig(
        repoquery_command=query.get("command", defaults.repoquery_command),
        home_dir=query.get("home_dir"),
        tmp_dir=query.get("tmp_dir"),
        http_timeout=float(http.get("timeout", defaults.http_timeout)),
        log_level=logging_dict.get("level", defaults.log_level),
        log_dir=logging_dict.get("dir", defaults.log_dir),
        file_logging=bool(logging_dict.get("file_logging", defaults.file_logging)),
        log_max_bytes=int(logging_dict.get("max_bytes", defaults.log_max_bytes)),
        log_backup_count=int(logging_dict.get("backup_count", defaults.log_backup_count)),
    )


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid YAML
        TypeError: If the document root is not a mapping
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_file.open("r") as f:
        config = yaml.safe_load(f)

    if config is None:
        config = {}

    if not isinstance(config, dict):
        raise TypeError(
            f"Configuration root must be a mapping, got {type(config).__name__}"
        )

    return _expand_env_vars(config)


def _expand_env_vars(obj: Any) -> Any:
    """Recursively expand environment variables in configuration.

    Args:
        obj: Configuration object (dict, list, str, etc.)

    Returns:
        Configuration with expanded environment variables
    """
    if isinstance(obj, dict):
        return {key: _expand_env_vars(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    elif isinstance(obj, str):
        return os.path.expandvars(obj)
    else:
        return obj


def load_typed_config(config_path: Optional[str] = None) -> YumRepoConfig:
    """Load and parse configuration into typed dataclass.

    The path defaults to ``$YUM_REPO_CONFIG`` and then to
    ``DEFAULT_CONFIG_PATH``.

    Args:
        config_path: Path to configuration file

    Returns:
        YumRepoConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH)
    return parse_config(load_config(config_path))
