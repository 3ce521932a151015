"""
Configuration loading for the game troubleshooter.

Settings come from a JSON file. The file is looked up in this order:
1. The path in the GAME_TROUBLESHOOTER_CONFIG environment variable
2. troubleshooter_config.json in the current working directory
If neither exists, defaults are used.

Example troubleshooter_config.json:
    {
        "log_level": "DEBUG",
        "log_file": "logs/troubleshooter.log",
        "process_timeout": 10
    }
"""

import json
import os
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from game_troubleshooter.utils.data_model import HelperConfig
from game_troubleshooter.utils.errors import ConfigError
from game_troubleshooter.utils.monitoring import get_logger

logger = get_logger(__name__)

CONFIG_ENV_VAR = "GAME_TROUBLESHOOTER_CONFIG"
DEFAULT_CONFIG_NAME = "troubleshooter_config.json"


def find_config_path(cwd: Optional[Path] = None) -> Optional[Path]:
    """Return the config file to load, or None to use defaults."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    candidate = Path(cwd or Path.cwd()) / DEFAULT_CONFIG_NAME
    if candidate.exists():
        return candidate
    return None


def load_config(config_path: Optional[Path] = None) -> HelperConfig:
    """
    Load settings from a JSON file.

    Relative log_file and catalog_path values are resolved against the
    directory holding the config file.

    Args:
        config_path: Config file to read. None returns the defaults.

    Returns:
        Validated HelperConfig

    Raises:
        ConfigError: If the file is missing, is not valid JSON or fails validation
    """
    if config_path is None:
        return HelperConfig()

    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in configuration file {config_path}: {e}") from e

    if not isinstance(config_data, dict):
        raise ConfigError(f"Configuration file {config_path} must contain a JSON object")

    base_dir = config_path.parent
    for key in ('log_file', 'catalog_path'):
        value = config_data.get(key)
        if not isinstance(value, str) or not value:
            continue
        path = Path(value).expanduser()
        if not path.is_absolute():
            path = base_dir / path
        config_data[key] = str(path)

    try:
        config = HelperConfig(**config_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e

    logger.debug(f"Loaded configuration from {config_path}")
    return config
