"""Configuration and preflight checks."""

from create_sweet.config.loader import (
    get_home_config_path,
    get_local_config_path,
    home_config_exists,
    load_config,
    local_config_exists,
    save_config,
)
from create_sweet.config.schema import DEFAULT_CONFIG, SweetConfig

__all__ = [
    "DEFAULT_CONFIG",
    "SweetConfig",
    "get_home_config_path",
    "get_local_config_path",
    "home_config_exists",
    "load_config",
    "local_config_exists",
    "save_config",
]
