"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Logging (Loguru)
- Console management (Rich)

Clean architecture principle: The core layer has no dependencies on
domain or application layers.
"""

# Configuration
from .config import (
    Config,
    LoggingConfig,
    LookupConfig,
    PlayerConfig,
    create_default_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    load_config,
    parse_config,
)

# Console
from .console import get_console, print_event

# Logging
from .output import setup_from_config, setup_loguru

__all__ = [
    # Config
    "Config",
    "LoggingConfig",
    "LookupConfig",
    "PlayerConfig",
    "create_default_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "load_config",
    "parse_config",
    # Console
    "get_console",
    "print_event",
    # Logging
    "setup_from_config",
    "setup_loguru",
]
