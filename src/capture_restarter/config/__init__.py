"""
Configuration management for the capture_restarter package.

This module provides a clean interface for loading, validating, and
accessing configuration data from TOML files and from the host settings
store.
"""

# Main configuration interface
from .manager import (
    clear_config_cache,
    config_to_dict,
    get_config,
    get_config_info,
    is_config_loaded,
    set_config_path,
    write_default_config,
)

# For advanced usage - direct access to loaders and validators
from .loader import load_toml_file
from .settings import config_from_host
from .validators import (
    validate_check_interval,
    validate_restarter_config,
    validate_source_types,
    validate_sources_per_check,
)

__all__ = [
    # Main interface
    "get_config",
    "set_config_path",
    "clear_config_cache",
    "is_config_loaded",
    "get_config_info",
    "config_to_dict",
    "write_default_config",
    "config_from_host",
    # Advanced interface
    "load_toml_file",
    "validate_restarter_config",
    "validate_source_types",
    "validate_check_interval",
    "validate_sources_per_check",
]
