"""
Configuration management and singleton pattern.

This module provides the main configuration loading and management
interface, implementing a singleton pattern to ensure the configuration
file is read only once.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import toml

from ..models.config import RestarterConfig
from ..validation import handle_config_error, ErrorSeverity
from .loader import load_toml_file
from .validators import validate_restarter_config

logger = logging.getLogger(__name__)

# --- Global Singleton for Configuration ---

_CONFIG: Optional[RestarterConfig] = None

# Default location of the configuration file, relative to the repository
# root. Overridden by the CLI --config option and by tests.
_CONFIG_FILE_PATH = Path(__file__).parent.parent.parent.parent / "conf" / "config.toml"


def set_config_path(config_path: Path) -> None:
    """
    Set a custom configuration file path.

    Args:
        config_path: Path to the config.toml file

    Note:
        Any cached configuration is dropped so the next get_config()
        reads the new file.
    """
    global _CONFIG_FILE_PATH, _CONFIG
    _CONFIG_FILE_PATH = config_path
    _CONFIG = None
    logger.info(f"Configuration path set to: {config_path}")


def clear_config_cache() -> None:
    """Clear the cached configuration, forcing a reload on next access."""
    global _CONFIG
    _CONFIG = None
    logger.debug("Configuration cache cleared")


def _load_config(config_path: Path) -> RestarterConfig:
    """
    Load and validate the configuration file.

    Raises:
        FileNotFoundError: If the configuration file is missing
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    try:
        config_data = load_toml_file(config_path, "restarter configuration file")
        config = validate_restarter_config(config_data)
        logger.info(
            f"Successfully loaded configuration: {config.mode_name} mode, "
            f"{config.check_interval_ms}ms interval, "
            f"{len(config.extra_source_types)} extra source types"
        )
        return config
    except Exception as e:
        handle_config_error(
            error=e,
            context="loading configuration",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger
        )
        raise


def get_config() -> RestarterConfig:
    """
    Get the global restarter configuration, loading it if necessary.

    Returns:
        The singleton RestarterConfig instance

    Raises:
        FileNotFoundError: If the configuration file is missing
        ValidationError: If configuration validation fails
    """
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _load_config(_CONFIG_FILE_PATH)
    return _CONFIG


def is_config_loaded() -> bool:
    """Check if configuration has been loaded and cached."""
    return _CONFIG is not None


def get_config_info() -> dict:
    """Get information about the current configuration state."""
    return {
        "config_loaded": is_config_loaded(),
        "config_path": str(_CONFIG_FILE_PATH),
        "mode": _CONFIG.mode_name if _CONFIG else None,
    }


def config_to_dict(config: RestarterConfig) -> Dict[str, Any]:
    """Render a RestarterConfig in the layout of config.toml."""
    return {
        "restarter": {
            "check_interval_ms": config.check_interval_ms,
            "sources_per_check": config.sources_per_check,
            "use_cooperative_mode": config.use_cooperative_mode,
            "enum_interval_ms": config.enum_interval_ms,
        },
        "cooperative": {
            "idle_ticks": config.cooperative_idle_ticks,
        },
        "attempter": {
            "fallback_control_names": list(config.fallback_control_names),
        },
        "logging": {
            "level": config.log_level,
        },
        "source_types": [
            {
                "type_id": source_type.type_id,
                "display_name": source_type.display_name,
                "reactivation_property": source_type.reactivation_property,
            }
            for source_type in config.extra_source_types
        ],
    }


def write_default_config(path: Path, overwrite: bool = False) -> Path:
    """
    Write a configuration file holding the default values.

    Raises:
        FileExistsError: If ``path`` exists and ``overwrite`` is False
    """
    if path.exists() and not overwrite:
        raise FileExistsError(f"Configuration file already exists: {path}")

    data = config_to_dict(RestarterConfig())
    # an empty array of tables is not representable; leave the key out
    data.pop("source_types")

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        toml.dump(data, f)
    logger.info(f"Wrote default configuration to: {path}")
    return path
