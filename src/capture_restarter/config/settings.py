"""
Reading the restarter configuration from the host settings store.

The host settings UI only exposes the timer period, the per-tick quota
and the scheduling mode. Everything else comes from the base
configuration (usually the TOML file, or the defaults).
"""

import dataclasses
import logging
from typing import Any, Optional

from ..host.base import AbstractHost
from ..models.config import (
    SETTING_CHECK_INTERVAL,
    SETTING_SOURCES_PER_CHECK,
    SETTING_USE_COOPERATIVE,
    RestarterConfig,
)
from ..validation import validate_boolean
from .validators import validate_check_interval, validate_sources_per_check

logger = logging.getLogger(__name__)


def config_from_host(
    host: AbstractHost,
    settings: Any,
    base: Optional[RestarterConfig] = None,
) -> RestarterConfig:
    """
    Build a RestarterConfig from host settings on top of ``base``.

    Raises:
        ValidationError: If a stored value is outside its declared range
    """
    base = base or RestarterConfig()

    check_interval_ms = validate_check_interval(
        host.get_int(settings, SETTING_CHECK_INTERVAL), field_name=SETTING_CHECK_INTERVAL
    )
    sources_per_check = validate_sources_per_check(
        host.get_int(settings, SETTING_SOURCES_PER_CHECK), field_name=SETTING_SOURCES_PER_CHECK
    )
    use_cooperative_mode = validate_boolean(
        host.get_bool(settings, SETTING_USE_COOPERATIVE), field_name=SETTING_USE_COOPERATIVE
    )

    return dataclasses.replace(
        base,
        check_interval_ms=check_interval_ms,
        sources_per_check=sources_per_check,
        use_cooperative_mode=use_cooperative_mode,
    )
