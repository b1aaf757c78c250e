"""
Configuration data models.

This module contains the monitored source type descriptor and the
restarter configuration assembled from TOML files or the host settings
store.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

# Host settings store keys. These names are what the OBS script settings
# persist, so they must not change between releases.
SETTING_CHECK_INTERVAL = "check_interval"
SETTING_SOURCES_PER_CHECK = "sources_per_check"
SETTING_USE_COOPERATIVE = "use_coroutine"

HOST_SETTING_DEFAULTS = {
    SETTING_CHECK_INTERVAL: 500,
    SETTING_SOURCES_PER_CHECK: 1,
    SETTING_USE_COOPERATIVE: False,
}

CHECK_INTERVAL_RANGE = (100, 5000)
SOURCES_PER_CHECK_RANGE = (1, 10)
ENUM_INTERVAL_RANGE = (1000, 600000)
IDLE_TICKS_RANGE = (0, 10000)

DEFAULT_FALLBACK_CONTROL_NAMES = (
    "restart_capture",
    "reactivate_capture",
    "restart",
    "reactivate",
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass(frozen=True)
class MonitoredTypeSpec:
    """
    Describes a source type that the restarter watches.
    """

    # Unversioned host type identifier (e.g. "screen_capture").
    type_id: str
    # Human-readable name used in log messages.
    display_name: str
    # Name of the button property that restarts the capture.
    reactivation_property: str


@dataclass
class RestarterConfig:
    """
    Effective configuration for one load of the restarter.
    """

    # [restarter] - timer settings, also editable from the host settings UI
    check_interval_ms: int = 500
    sources_per_check: int = 1
    use_cooperative_mode: bool = False
    # How often the incremental scheduler rebuilds its cache.
    enum_interval_ms: int = 15000

    # [cooperative] - ticks to wait between two full passes
    cooperative_idle_ticks: int = 30

    # [attempter] - control names tried when the type's own property is absent
    fallback_control_names: List[str] = field(
        default_factory=lambda: list(DEFAULT_FALLBACK_CONTROL_NAMES)
    )

    # [[source_types]] - monitored in addition to the built-in table
    extra_source_types: Tuple[MonitoredTypeSpec, ...] = ()

    # [logging]
    log_level: str = "INFO"

    @property
    def mode_name(self) -> str:
        return "cooperative" if self.use_cooperative_mode else "incremental"
