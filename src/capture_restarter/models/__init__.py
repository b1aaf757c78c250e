"""
Data models and structures for the capture restarter.

Configuration Models:
- Monitored source type descriptors
- Restarter settings (timer period, per-tick quota, scheduling mode)

Runtime Models:
- Cached resource entries and the incremental cursor
- Scheduler counters
- The scheduler context owned by the restarter lifecycle
"""

from .config import (
    DEFAULT_FALLBACK_CONTROL_NAMES,
    MonitoredTypeSpec,
    RestarterConfig,
)

from .runtime import (
    ResourceEntry,
    SchedulerContext,
    SchedulerCursor,
    SchedulerStats,
)

__all__ = [
    # Configuration
    "DEFAULT_FALLBACK_CONTROL_NAMES",
    "MonitoredTypeSpec",
    "RestarterConfig",
    # Runtime
    "ResourceEntry",
    "SchedulerContext",
    "SchedulerCursor",
    "SchedulerStats",
]
