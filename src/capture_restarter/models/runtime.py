"""
Runtime data models.

This module contains the state shared by the schedulers during one load of
the restarter: cache entries, the cursor, counters and the context object
that ties them together.
"""

from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional

from .config import MonitoredTypeSpec, RestarterConfig

if TYPE_CHECKING:
    from ..scheduling.cache import ResourceCache


@dataclass(eq=False)
class ResourceEntry:
    """
    A cached reference to one monitored host resource.

    Entries compare by identity: two entries wrapping the same handle are
    still two separately owned references.
    """

    # Opaque host handle. Owned by the ResourceCache and released exactly once.
    handle: Any
    # Shared descriptor from the classifier table.
    type_spec: MonitoredTypeSpec
    # Timestamp (ms) of the last liveness check, 0 if never checked.
    last_checked_at: float = 0
    # Set when the handle no longer resolves to a live resource.
    invalid: bool = False


@dataclass
class SchedulerCursor:
    """Position of the incremental scheduler within the cache."""

    index: int = 0
    last_enum_at: float = 0

    def reset(self, now: float) -> None:
        """Move back to the first entry after a rebuild at ``now``."""
        self.index = 0
        self.last_enum_at = now


@dataclass
class SchedulerStats:
    """Counters reported in logs and by the CLI."""

    ticks: int = 0
    entries_checked: int = 0
    restarts_triggered: int = 0
    cache_rebuilds: int = 0
    compactions: int = 0
    stale_entries: int = 0
    cooperative_passes: int = 0
    cooperative_failures: int = 0
    slowest_tick_ms: float = 0.0

    def record_tick_duration(self, duration_ms: float) -> None:
        self.ticks += 1
        if duration_ms > self.slowest_tick_ms:
            self.slowest_tick_ms = duration_ms

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SchedulerContext:
    """
    Everything the schedulers mutate, owned by the restarter lifecycle.

    Created at load and dropped at unload. Only timer ticks read or modify
    it, so no locking is needed.
    """

    config: RestarterConfig
    cache: "ResourceCache"
    cursor: SchedulerCursor = field(default_factory=SchedulerCursor)
    stats: SchedulerStats = field(default_factory=SchedulerStats)
    # Name of the scheduler currently registered with the host timer.
    active_mode: Optional[str] = None
