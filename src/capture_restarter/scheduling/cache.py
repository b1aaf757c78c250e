"""
Cache of monitored source references.

The cache is the only place that keeps host handles alive between ticks.
It is rebuilt wholesale from a fresh enumeration rather than merged, so a
handle never outlives the rebuild that replaced it.
"""

import logging
from typing import Any, Iterator, List, Optional, Sequence

from ..classification import get_source_type
from ..host.base import AbstractHost
from ..models.config import MonitoredTypeSpec
from ..models.runtime import ResourceEntry

logger = logging.getLogger(__name__)


def classify_handles(
    host: AbstractHost,
    handles: List[Any],
    source_types: Optional[Sequence[MonitoredTypeSpec]] = None,
) -> List[ResourceEntry]:
    """
    Wrap the monitored handles of one enumeration in ResourceEntry objects.

    Handles of sources that are not monitored are released right away. If
    the host fails partway, every handle of the enumeration that has not
    been released yet is released before the error propagates.

    Args:
        host: Host that handed out ``handles``.
        handles: Result of ``host.enumerate_resources()``.
        source_types: Classifier table. Defaults to the built-in types.

    Returns:
        Entries for the monitored sources, in enumeration order.
    """
    entries: List[ResourceEntry] = []
    visited = 0
    try:
        for handle in handles:
            type_spec = get_source_type(host.get_type_id(handle), source_types)
            visited += 1
            if type_spec is None:
                host.release_resource(handle)
            else:
                entries.append(ResourceEntry(handle=handle, type_spec=type_spec))
    except Exception:
        host.release_all([entry.handle for entry in entries] + list(handles[visited:]))
        raise
    return entries


class ResourceCache:
    """
    Ordered list of ResourceEntry objects for monitored sources.

    Every handle stored here is released exactly once. Stale entries give
    theirs back in ``compact``; the rest go in the next ``rebuild`` or in
    ``release_all`` at shutdown.
    """

    def __init__(
        self,
        host: AbstractHost,
        source_types: Optional[Sequence[MonitoredTypeSpec]] = None,
    ):
        self.host = host
        self.source_types = source_types
        self._entries: List[ResourceEntry] = []
        self.last_rebuild_at: float = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> ResourceEntry:
        return self._entries[index]

    def __iter__(self) -> Iterator[ResourceEntry]:
        return iter(self._entries)

    @property
    def entries(self) -> List[ResourceEntry]:
        """Snapshot of the current entries."""
        return list(self._entries)

    def rebuild(self, now: float) -> int:
        """
        Replace the cache with the monitored sources currently in the host.

        All previously held handles are released before enumerating again.
        Handles of sources that are not monitored are released right away.

        Args:
            now: Timestamp (ms) recorded as the rebuild time.

        Returns:
            Number of entries in the rebuilt cache.
        """
        self.release_all()
        entries = classify_handles(self.host, self.host.enumerate_resources(), self.source_types)

        self._entries = entries
        self.last_rebuild_at = now
        logger.info(f"Cache updated: monitoring {len(entries)} sources")
        return len(entries)

    def compact(self) -> int:
        """
        Drop entries marked invalid, keeping the order of the rest.

        The handles of dropped entries are released here.

        Returns:
            Number of entries removed.
        """
        kept: List[ResourceEntry] = []
        removed: List[Any] = []
        for entry in self._entries:
            if entry.invalid:
                removed.append(entry.handle)
            else:
                kept.append(entry)

        if removed:
            self._entries = kept
            self.host.release_all(removed)
            logger.debug(f"Compacted cache: removed {len(removed)} stale sources, {len(kept)} remain")
        return len(removed)

    def release_all(self) -> int:
        """Release every held handle and empty the cache."""
        entries, self._entries = self._entries, []
        return self.host.release_all([entry.handle for entry in entries])
