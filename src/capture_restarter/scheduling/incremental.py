"""
Incremental scheduling over the resource cache.

Each timer tick does one of three things:

1. Rebuild the cache when ``enum_interval_ms`` has elapsed since the last
   rebuild. Nothing else happens in that tick.
2. Nothing, when the cache is empty.
3. Check up to ``sources_per_check`` entries starting at the cursor. When
   the cursor runs past the last entry a pass is complete: the cursor goes
   back to the start, invalid entries are compacted away and the tick ends.

A tick therefore touches at most ``min(sources_per_check, len(cache))``
entries, and ``ceil(N / sources_per_check)`` ticks complete one pass.
"""

import logging
import time
from typing import Callable, Optional

from ..host.base import AbstractHost
from ..models.runtime import ResourceEntry, SchedulerContext
from ..validation import handle_host_error
from .attempter import ReactivationAttempter

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def monotonic_ms() -> float:
    return time.monotonic() * 1000


class IncrementalScheduler:
    """
    Cursor-based scheduler that spreads a full check pass over many ticks.
    """

    def __init__(
        self,
        context: SchedulerContext,
        host: AbstractHost,
        attempter: ReactivationAttempter,
        clock: Optional[Clock] = None,
    ):
        self.context = context
        self.host = host
        self.attempter = attempter
        self.clock = clock or monotonic_ms

    def tick(self) -> None:
        """Timer callback. Never raises into the host."""
        started = time.perf_counter()
        try:
            self.run_once()
        except Exception as e:
            handle_host_error(e, "incremental check tick", logger=logger)
        finally:
            self.context.stats.record_tick_duration((time.perf_counter() - started) * 1000)

    def run_once(self) -> int:
        """
        Perform the work of one tick.

        Returns:
            Number of cache entries checked (0 on rebuild ticks).
        """
        context = self.context
        cache = context.cache
        cursor = context.cursor
        now = self.clock()

        if now - cursor.last_enum_at > context.config.enum_interval_ms:
            self.rebuild_cache(now)
            return 0

        if len(cache) == 0:
            return 0

        # compaction can shrink the cache under a cursor left mid-pass
        if cursor.index >= len(cache):
            cursor.index = 0

        checked = 0
        while checked < context.config.sources_per_check:
            self._check_entry(cache[cursor.index], now)
            checked += 1
            cursor.index += 1
            if cursor.index >= len(cache):
                cursor.index = 0
                self.compact()
                break

        context.stats.entries_checked += checked
        return checked

    def rebuild_cache(self, now: Optional[float] = None) -> int:
        """Rebuild the cache and move the cursor back to the start."""
        if now is None:
            now = self.clock()
        try:
            count = self.context.cache.rebuild(now)
        except Exception:
            # retry on the next tick instead of waiting out a full interval
            self.context.cursor.last_enum_at = float("-inf")
            raise
        self.context.cursor.reset(now)
        self.context.stats.cache_rebuilds += 1
        return count

    def compact(self) -> int:
        removed = self.context.cache.compact()
        self.context.stats.compactions += 1
        return removed

    def _check_entry(self, entry: ResourceEntry, now: float) -> None:
        if entry.handle is None or self.host.get_name(entry.handle) is None:
            if not entry.invalid:
                entry.invalid = True
                self.context.stats.stale_entries += 1
                logger.debug(f"Stale {entry.type_spec.display_name} marked for removal")
            return

        try:
            if self.attempter.attempt(entry):
                self.context.stats.restarts_triggered += 1
        except Exception as e:
            handle_host_error(e, f"reactivating {entry.type_spec.display_name}", logger=logger)
        entry.last_checked_at = now
