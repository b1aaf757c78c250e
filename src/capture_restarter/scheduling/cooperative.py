"""
Cooperative scheduling with a resumable check task.

Instead of a cursor over a long-lived cache, a CooperativeTask walks one
fresh enumeration per pass and suspends after every monitored source. The
task is an explicit state machine advanced by one ``step`` per timer tick:

    SCANNING  -- pass exhausted -->  IDLING (idle_ticks)
    IDLING    -- ticks used up  -->  SCANNING (new enumeration)

A failing step discards the task; the scheduler builds a new one on the
next tick.
"""

import logging
import time
from enum import Enum
from typing import List, Optional

from ..host.base import AbstractHost
from ..models.runtime import ResourceEntry, SchedulerContext, SchedulerStats
from ..validation import handle_host_error
from .attempter import ReactivationAttempter
from .cache import classify_handles

logger = logging.getLogger(__name__)


class TaskPhase(Enum):
    SCANNING = "scanning"
    IDLING = "idling"


class CooperativeTask:
    """
    One resumable check loop.

    Handles enumerated for the current pass belong to the task until the
    pass ends or the task is closed.
    """

    def __init__(
        self,
        host: AbstractHost,
        attempter: ReactivationAttempter,
        context: SchedulerContext,
    ):
        self.host = host
        self.attempter = attempter
        self.source_types = context.cache.source_types
        self.idle_ticks = context.config.cooperative_idle_ticks
        self.stats: SchedulerStats = context.stats

        self.phase = TaskPhase.SCANNING
        self.pending: Optional[List[ResourceEntry]] = None
        self.position = 0
        self.idle_remaining = 0
        self.closed = False

    def step(self) -> None:
        """Run until the next suspension point."""
        if self.closed:
            raise RuntimeError("Cannot resume a closed cooperative task")

        if self.phase is TaskPhase.IDLING:
            if self.idle_remaining > 0:
                self.idle_remaining -= 1
                return
            self.phase = TaskPhase.SCANNING

        if self.pending is None:
            self._begin_pass()

        if self.position < len(self.pending):
            entry = self.pending[self.position]
            self.position += 1
            self._check(entry)
            return

        self._end_pass()
        self.phase = TaskPhase.IDLING
        self.idle_remaining = self.idle_ticks
        # the step that finishes a pass also spends the first idle tick
        if self.idle_remaining > 0:
            self.idle_remaining -= 1

    def close(self) -> None:
        """Release any handles still held for the current pass."""
        self.closed = True
        pending, self.pending = self.pending, None
        if pending:
            self.host.release_all([entry.handle for entry in pending])

    def _begin_pass(self) -> None:
        entries = classify_handles(self.host, self.host.enumerate_resources(), self.source_types)
        self.pending = entries
        self.position = 0
        logger.debug(f"Cooperative pass started over {len(entries)} sources")

    def _end_pass(self) -> None:
        pending, self.pending = self.pending, None
        self.host.release_all([entry.handle for entry in pending])
        self.stats.cooperative_passes += 1

    def _check(self, entry: ResourceEntry) -> None:
        if self.host.get_name(entry.handle) is None:
            self.stats.stale_entries += 1
            return
        self.stats.entries_checked += 1
        if self.attempter.attempt(entry):
            self.stats.restarts_triggered += 1


class CooperativeScheduler:
    """Drives a single CooperativeTask, recreating it after failures."""

    def __init__(
        self,
        context: SchedulerContext,
        host: AbstractHost,
        attempter: ReactivationAttempter,
    ):
        self.context = context
        self.host = host
        self.attempter = attempter
        self.task: Optional[CooperativeTask] = None

    def tick(self) -> None:
        """Timer callback: resume the task once. Never raises into the host."""
        started = time.perf_counter()
        try:
            if self.task is None or self.task.closed:
                self.task = CooperativeTask(self.host, self.attempter, self.context)
            self.task.step()
        except Exception as e:
            self.context.stats.cooperative_failures += 1
            handle_host_error(e, "cooperative check task", logger=logger)
            self.reset()
        finally:
            self.context.stats.record_tick_duration((time.perf_counter() - started) * 1000)

    def reset(self) -> None:
        """Discard the current task and give back its handles."""
        task, self.task = self.task, None
        if task is None:
            return
        try:
            task.close()
        except Exception as e:
            logger.warning(f"Error releasing cooperative task handles: {e}")
