"""
Scheduling engine for the capture_restarter package.

This package contains the reactivation attempter, the resource cache, the
two scheduling strategies that share the per-tick work budget, and the
controller that switches between them.
"""

from .attempter import ReactivationAttempter
from .cache import ResourceCache, classify_handles
from .controller import COOPERATIVE_MODE, INCREMENTAL_MODE, ModeController
from .cooperative import CooperativeScheduler, CooperativeTask, TaskPhase
from .incremental import IncrementalScheduler, monotonic_ms

__all__ = [
    "ReactivationAttempter",
    "ResourceCache",
    "classify_handles",
    "ModeController",
    "INCREMENTAL_MODE",
    "COOPERATIVE_MODE",
    "CooperativeScheduler",
    "CooperativeTask",
    "TaskPhase",
    "IncrementalScheduler",
    "monotonic_ms",
]
