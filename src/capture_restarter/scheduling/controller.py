"""
Switching between the incremental and cooperative schedulers.
"""

import logging
from typing import Dict, Optional

from ..host.base import AbstractHost, TickCallback
from ..models.config import RestarterConfig
from ..models.runtime import SchedulerContext
from .cooperative import CooperativeScheduler
from .incremental import IncrementalScheduler

logger = logging.getLogger(__name__)

INCREMENTAL_MODE = "incremental"
COOPERATIVE_MODE = "cooperative"


class ModeController:
    """
    Keeps exactly one scheduler registered with the host timer.

    The tick callbacks are bound once here. Hosts match timer callbacks by
    object, so registering and removing must use the very same callables.
    """

    def __init__(
        self,
        context: SchedulerContext,
        host: AbstractHost,
        incremental: IncrementalScheduler,
        cooperative: CooperativeScheduler,
    ):
        self.context = context
        self.host = host
        self.incremental = incremental
        self.cooperative = cooperative
        self.callbacks: Dict[str, TickCallback] = {
            INCREMENTAL_MODE: incremental.tick,
            COOPERATIVE_MODE: cooperative.tick,
        }

    @property
    def active_mode(self) -> Optional[str]:
        return self.context.active_mode

    def apply_config(self, config: RestarterConfig) -> None:
        """
        Reinstall the scheduler selected by ``config``.

        Both callbacks are removed first whatever the previous state was,
        then the selected one is registered at ``check_interval_ms``.
        """
        self.shutdown()
        self.context.config = config

        mode = COOPERATIVE_MODE if config.use_cooperative_mode else INCREMENTAL_MODE
        if mode != COOPERATIVE_MODE:
            self.cooperative.reset()

        self.host.register_tick(self.callbacks[mode], config.check_interval_ms)
        self.context.active_mode = mode

        if mode == COOPERATIVE_MODE:
            logger.info(
                f"Capture Restarter: Using cooperative mode with {config.check_interval_ms}ms interval"
            )
        else:
            logger.info(
                f"Capture Restarter: Using incremental mode - checking {config.sources_per_check} "
                f"source(s) every {config.check_interval_ms}ms"
            )

    def shutdown(self) -> None:
        """Unregister both schedulers. Safe to call repeatedly."""
        for callback in self.callbacks.values():
            self.host.unregister_tick(callback)
        self.context.active_mode = None
