"""
Lifecycle hooks exposed to the host.

CaptureRestarter owns the scheduler context for one load of the script:
it is created in ``on_load`` and torn down in ``on_unload``. The host
calls these hooks from its own thread, never concurrently with a tick.
"""

import logging
from typing import Any, Optional

from .classification import build_source_types
from .config import config_from_host
from .host.base import AbstractHost
from .models.config import RestarterConfig
from .models.runtime import SchedulerContext
from .scheduling import (
    CooperativeScheduler,
    IncrementalScheduler,
    ModeController,
    ReactivationAttempter,
    ResourceCache,
)
from .scheduling.incremental import Clock
from .validation import ErrorSeverity, ValidationError, handle_config_error, handle_host_error

logger = logging.getLogger(__name__)


class CaptureRestarter:
    """
    Wires the cache, both schedulers and the mode controller to a host.
    """

    def __init__(
        self,
        host: AbstractHost,
        base_config: Optional[RestarterConfig] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Args:
            host: Host integration to drive.
            base_config: Values not covered by the host settings store.
            clock: Millisecond clock for the incremental scheduler.
        """
        self.host = host
        self.base_config = base_config or RestarterConfig()
        self.clock = clock
        self.context: Optional[SchedulerContext] = None
        self.attempter: Optional[ReactivationAttempter] = None
        self.incremental: Optional[IncrementalScheduler] = None
        self.cooperative: Optional[CooperativeScheduler] = None
        self.controller: Optional[ModeController] = None

    @property
    def is_loaded(self) -> bool:
        return self.context is not None

    def on_load(self, settings: Any) -> None:
        """Populate the cache and install the configured scheduler."""
        if self.is_loaded:
            logger.warning("Capture Restarter already loaded, reloading")
            self.on_unload()

        config = self._read_config(settings)
        cache = ResourceCache(self.host, build_source_types(config.extra_source_types))
        self.context = SchedulerContext(config=config, cache=cache)
        self.attempter = ReactivationAttempter(self.host, config.fallback_control_names)
        self.incremental = IncrementalScheduler(self.context, self.host, self.attempter, self.clock)
        self.cooperative = CooperativeScheduler(self.context, self.host, self.attempter)
        self.controller = ModeController(self.context, self.host, self.incremental, self.cooperative)

        try:
            self.incremental.rebuild_cache()
        except Exception as e:
            handle_host_error(e, "initial source enumeration", logger=logger)
        self.controller.apply_config(config)
        logger.info(f"Capture Restarter: Started in {config.mode_name} mode")

    def on_config_changed(self, settings: Any) -> None:
        """Reinstall the scheduler according to updated settings."""
        if not self.is_loaded:
            logger.warning("Settings changed before load; loading now")
            self.on_load(settings)
            return

        config = self._read_config(settings)
        self.context.cache.source_types = build_source_types(config.extra_source_types)
        self.attempter.fallback_names = list(config.fallback_control_names)
        self.controller.apply_config(config)

    def on_unload(self) -> None:
        """Stop both schedulers and release every handle still held."""
        if not self.is_loaded:
            return

        self.controller.shutdown()
        self.cooperative.reset()
        released = self.context.cache.release_all()
        stats = self.context.stats
        logger.info(
            f"Capture Restarter: Stopped monitoring and released {released} sources "
            f"({stats.restarts_triggered} restarts over {stats.ticks} ticks)"
        )

        self.context = None
        self.attempter = None
        self.incremental = None
        self.cooperative = None
        self.controller = None

    def _read_config(self, settings: Any) -> RestarterConfig:
        try:
            return config_from_host(self.host, settings, base=self.base_config)
        except ValidationError as e:
            handle_config_error(
                error=e,
                context="reading host settings",
                severity=ErrorSeverity.WARNING,
                reraise=False,
                logger=logger,
            )
            logger.warning("Falling back to the base configuration")
            return self.base_config
