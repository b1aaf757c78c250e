"""
Reactivation of a single monitored source.

Building a property set is the expensive host call the schedulers spread
across ticks. The attempter builds one, looks for an enabled reactivation
button and clicks it. Whether the capture actually comes back is not
observed.
"""

import logging
from typing import Any, Optional, Sequence

from ..models.config import DEFAULT_FALLBACK_CONTROL_NAMES
from ..models.runtime import ResourceEntry
from ..host.base import AbstractHost

logger = logging.getLogger(__name__)


class ReactivationAttempter:
    """
    Triggers the reactivation control of one source per call.

    The type's own reactivation property is tried first. Only when the
    property set does not contain it at all are the fallback names tried,
    in order, stopping at the first enabled one. A present but disabled
    primary control means the source does not need a restart right now.
    """

    def __init__(
        self,
        host: AbstractHost,
        fallback_names: Optional[Sequence[str]] = None,
    ):
        self.host = host
        self.fallback_names = list(
            DEFAULT_FALLBACK_CONTROL_NAMES if fallback_names is None else fallback_names
        )

    def attempt(self, entry: ResourceEntry) -> bool:
        """
        Try to reactivate the source behind ``entry``.

        Args:
            entry: Cached or transient reference to a monitored source.

        Returns:
            True if a reactivation control was triggered.
        """
        handle = entry.handle
        if handle is None:
            return False

        properties = self.host.get_properties(handle)
        if properties is None:
            logger.debug(f"No properties available for {entry.type_spec.display_name}")
            return False

        try:
            return self._trigger_first_enabled(properties, entry)
        finally:
            self.host.release_properties(properties)

    def _trigger_first_enabled(self, properties: Any, entry: ResourceEntry) -> bool:
        type_spec = entry.type_spec
        primary = self.host.get_control(properties, type_spec.reactivation_property)

        if primary is not None:
            if not self.host.is_enabled(primary):
                return False
            self.host.trigger(primary, entry.handle)
            logger.info(f"Restarted {type_spec.display_name}: {self._name_of(entry)}")
            return True

        for control_name in self.fallback_names:
            control = self.host.get_control(properties, control_name)
            if control is None or not self.host.is_enabled(control):
                continue
            self.host.trigger(control, entry.handle)
            logger.info(
                f"Restarted {type_spec.display_name}: {self._name_of(entry)} "
                f"(using property: {control_name})"
            )
            return True

        return False

    def _name_of(self, entry: ResourceEntry) -> str:
        return self.host.get_name(entry.handle) or "<unnamed>"
