"""
OBS Studio host integration.

Maps the AbstractHost operations onto the ``obspython`` scripting module.
That module only exists inside a running OBS process, so it is imported
when an ObsHost is created rather than at package import time.
"""

import importlib
import logging
from typing import Any, List, Optional

from .base import AbstractHost, TickCallback

logger = logging.getLogger(__name__)


class ObsHost(AbstractHost):
    """Host backed by the OBS Python scripting API."""

    def __init__(self, obs: Any = None):
        """
        Args:
            obs: The ``obspython`` module. Imported on demand when omitted.
        """
        self.obs = obs if obs is not None else importlib.import_module("obspython")

    def enumerate_resources(self) -> List[Any]:
        sources = self.obs.obs_enum_sources()
        # obs_enum_sources hands out one reference per source; callers release
        # them one by one instead of through source_list_release.
        return list(sources) if sources else []

    def get_type_id(self, handle: Any) -> Optional[str]:
        return self.obs.obs_source_get_unversioned_id(handle)

    def get_name(self, handle: Any) -> Optional[str]:
        if handle is None:
            return None
        return self.obs.obs_source_get_name(handle)

    def get_properties(self, handle: Any) -> Optional[Any]:
        return self.obs.obs_source_properties(handle)

    def release_properties(self, properties: Any) -> None:
        self.obs.obs_properties_destroy(properties)

    def get_control(self, properties: Any, name: str) -> Optional[Any]:
        return self.obs.obs_properties_get(properties, name)

    def is_enabled(self, control: Any) -> bool:
        return bool(self.obs.obs_property_enabled(control))

    def trigger(self, control: Any, handle: Any) -> None:
        self.obs.obs_property_button_clicked(control, handle)

    def release_resource(self, handle: Any) -> None:
        self.obs.obs_source_release(handle)

    def register_tick(self, callback: TickCallback, period_ms: int) -> None:
        self.obs.timer_add(callback, period_ms)

    def unregister_tick(self, callback: TickCallback) -> None:
        # timer_remove ignores callbacks that were never added
        self.obs.timer_remove(callback)

    def get_int(self, settings: Any, key: str) -> int:
        return int(self.obs.obs_data_get_int(settings, key))

    def get_bool(self, settings: Any, key: str) -> bool:
        return bool(self.obs.obs_data_get_bool(settings, key))
