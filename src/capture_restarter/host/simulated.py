"""
In-memory host used by the ``simulate`` command and the test suite.

The simulated host keeps strict books on references: it knows which
handles and property sets are outstanding, refuses double releases and
records every control activation. A manual clock drives registered timer
callbacks deterministically through ``advance``.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ..models.config import HOST_SETTING_DEFAULTS
from .base import AbstractHost, TickCallback

logger = logging.getLogger(__name__)


@dataclass
class SimulatedSource:
    """A fake capture source and the button controls it exposes."""

    name: str
    type_id: str
    # control name -> enabled
    controls: Dict[str, bool] = field(default_factory=dict)
    alive: bool = True
    # False makes get_properties return None for this source.
    has_properties: bool = True
    restart_count: int = 0


@dataclass(eq=False)
class SimulatedHandle:
    """One reference to a source, as handed out by enumeration."""

    source: SimulatedSource
    serial: int


@dataclass(eq=False)
class SimulatedProperties:
    source: SimulatedSource


@dataclass(eq=False)
class SimulatedControl:
    source: SimulatedSource
    name: str


@dataclass
class _Timer:
    callback: TickCallback
    period_ms: int
    next_fire_ms: float


class SimulatedHost(AbstractHost):
    """AbstractHost implementation backed by plain Python objects."""

    def __init__(self):
        self.sources: List[SimulatedSource] = []
        self.now_ms: float = 0.0
        self.outstanding_handles: List[SimulatedHandle] = []
        self.released_handles: List[SimulatedHandle] = []
        self.open_properties: List[SimulatedProperties] = []
        self.properties_created = 0
        self.triggers: List[tuple] = []
        self.enumerations = 0
        self._timers: List[_Timer] = []
        self._serial = 0
        # Hook for fault injection: called with the handle on every get_properties.
        self.on_get_properties: Optional[Callable[[SimulatedHandle], None]] = None

    # --- Scenario helpers ---

    def add_source(
        self,
        name: str,
        type_id: str,
        controls: Optional[Dict[str, bool]] = None,
        **kwargs: Any,
    ) -> SimulatedSource:
        source = SimulatedSource(name=name, type_id=type_id, controls=dict(controls or {}), **kwargs)
        self.sources.append(source)
        return source

    def find_source(self, name: str) -> SimulatedSource:
        for source in self.sources:
            if source.name == name:
                return source
        raise KeyError(f"No simulated source named '{name}'")

    def remove_source(self, name: str) -> None:
        """Delete a source; existing handles to it become stale."""
        source = self.find_source(name)
        source.alive = False
        self.sources.remove(source)
        logger.debug(f"Simulated source removed: {name}")

    def clock(self) -> float:
        return self.now_ms

    @property
    def release_count(self) -> int:
        return len(self.released_handles)

    # --- AbstractHost ---

    def enumerate_resources(self) -> List[Any]:
        self.enumerations += 1
        handles = []
        for source in self.sources:
            self._serial += 1
            handle = SimulatedHandle(source=source, serial=self._serial)
            self.outstanding_handles.append(handle)
            handles.append(handle)
        return handles

    def get_type_id(self, handle: Any) -> Optional[str]:
        return handle.source.type_id

    def get_name(self, handle: Any) -> Optional[str]:
        if handle is None or not handle.source.alive:
            return None
        return handle.source.name

    def get_properties(self, handle: Any) -> Optional[Any]:
        if self.on_get_properties is not None:
            self.on_get_properties(handle)
        if not handle.source.has_properties:
            return None
        properties = SimulatedProperties(source=handle.source)
        self.open_properties.append(properties)
        self.properties_created += 1
        return properties

    def release_properties(self, properties: Any) -> None:
        if properties not in self.open_properties:
            raise RuntimeError("Property set released twice or never created")
        self.open_properties.remove(properties)

    def get_control(self, properties: Any, name: str) -> Optional[Any]:
        if name not in properties.source.controls:
            return None
        return SimulatedControl(source=properties.source, name=name)

    def is_enabled(self, control: Any) -> bool:
        return control.source.controls.get(control.name, False)

    def trigger(self, control: Any, handle: Any) -> None:
        control.source.restart_count += 1
        self.triggers.append((control.source.name, control.name))

    def release_resource(self, handle: Any) -> None:
        if handle not in self.outstanding_handles:
            raise RuntimeError(f"Handle #{handle.serial} released twice or never handed out")
        self.outstanding_handles.remove(handle)
        self.released_handles.append(handle)

    def register_tick(self, callback: TickCallback, period_ms: int) -> None:
        if self.is_registered(callback):
            raise RuntimeError("Timer callback registered twice")
        self._timers.append(_Timer(callback, period_ms, self.now_ms + period_ms))

    def unregister_tick(self, callback: TickCallback) -> None:
        self._timers = [t for t in self._timers if t.callback != callback]

    def get_int(self, settings: Any, key: str) -> int:
        return int(settings.get(key, HOST_SETTING_DEFAULTS.get(key, 0)))

    def get_bool(self, settings: Any, key: str) -> bool:
        return bool(settings.get(key, HOST_SETTING_DEFAULTS.get(key, False)))

    # --- Timer driving ---

    def is_registered(self, callback: TickCallback) -> bool:
        return any(t.callback == callback for t in self._timers)

    @property
    def registered_callbacks(self) -> List[TickCallback]:
        return [t.callback for t in self._timers]

    def advance(self, duration_ms: float) -> int:
        """
        Move the clock forward, firing due timers in time order.

        Returns:
            The number of callbacks fired.
        """
        end = self.now_ms + duration_ms
        fired = 0
        while True:
            due = [t for t in self._timers if t.next_fire_ms <= end]
            if not due:
                break
            timer = min(due, key=lambda t: t.next_fire_ms)
            self.now_ms = timer.next_fire_ms
            timer.next_fire_ms += timer.period_ms
            timer.callback()
            fired += 1
        self.now_ms = end
        return fired
