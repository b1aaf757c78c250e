"""
Defines the abstract interface to the host application.

The restarter never talks to the host directly; everything goes through an
AbstractHost implementation:

- ObsHost: the real OBS Studio scripting API (``obspython``).
- SimulatedHost: an in-memory host for the CLI simulator and the tests.

Handles, property sets and controls are opaque to the restarter. The only
contract is the ownership rule: every handle returned by
``enumerate_resources`` carries a reference that must be given back with
``release_resource`` exactly once.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional

logger = logging.getLogger(__name__)

TickCallback = Callable[[], None]


class AbstractHost(ABC):
    """
    Abstract base class for host integrations.

    Subclasses map each operation onto the host's own API. All calls are
    expected to return promptly since they run inside a timer tick.
    """

    # --- Resource enumeration and introspection ---

    @abstractmethod
    def enumerate_resources(self) -> List[Any]:
        """
        Return a handle for every source currently known to the host.

        Each handle holds a reference owned by the caller, to be released
        with ``release_resource``.
        """

    @abstractmethod
    def get_type_id(self, handle: Any) -> Optional[str]:
        """Return the unversioned type identifier of a source."""

    @abstractmethod
    def get_name(self, handle: Any) -> Optional[str]:
        """Return the source name, or None when the handle is stale."""

    @abstractmethod
    def get_properties(self, handle: Any) -> Optional[Any]:
        """
        Build the source's current dynamic property set.

        The returned object must be handed back to ``release_properties``.
        """

    @abstractmethod
    def release_properties(self, properties: Any) -> None:
        """Destroy a property set obtained from ``get_properties``."""

    @abstractmethod
    def get_control(self, properties: Any, name: str) -> Optional[Any]:
        """Look up a named property (control) in a property set."""

    @abstractmethod
    def is_enabled(self, control: Any) -> bool:
        """Return whether a control can currently be activated."""

    @abstractmethod
    def trigger(self, control: Any, handle: Any) -> None:
        """Activate a button control on behalf of a source."""

    @abstractmethod
    def release_resource(self, handle: Any) -> None:
        """Give back the reference held by a handle."""

    # --- Timer subsystem ---

    @abstractmethod
    def register_tick(self, callback: TickCallback, period_ms: int) -> None:
        """Ask the host to call ``callback`` every ``period_ms`` milliseconds."""

    @abstractmethod
    def unregister_tick(self, callback: TickCallback) -> None:
        """Stop calling ``callback``. Must be safe when it is not registered."""

    # --- Settings store ---

    @abstractmethod
    def get_int(self, settings: Any, key: str) -> int:
        """Read an integer value from a host settings object."""

    @abstractmethod
    def get_bool(self, settings: Any, key: str) -> bool:
        """Read a boolean value from a host settings object."""

    def release_all(self, handles: List[Any]) -> int:
        """
        Release every handle in ``handles``, skipping empty slots.

        Returns:
            The number of release calls made.
        """
        released = 0
        for handle in handles:
            if handle is None:
                continue
            self.release_resource(handle)
            released += 1
        return released
