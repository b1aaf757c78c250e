"""
Host integrations for the capture_restarter package.
"""

from .base import AbstractHost, TickCallback
from .obs import ObsHost
from .simulated import SimulatedHost, SimulatedSource

__all__ = [
    "AbstractHost",
    "TickCallback",
    "ObsHost",
    "SimulatedHost",
    "SimulatedSource",
]
