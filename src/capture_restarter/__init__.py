"""
Capture Restarter: automatic reactivation of frozen capture sources.

The package watches capture sources of a host media application (OBS
Studio) and clicks their reactivation button when one stalls, spreading
the expensive property queries over many short timer ticks.

The package is organized into specialized modules:
- config: Configuration loading from TOML and the host settings store
- models: Data structures and type definitions
- validation: Input validation and error handling
- classification: Monitored source types
- host: Host integrations (OBS, simulated)
- scheduling: Cache, attempter, incremental and cooperative schedulers
- cli: Command-line simulator and configuration tools

Usage:
    Inside OBS:
        from capture_restarter import CaptureRestarter, ObsHost
        restarter = CaptureRestarter(ObsHost())
        restarter.on_load(settings)

    From command line:
        capture-restarter simulate --mode cooperative
"""

from .config import get_config, clear_config_cache, set_config_path
from .lifecycle import CaptureRestarter
from .cli import main_cli

from .host import AbstractHost, ObsHost, SimulatedHost

from .models import (
    MonitoredTypeSpec,
    ResourceEntry,
    RestarterConfig,
    SchedulerContext,
    SchedulerCursor,
    SchedulerStats,
)

from .validation import ValidationError

from .classification import get_source_type

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    "CaptureRestarter",
    "get_config",
    "clear_config_cache",
    "set_config_path",
    "main_cli",
    # Hosts
    "AbstractHost",
    "ObsHost",
    "SimulatedHost",
    # Models
    "MonitoredTypeSpec",
    "ResourceEntry",
    "RestarterConfig",
    "SchedulerContext",
    "SchedulerCursor",
    "SchedulerStats",
    # Validation
    "ValidationError",
    # Classification
    "get_source_type",
]
