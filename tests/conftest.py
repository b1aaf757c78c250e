"""
Pytest configuration and shared fixtures for the capture restarter test suite.

Most tests drive the engine through SimulatedHost, which keeps strict
books on handle and property-set ownership so leaks show up as failed
assertions rather than silent drift.
"""

import shutil
import sys
import tempfile
from pathlib import Path

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def host():
    """An empty simulated host."""
    from capture_restarter.host.simulated import SimulatedHost

    return SimulatedHost()


@pytest.fixture
def populated_host(host):
    """
    Simulated host with five monitored screen captures and two ignored sources.

    Monitored sources are interleaved with non-monitored ones so ordering
    and filtering are both exercised.
    """
    host.add_source("Screen 1", "screen_capture", {"reactivate_capture": False})
    host.add_source("Logo", "image_source")
    host.add_source("Screen 2", "screen_capture", {"reactivate_capture": False})
    host.add_source("Screen 3", "screen_capture", {"reactivate_capture": False})
    host.add_source("Mic", "coreaudio_input_capture")
    host.add_source("Screen 4", "screen_capture", {"reactivate_capture": False})
    host.add_source("Screen 5", "screen_capture", {"reactivate_capture": False})
    return host


@pytest.fixture
def make_flaky():
    """Return a helper that makes the n-th call of a host method raise."""

    def wrap(host, method_name, fail_on_call, error=None):
        real = getattr(host, method_name)
        calls = {"count": 0}

        def flaky(*args, **kwargs):
            calls["count"] += 1
            if calls["count"] == fail_on_call:
                raise error or RuntimeError(f"{method_name} failed")
            return real(*args, **kwargs)

        setattr(host, method_name, flaky)

    return wrap


@pytest.fixture
def restarter_config():
    """Default configuration with a long rebuild interval."""
    from capture_restarter.models.config import RestarterConfig

    return RestarterConfig(enum_interval_ms=60000)


@pytest.fixture
def scheduler_parts(populated_host, restarter_config):
    """Context, attempter and both schedulers wired to the populated host."""
    from capture_restarter.models.runtime import SchedulerContext
    from capture_restarter.scheduling import (
        CooperativeScheduler,
        IncrementalScheduler,
        ReactivationAttempter,
        ResourceCache,
    )

    context = SchedulerContext(config=restarter_config, cache=ResourceCache(populated_host))
    attempter = ReactivationAttempter(populated_host)
    incremental = IncrementalScheduler(context, populated_host, attempter, clock=populated_host.clock)
    cooperative = CooperativeScheduler(context, populated_host, attempter)
    return {
        "host": populated_host,
        "context": context,
        "attempter": attempter,
        "incremental": incremental,
        "cooperative": cooperative,
    }


@pytest.fixture
def sample_config_data():
    """Sample configuration data as parsed from config.toml."""
    return {
        "restarter": {
            "check_interval_ms": 250,
            "sources_per_check": 2,
            "use_cooperative_mode": False,
            "enum_interval_ms": 20000,
        },
        "cooperative": {
            "idle_ticks": 10,
        },
        "attempter": {
            "fallback_control_names": ["restart_capture", "restart"],
        },
        "logging": {
            "level": "DEBUG",
        },
        "source_types": [
            {
                "type_id": "display_capture",
                "display_name": "display capture",
                "reactivation_property": "reactivate_capture",
            },
        ],
    }


@pytest.fixture
def config_file(temp_dir, sample_config_data):
    """Write sample_config_data to a temporary config.toml."""
    import toml

    path = temp_dir / "config.toml"
    with open(path, "w") as f:
        toml.dump(sample_config_data, f)
    return path


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically clear configuration cache after each test."""
    original_config_path = Path(__file__).parent.parent / "conf" / "config.toml"

    yield

    from capture_restarter.config import clear_config_cache, set_config_path

    clear_config_cache()
    set_config_path(original_config_path)
