"""
Source classification utilities for the capture_restarter package.

This module decides which host sources are monitored and how they are
reactivated.
"""

from .classifier import (
    BUILTIN_SOURCE_TYPES,
    build_source_types,
    get_source_type,
)

__all__ = [
    "BUILTIN_SOURCE_TYPES",
    "build_source_types",
    "get_source_type",
]
