"""
Command-line interface for the capture_restarter package.
"""

from .main import main_cli

__all__ = [
    "main_cli",
]
