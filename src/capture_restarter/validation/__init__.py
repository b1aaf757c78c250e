"""
Validation and error handling for the capture_restarter package.

This module provides input validation and error handling with consistent
error reporting across the application.
"""

from .exceptions import (
    ErrorSeverity,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
    handle_host_error,
)

from .validators import (
    validate_boolean,
    validate_enum_choice,
    validate_name_list,
    validate_non_empty_string,
    validate_positive_integer,
)

__all__ = [
    # Core functionality
    "ErrorSeverity",
    "ValidationError",
    "handle_error",
    "handle_config_error",
    "handle_host_error",
    "handle_cli_error",
    # Validators
    "validate_boolean",
    "validate_enum_choice",
    "validate_name_list",
    "validate_non_empty_string",
    "validate_positive_integer",
]
