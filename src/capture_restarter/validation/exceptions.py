"""
Exception types and error handling helpers.

Nothing in the restarter is allowed to take the host down, so most callers
log through these helpers with ``reraise=False`` at the tick boundary. The
configuration path re-raises so that bad settings are reported up front.
"""

import logging
import sys
from enum import Enum
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


_LOG_LEVELS = {
    ErrorSeverity.DEBUG: logging.DEBUG,
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


class ValidationError(Exception):
    """
    Exception raised when validation fails.

    This is the main exception type used by the configuration validators.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to module logger)
    """
    effective_logger = logger or globals()["logger"]
    if isinstance(severity, str):
        severity = ErrorSeverity(severity.lower())

    # INFO and WARNING are logged without a traceback
    effective_logger.log(
        _LOG_LEVELS[severity],
        f"Error in {context}: {error}",
        exc_info=severity not in (ErrorSeverity.INFO, ErrorSeverity.WARNING),
    )

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_host_error(error: Exception, context: str, **kwargs) -> None:
    """
    Log a host failure at the tick boundary without propagating it.

    Every timer callback and lifecycle hook routes host errors through
    here, since an exception escaping into the host would stop its timer
    or abort the script load.
    """
    kwargs.setdefault("reraise", False)
    handle_error(error, f"host {context}", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """Handle CLI-related errors and exit."""
    exit_code = kwargs.pop('exit_code', 1)
    severity = kwargs.pop('severity', ErrorSeverity.ERROR)
    handle_error(error, f"CLI {context}", severity=severity, reraise=False, **kwargs)
    sys.exit(exit_code)
