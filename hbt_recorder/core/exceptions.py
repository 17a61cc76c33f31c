"""Exception hierarchy for the backtest recorder.

This module defines the custom exceptions raised by the recorder.
Recoverable errors inherit from RecorderError. ConsistencyViolation is an
AssertionError instead: it signals misuse by the caller and is never
caught by an ``except RecorderError`` clause.
"""

from typing import Any, Dict


def _format_context(message: str, context: Dict[str, Any]) -> str:
    if context:
        ctx = ', '.join(f'{k}={v}' for k, v in context.items())
        return f"{message} [{ctx}]"
    return message


class RecorderError(Exception):
    """Base exception for all recoverable recorder errors.

    All custom exceptions in the recorder (except ConsistencyViolation)
    inherit from this class.
    """

    def __init__(self, message: str, **context: Any):
        """Initialize the exception with a message and optional context.

        Args:
            message: Error message describing what went wrong
            **context: Additional context information for logging and debugging
        """
        super().__init__(message)
        self.context: Dict[str, Any] = context

    def __str__(self) -> str:
        """Return string representation including context."""
        return _format_context(super().__str__(), self.context)


# ============================================================================
# Configuration Exceptions
# ============================================================================

class ConfigurationError(RecorderError):
    """Raised when the recorder cannot be set up.

    This exception is raised when the engine reports no instruments (and
    empty universes are not allowed), when the instrument count cannot be
    determined, or when configuration values fail validation.
    """

    def __init__(self, message: str, **context: Any):
        super().__init__(message, **context)


# ============================================================================
# Capture Exceptions
# ============================================================================

class RecordRangeError(RecorderError):
    """Raised when an engine value does not fit its record column.

    This exception is raised at capture when an integer field (timestamp
    or trade count) lies outside the range of its fixed width (int64 or
    int32). Nothing is appended for the step.
    """

    def __init__(self, message: str, **context: Any):
        super().__init__(message, **context)


# ============================================================================
# Export Exceptions
# ============================================================================

class ExportIOError(RecorderError):
    """Raised when writing a record file fails.

    The failing file is available as ``path``. The originating OSError is
    chained as ``__cause__``.
    """

    def __init__(self, message: str, path: Any = None, **context: Any):
        super().__init__(message, path=path, **context)
        self.path = path


# ============================================================================
# Internal Consistency
# ============================================================================

class ConsistencyViolation(AssertionError):
    """Raised when an internal invariant of the recorder is broken.

    Typically the engine reports a different instrument count during
    capture than it did at construction. This is a programming error in
    the driving code, not a condition to recover from.
    """

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.context: Dict[str, Any] = context

    def __str__(self) -> str:
        return _format_context(super().__str__(), self.context)
