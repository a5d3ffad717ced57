"""
Timeline Errors
===============

Exception hierarchy shared by the layout core and the viewer.

Configuration and parse errors (unknown granularity names, malformed date
strings, unreadable timeline documents) are raised synchronously to the caller
that supplied the bad value. Geometry degeneracies met during a layout pass are
never raised; they are clamped where they occur.
"""

from typing import Optional


class ErrorSeverity:
    """Error severity levels."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class TimelineError(Exception):
    """Base exception for timeline-related errors."""

    def __init__(self, message: str, details: Optional[str] = None,
                 severity: str = ErrorSeverity.ERROR):
        """
        Initialize timeline error.

        Args:
            message: User-friendly error message
            details: Technical details for logging
            severity: Error severity level
        """
        super().__init__(message)
        self.message = message
        self.details = details or message
        self.severity = severity


class GranularityError(TimelineError):
    """Raised for a granularity name or value outside the ten supported units."""

    def __init__(self, value):
        super().__init__(
            f"Unknown granularity: {value!r}",
            details=(
                f"Granularity {value!r} is not one of millennium, century, decade, "
                "year, month, date, hour, minute, second, millisecond"
            ),
        )
        self.value = value


class DateFormatError(TimelineError):
    """Raised when a date string does not match [-]YYYY-MM-DD[-HH-MM-SS-MS]."""

    def __init__(self, text, reason: Optional[str] = None):
        message = f"Malformed date string: {text!r}"
        details = f"{message}\nExpected format: [-]YYYY-MM-DD[-HH-MM-SS-MS]"
        if reason:
            details += f"\nReason: {reason}"
        super().__init__(message, details)
        self.text = text
        self.reason = reason


class TimelineLoadError(TimelineError):
    """Exception for timeline document loading errors."""

    def __init__(self, message: str, path: Optional[str] = None,
                 original_error: Optional[Exception] = None):
        details = f"{message}\n"
        if path:
            details += f"Document: {path}\n"
        if original_error:
            details += f"Original error: {original_error}\n"
        super().__init__(message, details, ErrorSeverity.ERROR)
        self.path = path
        self.original_error = original_error


class LayoutError(TimelineError):
    """Exception for rendering/layout errors surfaced to the host widget."""
    pass


class ConfigError(TimelineError):
    """Exception for invalid viewer configuration values."""
    pass
