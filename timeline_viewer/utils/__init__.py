"""
Shared utilities for the timeline viewer: calendar dates and errors.

The Qt error handler lives in ``timeline_viewer.utils.error_handler`` and is
not imported here so the layout core stays usable without a display.
"""

from .calendar_date import CalendarDate
from .errors import (
    ConfigError,
    DateFormatError,
    ErrorSeverity,
    GranularityError,
    LayoutError,
    TimelineError,
    TimelineLoadError
)

__all__ = [
    'CalendarDate',
    'ConfigError',
    'DateFormatError',
    'ErrorSeverity',
    'GranularityError',
    'LayoutError',
    'TimelineError',
    'TimelineLoadError'
]
