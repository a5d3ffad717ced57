"""
Timeline Error Handler
======================

Reports errors raised while the viewer loads documents or redraws: every
error is logged at the level matching its severity, kept in a short history
for the status/info panel, broadcast through ``error_occurred`` and, when the
handler belongs to a widget, shown in a message box.
"""

import logging
import traceback
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from PyQt5.QtCore import QObject, pyqtSignal
from PyQt5.QtWidgets import QMessageBox

from timeline_viewer.utils.errors import ErrorSeverity, TimelineError

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}

_DIALOG_STYLES = {
    ErrorSeverity.INFO: (QMessageBox.Information, "Timeline Viewer"),
    ErrorSeverity.WARNING: (QMessageBox.Warning, "Timeline Warning"),
    ErrorSeverity.ERROR: (QMessageBox.Critical, "Timeline Error"),
    ErrorSeverity.CRITICAL: (QMessageBox.Critical, "Critical Timeline Error"),
}


@dataclass(frozen=True)
class ErrorRecord:
    """One handled error as kept in the history."""
    severity: str
    message: str
    details: str
    context: str = ""
    timestamp: datetime = field(default_factory=datetime.now)


class ErrorHandler(QObject):
    """
    Error reporting shared by the timeline window and canvas.

    Signals:
        error_occurred: Emitted for every handled error (severity, message, details)
    """

    error_occurred = pyqtSignal(str, str, str)

    def __init__(self, parent=None, max_stored_errors: int = 10):
        """
        Args:
            parent: Widget that owns the handler; message boxes are parented to it
            max_stored_errors: How many recent errors the history keeps
        """
        super().__init__(parent)
        self.parent_widget = parent
        self._history = deque(maxlen=max_stored_errors)
        self._error_count = 0

    def handle_error(self, error: Exception, context: str = "",
                     show_dialog: bool = True) -> ErrorRecord:
        """
        Log, record and optionally display an error.

        Timeline errors carry their own message, details and severity. Any
        other exception is reported as an unexpected error with its traceback.

        Args:
            error: The exception being reported
            context: What the viewer was doing, e.g. "loading timeline document"
            show_dialog: Show a message box if the handler has a parent widget

        Returns:
            ErrorRecord: The history entry for this error
        """
        if isinstance(error, TimelineError):
            record = ErrorRecord(error.severity, error.message, error.details, context)
        else:
            summary = f"Unexpected {type(error).__name__}"
            if context:
                summary += f" while {context}"
            trace = "".join(traceback.format_exception(type(error), error, error.__traceback__))
            record = ErrorRecord(ErrorSeverity.ERROR, summary, f"{error}\n{trace}", context)

        prefix = f"[{context}] " if context else ""
        logger.log(_LOG_LEVELS.get(record.severity, logging.ERROR), f"{prefix}{record.details}")

        self._error_count += 1
        self._history.append(record)
        self.error_occurred.emit(record.severity, record.message, record.details)

        if show_dialog and self.parent_widget is not None:
            self._show_error_dialog(record)
        return record

    def _show_error_dialog(self, record: ErrorRecord):
        icon, title = _DIALOG_STYLES.get(record.severity, _DIALOG_STYLES[ErrorSeverity.ERROR])
        box = QMessageBox(icon, title, record.message, QMessageBox.Ok, self.parent_widget)
        if record.details != record.message:
            box.setDetailedText(record.details)
        box.exec_()

    @property
    def last_error(self) -> Optional[ErrorRecord]:
        return self._history[-1] if self._history else None

    def get_error_history(self) -> List[ErrorRecord]:
        """Recent errors, oldest first."""
        return list(self._history)

    def get_error_count(self) -> int:
        """Errors handled since creation or the last clear, including ones dropped from the history."""
        return self._error_count

    def clear_error_history(self):
        self._history.clear()
        self._error_count = 0
