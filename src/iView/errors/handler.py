"""Central reporting of errors that the control loop recovers from."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from ..events.bus import Event, EventBus
from . import ApplicationError, DomainError, IViewError


class ErrorSeverity(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass(kw_only=True)
class ErrorOccurredEvent(Event):
    error: Exception
    severity: ErrorSeverity
    context: dict = field(default_factory=dict)


def classify(error: Exception) -> ErrorSeverity:
    """Default severity of *error*.

    Rejected user operations are warnings, failing files and caches are
    errors, and anything outside the iView hierarchy is critical.
    """
    if isinstance(error, (DomainError, ApplicationError)):
        return ErrorSeverity.WARNING
    if isinstance(error, IViewError):
        return ErrorSeverity.ERROR
    return ErrorSeverity.CRITICAL


class ErrorHandler:
    """Log an error, broadcast it on the bus and optionally surface it to the UI."""

    def __init__(self, logger: logging.Logger, event_bus: EventBus):
        self._logger = logger
        self._events = event_bus
        self._ui_callback: Optional[Callable[[str, ErrorSeverity], None]] = None

    def register_ui_callback(self, callback: Callable[[str, ErrorSeverity], None]) -> None:
        self._ui_callback = callback

    def handle(
        self,
        error: Exception,
        severity: Optional[ErrorSeverity] = None,
        context: Optional[dict] = None,
    ) -> ErrorSeverity:
        severity = severity or classify(error)
        details = dict(context or {})
        path = getattr(error, "path", None)
        if path is not None:
            details.setdefault("path", str(path))

        log_method = getattr(self._logger, severity.value, self._logger.error)
        suffix = f" {details}" if details else ""
        log_method("%s: %s%s", error.__class__.__name__, error, suffix,
                   exc_info=error if severity is ErrorSeverity.CRITICAL else None)

        self._events.publish(ErrorOccurredEvent(error=error, severity=severity, context=details))

        if self._ui_callback and severity in (ErrorSeverity.ERROR, ErrorSeverity.CRITICAL):
            self._ui_callback(str(error), severity)
        return severity
