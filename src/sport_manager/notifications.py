"""User-facing notifications for catalog and ranking outcomes."""

import logging
from enum import Enum
from typing import Protocol

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


_LOG_LEVELS = {
    Severity.SUCCESS: logging.INFO,
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


class Notifier(Protocol):
    """Sink for dismissible messages shown to the user."""

    def notify(self, message: str, severity: Severity) -> None: ...


class LoggingNotifier:
    """Notifier that writes every message to the log."""

    def notify(self, message: str, severity: Severity) -> None:
        logger.log(_LOG_LEVELS.get(severity, logging.INFO), "[%s] %s", severity.value, message)
