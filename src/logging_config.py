import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional

LOG_FILE_NAME = "sport_matcher.log"
LOG_LEVEL_ENV = "SPORT_MATCHER_LOG_LEVEL"

# Names tagging the handlers installed here, so other handlers on the root
# logger (e.g. a test runner's capture handler) never count as "configured".
FILE_HANDLER_NAME = "sport_matcher.file"
CONSOLE_HANDLER_NAME = "sport_matcher.console"


def _is_configured(root_logger: logging.Logger) -> bool:
    names = {handler.get_name() for handler in root_logger.handlers}
    return FILE_HANDLER_NAME in names


def setup_logging(log_level: Optional[str] = None, log_dir: Optional[Path] = None) -> None:
    """Configure logging for the sport matcher.

    The level comes from *log_level*, else the ``SPORT_MATCHER_LOG_LEVEL``
    environment variable, else INFO. Calling this again is a no-op.
    """
    root_logger = logging.getLogger()
    if _is_configured(root_logger):
        return

    log_level = (log_level or os.environ.get(LOG_LEVEL_ENV) or "INFO").upper()
    level = getattr(logging, log_level, logging.INFO)

    log_dir = log_dir or Path(__file__).parent.parent / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    root_logger.setLevel(level)

    # File handler with rotation (5MB max, keep 3 backups)
    file_handler = logging.handlers.RotatingFileHandler(
        log_dir / LOG_FILE_NAME, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    file_handler.set_name(FILE_HANDLER_NAME)
    file_handler.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler()
    console_handler.set_name(CONSOLE_HANDLER_NAME)
    console_handler.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(formatter)
    console_handler.setFormatter(formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    # Chatty third-party loggers stay at WARNING unless debugging
    if level > logging.DEBUG:
        for name in ("urllib3", "requests"):
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info("Logging initialized (level=%s, dir=%s)", log_level, log_dir)
