"""
Logging configuration for the application.

``setup_logging`` attaches a console handler to the root logger and,
when ``LOG_FILE`` is set, a file handler writing the same records.
httpx logs every outbound request at INFO with the full URL, which for
the validation service contains members' phone numbers and email
addresses; its logger is capped at WARNING so those never reach the
log.  Handlers installed here carry the ``HANDLER_NAME`` name; once
they are present, later calls (one per ``create_app``) change nothing.
Handlers installed by other code, such as a test runner's capture
handler, do not count.
"""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
HANDLER_NAME = "library_api"

# Third-party loggers whose INFO output would leak request details.
QUIET_LOGGERS = ("httpx", "httpcore")


def installed_handlers(logger: Optional[logging.Logger] = None) -> List[logging.Handler]:
    """Return the handlers ``setup_logging`` attached to ``logger`` (root by default)."""
    logger = logger or logging.getLogger()
    return [handler for handler in logger.handlers if handler.get_name() == HANDLER_NAME]


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path of a file receiving a copy of every record, taken from the
        ``LOG_FILE`` setting.  Parent directories are created.
    """
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root = logging.getLogger()
    if installed_handlers(root):
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        log_path = Path(logfile).expanduser().resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(formatter)
        root.addHandler(handler)
