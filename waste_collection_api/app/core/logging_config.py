"""
Logging configuration for the Waste Collection API.

``setup_logging`` attaches the service's own console handler (and,
when ``LOG_FILE`` is set, a file handler) to the root logger.  The
handlers carry fixed names so repeated calls, e.g. one per
``create_app`` in the test suite, replace them instead of stacking
duplicates, while handlers installed by other code are left alone.

In debug mode the level drops to ``DEBUG`` and each record also shows
the module and line that emitted it.  Uvicorn's loggers are routed
through the same handlers so server and application messages share
one format and one file.
"""

import logging
from typing import Optional

from .config import resolve_project_path

CONSOLE_HANDLER = "waste_collection.console"
FILE_HANDLER = "waste_collection.file"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEBUG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(module)s:%(lineno)d): %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def setup_logging(level: str = "INFO", logfile: Optional[str] = None, debug: bool = False) -> None:
    """Configure the root logger for the service.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"WARNING"``).  Case insensitive;
        unknown names fall back to ``INFO``.  Ignored when ``debug``
        is set.
    logfile : Optional[str]
        File receiving a copy of every record.  Relative paths are
        resolved against the project root, not the working directory.
    debug : bool
        Log at ``DEBUG`` with the emitting module and line number.
    """
    numeric_level = logging.DEBUG if debug else getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(fmt=DEBUG_FORMAT if debug else LOG_FORMAT, datefmt=DATE_FORMAT)

    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() in (CONSOLE_HANDLER, FILE_HANDLER):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(numeric_level)

    console_handler = logging.StreamHandler()
    console_handler.set_name(CONSOLE_HANDLER)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        log_path = resolve_project_path(logfile)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.set_name(FILE_HANDLER)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    for name in UVICORN_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True

    logging.getLogger(__name__).debug("Logging configured at %s", logging.getLevelName(numeric_level))
