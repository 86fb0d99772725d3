"""
Logging setup for the exchange service.

``setup_logging`` is called by ``create_app`` with the configured
``LOG_LEVEL`` and ``LOG_FILE``.  It attaches a console handler and,
when a log file is configured, a file handler to the root logger, so
records from every ``exchange_api`` module (stage changes, deletions,
store loads and write failures) end up in the same place.
"""

import logging
from pathlib import Path
from typing import Optional


FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger unless it already has handlers.

    Parameters
    ----------
    level : str
        Logging level name, case insensitive.  Unknown names fall back
        to ``INFO``.
    logfile : Optional[str]
        Path of a log file.  Missing parent directories are created.
        If omitted or empty, only the console is used.
    """
    root = logging.getLogger()
    if root.handlers:
        # create_app may run several times per process.
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    logging.getLogger(__name__).debug(
        "Logging configured at %s%s",
        logging.getLevelName(root.level),
        f", writing to {logfile}" if logfile else "",
    )
