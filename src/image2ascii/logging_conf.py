"""
Logging setup for the command line tool.
Console output always, optional rotating log file.
"""

import logging
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    level_value = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(level=level_value, format=LOG_FORMAT)

    if log_file:
        handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.setLevel(level_value)
        logging.getLogger().addHandler(handler)
