"""
Application logging setup.
"""

import logging
import logging.handlers
from pathlib import Path

from core.config import LOG_DIR, LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(app_name: str = "timecard-checker", log_dir: str | None = None) -> None:
    """
    Configure root logging: console always, rotating files when a log dir is set.

    Args:
        app_name: Name to use for log files
        log_dir: Directory for log files (defaults to LOG_DIR; empty disables files)
    """
    level = logging.getLevelName(LOG_LEVEL)
    if not isinstance(level, int):
        level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    # Avoid stacking handlers when called more than once (tests, reloads)
    for handler in list(root_logger.handlers):
        if getattr(handler, "_timecard_handler", False):
            root_logger.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers: list[logging.Handler] = [console_handler]

    directory = LOG_DIR if log_dir is None else log_dir
    if directory:
        path = Path(directory)
        path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=path / f"{app_name}.log",
            maxBytes=10_000_000,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

        error_handler = logging.handlers.RotatingFileHandler(
            filename=path / f"{app_name}-error.log",
            maxBytes=10_000_000,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        handlers.append(error_handler)

    for handler in handlers:
        handler._timecard_handler = True
        root_logger.addHandler(handler)
