"""
Root logger setup for the catalog API.

``create_app`` calls ``setup_logging`` with ``LOG_LEVEL`` and
``LOG_FILE``.  The MongoDB driver loggers are held at WARNING or above
so per-command chatter does not drown request logs.
"""

import logging
from pathlib import Path
from typing import Optional

NOISY_LOGGERS = ("pymongo", "mongomock")


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Attach console (and optional file) handlers to the root logger.

    Does nothing when the root logger already has handlers, so
    building several apps in one process configures logging once.
    Unknown level names fall back to INFO.
    """
    logger = logging.getLogger()
    if logger.handlers:
        # Already configured, e.g. by uvicorn or a previous create_app call.
        return

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(numeric_level)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if logfile:
        log_path = Path(logfile).resolve()
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # The driver logs every command and server selection at DEBUG.
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))
