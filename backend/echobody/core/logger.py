# echobody/core/logger.py
# Console + daily rotating file logging, "[ECHOBODY][<service>]" labelled lines

from __future__ import annotations
import logging
import os
from logging.handlers import TimedRotatingFileHandler

from echobody.core.config import Settings

LOG_FILE_NAME = "ECHO_BODY.log"
KEEP_DAYS = 28

_HANDLER_TAG = "_echobody"


def _formatter(service_name: str) -> logging.Formatter:
    return logging.Formatter(
        f"%(asctime)s [ECHOBODY][{service_name}] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def setup_logging(settings: Settings) -> logging.Logger:
    """
    Install echobody handlers on the root logger.
    Calling it again (a second create_app in tests, reload) replaces the old handlers
    instead of stacking duplicates.
    """
    root = logging.getLogger()
    root.setLevel(settings.LOG_LEVEL.upper())

    for h in list(root.handlers):
        if getattr(h, _HANDLER_TAG, False):
            root.removeHandler(h)
            h.close()

    fmt = _formatter(settings.SERVICE_NAME)

    console = logging.StreamHandler()
    console.setFormatter(fmt)
    setattr(console, _HANDLER_TAG, True)
    root.addHandler(console)

    if settings.LOG_DIR:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        rotating = TimedRotatingFileHandler(
            os.path.join(settings.LOG_DIR, LOG_FILE_NAME),
            when="midnight",
            backupCount=KEEP_DAYS,
            encoding="utf-8",
        )
        rotating.setFormatter(fmt)
        setattr(rotating, _HANDLER_TAG, True)
        root.addHandler(rotating)

    log = logging.getLogger("echobody")
    log.info("Logger initialized successfully")
    return log
