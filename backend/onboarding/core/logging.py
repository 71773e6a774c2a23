"""Logging setup shared by the API process and the maintenance scripts."""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
# Library loggers that are chatty at INFO under the onboarding request load.
QUIET_LOGGERS = ("sqlalchemy.engine", "passlib.registry", "multipart")


def setup_logging(level: str | None = None) -> None:
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    if not logging.getLogger().handlers:
        logging.basicConfig(level=level_name, format=LOG_FORMAT)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
