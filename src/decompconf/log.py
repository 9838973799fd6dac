"""Logging setup for the decompconf package logger, driven by the run's verboseOut flag."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from decompconf.parameters import Parameters

LOGGER_NAME = "decompconf"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(params: Parameters | None = None, log_file: Path | str | None = None) -> None:
    """
    Configure the package logger for a run.

    DEBUG when params.verbose_output is set, INFO otherwise. The level follows
    every call; the stderr handler and the optional file handler are only
    attached the first time.
    """
    verbose = params is not None and params.verbose_output
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if logger.handlers:
        return
    fmt = logging.Formatter(LOG_FORMAT)
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(fmt)
    logger.addHandler(console)
    if log_file:
        try:
            fh = logging.FileHandler(log_file, encoding="utf-8")
        except OSError:
            logger.warning("Cannot open log file %s; logging to stderr only", log_file)
            return
        fh.setFormatter(fmt)
        logger.addHandler(fh)
