"""Logging setup for the batch merger."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_NOISY_LOGGERS = ("httpx", "httpcore", "httpx_retries")


def configure_logging(
    *,
    verbose: bool = False,
    log_path: Path | None = None,
    force: bool = False,
) -> None:
    """Initialise the root logger for a batch run.

    The console always shows warnings and errors; informational and debug lines
    only appear with ``verbose``. When ``log_path`` is given, the file is
    truncated and receives every INFO line as well (DEBUG when ``verbose``), so
    a quiet console run still leaves a full narrative behind. Warnings are
    labelled ``WARN``. Pass ``force=True`` to reconfigure during tests.
    """

    logging.addLevelName(logging.WARNING, "WARN")
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console.setFormatter(formatter)
    handlers: list[logging.Handler] = [console]

    if log_path is not None:
        file_handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=force)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
