#!/usr/bin/env python3

from __future__ import annotations

import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from bibmerge.app import merge_biblios_from_file
from bibmerge.config import ConfigError, ConfigurationError, build_run_config, configure_logging
from bibmerge.domain.errors import BatchError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        config = build_run_config(args_list)
    except ConfigError as exc:
        configure_logging()
        log.error("Error: %s", exc)  # noqa: TRY400
        sys.exit(EXIT_USAGE)

    try:
        configure_logging(verbose=config.verbose, log_path=config.log_path, force=True)
    except OSError as exc:
        configure_logging(force=True)
        log.error("Cannot open log file '%s': %s", config.log_path, exc)  # noqa: TRY400
        sys.exit(EXIT_USAGE)

    try:
        stats = merge_biblios_from_file(config)
    except (BatchError, ConfigurationError) as exc:
        log.error("Error: %s", exc)  # noqa: TRY400
        sys.exit(1)
    except Exception:
        log.exception("Fatal error during merge batch")
        sys.exit(1)

    sys.exit(stats.exit_code)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.warning("Interrupted by user (Ctrl+C)")
    sys.exit(EXIT_INTERRUPTED)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
