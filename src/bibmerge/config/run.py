"""Command-line options resolved into an immutable run configuration."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from bibmerge.domain.framework import FrameworkPolicy

from .errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Sequence

DEFAULT_DELIMITER = ","

_DELIMITER_ALIASES = {"\\t": "\t", "tab": "\t"}


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Everything a batch run needs to know, fixed at startup."""

    input_path: Path
    commit: bool = False
    verbose: bool = False
    log_path: Path | None = None
    delimiter: str = DEFAULT_DELIMITER
    framework_policy: FrameworkPolicy = field(default_factory=FrameworkPolicy.use_master)
    user_id: int | None = None

    @property
    def mode_label(self) -> str:
        if self.commit:
            return "COMMIT (changes will be saved)"
        return "DRY-RUN (no changes will be made)"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bibmerge",
        description=(
            "Batch merge duplicate bibliographic records in Koha. Each input line "
            "lists a master biblionumber followed by the children to merge into it."
        ),
        epilog="Default is dry-run mode. Use --commit to actually perform the merge.",
    )
    parser.add_argument("-f", "--file", help="Input file with merge groups (required)")
    parser.add_argument(
        "-c",
        "--commit",
        action="store_true",
        help="Actually perform the merge (default: dry-run)",
    )
    parser.add_argument(
        "-u",
        "--user",
        help="Borrowernumber to attribute catalog actions to",
    )
    parser.add_argument("--framework", help="MARC framework code to use for merged records")
    parser.add_argument(
        "--default-framework",
        action="store_true",
        help="Force the default framework (even if the master has another)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show detailed progress",
    )
    parser.add_argument("-l", "--log", help="Write log to file")
    parser.add_argument(
        "-d",
        "--delimiter",
        default=DEFAULT_DELIMITER,
        help="Field delimiter (default: %(default)r)",
    )
    return parser


def build_run_config(argv: Sequence[str]) -> RunConfig:
    """Parse ``argv`` into a ``RunConfig`` or raise ``ConfigError``."""

    args = build_parser().parse_args(list(argv))

    if not args.file:
        raise ConfigError("--file is required")
    input_path = Path(args.file)
    if not input_path.is_file():
        raise ConfigError(f"File '{input_path}' not found")
    if not os.access(input_path, os.R_OK):
        raise ConfigError(f"File '{input_path}' is not readable")

    if args.framework is not None and args.default_framework:
        raise ConfigError("Cannot use both --framework and --default-framework")

    return RunConfig(
        input_path=input_path,
        commit=args.commit,
        verbose=args.verbose,
        log_path=Path(args.log) if args.log else None,
        delimiter=_parse_delimiter(args.delimiter),
        framework_policy=_parse_framework_policy(args.framework, args.default_framework),
        user_id=_parse_user_id(args.user),
    )


def _parse_delimiter(value: str) -> str:
    delimiter = _DELIMITER_ALIASES.get(value, value)
    if len(delimiter) != 1:
        raise ConfigError(f"Delimiter must be a single character, got {value!r}")
    if delimiter in {'"', "\n", "\r"}:
        raise ConfigError(f"Delimiter {value!r} cannot be used")
    return delimiter


def _parse_framework_policy(framework: str | None, force_default: bool) -> FrameworkPolicy:
    if force_default:
        return FrameworkPolicy.force_default()
    if framework is not None:
        return FrameworkPolicy.explicit(framework)
    return FrameworkPolicy.use_master()


def _parse_user_id(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        user_id = int(value)
    except ValueError as exc:
        raise ConfigError(f"--user must be a borrowernumber, got {value!r}") from exc
    # 0 means no attribution, as with an absent --user.
    return user_id or None
