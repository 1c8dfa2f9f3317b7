"""Log narration for a batch run: banner, per-group headers, summary."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from bibmerge.domain.batch import MergeStats
    from bibmerge.domain.model import GroupOutcome, MergeGroup

log = getLogger(__name__)

TITLE = "Koha Batch Biblio Merger"
RULE = "=" * 60
GROUP_RULE = "-" * 40


def report_banner(
    *,
    input_path: Path,
    mode: str,
    framework: str,
    user: str,
) -> None:
    log.info(RULE)
    log.info(TITLE)
    log.info(RULE)
    log.info("Input file: %s", input_path)
    log.info("Mode: %s", mode)
    log.info("Framework: %s", framework)
    log.info("User: %s", user)
    log.info(RULE)


def report_group_header(group: MergeGroup) -> None:
    log.info(GROUP_RULE)
    log.info("Line %s: Processing merge group", group.line_number)
    log.info("  Master: %s", group.master_id)
    log.info("  Children to merge: %s", ", ".join(group.child_ids))


def report_outcome(outcome: GroupOutcome) -> None:
    log.debug("Line %s: %s", outcome.line_number, outcome.state)


def report_summary(stats: MergeStats, *, commit: bool) -> None:
    log.info(RULE)
    log.info("SUMMARY")
    log.info(RULE)
    log.info("Total merge groups processed: %s", stats.total_groups)
    log.info("Successful merges: %s", stats.successful)
    log.info("Failed merges: %s", stats.failed)
    log.info("Skipped (invalid): %s", stats.skipped)
    log.info("Total biblios merged (deleted): %s", stats.total_merged)
    if stats.items_moved:
        log.info("Estimated items moved: %s", stats.items_moved)
    log.info(RULE)

    if not commit:
        log.info("This was a DRY-RUN. No changes were made to the database.")
        log.info("Use --commit flag to perform actual merge.")
