"""Per-group merge state machine and the batch loop around it."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from bibmerge.domain.errors import MergeFailure, RejectedGroup, SkippedGroup
from bibmerge.domain.framework import display_framework
from bibmerge.domain.model import GroupOutcome, GroupState, MergeGroup, MergeOptions
from bibmerge.domain.reporting import report_group_header, report_outcome
from bibmerge.domain.validation import validate_group

if TYPE_CHECKING:
    from collections.abc import Iterable

    from bibmerge.domain.framework import FrameworkPolicy
    from bibmerge.domain.model import InputRow, ValidatedGroup
    from bibmerge.domain.ports import BiblioMerger, CatalogLookup

log = getLogger(__name__)


@dataclass(slots=True)
class MergeStats:
    """Counters for a batch run; ``record`` is the only way to change them."""

    total_groups: int = 0
    successful: int = 0
    failed: int = 0
    skipped: int = 0
    total_merged: int = 0
    items_moved: int = 0

    def record(self, outcome: GroupOutcome) -> None:
        bucket = outcome.state.counts_as
        self.total_groups += 1
        if bucket == "successful":
            self.successful += 1
            self.total_merged += len(outcome.merged_ids)
            self.items_moved += outcome.items
        elif bucket == "skipped":
            self.skipped += 1
        else:
            self.failed += 1

    @property
    def exit_code(self) -> int:
        return 1 if self.failed > 0 else 0


@dataclass(frozen=True, slots=True)
class BatchSettings:
    commit: bool
    framework_policy: FrameworkPolicy
    attributed_patron_id: int | None = None


def process_row(
    row: InputRow,
    *,
    catalog: CatalogLookup,
    merger: BiblioMerger,
    settings: BatchSettings,
) -> GroupOutcome:
    """Take one input row to a terminal state without letting errors escape."""

    if len(row.fields) < 2:
        log.warning(
            "Line %s: Skipping - need at least 2 biblionumbers to merge",
            row.line_number,
        )
        return GroupOutcome(
            line_number=row.line_number,
            state=GroupState.SKIPPED_TOO_FEW_IDS,
            master_id=row.fields[0] if row.fields else None,
            reason="too few identifiers",
        )

    group = MergeGroup.from_row(row)
    report_group_header(group)

    try:
        validated = validate_group(group, catalog, settings.framework_policy)
    except RejectedGroup as exc:
        log.error("  %s", exc)
        return GroupOutcome(
            line_number=group.line_number,
            state=GroupState.REJECTED_MASTER_MISSING,
            master_id=group.master_id,
            reason=str(exc),
        )
    except SkippedGroup as exc:
        log.warning("  %s", exc)
        return GroupOutcome(
            line_number=group.line_number,
            state=GroupState.REJECTED_NO_VALID_CHILDREN,
            master_id=group.master_id,
            reason=str(exc),
        )
    except Exception as exc:  # noqa: BLE001
        log.error("  FAILED: Error while checking records - %s", exc)
        return GroupOutcome(
            line_number=group.line_number,
            state=GroupState.FAILED,
            master_id=group.master_id,
            reason=str(exc),
        )

    if validated.mismatched_children:
        log.info(
            "  Children %s will take framework '%s' from the merge",
            ", ".join(str(child_id) for child_id in validated.mismatched_children),
            display_framework(validated.framework_code),
        )

    if not settings.commit:
        return _simulate(validated)

    try:
        return _commit(validated, merger=merger, settings=settings)
    except MergeFailure as exc:
        log.error("  FAILED: %s", exc)
        return GroupOutcome(
            line_number=group.line_number,
            state=GroupState.FAILED,
            master_id=group.master_id,
            reason=str(exc),
        )


def _simulate(validated: ValidatedGroup) -> GroupOutcome:
    group = validated.group
    log.info(
        "  [DRY-RUN] Would merge %s biblios into %s (framework: %s)",
        len(validated.children),
        group.master_id,
        display_framework(validated.framework_code),
    )
    return GroupOutcome(
        line_number=group.line_number,
        state=GroupState.SIMULATED,
        master_id=group.master_id,
        merged_ids=tuple(validated.child_ids),
    )


def _commit(
    validated: ValidatedGroup,
    *,
    merger: BiblioMerger,
    settings: BatchSettings,
) -> GroupOutcome:
    group = validated.group
    options = MergeOptions(
        framework_code=validated.framework_code,
        attributed_patron_id=settings.attributed_patron_id,
    )
    try:
        receipt = merger.merge(validated.master.biblio_id, validated.child_ids, options)
    except Exception as exc:  # noqa: BLE001
        raise MergeFailure(
            f"Error during merge - {exc}",
            line_number=group.line_number,
        ) from exc

    if not receipt:
        raise MergeFailure(
            f"merge returned false for master {group.master_id}",
            line_number=group.line_number,
        )

    log.info(
        "  SUCCESS: Merged %s biblios into %s",
        len(validated.children),
        group.master_id,
    )
    if receipt.details:
        log.debug(
            "  Merge details: %s",
            ", ".join(f"{key}: {value}" for key, value in receipt.details.items()),
        )
    return GroupOutcome(
        line_number=group.line_number,
        state=GroupState.COMMITTED,
        master_id=group.master_id,
        merged_ids=tuple(validated.child_ids),
        items=validated.item_count,
    )


def run_batch(
    rows: Iterable[InputRow],
    *,
    catalog: CatalogLookup,
    merger: BiblioMerger,
    settings: BatchSettings,
    stats: MergeStats | None = None,
) -> MergeStats:
    """Process every row in order and return the accumulated statistics."""

    effective_stats = stats if stats is not None else MergeStats()
    for row in rows:
        outcome = process_row(row, catalog=catalog, merger=merger, settings=settings)
        report_outcome(outcome)
        effective_stats.record(outcome)
    return effective_stats
