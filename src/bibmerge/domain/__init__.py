"""Batch merge domain: reading groups, validating them, merging them."""

from __future__ import annotations

from .batch import BatchSettings, MergeStats, process_row, run_batch
from .errors import (
    BatchError,
    GroupError,
    InputFileError,
    MergeFailure,
    RejectedGroup,
    SkippedGroup,
    UserNotFound,
)
from .framework import FrameworkMode, FrameworkPolicy, resolve_framework
from .model import (
    BiblioSummary,
    GroupOutcome,
    GroupState,
    InputRow,
    MergeGroup,
    MergeOptions,
    MergeReceipt,
    Patron,
    ValidatedGroup,
    parse_biblio_id,
)
from .ports import BiblioMerger, CatalogLookup, PatronDirectory
from .reader import read_merge_rows
from .validation import resolve_attribution, validate_group

__all__ = [
    "BatchError",
    "BatchSettings",
    "BiblioMerger",
    "BiblioSummary",
    "CatalogLookup",
    "FrameworkMode",
    "FrameworkPolicy",
    "GroupError",
    "GroupOutcome",
    "GroupState",
    "InputFileError",
    "InputRow",
    "MergeFailure",
    "MergeGroup",
    "MergeOptions",
    "MergeReceipt",
    "MergeStats",
    "Patron",
    "PatronDirectory",
    "RejectedGroup",
    "SkippedGroup",
    "UserNotFound",
    "ValidatedGroup",
    "parse_biblio_id",
    "process_row",
    "read_merge_rows",
    "resolve_attribution",
    "resolve_framework",
    "validate_group",
]
