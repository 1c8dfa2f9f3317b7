"""Value objects passed between the batch stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

SYSTEM_ATTRIBUTION = "(system/CLI)"


@dataclass(frozen=True, slots=True)
class BiblioSummary:
    """What the batch needs to know about an existing bibliographic record."""

    biblio_id: int
    framework_code: str = ""
    title: str | None = None
    item_count: int = 0


@dataclass(frozen=True, slots=True)
class Patron:
    patron_id: int
    firstname: str | None = None
    surname: str | None = None
    userid: str | None = None
    cardnumber: str | None = None
    library_id: str | None = None

    @property
    def display_name(self) -> str:
        name = " ".join(part for part in (self.firstname, self.surname) if part)
        return f"{name or self.userid or 'Patron'} ({self.patron_id})"


@dataclass(frozen=True, slots=True)
class InputRow:
    """One line of the input file, trimmed and without blank fields."""

    line_number: int
    fields: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class MergeGroup:
    line_number: int
    master_id: str
    child_ids: tuple[str, ...]

    @classmethod
    def from_row(cls, row: InputRow) -> MergeGroup:
        master, *children = row.fields
        return cls(line_number=row.line_number, master_id=master, child_ids=tuple(children))


@dataclass(frozen=True, slots=True)
class MergeOptions:
    framework_code: str
    attributed_patron_id: int | None = None


@dataclass(frozen=True, slots=True)
class MergeReceipt:
    """Result of one merge call; falsy when the catalog refused the merge."""

    merged: bool
    details: Mapping[str, object] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.merged


@dataclass(frozen=True, slots=True)
class ValidatedGroup:
    group: MergeGroup
    master: BiblioSummary
    children: tuple[BiblioSummary, ...]
    framework_code: str
    mismatched_children: tuple[int, ...] = ()

    @property
    def child_ids(self) -> list[int]:
        return [child.biblio_id for child in self.children]

    @property
    def item_count(self) -> int:
        return sum(child.item_count for child in self.children)


class GroupState(StrEnum):
    SKIPPED_TOO_FEW_IDS = "skipped_too_few_ids"
    REJECTED_MASTER_MISSING = "rejected_master_missing"
    REJECTED_NO_VALID_CHILDREN = "rejected_no_valid_children"
    SIMULATED = "simulated"
    COMMITTED = "committed"
    FAILED = "failed"

    @property
    def counts_as(self) -> str:
        if self in _SUCCESSFUL_STATES:
            return "successful"
        if self in _SKIPPED_STATES:
            return "skipped"
        return "failed"


_SUCCESSFUL_STATES = frozenset({GroupState.SIMULATED, GroupState.COMMITTED})
_SKIPPED_STATES = frozenset(
    {GroupState.SKIPPED_TOO_FEW_IDS, GroupState.REJECTED_NO_VALID_CHILDREN}
)


@dataclass(frozen=True, slots=True)
class GroupOutcome:
    """Terminal state of one processed row."""

    line_number: int
    state: GroupState
    master_id: str | None = None
    merged_ids: tuple[int, ...] = ()
    items: int = 0
    reason: str | None = None


def parse_biblio_id(value: str | int) -> int | None:
    """Return a biblionumber as int, or ``None`` when it cannot be one."""

    if isinstance(value, int):
        return value if value > 0 else None
    text = value.strip()
    if not text.isdigit():
        return None
    number = int(text)
    return number if number > 0 else None
