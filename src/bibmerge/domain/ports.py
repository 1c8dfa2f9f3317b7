"""Ports the batch needs from the catalog system."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from bibmerge.domain.model import BiblioSummary, MergeOptions, MergeReceipt, Patron


@runtime_checkable
class CatalogLookup(Protocol):
    """Read access to bibliographic records."""

    def find_biblio(self, biblio_id: str | int) -> BiblioSummary | None: ...


@runtime_checkable
class PatronDirectory(Protocol):
    """Read access to patrons, used for audit attribution."""

    def find_patron(self, patron_id: int) -> Patron | None: ...


@runtime_checkable
class BiblioMerger(Protocol):
    """The catalog's merge primitive.

    Moves everything attached to each child (items, holds, orders,
    subscriptions, course reserves, ILL requests, recalls, tags) onto the
    master and deletes the children. Returns a falsy receipt or raises when
    the merge did not happen.
    """

    def merge(
        self,
        master_id: int,
        child_ids: Sequence[int],
        options: MergeOptions,
    ) -> MergeReceipt: ...
