"""Existence checks and framework comparison for a merge group."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from bibmerge.domain.errors import RejectedGroup, SkippedGroup, UserNotFound
from bibmerge.domain.framework import display_framework, resolve_framework
from bibmerge.domain.model import ValidatedGroup

if TYPE_CHECKING:
    from bibmerge.domain.framework import FrameworkPolicy
    from bibmerge.domain.model import BiblioSummary, MergeGroup, Patron
    from bibmerge.domain.ports import CatalogLookup, PatronDirectory

log = getLogger(__name__)


def validate_group(
    group: MergeGroup,
    catalog: CatalogLookup,
    policy: FrameworkPolicy,
) -> ValidatedGroup:
    """Confirm the master, keep only children that exist, resolve the framework.

    Raises ``RejectedGroup`` when the master is missing and ``SkippedGroup``
    when none of the children exist. Missing children on their own only
    produce a warning.
    """

    master = catalog.find_biblio(group.master_id)
    if master is None:
        raise RejectedGroup(
            f"Master biblio {group.master_id} does not exist! Skipping group.",
            line_number=group.line_number,
        )
    log.debug("  Master title: %s", master.title or "N/A")

    master_framework = master.framework_code or ""
    children: list[BiblioSummary] = []
    mismatched: list[int] = []
    seen: set[int] = {master.biblio_id}
    for child_id in group.child_ids:
        child = catalog.find_biblio(child_id)
        if child is None:
            log.warning("  Child biblio %s does not exist! Skipping this child.", child_id)
            continue
        if child.biblio_id in seen:
            log.warning(
                "  Child biblio %s is listed twice or is the master. Ignoring it.",
                child_id,
            )
            continue
        seen.add(child.biblio_id)
        children.append(child)
        log.debug("  Child %s exists: %s", child_id, child.title or "N/A")

        child_framework = child.framework_code or ""
        if child_framework != master_framework:
            mismatched.append(child.biblio_id)
            log.warning(
                "  Child %s has different framework ('%s') than master ('%s')",
                child_id,
                child_framework,
                master_framework,
            )
        log.debug("    Items: %s", child.item_count)

    if not children:
        raise SkippedGroup(
            "No valid children to merge. Skipping group.",
            line_number=group.line_number,
        )

    framework_code = resolve_framework(policy, master.framework_code)
    log.debug("  Using framework: '%s'", display_framework(framework_code))

    return ValidatedGroup(
        group=group,
        master=master,
        children=tuple(children),
        framework_code=framework_code,
        mismatched_children=tuple(mismatched),
    )


def resolve_attribution(user_id: int | None, patrons: PatronDirectory) -> Patron | None:
    """Look up the patron catalog actions are attributed to, if one was given."""

    if user_id is None:
        return None
    patron = patrons.find_patron(user_id)
    if patron is None:
        raise UserNotFound(user_id)
    return patron
