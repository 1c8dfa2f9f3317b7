"""Domain ports implemented on top of the Koha REST API."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from bibmerge.domain.model import BiblioSummary, MergeReceipt, Patron, parse_biblio_id

from .client import KohaAPIError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from bibmerge.domain.model import MergeOptions

    from .client import KohaClient

log = getLogger(__name__)


class KohaCatalog:
    """Looks up biblios and patrons and merges biblios through Koha's REST API."""

    def __init__(self, client: KohaClient) -> None:
        self._client = client

    def find_biblio(self, biblio_id: str | int) -> BiblioSummary | None:
        number = parse_biblio_id(biblio_id)
        if number is None:
            log.debug("'%s' is not a valid biblionumber", biblio_id)
            return None
        payload = self._client.get_biblio(number)
        if payload is None:
            return None
        return BiblioSummary(
            biblio_id=payload.biblio_id,
            framework_code=payload.framework_id,
            title=payload.title,
            item_count=self._count_items(number),
        )

    def _count_items(self, biblio_id: int) -> int:
        # Informational only: an unreadable count is reported as 0.
        try:
            return self._client.count_items(biblio_id)
        except (KohaAPIError, httpx.HTTPError, ValueError) as exc:
            log.warning("  Could not count items of biblio %s: %s", biblio_id, exc)
            return 0

    def find_patron(self, patron_id: int) -> Patron | None:
        payload = self._client.get_patron(patron_id)
        if payload is None:
            return None
        return Patron(
            patron_id=payload.patron_id,
            firstname=payload.firstname,
            surname=payload.surname,
            userid=payload.userid,
            cardnumber=payload.cardnumber,
            library_id=payload.library_id,
        )

    def merge(
        self,
        master_id: int,
        child_ids: Sequence[int],
        options: MergeOptions,
    ) -> MergeReceipt:
        response = self._client.merge_biblios(
            master_id,
            child_ids,
            framework_id=options.framework_code,
            attributed_patron_id=options.attributed_patron_id,
        )
        return MergeReceipt(merged=response.merged, details=response.details)
