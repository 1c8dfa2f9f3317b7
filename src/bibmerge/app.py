"""Application orchestration entry points."""

from __future__ import annotations

from contextlib import ExitStack
from logging import getLogger
from typing import TYPE_CHECKING

from bibmerge.adapters.koha import KohaCatalog, KohaClient
from bibmerge.adapters.sqlalchemy import SqlAlchemyCatalogLookup, build_engine
from bibmerge.config import get_koha_config
from bibmerge.domain.batch import BatchSettings, MergeStats, run_batch
from bibmerge.domain.model import SYSTEM_ATTRIBUTION
from bibmerge.domain.reader import read_merge_rows
from bibmerge.domain.reporting import report_banner, report_summary
from bibmerge.domain.validation import resolve_attribution

if TYPE_CHECKING:
    from collections.abc import Callable

    from bibmerge.adapters.http_resilience import ResilientClient
    from bibmerge.config import KohaConfig, RunConfig
    from bibmerge.domain.ports import BiblioMerger, CatalogLookup, PatronDirectory


log = getLogger(__name__)


def run_merge_batch(
    config: RunConfig,
    *,
    catalog: CatalogLookup,
    patrons: PatronDirectory,
    merger: BiblioMerger,
) -> MergeStats:
    """Resolve attribution, then merge every group in ``config.input_path``."""

    patron = resolve_attribution(config.user_id, patrons)

    report_banner(
        input_path=config.input_path,
        mode=config.mode_label,
        framework=config.framework_policy.describe(),
        user=patron.display_name if patron else SYSTEM_ATTRIBUTION,
    )

    settings = BatchSettings(
        commit=config.commit,
        framework_policy=config.framework_policy,
        attributed_patron_id=patron.patron_id if patron else None,
    )
    stats = MergeStats()
    try:
        run_batch(
            read_merge_rows(config.input_path, delimiter=config.delimiter),
            catalog=catalog,
            merger=merger,
            settings=settings,
            stats=stats,
        )
    finally:
        # Also reported when reading the input breaks off part way through.
        report_summary(stats, commit=config.commit)
    return stats


def merge_biblios_from_file(
    config: RunConfig,
    *,
    koha_config: KohaConfig | None = None,
    client_factory: Callable[[KohaConfig], ResilientClient] | None = None,
) -> MergeStats:
    """Run a batch against the configured Koha installation."""

    effective_koha = koha_config or get_koha_config()
    log.debug("Using Koha API at %s", effective_koha.base_url)

    with ExitStack() as stack:
        client = stack.enter_context(
            KohaClient(config=effective_koha, client_factory=client_factory)
        )
        koha = KohaCatalog(client)
        lookups: CatalogLookup = koha
        patrons: PatronDirectory = koha

        if effective_koha.database_uri:
            database = SqlAlchemyCatalogLookup(build_engine(effective_koha.database_uri))
            stack.callback(database.dispose)
            lookups = database
            patrons = database
            log.debug("Reading biblios and patrons from the Koha database")

        return run_merge_batch(config, catalog=lookups, patrons=patrons, merger=koha)
