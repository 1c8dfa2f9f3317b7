"""Read-only catalog lookups straight from the Koha database."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import Session, sessionmaker

from bibmerge.domain.model import BiblioSummary, Patron, parse_biblio_id

from .tables import biblio_table, borrowers_table, items_table

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


def build_engine(database_uri: str) -> Engine:
    return create_engine(database_uri, future=True, pool_pre_ping=True)


class SqlAlchemyCatalogLookup:
    """Finds biblios and patrons with plain SELECTs; never writes."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._session_factory = sessionmaker(bind=engine)

    def _session(self) -> Session:
        return self._session_factory()

    def find_biblio(self, biblio_id: str | int) -> BiblioSummary | None:
        number = parse_biblio_id(biblio_id)
        if number is None:
            return None
        stmt = select(
            biblio_table.c.biblionumber,
            biblio_table.c.frameworkcode,
            biblio_table.c.title,
        ).where(biblio_table.c.biblionumber == number)
        count_stmt = (
            select(func.count())
            .select_from(items_table)
            .where(items_table.c.biblionumber == number)
        )
        with self._session() as session:
            row = session.execute(stmt).one_or_none()
            if row is None:
                return None
            item_count = session.execute(count_stmt).scalar_one()
        return BiblioSummary(
            biblio_id=row.biblionumber,
            framework_code=row.frameworkcode or "",
            title=row.title,
            item_count=item_count,
        )

    def find_patron(self, patron_id: int) -> Patron | None:
        stmt = select(
            borrowers_table.c.borrowernumber,
            borrowers_table.c.firstname,
            borrowers_table.c.surname,
            borrowers_table.c.userid,
            borrowers_table.c.cardnumber,
            borrowers_table.c.branchcode,
        ).where(borrowers_table.c.borrowernumber == patron_id)
        with self._session() as session:
            row = session.execute(stmt).one_or_none()
        if row is None:
            return None
        return Patron(
            patron_id=row.borrowernumber,
            firstname=row.firstname,
            surname=row.surname,
            userid=row.userid,
            cardnumber=row.cardnumber,
            library_id=row.branchcode,
        )

    def dispose(self) -> None:
        self.engine.dispose()
