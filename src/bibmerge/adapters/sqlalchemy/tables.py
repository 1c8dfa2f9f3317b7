"""SQLAlchemy Core tables for the parts of the Koha schema the batch reads."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Column, ForeignKey, Integer, MetaData, String, Table, Text

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

metadata = MetaData()

biblio_table = Table(
    "biblio",
    metadata,
    Column("biblionumber", Integer, primary_key=True, autoincrement=True),
    Column("frameworkcode", String(4), nullable=False, default=""),
    Column("author", Text),
    Column("title", Text),
)

items_table = Table(
    "items",
    metadata,
    Column("itemnumber", Integer, primary_key=True, autoincrement=True),
    Column(
        "biblionumber",
        Integer,
        ForeignKey("biblio.biblionumber", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("barcode", String(20)),
)

borrowers_table = Table(
    "borrowers",
    metadata,
    Column("borrowernumber", Integer, primary_key=True, autoincrement=True),
    Column("cardnumber", String(32)),
    Column("surname", Text),
    Column("firstname", Text),
    Column("userid", String(75)),
    Column("branchcode", String(10)),
)


def create_all_tables(engine: Engine) -> None:
    """Create the tables, for tests and throwaway databases only."""

    metadata.create_all(engine)
