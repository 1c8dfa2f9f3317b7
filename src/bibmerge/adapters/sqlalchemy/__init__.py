"""SQLAlchemy adapter reading the Koha database."""

from __future__ import annotations

from .lookups import SqlAlchemyCatalogLookup, build_engine
from .tables import biblio_table, borrowers_table, create_all_tables, items_table, metadata

__all__ = [
    "SqlAlchemyCatalogLookup",
    "biblio_table",
    "borrowers_table",
    "build_engine",
    "create_all_tables",
    "items_table",
    "metadata",
]
