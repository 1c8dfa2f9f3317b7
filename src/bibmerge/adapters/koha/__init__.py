"""Public interface for the Koha REST adapter."""

from __future__ import annotations

from .client import KohaAPIError, KohaClient
from .gateway import KohaCatalog
from .schema import BiblioPayload, MergeResponse, PatronPayload

__all__ = [
    "BiblioPayload",
    "KohaAPIError",
    "KohaCatalog",
    "KohaClient",
    "MergeResponse",
    "PatronPayload",
]
