"""Pydantic models describing the Koha REST API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _none_to_blank(value: object) -> object:
    return "" if value is None else value


class KohaBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class BiblioPayload(KohaBaseModel):
    biblio_id: int
    title: str | None = None
    author: str | None = None
    framework_id: str = ""

    _normalize_framework = field_validator("framework_id", mode="before")(_none_to_blank)


class PatronPayload(KohaBaseModel):
    patron_id: int
    firstname: str | None = None
    surname: str | None = None
    userid: str | None = None
    cardnumber: str | None = None
    library_id: str | None = None


class MergeRequest(KohaBaseModel):
    biblio_ids: list[int]
    framework_id: str
    attributed_patron_id: int | None = None


class MergeResponse(KohaBaseModel):
    """Body of a 2xx merge answer.

    Only an explicit ``"merged": false`` marks a refused merge. A body without
    the key, like an empty body, counts as merged; every other key is a detail.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    merged: bool = Field(default=True)

    @property
    def details(self) -> dict[str, object]:
        return dict(self.model_extra or {})


class ErrorResponse(KohaBaseModel):
    error: str
    error_code: str | None = None
