"""HTTP client for the Koha REST API."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, TypeVar

import httpx
from pydantic import ValidationError

from bibmerge.adapters.http_resilience import ResilientClient

from .schema import (
    BiblioPayload,
    ErrorResponse,
    MergeRequest,
    MergeResponse,
    PatronPayload,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import TracebackType

    from bibmerge.config.koha import KohaConfig

log = getLogger(__name__)

TModel = TypeVar("TModel", bound=BiblioPayload | PatronPayload | MergeResponse)


class KohaAPIError(RuntimeError):
    """Raised when the Koha API answers with an error or an unexpected payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _default_client_factory(config: KohaConfig) -> ResilientClient:
    return ResilientClient(
        config.resilience,
        auth=httpx.BasicAuth(config.username, config.password),
    )


class KohaClient:
    """Low-level client for the handful of Koha endpoints the batch needs."""

    def __init__(
        self,
        *,
        config: KohaConfig,
        client_factory: Callable[[KohaConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._client = (client_factory or _default_client_factory)(config)

    def __enter__(self) -> KohaClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def get_biblio(self, biblio_id: int) -> BiblioPayload | None:
        response = self._client.get(f"/biblios/{biblio_id}")
        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        self._raise_for_error(response)
        return self._validate(BiblioPayload, response)

    def count_items(self, biblio_id: int) -> int:
        response = self._client.get(f"/biblios/{biblio_id}/items", params={"_per_page": 1})
        if response.status_code == httpx.codes.NOT_FOUND:
            return 0
        self._raise_for_error(response)
        total = response.headers.get("X-Total-Count")
        if total is not None:
            try:
                return int(total)
            except ValueError:
                log.warning("Ignoring malformed X-Total-Count header %r", total)
        payload = response.json()
        return len(payload) if isinstance(payload, list) else 0

    def get_patron(self, patron_id: int) -> PatronPayload | None:
        response = self._client.get(f"/patrons/{patron_id}")
        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        self._raise_for_error(response)
        return self._validate(PatronPayload, response)

    def merge_biblios(
        self,
        master_id: int,
        child_ids: Sequence[int],
        *,
        framework_id: str,
        attributed_patron_id: int | None = None,
    ) -> MergeResponse:
        path = self._config.merge_path.format(biblio_id=master_id)
        body = MergeRequest(
            biblio_ids=list(child_ids),
            framework_id=framework_id,
            attributed_patron_id=attributed_patron_id,
        )
        response = self._client.post(path, json=body.model_dump())
        self._raise_for_error(response)
        if not response.content:
            return MergeResponse()
        return self._validate(MergeResponse, response)

    def _raise_for_error(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        message = f"Koha API returned HTTP {response.status_code}"
        try:
            error = ErrorResponse.model_validate(response.json())
        except (ValueError, ValidationError):
            pass
        else:
            message = f"{message}: {error.error}"
        log.debug("%s for %s %s", message, response.request.method, response.request.url)
        raise KohaAPIError(message, status_code=response.status_code)

    def _validate(
        self,
        model: type[TModel],
        response: httpx.Response,
    ) -> TModel:
        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise KohaAPIError(
                f"Unexpected Koha response payload for {response.request.url}",
                status_code=response.status_code,
            ) from exc
