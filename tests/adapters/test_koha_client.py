from __future__ import annotations

import json
import logging
from collections.abc import Callable  # noqa: TC003

import httpx
import pytest

from bibmerge.adapters.http_resilience import ResilientClient
from bibmerge.adapters.koha import KohaAPIError, KohaCatalog, KohaClient
from bibmerge.config import KohaConfig, ResilienceConfig, RetryPolicy
from bibmerge.domain.model import MergeOptions

BASE_URL = "https://koha.test/api/v1"

Handler = Callable[[httpx.Request], httpx.Response]


def _config(*, retries: int = 0) -> KohaConfig:
    return KohaConfig(
        username="batch",
        password="secret",
        resilience=ResilienceConfig(
            name="koha-test",
            base_url=BASE_URL,
            retry=RetryPolicy(total=retries, backoff_factor=0.0, backoff_jitter=0.0),
            default_headers={"Accept": "application/json"},
        ),
    )


def _make_client(handler: Handler, *, retries: int = 0) -> KohaClient:
    def factory(config: KohaConfig) -> ResilientClient:
        return ResilientClient(
            config.resilience,
            auth=httpx.BasicAuth(config.username, config.password),
            transport=httpx.MockTransport(handler),
        )

    return KohaClient(config=_config(retries=retries), client_factory=factory)


def _biblio(biblio_id: int, framework_id: str | None = "FA") -> dict[str, object]:
    return {
        "biblio_id": biblio_id,
        "title": f"Title {biblio_id}",
        "author": "Somebody",
        "framework_id": framework_id,
        "copyright_date": 1999,
    }


def test_get_biblio_parses_payload() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_biblio(75))

    with _make_client(handler) as client:
        payload = client.get_biblio(75)

    assert payload is not None
    assert payload.biblio_id == 75
    assert payload.framework_id == "FA"
    assert seen[0].url == httpx.URL(f"{BASE_URL}/biblios/75")
    assert seen[0].headers["Accept"] == "application/json"
    assert seen[0].headers["Authorization"].startswith("Basic ")


def test_get_biblio_returns_none_on_404() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": "Object not found."})

    with _make_client(handler) as client:
        assert client.get_biblio(999) is None


def test_null_framework_becomes_default() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=_biblio(75, framework_id=None))

    with _make_client(handler) as client:
        payload = client.get_biblio(75)

    assert payload is not None
    assert payload.framework_id == ""


def test_count_items_uses_total_count_header() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["_per_page"] == "1"
        return httpx.Response(200, json=[{"item_id": 1}], headers={"X-Total-Count": "7"})

    with _make_client(handler) as client:
        assert client.count_items(75) == 7


def test_count_items_falls_back_to_payload_length() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{"item_id": 1}, {"item_id": 2}])

    with _make_client(handler) as client:
        assert client.count_items(75) == 2


def test_get_patron() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/v1/patrons/1"
        return httpx.Response(
            200,
            json={
                "patron_id": 1,
                "firstname": "Ada",
                "surname": "Lovelace",
                "userid": "ada",
                "cardnumber": "0001",
                "library_id": "CPL",
            },
        )

    with _make_client(handler) as client:
        patron = client.get_patron(1)

    assert patron is not None
    assert patron.surname == "Lovelace"


def test_server_errors_raise_with_message() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(403, json={"error": "Authorization failure"})

    with _make_client(handler) as client, pytest.raises(KohaAPIError) as excinfo:
        client.get_biblio(75)

    assert excinfo.value.status_code == 403
    assert "Authorization failure" in str(excinfo.value)


def test_unexpected_payload_raises() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"unexpected": True})

    with _make_client(handler) as client, pytest.raises(KohaAPIError, match="Unexpected"):
        client.get_biblio(75)


def test_reads_are_retried_on_transient_errors() -> None:
    calls: list[int] = []

    def handler(_: httpx.Request) -> httpx.Response:
        calls.append(1)
        if len(calls) == 1:
            return httpx.Response(503)
        return httpx.Response(200, json=_biblio(75))

    with _make_client(handler, retries=2) as client:
        payload = client.get_biblio(75)

    assert payload is not None
    assert len(calls) == 2


def test_merge_posts_once_and_is_never_retried() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(503, json={"error": "Service unavailable"})

    with _make_client(handler, retries=2) as client, pytest.raises(KohaAPIError):
        client.merge_biblios(75, [801], framework_id="")

    assert len(calls) == 1


def test_merge_request_body() -> None:
    captured: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["method"] = request.method
        captured["path"] = request.url.path
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"merged": True, "items": 3, "holds": 1})

    with _make_client(handler) as client:
        response = client.merge_biblios(
            75, [801, 802], framework_id="FA", attributed_patron_id=1
        )

    assert captured["method"] == "POST"
    assert captured["path"] == "/api/v1/contrib/recordmerger/biblios/75/merge"
    assert captured["body"] == {
        "biblio_ids": [801, 802],
        "framework_id": "FA",
        "attributed_patron_id": 1,
    }
    assert response.merged is True
    assert response.details == {"items": 3, "holds": 1}


def test_merge_without_body_counts_as_merged() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(204)

    with _make_client(handler) as client:
        assert client.merge_biblios(75, [801], framework_id="").merged is True


def test_catalog_translates_to_domain() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.endswith("/items"):
            return httpx.Response(200, json=[], headers={"X-Total-Count": "4"})
        if path.endswith("/merge"):
            return httpx.Response(200, json={"merged": False})
        if path == "/api/v1/biblios/801":
            return httpx.Response(200, json=_biblio(801, framework_id=""))
        return httpx.Response(404, json={"error": "Object not found."})

    with _make_client(handler) as client:
        catalog = KohaCatalog(client)
        biblio = catalog.find_biblio(" 801 ")
        missing = catalog.find_biblio("802")
        invalid = catalog.find_biblio("80x")
        patron = catalog.find_patron(5)
        receipt = catalog.merge(801, [802], MergeOptions(framework_code=""))

    assert biblio is not None
    assert biblio.biblio_id == 801
    assert biblio.item_count == 4
    assert biblio.framework_code == ""
    assert missing is None
    assert invalid is None
    assert patron is None
    assert not receipt


def test_catalog_reports_zero_items_when_items_endpoint_is_forbidden(
    caplog: pytest.LogCaptureFixture,
) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/items"):
            return httpx.Response(403, json={"error": "Authorization failure"})
        return httpx.Response(200, json=_biblio(75))

    with _make_client(handler) as client, caplog.at_level(logging.WARNING):
        biblio = KohaCatalog(client).find_biblio(75)

    assert biblio is not None
    assert biblio.biblio_id == 75
    assert biblio.item_count == 0
    assert "Could not count items of biblio 75" in caplog.text


def test_merge_body_without_flag_counts_as_merged() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"items": 3})

    with _make_client(handler) as client:
        response = client.merge_biblios(75, [801], framework_id="")

    assert response.merged is True
    assert response.details == {"items": 3}
