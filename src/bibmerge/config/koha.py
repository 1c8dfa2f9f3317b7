"""Koha connection configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, optional_float_env_var, require_env_vars
from .http_resilience import ResilienceConfig, RetryPolicy

DEFAULT_MERGE_PATH = "/contrib/recordmerger/biblios/{biblio_id}/merge"
DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class KohaConfig:
    """Holds Koha REST API and database connection values."""

    username: str
    password: str
    resilience: ResilienceConfig
    merge_path: str = DEFAULT_MERGE_PATH
    database_uri: str | None = None

    @property
    def base_url(self) -> str:
        return self.resilience.base_url or ""


def get_koha_config(*, resilience: ResilienceConfig | None = None) -> KohaConfig:
    values = require_env_vars(("KOHA_BASE_URL", "KOHA_USERNAME", "KOHA_PASSWORD"))
    timeout = optional_float_env_var("KOHA_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)
    return KohaConfig(
        username=values["KOHA_USERNAME"],
        password=values["KOHA_PASSWORD"],
        merge_path=optional_env_var("KOHA_MERGE_PATH") or DEFAULT_MERGE_PATH,
        database_uri=optional_env_var("KOHA_DATABASE_URI"),
        resilience=resilience
        or ResilienceConfig(
            name="koha",
            base_url=values["KOHA_BASE_URL"].rstrip("/"),
            timeout_seconds=timeout,
            retry=RetryPolicy(),
            default_headers={"Accept": "application/json"},
        ),
    )
