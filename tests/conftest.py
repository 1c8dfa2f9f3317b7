from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from bibmerge.domain.batch import BatchSettings
from bibmerge.domain.framework import FrameworkPolicy

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


@pytest.fixture(autouse=True)
def _koha_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KOHA_BASE_URL", "https://koha.test/api/v1")
    monkeypatch.setenv("KOHA_USERNAME", "batch")
    monkeypatch.setenv("KOHA_PASSWORD", "secret")
    monkeypatch.delenv("KOHA_DATABASE_URI", raising=False)
    monkeypatch.delenv("KOHA_MERGE_PATH", raising=False)
    monkeypatch.delenv("KOHA_TIMEOUT_SECONDS", raising=False)


@pytest.fixture
def write_input(tmp_path: Path) -> Callable[..., Path]:
    def _write(content: str, name: str = "duplicates.csv") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def commit_settings() -> BatchSettings:
    return BatchSettings(commit=True, framework_policy=FrameworkPolicy.use_master())


@pytest.fixture
def dry_run_settings() -> BatchSettings:
    return BatchSettings(commit=False, framework_policy=FrameworkPolicy.use_master())
