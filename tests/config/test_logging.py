from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from bibmerge.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.usefixtures("restore_root_logger")
def test_quiet_console_only_shows_warnings() -> None:
    configure_logging(force=True)

    (console,) = logging.getLogger().handlers
    assert console.level == logging.WARNING


@pytest.mark.usefixtures("restore_root_logger")
def test_log_file_receives_info_lines(tmp_path: Path) -> None:
    log_path = tmp_path / "merge.log"
    log_path.write_text("previous run\n", encoding="utf-8")

    configure_logging(log_path=log_path, force=True)
    log = logging.getLogger("bibmerge.test")
    log.info("Processing merge group")
    log.debug("Master title: hidden")

    content = log_path.read_text(encoding="utf-8")
    assert "previous run" not in content
    assert "INFO Processing merge group" in content
    assert "hidden" not in content


@pytest.mark.usefixtures("restore_root_logger")
def test_verbose_logs_debug_everywhere(tmp_path: Path) -> None:
    log_path = tmp_path / "merge.log"

    configure_logging(verbose=True, log_path=log_path, force=True)
    logging.getLogger("bibmerge.test").debug("Items: 3")

    assert all(handler.level == logging.DEBUG for handler in logging.getLogger().handlers)
    assert "DEBUG Items: 3" in log_path.read_text(encoding="utf-8")
    assert logging.getLogger("httpx").level == logging.WARNING


@pytest.mark.usefixtures("restore_root_logger")
def test_warnings_are_labelled_warn(tmp_path: Path) -> None:
    log_path = tmp_path / "merge.log"

    configure_logging(log_path=log_path, force=True)
    logging.getLogger("bibmerge.test").warning("Child biblio 999 does not exist!")

    content = log_path.read_text(encoding="utf-8")
    assert " WARN Child biblio 999 does not exist!" in content
    assert "WARNING" not in content
