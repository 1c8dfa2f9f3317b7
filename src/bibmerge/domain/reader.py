"""Streaming reader for delimited merge-group files."""

from __future__ import annotations

import csv
from typing import TYPE_CHECKING

from bibmerge.domain.errors import InputFileError
from bibmerge.domain.model import InputRow

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path


def read_merge_rows(path: Path, *, delimiter: str = ",") -> Iterator[InputRow]:
    """Yield one ``InputRow`` per non-blank line of ``path``.

    Fields are trimmed and blank fields dropped. Lines without any usable
    field are not yielded at all; rows with a single field are, so the caller
    can count them as skipped.
    """

    try:
        handle = path.open(encoding="utf-8-sig", newline="")
    except OSError as exc:
        raise InputFileError(f"Cannot open '{path}': {exc.strerror or exc}") from exc

    with handle:
        yield from parse_rows(handle, delimiter=delimiter, source=str(path))


def parse_rows(
    lines: Iterable[str],
    *,
    delimiter: str = ",",
    source: str = "<input>",
) -> Iterator[InputRow]:
    reader = csv.reader(lines, delimiter=delimiter)
    try:
        for raw in reader:
            fields = tuple(value.strip() for value in raw if value.strip())
            if not fields:
                continue
            yield InputRow(line_number=reader.line_num, fields=fields)
    except csv.Error as exc:
        raise InputFileError(f"{source}, line {reader.line_num}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise InputFileError(f"{source} is not valid UTF-8: {exc}") from exc
