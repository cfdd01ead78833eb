"""Geofeed CSV reader producing one ``GeofeedRow`` per record."""
from __future__ import annotations

import csv
import io
from typing import Iterator

from geofeed_verifier.domain.errors import GeofeedReadError
from geofeed_verifier.domain.models import GeofeedRow

COMMENT_MARKER = "#"
QUOTE = '"'
DELIMITER = ","


class _RecordLines:
    """Feeds lines to the csv reader and keeps the raw text of the current record.

    A comment marker only counts at the start of a record, never on a line
    that continues a quoted field.
    """

    def __init__(self, text: str) -> None:
        self._lines = io.StringIO(text, newline="")
        self._current: list[str] = []
        self._in_quotes = False

    def __iter__(self) -> Iterator[str]:
        for line in self._lines:
            if not self._in_quotes and line.startswith(COMMENT_MARKER):
                continue
            if line.count(QUOTE) % 2:
                self._in_quotes = not self._in_quotes
            self._current.append(line)
            yield line

    def take(self) -> str:
        raw = "".join(self._current)
        self._current.clear()
        return raw


def has_bare_quote(raw: str) -> bool:
    """True when a quote appears inside a field that does not start with one.

    The csv module keeps such quotes as data; geofeeds treat them as malformed.
    """
    field_start, unquoted, quoted, closed = range(4)
    state = field_start
    for char in raw:
        if state == quoted:
            if char == QUOTE:
                state = closed
        elif state == closed:
            # A second quote right after the closing one is an escaped quote.
            if char == QUOTE:
                state = quoted
            elif char == DELIMITER:
                state = field_start
            else:
                state = unquoted
        elif char == DELIMITER:
            state = field_start
        elif char == QUOTE:
            if state == unquoted:
                return True
            state = quoted
        elif state == field_start and not char.isspace():
            state = unquoted
    return False


def iter_geofeed_rows(text: str) -> Iterator[GeofeedRow]:
    """Yield records with leading whitespace trimmed per field.

    Blank lines and comment lines are dropped, records may have any number of
    fields, and rows are numbered from 1 in the order they are read.
    """
    lines = _RecordLines(text)
    reader = csv.reader(lines, skipinitialspace=True, strict=True)
    count = 0
    while True:
        try:
            fields = next(reader)
        except StopIteration:
            return
        except csv.Error as exc:
            raise GeofeedReadError(f"record on line {reader.line_num}: {exc}") from exc
        raw = lines.take()
        if not fields:
            continue
        if QUOTE in raw and has_bare_quote(raw):
            raise GeofeedReadError(f'record on line {reader.line_num}: bare " in non-quoted field')
        count += 1
        yield GeofeedRow(line=count, fields=tuple(value.lstrip() for value in fields))
