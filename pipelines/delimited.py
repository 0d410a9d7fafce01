"""Delimited-text input for datasets published as CSV instead of JSON."""

from __future__ import annotations

import csv
import io
import logging

logger = logging.getLogger(__name__)


def _split_naive(text: str, delimiter: str) -> list[list[str]]:
    return [line.split(delimiter) for line in text.splitlines() if line.strip()]


def _split_quoted(text: str, delimiter: str) -> list[list[str]]:
    reader = csv.reader(io.StringIO(text), delimiter=delimiter)
    return [row for row in reader if any(cell.strip() for cell in row)]


def parse_delimited(
    text: str,
    *,
    delimiter: str = ",",
    quote_aware: bool = False,
) -> list[dict[str, str]]:
    """Split delimited text into header-keyed rows.

    The naive mode splits every line on ``delimiter`` and therefore cannot cope
    with a delimiter embedded in a value; pass ``quote_aware=True`` for input
    that quotes such values. Rows whose field count differs from the header
    are dropped.
    """

    if not text or not text.strip():
        return []

    rows = _split_quoted(text, delimiter) if quote_aware else _split_naive(text, delimiter)
    if not rows:
        return []

    header = [cell.strip() for cell in rows[0]]
    parsed: list[dict[str, str]] = []
    for row_number, row in enumerate(rows[1:], start=1):
        if len(row) != len(header):
            logger.warning(
                "Dropping delimited data row %s: expected %s fields, found %s.",
                row_number,
                len(header),
                len(row),
            )
            continue
        parsed.append(dict(zip(header, (cell.strip() for cell in row), strict=True)))
    return parsed


__all__ = ["parse_delimited"]
