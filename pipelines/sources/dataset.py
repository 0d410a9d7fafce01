"""Brazilian macroeconomic dataset source.

The dataset is a single published file with one row per year (1994–2022),
served either as a JSON array of objects or as delimited text.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Literal, Mapping

import httpx

from pipelines.common import DEFAULT_ATTEMPTS, DEFAULT_TIMEOUT_SECONDS, fetch_json, fetch_text
from pipelines.delimited import parse_delimited

DATASET_URL = (
    "https://hebbkx1anhila5yf.public.blob.vercel-storage.com/"
    "Dashboard-BdBYHcDrNjdqjW431nlwnj7DIeQ7m9.json"
)

DatasetFormat = Literal["json", "csv"]

logger = logging.getLogger(__name__)


class DatasetFetchError(RuntimeError):
    """The dataset could not be retrieved or did not have the expected shape."""


def _rows_from_json(payload: Any) -> list[Mapping[str, Any]]:
    if not isinstance(payload, list):
        raise DatasetFetchError(
            f"Expected a JSON array of records, got {type(payload).__name__}"
        )
    rows = [row for row in payload if isinstance(row, Mapping)]
    if len(rows) != len(payload):
        logger.warning("Ignoring %s non-object entries in dataset.", len(payload) - len(rows))
    return rows


async def fetch_economic_dataset(
    url: str | None = None,
    *,
    fmt: DatasetFormat = "json",
    delimiter: str = ",",
    quote_aware: bool = True,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    attempts: int = DEFAULT_ATTEMPTS,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[Mapping[str, Any]]:
    """Fetch the raw dataset rows.

    Raises
    ------
    DatasetFetchError
        On a non-success status, a transport failure, or an unexpected payload.
    """

    if fmt not in ("json", "csv"):
        raise ValueError(f"Unsupported dataset format {fmt!r}")

    source = url or DATASET_URL
    options: dict[str, Any] = {"timeout": timeout, "attempts": attempts, "transport": transport}
    try:
        if fmt == "csv":
            text = await fetch_text(source, **options)
            return parse_delimited(text, delimiter=delimiter, quote_aware=quote_aware)
        payload = await fetch_json(source, **options)
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code if exc.response is not None else "?"
        raise DatasetFetchError(f"Dataset request to {source} failed with status {status}") from exc
    except httpx.HTTPError as exc:
        raise DatasetFetchError(f"Dataset request to {source} failed: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DatasetFetchError(f"Dataset at {source} is not valid JSON") from exc
    return _rows_from_json(payload)


__all__ = ["DATASET_URL", "DatasetFetchError", "DatasetFormat", "fetch_economic_dataset"]
