"""End-to-end job: fetch the dataset once, normalize it and resolve the charts."""

from __future__ import annotations

import asyncio
import logging
import math
import os
from dataclasses import dataclass, field
from typing import Any

import httpx

from jobs.config import DashboardConfig, load_config
from pipelines.charts import chart_rows, resolve_charts
from pipelines.model import ChartDescriptor, EconomicRecord
from pipelines.normalize import NormalizationIssue, normalize_batch
from pipelines.presets import DEFAULT_PRESETS
from pipelines.registry import metric_catalog
from pipelines.session import SessionState
from pipelines.sources.dataset import DatasetFetchError, fetch_economic_dataset

logger = logging.getLogger(__name__)


@dataclass
class DashboardSnapshot:
    """Result of one dashboard load: session status plus the data a view renders."""

    config: DashboardConfig
    session: SessionState
    records: list[EconomicRecord] = field(default_factory=list)
    issues: list[NormalizationIssue] = field(default_factory=list)
    charts: list[ChartDescriptor] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.session.status == "ready"

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready view of the snapshot, including each chart's plotted rows."""

        return {
            "status": self.session.status,
            "error": self.session.error,
            "records": [
                {
                    "presidents": record.presidents,
                    "year": record.year,
                    **{key: _json_number(value) for key, value in record.metrics.items()},
                }
                for record in self.records
            ],
            "issues": [
                {"index": issue.index, "field": issue.field, "reason": issue.reason}
                for issue in self.issues
            ],
            "charts": [
                {
                    **chart.model_dump(mode="json"),
                    "rows": chart_rows(self.records, chart, missing=self.config.missing_policy),
                }
                for chart in self.charts
            ],
        }


def _json_number(value: float) -> float | None:
    return None if math.isnan(value) else value


async def load_dashboard_async(
    config: DashboardConfig | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> DashboardSnapshot:
    """Fetch, normalize and resolve charts. A fetch failure yields an error session."""

    config = config or load_config()
    session = SessionState()
    try:
        raw_records = await fetch_economic_dataset(
            config.dataset_url,
            fmt=config.dataset_format,
            timeout=config.fetch_timeout,
            attempts=config.fetch_attempts,
            transport=transport,
        )
    except DatasetFetchError as exc:
        logger.error("Error fetching data: %s", exc)
        return DashboardSnapshot(config=config, session=session.mark_failed())

    result = normalize_batch(raw_records)
    logger.info(
        "Normalized %s of %s records (%s skipped).",
        len(result.records),
        len(raw_records),
        len(result.issues),
    )
    charts = resolve_charts(config.selected, metric_catalog(), DEFAULT_PRESETS)
    return DashboardSnapshot(
        config=config,
        session=session.mark_ready(),
        records=result.records,
        issues=result.issues,
        charts=charts,
    )


def load_dashboard(config: DashboardConfig | None = None) -> DashboardSnapshot:
    return asyncio.run(load_dashboard_async(config))


def main(config: DashboardConfig | None = None) -> int:
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
    snapshot = load_dashboard(config)
    logger.info(
        "Dashboard load finished (status=%s, records=%s, charts=%s).",
        snapshot.session.status,
        len(snapshot.records),
        len(snapshot.charts),
    )
    return 0 if snapshot.ok else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
