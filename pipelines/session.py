"""Immutable dashboard session state and the record filters it drives."""

from __future__ import annotations

from typing import Iterable, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from pipelines.model import EconomicRecord
from pipelines.registry import ECONOMIC_FIELDS, field_order

Page = Literal["home", "dataset", "comparative", "graphs"]
LoadStatus = Literal["loading", "ready", "error"]

ALL = "all"
FETCH_ERROR_MESSAGE = "Error fetching data. Please try again later."


def _all_metric_ids() -> tuple[str, ...]:
    return tuple(spec.id for spec in ECONOMIC_FIELDS)


class SessionState(BaseModel):
    """Everything a dashboard view selects, updated by returning new copies."""

    model_config = ConfigDict(frozen=True)

    status: LoadStatus = "loading"
    error: Optional[str] = None
    page: Page = "home"
    selected_year: Optional[str] = None
    selected_president: Optional[str] = None
    active_metrics: tuple[str, ...] = Field(default_factory=_all_metric_ids)
    selected_graphs: tuple[str, ...] = ()

    def mark_ready(self) -> "SessionState":
        return self.model_copy(update={"status": "ready", "error": None})

    def mark_failed(self, message: str = FETCH_ERROR_MESSAGE) -> "SessionState":
        return self.model_copy(update={"status": "error", "error": message})

    def with_year(self, year: str | None) -> "SessionState":
        return self.model_copy(update={"selected_year": year})

    def with_president(self, president: str | None) -> "SessionState":
        return self.model_copy(update={"selected_president": president})

    def toggle_metric(self, metric_id: str) -> "SessionState":
        """Add or remove ``metric_id``; active metrics stay in registry order."""

        if metric_id in self.active_metrics:
            metrics = tuple(m for m in self.active_metrics if m != metric_id)
        else:
            metrics = tuple(sorted((*self.active_metrics, metric_id), key=field_order))
        return self.model_copy(update={"active_metrics": metrics})

    def toggle_graph(self, graph_id: str) -> "SessionState":
        if graph_id in self.selected_graphs:
            graphs = tuple(g for g in self.selected_graphs if g != graph_id)
        else:
            graphs = (*self.selected_graphs, graph_id)
        return self.model_copy(update={"selected_graphs": graphs})

    def navigate(self, page: Page) -> "SessionState":
        """Switch pages. The dataset page shows every metric; the graphs page starts empty."""

        update: dict[str, object] = {"page": page}
        if page == "dataset":
            update["active_metrics"] = _all_metric_ids()
        if page == "graphs":
            update["selected_graphs"] = ()
        return self.model_copy(update=update)


def _matches(selected: str | None, value: str) -> bool:
    return not selected or selected == ALL or selected == value


def filter_records(
    records: Iterable[EconomicRecord], state: SessionState
) -> list[EconomicRecord]:
    return [
        record
        for record in records
        if _matches(state.selected_year, record.year)
        and _matches(state.selected_president, record.presidents)
    ]


def available_years(records: Iterable[EconomicRecord]) -> list[str]:
    """Distinct years, newest first."""

    return sorted({record.year for record in records}, key=int, reverse=True)


def available_presidents(records: Iterable[EconomicRecord]) -> list[str]:
    """Distinct presidents in the order they first appear."""

    return list(dict.fromkeys(record.presidents for record in records))


__all__ = [
    "ALL",
    "FETCH_ERROR_MESSAGE",
    "LoadStatus",
    "Page",
    "SessionState",
    "available_presidents",
    "available_years",
    "filter_records",
]
