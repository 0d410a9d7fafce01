"""Canonical data model for normalized economic records and chart descriptors."""

from __future__ import annotations

import math
import re
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

ChartKind = Literal["line", "scatter"]
Axis = Literal["left", "right"]

_YEAR_PATTERN = re.compile(r"^\d{4}$")


class EconomicRecord(BaseModel):
    """Normalized representation of one year of Brazilian macroeconomic data."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    presidents: str = Field(
        ..., description="Officeholder label for the year; repeats across a full term."
    )
    year: str = Field(..., description="Four-digit calendar year used as the chart x-axis.")
    metrics: dict[str, float] = Field(
        default_factory=dict,
        description="Metric values keyed by registry field id. NaN marks a missing value.",
    )
    raw_payload: Optional[Any] = Field(
        default=None,
        description="Raw upstream row retained for traceability and debugging.",
    )

    @field_validator("year", mode="before")
    @classmethod
    def _coerce_year(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("year")
    @classmethod
    def _check_year(cls, value: str) -> str:
        if not _YEAR_PATTERN.match(value):
            raise ValueError(f"year must be a four-digit string, got {value!r}")
        return value

    @property
    def year_number(self) -> int:
        return int(self.year)

    def value(self, metric_id: str) -> float:
        """Return the value for ``metric_id``; NaN when absent or missing."""

        return self.metrics.get(metric_id, math.nan)

    def is_missing(self, metric_id: str) -> bool:
        return math.isnan(self.value(metric_id))


class MetricDescriptor(BaseModel):
    """Static catalog entry describing one chartable metric."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Stable metric id as stored in ``EconomicRecord.metrics``.")
    label: str
    unit: str
    color: str = Field(..., description="Default stroke color for the metric.")
    axis: Optional[Axis] = Field(
        default=None, description="Preferred axis when the metric is charted on its own."
    )


class ChartSeries(BaseModel):
    """One resolved series inside a chart."""

    model_config = ConfigDict(frozen=True)

    metric_key: str
    label: str
    color: str
    axis: Axis = "left"


class PresetSeries(BaseModel):
    """Series declaration inside a preset; label and color fall back to the catalog."""

    model_config = ConfigDict(frozen=True)

    metric_key: str
    label: Optional[str] = None
    color: Optional[str] = None
    axis: Axis = "left"


def _check_series_count(kind: str, count: int) -> None:
    if kind == "scatter" and count != 2:
        raise ValueError(f"scatter charts need exactly two series (x, y), got {count}")
    if kind == "line" and count < 1:
        raise ValueError("line charts need at least one series")


def _check_domain(domain: tuple[float, float] | None) -> tuple[float, float] | None:
    if domain is not None and not domain[0] < domain[1]:
        raise ValueError(f"axis domain must be increasing, got {domain!r}")
    return domain


class ChartPreset(BaseModel):
    """Named multi-metric comparison used by the preset resolution mode."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    kind: ChartKind = "line"
    series: tuple[PresetSeries, ...]
    drop_years_before: Optional[int] = Field(
        default=None,
        description="Exclude years earlier than this from the chart's plotted rows only.",
    )
    caveat: Optional[str] = None
    x_domain: Optional[tuple[float, float]] = None
    y_domain: Optional[tuple[float, float]] = None

    @field_validator("x_domain", "y_domain")
    @classmethod
    def _validate_domain(cls, value):
        return _check_domain(value)

    @model_validator(mode="after")
    def _validate_series(self) -> "ChartPreset":
        _check_series_count(self.kind, len(self.series))
        return self


class ChartDescriptor(BaseModel):
    """Renderable chart: the series to draw plus display metadata."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    kind: ChartKind
    series: tuple[ChartSeries, ...]
    x_key: str = "year"
    drop_years_before: Optional[int] = None
    caveat: Optional[str] = None
    x_domain: Optional[tuple[float, float]] = None
    y_domain: Optional[tuple[float, float]] = None

    @field_validator("x_domain", "y_domain")
    @classmethod
    def _validate_domain(cls, value):
        return _check_domain(value)

    @model_validator(mode="after")
    def _validate_series(self) -> "ChartDescriptor":
        _check_series_count(self.kind, len(self.series))
        return self

    @property
    def metric_keys(self) -> tuple[str, ...]:
        return tuple(series.metric_key for series in self.series)


__all__ = [
    "Axis",
    "ChartDescriptor",
    "ChartKind",
    "ChartPreset",
    "ChartSeries",
    "EconomicRecord",
    "MetricDescriptor",
    "PresetSeries",
]
