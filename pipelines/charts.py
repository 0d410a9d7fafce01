"""Chart specification resolver and per-chart data shaping.

Two resolution modes share one entry point:

* ad hoc: every selected metric id becomes its own single-series line chart,
  colored by a deterministic hue rotation;
* preset: named comparisons from a static catalog whose id is in the
  selection, returned in catalog order with the axis placement the preset
  declares.

Unknown ids are ignored in both modes; a selection can outlive a catalog
change.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Literal, Mapping, Sequence

from pipelines.model import ChartDescriptor, ChartPreset, ChartSeries, EconomicRecord, MetricDescriptor

ResolutionMode = Literal["auto", "adhoc", "preset"]
MissingPolicy = Literal["gap", "zero"]

HUE_STEP = 30

logger = logging.getLogger(__name__)


def color_for_index(index: int) -> str:
    """Deterministic stroke color for the ``index``-th ad hoc chart."""

    hue = (index * HUE_STEP) % 360
    return f"hsl({hue}, 70%, 50%)"


def default_caveat(drop_years_before: int) -> str:
    return f"Note: years before {drop_years_before} were removed to improve data clarity."


def _catalog_index(catalog: Iterable[MetricDescriptor]) -> dict[str, MetricDescriptor]:
    return {descriptor.key: descriptor for descriptor in catalog}


def _unique(keys: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(keys))


def resolve_adhoc_charts(
    selected: Sequence[str], catalog: Iterable[MetricDescriptor]
) -> list[ChartDescriptor]:
    """Build one single-series line chart per selected metric, in selection order."""

    metrics = _catalog_index(catalog)
    known = [key for key in _unique(selected) if key in metrics]
    charts: list[ChartDescriptor] = []
    for position, key in enumerate(known):
        metric = metrics[key]
        charts.append(
            ChartDescriptor(
                id=key,
                title=metric.label,
                kind="line",
                series=(
                    ChartSeries(
                        metric_key=key,
                        label=metric.label,
                        color=color_for_index(position),
                        axis=metric.axis or "left",
                    ),
                ),
            )
        )
    return charts


def _resolve_preset(
    preset: ChartPreset, metrics: Mapping[str, MetricDescriptor]
) -> ChartDescriptor | None:
    series: list[ChartSeries] = []
    for declared in preset.series:
        metric = metrics.get(declared.metric_key)
        if metric is None:
            logger.warning(
                "Preset %s references unknown metric %r; skipping preset.",
                preset.id,
                declared.metric_key,
            )
            return None
        series.append(
            ChartSeries(
                metric_key=declared.metric_key,
                label=declared.label or metric.label,
                color=declared.color or metric.color,
                axis=declared.axis,
            )
        )

    caveat = preset.caveat
    if preset.drop_years_before is not None and not caveat:
        caveat = default_caveat(preset.drop_years_before)

    return ChartDescriptor(
        id=preset.id,
        title=preset.title,
        kind=preset.kind,
        series=tuple(series),
        x_key="year" if preset.kind == "line" else series[0].metric_key,
        drop_years_before=preset.drop_years_before,
        caveat=caveat,
        x_domain=preset.x_domain,
        y_domain=preset.y_domain,
    )


def resolve_preset_charts(
    selected: Iterable[str],
    catalog: Iterable[MetricDescriptor],
    presets: Iterable[ChartPreset],
) -> list[ChartDescriptor]:
    """Resolve the presets whose id is selected, preserving preset catalog order."""

    active = set(selected)
    metrics = _catalog_index(catalog)
    charts: list[ChartDescriptor] = []
    for preset in presets:
        if preset.id not in active:
            continue
        descriptor = _resolve_preset(preset, metrics)
        if descriptor is not None:
            charts.append(descriptor)
    return charts


def resolve_charts(
    selected: Sequence[str],
    catalog: Iterable[MetricDescriptor],
    presets: Iterable[ChartPreset] = (),
    *,
    mode: ResolutionMode = "auto",
) -> list[ChartDescriptor]:
    """Map a selection of metric and preset ids onto renderable chart descriptors.

    ``mode="adhoc"`` only considers metric ids and ``mode="preset"`` only
    preset ids. ``"auto"`` returns the preset charts first, followed by ad hoc
    charts for any selected metric ids.
    """

    catalog = list(catalog)
    presets = list(presets)
    if mode == "adhoc":
        return resolve_adhoc_charts(selected, catalog)
    if mode == "preset":
        return resolve_preset_charts(selected, catalog, presets)
    if mode != "auto":
        raise ValueError(f"Unknown resolution mode {mode!r}")
    return [
        *resolve_preset_charts(selected, catalog, presets),
        *resolve_adhoc_charts(selected, catalog),
    ]


def _visible_records(
    records: Iterable[EconomicRecord], descriptor: ChartDescriptor
) -> list[EconomicRecord]:
    cutoff = descriptor.drop_years_before
    visible = [
        record for record in records if cutoff is None or record.year_number >= cutoff
    ]
    return sorted(visible, key=lambda record: record.year_number)


def _plot_value(value: float, missing: MissingPolicy) -> float | None:
    if not math.isnan(value):
        return value
    return 0.0 if missing == "zero" else None


def chart_rows(
    records: Iterable[EconomicRecord],
    descriptor: ChartDescriptor,
    *,
    missing: MissingPolicy = "gap",
) -> list[dict[str, Any]]:
    """Shape canonical records into the rows a renderer plots for ``descriptor``.

    Outlier suppression (``drop_years_before``) only affects the returned
    rows; ``records`` is left untouched. Line rows carry ``None`` for missing
    values under the default ``"gap"`` policy so the line breaks instead of
    dipping to zero. Scatter points with a missing coordinate are omitted.
    """

    if missing not in ("gap", "zero"):
        raise ValueError(f"Unknown missing-value policy {missing!r}")

    visible = _visible_records(records, descriptor)
    if descriptor.kind == "scatter":
        x_key, y_key = descriptor.metric_keys
        points = []
        for record in visible:
            x_value, y_value = record.value(x_key), record.value(y_key)
            if math.isnan(x_value) or math.isnan(y_value):
                continue
            points.append({"year": record.year, "x": x_value, "y": y_value})
        return points

    rows = []
    for record in visible:
        row: dict[str, Any] = {"year": record.year}
        for key in descriptor.metric_keys:
            row[key] = _plot_value(record.value(key), missing)
        rows.append(row)
    return rows


__all__ = [
    "HUE_STEP",
    "MissingPolicy",
    "ResolutionMode",
    "chart_rows",
    "color_for_index",
    "default_caveat",
    "resolve_adhoc_charts",
    "resolve_charts",
    "resolve_preset_charts",
]
