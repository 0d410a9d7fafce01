"""Static catalog of comparative chart presets."""

from __future__ import annotations

from typing import Iterable

from pipelines.model import ChartPreset, PresetSeries

EARLY_YEARS_CAVEAT = (
    "Note: Outliers for the years 1994 and 1995 were removed to improve data clarity."
)

DEFAULT_PRESETS: tuple[ChartPreset, ...] = (
    ChartPreset(
        id="gdp-growth-rates",
        title="GDP Growth Rates",
        series=(
            PresetSeries(metric_key="gdp-growth", label="Real GDP Growth Rate", color="blue"),
            PresetSeries(
                metric_key="gdp-per-capita-growth",
                label="GDP per Capita Growth Rate",
                color="green",
            ),
        ),
        drop_years_before=1996,
        caveat=EARLY_YEARS_CAVEAT,
    ),
    ChartPreset(
        id="inflation-vs-minimum-wage",
        title="Inflation Rate vs Minimum Wage Growth",
        series=(
            PresetSeries(metric_key="ipca-inflation", label="Inflation Rate", color="red"),
            PresetSeries(
                metric_key="minimum-wage-growth",
                label="Minimum Wage Growth Rate",
                color="purple",
            ),
        ),
        drop_years_before=1996,
        caveat=EARLY_YEARS_CAVEAT,
    ),
    ChartPreset(
        id="gdp-inflation",
        title="GDP Growth vs. Inflation",
        series=(
            PresetSeries(metric_key="gdp-growth", label="Real GDP Growth Rate"),
            # IPCA is above 900% in 1994.
            PresetSeries(metric_key="ipca-inflation", label="Inflation Rate", axis="right"),
        ),
    ),
    ChartPreset(
        id="exchange-rate-trade-balance",
        title="Exchange Rate vs. Trade Balance",
        series=(
            PresetSeries(metric_key="exchange-rate"),
            PresetSeries(metric_key="trade-balance-growth", axis="right"),
        ),
    ),
    ChartPreset(
        id="fdi-portfolio",
        title="Foreign Direct vs. Portfolio Investment",
        series=(
            PresetSeries(metric_key="fdi"),
            PresetSeries(metric_key="portfolio-investment", axis="right"),
        ),
    ),
    ChartPreset(
        id="unemployment-inflation",
        title="Unemployment vs. Inflation",
        kind="scatter",
        series=(
            PresetSeries(metric_key="unemployment", label="Unemployment Rate"),
            PresetSeries(metric_key="ipca-inflation", label="Inflation Rate"),
        ),
        drop_years_before=1996,
        caveat=EARLY_YEARS_CAVEAT,
        y_domain=(0.0, 15.0),
    ),
)


def get_preset(preset_id: str) -> ChartPreset | None:
    for preset in DEFAULT_PRESETS:
        if preset.id == preset_id:
            return preset
    return None


def iter_presets(ids: Iterable[str] | None = None) -> Iterable[ChartPreset]:
    if ids is None:
        return DEFAULT_PRESETS
    selected = []
    for preset_id in ids:
        preset = get_preset(preset_id)
        if preset:
            selected.append(preset)
    return tuple(selected)


__all__ = ["DEFAULT_PRESETS", "EARLY_YEARS_CAVEAT", "get_preset", "iter_presets"]
