"""Static registry of the economic dataset's fields.

Each field has a stable id that the rest of the code uses. The storage key is
the column label found in the upstream dataset, so a renamed column only
requires editing this table.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping

from pipelines.model import Axis, MetricDescriptor


class ParseRule(str, Enum):
    """How a raw field value is turned into its canonical form."""

    LABEL = "label"
    NUMERIC = "numeric"
    DECIMAL_COMMA = "decimal_comma"
    BRAZILIAN = "brazilian"


@dataclass(frozen=True)
class FieldSpec:
    """Metadata needed to normalize one dataset column."""

    id: str
    key: str
    label: str
    unit: str
    rule: ParseRule = ParseRule.NUMERIC
    divisor: float = 1.0
    color: str = "#64748b"
    axis: Axis | None = None


PRESIDENTS_FIELD = FieldSpec(
    id="presidents", key="Presidents", label="President", unit="", rule=ParseRule.LABEL
)
YEAR_FIELD = FieldSpec(id="year", key="Year", label="Year", unit="", rule=ParseRule.LABEL)

LABEL_FIELDS: tuple[FieldSpec, ...] = (PRESIDENTS_FIELD, YEAR_FIELD)

ECONOMIC_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec(
        id="gdp-nominal",
        key="Nominal GDP (in Millions of R$)",
        label="Nominal GDP",
        unit="R$ bn",
        divisor=1000.0,
        color="#2563eb",
    ),
    FieldSpec(
        id="gdp-growth",
        key="Growth rate from a Real GDP",
        label="Real GDP Growth Rate",
        unit="%",
        color="#1d4ed8",
    ),
    FieldSpec(
        id="gdp-per-capita",
        key="Nominal GDP per Capita (in R$)",
        label="Nominal GDP per Capita",
        unit="R$",
        rule=ParseRule.DECIMAL_COMMA,
        color="#0891b2",
    ),
    FieldSpec(
        id="gdp-per-capita-growth",
        key="Growth rate from a Real GDP per capita",
        label="GDP per Capita Growth Rate",
        unit="%",
        color="#16a34a",
    ),
    FieldSpec(
        id="exchange-rate",
        key="Exchange Rate (January,R$/USD)",
        label="Exchange Rate (R$/USD)",
        unit="R$/USD",
        color="#ca8a04",
    ),
    FieldSpec(
        id="exchange-rate-growth",
        key="Exchange Rate (January,/R$USD) growth",
        label="Exchange Rate Growth",
        unit="%",
        color="#d97706",
    ),
    FieldSpec(
        id="fdi",
        key="Foreign Direct Investment (IED,in Billions of R$)",
        label="Foreign Direct Investment",
        unit="R$ bn",
        color="#7c3aed",
    ),
    FieldSpec(
        id="portfolio-investment",
        key="Foreign Portfolio Investment (USD millions) in the 4th quarter",
        label="Foreign Portfolio Investment (Q4)",
        unit="USD mn",
        color="#9333ea",
        axis="right",
    ),
    FieldSpec(
        id="trade-balance-growth",
        key="Trade Balance Surplus Growth Rate",
        label="Trade Balance Surplus Growth Rate",
        unit="%",
        rule=ParseRule.DECIMAL_COMMA,
        color="#0d9488",
        axis="right",
    ),
    FieldSpec(
        id="ipca-inflation",
        key="IPCA Inflation Rate (% Annual Variation)",
        label="Inflation Rate",
        unit="%",
        color="#dc2626",
    ),
    FieldSpec(
        id="unemployment",
        key="Annual Average Unemployment Rate (%)",
        label="Unemployment Rate",
        unit="%",
        color="#475569",
    ),
    FieldSpec(
        id="minimum-wage",
        key="Minimum Wage (in R$)",
        label="Minimum Wage",
        unit="R$",
        rule=ParseRule.BRAZILIAN,
        color="#db2777",
    ),
    FieldSpec(
        id="minimum-wage-growth",
        key="Minimum Wage Growth Rate percentage",
        label="Minimum Wage Growth Rate",
        unit="%",
        color="#a855f7",
    ),
    FieldSpec(
        id="icv",
        key="Yearly Cost of Living Index (ICV)(Avg. % Change)",
        label="Cost of Living Index (ICV)",
        unit="%",
        color="#ea580c",
    ),
)


def build_index(fields: Iterable[FieldSpec]) -> Mapping[str, FieldSpec]:
    """Index ``fields`` by id, rejecting empty or duplicate ids."""

    index: dict[str, FieldSpec] = {}
    for spec in fields:
        if not spec.id:
            raise ValueError(f"FieldSpec for column {spec.key!r} has an empty id")
        if spec.id in index:
            raise ValueError(f"Duplicate FieldSpec id: {spec.id!r}")
        index[spec.id] = spec
    return index


_FIELDS_BY_ID = build_index(ECONOMIC_FIELDS)
_FIELDS_BY_KEY = {spec.key: spec for spec in ECONOMIC_FIELDS}


def get_field(field_id: str) -> FieldSpec | None:
    return _FIELDS_BY_ID.get(field_id)


def get_field_by_key(key: str) -> FieldSpec | None:
    return _FIELDS_BY_KEY.get(key)


def iter_fields(ids: Iterable[str] | None = None) -> Iterable[FieldSpec]:
    if ids is None:
        return ECONOMIC_FIELDS
    selected = []
    for field_id in ids:
        spec = get_field(field_id)
        if spec:
            selected.append(spec)
    return tuple(selected)


def field_order(field_id: str) -> int:
    """Position of ``field_id`` in the registry; unknown ids sort last."""

    for position, spec in enumerate(ECONOMIC_FIELDS):
        if spec.id == field_id:
            return position
    return len(ECONOMIC_FIELDS)


def metric_catalog(fields: Iterable[FieldSpec] | None = None) -> list[MetricDescriptor]:
    """Project registry fields onto the ``MetricDescriptor`` catalog used by charts."""

    specs = ECONOMIC_FIELDS if fields is None else fields
    return [
        MetricDescriptor(
            key=spec.id,
            label=spec.label,
            unit=spec.unit,
            color=spec.color,
            axis=spec.axis,
        )
        for spec in specs
        if spec.rule is not ParseRule.LABEL
    ]


__all__ = [
    "ECONOMIC_FIELDS",
    "FieldSpec",
    "LABEL_FIELDS",
    "ParseRule",
    "PRESIDENTS_FIELD",
    "YEAR_FIELD",
    "build_index",
    "field_order",
    "get_field",
    "get_field_by_key",
    "iter_fields",
    "metric_catalog",
]
