"""Record normalizer: raw dataset rows to canonical ``EconomicRecord`` objects."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Sequence

from pydantic import ValidationError

from pipelines.model import EconomicRecord
from pipelines.parsing import MalformedValueError, parse_number
from pipelines.registry import ECONOMIC_FIELDS, PRESIDENTS_FIELD, YEAR_FIELD, FieldSpec, ParseRule

logger = logging.getLogger(__name__)


class RecordNormalizationError(ValueError):
    """A single raw row could not be normalized."""

    def __init__(self, index: int | None, field: str, value: Any, reason: str) -> None:
        self.index = index
        self.field = field
        self.value = value
        self.reason = reason
        location = f"record {index}" if index is not None else "record"
        super().__init__(f"{location}, field {field!r}: {reason} (value={value!r})")


@dataclass(frozen=True)
class NormalizationIssue:
    """A row that was skipped during batch normalization."""

    index: int
    field: str
    reason: str


@dataclass
class NormalizationResult:
    records: list[EconomicRecord] = field(default_factory=list)
    issues: list[NormalizationIssue] = field(default_factory=list)


def _label_specs(field_specs: Sequence[FieldSpec]) -> tuple[FieldSpec, FieldSpec]:
    """Presidents and year specs from ``field_specs``, falling back to the registry defaults."""

    labels = {spec.id: spec for spec in field_specs if spec.rule is ParseRule.LABEL}
    return (
        labels.get(PRESIDENTS_FIELD.id, PRESIDENTS_FIELD),
        labels.get(YEAR_FIELD.id, YEAR_FIELD),
    )


def _label(raw: Mapping[str, Any], spec: FieldSpec, index: int | None) -> str:
    value = raw.get(spec.key)
    if value is None:
        raise RecordNormalizationError(index, spec.key, value, "required label is missing")
    # JSON producers sometimes emit whole years as floats (1994.0).
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise RecordNormalizationError(
            index, spec.key, value, f"expected a string label, got {type(value).__name__}"
        )
    return str(value).strip()


def _metric(raw: Mapping[str, Any], spec: FieldSpec, index: int | None) -> float:
    if spec.key not in raw:
        logger.debug("Record %s has no column %r; treating as missing.", index, spec.key)
        return math.nan
    value = raw[spec.key]
    try:
        numeric = parse_number(value, spec.rule)
    except MalformedValueError as exc:
        raise RecordNormalizationError(index, spec.key, value, str(exc)) from exc
    if math.isnan(numeric):
        return numeric
    return numeric / spec.divisor


def normalize(
    raw: Mapping[str, Any] | EconomicRecord,
    field_specs: Sequence[FieldSpec] = ECONOMIC_FIELDS,
    *,
    index: int | None = None,
) -> EconomicRecord:
    """Normalize one raw row.

    Metric values are parsed by the rule declared in ``field_specs`` and
    rescaled by the field's ``divisor``. An ``EconomicRecord`` is already
    canonical and is returned as-is, so normalizing twice never rescales
    twice.

    Raises
    ------
    RecordNormalizationError
        When a label is missing or a numeric field holds a malformed value.
    """

    if isinstance(raw, EconomicRecord):
        return raw
    if not isinstance(raw, Mapping):
        raise RecordNormalizationError(
            index, "<record>", raw, f"expected a mapping, got {type(raw).__name__}"
        )

    presidents_spec, year_spec = _label_specs(field_specs)
    presidents = _label(raw, presidents_spec, index)
    year = _label(raw, year_spec, index)

    metrics: dict[str, float] = {}
    for spec in field_specs:
        if spec.rule is ParseRule.LABEL:
            continue
        metrics[spec.id] = _metric(raw, spec, index)

    try:
        return EconomicRecord(
            presidents=presidents,
            year=year,
            metrics=metrics,
            raw_payload=dict(raw),
        )
    except ValidationError as exc:
        first = exc.errors()[0]
        raise RecordNormalizationError(
            index, year_spec.key, raw.get(year_spec.key), first.get("msg", "invalid record")
        ) from exc


def normalize_batch(
    raw_records: Iterable[Mapping[str, Any]],
    field_specs: Sequence[FieldSpec] = ECONOMIC_FIELDS,
) -> NormalizationResult:
    """Normalize every row, skipping (and reporting) the ones that fail."""

    result = NormalizationResult()
    _, year_spec = _label_specs(field_specs)
    seen_years: set[str] = set()
    for index, raw in enumerate(raw_records):
        try:
            record = normalize(raw, field_specs, index=index)
        except RecordNormalizationError as exc:
            logger.warning("Skipping %s", exc)
            result.issues.append(NormalizationIssue(index=index, field=exc.field, reason=exc.reason))
            continue
        if record.year in seen_years:
            logger.warning("Skipping record %s: duplicate year %s.", index, record.year)
            result.issues.append(
                NormalizationIssue(index=index, field=year_spec.key, reason="duplicate year")
            )
            continue
        seen_years.add(record.year)
        result.records.append(record)
    return result


def normalize_all(
    raw_records: Iterable[Mapping[str, Any]],
    field_specs: Sequence[FieldSpec] = ECONOMIC_FIELDS,
) -> list[EconomicRecord]:
    return normalize_batch(raw_records, field_specs).records


def denormalize_value(spec: FieldSpec, value: float) -> float:
    """Undo the presentation rescale applied to ``spec`` (e.g. billions back to millions)."""

    if math.isnan(value):
        return value
    return value * spec.divisor


__all__ = [
    "NormalizationIssue",
    "NormalizationResult",
    "RecordNormalizationError",
    "denormalize_value",
    "normalize",
    "normalize_all",
    "normalize_batch",
]
