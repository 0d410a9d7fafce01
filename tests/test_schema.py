import math

import pytest
from pydantic import ValidationError

from pipelines.model import ChartDescriptor, ChartPreset, ChartSeries, EconomicRecord, PresetSeries


def test_economic_record_serialization_roundtrip():
    payload = {
        "presidents": "Luiz Inácio Lula da Silva",
        "year": 2003,
        "metrics": {"gdp-growth": 1.14, "ipca-inflation": 9.3},
        "raw_payload": {"Year": "2003"},
    }

    record = EconomicRecord(**payload)

    assert record.year == "2003"
    assert record.year_number == 2003
    assert record.value("gdp-growth") == pytest.approx(1.14)

    serialized = record.model_dump()
    assert serialized["metrics"]["ipca-inflation"] == pytest.approx(9.3)
    assert isinstance(serialized["raw_payload"], dict)


def test_economic_record_absent_metric_reads_as_missing():
    record = EconomicRecord(presidents="Dilma Rousseff", year="2015", metrics={"icv": math.nan})

    assert record.is_missing("icv")
    assert record.is_missing("not-collected")
    assert math.isnan(record.value("not-collected"))


def test_economic_record_requires_four_digit_year():
    with pytest.raises(ValueError):
        EconomicRecord(presidents="Dilma Rousseff", year="15", metrics={})


def test_economic_record_is_frozen():
    record = EconomicRecord(presidents="Michel Temer", year="2017", metrics={})

    with pytest.raises(ValidationError):
        record.year = "2018"


def test_scatter_descriptor_needs_exactly_two_series():
    one = (ChartSeries(metric_key="unemployment", label="Unemployment", color="gray"),)

    with pytest.raises(ValidationError):
        ChartDescriptor(id="bad", title="Bad", kind="scatter", series=one)


def test_line_descriptor_needs_a_series():
    with pytest.raises(ValidationError):
        ChartDescriptor(id="empty", title="Empty", kind="line", series=())


def test_preset_rejects_inverted_domain():
    with pytest.raises(ValidationError):
        ChartPreset(
            id="inverted",
            title="Inverted",
            series=(PresetSeries(metric_key="gdp-growth"),),
            y_domain=(10.0, -10.0),
        )


def test_preset_rejects_unknown_kind():
    with pytest.raises(ValidationError):
        ChartPreset(
            id="bars",
            title="Bars",
            kind="bar",
            series=(PresetSeries(metric_key="gdp-growth"),),
        )
