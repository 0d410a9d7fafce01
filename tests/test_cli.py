import asyncio
import json

import httpx
import pytest

import jobs.__main__ as cli
import jobs.load_dashboard as load_dashboard_job
from jobs.__main__ import main
from jobs.load_dashboard import load_dashboard_async
from pipelines.registry import ECONOMIC_FIELDS
from pipelines.session import FETCH_ERROR_MESSAGE


def test_list_metrics(capsys):
    assert main(["list-metrics"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == len(ECONOMIC_FIELDS)
    assert lines[0].startswith("gdp-nominal: column='Nominal GDP (in Millions of R$)'")


def test_list_presets(capsys):
    assert main(["list-presets"]) == 0

    out = capsys.readouterr().out
    assert "gdp-inflation: 'GDP Growth vs. Inflation' kind=line" in out
    assert "ipca-inflation(right)" in out


def test_charts_command_ignores_unknown_ids(capsys):
    assert main(["charts", "--select", "gdp-growth,not-a-real-metric", "--mode", "adhoc"]) == 0

    captured = capsys.readouterr()
    charts = json.loads(captured.out)
    assert [chart["id"] for chart in charts] == ["gdp-growth"]
    assert charts[0]["series"][0]["color"] == "hsl(0, 70%, 50%)"
    assert "not-a-real-metric" in captured.err


@pytest.fixture()
def clean_env(monkeypatch, tmp_path):
    for name in (
        "ECONOMIC_DATASET_URL",
        "ECONOMIC_DATASET_FORMAT",
        "FETCH_TIMEOUT_SECONDS",
        "FETCH_ATTEMPTS",
        "MISSING_VALUE_POLICY",
        "DASHBOARD_SELECTION",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def _serve(monkeypatch, handler):
    def fake_load_dashboard(config=None):
        transport = httpx.MockTransport(handler)
        return asyncio.run(load_dashboard_async(config, transport=transport))

    monkeypatch.setattr(cli, "load_dashboard", fake_load_dashboard)


def test_snapshot_prints_records_and_chart_rows(clean_env, monkeypatch, capsys, raw_rows):
    _serve(monkeypatch, lambda request: httpx.Response(200, json=raw_rows))

    code = main(["snapshot", "--select", "gdp-growth-rates,icv", "--missing", "zero"])

    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert payload["status"] == "ready"
    assert payload["error"] is None
    assert [record["year"] for record in payload["records"]] == ["1994", "1995", "1996", "2022"]
    assert payload["records"][1]["trade-balance-growth"] is None
    assert [chart["id"] for chart in payload["charts"]] == ["gdp-growth-rates", "icv"]
    assert [row["year"] for row in payload["charts"][0]["rows"]] == ["1996", "2022"]
    assert payload["charts"][1]["rows"][-1] == {"year": "2022", "icv": 0.0}


def test_snapshot_gap_policy_keeps_missing_as_null(clean_env, monkeypatch, capsys, raw_rows):
    _serve(monkeypatch, lambda request: httpx.Response(200, json=raw_rows))

    assert main(["snapshot", "--select", "icv"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["charts"][0]["rows"][-1] == {"year": "2022", "icv": None}


def test_snapshot_fetch_failure_exits_nonzero(clean_env, monkeypatch, capsys):
    _serve(monkeypatch, lambda request: httpx.Response(404))

    code = main(["snapshot", "--select", "icv"])

    payload = json.loads(capsys.readouterr().out)
    assert code == 1
    assert payload["status"] == "error"
    assert payload["error"] == FETCH_ERROR_MESSAGE
    assert payload["records"] == []
    assert payload["charts"] == []


def test_snapshot_quiet_only_reports_exit_code(clean_env, monkeypatch, capsys):
    def failing_load_dashboard(config=None):
        transport = httpx.MockTransport(lambda request: httpx.Response(500))
        return asyncio.run(load_dashboard_async(config, transport=transport))

    monkeypatch.setattr(load_dashboard_job, "load_dashboard", failing_load_dashboard)

    assert main(["snapshot", "--select", "icv", "--quiet"]) == 1
    assert capsys.readouterr().out == ""
