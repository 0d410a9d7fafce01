"""Command-line entrypoint for dashboard jobs."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Iterable

from jobs.config import load_config, parse_selection
from jobs.load_dashboard import load_dashboard, main as run_load_dashboard
from pipelines.charts import resolve_charts
from pipelines.model import ChartPreset
from pipelines.presets import DEFAULT_PRESETS
from pipelines.registry import ECONOMIC_FIELDS, FieldSpec, get_field, metric_catalog


def _format_field(spec: FieldSpec) -> str:
    axis = spec.axis or "left"
    return (
        f"{spec.id}: column='{spec.key}' label='{spec.label}' unit={spec.unit or '-'} "
        f"rule={spec.rule.value} axis={axis}"
    )


def _format_preset(preset: ChartPreset) -> str:
    series = ", ".join(
        f"{item.metric_key}({item.axis})" for item in preset.series
    )
    cutoff = f" from={preset.drop_years_before}" if preset.drop_years_before else ""
    return f"{preset.id}: '{preset.title}' kind={preset.kind}{cutoff} series=[{series}]"


def _warn_unknown(keys: Iterable[str]) -> None:
    known = {preset.id for preset in DEFAULT_PRESETS}
    unknown = [key for key in keys if key not in known and get_field(key) is None]
    if unknown:
        print(f"Ignoring unknown selection ids: {', '.join(unknown)}", file=sys.stderr)


def _dump(payload: object) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Brazil macro dashboard job runner")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list-metrics", help="Show the dataset field registry")
    subparsers.add_parser("list-presets", help="Show the comparative chart presets")

    charts_parser = subparsers.add_parser(
        "charts", help="Resolve chart descriptors for a selection and print them as JSON"
    )
    charts_parser.add_argument(
        "--select", required=True, help="Comma-separated metric and/or preset ids"
    )
    charts_parser.add_argument(
        "--mode", choices=("auto", "adhoc", "preset"), default="auto", help="Resolution mode"
    )

    snapshot_parser = subparsers.add_parser(
        "snapshot", help="Fetch and normalize the dataset, then print records and charts as JSON"
    )
    snapshot_parser.add_argument("--url", help="Dataset URL (defaults to ECONOMIC_DATASET_URL)")
    snapshot_parser.add_argument("--format", choices=("json", "csv"), help="Dataset format")
    snapshot_parser.add_argument(
        "--select", help="Comma-separated metric and/or preset ids (defaults to all presets)"
    )
    snapshot_parser.add_argument(
        "--missing", choices=("gap", "zero"), help="How missing values are plotted"
    )
    snapshot_parser.add_argument(
        "--log-level",
        help="Override LOG_LEVEL for this invocation (e.g. DEBUG, INFO)",
    )
    snapshot_parser.add_argument(
        "--quiet", action="store_true", help="Only log; do not print the snapshot JSON"
    )

    args = parser.parse_args(argv)

    if args.command == "list-metrics":
        for spec in ECONOMIC_FIELDS:
            print(_format_field(spec))
        return 0

    if args.command == "list-presets":
        for preset in DEFAULT_PRESETS:
            print(_format_preset(preset))
        return 0

    if args.command == "charts":
        selection = parse_selection(args.select)
        _warn_unknown(selection)
        charts = resolve_charts(selection, metric_catalog(), DEFAULT_PRESETS, mode=args.mode)
        _dump([chart.model_dump(mode="json") for chart in charts])
        return 0

    if args.command == "snapshot":
        if args.log_level:
            os.environ["LOG_LEVEL"] = args.log_level
        selection = parse_selection(args.select) or None
        if selection:
            _warn_unknown(selection)
        config = load_config(
            dataset_url=args.url,
            dataset_format=args.format,
            missing_policy=args.missing,
            selected=selection,
        )
        if args.quiet:
            return run_load_dashboard(config)
        logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
        snapshot = load_dashboard(config)
        _dump(snapshot.to_payload())
        return 0 if snapshot.ok else 1

    parser.error("Unknown command")
    return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
