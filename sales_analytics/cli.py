#!/usr/bin/env python3
"""
Sales Analytics CLI — run analytics on a local CSV, or start the API server.

USAGE:
  python -m sales_analytics.cli analyze sales.csv top                        # Top series by total
  python -m sales_analytics.cli analyze sales.csv moving-average A --window 4
  python -m sales_analytics.cli analyze sales.csv correlation
  python -m sales_analytics.cli analyze sales.csv forecast A --periods 6
  python -m sales_analytics.cli columns sales.csv                            # Inferred columns

  python -m sales_analytics.cli serve                                        # Start API server
  python -m sales_analytics.cli serve --port 8000
"""
from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from sales_analytics.analytics import correlation_matrix, forecast, moving_average, top_series
from sales_analytics.analytics.common import sanitize_for_json
from sales_analytics.config import DEFAULT_FORECAST_PERIODS, DEFAULT_WINDOW
from sales_analytics.data.loader import load_csv
from sales_analytics.data.normalize import normalize
from sales_analytics.errors import AnalyticsError, MissingParameter, NotFound


def _load_series(path: str):
    series = normalize(load_csv(Path(path)))
    if series is None:
        raise NotFound(f"{path} has no data rows")
    return series


def _run_operation(args) -> dict:
    series = _load_series(args.file)
    if args.operation == "top":
        return top_series(series)
    if args.operation == "correlation":
        return correlation_matrix(series)
    if not args.series:
        raise MissingParameter(f"{args.operation} needs a series name")
    if args.operation == "moving-average":
        return moving_average(series, args.series, args.window)
    return forecast(series, args.series, args.periods)


def cmd_analyze(args):
    """Run one analytics operation and print JSON."""
    result = _run_operation(args)
    print(json.dumps(sanitize_for_json(result), indent=2))


def cmd_columns(args):
    """Show the inferred date/series columns and how many rows survive."""
    frame = load_csv(Path(args.file))
    series = normalize(frame)
    if series is None:
        print(f"{args.file}: no data rows ({len(frame.columns)} columns)")
        return
    print(f"  Date column:   {series.date_column}")
    print(f"  Series:        {', '.join(series.series_columns) or '(none)'}")
    print(f"  Rows:          {len(series):,} of {len(frame):,} ({series.dropped_rows:,} dropped)")


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    print(f"\nStarting Sales Analytics API on port {args.port}...")
    uvicorn.run("sales_analytics.main:app", host="0.0.0.0", port=args.port, reload=args.reload,
                timeout_keep_alive=65)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sales Analytics — CSV timeseries analytics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # analyze subcommand
    analyze_parser = subparsers.add_parser("analyze", help="Run analytics on a local CSV")
    analyze_parser.add_argument("file", help="Path to CSV")
    analyze_parser.add_argument(
        "operation", choices=["top", "moving-average", "correlation", "forecast"], help="Operation",
    )
    analyze_parser.add_argument("series", nargs="?", help="Series name (moving-average, forecast)")
    analyze_parser.add_argument("--window", type=int, default=DEFAULT_WINDOW, help="Moving-average window (default 3)")
    analyze_parser.add_argument("--periods", type=int, default=DEFAULT_FORECAST_PERIODS, help="Forecast periods (default 3)")
    analyze_parser.set_defaults(func=cmd_analyze)

    # columns subcommand
    columns_parser = subparsers.add_parser("columns", help="Show inferred columns")
    columns_parser.add_argument("file", help="Path to CSV")
    columns_parser.set_defaults(func=cmd_columns)

    # serve subcommand
    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    try:
        args.func(args)
    except AnalyticsError as exc:
        print(f"Error ({exc.code}): {exc.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
