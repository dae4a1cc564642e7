"""Command-line interface for importing, browsing and valuing players."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

import uvicorn

from spirit11.api import create_app
from spirit11.catalog import filter_players
from spirit11.config import ALL_CATEGORIES, Settings
from spirit11.config_loader import ImportProfile
from spirit11.ingest import ImportValidationError, import_players
from spirit11.models import RawStats
from spirit11.persistence import Spirit11Store
from spirit11.valuation import derive_stats


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Spirit11 fantasy cricket tools")
    parser.add_argument("--db", type=Path, default=None, help="SQLite database path (defaults to SPIRIT11_DB_PATH)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    import_cmd = sub.add_parser("import", help="Import players from a tournament CSV")
    import_cmd.add_argument("csv", type=Path, help="Path to the players CSV")
    import_cmd.add_argument(
        "--column",
        action="append",
        default=[],
        help="Mapping for CSV columns (e.g., total_runs=Runs)",
    )
    import_cmd.add_argument("--load-profile", type=Path, default=None, help="Load column mapping JSON")
    import_cmd.add_argument("--save-profile", type=Path, default=None, help="Save column mapping JSON")
    import_cmd.add_argument("--replace", action="store_true", help="Replace the stored catalog instead of appending")
    import_cmd.add_argument("--report", type=Path, default=None, help="Optional path to write the import report JSON")

    players_cmd = sub.add_parser("players", help="List stored players")
    players_cmd.add_argument("--search", default="", help="Case-insensitive name/university search")
    players_cmd.add_argument("--category", default=ALL_CATEGORIES, help="Batsman, Bowler, All-Rounder or all")

    value_cmd = sub.add_parser("value", help="Derive rates and value for one stat line")
    value_cmd.add_argument("--runs", type=int, default=0, help="Total runs")
    value_cmd.add_argument("--balls", type=int, default=0, help="Balls faced")
    value_cmd.add_argument("--innings", type=int, default=0, help="Innings played")
    value_cmd.add_argument("--wickets", type=int, default=0, help="Wickets taken")
    value_cmd.add_argument("--overs", type=int, default=0, help="Overs bowled")
    value_cmd.add_argument("--conceded", type=int, default=0, help="Runs conceded")

    serve_cmd = sub.add_parser("serve", help="Run the REST API with uvicorn")
    serve_cmd.add_argument("--host", default="127.0.0.1")
    serve_cmd.add_argument("--port", type=int, default=8000)

    return parser.parse_args(argv)


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def _open_store(args: argparse.Namespace) -> Spirit11Store:
    return Spirit11Store(args.db if args.db is not None else Settings.from_env().db_path)


def run_import(args: argparse.Namespace) -> int:
    mapping = _parse_mapping(args.column)
    if args.load_profile:
        mapping = ImportProfile.load(args.load_profile).players_mapping | mapping
    if args.save_profile:
        ImportProfile(mapping).save(args.save_profile)
        print(f"Saved mapping profile to {args.save_profile}")

    store = _open_store(args)
    try:
        report = import_players(
            store,
            args.csv.read_text(encoding="utf-8"),
            mapping=mapping or None,
            replace=args.replace,
        )
    except ImportValidationError as exc:
        print(f"Import failed: {exc}")
        return 1

    print(f"Imported {report.imported_rows}/{report.total_rows} players")
    if report.rejected_rows:
        preview = ", ".join(report.rejected_rows[:5])
        more = len(report.rejected_rows) - 5
        suffix = f", +{more} more" if more > 0 else ""
        print(f"Rejected rows: {preview}{suffix}")
    if args.report:
        payload = {
            "total_rows": report.total_rows,
            "imported_rows": report.imported_rows,
            "rejected_rows": report.rejected_rows,
        }
        args.report.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"Wrote import report to {args.report}")
    return 0


def run_players(args: argparse.Namespace) -> int:
    try:
        players = filter_players(_open_store(args).list_players(), args.search, args.category)
    except ValueError as exc:
        print(f"Invalid filter: {exc}")
        return 1
    print("player_id,name,university,category,value")
    for player in players:
        print(f"{player.player_id},{player.name},{player.university},{player.category},{player.stats.value}")
    return 0


def run_value(args: argparse.Namespace) -> int:
    stats = derive_stats(
        RawStats(
            total_runs=args.runs,
            balls_faced=args.balls,
            innings_played=args.innings,
            wickets=args.wickets,
            overs_bowled=args.overs,
            runs_conceded=args.conceded,
        )
    )
    print(f"Batting strike rate: {stats.batting_strike_rate:.2f}")
    print(f"Batting average:     {stats.batting_average:.2f}")
    print(f"Bowling strike rate: {stats.bowling_strike_rate:.2f}")
    print(f"Economy rate:        {stats.economy_rate:.2f}")
    print(f"Value:               {stats.value:,}")
    return 0


def run_serve(args: argparse.Namespace) -> int:
    app = create_app(store=_open_store(args))
    uvicorn.run(app, host=args.host, port=args.port)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "import":
        return run_import(args)
    if args.command == "players":
        return run_players(args)
    if args.command == "value":
        return run_value(args)
    if args.command == "serve":
        return run_serve(args)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
