"""Command-line interface for balancing rosters and printing leaderboards."""

from __future__ import annotations

import argparse
import csv
import datetime
import random
from pathlib import Path

from pyleague.balancer import balance_with_report
from pyleague.config_loader import ScoringProfile
from pyleague.ingest import load_roster_csv
from pyleague.persistence import LeagueStore
from pyleague.ranking import resolve_window
from pyleague.workflow import LeagueService


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Pickup league team balancing and rankings")
    subparsers = parser.add_subparsers(dest="command", required=True)

    teams = subparsers.add_parser("teams", help="Balance a roster CSV into three teams")
    teams.add_argument("roster", type=Path, help="Path to roster CSV (id,name,position,rating)")
    teams.add_argument("--seed", type=int, default=None, help="Seed for a reproducible draw")
    teams.add_argument(
        "--column",
        action="append",
        default=[],
        help="Mapping for roster CSV columns (e.g., name=Nome)",
    )
    teams.add_argument("--output", type=Path, default=None, help="Optional CSV output path")

    rankings = subparsers.add_parser("rankings", help="Print the leaderboard from a league database")
    rankings.add_argument(
        "--db",
        type=Path,
        default=None,
        help="SQLite database path (takes precedence over PYLEAGUE_DB_PATH; defaults to pyleague.sqlite)",
    )
    rankings.add_argument("--period", choices=["all", "month", "year"], default="all")
    rankings.add_argument("--year", type=int, default=None)
    rankings.add_argument("--month", type=int, default=None)
    rankings.add_argument(
        "--scoring",
        type=Path,
        default=None,
        help="Scoring profile JSON to store before ranking",
    )
    rankings.add_argument("--limit", type=int, default=None, help="Only print the top N players")
    return parser.parse_args(argv)


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def _run_teams(args: argparse.Namespace) -> None:
    players = load_roster_csv(args.roster, mapping=_parse_mapping(args.column) or None)
    by_id = {player.player_id: player for player in players}
    rng = random.Random(args.seed) if args.seed is not None else None
    report = balance_with_report(players, rng=rng)

    for (slot, ids), rating in zip(report.assignment.iter_teams(), report.ratings):
        print(f"{slot.value} ({len(ids)} players, rating {rating:.1f})")
        for player_id in ids:
            player = by_id[player_id]
            print(f"  {player.name:<24} {player.position.value:<12} {player.rating:>4.1f}")
    print(f"Rating spread: {report.spread:.1f}")

    if args.output:
        with args.output.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["team", "order", "player_id", "name", "position", "rating"])
            for slot, ids in report.assignment.iter_teams():
                for order, player_id in enumerate(ids, start=1):
                    player = by_id[player_id]
                    writer.writerow([slot.value, order, player_id, player.name, player.position.value, player.rating])
        print(f"Wrote teams to {args.output}")


def _run_rankings(args: argparse.Namespace) -> None:
    if args.db is not None:
        store = LeagueStore(args.db, honor_env=False)
    else:
        store = LeagueStore(Path("pyleague.sqlite"))
    if args.scoring:
        store.ensure_default_scoring_rules()
        for rule in ScoringProfile.load(args.scoring).to_rules():
            store.set_scoring_rule(rule)
    window = resolve_window(args.period, today=datetime.date.today(), year=args.year, month=args.month)
    rankings = LeagueService(store).rankings(window)
    if args.limit is not None:
        rankings = rankings[: max(0, args.limit)]

    print(f"Rankings ({window.label})")
    print(f"{'#':>3} {'Player':<24} {'Pts':>6} {'G':>3} {'A':>3} {'W':>3} {'P':>3}")
    for index, ranking in enumerate(rankings, start=1):
        print(
            f"{index:>3} {ranking.name:<24} {ranking.points:>6g} {ranking.goals:>3} "
            f"{ranking.assists:>3} {ranking.wins:>3} {ranking.participations:>3}"
        )


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    if args.command == "teams":
        _run_teams(args)
    elif args.command == "rankings":
        _run_rankings(args)


if __name__ == "__main__":
    main()
