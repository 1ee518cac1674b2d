"""Command-line interface for inspecting a league database."""

from __future__ import annotations

import argparse
import csv
from dataclasses import asdict, fields
from pathlib import Path
from typing import Sequence

from pyleague.config import get_rules
from pyleague.config_loader import LeagueProfile
from pyleague.errors import LeagueError
from pyleague.league import LeagueService
from pyleague.persistence import RecordStore
from pyleague.stats import PlayerRating, StandingsRow


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Inspect league standings, leaders and trades")
    parser.add_argument("--db", type=Path, default=Path("pyleague.sqlite"), help="Path to the league SQLite file")
    parser.add_argument("--load-profile", type=Path, help="Load league rules JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save league rules JSON", default=None)
    parser.add_argument(
        "--prior-games",
        type=float,
        default=None,
        help="Games of league-average play blended into each weighted average",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    standings = commands.add_parser("standings", help="Print the league table")
    standings.add_argument("--output", type=Path, default=None, help="Optional CSV path for the table")

    leaders = commands.add_parser("leaders", help="Print plus-minus leader boards")
    leaders.add_argument("--limit", type=int, default=None, help="Players per board")

    trades = commands.add_parser("trades", help="Print trade history, most recent first")
    trades.add_argument("--team", default=None, help="Only trades involving this team name")

    commands.add_parser("verify", help="Check roster and player assignments agree")
    return parser.parse_args(argv)


def _print_standings(rows: list[StandingsRow]) -> None:
    print(f"{'#':>2}  {'Team':<20} {'W':>3} {'L':>3} {'T':>3} {'PF':>5} {'PA':>5} {'+/-':>5} {'Pct':>6} {'Strk':>4}")
    for row in rows:
        print(
            f"{row.rank:>2}  {row.name:<20} {row.wins:>3} {row.losses:>3} {row.ties:>3} "
            f"{row.points_for:>5} {row.points_against:>5} {row.point_differential:>+5} "
            f"{row.win_percentage:>6.3f} {row.streak:>4}"
        )


def _write_standings(rows: list[StandingsRow], path: Path) -> None:
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow([item.name for item in fields(StandingsRow)])
        for row in rows:
            writer.writerow(asdict(row).values())


def _print_board(title: str, ratings: list[PlayerRating]) -> None:
    print(title)
    if not ratings:
        print("  (no players)")
        return
    for index, rating in enumerate(ratings, start=1):
        per_game = "-" if rating.per_game is None else f"{rating.per_game:+.2f}"
        print(
            f"  {index}. {rating.name:<20} +/- {rating.plus_minus:>+4}  "
            f"avg {per_game:>6}  weighted {rating.weighted:+.3f}  ({rating.games_played} sets)"
        )


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    rules = get_rules()
    if args.load_profile:
        rules = LeagueProfile.load(args.load_profile).apply(rules)
    if args.prior_games is not None:
        rules = rules.with_overrides({"prior_games": max(0.0, args.prior_games)})
    if args.save_profile:
        LeagueProfile(
            {"prior_games": rules.prior_games, "leaders_limit": rules.leaders_limit}
        ).save(args.save_profile)
        print(f"Saved league profile to {args.save_profile}")

    service = LeagueService(RecordStore(args.db), rules)

    try:
        if args.command == "standings":
            rows = service.standings()
            _print_standings(rows)
            if args.output:
                _write_standings(rows, args.output)
                print(f"Wrote standings to {args.output}")
        elif args.command == "leaders":
            leaders = service.get_top_performers(args.limit)
            print(f"League average per set: {leaders.league_average:+.3f}")
            _print_board("Plus-minus", leaders.top_plus_minus)
            _print_board("Per set", leaders.top_average)
            _print_board("Weighted", leaders.top_weighted)
        elif args.command == "trades":
            history = service.trades.team_history(args.team) if args.team else service.trade_history()
            for trade in history:
                print(f"{trade.date.isoformat()}  {trade.description}")
                for entry in trade.players_traded:
                    print(f"    {entry.player_id}: {entry.from_team} -> {entry.to_team}")
            if not history:
                print("No trades recorded")
        elif args.command == "verify":
            problems = service.verify_rosters()
            for problem in problems:
                print(problem)
            if problems:
                print(f"{len(problems)} roster problem(s) found")
                return 1
            print("Rosters consistent")
    except LeagueError as exc:
        print(f"{exc.code}: {exc.message}")
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
