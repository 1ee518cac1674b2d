"""Lightweight REST client for the pyleague API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def parse_set(raw: str) -> dict[str, str]:
    """``21-18`` style score, taken from the recording team's side."""

    if "-" not in raw:
        raise SystemExit(f"Invalid set score '{raw}', expected FOR-AGAINST")
    points_for, points_against = raw.split("-", 1)
    return {"points_for": points_for.strip(), "points_against": points_against.strip()}


def _print_response(resp: httpx.Response) -> None:
    if resp.status_code >= 400:
        try:
            detail = resp.json().get("detail")
        except json.JSONDecodeError:
            detail = resp.text
        raise SystemExit(f"{resp.status_code}: {json.dumps(detail)}")
    print(json.dumps(resp.json(), indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the pyleague REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("--standings", action="store_true", help="Print the league table")
    parser.add_argument("--leaders", action="store_true", help="Print leader boards")
    parser.add_argument("--trades", metavar="TEAM_ID", nargs="?", const="", help="Trade history, optionally for one team")
    parser.add_argument("--move", nargs=3, metavar=("PLAYER_ID", "FROM", "TO"), help="Move a player; use '-' for free agency")
    parser.add_argument("--announce", action="store_true", help="Record the move as a trade")
    parser.add_argument("--game", metavar="GAME_ID", help="Game to fetch or record sets for")
    parser.add_argument("--set", dest="sets", action="append", default=[], help="Set score FOR-AGAINST (repeatable)")
    parser.add_argument("--subbed", action="append", default=[], help="Player id sitting out (repeatable)")
    parser.add_argument("--sets-file", type=Path, help="JSON file with a list of set payloads")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.standings:
            _print_response(client.get("/standings"))
        if args.leaders:
            _print_response(client.get("/leaders"))
        if args.trades is not None:
            path = f"/teams/{args.trades}/trades" if args.trades else "/trades"
            _print_response(client.get(path))
        if args.move:
            player_id, from_team, to_team = args.move
            payload = {
                "player_id": player_id,
                "from_team_id": None if from_team == "-" else from_team,
                "to_team_id": None if to_team == "-" else to_team,
                "record_trade": args.announce,
            }
            _print_response(client.post("/moves", json=payload))
        if args.game:
            sets = [parse_set(raw) for raw in args.sets]
            if args.sets_file:
                sets.extend(json.loads(args.sets_file.read_text(encoding="utf-8")))
            if sets:
                payload = {"sets": sets, "subbed_player_ids": args.subbed}
                _print_response(client.post(f"/games/{args.game}/sets", json=payload))
            else:
                _print_response(client.get(f"/games/{args.game}"))


if __name__ == "__main__":
    main()
