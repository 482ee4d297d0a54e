"""Lightweight REST client for the pyleague API."""

from __future__ import annotations

import argparse
import json

import httpx


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the pyleague REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("--list-games", action="store_true", help="List recent games and exit")
    parser.add_argument("--confirm", nargs=2, metavar=("GAME_ID", "PLAYER_ID"), help="Confirm a player for a game")
    parser.add_argument("--generate-teams", metavar="GAME_ID", help="Draw teams for a pending game")
    parser.add_argument(
        "--finalize",
        nargs=2,
        metavar=("GAME_ID", "WINNING_TEAM"),
        help="Finalize a game, e.g. --finalize abc123 team_2",
    )
    parser.add_argument(
        "--rankings",
        choices=["all", "month", "year"],
        help="Print the leaderboard for a period",
    )
    parser.add_argument("--year", type=int, help="Year for month/year rankings")
    parser.add_argument("--month", type=int, help="Month for monthly rankings")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.list_games:
            resp = client.get("/games")
            resp.raise_for_status()
            for game in resp.json():
                sizes = "/".join(str(len(team["players"])) for team in game["teams"])
                print(f"{game['game_id']} {game['date']} {game['status']} teams={sizes}")
            return

        if args.confirm:
            game_id, player_id = args.confirm
            resp = client.post(f"/games/{game_id}/attendance", json={"player_id": player_id})
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        if args.generate_teams:
            resp = client.post(f"/games/{args.generate_teams}/teams")
            if resp.status_code == 422:
                raise SystemExit(resp.json().get("detail", "Not enough confirmed players"))
            resp.raise_for_status()
            payload = resp.json()
            for team in payload["game"]["teams"]:
                names = ", ".join(player.get("name") or player["player_id"] for player in team["players"])
                print(f"{team['slot']} ({team['rating_total']:.1f}): {names}")
            return

        if args.finalize:
            game_id, winning_team = args.finalize
            resp = client.post(f"/games/{game_id}/finalize", json={"winning_team": winning_team})
            resp.raise_for_status()
            print(f"Game {game_id} finalized; {winning_team} won")
            return

        if args.rankings:
            params = {"period": args.rankings}
            if args.year:
                params["year"] = args.year
            if args.month:
                params["month"] = args.month
            resp = client.get("/rankings", params=params)
            resp.raise_for_status()
            payload = resp.json()
            print(f"Rankings ({payload['label']})")
            for entry in payload["rankings"]:
                print(f"{entry['rank']:>3} {entry['name']:<24} {entry['points']:>6g}")
            return

    parser.print_help()


if __name__ == "__main__":
    main()
