"""Lightweight REST client for the ffengine API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def _load_json(path: Path | None, default: object) -> object:
    if path is None:
        return default
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid JSON in {path}: {exc}") from exc


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the ffengine REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("players", type=Path, nargs="?", help="Roster JSON (list of player rows)")
    parser.add_argument("--stats", type=Path, help="Raw stats JSON keyed by player id then year")
    parser.add_argument("--depth-charts", type=Path, help="Depth chart JSON")
    parser.add_argument("--standings", type=Path, help="Standings JSON")
    parser.add_argument("--scoring", default="ppr", help="ppr, half or std")
    parser.add_argument("--td-pts", type=int, default=4, help="Passing touchdown points (4 or 6)")
    parser.add_argument("--position", help="Only return one position")
    parser.add_argument("--limit", type=int, help="Maximum players to return")
    parser.add_argument("--list-formats", action="store_true", help="List supported scoring formats and exit")
    parser.add_argument("--normalize-only", action="store_true", help="Return the normalized stats instead of rankings")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.list_formats:
            resp = client.get("/formats")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        if args.normalize_only:
            if args.stats is None:
                raise SystemExit("--stats is required with --normalize-only")
            resp = client.post(
                "/normalize",
                json={"stats": _load_json(args.stats, {}), "scoring": args.scoring, "td_pts": args.td_pts},
            )
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        if args.players is None:
            raise SystemExit("players file is required unless using --list-formats/--normalize-only")

        body = {
            "players": _load_json(args.players, []),
            "stats": _load_json(args.stats, {}),
            "depth_charts": _load_json(args.depth_charts, {}),
            "standings": _load_json(args.standings, {}),
            "scoring": args.scoring,
            "td_pts": args.td_pts,
            "position": args.position,
            "limit": args.limit,
        }
        resp = client.post("/rankings", json=body)
        if resp.status_code == 400:
            raise SystemExit(f"request rejected: {resp.json().get('detail')}")
        resp.raise_for_status()
        payload = resp.json()
        print(f"Ranked {payload['total_players']} players ({payload['format']})")
        for entry in payload["players"]:
            player = entry["player"]
            print(
                f"{entry['overall_rank']:>4} {entry['tier']} {entry['position_rank']:<5} "
                f"{player['name']:<24} {player['projection']:>5.2f}  {player['role']}"
            )


if __name__ == "__main__":
    main()
