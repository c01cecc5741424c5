"""Command-line interface for ranking players from JSON inputs."""

from __future__ import annotations

import argparse
import csv
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ffengine.config import DEFAULT_FORMAT, get_format
from ffengine.config import settings
from ffengine.config_loader import AliasProfile
from ffengine.engine import RankedEntry, build_board
from ffengine.ingest import load_depth_charts, load_players, load_standings, load_stats
from ffengine.persistence import StatsStore
from ffengine.sources import attach_consensus_ranks, fetch_sleeper_rankings


logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "overall_rank",
    "position_rank",
    "tier",
    "player_id",
    "name",
    "position",
    "team",
    "projection",
    "floor",
    "ceiling",
    "confidence",
    "volatility",
    "boom_pct",
    "bust_pct",
    "role",
    "consensus_rank",
    "note",
]


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Rank fantasy players from season stats")
    parser.add_argument("players", type=Path, help="Path to roster JSON or CSV")
    parser.add_argument("--stats", type=Path, default=None, help="Raw stats JSON keyed by player id then year")
    parser.add_argument("--depth-charts", type=Path, default=None, help="Depth chart JSON (team -> position -> ids)")
    parser.add_argument("--standings", type=Path, default=None, help="Standings JSON (flat or provider shape)")
    parser.add_argument("--scoring", choices=("ppr", "half", "std"), default=DEFAULT_FORMAT.scoring)
    parser.add_argument("--td-pts", type=int, choices=(4, 6), default=DEFAULT_FORMAT.td_pts)
    parser.add_argument("--position", default=None, help="Only show one position (QB, RB, WR, TE)")
    parser.add_argument("--limit", type=int, default=None, help="Maximum rows to output")
    parser.add_argument(
        "--stat-alias",
        action="append",
        default=[],
        help="Extra provider synonym for a stat field (e.g., pass_yd=passYds)",
    )
    parser.add_argument("--load-profile", type=Path, help="Load stat alias profile JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save stat alias profile JSON", default=None)
    parser.add_argument(
        "--consensus",
        action="store_true",
        help="Attach Sleeper consensus ranks (cached in the local store)",
    )
    parser.add_argument("--output", type=Path, default=None, help="Write the ranked board to CSV")
    parser.add_argument("--json", action="store_true", help="Print the ranked board as JSON")
    parser.add_argument("--log-level", default=settings.log_level(), help="Logging level (default WARNING)")
    return parser.parse_args(argv)


def _parse_mapping(entries: list[str]) -> dict[str, list[str]]:
    mapping: dict[str, list[str]] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid alias entry '{entry}', expected field=alias")
        key, value = entry.split("=", 1)
        mapping.setdefault(key.strip(), []).append(value.strip())
    return mapping


def _entry_row(entry: RankedEntry, consensus: Dict[str, int]) -> dict[str, object]:
    player = entry.player
    return {
        "overall_rank": entry.overall_rank,
        "position_rank": entry.position_rank,
        "tier": entry.tier,
        "player_id": player.player_id,
        "name": player.name,
        "position": player.position,
        "team": player.team,
        "projection": player.projection,
        "floor": player.floor,
        "ceiling": player.ceiling,
        "confidence": player.confidence,
        "volatility": player.volatility,
        "boom_pct": player.boom_pct,
        "bust_pct": player.bust_pct,
        "role": player.role,
        "consensus_rank": consensus.get(player.player_id, ""),
        "note": player.note,
    }


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        fmt = get_format(args.scoring, args.td_pts)
        aliases = _parse_mapping(args.stat_alias)
        if args.load_profile:
            profile = AliasProfile.load(args.load_profile)
            for field, names in aliases.items():
                profile.stat_aliases.setdefault(field, []).extend(names)
            aliases = profile.stat_aliases
        # Validate the merged aliases the same way a loaded profile is validated.
        profile = AliasProfile.from_dict({"stat_aliases": aliases})
    except (KeyError, ValueError) as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc

    if args.save_profile:
        profile.save(args.save_profile)
        print(f"Saved alias profile to {args.save_profile}", file=sys.stderr)

    players = load_players(args.players)
    cache = load_stats(args.stats, DEFAULT_FORMAT, extra_aliases=profile.stat_aliases or None) if args.stats else {}
    depth_charts = load_depth_charts(args.depth_charts) if args.depth_charts else {}
    standings = load_standings(args.standings) if args.standings else {}

    entries = build_board(
        players,
        cache,
        depth_charts,
        standings,
        fmt,
        position=args.position,
        limit=args.limit,
    )

    consensus: Dict[str, int] = {}
    if args.consensus:
        rankings = fetch_sleeper_rankings(store=StatsStore())
        consensus = attach_consensus_ranks([entry.player for entry in entries], rankings)
        if not rankings:
            print("Consensus ranks unavailable; continuing without them", file=sys.stderr)

    rows: List[dict[str, object]] = [_entry_row(entry, consensus) for entry in entries]
    print(f"Ranked {len(players)} players ({fmt.label}); showing {len(rows)}", file=sys.stderr)

    if args.output:
        with args.output.open("w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS)
            writer.writeheader()
            writer.writerows(rows)
        print(f"Wrote rankings to {args.output}", file=sys.stderr)

    if args.json:
        print(json.dumps(rows, indent=2))
    elif not args.output:
        for row in rows:
            print(
                f"{row['overall_rank']:>4} {row['tier']} {row['position_rank']:<5} "
                f"{row['name']:<24} {row['team']:<4} {row['projection']:>5.2f}  {row['role']}"
            )


if __name__ == "__main__":
    main()
