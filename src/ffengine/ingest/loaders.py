"""File loaders for rosters, raw stats, depth charts and standings."""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from pydantic import BaseModel, ValidationError

from ffengine.config import DEFAULT_FORMAT, ScoringFormat
from ffengine.models import OFFENSIVE_POSITIONS, RawPlayer

from .stats import StatsCache, coerce_number, normalize_stats_cache
from .teams import canonical_team


logger = logging.getLogger(__name__)

# Each roster field accepts the long name first, then the short provider name.
ROSTER_FIELD_NAMES: Mapping[str, Sequence[str]] = {
    "player_id": ("id", "player_id"),
    "name": ("name", "nm"),
    "position": ("position", "pos"),
    "team": ("team", "tm"),
    "jersey": ("jersey", "n"),
    "headshot": ("headshot", "hs"),
    "age": ("age",),
    "experience": ("experience", "exp"),
}


class RosterRow(BaseModel):
    raw_player_id: str = ""
    raw_name: str = ""
    raw_position: str = ""
    raw_team: str = ""
    raw_jersey: str = ""
    raw_headshot: str = ""
    raw_age: str = ""
    raw_experience: str = ""

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "RosterRow":
        def extract(names: Sequence[str]) -> str:
            for name in names:
                value = row.get(name)
                if value not in (None, ""):
                    return str(value).strip()
            return ""

        return cls(**{f"raw_{field}": extract(names) for field, names in ROSTER_FIELD_NAMES.items()})

    def to_player(self) -> RawPlayer:
        return RawPlayer(
            player_id=self.raw_player_id,
            name=self.raw_name,
            position=self.raw_position.upper(),
            team=canonical_team(self.raw_team),
            jersey=self.raw_jersey,
            headshot=self.raw_headshot,
            age=_optional_int(self.raw_age),
            experience=_optional_int(self.raw_experience),
        )


def _optional_int(raw: str) -> Optional[int]:
    if not raw:
        return None
    value = coerce_number(raw)
    return int(value) if value else None


def _read_json(path: Path) -> Any:
    with path.open(encoding="utf-8") as f:
        return json.load(f)


def _read_roster_rows(path: Path) -> List[Mapping[str, Any]]:
    if path.suffix.lower() == ".csv":
        with path.open(newline="", encoding="utf-8") as f:
            return list(csv.DictReader(f))
    payload = _read_json(path)
    if isinstance(payload, Mapping):
        payload = payload.get("players", [])
    if not isinstance(payload, list):
        raise ValueError(f"{path} must contain a list of player rows")
    return payload


def rows_to_players(rows: Iterable[Any]) -> List[RawPlayer]:
    """Convert roster rows to ``RawPlayer``s, skipping invalid or non-offensive rows."""

    players: List[RawPlayer] = []
    for index, row in enumerate(rows):
        if not isinstance(row, Mapping):
            logger.warning("Skipping roster row %d: expected an object, got %s", index, type(row).__name__)
            continue
        try:
            player = RosterRow.from_mapping(row).to_player()
        except ValidationError as exc:
            logger.warning("Skipping roster row %d: %s", index, exc.errors()[0].get("msg", exc))
            continue
        if player.position not in OFFENSIVE_POSITIONS:
            logger.debug("Skipping %s: non-offensive position %s", player.name, player.position)
            continue
        players.append(player)
    return players


def load_players(path: Path) -> List[RawPlayer]:
    return rows_to_players(_read_roster_rows(path))


def load_stats(
    path: Path,
    fmt: ScoringFormat = DEFAULT_FORMAT,
    *,
    extra_aliases: Optional[Mapping[str, Sequence[str]]] = None,
) -> StatsCache:
    """Load ``{player_id: {year: {rawField: value}}}`` and normalize it."""

    payload = _read_json(path)
    if not isinstance(payload, Mapping):
        raise ValueError(f"{path} must contain an object keyed by player id")
    return normalize_stats_cache(payload, fmt, extra_aliases=extra_aliases)


def parse_depth_charts(payload: Any) -> Dict[str, Dict[str, List[str]]]:
    if not isinstance(payload, Mapping):
        raise ValueError("depth charts must be an object keyed by team")
    charts: Dict[str, Dict[str, List[str]]] = {}
    for team, positions in payload.items():
        if not isinstance(positions, Mapping):
            logger.warning("Skipping depth chart for %s: expected an object", team)
            continue
        chart = charts.setdefault(canonical_team(team), {})
        for position, ids in positions.items():
            if not isinstance(ids, list):
                continue
            chart.setdefault(str(position).upper(), [str(entry) for entry in ids])
    return charts


def load_depth_charts(path: Path) -> Dict[str, Dict[str, List[str]]]:
    return parse_depth_charts(_read_json(path))


def _stat_value(stats: Sequence[Mapping[str, Any]], name: str, abbreviation: str) -> Optional[float]:
    for stat in stats:
        if stat.get("name") == name or stat.get("abbreviation") == abbreviation:
            return coerce_number(stat.get("value"))
    return None


def _nested_entries(payload: Mapping[str, Any]) -> List[Mapping[str, Any]]:
    entries: List[Mapping[str, Any]] = list((payload.get("standings") or {}).get("entries") or [])
    for child in payload.get("children") or []:
        entries.extend(_nested_entries(child))
    return entries


def parse_standings(payload: Any) -> Dict[str, Dict[str, float]]:
    """Parse a flat ``{team: {wins, losses}}`` map or the nested provider shape."""

    if not isinstance(payload, Mapping):
        raise ValueError("standings must be an object")

    if "standings" not in payload and "children" not in payload:
        standings: Dict[str, Dict[str, float]] = {}
        for team, record in payload.items():
            wins = record.get("wins") if isinstance(record, Mapping) else record
            if wins is None:
                logger.debug("Skipping standings for %s without a win total", team)
                continue
            if isinstance(record, Mapping):
                standings[canonical_team(team)] = {
                    "wins": coerce_number(wins),
                    "losses": coerce_number(record.get("losses")),
                }
            else:
                standings[canonical_team(team)] = {"wins": coerce_number(wins), "losses": 0.0}
        return standings

    standings = {}
    for entry in _nested_entries(payload):
        abbreviation = (entry.get("team") or {}).get("abbreviation")
        stats = entry.get("stats") or []
        wins = _stat_value(stats, "wins", "W")
        if not abbreviation or wins is None:
            continue
        losses = _stat_value(stats, "losses", "L") or 0.0
        standings[canonical_team(abbreviation)] = {"wins": wins, "losses": losses}
    logger.debug("Parsed standings for %d teams", len(standings))
    return standings


def load_standings(path: Path) -> Dict[str, Dict[str, float]]:
    return parse_standings(_read_json(path))
