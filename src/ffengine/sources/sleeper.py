"""Consensus rank lookups from the public Sleeper players endpoint."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Iterable, Mapping, Optional

import httpx
from pydantic import BaseModel, ValidationError
from pydantic.config import ConfigDict

from ffengine.config import settings
from ffengine.models import OFFENSIVE_POSITIONS, RawPlayer, ScoredPlayer
from ffengine.persistence import StatsStore


logger = logging.getLogger(__name__)

UNRANKED_SENTINEL = 9_999_999
SLEEPER_CACHE_KEY = "sleeper:rankings"
SLEEPER_TTL_SECONDS = 24 * 60 * 60

_SUFFIX_PATTERN = re.compile(r"\s+(jr\.?|sr\.?|ii|iii|iv)$", re.IGNORECASE)
_PUNCT_PATTERN = re.compile(r"[.']")


class ConsensusRank(BaseModel):
    rank: int
    position: str
    team: str = ""

    model_config = ConfigDict(frozen=True)


def normalize_name(name: Optional[str]) -> str:
    lowered = (name or "").lower()
    lowered = _SUFFIX_PATTERN.sub("", lowered)
    return _PUNCT_PATTERN.sub("", lowered).strip()


def name_key(name: str, position: str, team: Optional[str]) -> str:
    return f"{normalize_name(name)}|{position}|{(team or '').upper()}"


def name_key_no_team(name: str, position: str) -> str:
    return f"{normalize_name(name)}|{position}"


def _full_name(entry: Mapping[str, Any]) -> str:
    full = entry.get("full_name")
    if full:
        return str(full)
    return f"{entry.get('first_name') or ''} {entry.get('last_name') or ''}".strip()


def parse_sleeper_players(payload: Mapping[str, Any]) -> Dict[str, ConsensusRank]:
    """Index ranked offensive players by both the team key and the no-team key.

    When two players share a key the better (lower) rank is kept.
    """

    rankings: Dict[str, ConsensusRank] = {}
    for entry in payload.values():
        if not isinstance(entry, Mapping):
            continue
        positions = entry.get("fantasy_positions") or []
        position = positions[0] if positions else entry.get("position")
        if position not in OFFENSIVE_POSITIONS:
            continue
        rank = entry.get("search_rank")
        if not isinstance(rank, (int, float)) or isinstance(rank, bool) or rank <= 0 or rank >= UNRANKED_SENTINEL:
            continue
        name = _full_name(entry)
        if not name:
            continue
        team = str(entry.get("team") or "").upper()
        record = ConsensusRank(rank=int(rank), position=position, team=team)
        for key in (name_key(name, position, team), name_key_no_team(name, position)):
            current = rankings.get(key)
            if current is None or record.rank < current.rank:
                rankings[key] = record
    return rankings


def _download(client: httpx.Client, url: str) -> Optional[Dict[str, Dict[str, Any]]]:
    try:
        resp = client.get(url)
        resp.raise_for_status()
        payload = resp.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Sleeper rankings fetch failed: %s", exc)
        return None
    if not isinstance(payload, Mapping):
        logger.warning("Sleeper rankings payload was %s, expected an object", type(payload).__name__)
        return None
    rankings = parse_sleeper_players(payload)
    logger.debug("Parsed %d Sleeper ranking keys", len(rankings))
    return {key: record.model_dump() for key, record in rankings.items()}


def fetch_sleeper_rankings(
    client: httpx.Client | None = None,
    url: str | None = None,
    *,
    store: StatsStore | None = None,
    ttl_seconds: float = SLEEPER_TTL_SECONDS,
) -> Dict[str, ConsensusRank]:
    """Fetch consensus ranks; failures yield an empty dict rather than raising."""

    target = url or settings.sleeper_url()
    owns_client = client is None
    http = client or httpx.Client(timeout=settings.http_timeout())
    try:
        if store is not None:
            raw = store.get_or_load(SLEEPER_CACHE_KEY, lambda: _download(http, target), ttl_seconds)
        else:
            raw = _download(http, target)
    finally:
        if owns_client:
            http.close()

    rankings: Dict[str, ConsensusRank] = {}
    for key, value in (raw or {}).items():
        try:
            rankings[key] = ConsensusRank.model_validate(value)
        except ValidationError:
            logger.debug("Dropping malformed cached rank for %s", key)
    return rankings


def attach_consensus_ranks(players: Iterable[RawPlayer | ScoredPlayer], rankings: Mapping[str, ConsensusRank]) -> Dict[str, int]:
    """Map player id to consensus rank, trying the team key before the no-team key."""

    ranks: Dict[str, int] = {}
    for player in players:
        record = rankings.get(name_key(player.name, player.position, player.team))
        if record is None:
            record = rankings.get(name_key_no_team(player.name, player.position))
        if record is not None:
            ranks[player.player_id] = record.rank
    return ranks
