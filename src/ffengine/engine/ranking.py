"""Top-level ranking: distributions once, score everyone, sort, tier."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from ffengine.config import DEFAULT_FORMAT, ScoringFormat
from ffengine.ingest.stats import StatsCache, coerce_number, recompute_stats_cache
from ffengine.ingest.teams import canonical_team, canonical_team_keys
from ffengine.models import RawPlayer, ScoredPlayer

from .distributions import build_distributions
from .scorer import score_player


logger = logging.getLogger(__name__)

DepthCharts = Mapping[str, Mapping[str, Sequence[Any]]]
Standings = Mapping[str, Any]

MAX_DEPTH_RANK = 3
TIER_CUTOFFS: Sequence[tuple[str, int]] = (("S", 5), ("A", 15), ("B", 30), ("C", 60))
LAST_TIER = "D"


def build_depth_ranks(players: Iterable[RawPlayer], depth_charts: DepthCharts | None) -> Dict[str, int]:
    """Map player id to depth-chart slot (1-3); 0 when unlisted."""

    charts = canonical_team_keys(depth_charts or {})
    ranks: Dict[str, int] = {}
    for player in players:
        team_chart = charts.get(canonical_team(player.team)) or {}
        order = [str(entry) for entry in (team_chart.get(player.position) or ())]
        try:
            rank = order.index(player.player_id) + 1
        except ValueError:
            rank = 0
        ranks[player.player_id] = rank if rank <= MAX_DEPTH_RANK else 0
    return ranks


def _team_wins(standings: Mapping[str, Any], team: str) -> Optional[float]:
    entry = standings.get(canonical_team(team))
    if entry is None:
        return None
    if isinstance(entry, Mapping):
        entry = entry.get("wins")
    if entry is None:
        return None
    return coerce_number(entry)


def rank_players(
    players: Iterable[RawPlayer],
    stats_cache: StatsCache | None,
    depth_charts: DepthCharts | None = None,
    standings: Standings | None = None,
    fmt: ScoringFormat = DEFAULT_FORMAT,
) -> List[ScoredPlayer]:
    """Score every player and return them by projection, highest first.

    Equal projections keep their input order.
    """

    roster = list(players)
    cache: StatsCache = stats_cache or {}
    if fmt != DEFAULT_FORMAT:
        cache = recompute_stats_cache(cache, fmt)

    distributions = build_distributions(roster, cache)
    depth_ranks = build_depth_ranks(roster, depth_charts)
    team_standings = canonical_team_keys(standings or {})

    scored = [
        score_player(
            player,
            cache.get(player.player_id),
            distributions,
            depth_rank=depth_ranks.get(player.player_id, 0),
            team_wins=_team_wins(team_standings, player.team),
        )
        for player in roster
    ]
    scored.sort(key=lambda p: p.projection, reverse=True)
    logger.debug("Ranked %d players under %s", len(scored), fmt.key)
    return scored


@dataclass(frozen=True)
class RankedEntry:
    player: ScoredPlayer
    overall_rank: int
    position_rank: str
    tier: str


def tier_for_rank(overall_rank: int) -> str:
    for tier, cutoff in TIER_CUTOFFS:
        if overall_rank <= cutoff:
            return tier
    return LAST_TIER


def assign_tiers(ranked: Iterable[ScoredPlayer]) -> List[RankedEntry]:
    """Attach overall rank, position rank label and tier to a ranked list."""

    seen: Dict[str, int] = {}
    entries: List[RankedEntry] = []
    for index, player in enumerate(ranked, start=1):
        seen[player.position] = seen.get(player.position, 0) + 1
        entries.append(
            RankedEntry(
                player=player,
                overall_rank=index,
                position_rank=f"{player.position}{seen[player.position]}",
                tier=tier_for_rank(index),
            )
        )
    return entries


def build_board(
    players: Iterable[RawPlayer],
    stats_cache: StatsCache | None,
    depth_charts: DepthCharts | None = None,
    standings: Standings | None = None,
    fmt: ScoringFormat = DEFAULT_FORMAT,
    *,
    position: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[RankedEntry]:
    """Rank, tier, then filter by position and truncate.

    Tiers and overall ranks are assigned over the full board before any
    filtering, so a position view keeps league-wide ranks.
    """

    entries = assign_tiers(rank_players(players, stats_cache, depth_charts, standings, fmt))
    if position:
        wanted = position.upper()
        entries = [entry for entry in entries if entry.player.position == wanted]
    if limit is not None:
        entries = entries[: max(limit, 0)]
    return entries
