"""Build per-position reference populations for percentile scoring."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ffengine.ingest.stats import StatsCache, seasons_desc
from ffengine.models import RawPlayer, SeasonStat

from .strategies import get_strategy


logger = logging.getLogger(__name__)

DISTRIBUTION_MIN_GP = 4
SCORING_MIN_GP = 3


def best_season(seasons: Mapping[int, SeasonStat] | None, min_gp: int = 1) -> Optional[Tuple[SeasonStat, int]]:
    """Return ``(stat, year)`` for the most recent season with ``gp >= min_gp``.

    Falls back to the most recent season of any length; ``None`` when the
    player has no seasons at all.
    """

    ordered = seasons_desc(seasons)
    if not ordered:
        return None
    for year, stat in ordered:
        if stat.gp >= min_gp:
            return stat, year
    year, stat = ordered[0]
    return stat, year


@dataclass(frozen=True)
class PositionDistribution:
    """Ascending metric arrays for one position."""

    position: str
    metrics: Mapping[str, Tuple[float, ...]] = field(default_factory=dict)
    size: int = 0

    def values(self, key: str) -> Tuple[float, ...]:
        return self.metrics.get(key, ())


@dataclass(frozen=True)
class DistributionSet:
    distributions: Mapping[str, PositionDistribution] = field(default_factory=dict)
    team_target_totals: Mapping[str, float] = field(default_factory=dict)
    team_rush_totals: Mapping[str, float] = field(default_factory=dict)

    def for_position(self, position: str) -> PositionDistribution:
        key = (position or "").upper()
        return self.distributions.get(key) or PositionDistribution(position=key)

    def team_total(self, team: str, source: str) -> float:
        totals = self.team_target_totals if source == "tgt" else self.team_rush_totals
        return totals.get(team, 0.0)


def _team_totals(players: Iterable[RawPlayer], cache: StatsCache) -> Tuple[Dict[str, float], Dict[str, float]]:
    targets: Dict[str, float] = {}
    rushes: Dict[str, float] = {}
    for player in players:
        picked = best_season(cache.get(player.player_id), DISTRIBUTION_MIN_GP)
        if picked is None:
            continue
        stat, _year = picked
        targets[player.team] = targets.get(player.team, 0.0) + stat.tgt
        rushes[player.team] = rushes.get(player.team, 0.0) + stat.rush_att
    return targets, rushes


def build_distributions(players: Iterable[RawPlayer], stats_cache: StatsCache | None) -> DistributionSet:
    """Collect per-position metric arrays and team opportunity totals.

    Team totals sum every tracked player's best season. Metric arrays only
    take seasons that clear the games-played threshold.
    """

    cache: StatsCache = stats_cache or {}
    roster = list(players)
    team_targets, team_rush = _team_totals(roster, cache)
    totals = {"tgt": team_targets, "rush": team_rush}

    collected: Dict[str, Dict[str, List[float]]] = {}
    counts: Dict[str, int] = {}
    for player in roster:
        strategy = get_strategy(player.position)
        if strategy is None:
            continue
        picked = best_season(cache.get(player.player_id), DISTRIBUTION_MIN_GP)
        if picked is None:
            continue
        stat, _year = picked
        if stat.gp < DISTRIBUTION_MIN_GP:
            continue
        gp = max(stat.gp, 1)
        team_total = totals[strategy.share_source].get(player.team, 0.0)
        arrays = collected.setdefault(strategy.position, {key: [] for key in strategy.metrics})
        for key in strategy.metrics:
            arrays[key].append(strategy.metric(key, stat, gp, team_total))
        counts[strategy.position] = counts.get(strategy.position, 0) + 1

    distributions = {
        position: PositionDistribution(
            position=position,
            metrics={key: tuple(sorted(values)) for key, values in arrays.items()},
            size=counts.get(position, 0),
        )
        for position, arrays in collected.items()
    }
    for position, dist in distributions.items():
        logger.debug("Built %s distribution from %d players", position, dist.size)

    return DistributionSet(
        distributions=distributions,
        team_target_totals=team_targets,
        team_rush_totals=team_rush,
    )
