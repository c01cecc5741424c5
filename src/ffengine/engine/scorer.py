"""Per-player scoring: component scores, blended outputs and risk metrics."""

from __future__ import annotations

from statistics import fmean, pstdev
from typing import Mapping, Optional, Sequence

from ffengine.ingest.stats import round_half_up, seasons_desc
from ffengine.models import RawPlayer, ScoredPlayer, SeasonStat

from .distributions import SCORING_MIN_GP, DistributionSet, best_season
from .notes import generate_note
from .percentile import NEUTRAL_PCT, clamp, fmt2, percentile_rank, safe_div, shrink, to_10
from .strategies import get_strategy, role_label


CONFIDENCE_FULL_GP = 12
CONFIDENCE_MIN = 0.3

RECENCY_WEIGHTS: Sequence[float] = (0.55, 0.30, 0.15)
RECENCY_MIN_GP = 2

VOLATILITY_MIN_GP = 4
VOLATILITY_SCALE = 16

DEPTH_SCORES: Mapping[int, float] = {1: 8.0, 2: 5.0, 3: 2.5}
UNLISTED_DEPTH_SCORE = 4.5
DEFAULT_TEAM_WINS = 8
SEASON_GAMES = 17

MATCHUP_NEUTRAL = 5.0

PROJECTION_WEIGHTS: Mapping[str, float] = {
    "usage": 0.35,
    "high_value": 0.20,
    "efficiency": 0.15,
    "recency": 0.15,
    "environment": 0.10,
    "matchup": 0.05,
}
CEILING_WEIGHTS: Mapping[str, float] = {"usage": 0.25, "high_value": 0.45, "efficiency": 0.20, "environment": 0.10}
BOOM_BUST_CAP = 90


def gp_confidence(gp: Optional[int]) -> float:
    """Sample-size confidence in [0.3, 1.0]; 0.3 when there is no season."""

    if gp is None:
        return CONFIDENCE_MIN
    return clamp(gp / CONFIDENCE_FULL_GP, CONFIDENCE_MIN, 1.0)


def weighted_fpts_per_game(seasons: Mapping[int, SeasonStat] | None) -> float:
    """Recency-weighted fantasy points per game over the three latest seasons.

    Weights are assigned by position in the most-recent-first ordering;
    seasons under two games contribute nothing.
    """

    total = 0.0
    weight_sum = 0.0
    for (_year, stat), weight in zip(seasons_desc(seasons), RECENCY_WEIGHTS):
        if stat.gp < RECENCY_MIN_GP:
            continue
        total += safe_div(stat.fpts, stat.gp) * weight
        weight_sum += weight
    return safe_div(total, weight_sum)


def volatility(seasons: Mapping[int, SeasonStat] | None) -> float:
    """Coefficient of variation of per-game output across full-ish seasons, on 0-10."""

    per_game = [safe_div(stat.fpts, max(stat.gp, 1)) for _year, stat in seasons_desc(seasons) if stat.gp >= VOLATILITY_MIN_GP]
    if len(per_game) < 2:
        return 5.0
    mean = fmean(per_game)
    cv = pstdev(per_game, mean) / mean if mean > 0 else 0.0
    return fmt2(clamp(cv * VOLATILITY_SCALE, 0.0, 10.0))


def depth_score(depth_rank: int) -> float:
    return DEPTH_SCORES.get(depth_rank, UNLISTED_DEPTH_SCORE)


def team_score(team_wins: Optional[float]) -> float:
    wins = team_wins or DEFAULT_TEAM_WINS
    return clamp(wins * 10 / SEASON_GAMES, 1.0, 10.0)


def environment_score(depth_rank: int, team_wins: Optional[float]) -> float:
    return fmt2(0.6 * depth_score(depth_rank) + 0.4 * team_score(team_wins))


def _blend(weights: Mapping[str, float], components: Mapping[str, float]) -> float:
    return sum(weight * components[name] for name, weight in weights.items())


def score_player(
    player: RawPlayer,
    seasons: Mapping[int, SeasonStat] | None,
    distributions: DistributionSet,
    *,
    depth_rank: int = 0,
    team_wins: Optional[float] = None,
) -> ScoredPlayer:
    """Score one player against the population in ``distributions``.

    Never raises for missing data: a player without seasons gets neutral
    percentiles, minimum confidence and a limited-data note.
    """

    picked = best_season(seasons, SCORING_MIN_GP)
    stat, year = picked if picked is not None else (None, None)
    gp = max(stat.gp or 1, 1) if stat is not None else 1
    confidence = gp_confidence(gp if stat is not None else None)

    strategy = get_strategy(player.position)
    if strategy is not None:
        dist = distributions.for_position(strategy.position)
        team_total = distributions.team_total(player.team, strategy.share_source)
        basis = stat if stat is not None else SeasonStat()

        def pct(key: str) -> float:
            return percentile_rank(dist.values(key), strategy.metric(key, basis, gp, team_total))

        usage_pct = pct(strategy.usage_key)
        high_value_pct = sum(weight * pct(key) for key, weight in strategy.high_value)
        efficiency_pct = shrink(pct(strategy.efficiency_key), confidence)
        fpts_population = dist.values("fpts_pg")
    else:
        usage_pct = high_value_pct = efficiency_pct = NEUTRAL_PCT
        fpts_population = ()

    recent_fpg = weighted_fpts_per_game(seasons)
    recency_pct = percentile_rank(fpts_population, recent_fpg) if recent_fpg > 0 else NEUTRAL_PCT
    recency_pct = shrink(recency_pct, confidence)

    components = {
        "usage": to_10(usage_pct),
        "high_value": to_10(high_value_pct),
        "efficiency": to_10(efficiency_pct),
        "recency": to_10(recency_pct),
        "environment": environment_score(depth_rank, team_wins),
        "matchup": MATCHUP_NEUTRAL,
    }

    projection = fmt2(_blend(PROJECTION_WEIGHTS, components))
    # Recency is scaled by confidence a second time here.
    floor_raw = (
        0.50 * components["usage"]
        + 0.20 * components["efficiency"]
        + 0.15 * components["recency"] * confidence
        + 0.15 * components["environment"]
    )
    floor = fmt2(clamp(floor_raw, 0.0, 10.0))
    ceiling = fmt2(clamp(_blend(CEILING_WEIGHTS, components), 0.0, 10.0))

    role = role_label(player.position, stat, gp)
    note = generate_note(player, stat, gp, role, depth_rank, team_wins)

    return ScoredPlayer(
        **player.model_dump(),
        **components,
        projection=projection,
        floor=floor,
        ceiling=ceiling,
        confidence=fmt2(confidence),
        volatility=volatility(seasons),
        boom_pct=round_half_up(clamp((ceiling - 5) * 20, 0, BOOM_BUST_CAP)),
        bust_pct=round_half_up(clamp((5 - floor) * 20, 0, BOOM_BUST_CAP)),
        role=role,
        note=note,
        has_data=stat is not None,
        recent_year=year,
        recent_stats=stat,
    )
