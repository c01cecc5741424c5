import pytest

from ffengine.engine import build_distributions, score_player
from ffengine.engine.scorer import (
    environment_score,
    gp_confidence,
    team_score,
    volatility,
    weighted_fpts_per_game,
)
from ffengine.ingest import normalize_seasons
from ffengine.models import SeasonStat

from tests.sample_data import league, player, rb_raw, wr_raw


SCORE_FIELDS = ("usage", "high_value", "efficiency", "recency", "environment", "matchup", "projection", "floor", "ceiling")


def _league_with(*extra):
    players, cache = league()
    for raw_player, seasons in extra:
        players.append(raw_player)
        cache[raw_player.player_id] = normalize_seasons(seasons)
    return players, cache, build_distributions(players, cache)


def test_confidence_scales_with_games_played():
    assert gp_confidence(None) == 0.3
    assert gp_confidence(0) == 0.3
    assert gp_confidence(6) == pytest.approx(0.5)
    assert gp_confidence(17) == 1.0


def test_weighted_fpts_skips_short_seasons_and_uses_three_latest():
    seasons = {
        2021: SeasonStat(gp=16, fpts=400),
        2022: SeasonStat(gp=10, fpts=100),
        2023: SeasonStat(gp=1, fpts=5),
        2024: SeasonStat(gp=10, fpts=200),
    }
    assert weighted_fpts_per_game(seasons) == pytest.approx((20 * 0.55 + 10 * 0.15) / 0.70)
    assert weighted_fpts_per_game({}) == 0.0


def test_volatility_uses_full_seasons_only():
    seasons = {
        2022: SeasonStat(gp=16, fpts=160),
        2023: SeasonStat(gp=16, fpts=320),
        2024: SeasonStat(gp=2, fpts=60),
    }
    assert volatility(seasons) == pytest.approx(5.33)
    assert volatility({2024: SeasonStat(gp=17, fpts=250)}) == 5.0
    assert volatility({2023: SeasonStat(gp=8), 2024: SeasonStat(gp=8)}) == 0.0


def test_environment_blends_depth_and_team_strength():
    assert environment_score(1, 12) == pytest.approx(7.62)
    assert environment_score(0, None) == pytest.approx(4.58)
    # Unlisted outranks third string.
    assert environment_score(0, None) > environment_score(3, None)
    assert team_score(0) == team_score(None)
    assert team_score(1) == 1.0
    assert team_score(25) == 10.0


def test_player_without_data_gets_defaults():
    ghost = player("ghost", "WR", "NYJ", name="Ghost Receiver")
    _players, cache, dists = _league_with()
    scored = score_player(ghost, cache.get("ghost"), dists)

    assert scored.has_data is False
    assert scored.confidence == 0.3
    assert scored.recent_year is None
    assert scored.recent_stats is None
    assert scored.role == "Depth"
    assert scored.note == "Ghost Receiver has limited historical data available."
    assert scored.volatility == 5.0
    assert scored.matchup == 5.0
    assert scored.recency == 5.0
    assert scored.efficiency == pytest.approx(3.56)
    assert scored.environment == pytest.approx(4.58)
    assert scored.projection == pytest.approx(2.10, abs=0.01)
    assert scored.floor == pytest.approx(1.72)
    assert scored.ceiling == pytest.approx(1.31)
    assert scored.boom_pct == 0
    assert scored.bust_pct == 66


def test_small_sample_efficiency_is_shrunk_toward_average():
    rookie = player("rookie", "WR", "NYJ")
    _players, cache, dists = _league_with((rookie, {2024: wr_raw(2, 6, 6, 150, 2)}))
    scored = score_player(rookie, cache["rookie"], dists)

    assert scored.has_data is True
    assert scored.recent_year == 2024
    assert scored.confidence == 0.3
    # Best raw efficiency in the league, pulled most of the way back to 5.0.
    assert scored.efficiency == pytest.approx(6.44)


def test_same_rate_is_trusted_more_over_a_full_season():
    short = player("short", "RB", "NYJ")
    full = player("full", "RB", "MIA")
    # Both seasons score 34 fantasy points per 30 touches.
    _players, cache, dists = _league_with(
        (short, {2024: rb_raw(2, 25, 150, 1.5, 5, 50)}),
        (full, {2024: rb_raw(16, 200, 1200, 12, 40, 400)}),
    )
    small = score_player(short, cache["short"], dists)
    big = score_player(full, cache["full"], dists)

    assert small.confidence == 0.3
    assert big.confidence == 1.0
    assert abs(small.efficiency - 5) < abs(big.efficiency - 5)


def test_full_season_leader_is_not_shrunk():
    players, cache, dists = _league_with()
    leader = next(p for p in players if p.player_id == "GB-WR")
    scored = score_player(leader, cache["GB-WR"], dists)

    assert scored.confidence == 1.0
    assert scored.usage == pytest.approx(9.5)
    assert scored.role == "Alpha WR"


def test_blend_formulas():
    players, cache, dists = _league_with()
    qb = next(p for p in players if p.player_id == "DAL-QB")
    s = score_player(qb, cache["DAL-QB"], dists, depth_rank=1, team_wins=12)

    expected_projection = (
        0.35 * s.usage + 0.20 * s.high_value + 0.15 * s.efficiency
        + 0.15 * s.recency + 0.10 * s.environment + 0.05 * s.matchup
    )
    expected_floor = 0.50 * s.usage + 0.20 * s.efficiency + 0.15 * s.recency * s.confidence + 0.15 * s.environment
    expected_ceiling = 0.25 * s.usage + 0.45 * s.high_value + 0.20 * s.efficiency + 0.10 * s.environment
    assert s.projection == pytest.approx(expected_projection, abs=0.01)
    assert s.floor == pytest.approx(expected_floor, abs=0.01)
    assert s.ceiling == pytest.approx(expected_ceiling, abs=0.01)
    assert s.environment == pytest.approx(7.62)
    assert s.note.endswith("Confirmed starter. Strong offense (12W team) boosts ceiling.")


def test_better_usage_scores_higher_within_position():
    players, cache, dists = _league_with()
    by_id = {p.player_id: p for p in players}
    low = score_player(by_id["KC-RB"], cache["KC-RB"], dists)
    high = score_player(by_id["GB-RB"], cache["GB-RB"], dists)
    assert high.usage > low.usage
    assert high.projection > low.projection


def test_non_offensive_position_is_neutral():
    kicker = player("k1", "K", "KC")
    seasons = normalize_seasons({2024: {"gamesPlayed": 17, "rushingYards": 4}})
    _players, _cache, dists = _league_with()
    scored = score_player(kicker, seasons, dists)

    assert scored.usage == 5.0
    assert scored.high_value == 5.0
    assert scored.efficiency == 5.0
    assert scored.role == "Role Player"


def test_scores_stay_in_range():
    players, cache, dists = _league_with((player("rookie", "TE", "NYJ"), {2024: wr_raw(1, 3, 3, 90, 2)}))
    for raw_player in players:
        scored = score_player(raw_player, cache.get(raw_player.player_id), dists, depth_rank=2, team_wins=3)
        for field in SCORE_FIELDS:
            assert 0.0 <= getattr(scored, field) <= 10.0
        assert 0.3 <= scored.confidence <= 1.0
        assert 0 <= scored.boom_pct <= 90
        assert 0 <= scored.bust_pct <= 90


def test_floor_and_ceiling_follow_the_usage_profile():
    # Each receiver is alone on its team, so target share ties across the group.
    profiles = {
        "volume": ("BUF", wr_raw(16, 160, 100, 900, 2)),
        "deep": ("MIA", wr_raw(16, 64, 40, 1100, 12)),
        "slot": ("NE", wr_raw(16, 96, 60, 800, 5)),
        "flanker": ("NYJ", wr_raw(16, 128, 80, 1000, 8)),
    }
    players = [player(player_id, "WR", team) for player_id, (team, _raw) in profiles.items()]
    cache = {player_id: normalize_seasons({2024: raw}) for player_id, (_team, raw) in profiles.items()}
    dists = build_distributions(players, cache)
    scored = {p.player_id: score_player(p, cache[p.player_id], dists) for p in players}

    # High-volume, low-upside usage keeps the floor above the ceiling.
    assert scored["volume"].usage == pytest.approx(8.75)
    assert scored["volume"].floor == pytest.approx(5.87, abs=0.02)
    assert scored["volume"].ceiling == pytest.approx(3.96, abs=0.02)
    assert scored["volume"].floor > scored["volume"].ceiling

    # Big-play usage on few targets opens the ceiling.
    assert scored["deep"].usage == pytest.approx(1.25)
    assert scored["deep"].floor == pytest.approx(4.0, abs=0.02)
    assert scored["deep"].ceiling == pytest.approx(5.95, abs=0.02)
    assert scored["deep"].floor < scored["deep"].ceiling


def test_player_without_data_has_floor_above_ceiling():
    ghost = player("ghost", "TE", "NYJ")
    _players, cache, dists = _league_with()
    scored = score_player(ghost, None, dists)

    assert scored.has_data is False
    assert scored.floor > scored.ceiling
    assert scored.bust_pct > scored.boom_pct
