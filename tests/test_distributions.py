import pytest

from ffengine.engine import best_season, build_distributions
from ffengine.engine.distributions import DISTRIBUTION_MIN_GP
from ffengine.ingest import normalize_seasons
from ffengine.models import SeasonStat

from tests.sample_data import TEAMS, league, player, qb_raw, wr_raw


def test_best_season_prefers_most_recent_qualifying_year():
    seasons = {
        2022: SeasonStat(gp=16, fpts=200),
        2023: SeasonStat(gp=2, fpts=20),
        2024: SeasonStat(gp=1, fpts=8),
    }
    stat, year = best_season(seasons, 4)
    assert year == 2022
    assert stat.fpts == 200

    stat, year = best_season(seasons, 1)
    assert year == 2024


def test_best_season_falls_back_to_most_recent():
    seasons = {2021: SeasonStat(gp=3, fpts=30), 2024: SeasonStat(gp=1, fpts=5)}
    stat, year = best_season(seasons, 4)
    assert year == 2024
    assert stat.gp == 1


def test_best_season_without_data():
    assert best_season({}, 4) is None
    assert best_season(None, 1) is None


def test_distributions_cover_each_position():
    players, cache = league()
    dists = build_distributions(players, cache)

    for position in ("QB", "RB", "WR", "TE"):
        dist = dists.for_position(position)
        assert dist.size == len(TEAMS)
        for values in dist.metrics.values():
            assert len(values) == len(TEAMS)
            assert list(values) == sorted(values)

    assert set(dists.for_position("QB").metrics) == {"att_pg", "fpts_pg", "fpts_per_att", "pass_td_pg", "rush_yd_pg"}
    assert "rush_share" in dists.for_position("RB").metrics
    assert "tgt_share" in dists.for_position("TE").metrics


def test_short_seasons_are_left_out_of_metric_arrays():
    players = [player("a", "QB", "KC"), player("b", "QB", "BUF")]
    cache = {
        "a": normalize_seasons({2024: qb_raw(17, 550, 4100, 30)}),
        "b": normalize_seasons({2024: qb_raw(DISTRIBUTION_MIN_GP - 1, 90, 700, 4)}),
    }
    dists = build_distributions(players, cache)
    assert dists.for_position("QB").size == 1
    assert dists.for_position("QB").values("att_pg") == (550 / 17,)


def test_team_totals_sum_every_tracked_player():
    players = [player("w1", "WR", "KC"), player("w2", "WR", "KC"), player("w3", "WR", "BUF")]
    cache = {
        "w1": normalize_seasons({2024: wr_raw(17, 100, 70, 900, 6)}),
        "w2": normalize_seasons({2024: wr_raw(2, 50, 30, 300, 1)}),
        "w3": normalize_seasons({2024: wr_raw(17, 80, 50, 600, 3)}),
    }
    dists = build_distributions(players, cache)
    assert dists.team_target_totals["KC"] == 150
    assert dists.team_total("BUF", "tgt") == 80
    # Target share uses the team total, including the short-season teammate.
    assert dists.for_position("WR").values("tgt_share") == pytest.approx((100 / 150, 1.0))


def test_unknown_positions_and_missing_data_are_ignored():
    players = [player("k", "K", "KC"), player("ghost", "WR", "KC")]
    cache = {"k": normalize_seasons({2024: {"gamesPlayed": 17, "rushingYards": 5}})}
    dists = build_distributions(players, cache)
    assert dists.distributions == {}
    assert dists.for_position("WR").values("tgt_pg") == ()
    assert dists.for_position("K").size == 0
