"""Fantasy-football projection engine."""

from ffengine.config import DEFAULT_FORMAT, ScoringFormat, get_format
from ffengine.engine import assign_tiers, rank_players, score_player
from ffengine.ingest import normalize_season, recompute_stats_cache
from ffengine.models import RawPlayer, ScoredPlayer, SeasonStat

__all__ = [
    "DEFAULT_FORMAT",
    "RawPlayer",
    "ScoredPlayer",
    "ScoringFormat",
    "SeasonStat",
    "assign_tiers",
    "get_format",
    "normalize_season",
    "rank_players",
    "recompute_stats_cache",
    "score_player",
]
