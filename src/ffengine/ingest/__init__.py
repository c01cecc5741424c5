"""Input adapters: stat normalization, team names and file loaders."""

from .loaders import (
    load_depth_charts,
    load_players,
    load_standings,
    load_stats,
    parse_depth_charts,
    parse_standings,
    rows_to_players,
)
from .stats import (
    STAT_FIELD_ALIASES,
    SeasonMap,
    StatsCache,
    fantasy_points,
    normalize_season,
    normalize_seasons,
    normalize_stats_cache,
    recompute_stats_cache,
)
from .teams import canonical_team

__all__ = [
    "STAT_FIELD_ALIASES",
    "SeasonMap",
    "StatsCache",
    "canonical_team",
    "fantasy_points",
    "load_depth_charts",
    "load_players",
    "load_standings",
    "load_stats",
    "normalize_season",
    "normalize_seasons",
    "normalize_stats_cache",
    "parse_depth_charts",
    "parse_standings",
    "recompute_stats_cache",
    "rows_to_players",
]
