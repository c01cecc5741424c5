"""Projection engine: distributions, percentile scoring and ranking."""

from .distributions import DistributionSet, PositionDistribution, best_season, build_distributions
from .notes import generate_note
from .percentile import percentile_rank, to_10
from .ranking import RankedEntry, assign_tiers, build_board, build_depth_ranks, rank_players
from .scorer import score_player
from .strategies import POSITION_STRATEGIES, PositionStrategy, role_label

__all__ = [
    "DistributionSet",
    "POSITION_STRATEGIES",
    "PositionDistribution",
    "PositionStrategy",
    "RankedEntry",
    "assign_tiers",
    "best_season",
    "build_board",
    "build_depth_ranks",
    "build_distributions",
    "generate_note",
    "percentile_rank",
    "rank_players",
    "role_label",
    "score_player",
    "to_10",
]
