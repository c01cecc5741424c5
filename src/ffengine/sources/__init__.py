"""External data sources."""

from .sleeper import (
    ConsensusRank,
    attach_consensus_ranks,
    fetch_sleeper_rankings,
    name_key,
    name_key_no_team,
    normalize_name,
    parse_sleeper_players,
)

__all__ = [
    "ConsensusRank",
    "attach_consensus_ranks",
    "fetch_sleeper_rankings",
    "name_key",
    "name_key_no_team",
    "normalize_name",
    "parse_sleeper_players",
]
