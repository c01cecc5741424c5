"""Shared data models."""

from .player import OFFENSIVE_POSITIONS, RawPlayer, ScoredPlayer, SeasonStat

__all__ = ["OFFENSIVE_POSITIONS", "RawPlayer", "ScoredPlayer", "SeasonStat"]
