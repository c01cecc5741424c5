"""Canonical player and stat models shared across ingestion and engine layers."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


OFFENSIVE_POSITIONS = ("QB", "RB", "WR", "TE")


class RawPlayer(BaseModel):
    """Roster identity record supplied by the roster-fetch layer."""

    player_id: str = Field(..., min_length=1)
    name: str
    position: str
    team: str
    jersey: str = ""
    headshot: str = ""
    age: Optional[int] = None
    experience: Optional[int] = None

    model_config = ConfigDict(frozen=True)


class SeasonStat(BaseModel):
    """One player's regular-season totals for a single year."""

    gp: int = 0
    pass_yd: float = 0.0
    pass_td: float = 0.0
    pass_int: float = 0.0
    pass_cmp: float = 0.0
    pass_att: float = 0.0
    pass_rat: float = 0.0
    rush_yd: float = 0.0
    rush_td: float = 0.0
    rush_att: float = 0.0
    rec: float = 0.0
    rec_yd: float = 0.0
    rec_td: float = 0.0
    tgt: float = 0.0
    fum: float = 0.0
    fpts: float = 0.0

    model_config = ConfigDict(frozen=True)

    @property
    def touches(self) -> float:
        return self.rush_att + self.rec


class ScoredPlayer(BaseModel):
    """Engine output: identity fields plus component scores and blended outputs."""

    player_id: str
    name: str
    position: str
    team: str
    jersey: str = ""
    headshot: str = ""
    age: Optional[int] = None
    experience: Optional[int] = None

    usage: float = Field(..., ge=0.0, le=10.0)
    high_value: float = Field(..., ge=0.0, le=10.0)
    efficiency: float = Field(..., ge=0.0, le=10.0)
    recency: float = Field(..., ge=0.0, le=10.0)
    environment: float = Field(..., ge=0.0, le=10.0)
    matchup: float = Field(..., ge=0.0, le=10.0)

    projection: float = Field(..., ge=0.0, le=10.0)
    floor: float = Field(..., ge=0.0, le=10.0)
    ceiling: float = Field(..., ge=0.0, le=10.0)
    confidence: float = Field(..., ge=0.0, le=1.0)
    volatility: float = Field(..., ge=0.0, le=10.0)
    boom_pct: int = Field(..., ge=0, le=100)
    bust_pct: int = Field(..., ge=0, le=100)
    role: str
    note: str

    has_data: bool = False
    recent_year: Optional[int] = None
    recent_stats: Optional[SeasonStat] = None

    model_config = ConfigDict(frozen=True)
