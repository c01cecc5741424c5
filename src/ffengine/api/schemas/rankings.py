from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ffengine.models import ScoredPlayer


class RankingRequest(BaseModel):
    players: List[Dict[str, Any]]
    stats: Dict[str, Dict[str, Dict[str, Any]]] = Field(default_factory=dict)
    depth_charts: Dict[str, Dict[str, List[Any]]] = Field(default_factory=dict)
    standings: Dict[str, Any] = Field(default_factory=dict)
    scoring: str = Field(default="ppr")
    td_pts: int = Field(default=4)
    position: Optional[str] = None
    limit: Optional[int] = Field(default=None, ge=1)
    stat_aliases: Optional[Dict[str, List[str]]] = None


class RankedPlayerResponse(BaseModel):
    overall_rank: int
    position_rank: str
    tier: str
    player: ScoredPlayer


class RankingResponse(BaseModel):
    format: str
    total_players: int
    players: List[RankedPlayerResponse]


class FormatResponse(BaseModel):
    key: str
    scoring: str
    td_pts: int
    label: str
