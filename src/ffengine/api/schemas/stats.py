from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ffengine.models import SeasonStat


class NormalizeRequest(BaseModel):
    stats: Dict[str, Dict[str, Dict[str, Any]]]
    scoring: str = Field(default="ppr")
    td_pts: int = Field(default=4)
    stat_aliases: Optional[Dict[str, List[str]]] = None


class NormalizeResponse(BaseModel):
    format: str
    stats: Dict[str, Dict[int, SeasonStat]]
