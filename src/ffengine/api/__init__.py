"""REST API for the projection engine."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from fastapi import FastAPI, HTTPException

from ffengine.api.schemas import (
    FormatResponse,
    NormalizeRequest,
    NormalizeResponse,
    RankedPlayerResponse,
    RankingRequest,
    RankingResponse,
)
from ffengine.config import DEFAULT_FORMAT, ScoringFormat, get_format, iter_formats
from ffengine.config_loader import AliasProfile
from ffengine.engine import build_board
from ffengine.ingest import normalize_stats_cache, parse_depth_charts, parse_standings, rows_to_players


logger = logging.getLogger(__name__)


def _resolve_format(scoring: str, td_pts: int) -> ScoringFormat:
    try:
        return get_format(scoring, td_pts)
    except KeyError as exc:
        raise HTTPException(status_code=400, detail=str(exc.args[0]) if exc.args else str(exc)) from exc


def _resolve_aliases(stat_aliases: Optional[Mapping[str, List[str]]]) -> Optional[Dict[str, List[str]]]:
    if not stat_aliases:
        return None
    try:
        return AliasProfile.from_dict({"stat_aliases": stat_aliases}).stat_aliases
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def create_app() -> FastAPI:
    app = FastAPI(title="ffengine projections")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/formats", response_model=List[FormatResponse])
    async def formats() -> List[FormatResponse]:
        return [
            FormatResponse(key=fmt.key, scoring=fmt.scoring, td_pts=fmt.td_pts, label=fmt.label)
            for fmt in iter_formats()
        ]

    @app.post("/normalize", response_model=NormalizeResponse)
    async def normalize(payload: NormalizeRequest) -> NormalizeResponse:
        fmt = _resolve_format(payload.scoring, payload.td_pts)
        aliases = _resolve_aliases(payload.stat_aliases)
        cache = normalize_stats_cache(payload.stats, fmt, extra_aliases=aliases)
        return NormalizeResponse(format=fmt.key, stats=cache)

    @app.post("/rankings", response_model=RankingResponse)
    async def rankings(payload: RankingRequest) -> RankingResponse:
        fmt = _resolve_format(payload.scoring, payload.td_pts)
        aliases = _resolve_aliases(payload.stat_aliases)
        try:
            players = rows_to_players(payload.players)
            depth_charts = parse_depth_charts(payload.depth_charts)
            standings: Dict[str, Any] = parse_standings(payload.standings)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        # Stats arrive in the default format; ranking rederives points for ``fmt``.
        cache = normalize_stats_cache(payload.stats, DEFAULT_FORMAT, extra_aliases=aliases)
        entries = build_board(
            players,
            cache,
            depth_charts,
            standings,
            fmt,
            position=payload.position,
            limit=payload.limit,
        )
        logger.debug("Ranked %d players for %s", len(players), fmt.key)
        return RankingResponse(
            format=fmt.key,
            total_players=len(players),
            players=[
                RankedPlayerResponse(
                    overall_rank=entry.overall_rank,
                    position_rank=entry.position_rank,
                    tier=entry.tier,
                    player=entry.player,
                )
                for entry in entries
            ],
        )

    return app
