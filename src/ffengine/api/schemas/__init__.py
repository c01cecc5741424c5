"""Pydantic models for API I/O."""

from .rankings import FormatResponse, RankedPlayerResponse, RankingRequest, RankingResponse
from .stats import NormalizeRequest, NormalizeResponse

__all__ = [
    "FormatResponse",
    "NormalizeRequest",
    "NormalizeResponse",
    "RankedPlayerResponse",
    "RankingRequest",
    "RankingResponse",
]
