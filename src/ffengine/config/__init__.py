"""Configuration helpers for scoring formats and runtime settings."""

from .scoring import (
    DEFAULT_FORMAT,
    FORMATS,
    ScoringFormat,
    get_format,
    get_format_by_key,
    iter_formats,
)

__all__ = [
    "DEFAULT_FORMAT",
    "FORMATS",
    "ScoringFormat",
    "get_format",
    "get_format_by_key",
    "iter_formats",
]
