"""Normalize provider stat bags into canonical season records."""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Mapping, Optional, Sequence

from ffengine.config import DEFAULT_FORMAT, ScoringFormat
from ffengine.models import SeasonStat


logger = logging.getLogger(__name__)

SeasonMap = Dict[int, SeasonStat]
StatsCache = Dict[str, SeasonMap]

# Ordered synonym chains; the first non-zero numeric value wins.
STAT_FIELD_ALIASES: Mapping[str, tuple[str, ...]] = {
    "gp": ("gamesPlayed", "games", "gp"),
    "pass_yd": ("passingYards", "netPassingYards"),
    "pass_td": ("passingTouchdowns",),
    "pass_int": ("interceptions", "passingInterceptions"),
    "pass_cmp": ("completions", "passingCompletions"),
    "pass_att": ("passingAttempts", "netPassingAttempts"),
    "pass_rat": ("QBRating", "quarterbackRating", "ESPNQBRating"),
    "rush_yd": ("rushingYards",),
    "rush_td": ("rushingTouchdowns",),
    "rush_att": ("rushingAttempts",),
    "rec": ("receptions",),
    "rec_yd": ("receivingYards",),
    "rec_td": ("receivingTouchdowns",),
    "tgt": ("receivingTargets", "targets"),
    "fum": (
        "fumblesLost",
        "passingFumblesLost",
        "rushingFumblesLost",
        "receivingFumblesLost",
        "fumbles",
    ),
}

CANONICAL_FIELDS: tuple[str, ...] = tuple(STAT_FIELD_ALIASES)

PASS_YD_PTS = 0.04
RUSH_REC_YD_PTS = 0.1
RUSH_REC_TD_PTS = 6.0
TURNOVER_PTS = -2.0


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def coerce_number(value: Any) -> float:
    """Parse a provider value, falling back to 0.0 for anything non-numeric."""

    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip().replace(",", ""))
        except (TypeError, ValueError):
            return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def _resolve(raw: Mapping[str, Any], names: Sequence[str]) -> float:
    for name in names:
        value = coerce_number(raw.get(name))
        if value:
            return value
    return 0.0


def fantasy_points(stat: SeasonStat, fmt: ScoringFormat = DEFAULT_FORMAT, *, rounded: bool = True) -> float:
    """Standard fantasy-point total for a season under ``fmt``."""

    total = (
        stat.pass_yd * PASS_YD_PTS
        + stat.pass_td * fmt.td_pts
        + stat.pass_int * TURNOVER_PTS
        + stat.rush_yd * RUSH_REC_YD_PTS
        + stat.rush_td * RUSH_REC_TD_PTS
        + stat.rec * fmt.reception_weight
        + stat.rec_yd * RUSH_REC_YD_PTS
        + stat.rec_td * RUSH_REC_TD_PTS
        + stat.fum * TURNOVER_PTS
    )
    if rounded:
        return float(round_half_up(total))
    return total


def _aliases_for(field: str, extra_aliases: Optional[Mapping[str, Sequence[str]]]) -> tuple[str, ...]:
    names = STAT_FIELD_ALIASES[field]
    if extra_aliases and extra_aliases.get(field):
        names = names + tuple(extra_aliases[field])
    return names


def normalize_season(
    raw: Mapping[str, Any],
    fmt: ScoringFormat = DEFAULT_FORMAT,
    *,
    extra_aliases: Optional[Mapping[str, Sequence[str]]] = None,
) -> Optional[SeasonStat]:
    """Map a raw stat bag onto a ``SeasonStat``.

    Returns ``None`` for zero-activity seasons (no games played and no
    yardage or points) so they are dropped rather than stored as zeros.
    """

    values: dict[str, float] = {
        field: _resolve(raw, _aliases_for(field, extra_aliases)) for field in CANONICAL_FIELDS
    }
    gp = max(0, int(values.pop("gp")))
    stat = SeasonStat(gp=gp, **values)
    stat = stat.model_copy(update={"fpts": fantasy_points(stat, fmt)})

    if stat.gp == 0 and max(stat.pass_yd, stat.rush_yd, stat.rec_yd, stat.fpts) <= 0:
        return None
    return stat


def _season_year(key: Any) -> Optional[int]:
    try:
        return int(str(key).strip())
    except (TypeError, ValueError):
        return None


def normalize_seasons(
    raw_by_year: Mapping[Any, Mapping[str, Any]] | None,
    fmt: ScoringFormat = DEFAULT_FORMAT,
    *,
    extra_aliases: Optional[Mapping[str, Sequence[str]]] = None,
) -> SeasonMap:
    """Normalize one player's ``{year: raw stat bag}`` map."""

    seasons: SeasonMap = {}
    if not raw_by_year:
        return seasons
    for key, raw in raw_by_year.items():
        year = _season_year(key)
        if year is None:
            logger.debug("Skipping season with non-numeric key %r", key)
            continue
        if not isinstance(raw, Mapping):
            logger.debug("Skipping season %s with non-mapping payload", year)
            continue
        stat = normalize_season(raw, fmt, extra_aliases=extra_aliases)
        if stat is not None:
            seasons[year] = stat
    return seasons


def normalize_stats_cache(
    raw_cache: Mapping[Any, Mapping[Any, Mapping[str, Any]]] | None,
    fmt: ScoringFormat = DEFAULT_FORMAT,
    *,
    extra_aliases: Optional[Mapping[str, Sequence[str]]] = None,
) -> StatsCache:
    """Normalize a ``{player_id: {year: raw}}`` map into a StatsCache."""

    cache: StatsCache = {}
    for player_id, raw_by_year in (raw_cache or {}).items():
        if not isinstance(raw_by_year, Mapping):
            cache[str(player_id)] = {}
            continue
        cache[str(player_id)] = normalize_seasons(raw_by_year, fmt, extra_aliases=extra_aliases)
    return cache


def recompute_stats_cache(cache: Mapping[str, Mapping[int, SeasonStat]] | None, fmt: ScoringFormat = DEFAULT_FORMAT) -> StatsCache:
    """Return a new cache with every season's ``fpts`` rederived under ``fmt``.

    The input cache is never mutated and no season object is shared between
    the two caches.
    """

    out: StatsCache = {}
    for player_id, seasons in (cache or {}).items():
        out[player_id] = {
            year: stat.model_copy(update={"fpts": fantasy_points(stat, fmt)})
            for year, stat in (seasons or {}).items()
        }
    return out


def seasons_desc(seasons: Mapping[Any, SeasonStat] | None) -> list[tuple[int, SeasonStat]]:
    """Return ``(year, stat)`` pairs, most recent season first.

    Years are ordered numerically so string keys from JSON payloads sort the
    same way as integer keys.
    """

    if not seasons:
        return []
    pairs = [(_season_year(key), stat) for key, stat in seasons.items()]
    pairs = [(year, stat) for year, stat in pairs if year is not None and stat is not None]
    pairs.sort(key=lambda pair: pair[0], reverse=True)
    return pairs
