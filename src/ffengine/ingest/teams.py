"""Team abbreviation canonicalisation for roster, depth-chart and standings inputs."""

from __future__ import annotations

import re
from typing import Any, Mapping, TypeVar


NFL_TEAM_ALIAS_GROUPS: dict[str, list[str]] = {
    "ARI": ["ARI", "ARZ", "ARIZONA", "ARIZONA CARDINALS", "CARDINALS"],
    "ATL": ["ATL", "ATLANTA", "ATLANTA FALCONS", "FALCONS"],
    "BAL": ["BAL", "BLT", "BALTIMORE", "BALTIMORE RAVENS", "RAVENS"],
    "BUF": ["BUF", "BUFFALO", "BUFFALO BILLS", "BILLS"],
    "CAR": ["CAR", "CAROLINA", "CAROLINA PANTHERS", "PANTHERS"],
    "CHI": ["CHI", "CHICAGO", "CHICAGO BEARS", "BEARS"],
    "CIN": ["CIN", "CINCINNATI", "CINCINNATI BENGALS", "BENGALS"],
    "CLE": ["CLE", "CLV", "CLEVELAND", "CLEVELAND BROWNS", "BROWNS"],
    "DAL": ["DAL", "DALLAS", "DALLAS COWBOYS", "COWBOYS"],
    "DEN": ["DEN", "DENVER", "DENVER BRONCOS", "BRONCOS"],
    "DET": ["DET", "DETROIT", "DETROIT LIONS", "LIONS"],
    "GB": ["GB", "GNB", "GREEN BAY", "GREEN BAY PACKERS", "PACKERS"],
    "HOU": ["HOU", "HST", "HOUSTON", "HOUSTON TEXANS", "TEXANS"],
    "IND": ["IND", "INDIANAPOLIS", "INDIANAPOLIS COLTS", "COLTS"],
    "JAX": ["JAX", "JAC", "JACKSONVILLE", "JACKSONVILLE JAGUARS", "JAGUARS"],
    "KC": ["KC", "KAN", "KANSAS CITY", "KANSAS CITY CHIEFS", "CHIEFS"],
    "LAC": ["LAC", "LACH", "LOS ANGELES CHARGERS", "LA CHARGERS", "SAN DIEGO", "SAN DIEGO CHARGERS", "CHARGERS"],
    "LAR": ["LAR", "LA", "LOS ANGELES RAMS", "LA RAMS", "ST LOUIS", "ST LOUIS RAMS", "RAMS"],
    "LV": ["LV", "LVR", "LAS VEGAS", "LAS VEGAS RAIDERS", "OAKLAND", "OAKLAND RAIDERS", "OAK", "RAIDERS"],
    "MIA": ["MIA", "MIAMI", "MIAMI DOLPHINS", "DOLPHINS"],
    "MIN": ["MIN", "MINNESOTA", "MINNESOTA VIKINGS", "VIKINGS"],
    "NE": ["NE", "NWE", "NEW ENGLAND", "NEW ENGLAND PATRIOTS", "PATRIOTS"],
    "NO": ["NO", "NOR", "NEW ORLEANS", "NEW ORLEANS SAINTS", "SAINTS"],
    "NYG": ["NYG", "NEW YORK GIANTS", "NY GIANTS", "GIANTS"],
    "NYJ": ["NYJ", "NEW YORK JETS", "NY JETS", "JETS"],
    "PHI": ["PHI", "PHILA", "PHILADELPHIA", "PHILADELPHIA EAGLES", "EAGLES"],
    "PIT": ["PIT", "PITTSBURGH", "PITTSBURGH STEELERS", "STEELERS"],
    "SEA": ["SEA", "SEATTLE", "SEATTLE SEAHAWKS", "SEAHAWKS"],
    "SF": ["SF", "SFO", "SAN FRANCISCO", "SAN FRANCISCO 49ERS", "SF 49ERS", "49ERS"],
    "TB": ["TB", "TAM", "TAMPA BAY", "TAMPA BAY BUCCANEERS", "BUCCANEERS", "BUCS"],
    "TEN": ["TEN", "TENNESSEE", "TENNESSEE TITANS", "TITANS"],
    "WAS": ["WAS", "WSH", "WASHINGTON", "WASHINGTON COMMANDERS", "WASHINGTON FOOTBALL TEAM", "COMMANDERS"],
}

V = TypeVar("V")


def _team_token(value: str) -> str:
    return re.sub(r"[^A-Z0-9]", "", value.upper())


def _build_alias_lookup() -> dict[str, str]:
    lookup: dict[str, str] = {}
    for abbr, variants in NFL_TEAM_ALIAS_GROUPS.items():
        for variant in variants:
            key = _team_token(variant)
            if key:
                lookup.setdefault(key, abbr)
    return lookup


TEAM_ALIAS_LOOKUP = _build_alias_lookup()


def canonical_team(team: Any) -> str:
    """Return the standard abbreviation for ``team``, or the upper-cased input."""

    if team is None:
        return ""
    text = str(team).strip()
    token = _team_token(text)
    if not token:
        return text.upper()
    if token in TEAM_ALIAS_LOOKUP:
        return TEAM_ALIAS_LOOKUP[token]
    # Unknown spellings pass through so callers can still join on them.
    return text.upper()


def canonical_team_keys(mapping: Mapping[Any, V]) -> dict[str, V]:
    """Re-key a team-indexed mapping by canonical abbreviation (first key wins)."""

    out: dict[str, V] = {}
    for key, value in mapping.items():
        out.setdefault(canonical_team(key), value)
    return out
