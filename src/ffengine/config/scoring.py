"""Scoring format configuration for supported league settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Tuple, Union


RECEPTION_WEIGHTS: Mapping[str, float] = {
    "ppr": 1.0,
    "half": 0.5,
    "std": 0.0,
}


@dataclass(frozen=True)
class ScoringFormat:
    scoring: str = "ppr"
    td_pts: int = 4

    def __post_init__(self) -> None:
        scoring = str(self.scoring).strip().lower()
        if scoring not in RECEPTION_WEIGHTS:
            raise ValueError(f"Unknown scoring type {self.scoring!r}; expected one of {sorted(RECEPTION_WEIGHTS)}")
        if self.td_pts not in (4, 6):
            raise ValueError(f"Passing TD points must be 4 or 6, got {self.td_pts!r}")
        object.__setattr__(self, "scoring", scoring)

    @property
    def key(self) -> str:
        return f"{self.scoring.upper()}_{self.td_pts}"

    @property
    def reception_weight(self) -> float:
        return RECEPTION_WEIGHTS[self.scoring]

    @property
    def label(self) -> str:
        names = {"ppr": "PPR", "half": "Half-PPR", "std": "Standard"}
        return f"{names.get(self.scoring, self.scoring)}, {self.td_pts}pt passing TD"


_FORMATS: Dict[Tuple[str, int], ScoringFormat] = {
    (scoring, td_pts): ScoringFormat(scoring=scoring, td_pts=td_pts)
    for scoring in ("ppr", "half", "std")
    for td_pts in (4, 6)
}

DEFAULT_FORMAT = _FORMATS[("ppr", 4)]


def iter_formats() -> Iterable[ScoringFormat]:
    """Return an iterator of all supported scoring formats."""

    return _FORMATS.values()


def get_format(scoring: str, td_pts: int | str) -> ScoringFormat:
    """Fetch a scoring format, raising KeyError if it is not supported."""

    try:
        td_value = int(td_pts)
    except (TypeError, ValueError):
        raise KeyError(f"No scoring format configured for scoring={scoring!r}, td_pts={td_pts!r}") from None
    key = (scoring.strip().lower(), td_value)
    if key not in _FORMATS:
        raise KeyError(f"No scoring format configured for scoring={scoring!r}, td_pts={td_pts!r}")
    return _FORMATS[key]


def get_format_by_key(format_key: Union[str, Tuple[str, int]]) -> ScoringFormat:
    """Resolve a format using either "SCORING_TDPTS" or (scoring, td_pts)."""

    if isinstance(format_key, tuple):
        scoring, td_pts = format_key
        return get_format(scoring, td_pts)

    if not isinstance(format_key, str):
        raise TypeError("format_key must be a str or (scoring, td_pts) tuple")

    parts = format_key.split("_", 1)
    if len(parts) != 2:
        raise ValueError(f"format_key must look like 'SCORING_TDPTS', got {format_key!r}")

    scoring, td_pts = parts
    return get_format(scoring, td_pts)


# Read-only lookup keyed by the "PPR_4" style string.
FORMATS: Mapping[str, ScoringFormat] = {fmt.key: fmt for fmt in _FORMATS.values()}
