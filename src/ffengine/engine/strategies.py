"""Per-position metric extractors, high-value blends, role ladders and note clauses.

Every position's behaviour lives in one ``PositionStrategy`` so the four
offensive positions can be read side by side. Metrics take the selected
season, its games played (already floored at 1) and the team opportunity
total relevant to the position's share metric.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Tuple

from ffengine.models import SeasonStat

from .percentile import safe_div


Metric = Callable[[SeasonStat, int, float], float]
NoteClause = Callable[[str, SeasonStat, int], str]
RoleRule = Tuple[str, Callable[[SeasonStat, int], float], float]


# ---- shared metrics ----

def _fpts_pg(s: SeasonStat, gp: int, _team: float) -> float:
    return safe_div(s.fpts, gp)


def _share(value: Callable[[SeasonStat], float]) -> Metric:
    def metric(s: SeasonStat, _gp: int, team_total: float) -> float:
        return value(s) / team_total if team_total > 0 else 0.0

    return metric


# ---- QB ----

def _qb_att_pg(s: SeasonStat, gp: int, _team: float) -> float:
    return safe_div(s.pass_att, gp)


def _qb_fpts_per_att(s: SeasonStat, _gp: int, _team: float) -> float:
    return safe_div(s.fpts, s.pass_att) if s.pass_att > 10 else 0.0


def _qb_pass_td_pg(s: SeasonStat, gp: int, _team: float) -> float:
    return safe_div(s.pass_td, gp)


def _qb_rush_yd_pg(s: SeasonStat, gp: int, _team: float) -> float:
    return safe_div(s.rush_yd, gp)


# ---- RB ----

def _rb_touches_pg(s: SeasonStat, gp: int, _team: float) -> float:
    return safe_div(s.touches, gp)


def _rb_fpts_per_touch(s: SeasonStat, _gp: int, _team: float) -> float:
    return safe_div(s.fpts, s.touches) if s.touches > 4 else 0.0


def _rb_rush_td_pg(s: SeasonStat, gp: int, _team: float) -> float:
    return safe_div(s.rush_td, gp)


def _rb_rec_pg(s: SeasonStat, gp: int, _team: float) -> float:
    return safe_div(s.rec, gp)


# ---- WR / TE ----

def _tgt_pg(s: SeasonStat, gp: int, _team: float) -> float:
    return safe_div(s.tgt, gp)


def _fpts_per_tgt(s: SeasonStat, _gp: int, _team: float) -> float:
    return safe_div(s.fpts, s.tgt) if s.tgt > 2 else 0.0


def _rec_yd_per_tgt(s: SeasonStat, _gp: int, _team: float) -> float:
    return safe_div(s.rec_yd, s.tgt) if s.tgt > 2 else 0.0


def _rec_td_pg(s: SeasonStat, gp: int, _team: float) -> float:
    return safe_div(s.rec_td, gp)


# ---- note clauses ----

def _count(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def _qb_clause(role: str, s: SeasonStat, gp: int) -> str:
    return f"{role} averaging {safe_div(s.pass_att, gp):.1f} att/g with {_count(s.pass_td)} TDs."


def _rb_clause(role: str, s: SeasonStat, gp: int) -> str:
    ypc = f", {safe_div(s.rush_yd, s.rush_att):.1f} yds/carry" if s.rush_att > 5 else ""
    return f"{role}: {safe_div(s.touches, gp):.1f} touches/g{ypc}."


def receiver_clause(role: str, s: SeasonStat, gp: int) -> str:
    ypt = f", {safe_div(s.rec_yd, s.tgt):.1f} yds/tgt" if s.tgt > 2 else ""
    return f"{role}: {safe_div(s.tgt, gp):.1f} tgt/g{ypt}."


# ---- role ladders (first match wins) ----

def _per_game(field: str) -> Callable[[SeasonStat, int], float]:
    return lambda s, gp: safe_div(getattr(s, field), gp)


def _touches_per_game(s: SeasonStat, gp: int) -> float:
    return safe_div(s.touches, gp)


def _yards_per_target(s: SeasonStat, _gp: int) -> float:
    return safe_div(s.rec_yd, max(s.tgt, 1))


@dataclass(frozen=True)
class PositionStrategy:
    position: str
    metrics: Mapping[str, Metric]
    usage_key: str
    efficiency_key: str
    high_value: Tuple[Tuple[str, float], ...]
    share_source: str
    roles: Tuple[RoleRule, ...]
    default_role: str
    no_data_role: str
    note_clause: NoteClause

    def metric(self, key: str, stat: SeasonStat, gp: int, team_total: float) -> float:
        return self.metrics[key](stat, gp, team_total)

    def role(self, stat: Optional[SeasonStat], gp: int) -> str:
        if stat is None:
            return self.no_data_role
        g = max(gp or 1, 1)
        for label, measure, threshold in self.roles:
            if measure(stat, g) >= threshold:
                return label
        return self.default_role


def _receiver_strategy(position: str, high_value: Tuple[Tuple[str, float], ...], roles: Tuple[RoleRule, ...], default_role: str) -> PositionStrategy:
    return PositionStrategy(
        position=position,
        metrics={
            "tgt_pg": _tgt_pg,
            "fpts_pg": _fpts_pg,
            "fpts_per_tgt": _fpts_per_tgt,
            "rec_yd_per_tgt": _rec_yd_per_tgt,
            "rec_td_pg": _rec_td_pg,
            "tgt_share": _share(lambda s: s.tgt),
        },
        usage_key="tgt_pg",
        efficiency_key="fpts_per_tgt",
        high_value=high_value,
        share_source="tgt",
        roles=roles,
        default_role=default_role,
        no_data_role="Depth",
        note_clause=receiver_clause,
    )


POSITION_STRATEGIES: Mapping[str, PositionStrategy] = {
    "QB": PositionStrategy(
        position="QB",
        metrics={
            "att_pg": _qb_att_pg,
            "fpts_pg": _fpts_pg,
            "fpts_per_att": _qb_fpts_per_att,
            "pass_td_pg": _qb_pass_td_pg,
            "rush_yd_pg": _qb_rush_yd_pg,
        },
        usage_key="att_pg",
        efficiency_key="fpts_per_att",
        high_value=(("pass_td_pg", 0.70), ("rush_yd_pg", 0.30)),
        share_source="rush",
        roles=(
            ("Rushing Threat", _per_game("rush_yd"), 35),
            ("Volume Passer", _per_game("pass_att"), 36),
            ("Pocket Passer", _per_game("pass_att"), 28),
        ),
        default_role="Game Manager",
        no_data_role="Signal Caller",
        note_clause=_qb_clause,
    ),
    "RB": PositionStrategy(
        position="RB",
        metrics={
            "touches_pg": _rb_touches_pg,
            "fpts_pg": _fpts_pg,
            "fpts_per_touch": _rb_fpts_per_touch,
            "rush_td_pg": _rb_rush_td_pg,
            "rec_pg": _rb_rec_pg,
            "rush_share": _share(lambda s: s.rush_att),
        },
        usage_key="touches_pg",
        efficiency_key="fpts_per_touch",
        high_value=(("rush_td_pg", 0.40), ("rec_pg", 0.35), ("rush_share", 0.25)),
        share_source="rush",
        roles=(
            ("Workhorse", _touches_per_game, 18),
            ("Pass-Game Back", _per_game("rec"), 4.5),
            ("Red-Zone Back", _per_game("rush_td"), 0.5),
            ("Featured Back", _touches_per_game, 10),
        ),
        default_role="Change of Pace",
        no_data_role="Depth",
        note_clause=_rb_clause,
    ),
    "WR": _receiver_strategy(
        "WR",
        high_value=(("rec_td_pg", 0.30), ("rec_yd_per_tgt", 0.40), ("tgt_share", 0.30)),
        roles=(
            ("Alpha WR", _per_game("tgt"), 8),
            ("Deep Threat", _yards_per_target, 14),
            ("Red-Zone WR", _per_game("rec_td"), 0.5),
            ("WR2 / Flex", _per_game("tgt"), 5),
        ),
        default_role="Depth WR",
    ),
    # TE leans harder on touchdown rate than WR does.
    "TE": _receiver_strategy(
        "TE",
        high_value=(("rec_td_pg", 0.45), ("rec_yd_per_tgt", 0.30), ("tgt_share", 0.25)),
        roles=(
            ("Receiving TE", _per_game("tgt"), 6),
            ("Red-Zone TE", _per_game("rec_td"), 0.4),
            ("Flex TE", _per_game("tgt"), 3),
        ),
        default_role="Blocking TE",
    ),
}

FALLBACK_ROLE = "Role Player"


def get_strategy(position: str) -> Optional[PositionStrategy]:
    return POSITION_STRATEGIES.get((position or "").upper())


def role_label(position: str, stat: Optional[SeasonStat], gp: int) -> str:
    """Categorical role for a player's selected season (first matching rung wins)."""

    strategy = get_strategy(position)
    if strategy is None:
        return FALLBACK_ROLE if stat is not None else "Depth"
    return strategy.role(stat, gp)
