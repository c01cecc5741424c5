"""Human-readable player notes."""

from __future__ import annotations

from typing import Optional

from ffengine.models import RawPlayer, SeasonStat

from .strategies import get_strategy, receiver_clause, role_label

__all__ = ["generate_note", "role_label"]

STRONG_TEAM_WINS = 12
WEAK_TEAM_WINS = 5


def _wins_label(wins: float) -> str:
    return str(int(wins)) if float(wins).is_integer() else f"{wins:g}"


def generate_note(
    player: RawPlayer,
    stat: Optional[SeasonStat],
    gp: int,
    role: str,
    depth_rank: int = 0,
    team_wins: Optional[float] = None,
) -> str:
    """Compose the usage clause plus optional depth and team-context clauses."""

    if stat is None:
        return f"{player.name} has limited historical data available."

    g = max(gp or 1, 1)
    strategy = get_strategy(player.position)
    clause = strategy.note_clause if strategy is not None else receiver_clause
    parts = [clause(role, stat, g)]

    if depth_rank == 1:
        parts.append("Confirmed starter.")
    elif depth_rank == 2:
        parts.append("Listed as backup; value depends on injuries.")

    if team_wins is not None:
        if team_wins >= STRONG_TEAM_WINS:
            parts.append(f"Strong offense ({_wins_label(team_wins)}W team) boosts ceiling.")
        elif team_wins <= WEAK_TEAM_WINS:
            parts.append(f"Weak team context ({_wins_label(team_wins)}W) limits floor.")

    return " ".join(parts)
