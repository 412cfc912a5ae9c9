"""Chronological outcome histories and the streak/rolling-window arithmetic over them."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from domain.common import Outcome

LAST5_WINDOW = 5
LAST10_WINDOW = 10


@dataclass(frozen=True)
class OutcomeTally:
    """Counts, streak and rolling windows derived from one outcome history."""

    wins: int
    losses: int
    games: int
    win_pct: float
    streak: str
    last5: str
    last10: str


def chronological(outcomes: Iterable[Outcome]) -> list[Outcome]:
    """Return outcomes oldest first; entries sharing a timestamp keep their input order."""
    return sorted(outcomes, key=lambda outcome: outcome.played_at)


def win_percentage(wins: int, games: int) -> float:
    if games <= 0:
        return 0.0
    return wins / games * 100.0


def current_streak(history: Sequence[Outcome]) -> str:
    """Run of identical outcomes ending at the most recent entry, as ``W<n>``/``L<n>``."""
    if not history:
        return ""

    token_is_win = history[-1].is_win
    count = 0
    for outcome in reversed(history):
        if outcome.is_win != token_is_win:
            break
        count += 1

    return f"{'W' if token_is_win else 'L'}{count}"


def rolling_record(history: Sequence[Outcome], window: int) -> str:
    """Win-loss tally over the last ``window`` entries, as ``<wins>-<losses>``."""
    if window <= 0:
        raise ValueError("window must be greater than 0")
    if not history:
        return ""

    recent = history[-window:]
    wins = sum(1 for outcome in recent if outcome.is_win)
    return f"{wins}-{len(recent) - wins}"


def tally_outcomes(outcomes: Iterable[Outcome]) -> OutcomeTally:
    """Sort one outcome history and derive every win/loss figure from it."""
    history = chronological(outcomes)
    wins = sum(1 for outcome in history if outcome.is_win)
    games = len(history)
    return OutcomeTally(
        wins=wins,
        losses=games - wins,
        games=games,
        win_pct=win_percentage(wins, games),
        streak=current_streak(history),
        last5=rolling_record(history, LAST5_WINDOW),
        last10=rolling_record(history, LAST10_WINDOW),
    )


__all__ = [
    "LAST10_WINDOW",
    "LAST5_WINDOW",
    "OutcomeTally",
    "chronological",
    "current_streak",
    "rolling_record",
    "tally_outcomes",
    "win_percentage",
]
