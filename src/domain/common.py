"""Shared types for match results and derived leaderboard records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class MatchResultRow:
    """Canonical per-player match outcome consumed by the stats aggregator."""

    player_id: str
    match_id: int
    played_at: datetime
    is_winner: bool
    display_name: str
    game_type: str | None = None
    score: float | None = None


@dataclass(frozen=True)
class Outcome:
    """One win/loss entry in a chronological outcome history."""

    played_at: datetime
    is_win: bool


@dataclass(frozen=True)
class WinLossRecord:
    """Win/loss record for one player (overall) or one opponent (head-to-head)."""

    player_id: str
    display_name: str
    wins: int
    losses: int
    games: int
    win_pct: float
    streak: str
    last5: str
    last10: str


@dataclass(frozen=True)
class AverageRecord:
    """Per-player scoring average over one game-type category."""

    player_id: str
    display_name: str
    avg: float
    games: int


@dataclass(frozen=True)
class CategoryRecord:
    """Win/loss record for one player restricted to one game type."""

    game_type: str
    wins: int
    losses: int
    games: int
    win_pct: float
    streak: str
    last5: str
    last10: str


@dataclass(frozen=True)
class PlayerSummary:
    """Profile card totals for a single player."""

    player_id: str
    games: int
    wins: int
    losses: int
    win_pct: float
    streak: str
    last5: str
    last10: str
    three_dart_avg: float
    three_dart_games: int
    mpr_avg: float
    mpr_games: int


@dataclass(frozen=True)
class Leaderboard:
    """All home-page leaderboard tables computed from one row set."""

    overall: tuple[WinLossRecord, ...]
    three_dart: tuple[AverageRecord, ...]
    mpr: tuple[AverageRecord, ...]


__all__ = [
    "AverageRecord",
    "CategoryRecord",
    "Leaderboard",
    "MatchResultRow",
    "Outcome",
    "PlayerSummary",
    "WinLossRecord",
]
