"""Darts league domain modules."""

from domain.common import (
    AverageRecord,
    CategoryRecord,
    Leaderboard,
    MatchResultRow,
    PlayerSummary,
    WinLossRecord,
)
from domain.protocol import GameType

__all__ = [
    "AverageRecord",
    "CategoryRecord",
    "GameType",
    "Leaderboard",
    "MatchResultRow",
    "PlayerSummary",
    "WinLossRecord",
]
