"""Validation of submitted match results before they are persisted."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from domain.protocol import GameType

DEFAULT_STAT_CAPS: Mapping[str, float] = MappingProxyType(
    {
        GameType.X501.value: 167.0,
        GameType.X301.value: 150.5,
        GameType.CRICKET.value: 9.0,
    }
)


class MatchEntryError(ValueError):
    """Raised when a submitted match fails validation."""


@dataclass(frozen=True)
class MatchRules:
    """Limits applied to submitted matches."""

    min_players: int = 2
    max_players: int = 10
    stat_caps: Mapping[str, float] = field(default_factory=lambda: DEFAULT_STAT_CAPS)
    other_min_score: int = 1
    other_max_score: int = 9999


@dataclass(frozen=True)
class MatchEntry:
    """Raw match form: one ``(player_id, stat)`` pair per slot, stats unparsed."""

    game_type: str
    players: tuple[tuple[str, str], ...]
    winner_id: str | None
    notes: str = ""
    board_type: str | None = None
    venue: str | None = None


@dataclass(frozen=True)
class ParticipantResult:
    """Validated participant ready to be stored as a ``match_players`` row."""

    player_id: str
    score: float
    is_winner: bool


def validate_match_entry(
    entry: MatchEntry,
    rules: MatchRules | None = None,
) -> list[ParticipantResult]:
    """Check a submitted match and return its parsed participants.

    The winner flag is taken from ``entry.winner_id``; it is never inferred
    from the stats.
    """
    rules = rules or MatchRules()
    players = entry.players

    if len(players) < rules.min_players:
        raise MatchEntryError(f"Please select at least {rules.min_players} players.")
    if len(players) > rules.max_players:
        raise MatchEntryError(f"A match can have at most {rules.max_players} players.")

    player_ids = [player_id.strip() for player_id, _ in players]
    if any(not player_id for player_id in player_ids):
        raise MatchEntryError("Please choose all players.")
    if len(set(player_ids)) != len(player_ids):
        raise MatchEntryError("Players must be different.")

    winner_id = (entry.winner_id or "").strip()
    if not winner_id:
        raise MatchEntryError("Please select the winner.")
    if winner_id not in player_ids:
        raise MatchEntryError("Winner must be one of the selected players.")

    participants: list[ParticipantResult] = []
    for player_id, (_, raw_stat) in zip(player_ids, players):
        score = _parse_stat(entry.game_type, raw_stat, rules)
        participants.append(
            ParticipantResult(
                player_id=player_id,
                score=score,
                is_winner=player_id == winner_id,
            )
        )
    return participants


def _parse_stat(game_type: str, raw_stat: str, rules: MatchRules) -> float:
    text = str(raw_stat).strip()

    if game_type == GameType.OTHER.value:
        try:
            value = float(text)
        except ValueError as exc:
            raise MatchEntryError(
                "Scores for Other game types must be whole numbers (e.g., 250)."
            ) from exc
        if not value.is_integer():
            raise MatchEntryError("Scores for Other game types must be whole numbers (e.g., 250).")
        if value < rules.other_min_score or value > rules.other_max_score:
            raise MatchEntryError(
                "Scores for Other game types must be between "
                f"{rules.other_min_score} and {rules.other_max_score}."
            )
        return value

    try:
        value = float(text)
    except ValueError as exc:
        raise MatchEntryError(
            "Stats must be valid numbers (e.g., 101.85, 5.23) for all players."
        ) from exc
    if math.isnan(value) or math.isinf(value):
        raise MatchEntryError("Stats must be valid numbers (e.g., 101.85, 5.23) for all players.")

    cap = rules.stat_caps.get(game_type)
    if cap is not None:
        if value < 0:
            raise MatchEntryError("Stats cannot be negative.")
        if value > cap:
            raise MatchEntryError(f"{game_type} stats cannot exceed {cap:g}.")
    return value


__all__ = [
    "DEFAULT_STAT_CAPS",
    "MatchEntry",
    "MatchEntryError",
    "MatchRules",
    "ParticipantResult",
    "validate_match_entry",
]
