"""Game-type enum and category predicates shared by the stats aggregator."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Protocol, runtime_checkable

from domain.common import MatchResultRow


class GameType(str, Enum):
    """Game formats recorded by the league."""

    CRICKET = "Cricket"
    X501 = "501"
    X301 = "301"
    OTHER = "Other"


# Display order for per-game-type breakdowns.
GAME_TYPE_ORDER: tuple[GameType, ...] = (
    GameType.CRICKET,
    GameType.X501,
    GameType.X301,
    GameType.OTHER,
)


@runtime_checkable
class CategoryPredicate(Protocol):
    """Decides whether a row belongs to an averaging category."""

    def __call__(self, row: MatchResultRow) -> bool: ...


def resolve_game_type(value: str | None) -> GameType:
    """Map a stored game type onto a breakdown category, unknown values fall into Other."""
    if value is None:
        return GameType.OTHER
    try:
        return GameType(value)
    except ValueError:
        return GameType.OTHER


def game_type_in(game_types: Iterable[str]) -> CategoryPredicate:
    """Build a predicate matching rows whose game type is one of ``game_types``."""
    allowed = frozenset(
        game_type.value if isinstance(game_type, GameType) else str(game_type)
        for game_type in game_types
    )

    def _predicate(row: MatchResultRow) -> bool:
        return row.game_type is not None and row.game_type in allowed

    return _predicate


__all__ = [
    "CategoryPredicate",
    "GAME_TYPE_ORDER",
    "GameType",
    "game_type_in",
    "resolve_game_type",
]
