"""Persistence helpers for recorded matches and their participants."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from domain.match_entry import MatchEntry, MatchRules, ParticipantResult, validate_match_entry
from models import Match, MatchPlayer

logger = logging.getLogger(__name__)


class MatchNotFoundError(LookupError):
    """Raised when a match id does not exist."""


class MatchPermissionError(PermissionError):
    """Raised when a user edits or deletes a match they did not create."""


@dataclass(frozen=True)
class MatchPage:
    """One page of matches, newest first."""

    matches: tuple[Match, ...]
    page: int
    page_size: int
    total_matches: int

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total_matches / self.page_size))


def record_match(
    session: Session,
    entry: MatchEntry,
    *,
    created_by: str,
    rules: MatchRules | None = None,
    played_at: datetime | None = None,
) -> Match:
    """Validate ``entry`` and insert the match with its participants."""
    participants = validate_match_entry(entry, rules)

    match = Match(
        game_type=entry.game_type,
        notes=entry.notes,
        board_type=entry.board_type or None,
        venue=entry.venue or None,
        created_by=created_by,
    )
    if played_at is not None:
        match.played_at = played_at
    match.players = _participant_rows(participants)
    session.add(match)
    session.flush()

    logger.info(
        "recorded match id=%s game_type=%s players=%d created_by=%s",
        match.id,
        match.game_type,
        len(participants),
        created_by,
    )
    return match


def update_match(
    session: Session,
    match_id: int,
    entry: MatchEntry,
    *,
    editor_id: str,
    rules: MatchRules | None = None,
) -> Match:
    """Replace a match's details and participants; only its creator may do so."""
    participants = validate_match_entry(entry, rules)
    match = _owned_match(session, match_id, editor_id)

    match.game_type = entry.game_type
    match.notes = entry.notes
    match.board_type = entry.board_type or None
    match.venue = entry.venue or None

    # Flush the removals first so re-added players do not hit the unique constraint.
    match.players.clear()
    session.flush()
    match.players = _participant_rows(participants)
    session.flush()

    logger.info("updated match id=%s players=%d editor=%s", match_id, len(participants), editor_id)
    return match


def delete_match(session: Session, match_id: int, *, editor_id: str) -> None:
    """Delete a match and its participants; only its creator may do so."""
    match = _owned_match(session, match_id, editor_id)
    session.delete(match)
    session.flush()
    logger.info("deleted match id=%s editor=%s", match_id, editor_id)


def list_matches_page(session: Session, *, page: int = 1, page_size: int = 10) -> MatchPage:
    """Matches ordered by ``played_at`` descending, with participants loaded."""
    if page <= 0:
        raise ValueError("page must be greater than 0")
    if page_size <= 0:
        raise ValueError("page_size must be greater than 0")

    total_matches = int(session.scalar(select(func.count(Match.id))) or 0)
    statement = (
        select(Match)
        .options(selectinload(Match.players))
        .order_by(Match.played_at.desc(), Match.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    matches = tuple(session.scalars(statement).all())
    return MatchPage(
        matches=matches,
        page=page,
        page_size=page_size,
        total_matches=total_matches,
    )


def fetch_recent_matches(session: Session, player_id: str, *, limit: int = 5) -> list[Match]:
    """The most recent matches ``player_id`` took part in, with every participant loaded."""
    if limit <= 0:
        raise ValueError("limit must be greater than 0")

    player_matches = select(MatchPlayer.match_id).where(MatchPlayer.player_id == player_id)
    statement = (
        select(Match)
        .options(selectinload(Match.players))
        .where(Match.id.in_(player_matches))
        .order_by(Match.played_at.desc(), Match.id.desc())
        .limit(limit)
    )
    return list(session.scalars(statement).all())


def _owned_match(session: Session, match_id: int, editor_id: str) -> Match:
    match = session.get(Match, match_id)
    if match is None:
        raise MatchNotFoundError(f"match_id={match_id} does not exist")
    if match.created_by != editor_id:
        raise MatchPermissionError("You can only edit or delete matches you created.")
    return match


def _participant_rows(participants: list[ParticipantResult]) -> list[MatchPlayer]:
    return [
        MatchPlayer(
            player_id=participant.player_id,
            score=participant.score,
            is_winner=participant.is_winner,
        )
        for participant in participants
    ]


__all__ = [
    "MatchNotFoundError",
    "MatchPage",
    "MatchPermissionError",
    "delete_match",
    "fetch_recent_matches",
    "list_matches_page",
    "record_match",
    "update_match",
]
