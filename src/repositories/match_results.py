"""Read feed of flat per-player match result rows for the stats aggregator."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from domain.common import MatchResultRow
from domain.players import UNKNOWN_PLAYER, format_player_name
from models import Match, MatchPlayer, Profile

logger = logging.getLogger(__name__)

# Matches with no stored time sort before everything else.
EPOCH = datetime(1970, 1, 1)


def _result_rows_statement():
    return (
        select(
            MatchPlayer.player_id,
            MatchPlayer.match_id,
            MatchPlayer.score,
            MatchPlayer.is_winner,
            Match.game_type,
            Match.played_at,
            Profile.display_name,
            Profile.first_name,
        )
        .select_from(MatchPlayer)
        .join(Match, MatchPlayer.match_id == Match.id)
        .outerjoin(Profile, MatchPlayer.player_id == Profile.id)
        .order_by(Match.played_at, MatchPlayer.match_id, MatchPlayer.id)
    )


def _execute_rows(session: Session, statement) -> list[MatchResultRow]:
    rows: list[MatchResultRow] = []
    for record in session.execute(statement):
        if not record.player_id:
            logger.debug("skipping match_players row without player_id (match_id=%s)", record.match_id)
            continue
        rows.append(
            MatchResultRow(
                player_id=str(record.player_id),
                match_id=int(record.match_id),
                played_at=_naive_utc(record.played_at) or EPOCH,
                is_winner=record.is_winner is True,
                display_name=format_player_name(record.display_name, record.first_name),
                game_type=record.game_type or None,
                score=_optional_float(record.score),
            )
        )
    return rows


def fetch_match_result_rows(
    session: Session,
    player_id: str | None = None,
) -> list[MatchResultRow]:
    """Join match_players with matches and profiles into flat aggregator rows.

    With ``player_id`` set, only that player's own rows are returned.
    """
    statement = _result_rows_statement()
    if player_id is not None:
        statement = statement.where(MatchPlayer.player_id == player_id)

    rows = _execute_rows(session, statement)
    logger.debug("fetched %d match result rows (player_id=%s)", len(rows), player_id)
    return rows


def fetch_rows_for_player_matches(session: Session, player_id: str) -> list[MatchResultRow]:
    """Every participant row of every match ``player_id`` played in (head-to-head input)."""
    player_matches = select(MatchPlayer.match_id).where(MatchPlayer.player_id == player_id)
    statement = _result_rows_statement().where(MatchPlayer.match_id.in_(player_matches))
    return _execute_rows(session, statement)


def normalize_joined_payload(raw: Mapping[str, Any]) -> MatchResultRow | None:
    """Flatten one joined ``match_players`` payload into a :class:`MatchResultRow`.

    Joined relations (``profiles``, ``matches``) may arrive as an object, a
    one-element list, an empty list or null. Returns ``None`` for payloads
    without a player id.
    """
    player_id = raw.get("player_id")
    if not player_id:
        return None

    profile = _single_relation(raw.get("profiles"))
    match = _single_relation(raw.get("matches"))

    match_id = raw.get("match_id")
    if match_id is None and match is not None:
        match_id = match.get("id")

    played_at = _parse_timestamp(match.get("played_at") if match else None)
    display_name = (
        format_player_name(profile.get("display_name"), profile.get("first_name"))
        if profile is not None
        else UNKNOWN_PLAYER
    )

    return MatchResultRow(
        player_id=str(player_id),
        match_id=int(match_id) if match_id is not None else 0,
        played_at=played_at or EPOCH,
        is_winner=raw.get("is_winner") is True,
        display_name=display_name,
        game_type=(match.get("game_type") or None) if match else None,
        score=_optional_float(raw.get("score")),
    )


def normalize_joined_payloads(payloads: Sequence[Mapping[str, Any]]) -> list[MatchResultRow]:
    rows: list[MatchResultRow] = []
    skipped = 0
    for payload in payloads:
        row = normalize_joined_payload(payload)
        if row is None:
            skipped += 1
            continue
        rows.append(row)
    if skipped:
        logger.info("skipped %d payloads without player_id", skipped)
    return rows


def load_rows_from_json(path: Path) -> list[MatchResultRow]:
    """Read an exported JSON array of joined ``match_players`` payloads."""
    with path.open("r", encoding="utf-8") as file:
        raw = json.load(file)
    if not isinstance(raw, list):
        raise ValueError(f"{path}: expected a JSON array of match_players payloads")
    return normalize_joined_payloads([item for item in raw if isinstance(item, Mapping)])


def _single_relation(value: Any) -> Mapping[str, Any] | None:
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, Mapping):
        return value
    return None


def _naive_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is not None:
        return value.astimezone(UTC).replace(tzinfo=None)
    return value


def _parse_timestamp(value: Any) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return _naive_utc(value)
    try:
        return _naive_utc(datetime.fromisoformat(str(value)))
    except ValueError:
        logger.warning("unparseable played_at %r, treating as epoch", value)
        return None


def _optional_float(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None


__all__ = [
    "EPOCH",
    "fetch_match_result_rows",
    "fetch_rows_for_player_matches",
    "load_rows_from_json",
    "normalize_joined_payload",
    "normalize_joined_payloads",
]
