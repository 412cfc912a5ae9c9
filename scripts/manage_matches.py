#!/usr/bin/env python3
"""Record, edit, delete and list league matches."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import create_db_engine, create_session_factory, resolve_db_url
from domain.config import LeagueConfig, resolve_league_config
from domain.match_entry import MatchEntry, MatchEntryError
from domain.protocol import GameType
from repositories.matches import (
    MatchNotFoundError,
    MatchPermissionError,
    delete_match,
    list_matches_page,
    record_match,
    update_match,
)
from repositories.schema import ensure_schema

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Match entry commands.",
)

_state: dict[str, object] = {}


@app.callback()
def main(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="League TOML config. Defaults to config/league.toml."),
    ] = None,
    db_url: Annotated[
        str | None,
        typer.Option("--db-url", help="Database URL. Overrides RDD_DB_URL and the config file."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log repository activity to stderr."),
    ] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = resolve_league_config(config_path)
    _state["config"] = config
    _state["db_url"] = resolve_db_url(db_url, config.db_url)


def _config() -> LeagueConfig:
    return _state["config"]  # type: ignore[return-value]


def _session_factory():
    engine = create_db_engine(str(_state["db_url"]))
    ensure_schema(engine)
    return create_session_factory(engine)


def _parse_players(values: list[str]) -> tuple[tuple[str, str], ...]:
    players: list[tuple[str, str]] = []
    for value in values:
        player_id, separator, stat = value.partition("=")
        if not separator:
            raise typer.BadParameter(
                f"Expected PLAYER_ID=STAT, got '{value}'",
                param_hint="--player",
            )
        players.append((player_id.strip(), stat.strip()))
    return tuple(players)


def _build_entry(
    *,
    game_type: GameType,
    players: list[str],
    winner_id: str | None,
    notes: str,
    board_type: str | None,
    venue: str | None,
) -> MatchEntry:
    return MatchEntry(
        game_type=game_type.value,
        players=_parse_players(players),
        winner_id=winner_id,
        notes=notes,
        board_type=board_type,
        venue=venue,
    )


GameTypeOption = Annotated[
    GameType,
    typer.Option("--game-type", help="Game format (501, 301, Cricket, Other)."),
]
PlayersOption = Annotated[
    list[str],
    typer.Option("--player", help="Participant as PLAYER_ID=STAT; repeat for each player."),
]
WinnerOption = Annotated[
    str | None,
    typer.Option("--winner", help="Profile id of the winning player."),
]
UserOption = Annotated[
    str,
    typer.Option("--user-id", help="Profile id of the signed-in user making the change."),
]


@app.command()
def record(
    user_id: UserOption,
    players: PlayersOption,
    winner_id: WinnerOption = None,
    game_type: GameTypeOption = GameType.X501,
    notes: Annotated[str, typer.Option("--notes")] = "",
    board_type: Annotated[str | None, typer.Option("--board-type")] = None,
    venue: Annotated[str | None, typer.Option("--venue")] = None,
) -> None:
    """Record a new match."""
    entry = _build_entry(
        game_type=game_type,
        players=players,
        winner_id=winner_id,
        notes=notes,
        board_type=board_type,
        venue=venue,
    )
    session_factory = _session_factory()
    with session_factory() as session:
        try:
            match = record_match(
                session,
                entry,
                created_by=user_id,
                rules=_config().match_rules,
            )
            session.commit()
        except MatchEntryError as exc:
            session.rollback()
            raise typer.BadParameter(str(exc)) from exc
    typer.echo(f"recorded match_id={match.id}")


@app.command()
def edit(
    match_id: Annotated[int, typer.Argument(help="Match id to edit.")],
    user_id: UserOption,
    players: PlayersOption,
    winner_id: WinnerOption = None,
    game_type: GameTypeOption = GameType.X501,
    notes: Annotated[str, typer.Option("--notes")] = "",
    board_type: Annotated[str | None, typer.Option("--board-type")] = None,
    venue: Annotated[str | None, typer.Option("--venue")] = None,
) -> None:
    """Replace a match you created."""
    entry = _build_entry(
        game_type=game_type,
        players=players,
        winner_id=winner_id,
        notes=notes,
        board_type=board_type,
        venue=venue,
    )
    session_factory = _session_factory()
    with session_factory() as session:
        try:
            update_match(
                session,
                match_id,
                entry,
                editor_id=user_id,
                rules=_config().match_rules,
            )
            session.commit()
        except (MatchEntryError, MatchNotFoundError, MatchPermissionError) as exc:
            session.rollback()
            raise typer.BadParameter(str(exc)) from exc
    typer.echo(f"updated match_id={match_id}")


@app.command()
def delete(
    match_id: Annotated[int, typer.Argument(help="Match id to delete.")],
    user_id: UserOption,
) -> None:
    """Delete a match you created."""
    session_factory = _session_factory()
    with session_factory() as session:
        try:
            delete_match(session, match_id, editor_id=user_id)
            session.commit()
        except (MatchNotFoundError, MatchPermissionError) as exc:
            session.rollback()
            raise typer.BadParameter(str(exc)) from exc
    typer.echo(f"deleted match_id={match_id}")


@app.command("list")
def list_matches(
    page: Annotated[int, typer.Option("--page", help="1-based page number.")] = 1,
) -> None:
    """List matches newest first, one page at a time."""
    if page <= 0:
        raise typer.BadParameter("--page must be greater than 0")

    session_factory = _session_factory()
    with session_factory() as session:
        result = list_matches_page(session, page=page, page_size=_config().page_size)

    typer.echo(f"page={result.page}/{result.total_pages} total_matches={result.total_matches}")
    for match in result.matches:
        winners = [player.player_id for player in match.players if player.is_winner]
        typer.echo(
            f"{match.id:5d} {match.played_at:%Y-%m-%d %H:%M} {match.game_type or 'Unknown game':<8} "
            f"players={len(match.players)} winner={winners[0] if winners else '-'} "
            f"venue={match.venue or '-'}"
        )


if __name__ == "__main__":
    app()
