#!/usr/bin/env python3
"""Show one player's profile: totals, per-game-type record, head-to-head and recent matches."""

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
from domain.config import resolve_league_config
from domain.pipeline import PlayerReport, build_player_report
from domain.players import format_player_name
from models import Match
from repositories.match_results import fetch_rows_for_player_matches
from repositories.matches import fetch_recent_matches
from repositories.profiles import get_profile

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Player profile statistics.",
)


def _echo_report(report: PlayerReport, *, opponent_id: str | None) -> None:
    summary = report.summary
    typer.echo(
        f"games={summary.games} wins={summary.wins} losses={summary.losses} "
        f"win%={summary.win_pct:.1f} streak={summary.streak or '-'} "
        f"last5={summary.last5 or '-'} last10={summary.last10 or '-'}"
    )
    three_dart = f"{summary.three_dart_avg:.2f}" if summary.three_dart_games else "-"
    mpr = f"{summary.mpr_avg:.2f}" if summary.mpr_games else "-"
    typer.echo(
        f"3-dart avg={three_dart} ({summary.three_dart_games} games) "
        f"mpr={mpr} ({summary.mpr_games} games)"
    )

    typer.echo("")
    typer.echo("By game type")
    for record in report.breakdown:
        typer.echo(
            f"  {record.game_type:<8} W={record.wins:3d} L={record.losses:3d} "
            f"GP={record.games:3d} win%={record.win_pct:6.1f} "
            f"streak={record.streak or '-':>4} last5={record.last5 or '-':>4} "
            f"last10={record.last10 or '-':>5}"
        )

    typer.echo("")
    typer.echo("Head-to-head")
    records = report.head_to_head
    if opponent_id is not None:
        records = tuple(record for record in records if record.player_id == opponent_id)
    if not records:
        typer.echo("  No head-to-head matches.")
    for record in records:
        typer.echo(
            f"  vs {record.display_name:<26} W={record.wins:3d} L={record.losses:3d} "
            f"win%={record.win_pct:6.1f} streak={record.streak or '-':>4} "
            f"last5={record.last5 or '-':>4} last10={record.last10 or '-':>5}"
        )


def _render_match(match: Match, player_names: dict[str, str]) -> str:
    participants = ", ".join(
        f"{player_names.get(player.player_id, player.player_id)}"
        f"{' (W)' if player.is_winner else ''}"
        f" {player.score if player.score is not None else '-'}"
        for player in match.players
    )
    return f"  {match.played_at:%Y-%m-%d %H:%M} {match.game_type or 'Unknown game'}: {participants}"


@app.command()
def show(
    player_id: Annotated[str, typer.Argument(help="Profile id of the player.")],
    opponent_id: Annotated[
        str | None,
        typer.Option("--opponent", help="Only print head-to-head against this profile id."),
    ] = None,
    recent: Annotated[
        int,
        typer.Option("--recent", help="Number of recent matches to list (0 to skip)."),
    ] = 5,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="League TOML config. Defaults to config/league.toml."),
    ] = None,
    db_url: Annotated[
        str | None,
        typer.Option("--db-url", help="Database URL. Overrides RDD_DB_URL and the config file."),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Print a player's profile statistics."""
    if recent < 0:
        raise typer.BadParameter("--recent must be >= 0")
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    config = resolve_league_config(config_path)
    engine = create_db_engine(resolve_db_url(db_url, config.db_url))
    session_factory = create_session_factory(engine)

    with session_factory() as session:
        profile = get_profile(session, player_id)
        if profile is None:
            typer.echo(f"Could not load profile: no profile with id={player_id}", err=True)
            raise typer.Exit(code=1)

        rows = fetch_rows_for_player_matches(session, player_id)
        recent_matches = fetch_recent_matches(session, player_id, limit=recent) if recent else []

    report = build_player_report(rows, player_id, config.stats)
    player_names = {row.player_id: row.display_name for row in rows}

    typer.echo(
        format_player_name(
            profile.display_name,
            profile.first_name,
            profile.include_first_name_in_display,
        )
    )
    _echo_report(report, opponent_id=opponent_id)

    if recent_matches:
        typer.echo("")
        typer.echo("Recent matches")
        for match in recent_matches:
            typer.echo(_render_match(match, player_names))


if __name__ == "__main__":
    app()
