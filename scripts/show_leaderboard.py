#!/usr/bin/env python3
"""Show the league leaderboards: overall record, 3-dart average and MPR."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from sqlalchemy.exc import SQLAlchemyError

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import create_db_engine, create_session_factory, resolve_db_url
from domain.common import AverageRecord, Leaderboard, WinLossRecord
from domain.config import LeagueConfig, resolve_league_config
from domain.pipeline import build_leaderboard, load_leaderboard
from repositories.match_results import fetch_match_result_rows, load_rows_from_json

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Render league leaderboards from the database or an exported rows file.",
)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log repository activity to stderr."),
    ] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _render_win_loss_row(index: int, record: WinLossRecord) -> str:
    return (
        f"{index:2d}. {record.display_name:<28} "
        f"W={record.wins:3d} L={record.losses:3d} GP={record.games:3d} "
        f"win%={record.win_pct:6.1f} streak={record.streak or '-':>4} "
        f"last5={record.last5 or '-':>4} last10={record.last10 or '-':>5}"
    )


def _render_average_row(index: int, record: AverageRecord, label: str) -> str:
    return f"{index:2d}. {record.display_name:<28} {label}={record.avg:7.2f} games={record.games:3d}"


def _echo_leaderboard(board: Leaderboard, *, config: LeagueConfig, top_n: int) -> None:
    typer.echo(f"{config.name} - Overall Leaderboard (All Match Types)")
    if not board.overall:
        typer.echo("No matches recorded yet.")
        return
    for index, record in enumerate(board.overall[:top_n], start=1):
        typer.echo(_render_win_loss_row(index, record))

    typer.echo("")
    typer.echo(f"3-Dart Average ({' / '.join(config.stats.three_dart_game_types)})")
    if not board.three_dart:
        typer.echo("No 3-dart averages recorded yet.")
    for index, record in enumerate(board.three_dart[:top_n], start=1):
        typer.echo(_render_average_row(index, record, "avg"))

    typer.echo("")
    typer.echo(f"MPR ({' / '.join(config.stats.mpr_game_types)})")
    if not board.mpr:
        typer.echo("No MPR recorded yet.")
    for index, record in enumerate(board.mpr[:top_n], start=1):
        typer.echo(_render_average_row(index, record, "mpr"))


@app.command()
def show(
    top_n: Annotated[
        int,
        typer.Option("--top-n", help="Number of players to print per table."),
    ] = 25,
    rows_file: Annotated[
        Path | None,
        typer.Option(
            "--rows-file",
            help="Read joined match_players payloads from a JSON export instead of the database.",
        ),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="League TOML config. Defaults to config/league.toml."),
    ] = None,
    db_url: Annotated[
        str | None,
        typer.Option("--db-url", help="Database URL. Overrides RDD_DB_URL and the config file."),
    ] = None,
) -> None:
    """Print the overall, 3-dart average and MPR leaderboards."""
    if top_n <= 0:
        raise typer.BadParameter("--top-n must be greater than 0")

    config = resolve_league_config(config_path)

    if rows_file is not None:
        if not rows_file.exists():
            raise typer.BadParameter(f"Rows file not found: {rows_file}", param_hint="--rows-file")
        board = build_leaderboard(load_rows_from_json(rows_file), config.stats)
    else:
        engine = create_db_engine(resolve_db_url(db_url, config.db_url))
        try:
            board = load_leaderboard(
                session_factory=create_session_factory(engine),
                fetch_rows=fetch_match_result_rows,
                stats=config.stats,
            )
        except SQLAlchemyError as exc:
            typer.echo(f"Error loading leaderboard: {exc}", err=True)
            raise typer.Exit(code=1) from exc

    _echo_leaderboard(board, config=config, top_n=top_n)


if __name__ == "__main__":
    app()
