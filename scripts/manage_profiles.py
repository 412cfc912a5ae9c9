#!/usr/bin/env python3
"""List, edit and delete player profiles."""

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
from domain.players import format_player_name
from repositories.profiles import PROFILE_FIELDS, delete_profile, list_profiles, save_profile
from repositories.schema import ensure_schema

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Player profile commands.",
)

_state: dict[str, str] = {}


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
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)
    config = resolve_league_config(config_path)
    _state["db_url"] = resolve_db_url(db_url, config.db_url)


def _session_factory():
    engine = create_db_engine(_state["db_url"])
    ensure_schema(engine)
    return create_session_factory(engine)


@app.command("list")
def list_command(
    search: Annotated[
        str,
        typer.Option("--search", help="Case-insensitive match on display, first or last name."),
    ] = "",
) -> None:
    """Print every profile sorted by name."""
    with _session_factory()() as session:
        profiles = list_profiles(session, search)

    if not profiles:
        typer.echo("No players found.")
        return
    for profile in profiles:
        name = format_player_name(
            profile.display_name,
            profile.first_name,
            profile.include_first_name_in_display,
        )
        typer.echo(f"{profile.id}  {name}")


@app.command()
def save(
    profile_id: Annotated[str, typer.Argument(help="Profile id (identity provider user id).")],
    display_name: Annotated[str | None, typer.Option("--display-name")] = None,
    first_name: Annotated[str | None, typer.Option("--first-name")] = None,
    last_name: Annotated[str | None, typer.Option("--last-name")] = None,
    sex: Annotated[str | None, typer.Option("--sex")] = None,
    include_first_name: Annotated[
        bool | None,
        typer.Option(
            "--include-first-name/--hide-first-name",
            help="Show the first name next to the display name.",
        ),
    ] = None,
    clear: Annotated[
        list[str] | None,
        typer.Option(
            "--clear",
            help=f"Reset a stored field to empty; repeatable. One of: {', '.join(PROFILE_FIELDS)}.",
        ),
    ] = None,
) -> None:
    """Create a profile or update the fields given; omitted fields keep their value."""
    with _session_factory()() as session:
        try:
            save_profile(
                session,
                profile_id,
                display_name=display_name,
                first_name=first_name,
                last_name=last_name,
                sex=sex,
                include_first_name_in_display=include_first_name,
                clear=clear or (),
            )
        except ValueError as exc:
            session.rollback()
            raise typer.BadParameter(str(exc), param_hint="--clear") from exc
        session.commit()
    typer.echo(f"saved profile id={profile_id}")


@app.command("delete-account")
def delete_account(
    profile_id: Annotated[str, typer.Argument(help="Profile id to delete.")],
    yes: Annotated[bool, typer.Option("--yes", help="Skip the confirmation prompt.")] = False,
) -> None:
    """Delete a profile's data row and its match participation."""
    if not yes:
        typer.confirm(f"Delete profile {profile_id} and its match results?", abort=True)

    with _session_factory()() as session:
        deleted = delete_profile(session, profile_id)
        session.commit()

    if not deleted:
        typer.echo(f"No profile with id={profile_id}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"deleted profile id={profile_id}")


if __name__ == "__main__":
    app()
