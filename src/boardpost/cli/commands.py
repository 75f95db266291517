"""CLI command implementations"""

import sys
from pathlib import Path
from typing import Annotated

import typer
from sqlmodel import Session

from boardpost.config import Settings, load_config, setup_logging
from boardpost.core.parse import render_post
from boardpost.crud.database import init_db, make_engine, reset_db
from boardpost.crud.posts import create_post, create_thread, make_resolver, post_uri


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    setup_logging(settings)
    return settings


def _read_body(path: str) -> str:
    """Read a post body from a file, or stdin when path is '-'."""
    if path == "-":
        return sys.stdin.read()
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        _fail(f"Could not read {path}", e)


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize database schema. Use --reset to clear existing data."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        reset_db(engine)
        typer.echo("Existing data cleared.")
    else:
        init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")


def thread_cmd(
    board: Annotated[str, typer.Argument(help="Board to post the thread on")],
    path: Annotated[str, typer.Argument(help="File holding the opening post ('-' for stdin)")],
    ):
    """Start a new thread with the given opening post."""
    settings = _settings()
    raw = _read_body(path)
    engine = make_engine(settings.db_url)
    init_db(engine)

    try:
        with Session(engine) as session:
            thread, post = create_thread(session, board, raw, settings.filter_rules)
            created_id, uri = thread.id, post_uri(session, post.id)
            session.commit()
    except ValueError as e:
        _fail("Post rejected", e)
    typer.echo(f"Created thread #{created_id}: {uri}")


def post_cmd(
    thread_id: Annotated[int, typer.Argument(help="Thread to reply to")],
    path: Annotated[str, typer.Argument(help="File holding the post ('-' for stdin)")],
    ):
    """Reply to an existing thread."""
    settings = _settings()
    raw = _read_body(path)
    engine = make_engine(settings.db_url)
    init_db(engine)

    try:
        with Session(engine) as session:
            post = create_post(session, thread_id, raw, settings.filter_rules)
            created_id, uri = post.id, post_uri(session, post.id)
            session.commit()
    except ValueError as e:
        _fail("Post rejected", e)
    typer.echo(f"Created post #{created_id}: {uri}")


def render_cmd(
    path: Annotated[str, typer.Argument(help="File holding the post ('-' for stdin)")],
    no_resolve: Annotated[bool, typer.Option("--no-resolve", help="Leave >>id references unlinked")] = False,
    ):
    """Print the HTML a post would render to, without storing it."""
    settings = _settings()
    raw = _read_body(path)

    try:
        if no_resolve:
            html = render_post(raw, settings.filter_rules)
        else:
            engine = make_engine(settings.db_url)
            init_db(engine)
            with Session(engine) as session:
                html = render_post(raw, settings.filter_rules, make_resolver(session))
    except ValueError as e:
        _fail("Could not parse post", e)
    typer.echo(html)


def rules_cmd():
    """List the configured filter rules in the order they are applied."""
    settings = _settings()
    if not settings.filter_rules:
        typer.echo("No filter rules configured.")
        return
    for i, rule in enumerate(settings.filter_rules, start=1):
        typer.echo(f"  {i}. {rule.pattern!r} -> {rule.replace_with!r}")
    typer.echo(f"{len(settings.filter_rules)} rule(s) OK")
