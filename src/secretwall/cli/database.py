"""Database inspection CLI commands for secretwall.

Adds a ``query`` command group to the Litestar CLI for looking at users,
secrets, and sessions without going through the web app.
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import rich_click as click
from litestar.plugins import CLIPluginProtocol
from rich.console import Console
from rich.table import Table
from sqlalchemy import create_engine, delete, func, inspect, select
from sqlalchemy.orm import Session, sessionmaker

from secretwall.storage.db.setup import get_database_url

if TYPE_CHECKING:
    from collections.abc import Generator

console = Console()

_SYNC_DRIVERS = {
    "+aiosqlite": "",
    "+asyncpg": "+psycopg2",
}


def get_sync_database_url() -> str:
    """Get the database URL the app would use, rewritten for a sync driver.

    The URL goes through the same normalisation as the app, so every scheme the
    app accepts (``sqlite:///``, ``postgres://``, ``postgresql://``, async
    variants) maps to a sync dialect here.
    """
    url = get_database_url()
    for async_driver, sync_driver in _SYNC_DRIVERS.items():
        if async_driver in url:
            return url.replace(async_driver, sync_driver, 1)
    return url


@contextmanager
def get_sync_session() -> Generator[Session, None, None]:
    """Get a sync database session for CLI operations."""
    engine = create_engine(get_sync_database_url())
    session_factory = sessionmaker(bind=engine)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


def _fmt_time(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%d %H:%M") if value else "-"


@click.group(name="query", help="Query database tables for debugging and inspection.")
def query_group() -> None:
    """Query database tables for debugging and inspection."""


@query_group.command(name="users", help="List users in the database.")
@click.option("--limit", "-l", default=20, help="Number of users to show")
@click.option("--search", "-s", default=None, help="Search by email")
def query_users(limit: int, search: str | None) -> None:
    """List users in the database."""
    from secretwall.storage.db.models import UserModel

    with get_sync_session() as session:
        stmt = select(UserModel).order_by(UserModel.created_at).limit(limit)
        if search:
            stmt = stmt.where(UserModel.email.ilike(f"%{search}%"))
        users = session.execute(stmt).scalars().all()

        table = Table(title=f"Users (showing {len(users)})")
        table.add_column("ID", style="dim")
        table.add_column("Email", style="green")
        table.add_column("Login", style="yellow")
        table.add_column("Created", style="magenta")

        for user in users:
            methods = [name for name, present in (("local", user.password_hash), ("google", user.external_id)) if present]
            table.add_row(
                str(user.id)[:8] + "...",
                user.email,
                "+".join(methods) or "-",
                _fmt_time(user.created_at),
            )

        console.print(table)


@query_group.command(name="secrets", help="List secrets on the board.")
@click.option("--limit", "-l", default=20, help="Number of secrets to show")
def query_secrets(limit: int) -> None:
    """List secrets on the board, newest first."""
    from secretwall.storage.db.models import SecretModel

    with get_sync_session() as session:
        stmt = select(SecretModel).order_by(SecretModel.created_at.desc()).limit(limit)
        secrets = session.execute(stmt).scalars().all()

        table = Table(title=f"Secrets (showing {len(secrets)})")
        table.add_column("Posted", style="magenta")
        table.add_column("Text", style="cyan", overflow="fold")

        for secret in secrets:
            table.add_row(_fmt_time(secret.created_at), secret.text)

        console.print(table)


@query_group.command(name="sessions", help="List login sessions.")
@click.option("--limit", "-l", default=20, help="Number of sessions to show")
@click.option("--active", "-a", is_flag=True, help="Only show unexpired sessions")
def query_sessions(limit: int, active: bool) -> None:
    """List login sessions with their users."""
    from secretwall.storage.db.models import SessionModel, UserModel

    with get_sync_session() as session:
        stmt = (
            select(SessionModel, UserModel.email)
            .join(UserModel, SessionModel.user_id == UserModel.id)
            .order_by(SessionModel.created_at.desc())
            .limit(limit)
        )
        if active:
            stmt = stmt.where(SessionModel.expires_at > datetime.now(UTC))
        rows = session.execute(stmt).all()

        table = Table(title=f"Sessions (showing {len(rows)})")
        table.add_column("Token", style="dim")
        table.add_column("User", style="green")
        table.add_column("Created", style="magenta")
        table.add_column("Expires", style="yellow")

        for model, email in rows:
            table.add_row(model.session_token[:8] + "...", email, _fmt_time(model.created_at), _fmt_time(model.expires_at))

        console.print(table)


@query_group.command(name="tables", help="List database tables with row counts.")
def query_tables() -> None:
    """List all database tables and their row counts."""
    from sqlalchemy import table as sa_table

    with get_sync_session() as session:
        names = inspect(session.get_bind()).get_table_names()

        table = Table(title="Database Tables")
        table.add_column("Table", style="cyan")
        table.add_column("Rows", style="green", justify="right")

        for name in sorted(names):
            count = session.execute(select(func.count()).select_from(sa_table(name))).scalar_one()
            table.add_row(name, str(count))

        console.print(table)


@query_group.command(name="purge-sessions", help="Delete expired login sessions.")
def purge_sessions() -> None:
    """Delete sessions whose expiry time has passed."""
    from secretwall.storage.db.models import SessionModel

    with get_sync_session() as session:
        result = session.execute(delete(SessionModel).where(SessionModel.expires_at < datetime.now(UTC)))
        session.commit()
        console.print(f"[green]Deleted {result.rowcount} expired sessions[/green]")


class SecretWallCLIPlugin(CLIPluginProtocol):
    """CLI plugin that adds the ``query`` command group.

    Subcommands:
    - users: List users in the database
    - secrets: List secrets on the board
    - sessions: List login sessions
    - tables: List all database tables and row counts
    - purge-sessions: Delete expired sessions
    """

    def on_cli_init(self, cli: click.Group) -> None:
        """Register the query command group."""
        cli.add_command(query_group)
