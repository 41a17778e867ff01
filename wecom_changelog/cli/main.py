"""
WeCom edition changelog CLI.

Runs the API server and offers a few database maintenance commands.
"""

import asyncio
import subprocess
import sys

import typer
from sqlalchemy.exc import SQLAlchemyError

from wecom_changelog.core.config.settings import settings

app = typer.Typer(help="WeCom edition changelog service CLI")

IMPORT_STRING = "wecom_changelog.app:create_app"


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(settings.port, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes"),
    workers: int = typer.Option(
        1, "--workers", "-w", help="Number of worker processes (ignored with --reload)"
    ),
):
    """
    Run the API server with uvicorn.

    Examples:
        wecom-changelog serve --reload
        wecom-changelog serve --workers 4 --port 8080
    """
    cmd = [
        sys.executable,
        "-m",
        "uvicorn",
        IMPORT_STRING,
        "--factory",
        "--host",
        host,
        "--port",
        str(port),
    ]
    if reload:
        cmd.append("--reload")
    else:
        cmd.extend(["--workers", str(workers)])

    typer.echo(f"Starting WeCom edition changelog server on http://{host}:{port}")
    typer.echo(f"Environment: {settings.environment}")

    try:
        subprocess.run(cmd, check=True)
    except subprocess.CalledProcessError as e:
        typer.echo(f"Server failed to start (exit code: {e.returncode})", err=True)
        typer.echo(f"Port {port} may already be in use", err=True)
        raise typer.Exit(1)
    except KeyboardInterrupt:
        typer.echo("Server stopped")


async def _init_db(database_url: str) -> None:
    from wecom_changelog.database import ALL_MODELS, create_adapter

    adapter = create_adapter(database_url)
    engine = await adapter.create_engine(database_url)
    try:
        await adapter.initialize_schema(engine, ALL_MODELS)
    finally:
        await engine.dispose()


@app.command("init-db")
def init_db(
    database_url: str = typer.Option(
        settings.database_url, "--database-url", help="Database connection URL"
    ),
):
    """Create the tenant and edition changelog tables."""
    try:
        asyncio.run(_init_db(database_url))
    except (SQLAlchemyError, RuntimeError, ValueError, ConnectionError) as e:
        typer.echo(f"Schema initialization failed: {e}", err=True)
        raise typer.Exit(1)
    typer.echo("Database schema initialized")


async def _latest(database_url: str, suite_id: str, paid_corp_id: str):
    from wecom_changelog.database import create_adapter
    from wecom_changelog.persistence.sql.changelog_mapper import (
        SocialEditionChangelogWecomMapper,
    )

    adapter = create_adapter(database_url)
    engine = await adapter.create_engine(database_url)
    try:
        session_factory = await adapter.create_session_factory(engine)
        mapper = SocialEditionChangelogWecomMapper(session_factory)
        return await mapper.select_last_change_log(suite_id, paid_corp_id)
    finally:
        await engine.dispose()


@app.command()
def latest(
    suite_id: str = typer.Argument(..., help="WeCom suite id"),
    paid_corp_id: str = typer.Argument(..., help="Corp id"),
    database_url: str = typer.Option(
        settings.database_url, "--database-url", help="Database connection URL"
    ),
):
    """Print the latest edition changelog of a corp."""
    try:
        changelog = asyncio.run(_latest(database_url, suite_id, paid_corp_id))
    except (SQLAlchemyError, ValueError, ConnectionError) as e:
        typer.echo(f"Failed to read edition changelog: {e}", err=True)
        raise typer.Exit(1)
    if changelog is None:
        typer.echo(f"No edition changelog for corp {paid_corp_id}", err=True)
        raise typer.Exit(1)

    typer.echo(f"id:           {changelog.id}")
    typer.echo(f"created_at:   {changelog.created_at}")
    typer.echo(f"edition_info: {changelog.edition_info}")


def main():
    app()


if __name__ == "__main__":
    main()
