"""idlink CLI application using Typer.

Operational utilities: secret generation for deployment configuration
and schema management against the configured database.
"""

import asyncio
import secrets

import typer
from rich.console import Console

from idlink.infrastructure.persistence.sqlalchemy import (
    create_engine,
    create_tables,
    drop_tables,
)
from idlink.logging_config import configure_logging
from idlink_config import Settings, get_settings

app = typer.Typer(
    name="idlink",
    help="idlink - federated identity and local credential management",
    no_args_is_help=True,
)
console = Console()

secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(secrets_app)

db_app = typer.Typer(
    name="db",
    help="Database schema management",
    no_args_is_help=True,
)
app.add_typer(db_app)


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for idlink configuration.

    Generates two required secrets:
    - JWT_SECRET_KEY: Secret for signing session tokens
    - POSTGRES_PASSWORD: Database password

    Copy the output to your .env file.
    """
    console.print("\n[bold green]idlink Secret Generation[/bold green]")
    console.print("=" * 60)

    # 64 bytes of entropy for HS256
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={secrets.token_urlsafe(64)}")
    console.print(f"[cyan]POSTGRES_PASSWORD[/cyan]={secrets.token_urlsafe(32)}")

    console.print("=" * 60)
    console.print(
        "[yellow]Keep these secrets out of version control.[/yellow]\n"
        "[dim]Copy the values to config/.env or config/.env.dev.[/dim]\n"
    )


def _load_settings() -> Settings:
    settings = get_settings()
    configure_logging(settings)
    return settings


async def _run_schema_task(settings: Settings, drop: bool) -> None:
    engine = create_engine(settings)
    try:
        if drop:
            await drop_tables(engine)
        else:
            await create_tables(engine)
    finally:
        await engine.dispose()


@db_app.command("init")
def init_db() -> None:
    """Create any missing identity tables."""
    settings = _load_settings()
    asyncio.run(_run_schema_task(settings, drop=False))
    console.print(
        f"[green]Schema ready[/green] on [bold]{settings.database_type}[/bold]"
    )


@db_app.command("drop")
def drop_db(
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Skip the confirmation prompt",
    ),
) -> None:
    """Drop all identity tables. Destroys every stored account."""
    settings = _load_settings()
    if not force:
        typer.confirm(
            f"Drop all idlink tables on {settings.database_type}?",
            abort=True,
        )
    asyncio.run(_run_schema_task(settings, drop=True))
    console.print("[red]All idlink tables dropped[/red]")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
