"""Database CLI commands."""

import typer

from src.catalog.runtime.context import get_config
from src.catalog.runtime.init_db import init_db

from .utils import console

db_app = typer.Typer(help="🗄️ Database commands")


@db_app.command("init")
def init(
    seed: bool = typer.Option(
        True, "--seed/--no-seed", help="Insert sample products into an empty table"
    ),
) -> None:
    """Create the products table and optionally seed sample data."""
    config = get_config()
    try:
        seeded = init_db(config, seed=seed)
    except Exception as e:
        console.print(f"[red]❌ Database initialization failed: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"[green]✅ Database ready at {config.database.url}[/green]")
    if seeded:
        console.print(f"[green]Seeded {seeded} sample products[/green]")
