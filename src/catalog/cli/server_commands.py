"""Server CLI command."""

import typer
import uvicorn
from rich.panel import Panel

from src.catalog.runtime.context import get_config

from .utils import console


def serve(
    host: str = typer.Option(None, help="Host to bind the server to (default from config)"),
    port: int = typer.Option(None, help="Port to bind the server to (default from config)"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
    log_level: str = typer.Option(
        "info", help="Log level (debug, info, warning, error, critical)"
    ),
) -> None:
    """
    🚀 Start the catalog API server.
    """
    config = get_config()
    host = host or config.app.host
    port = port or config.app.port

    console.print(
        Panel.fit(
            "[bold green]Starting Product Catalog API[/bold green]",
            border_style="green",
        )
    )
    console.print(f"[blue]Server will be available at:[/blue] http://{host}:{port}")
    console.print("[dim]Press Ctrl+C to stop the server[/dim]")

    uvicorn.run(
        "src.catalog.api.http.app:app",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
        access_log=False,  # We handle access logging in middleware
    )
