"""Main CLI application module."""

import typer

from .db_commands import db_app
from .product_commands import products_app
from .server_commands import serve

# Create the main CLI application
app = typer.Typer(
    help="🛒 Product Catalog CLI - run the API and manage products",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register command groups
app.command(name="serve")(serve)
app.add_typer(db_app, name="db")
app.add_typer(products_app, name="products")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
