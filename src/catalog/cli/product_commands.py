"""Product CLI commands that talk to a running API."""

from decimal import Decimal
from pathlib import Path
from typing import Optional

import httpx
import typer
from rich.prompt import Confirm
from rich.table import Table

from src.catalog.api.http.schemas.product import ProductRead
from src.catalog.client import CatalogClientError, ProductsClient
from src.catalog.core.exceptions import ProductNotFoundError
from src.catalog.runtime.context import get_config

from .utils import console

products_app = typer.Typer(help="📦 Manage products through the HTTP API")

API_URL_OPTION = typer.Option(
    None,
    "--api-url",
    "-u",
    envvar="CATALOG_API_URL",
    help="Base URL of the API (default from config)",
)


def get_products_client(api_url: str | None) -> ProductsClient:
    """Get a client for the API at ``api_url``, or the configured server."""
    return ProductsClient.connect(api_url or get_config().app.base_url)


def _fail(message: str, error: Exception) -> typer.Exit:
    console.print(f"[red]❌ {message}: {error}[/red]")
    return typer.Exit(code=1)


def _products_table(products: list[ProductRead], title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Name", style="green")
    table.add_column("Price", style="yellow", justify="right")
    table.add_column("Quantity", style="magenta", justify="right")
    table.add_column("Image", style="blue")
    table.add_column("Created", style="dim")

    for product in products:
        table.add_row(
            str(product.id),
            product.name,
            f"{product.price:.2f}",
            str(product.quantity),
            product.image_url or "",
            product.created_at.strftime("%Y-%m-%d %H:%M"),
        )
    return table


@products_app.command("list")
def list_products(api_url: Optional[str] = API_URL_OPTION) -> None:
    """List all products."""
    try:
        with get_products_client(api_url) as client:
            products = client.list_products()
    except (CatalogClientError, httpx.HTTPError) as e:
        raise _fail("Failed to list products", e) from e

    if not products:
        console.print("[yellow]No products found[/yellow]")
        return

    console.print(_products_table(products, "Products"))
    console.print(f"\n[green]Found {len(products)} products[/green]")


@products_app.command("show")
def show_product(
    product_id: int = typer.Argument(..., help="Product ID"),
    api_url: Optional[str] = API_URL_OPTION,
) -> None:
    """Show a single product."""
    try:
        with get_products_client(api_url) as client:
            product = client.get_product(product_id)
    except ProductNotFoundError as e:
        raise _fail("Not found", e) from e
    except (CatalogClientError, httpx.HTTPError) as e:
        raise _fail("Failed to fetch product", e) from e

    console.print(_products_table([product], f"Product {product_id}"))
    if product.description:
        console.print(product.description)


@products_app.command("create")
def create_product(
    name: str = typer.Argument(..., help="Product name"),
    price: float = typer.Option(0.0, "--price", "-p", min=0, help="Unit price"),
    quantity: int = typer.Option(0, "--quantity", "-q", min=0, help="Units in stock"),
    description: str = typer.Option("", "--description", "-d", help="Description"),
    image: Optional[Path] = typer.Option(
        None, "--image", "-i", exists=True, dir_okay=False, help="Image file to upload"
    ),
    api_url: Optional[str] = API_URL_OPTION,
) -> None:
    """Create a product."""
    try:
        with get_products_client(api_url) as client:
            product = client.create_product(
                name,
                price=Decimal(str(price)),
                quantity=quantity,
                description=description,
                image=image,
            )
    except (CatalogClientError, httpx.HTTPError) as e:
        raise _fail("Failed to create product", e) from e

    console.print(f"[green]✅ Created product {product.id}: {product.name}[/green]")


@products_app.command("delete")
def delete_product(
    product_id: int = typer.Argument(..., help="Product ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    api_url: Optional[str] = API_URL_OPTION,
) -> None:
    """Delete a product and its image."""
    if not yes and not Confirm.ask(f"Delete product {product_id}?"):
        console.print("[yellow]Cancelled[/yellow]")
        return

    try:
        with get_products_client(api_url) as client:
            client.delete_product(product_id)
    except ProductNotFoundError as e:
        raise _fail("Not found", e) from e
    except (CatalogClientError, httpx.HTTPError) as e:
        raise _fail("Failed to delete product", e) from e

    console.print(f"[green]✅ Deleted product {product_id}[/green]")
