"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from catalog.domain.exceptions import DomainException
from catalog.domain.model.product import Product
from catalog.infrastructure import bootstrap


def _print_table(products: list[Product]) -> None:
    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>10} {'Stock':>8}")
    click.echo("-" * 47)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<20} {f'${p.price:.2f}':>10} {p.stock:>8}")


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--description", default="", help="Free-text description.")
@click.option("--stock", default=0, type=int, help="Units in stock.")
def product_add(name: str, price: str, description: str, stock: int) -> None:
    """Add a new product to the catalog."""
    store = bootstrap.product_store()

    try:
        product = store.create(
            Product(name=name, description=description, price=price, stock=stock)
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added at ${product.price:.2f}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    _print_table(bootstrap.product_store().list_all())


@click.command("show")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_show(product_id: int) -> None:
    """Show a single product."""
    product = bootstrap.product_store().get_by_id(product_id)
    if product is None:
        raise click.ClickException(f"Product with ID '{product_id}' not found")

    click.echo(f"Product #{product.id}")
    click.echo(f"  Name:        {product.name}")
    click.echo(f"  Description: {product.description}")
    click.echo(f"  Price:       ${product.price:.2f}")
    click.echo(f"  Stock:       {product.stock}")


@click.command("search")
@click.option("--name", required=True, help="Text contained in the name (any case).")
def product_search(name: str) -> None:
    """Find products by part of their name."""
    _print_table(bootstrap.product_store().search_by_name(name))


@click.command("in-stock")
@click.option("--above", required=True, type=int, help="Exclusive stock threshold.")
def product_in_stock(above: int) -> None:
    """List products with more than ABOVE units in stock."""
    _print_table(bootstrap.product_store().filter_by_stock_above(above))


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--name", required=True, help="New name.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
@click.option("--description", default="", help="New description.")
@click.option("--stock", default=0, type=int, help="New stock level.")
def product_update(
    product_id: int, name: str, price: str, description: str, stock: int
) -> None:
    """Replace every field of a product.

    Omitted options are written as their defaults, not left unchanged.
    """
    store = bootstrap.product_store()

    try:
        product = store.update(
            product_id,
            Product(name=name, description=description, price=price, stock=stock),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} updated")


@click.command("delete")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_delete(product_id: int) -> None:
    """Delete a product."""
    store = bootstrap.product_store()

    try:
        store.delete(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} deleted")


@click.command("clear")
@click.confirmation_option(prompt="Delete every product? This cannot be undone.")
def product_clear() -> None:
    """Delete every product."""
    bootstrap.product_store().delete_all()
    click.echo("All products deleted.")
