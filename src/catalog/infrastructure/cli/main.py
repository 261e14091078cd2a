import click
from loguru import logger

from catalog.infrastructure.cli.product_commands import (
    product_add,
    product_clear,
    product_delete,
    product_in_stock,
    product_list,
    product_search,
    product_show,
    product_update,
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr.")
def cli(verbose: bool) -> None:
    """Catalog: product store"""
    logger.remove()
    logger.add(
        lambda message: click.echo(message, err=True, nl=False),
        level="DEBUG" if verbose else "WARNING",
    )


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_clear)
product.add_command(product_delete)
product.add_command(product_in_stock)
product.add_command(product_list)
product.add_command(product_search)
product.add_command(product_show)
product.add_command(product_update)
