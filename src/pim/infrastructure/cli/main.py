import logging

import click

from pim.infrastructure.cli.product_commands import (
    product_delete,
    product_export,
    product_insert,
    product_list,
    product_relate,
    product_search,
    product_show,
    product_status,
    product_terminate_expired,
)


def setup_logging(verbose: int = 0) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose > 1 else logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@click.group()
@click.option("-v", "--verbose", count=True, help="-v for info, -vv for debug output.")
def cli(verbose: int) -> None:
    """PIM: Product Inventory Management"""
    setup_logging(verbose)


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
product.add_command(product_delete)
product.add_command(product_export)
product.add_command(product_insert)
product.add_command(product_list)
product.add_command(product_relate)
product.add_command(product_search)
product.add_command(product_show)
product.add_command(product_status)
product.add_command(product_terminate_expired)
