"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from pim.application.change_product_status import ChangeProductStatusHandler
from pim.application.delete_product import DeleteProductHandler
from pim.application.export_products import ExportProductsHandler
from pim.application.get_products import GetProductHandler, GetProductsHandler
from pim.application.insert_product import InsertProductHandler
from pim.application.search_products import SearchProductsHandler
from pim.application.store_product import StoreProductHandler
from pim.application.terminate_expired_products import TerminateExpiredProductsHandler
from pim.domain.exceptions import DomainException
from pim.domain.model.product import Product, ProductPrice, ProductRelationship
from pim.domain.model.search_criteria import SearchCriteria
from pim.domain.model.status import ProductStatus
from pim.domain.model.value_objects import Money
from pim.infrastructure.bootstrap import (
    product_repository,
    relationship_repository,
    settings,
)

STATUS_CHOICE = click.Choice([s.value for s in ProductStatus], case_sensitive=False)
DATE_TYPE = click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S"])


def _parse_relationships(raw: tuple[str, ...]) -> list[ProductRelationship]:
    """Parse ('bundled:abc', ...) into relationships."""
    relationships: list[ProductRelationship] = []
    for pair in raw:
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid relationship '{pair}'. Expected 'type:ident'."
            )
        rel_type, ident = pair.split(":", 1)
        relationships.append(ProductRelationship(rel_type.strip(), ident.strip()))
    return relationships


def _parse_prices(raw: tuple[str, ...]) -> list[ProductPrice]:
    """Parse ('OTC:10.00:EUR', 'MRC:5.00', ...) into prices."""
    prices: list[ProductPrice] = []
    for entry in raw:
        parts = entry.split(":")
        if len(parts) not in (2, 3):
            raise click.BadParameter(
                f"Invalid price '{entry}'. Expected 'TYPE:AMOUNT[:UNIT]'."
            )
        price_type, amount = parts[0], parts[1]
        unit = parts[2] if len(parts) == 3 else None
        try:
            money = Money.of(amount, unit)
        except DomainException as exc:
            raise click.BadParameter(str(exc))
        prices.append(ProductPrice(price_type=price_type.strip().upper(), price=money))
    return prices


def _referenced_products(relationships: list[ProductRelationship]) -> list[Product]:
    idents = [rel.product_ref for rel in relationships]
    if not idents:
        return []
    return GetProductsHandler(product_repository()).handle(idents)


def _display_product(product: Product) -> None:
    click.echo(f"Product {product.ident}  (status={product.status.value if product.status else '-'})")
    click.echo(f"Name:      {product.name or ''}")
    click.echo(f"Base type: {product.base_type or ''}")
    if product.contract_number:
        click.echo(f"Contract:  {product.contract_number}")
    click.echo(f"Href:      {product.href or ''}")
    if product.relationships:
        click.echo("Relationships:")
        for rel in product.relationships:
            click.echo(f"  {rel.relationship_type:<10} {rel.product_ref}")
    if product.prices:
        click.echo("Prices:")
        for price in product.prices:
            click.echo(f"  {price.price_type:<5} {price.price if price.price else ''}")


@click.command("insert")
@click.option("--name", default=None, help="Product name.")
@click.option("--base-type", default=None, help="'root', 'bundled' or another type.")
@click.option("--status", type=STATUS_CHOICE, default=None, help="Initial status (CREATED).")
@click.option("--description", default=None, help="Free text description.")
@click.option("--relationship", "relationships", multiple=True, help="Edge as 'type:ident'.")
@click.option("--price", "prices", multiple=True, help="Price as 'TYPE:AMOUNT[:UNIT]'.")
@click.option("--start-date", type=DATE_TYPE, default=None, help="Start date (YYYY-MM-DD).")
@click.option("--termination-date", type=DATE_TYPE, default=None, help="Termination date.")
def product_insert(
    name: str | None,
    base_type: str | None,
    status: str | None,
    description: str | None,
    relationships: tuple[str, ...],
    prices: tuple[str, ...],
    start_date,
    termination_date,
) -> None:
    """Insert a new product."""
    product = Product(
        name=name,
        base_type=base_type,
        status=ProductStatus(status.upper()) if status else None,
        description=description,
        relationships=_parse_relationships(relationships),
        prices=_parse_prices(prices),
        start_date=start_date,
        termination_date=termination_date,
    )
    handler = InsertProductHandler(
        product_repo=product_repository(),
        relationship_repo=relationship_repository(),
        href_template=settings().href_template,
    )

    try:
        referenced = _referenced_products(product.relationships)
        handler.handle(product, referenced)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.ident} inserted  (status={product.status.value})")
    if product.contract_number:
        click.echo(f"Contract number: {product.contract_number}")


@click.command("relate")
@click.option("--ident", required=True, help="Product ident.")
@click.option("--relationship", "relationships", multiple=True, help="Edge as 'type:ident'.")
def product_relate(ident: str, relationships: tuple[str, ...]) -> None:
    """Replace a product's relationships (none given clears them)."""
    handler = StoreProductHandler(
        product_repo=product_repository(),
        relationship_repo=relationship_repository(),
    )

    try:
        product = GetProductHandler(product_repository()).handle(ident)
        product.relationships = _parse_relationships(relationships)
        handler.handle(product, _referenced_products(product.relationships))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {ident} stored with {len(product.relationships)} relationship(s)")


@click.command("show")
@click.option("--ident", required=True, help="Product ident.")
def product_show(ident: str) -> None:
    """Show details of a product."""
    try:
        product = GetProductHandler(product_repository()).handle(ident)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(product)


def _display_table(products: list[Product]) -> None:
    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'Ident':<36} {'Name':<20} {'Type':<10} {'Status':<16} {'Contract':<10}")
    click.echo("-" * 96)
    for p in products:
        click.echo(
            f"{p.ident:<36} {p.name or '':<20} {p.base_type or '':<10} "
            f"{p.status.value if p.status else '':<16} {p.contract_number or '':<10}"
        )


@click.command("list")
def product_list() -> None:
    """List all products."""
    _display_table(product_repository().list_all())


@click.command("search")
@click.option("--status", type=STATUS_CHOICE, default=None, help="Status to match.")
@click.option("--base-type", default=None, help="Base type to match.")
@click.option("--name", default=None, help="Exact name (case-insensitive).")
@click.option("--contract-number", default=None, help="Contract number to match.")
@click.option("--related", "related_ident", default=None, help="Ident the product points at.")
def product_search(
    status: str | None,
    base_type: str | None,
    name: str | None,
    contract_number: str | None,
    related_ident: str | None,
) -> None:
    """Search products; all given filters must match."""
    criteria = SearchCriteria(
        status=ProductStatus(status.upper()) if status else None,
        base_type=base_type,
        name=name,
        contract_number=contract_number,
        related_ident=related_ident,
    )
    _display_table(SearchProductsHandler(product_repository()).handle(criteria))


@click.command("status")
@click.option("--ident", required=True, help="Product ident.")
@click.option("--to", "status", required=True, type=STATUS_CHOICE, help="New status.")
def product_status(ident: str, status: str) -> None:
    """Change a product's status."""
    handler = ChangeProductStatusHandler(product_repo=product_repository())

    try:
        product = handler.handle(ident, ProductStatus(status.upper()))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {ident} is now {product.status.value}")


@click.command("delete")
@click.option("--ident", required=True, help="Product ident.")
def product_delete(ident: str) -> None:
    """Delete a TERMINATED product and its bundled products."""
    handler = DeleteProductHandler(
        product_repo=product_repository(),
        relationship_repo=relationship_repository(),
    )

    try:
        deleted = handler.handle(ident)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Deleted {len(deleted)} product(s)")


@click.command("export")
@click.option("--ident", "idents", required=True, multiple=True, help="Product ident.")
@click.option("--output", type=click.File("wb"), default="-", help="Target file (stdout).")
def product_export(idents: tuple[str, ...], output) -> None:
    """Export products as CSV."""
    handler = ExportProductsHandler(product_repo=product_repository())

    try:
        data = handler.handle(idents)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    output.write(data)


@click.command("terminate-expired")
def product_terminate_expired() -> None:
    """Terminate running products whose termination date has passed."""
    count = TerminateExpiredProductsHandler(product_repository()).handle()
    click.echo(f"Terminated {count} product(s)")
