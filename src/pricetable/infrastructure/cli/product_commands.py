"""CLI commands for products."""

from __future__ import annotations

import click

from pricetable.application.add_product import AddProductHandler
from pricetable.application.delete_product import DeleteProductHandler
from pricetable.application.dto import ProductForm
from pricetable.application.show_products import ShowProductsHandler
from pricetable.application.update_product import UpdateProductHandler
from pricetable.domain.exceptions import DomainException
from pricetable.infrastructure.cli.context import CliState, pass_state


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--unit", required=True, help="Unit prices are compared in (e.g. kg).")
@click.option("--description", default="", help="Optional description.")
@pass_state
def product_add(state: CliState, name: str, unit: str, description: str) -> None:
    """Register a new product."""
    handler = AddProductHandler(products=state.container.products)

    try:
        product = handler.handle(ProductForm(name=name, unit=unit, description=description))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} '{product.name}' added ({product.unit})")


@click.command("list")
@click.option("--search", "keyword", default="", help="Filter by name (case-insensitive).")
@pass_state
def product_list(state: CliState, keyword: str) -> None:
    """List products with their cheapest known unit price."""
    handler = ShowProductsHandler(
        products=state.container.products,
        price_records=state.container.price_records,
    )
    summaries = handler.handle(keyword)

    if not summaries:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<34} {'Name':<24} {'Prices':>6}  {'Cheapest':<20} {'Store'}")
    click.echo("-" * 100)
    for s in summaries:
        cheapest = s.cheapest_unit_price or "-"
        store = s.cheapest_store or "-"
        click.echo(f"{s.id:<34} {s.name:<24} {s.record_count:>6}  {cheapest:<20} {store}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--unit", default=None, help="New unit.")
@click.option("--description", default=None, help="New description.")
@pass_state
def product_update(
    state: CliState,
    product_id: str,
    name: str | None,
    unit: str | None,
    description: str | None,
) -> None:
    """Edit a product."""
    handler = UpdateProductHandler(products=state.container.products)

    try:
        product = handler.handle(product_id, name=name, unit=unit, description=description)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} updated: '{product.name}' ({product.unit})")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.confirmation_option(prompt="Delete this product and all of its prices?")
@pass_state
def product_delete(state: CliState, product_id: str) -> None:
    """Delete a product together with its recorded prices."""
    handler = DeleteProductHandler(
        products=state.container.products,
        price_records=state.container.price_records,
    )

    try:
        removed = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deleted along with {removed} price record(s).")
