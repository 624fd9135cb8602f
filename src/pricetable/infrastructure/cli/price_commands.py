"""CLI commands for price records."""

from __future__ import annotations

from datetime import datetime

import click

from pricetable.application.dto import PriceForm
from pricetable.application.record_price import RecordPriceHandler
from pricetable.application.show_price_history import ShowPriceHistoryHandler
from pricetable.application.update_price_record import UpdatePriceRecordHandler
from pricetable.domain.exceptions import DomainException
from pricetable.domain.model.value_objects import format_unit_price
from pricetable.infrastructure.cli.context import CliState, pass_state

_DATE = click.DateTime(formats=["%Y-%m-%d"])


@click.command("add")
@click.option("--product-id", required=True, help="Product the price belongs to.")
@click.option("--price", required=True, help="Price paid (e.g. 298).")
@click.option("--quantity", required=True, help="Quantity bought, in the product's unit.")
@click.option("--store", required=True, help="Where it was bought.")
@click.option("--notes", default="", help="Free-form notes.")
@click.option("--sale", is_flag=True, default=False, help="The price was a sale price.")
@click.option("--date", "purchase_date", type=_DATE, default=None, help="Purchase date (YYYY-MM-DD).")
@pass_state
def price_add(
    state: CliState,
    product_id: str,
    price: str,
    quantity: str,
    store: str,
    notes: str,
    sale: bool,
    purchase_date: datetime | None,
) -> None:
    """Record an observed price."""
    handler = RecordPriceHandler(
        products=state.container.products,
        price_records=state.container.price_records,
    )
    form = PriceForm(
        price=price,
        quantity=quantity,
        store=store,
        notes=notes,
        is_on_sale=sale,
        purchase_date=purchase_date.date() if purchase_date else None,
    )

    try:
        record = handler.handle(product_id, form)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Price {record.id} recorded at {record.store}: "
        f"unit price {format_unit_price(record.unit_price)}"
    )


@click.command("history")
@click.option("--product-id", required=True, help="Product ID.")
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Show at most N records.")
@pass_state
def price_history(state: CliState, product_id: str, limit: int | None) -> None:
    """Show a product's prices, newest first; the cheapest is starred."""
    handler = ShowPriceHistoryHandler(
        products=state.container.products,
        price_records=state.container.price_records,
    )

    try:
        dto = handler.handle(product_id, limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{dto.product_name} ({dto.unit or '-'})")
    if not dto.records:
        click.echo("No prices recorded yet.")
        return

    click.echo(
        f"  {'':1} {'Store':<20} {'Price':>10} {'Qty':>8} {'Unit price':>16} {'Sale':>4}  {'Bought':<10}  ID"
    )
    click.echo(f"  {'-' * 100}")
    for r in dto.records:
        mark = "*" if r.id == dto.cheapest_record_id else ""
        sale = "yes" if r.is_on_sale else ""
        click.echo(
            f"  {mark:1} {r.store:<20} {r.price:>10} {r.quantity:>8} "
            f"{r.unit_price:>16} {sale:>4}  {r.purchase_date or '-':<10}  {r.id}"
        )


@click.command("update")
@click.option("--id", "record_id", required=True, help="Price record ID.")
@click.option("--price", default=None, help="New price.")
@click.option("--quantity", default=None, help="New quantity.")
@click.option("--store", default=None, help="New store.")
@click.option("--notes", default=None, help="New notes.")
@click.option("--sale/--no-sale", default=None, help="Mark or unmark as a sale price.")
@click.option("--date", "purchase_date", type=_DATE, default=None, help="New purchase date.")
@pass_state
def price_update(
    state: CliState,
    record_id: str,
    price: str | None,
    quantity: str | None,
    store: str | None,
    notes: str | None,
    sale: bool | None,
    purchase_date: datetime | None,
) -> None:
    """Edit a price record."""
    handler = UpdatePriceRecordHandler(price_records=state.container.price_records)

    try:
        record = handler.handle(
            record_id,
            price=price,
            quantity=quantity,
            store=store,
            notes=notes,
            is_on_sale=sale,
            purchase_date=purchase_date.date() if purchase_date else None,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Price {record.id} updated: unit price {format_unit_price(record.unit_price)}"
    )


@click.command("delete")
@click.option("--id", "record_id", required=True, help="Price record ID.")
@pass_state
def price_delete(state: CliState, record_id: str) -> None:
    """Delete a single price record."""
    try:
        deleted = state.container.price_records.delete(record_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not deleted:
        raise click.ClickException(f"Price record with ID '{record_id}' not found")
    click.echo(f"Price {record_id} deleted.")


@click.command("stores")
@click.option("--limit", type=click.IntRange(min=1), default=10, show_default=True)
@pass_state
def price_stores(state: CliState, limit: int) -> None:
    """List the stores used most often."""
    stores = state.container.price_records.frequent_stores(limit)
    if not stores:
        click.echo("No stores recorded yet.")
        return
    for store in stores:
        click.echo(store)
