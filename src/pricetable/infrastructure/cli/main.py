from pathlib import Path

import click

from pricetable.domain.exceptions import DomainException
from pricetable.infrastructure.cli.context import CliState
from pricetable.infrastructure.cli.data_commands import (
    data_clear,
    data_export,
    data_import,
    data_size,
)
from pricetable.infrastructure.cli.price_commands import (
    price_add,
    price_delete,
    price_history,
    price_stores,
    price_update,
)
from pricetable.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_update,
)
from pricetable.infrastructure.config.logging_config import setup_logging
from pricetable.infrastructure.config.settings import Settings


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the stored collections.",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None) -> None:
    """pricetable: track prices and find the cheapest unit price."""
    try:
        settings = Settings.from_env()
    except DomainException as exc:
        raise click.ClickException(str(exc))
    if data_dir is not None:
        settings = settings.with_data_dir(data_dir)

    setup_logging(settings)
    ctx.obj = CliState(settings=settings)


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def price() -> None:
    """Record and inspect prices."""


@cli.group()
def data() -> None:
    """Export, import and clear stored data."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_update)
price.add_command(price_add)
price.add_command(price_delete)
price.add_command(price_history)
price.add_command(price_stores)
price.add_command(price_update)
data.add_command(data_clear)
data.add_command(data_export)
data.add_command(data_import)
data.add_command(data_size)
