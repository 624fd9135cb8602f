"""CLI commands for whole-dataset operations."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import click

from pricetable.domain.exceptions import DomainException
from pricetable.infrastructure.cli.context import CliState, pass_state


@click.command("export")
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Target file (default: price-table-data-YYYY-MM-DD.json). Use - for stdout.",
)
@pass_state
def data_export(state: CliState, output: Path | None) -> None:
    """Write every stored collection to one JSON file."""
    text = state.container.store.export_json()

    if output is not None and str(output) == "-":
        click.echo(text)
        return

    target = output or Path(f"price-table-data-{date.today().isoformat()}.json")
    target.write_text(text + "\n", encoding="utf-8")
    click.echo(f"Exported to {target}")


@click.command("import")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@pass_state
def data_import(state: CliState, source: Path) -> None:
    """Replace stored data with the contents of an export file."""
    try:
        state.store.import_json(source.read_text(encoding="utf-8"))
    except DomainException as exc:
        raise click.ClickException(f"Import failed: {exc}")

    container = state.container
    click.echo(
        f"Imported {len(container.products)} product(s) and "
        f"{len(container.price_records)} price record(s)."
    )


@click.command("clear")
@click.confirmation_option(prompt="Delete ALL stored data? This cannot be undone.")
@pass_state
def data_clear(state: CliState) -> None:
    """Remove every stored collection."""
    try:
        state.store.clear()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("All data cleared.")


@click.command("size")
@pass_state
def data_size(state: CliState) -> None:
    """Show how much space the stored data takes."""
    click.echo(f"{state.store.size_mb():.2f} MB")
