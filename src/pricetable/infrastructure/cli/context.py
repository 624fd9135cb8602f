"""Per-invocation state shared by the CLI commands."""

from __future__ import annotations

from dataclasses import dataclass, field

import click

from pricetable.domain.exceptions import DomainException
from pricetable.infrastructure.bootstrap import Container, build_container, build_store
from pricetable.infrastructure.config.settings import Settings
from pricetable.infrastructure.persistence.json_collection_store import (
    JsonCollectionStore,
)


@dataclass
class CliState:
    settings: Settings
    _store: JsonCollectionStore | None = field(default=None, repr=False)
    _container: Container | None = field(default=None, repr=False)

    @property
    def store(self) -> JsonCollectionStore:
        """The collection store alone; nothing is loaded from it."""
        if self._store is None:
            self._store = build_store(self.settings)
        return self._store

    @property
    def container(self) -> Container:
        """Build the container on first use and warn about unreadable data."""
        if self._container is None:
            try:
                self._container = build_container(self.settings, store=self.store)
            except DomainException as exc:
                raise click.ClickException(
                    f"{exc}. Run 'pricetable data import' or 'pricetable data clear' "
                    "to replace it."
                )
            for key in sorted(self._container.store.corrupted_keys):
                click.echo(
                    f"Warning: stored data '{key}' could not be read and was "
                    "treated as empty. It is kept aside on the next change.",
                    err=True,
                )
        return self._container


pass_state = click.make_pass_decorator(CliState)
