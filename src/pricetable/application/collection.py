"""In-memory owner of one persisted entity collection.

A collection is hydrated once with ``load()``. Every mutation builds the
new list, installs it in memory straight away, then writes the whole list
through the CollectionStore. If that write fails the in-memory list is
rolled back to the last committed snapshot before the error propagates,
so memory and storage never silently disagree.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Generic, TypeVar

from pricetable.domain.exceptions import (
    CorruptedDataError,
    StorageError,
    ValidationError,
)
from pricetable.domain.repository.collection_store import CollectionStore

logger = logging.getLogger(__name__)

E = TypeVar("E")


class EntityCollection(ABC, Generic[E]):

    storage_key: str

    def __init__(self, store: CollectionStore, *, strict: bool = False) -> None:
        self._store = store
        self._strict = strict
        self._items: list[E] = []
        self._committed: list[E] = []

    # --- Lifecycle ------------------------------------------------------------

    def load(self) -> list[E]:
        """Hydrate the in-memory list from storage."""
        raw = self._store.load(self.storage_key, strict=self._strict)
        try:
            items = [self._to_domain(item) for item in raw]
        except (KeyError, TypeError, ValueError, AttributeError, ValidationError) as exc:
            if self._strict:
                raise CorruptedDataError(self.storage_key, str(exc)) from exc
            self._store.mark_corrupted(
                self.storage_key, f"malformed entry, starting empty: {exc}"
            )
            items = []

        self._items = items
        self._committed = list(items)
        logger.debug("Loaded %d item(s) from %s", len(items), self.storage_key)
        return list(items)

    # --- Reads ----------------------------------------------------------------

    def all(self) -> list[E]:
        return list(self._items)

    def get(self, entity_id: str) -> E | None:
        for item in self._items:
            if self._id_of(item) == entity_id:
                return item
        return None

    def __len__(self) -> int:
        return len(self._items)

    # --- Mutations ------------------------------------------------------------

    def update(self, entity_id: str, **changes: Any) -> E | None:
        """Patch the entity with *entity_id*; no-op returning None if absent."""
        for index, item in enumerate(self._items):
            if self._id_of(item) == entity_id:
                patched = item.updated(**changes)  # type: ignore[attr-defined]
                items = list(self._items)
                items[index] = patched
                self._commit(items)
                return patched
        return None

    def delete(self, entity_id: str) -> bool:
        """Remove the entity with *entity_id*; no-op returning False if absent."""
        items = [item for item in self._items if self._id_of(item) != entity_id]
        if len(items) == len(self._items):
            return False
        self._commit(items)
        return True

    def _append(self, entity: E) -> E:
        self._commit([*self._items, entity])
        return entity

    def _commit(self, items: list[E]) -> None:
        self._items = items
        try:
            self._store.save(
                self.storage_key, [self._to_raw(item) for item in items]
            )
        except StorageError:
            logger.warning(
                "Persisting %s failed, rolling back to %d committed item(s)",
                self.storage_key,
                len(self._committed),
            )
            self._items = list(self._committed)
            raise
        self._committed = list(items)

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _id_of(entity: Any) -> str:
        return entity.id

    @staticmethod
    @abstractmethod
    def _to_raw(entity: E) -> dict[str, Any]:
        """Map an entity to its persisted field names."""

    @staticmethod
    @abstractmethod
    def _to_domain(raw: dict[str, Any]) -> E:
        """Rebuild an entity from a loaded record."""


def require_datetime(value: Any, field: str) -> datetime:
    if not isinstance(value, datetime):
        raise ValueError(f"'{field}' is not a timestamp: {value!r}")
    return value
