"""Abstract store for whole entity collections.

Defined in the domain layer so collection managers never depend on
infrastructure. Collections are always read and written in full; there
is no partial update or indexed access, and the last full write wins.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class StorageKey:
    """Names of the collections the application persists."""

    PRODUCTS = "price-table-products"
    PRICE_RECORDS = "price-table-price-records"
    SETTINGS = "price-table-settings"

    ALL = (PRODUCTS, PRICE_RECORDS, SETTINGS)


EXPORT_FORMAT_VERSION = "1.0.0"


class CollectionStore(ABC):

    @abstractmethod
    def save(self, key: str, records: list[dict[str, Any]]) -> None:
        """Serialize and write *records* under *key*.

        Raises StorageError if serialization or the write fails.
        """

    @abstractmethod
    def load(self, key: str, *, strict: bool = False) -> list[dict[str, Any]]:
        """Return the records stored under *key* with date fields restored.

        A missing key yields an empty list. An unreadable value also
        yields an empty list unless *strict* is set, in which case
        CorruptedDataError is raised.
        """

    @abstractmethod
    def mark_corrupted(self, key: str, reason: str) -> None:
        """Flag *key* as holding data that could not be turned into entities.

        The unreadable value is kept aside on the next save of *key*.
        """

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete the entry at *key*."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every known collection."""

    @abstractmethod
    def export_json(self) -> str:
        """Return all known collections as one JSON document."""

    @abstractmethod
    def import_json(self, text: str) -> None:
        """Replace stored collections with the contents of an export."""

    @abstractmethod
    def size_mb(self) -> float:
        """Best-effort total size of stored data in megabytes."""
