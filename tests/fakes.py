"""In-memory fakes for testing.

These implement the same abstract interfaces as the file-backed
classes but keep everything in a dict. No file I/O, no side effects.
"""

from __future__ import annotations

from pricetable.domain.exceptions import StorageError
from pricetable.infrastructure.persistence.json_collection_store import (
    JsonCollectionStore,
)
from pricetable.infrastructure.persistence.key_value_backend import KeyValueBackend


class FakeKeyValueBackend(KeyValueBackend):
    """Dict-backed store; set ``fail_writes`` to simulate a full quota."""

    def __init__(self, items: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(items or {})
        self.fail_writes = False
        self.fail_reads = False
        self.writes = 0

    def get_item(self, key: str) -> str | None:
        if self.fail_reads:
            raise StorageError("simulated read failure")
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageError("simulated quota exceeded")
        self.items[key] = value
        self.writes += 1

    def remove_item(self, key: str) -> None:
        if self.fail_writes:
            raise StorageError("simulated remove failure")
        self.items.pop(key, None)


def make_store(items: dict[str, str] | None = None) -> tuple[JsonCollectionStore, FakeKeyValueBackend]:
    backend = FakeKeyValueBackend(items)
    return JsonCollectionStore(backend), backend
