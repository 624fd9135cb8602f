"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
The collection store is built once here and handed to each collection;
nothing else creates one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pricetable.application.price_record_collection import PriceRecordCollection
from pricetable.application.product_collection import ProductCollection
from pricetable.infrastructure.config.settings import Settings
from pricetable.infrastructure.persistence.json_collection_store import (
    JsonCollectionStore,
)
from pricetable.infrastructure.persistence.key_value_backend import (
    FileKeyValueBackend,
    KeyValueBackend,
)

logger = logging.getLogger(__name__)


@dataclass
class Container:
    store: JsonCollectionStore
    products: ProductCollection
    price_records: PriceRecordCollection


def build_store(
    settings: Settings,
    backend: KeyValueBackend | None = None,
) -> JsonCollectionStore:
    """Create the collection store without reading anything from it."""
    if backend is None:
        backend = FileKeyValueBackend(settings.data_dir, quota_bytes=settings.quota_bytes)
    return JsonCollectionStore(backend)


def build_container(
    settings: Settings,
    backend: KeyValueBackend | None = None,
    store: JsonCollectionStore | None = None,
) -> Container:
    """Create the store and both collections, hydrated and ready to use.

    Raises CorruptedDataError when strict loading is on and stored data
    cannot be read.
    """
    if store is None:
        store = build_store(settings, backend)

    products = ProductCollection(store, strict=settings.strict_load)
    price_records = PriceRecordCollection(store, strict=settings.strict_load)
    products.load()
    price_records.load()

    logger.debug(
        "Loaded %d product(s) and %d price record(s) from %s",
        len(products), len(price_records), settings.data_dir,
    )
    return Container(store=store, products=products, price_records=price_records)
