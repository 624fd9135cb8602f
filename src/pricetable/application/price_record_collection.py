"""Collection manager for price records, plus the derived price queries."""

from __future__ import annotations

import logging
from collections import Counter
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from pricetable.application.collection import EntityCollection, require_datetime
from pricetable.domain.model.price_record import PriceRecord
from pricetable.domain.model.value_objects import compute_unit_price, positive_decimal
from pricetable.domain.repository.collection_store import StorageKey

logger = logging.getLogger(__name__)


class PriceRecordCollection(EntityCollection[PriceRecord]):

    storage_key = StorageKey.PRICE_RECORDS

    def add(
        self,
        product_id: str,
        price: str | float | int | Decimal,
        quantity: str | float | int | Decimal,
        store: str,
        notes: str = "",
        is_on_sale: bool = False,
        purchase_date: date | None = None,
    ) -> PriceRecord:
        record = PriceRecord.create(
            product_id,
            price,
            quantity,
            store,
            notes=notes,
            is_on_sale=is_on_sale,
            purchase_date=purchase_date,
        )
        return self._append(record)

    def delete_by_product(self, product_id: str) -> int:
        """Remove every record of *product_id* in a single write."""
        items = [r for r in self._items if r.product_id != product_id]
        removed = len(self._items) - len(items)
        if removed:
            self._commit(items)
            logger.info("Removed %d price record(s) of product %s", removed, product_id)
        return removed

    # --- Queries --------------------------------------------------------------

    def by_product(self, product_id: str) -> list[PriceRecord]:
        return [r for r in self._items if r.product_id == product_id]

    def by_store(self, store: str) -> list[PriceRecord]:
        return [r for r in self._items if r.store == store]

    def cheapest(self, product_id: str) -> PriceRecord | None:
        """Record with the lowest unit price; the first one wins a tie."""
        best: PriceRecord | None = None
        for record in self.by_product(product_id):
            if best is None or record.unit_price < best.unit_price:
                best = record
        return best

    def history(self, product_id: str, limit: int | None = None) -> list[PriceRecord]:
        """Records of a product, newest first."""
        records = sorted(
            self.by_product(product_id), key=lambda r: r.created_at, reverse=True
        )
        return records[:limit] if limit else records

    def frequent_stores(self, limit: int = 10) -> list[str]:
        """Store names by how often they appear, ties in first-seen order."""
        counts = Counter(r.store for r in self._items)
        ranked = sorted(counts.items(), key=lambda pair: pair[1], reverse=True)
        return [store for store, _ in ranked[:limit]]

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_raw(entity: PriceRecord) -> dict[str, Any]:
        return {
            "id": entity.id,
            "productId": entity.product_id,
            "price": entity.price,
            "quantity": entity.quantity,
            "unitPrice": entity.unit_price,
            "store": entity.store,
            "notes": entity.notes,
            "isOnSale": entity.is_on_sale,
            "purchaseDate": entity.purchase_date,
            "createdAt": entity.created_at,
            "updatedAt": entity.updated_at,
        }

    @staticmethod
    def _to_domain(raw: dict[str, Any]) -> PriceRecord:
        price = positive_decimal(raw["price"], "price")
        quantity = positive_decimal(raw["quantity"], "quantity")
        purchase_date = raw.get("purchaseDate")
        if purchase_date is not None and not isinstance(purchase_date, date):
            raise ValueError(f"'purchaseDate' is not a date: {purchase_date!r}")
        created_at = require_datetime(raw["createdAt"], "createdAt")

        # The stored unit price is a cache; the authoritative value is
        # always recomputed from price and quantity.
        unit_price = compute_unit_price(price, quantity)
        stored = raw.get("unitPrice")
        try:
            changed = stored is not None and Decimal(str(stored)) != unit_price
        except InvalidOperation:
            changed = True
        if changed:
            logger.debug(
                "Recomputed unit price of %s: stored %s, now %s",
                raw["id"], stored, unit_price,
            )

        return PriceRecord(
            id=str(raw["id"]),
            product_id=str(raw["productId"]),
            price=price,
            quantity=quantity,
            unit_price=unit_price,
            store=str(raw["store"]),
            notes=raw.get("notes") or "",
            is_on_sale=bool(raw.get("isOnSale", False)),
            purchase_date=purchase_date,
            created_at=created_at,
            updated_at=require_datetime(raw.get("updatedAt", created_at), "updatedAt"),
        )
