"""Collection manager for products."""

from __future__ import annotations

from typing import Any

from pricetable.application.collection import EntityCollection, require_datetime
from pricetable.domain.model.product import Product
from pricetable.domain.repository.collection_store import StorageKey


class ProductCollection(EntityCollection[Product]):

    storage_key = StorageKey.PRODUCTS

    def add(self, name: str, unit: str = "", description: str = "") -> Product:
        return self._append(Product.create(name, unit, description))

    def search(self, keyword: str | None) -> list[Product]:
        """Case-insensitive substring match on the product name."""
        if not keyword:
            return self.all()
        needle = keyword.lower()
        return [p for p in self._items if needle in p.name.lower()]

    def exists(self, name: str, exclude_id: str | None = None) -> bool:
        """Exact, case-sensitive name match, optionally ignoring one product."""
        return any(
            p.name == name and p.id != exclude_id for p in self._items
        )

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_raw(entity: Product) -> dict[str, Any]:
        return {
            "id": entity.id,
            "name": entity.name,
            "unit": entity.unit,
            "description": entity.description,
            "createdAt": entity.created_at,
            "updatedAt": entity.updated_at,
        }

    @staticmethod
    def _to_domain(raw: dict[str, Any]) -> Product:
        created_at = require_datetime(raw["createdAt"], "createdAt")
        if not isinstance(raw["name"], str) or not raw["name"]:
            raise ValueError(f"product {raw['id']!r} has no name")
        return Product(
            id=str(raw["id"]),
            name=raw["name"],
            unit=raw.get("unit") or "",
            description=raw.get("description") or "",
            created_at=created_at,
            updated_at=require_datetime(raw.get("updatedAt", created_at), "updatedAt"),
        )
