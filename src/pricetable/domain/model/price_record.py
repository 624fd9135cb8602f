"""PriceRecord entity: one observed price of a product at a store."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pricetable.domain.exceptions import ValidationError
from pricetable.domain.model.value_objects import (
    compute_unit_price,
    generate_id,
    positive_decimal,
    utc_now,
)

_PATCHABLE = frozenset(
    {"price", "quantity", "store", "notes", "is_on_sale", "purchase_date"}
)


@dataclass(frozen=True)
class PriceRecord:
    """An observed price.

    ``product_id`` is a weak reference: nothing here or in storage checks
    that the product exists, so records can outlive their product.

    ``unit_price`` is derived from ``price`` and ``quantity`` and is kept
    in step by ``create()`` and ``updated()``.
    """

    id: str
    product_id: str
    price: Decimal
    quantity: Decimal
    unit_price: Decimal
    store: str
    notes: str
    is_on_sale: bool
    purchase_date: date | None
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def create(
        product_id: str,
        price: str | float | int | Decimal,
        quantity: str | float | int | Decimal,
        store: str,
        notes: str = "",
        is_on_sale: bool = False,
        purchase_date: date | None = None,
    ) -> PriceRecord:
        if not store or not store.strip():
            raise ValidationError("Store name is required")
        amount = positive_decimal(price, "price")
        qty = positive_decimal(quantity, "quantity")
        now = utc_now()
        return PriceRecord(
            id=generate_id(),
            product_id=product_id,
            price=amount,
            quantity=qty,
            unit_price=compute_unit_price(amount, qty),
            store=store.strip(),
            notes=(notes or "").strip(),
            is_on_sale=bool(is_on_sale),
            purchase_date=_as_date(purchase_date),
            created_at=now,
            updated_at=now,
        )

    def updated(self, **changes: Any) -> PriceRecord:
        """Shallow-merge *changes*, recomputing the unit price if needed."""
        unknown = set(changes) - _PATCHABLE
        if unknown:
            raise ValidationError(
                f"Cannot patch price record field(s): {', '.join(sorted(unknown))}"
            )

        cleaned: dict[str, Any] = {}
        if "price" in changes:
            cleaned["price"] = positive_decimal(changes["price"], "price")
        if "quantity" in changes:
            cleaned["quantity"] = positive_decimal(changes["quantity"], "quantity")
        if "store" in changes:
            store = (changes["store"] or "").strip()
            if not store:
                raise ValidationError("Store name is required")
            cleaned["store"] = store
        if "notes" in changes:
            cleaned["notes"] = (changes["notes"] or "").strip()
        if "is_on_sale" in changes:
            cleaned["is_on_sale"] = bool(changes["is_on_sale"])
        if "purchase_date" in changes:
            cleaned["purchase_date"] = _as_date(changes["purchase_date"])

        if "price" in cleaned or "quantity" in cleaned:
            cleaned["unit_price"] = compute_unit_price(
                cleaned.get("price", self.price),
                cleaned.get("quantity", self.quantity),
            )

        return dataclasses.replace(self, **cleaned, updated_at=utc_now())


def _as_date(value: date | datetime | None) -> date | None:
    # datetime is a subclass of date; keep only the calendar day
    if isinstance(value, datetime):
        return value.date()
    return value
