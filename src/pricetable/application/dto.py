"""Data Transfer Objects: plain containers that cross layer boundaries.

Input DTOs carry raw form values (still strings, as typed by the user)
into the application layer; output DTOs carry display-ready values out.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class ProductForm:
    """Input: the product form as submitted."""

    name: str
    unit: str
    description: str = ""


@dataclass(frozen=True)
class PriceForm:
    """Input: the price form as submitted."""

    price: str
    quantity: str
    store: str
    notes: str = ""
    is_on_sale: bool = False
    purchase_date: date | None = None


@dataclass(frozen=True)
class PriceRecordDTO:
    """Output: a single price record as displayed to the user."""

    id: str
    store: str
    price: str
    quantity: str
    unit_price: str  # e.g. "59.6000/kg"
    is_on_sale: bool
    purchase_date: str  # "" when unknown
    notes: str
    recorded_at: str


@dataclass(frozen=True)
class ProductSummaryDTO:
    """Output: one line of the product overview."""

    id: str
    name: str
    unit: str
    description: str
    record_count: int
    cheapest_unit_price: str | None
    cheapest_store: str | None


@dataclass(frozen=True)
class PriceHistoryDTO:
    """Output: a product with its price records, newest first."""

    product_id: str
    product_name: str
    unit: str
    records: list[PriceRecordDTO]
    cheapest_record_id: str | None
