"""Application service: Record Price use case."""

from __future__ import annotations

import logging

from pricetable.application.dto import PriceForm
from pricetable.application.price_record_collection import PriceRecordCollection
from pricetable.application.product_collection import ProductCollection
from pricetable.application.validation import validate_price_form
from pricetable.domain.exceptions import EntityNotFoundError
from pricetable.domain.model.price_record import PriceRecord

logger = logging.getLogger(__name__)


class RecordPriceHandler:

    def __init__(
        self,
        products: ProductCollection,
        price_records: PriceRecordCollection,
    ) -> None:
        self._products = products
        self._price_records = price_records

    def handle(self, product_id: str, form: PriceForm) -> PriceRecord:
        """Record an observed price for an existing product."""
        if self._products.get(product_id) is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        clean = validate_price_form(form)
        record = self._price_records.add(
            product_id,
            clean.price,
            clean.quantity,
            clean.store,
            notes=clean.notes,
            is_on_sale=clean.is_on_sale,
            purchase_date=clean.purchase_date,
        )
        logger.info(
            "Recorded %s at %s for product %s (unit price %s)",
            record.price, record.store, product_id, record.unit_price,
        )
        return record
