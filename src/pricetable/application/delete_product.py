"""Application service: Delete Product use case.

This is the one place that coordinates the two collections. The
collection managers know nothing about each other, so deleting a product
straight through ProductCollection leaves its price records behind.
"""

from __future__ import annotations

import logging

from pricetable.application.price_record_collection import PriceRecordCollection
from pricetable.application.product_collection import ProductCollection
from pricetable.domain.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)


class DeleteProductHandler:

    def __init__(
        self,
        products: ProductCollection,
        price_records: PriceRecordCollection,
    ) -> None:
        self._products = products
        self._price_records = price_records

    def handle(self, product_id: str) -> int:
        """Delete a product together with its price records.

        Records go first: if that write fails the product is untouched.
        Returns the number of price records removed.
        """
        product = self._products.get(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        removed = self._price_records.delete_by_product(product_id)
        self._products.delete(product_id)

        logger.info(
            "Deleted product %s (%s) and %d price record(s)",
            product_id, product.name, removed,
        )
        return removed
