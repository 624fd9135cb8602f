"""Application service: Add Product use case."""

from __future__ import annotations

import logging

from pricetable.application.dto import ProductForm
from pricetable.application.product_collection import ProductCollection
from pricetable.application.validation import validate_product_form
from pricetable.domain.model.product import Product

logger = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(self, products: ProductCollection) -> None:
        self._products = products

    def handle(self, form: ProductForm) -> Product:
        """Validate the form and register a new product."""
        clean = validate_product_form(form, self._products)
        product = self._products.add(clean.name, clean.unit, clean.description)
        logger.info("Added product %s (%s)", product.id, product.name)
        return product
