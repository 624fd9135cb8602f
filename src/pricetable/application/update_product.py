"""Application service: Update Product use case."""

from __future__ import annotations

from pricetable.application.dto import ProductForm
from pricetable.application.product_collection import ProductCollection
from pricetable.application.validation import validate_product_form
from pricetable.domain.exceptions import EntityNotFoundError
from pricetable.domain.model.product import Product


class UpdateProductHandler:

    def __init__(self, products: ProductCollection) -> None:
        self._products = products

    def handle(
        self,
        product_id: str,
        name: str | None = None,
        unit: str | None = None,
        description: str | None = None,
    ) -> Product:
        """Change any of a product's text fields.

        Fields left as None keep their current value. The merged form is
        validated as a whole, so renaming onto another product's name is
        refused while keeping one's own name is fine.
        """
        product = self._products.get(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        form = ProductForm(
            name=product.name if name is None else name,
            unit=product.unit if unit is None else unit,
            description=product.description if description is None else description,
        )
        clean = validate_product_form(form, self._products, editing_id=product_id)

        updated = self._products.update(
            product_id,
            name=clean.name,
            unit=clean.unit,
            description=clean.description,
        )
        if updated is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return updated
