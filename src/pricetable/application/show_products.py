"""Application service: product overview (query).

Lists products with how many prices are known for each and the cheapest
unit price seen so far, which is what the tool exists to answer.
"""

from __future__ import annotations

from pricetable.application.dto import ProductSummaryDTO
from pricetable.application.price_record_collection import PriceRecordCollection
from pricetable.application.product_collection import ProductCollection
from pricetable.domain.model.value_objects import format_unit_price


class ShowProductsHandler:

    def __init__(
        self,
        products: ProductCollection,
        price_records: PriceRecordCollection,
    ) -> None:
        self._products = products
        self._price_records = price_records

    def handle(self, keyword: str | None = None) -> list[ProductSummaryDTO]:
        summaries: list[ProductSummaryDTO] = []
        for product in self._products.search(keyword):
            cheapest = self._price_records.cheapest(product.id)
            summaries.append(
                ProductSummaryDTO(
                    id=product.id,
                    name=product.name,
                    unit=product.unit,
                    description=product.description,
                    record_count=len(self._price_records.by_product(product.id)),
                    cheapest_unit_price=(
                        format_unit_price(cheapest.unit_price, product.unit)
                        if cheapest
                        else None
                    ),
                    cheapest_store=cheapest.store if cheapest else None,
                )
            )
        return summaries
