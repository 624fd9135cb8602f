"""Application service: Show Price History use case (query)."""

from __future__ import annotations

from datetime import timezone

from pricetable.application.dto import PriceHistoryDTO, PriceRecordDTO
from pricetable.application.price_record_collection import PriceRecordCollection
from pricetable.application.product_collection import ProductCollection
from pricetable.domain.exceptions import EntityNotFoundError
from pricetable.domain.model.price_record import PriceRecord
from pricetable.domain.model.value_objects import format_amount, format_unit_price


class ShowPriceHistoryHandler:

    def __init__(
        self,
        products: ProductCollection,
        price_records: PriceRecordCollection,
    ) -> None:
        self._products = products
        self._price_records = price_records

    def handle(self, product_id: str, limit: int | None = None) -> PriceHistoryDTO:
        product = self._products.get(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        cheapest = self._price_records.cheapest(product_id)
        return PriceHistoryDTO(
            product_id=product.id,
            product_name=product.name,
            unit=product.unit,
            records=[
                self._to_dto(record, product.unit)
                for record in self._price_records.history(product_id, limit)
            ],
            cheapest_record_id=cheapest.id if cheapest else None,
        )

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_dto(record: PriceRecord, unit: str) -> PriceRecordDTO:
        return PriceRecordDTO(
            id=record.id,
            store=record.store,
            price=format_amount(record.price),
            quantity=f"{record.quantity.normalize():f}",
            unit_price=format_unit_price(record.unit_price, unit),
            is_on_sale=record.is_on_sale,
            purchase_date=(
                record.purchase_date.isoformat() if record.purchase_date else ""
            ),
            notes=record.notes,
            recorded_at=record.created_at.astimezone(timezone.utc).strftime(
                "%Y-%m-%d %H:%M UTC"
            ),
        )
