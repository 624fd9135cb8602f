"""Application service: Update Price Record use case."""

from __future__ import annotations

from datetime import date

from pricetable.application.dto import PriceForm
from pricetable.application.price_record_collection import PriceRecordCollection
from pricetable.application.validation import validate_price_form
from pricetable.domain.exceptions import EntityNotFoundError
from pricetable.domain.model.price_record import PriceRecord


class UpdatePriceRecordHandler:

    def __init__(self, price_records: PriceRecordCollection) -> None:
        self._price_records = price_records

    def handle(
        self,
        record_id: str,
        price: str | None = None,
        quantity: str | None = None,
        store: str | None = None,
        notes: str | None = None,
        is_on_sale: bool | None = None,
        purchase_date: date | None = None,
    ) -> PriceRecord:
        """Edit a price record; None leaves a field as it is.

        The unit price follows any change to price or quantity.
        """
        record = self._price_records.get(record_id)
        if record is None:
            raise EntityNotFoundError(f"Price record with ID '{record_id}' not found")

        form = PriceForm(
            price=str(record.price) if price is None else price,
            quantity=str(record.quantity) if quantity is None else quantity,
            store=record.store if store is None else store,
            notes=record.notes if notes is None else notes,
            is_on_sale=record.is_on_sale if is_on_sale is None else is_on_sale,
            purchase_date=record.purchase_date if purchase_date is None else purchase_date,
        )
        clean = validate_price_form(form)

        updated = self._price_records.update(
            record_id,
            price=clean.price,
            quantity=clean.quantity,
            store=clean.store,
            notes=clean.notes,
            is_on_sale=clean.is_on_sale,
            purchase_date=clean.purchase_date,
        )
        if updated is None:
            raise EntityNotFoundError(f"Price record with ID '{record_id}' not found")
        return updated
