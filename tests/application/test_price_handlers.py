"""Integration tests for the price record use cases and queries."""

from datetime import date
from decimal import Decimal

import pytest

from pricetable.application.dto import PriceForm
from pricetable.application.price_record_collection import PriceRecordCollection
from pricetable.application.product_collection import ProductCollection
from pricetable.application.record_price import RecordPriceHandler
from pricetable.application.show_price_history import ShowPriceHistoryHandler
from pricetable.application.show_products import ShowProductsHandler
from pricetable.application.update_price_record import UpdatePriceRecordHandler
from pricetable.domain.exceptions import EntityNotFoundError, InputValidationError
from tests.fakes import make_store


def _setup():
    store, backend = make_store()
    products = ProductCollection(store)
    price_records = PriceRecordCollection(store)
    products.load()
    price_records.load()
    rice = products.add("Rice", "kg")
    return products, price_records, rice, backend


# ── Record ───────────────────────────────────────────────────────────────────


class TestRecordPrice:

    def test_records_price(self):
        products, price_records, rice, _ = _setup()
        record = RecordPriceHandler(products, price_records).handle(
            rice.id,
            PriceForm(
                price="2980",
                quantity="5",
                store=" Aeon ",
                notes="weekend",
                is_on_sale=True,
                purchase_date=date(2024, 5, 1),
            ),
        )
        assert record.unit_price == Decimal("596")
        assert record.store == "Aeon"
        assert record.is_on_sale is True
        assert price_records.get(record.id) is record

    @pytest.mark.parametrize("price", ["", "0", "-5", "abc"])
    def test_bad_price_rejected(self, price):
        products, price_records, rice, _ = _setup()
        with pytest.raises(InputValidationError) as info:
            RecordPriceHandler(products, price_records).handle(
                rice.id, PriceForm(price=price, quantity="1", store="A")
            )
        assert set(info.value.errors) == {"price"}

    def test_all_field_errors_reported(self):
        products, price_records, rice, _ = _setup()
        with pytest.raises(InputValidationError) as info:
            RecordPriceHandler(products, price_records).handle(
                rice.id, PriceForm(price="0", quantity="0", store="")
            )
        assert set(info.value.errors) == {"price", "quantity", "store"}

    def test_unknown_product_rejected(self):
        products, price_records, _, backend = _setup()
        writes = backend.writes
        with pytest.raises(EntityNotFoundError):
            RecordPriceHandler(products, price_records).handle(
                "missing", PriceForm(price="1", quantity="1", store="A")
            )
        assert backend.writes == writes


# ── Update ───────────────────────────────────────────────────────────────────


class TestUpdatePriceRecord:

    def test_quantity_change_updates_unit_price(self):
        _, price_records, rice, _ = _setup()
        record = price_records.add(rice.id, "300", "10", "A")
        updated = UpdatePriceRecordHandler(price_records).handle(record.id, quantity="4")
        assert updated.unit_price == Decimal("75")
        assert updated.store == "A"

    def test_invalid_change_rejected(self):
        _, price_records, rice, _ = _setup()
        record = price_records.add(rice.id, "300", "10", "A")
        with pytest.raises(InputValidationError):
            UpdatePriceRecordHandler(price_records).handle(record.id, store="  ")
        assert price_records.get(record.id).store == "A"

    def test_unknown_record(self):
        _, price_records, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            UpdatePriceRecordHandler(price_records).handle("missing", price="1")

    def test_record_gone_before_write(self, monkeypatch):
        _, price_records, rice, _ = _setup()
        record = price_records.add(rice.id, "300", "10", "A")
        monkeypatch.setattr(price_records, "update", lambda *args, **kwargs: None)
        with pytest.raises(EntityNotFoundError):
            UpdatePriceRecordHandler(price_records).handle(record.id, quantity="4")


# ── Queries ──────────────────────────────────────────────────────────────────


class TestShowProducts:

    def test_overview_carries_cheapest(self):
        products, price_records, rice, _ = _setup()
        milk = products.add("Milk", "l")
        price_records.add(rice.id, "100", "2", "A")
        price_records.add(rice.id, "45", "1", "B")
        price_records.add(rice.id, "300", "10", "C")

        summaries = ShowProductsHandler(products, price_records).handle()

        by_name = {s.name: s for s in summaries}
        assert by_name["Rice"].record_count == 3
        assert by_name["Rice"].cheapest_unit_price == "30.0000/kg"
        assert by_name["Rice"].cheapest_store == "C"
        assert by_name["Milk"].record_count == 0
        assert by_name["Milk"].cheapest_unit_price is None
        assert by_name["Milk"].id == milk.id

    def test_keyword_filters(self):
        products, price_records, _, _ = _setup()
        products.add("Milk", "l")
        summaries = ShowProductsHandler(products, price_records).handle("mil")
        assert [s.name for s in summaries] == ["Milk"]


class TestShowPriceHistory:

    def test_history_marks_cheapest(self):
        products, price_records, rice, _ = _setup()
        price_records.add(rice.id, "100", "2", "A")
        cheap = price_records.add(rice.id, "300", "10", "C", purchase_date=date(2024, 5, 1))

        dto = ShowPriceHistoryHandler(products, price_records).handle(rice.id)

        assert dto.product_name == "Rice"
        assert dto.cheapest_record_id == cheap.id
        assert len(dto.records) == 2
        line = next(r for r in dto.records if r.id == cheap.id)
        assert line.unit_price == "30.0000/kg"
        assert line.price == "300"
        assert line.quantity == "10"
        assert line.purchase_date == "2024-05-01"

    def test_unknown_product(self):
        products, price_records, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            ShowPriceHistoryHandler(products, price_records).handle("missing")
