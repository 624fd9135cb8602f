"""Tests for PriceRecordCollection and its derived queries."""

import json
from datetime import date
from decimal import Decimal

import pytest

from pricetable.application.price_record_collection import PriceRecordCollection
from pricetable.domain.exceptions import StorageError
from pricetable.domain.model.value_objects import compute_unit_price
from pricetable.domain.repository.collection_store import StorageKey
from tests.fakes import make_store


def _collection():
    store, backend = make_store()
    records = PriceRecordCollection(store)
    records.load()
    return records, store, backend


def _seeded(raw_records):
    """Collection hydrated from hand-written stored records."""
    store, backend = make_store({StorageKey.PRICE_RECORDS: json.dumps(raw_records)})
    records = PriceRecordCollection(store)
    records.load()
    return records, store, backend


def _raw(record_id, store="A", product_id="p1", created="2024-01-01T00:00:00.000Z"):
    return {
        "id": record_id,
        "productId": product_id,
        "price": 100,
        "quantity": 1,
        "unitPrice": 100,
        "store": store,
        "notes": "",
        "isOnSale": False,
        "purchaseDate": None,
        "createdAt": created,
        "updatedAt": created,
    }


# ── Add / update ─────────────────────────────────────────────────────────────


class TestAddAndUpdate:

    def test_unit_price_survives_reload(self):
        records, store, _ = _collection()
        created = records.add("p1", "100", "3", "Aeon", purchase_date=date(2024, 5, 1))

        fresh = PriceRecordCollection(store)
        fresh.load()
        loaded = fresh.get(created.id)
        assert loaded.unit_price == Decimal("33.3333")
        assert loaded.unit_price == compute_unit_price(loaded.price, loaded.quantity)
        assert loaded.purchase_date == date(2024, 5, 1)
        assert loaded.store == "Aeon"

    def test_update_recomputes_unit_price(self):
        records, _, _ = _collection()
        created = records.add("p1", "300", "10", "Aeon")
        updated = records.update(created.id, quantity="20")
        assert updated.unit_price == Decimal("15")
        assert records.get(created.id).unit_price == Decimal("15")

    def test_stale_stored_unit_price_is_recomputed_on_load(self):
        raw = _raw("r1")
        raw.update(price=100, quantity=3, unitPrice=33.33)
        records, _, _ = _seeded([raw])
        assert records.get("r1").unit_price == Decimal("33.3333")

    def test_missing_unit_price_is_recomputed_on_load(self):
        raw = _raw("r1")
        del raw["unitPrice"]
        records, _, _ = _seeded([raw])
        assert records.get("r1").unit_price == Decimal("100")

    def test_failed_add_rolls_back(self):
        records, _, backend = _collection()
        records.add("p1", "1", "1", "A")
        backend.fail_writes = True
        with pytest.raises(StorageError):
            records.add("p1", "2", "1", "B")
        assert len(records) == 1


# ── Queries ──────────────────────────────────────────────────────────────────


class TestCheapest:

    def test_returns_minimum_unit_price(self):
        records, _, _ = _collection()
        records.add("p1", "100", "2", "A")
        records.add("p1", "45", "1", "B")
        expected = records.add("p1", "300", "10", "C")
        records.add("p2", "1", "100", "D")  # other product, cheaper

        cheapest = records.cheapest("p1")
        assert cheapest is expected
        assert cheapest.unit_price == Decimal("30")

    def test_first_encountered_wins_a_tie(self):
        records, _, _ = _collection()
        first = records.add("p1", "50", "1", "A")
        records.add("p1", "100", "2", "B")
        assert records.cheapest("p1") is first

    def test_none_without_records(self):
        records, _, _ = _collection()
        assert records.cheapest("p1") is None


class TestFrequentStores:

    def test_ranked_by_count(self):
        records, _, _ = _collection()
        for store in ["A", "B", "A", "C", "A", "B"]:
            records.add("p1", "1", "1", store)
        assert records.frequent_stores(2) == ["A", "B"]

    def test_ties_keep_first_seen_order(self):
        records, _, _ = _collection()
        for store in ["Z", "Y", "X", "Y", "Z", "X"]:
            records.add("p1", "1", "1", store)
        assert records.frequent_stores(10) == ["Z", "Y", "X"]

    def test_counts_across_products(self):
        records, _, _ = _collection()
        records.add("p1", "1", "1", "B")
        records.add("p2", "1", "1", "A")
        records.add("p3", "1", "1", "A")
        assert records.frequent_stores() == ["A", "B"]


class TestHistory:

    def test_newest_first(self):
        records, _, _ = _seeded([
            _raw("old", created="2024-01-01T00:00:00.000Z"),
            _raw("new", created="2024-03-01T00:00:00.000Z"),
            _raw("mid", created="2024-02-01T00:00:00.000Z"),
            _raw("other", product_id="p2", created="2024-04-01T00:00:00.000Z"),
        ])
        assert [r.id for r in records.history("p1")] == ["new", "mid", "old"]

    def test_limit(self):
        records, _, _ = _seeded([
            _raw("old", created="2024-01-01T00:00:00.000Z"),
            _raw("new", created="2024-03-01T00:00:00.000Z"),
            _raw("mid", created="2024-02-01T00:00:00.000Z"),
        ])
        assert [r.id for r in records.history("p1", limit=2)] == ["new", "mid"]

    def test_no_limit_returns_everything(self):
        records, _, _ = _seeded([_raw("a"), _raw("b")])
        assert len(records.history("p1", limit=None)) == 2


class TestFilters:

    def test_by_product(self):
        records, _, _ = _seeded([_raw("a"), _raw("b", product_id="p2"), _raw("c")])
        assert [r.id for r in records.by_product("p1")] == ["a", "c"]

    def test_by_store(self):
        records, _, _ = _seeded([_raw("a", store="A"), _raw("b", store="B")])
        assert [r.id for r in records.by_store("B")] == ["b"]


# ── Cascade helper ───────────────────────────────────────────────────────────


class TestDeleteByProduct:

    def test_removes_only_that_product(self):
        records, store, _ = _seeded([_raw("a"), _raw("b", product_id="p2"), _raw("c")])
        assert records.delete_by_product("p1") == 2
        assert [r.id for r in records.all()] == ["b"]

        fresh = PriceRecordCollection(store)
        fresh.load()
        assert [r.id for r in fresh.all()] == ["b"]

    def test_single_write(self):
        records, _, backend = _seeded([_raw("a"), _raw("c")])
        writes = backend.writes
        records.delete_by_product("p1")
        assert backend.writes == writes + 1

    def test_nothing_to_remove(self):
        records, _, backend = _seeded([_raw("a")])
        writes = backend.writes
        assert records.delete_by_product("p9") == 0
        assert backend.writes == writes
