"""Unit tests for the Inventory store."""

import threading

import pytest

from ims.domain.exceptions import PersistenceError
from ims.domain.model.inventory import IdAllocator, Inventory
from ims.domain.model.product import ElectronicProduct, Product
from tests.fakes import FakeInventoryStorage


def _product(name="Widget", price=1.0, quantity=1, id=0) -> Product:
    return Product(id=id, name=name, price=price, quantity=quantity)


@pytest.fixture
def storage():
    return FakeInventoryStorage()


@pytest.fixture
def inventory(storage):
    return Inventory(storage)


# ── Identifier allocation ────────────────────────────────────────────────────


class TestIdAllocator:

    def test_zero_gets_next_id(self):
        allocator = IdAllocator()
        assert allocator.allocate(0, taken=False) == 1
        assert allocator.next_id == 2

    def test_taken_id_gets_next_id(self):
        allocator = IdAllocator()
        allocator.allocate(5, taken=False)
        assert allocator.allocate(5, taken=True) == 6
        assert allocator.next_id == 7

    def test_explicit_id_lower_than_floor_keeps_floor(self):
        allocator = IdAllocator()
        allocator.allocate(10, taken=False)
        assert allocator.allocate(3, taken=False) == 3
        assert allocator.next_id == 11


class TestAdd:

    def test_auto_ids_strictly_increase_across_removals(self, inventory):
        ids = []
        for i in range(5):
            p = _product(name=f"P{i}")
            inventory.add(p)
            ids.append(p.id)
            if i % 2 == 0:
                assert inventory.remove_by_id(p.id)
        assert ids == [1, 2, 3, 4, 5]

    def test_removed_id_not_reused(self, inventory):
        first = _product()
        inventory.add(first)
        inventory.remove_by_id(first.id)
        second = _product()
        inventory.add(second)
        assert second.id == 2

    def test_explicit_id_retained_and_floor_raised(self, inventory):
        p = _product(id=42)
        inventory.add(p)
        assert p.id == 42
        assert inventory.next_id == 43

    def test_negative_id_reassigned(self, inventory):
        p = _product(id=-4)
        inventory.add(p)
        assert p.id == 1

    def test_colliding_id_reassigned(self, inventory):
        inventory.add(_product(id=3))
        clash = _product(id=3)
        inventory.add(clash)
        assert clash.id == 4
        assert [p.id for p in inventory.list_all()] == [3, 4]

    def test_electronic_records_share_the_store(self, inventory):
        inventory.add(ElectronicProduct(0, "Laptop", 999.0, 1, "1 year"))
        inventory.add(_product())
        assert [p.is_electronic for p in inventory.list_all()] == [True, False]


class TestRemoveAndFind:

    def test_remove_missing_returns_false_and_changes_nothing(self, inventory):
        inventory.add(_product(name="A"))
        before = inventory.list_all()
        assert inventory.remove_by_id(99) is False
        assert inventory.list_all() == before
        assert inventory.next_id == 2

    def test_find_returns_record(self, inventory):
        p = _product(name="A")
        inventory.add(p)
        assert inventory.find_by_id(p.id) is p

    def test_find_missing_returns_none(self, inventory):
        assert inventory.find_by_id(1) is None

    def test_update_through_found_record(self, inventory):
        inventory.add(_product(quantity=1))
        inventory.find_by_id(1).set_quantity(25)
        assert inventory.list_all()[0].quantity == 25


class TestListAndClear:

    def test_list_all_is_a_copy(self, inventory):
        inventory.add(_product())
        snapshot = inventory.list_all()
        snapshot.clear()
        assert len(inventory) == 1

    def test_clear_all_resets_allocator(self, inventory):
        inventory.add(_product(id=10))
        inventory.clear_all()
        assert inventory.list_all() == []
        p = _product()
        inventory.add(p)
        assert p.id == 1


# ── Ordering & queries ───────────────────────────────────────────────────────


class TestOrdering:

    def test_sort_by_name_ignores_case(self, inventory):
        for name in ["banana", "Apple", "cherry"]:
            inventory.add(_product(name=name))
        inventory.sort_by_name()
        assert [p.name for p in inventory.list_all()] == ["Apple", "banana", "cherry"]

    def test_sort_by_name_is_stable(self, inventory):
        inventory.add(_product(name="apple", price=1.0))
        inventory.add(_product(name="APPLE", price=2.0))
        inventory.add(_product(name="Apple", price=3.0))
        inventory.sort_by_name()
        assert [p.price for p in inventory.list_all()] == [1.0, 2.0, 3.0]

    def test_sort_by_price(self, inventory):
        for price in [25.0, 5.0, 15.0]:
            inventory.add(_product(price=price))
        inventory.sort_by_price()
        assert [p.price for p in inventory.list_all()] == [5.0, 15.0, 25.0]


class TestQueries:

    def test_summary_totals(self, inventory):
        inventory.add(_product(price=2.0, quantity=3))
        inventory.add(_product(price=1.5, quantity=4))
        summary = inventory.summarize()
        assert summary.count == 2
        assert summary.total_quantity == 7
        assert summary.total_value == pytest.approx(12.0)

    def test_summary_is_recomputed(self, inventory):
        inventory.add(_product(price=2.0, quantity=3))
        first = inventory.summarize()
        inventory.find_by_id(1).set_quantity(10)
        assert inventory.summarize().total_quantity == 10
        assert first.total_quantity == 3

    def test_summary_of_empty_store(self, inventory):
        summary = inventory.summarize()
        assert (summary.count, summary.total_quantity, summary.total_value) == (0, 0, 0.0)
        assert str(summary) == "Count: 0, TotalQty: 0, TotalValue: 0.00"

    def test_filter_is_inclusive_and_ordered(self, inventory):
        for price in [5.0, 10.0, 15.0, 20.0, 25.0]:
            inventory.add(_product(price=price))
        result = inventory.filter_by_price_range(10, 20)
        assert [p.price for p in result] == [10.0, 15.0, 20.0]

    def test_filter_inverted_range_is_empty(self, inventory):
        inventory.add(_product(price=15.0))
        assert inventory.filter_by_price_range(20, 10) == []


class TestPartialIterator:

    def test_starts_at_position(self, inventory):
        for name in ["A", "B", "C"]:
            inventory.add(_product(name=name))
        assert [p.name for p in inventory.iterator_from(1)] == ["B", "C"]

    def test_negative_start_clamped(self, inventory):
        for name in ["A", "B"]:
            inventory.add(_product(name=name))
        assert [p.name for p in inventory.iterator_from(-5)] == ["A", "B"]

    def test_start_past_end_is_empty(self, inventory):
        inventory.add(_product())
        assert list(inventory.iterator_from(3)) == []

    def test_exhausted_iterator_stays_exhausted(self, inventory):
        inventory.add(_product())
        it = inventory.iterator_from(0)
        next(it)
        with pytest.raises(StopIteration):
            next(it)
        with pytest.raises(StopIteration):
            next(it)

    def test_reflects_live_order(self, inventory):
        for name in ["c", "a", "b"]:
            inventory.add(_product(name=name))
        it = inventory.iterator_from(0)
        assert next(it).name == "c"
        inventory.sort_by_name()
        assert [p.name for p in it] == ["b", "c"]


# ── Persistence ──────────────────────────────────────────────────────────────


class TestSaveLoad:

    def test_save_writes_header_and_rows(self, inventory, storage):
        inventory.add(_product(name="Widget", price=9.99, quantity=10))
        inventory.add(_product(name="O'Brien, Inc", price=12.5, quantity=3))
        inventory.save("inv.csv")
        assert storage.files["inv.csv"] == [
            "id,name,price,quantity",
            "1,Widget,9.99,10",
            "2,\"O'Brien, Inc\",12.5,3",
        ]

    def test_round_trip(self, inventory, storage):
        inventory.add(_product(name="Widget", price=9.99, quantity=10))
        inventory.add(_product(name="O'Brien, Inc", price=12.5, quantity=3))
        inventory.save("inv.csv")

        restored = Inventory(storage)
        restored.load("inv.csv")
        assert [(p.id, p.name, p.price, p.quantity) for p in restored.list_all()] == [
            (1, "Widget", 9.99, 10),
            (2, "O'Brien, Inc", 12.5, 3),
        ]

    def test_load_replaces_unsaved_records(self, inventory, storage):
        storage.files["inv.csv"] = ["id,name,price,quantity", "7,Saved,1.0,1"]
        inventory.add(_product(name="Never saved"))
        inventory.load("inv.csv")
        assert [p.name for p in inventory.list_all()] == ["Saved"]

    def test_load_raises_floor_above_loaded_ids(self, inventory, storage):
        storage.files["inv.csv"] = ["id,name,price,quantity", "7,A,1.0,1", "3,B,1.0,1"]
        inventory.load("inv.csv")
        p = _product()
        inventory.add(p)
        assert p.id == 8

    def test_load_does_not_lower_floor(self, inventory, storage):
        for _ in range(5):
            inventory.add(_product())
        storage.files["inv.csv"] = ["id,name,price,quantity", "2,A,1.0,1"]
        inventory.load("inv.csv")
        assert inventory.next_id == 6

    def test_load_skips_malformed_lines(self, inventory, storage):
        storage.files["inv.csv"] = [
            "id,name,price,quantity",
            "1,Good,1.0,1",
            "2,Bad,notaprice,1",
            "3,Short",
            "4,Also good,2.0,2",
        ]
        inventory.load("inv.csv")
        assert [p.id for p in inventory.list_all()] == [1, 4]

    def test_load_missing_file_raises(self, inventory):
        with pytest.raises(PersistenceError, match="missing.csv"):
            inventory.load("missing.csv")

    def test_save_failure_raises(self, inventory, storage):
        storage.fail_writes = True
        with pytest.raises(PersistenceError) as excinfo:
            inventory.save("inv.csv")
        assert isinstance(excinfo.value.__cause__, PermissionError)


class TestConcurrency:

    def test_concurrent_adds_get_unique_ids(self, inventory):
        def worker():
            for _ in range(200):
                inventory.add(_product())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        ids = [p.id for p in inventory.list_all()]
        assert len(ids) == 1600
        assert sorted(ids) == list(range(1, 1601))
        assert inventory.next_id == 1601
