from __future__ import annotations

from rowsync.adapters.memory import InMemoryRowStore
from rowsync.domain.ports import RowStore


def test_set_partial_row_creates_and_merges() -> None:
    store = InMemoryRowStore()

    store.set_partial_row("users", "1", {"id": "1", "name": "Alice"})
    store.set_partial_row("users", "1", {"age": 30, "name": "Alicia"})

    assert store.get_row("users", "1") == {"id": "1", "name": "Alicia", "age": 30}
    assert store.get_cell("users", "1", "age") == 30
    assert store.get_cell("users", "1", "missing") is None


def test_del_row_removes_row_and_empty_table() -> None:
    store = InMemoryRowStore()
    store.set_partial_row("users", "1", {"id": "1"})
    store.set_partial_row("users", "2", {"id": "2"})

    store.del_row("users", "1")
    assert store.row_ids("users") == ("2",)

    store.del_row("users", "2")
    store.del_row("users", "2")
    store.del_row("unknown", "2")
    assert store.table_ids() == ()
    assert not store.has_row("users", "2")


def test_reads_return_copies() -> None:
    store = InMemoryRowStore()
    store.set_partial_row("users", "1", {"id": "1"})

    row = store.get_row("users", "1")
    row["id"] = "changed"
    table = store.get_table("users")
    table["1"]["extra"] = True

    assert store.get_row("users", "1") == {"id": "1"}


def test_missing_rows_read_as_empty() -> None:
    store = InMemoryRowStore()

    assert store.get_row("users", "1") == {}
    assert store.get_table("users") == {}
    assert store.row_ids("users") == ()


def test_memory_store_satisfies_port() -> None:
    assert isinstance(InMemoryRowStore(), RowStore)


def test_empty_cell_map_creates_nothing() -> None:
    store = InMemoryRowStore()

    store.set_partial_row("users", "1", {})

    assert not store.has_row("users", "1")
    assert store.table_ids() == ()
