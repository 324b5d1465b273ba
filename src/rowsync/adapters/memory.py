"""In-memory row store."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from rowsync.domain.ports import Cell, Row, RowStore


class InMemoryRowStore:
    """Tables of rows held in plain dictionaries.

    Rows are copied on the way in and out so callers never share state with the store.
    An empty cell map writes nothing; empty tables are dropped when their last row is
    deleted.
    """

    def __init__(self) -> None:
        self._tables: dict[str, dict[str, Row]] = {}

    def set_partial_row(self, table: str, row_id: str, cells: Mapping[str, Cell]) -> None:
        if not cells:
            return
        row = self._tables.setdefault(table, {}).setdefault(row_id, {})
        row.update(cells)

    def del_row(self, table: str, row_id: str) -> None:
        rows = self._tables.get(table)
        if rows is None:
            return
        rows.pop(row_id, None)
        if not rows:
            del self._tables[table]

    def has_row(self, table: str, row_id: str) -> bool:
        return row_id in self._tables.get(table, {})

    def get_row(self, table: str, row_id: str) -> Row:
        return dict(self._tables.get(table, {}).get(row_id, {}))

    def get_cell(self, table: str, row_id: str, cell: str) -> Cell | None:
        return self._tables.get(table, {}).get(row_id, {}).get(cell)

    def get_table(self, table: str) -> dict[str, Row]:
        return {row_id: dict(row) for row_id, row in self._tables.get(table, {}).items()}

    def table_ids(self) -> tuple[str, ...]:
        return tuple(self._tables)

    def row_ids(self, table: str) -> tuple[str, ...]:
        return tuple(self._tables.get(table, {}))


if TYPE_CHECKING:
    _store_check: RowStore = InMemoryRowStore()
