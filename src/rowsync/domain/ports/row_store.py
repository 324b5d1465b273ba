"""Port for the key-row-cell store that reconciliation writes into."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

type Cell = str | int | float | bool
type Row = dict[str, Cell]

CELL_TYPES: tuple[type, ...] = (str, int, float, bool)


@runtime_checkable
class RowStore(Protocol):
    """Minimal store contract: named tables of flat rows addressed by string ids."""

    def set_partial_row(self, table: str, row_id: str, cells: Mapping[str, Cell]) -> None:
        """Overwrite the given cells, keep all others, create the row if absent."""
        ...

    def del_row(self, table: str, row_id: str) -> None:
        """Remove the whole row; no-op when it does not exist."""
        ...

    def has_row(self, table: str, row_id: str) -> bool: ...

    def get_row(self, table: str, row_id: str) -> Row: ...

    def get_table(self, table: str) -> dict[str, Row]: ...
