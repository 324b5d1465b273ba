"""Row store backed by a SQLAlchemy session."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import and_, delete, insert, select

from .mappings import row_cell_table

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy import ColumnElement
    from sqlalchemy.orm import Session

    from rowsync.domain.ports import Cell, Row, RowStore


class SqlAlchemyRowStore:
    """Store rows as individual cell records; transaction control stays with the session owner."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def set_partial_row(self, table: str, row_id: str, cells: Mapping[str, Cell]) -> None:
        if not cells:
            return
        self.session.execute(
            delete(row_cell_table).where(
                _row_clause(table, row_id),
                row_cell_table.c.cell_id.in_(list(cells)),
            )
        )
        self.session.execute(
            insert(row_cell_table),
            [
                {"table_name": table, "row_id": row_id, "cell_id": cell_id, "value": value}
                for cell_id, value in cells.items()
            ],
        )

    def del_row(self, table: str, row_id: str) -> None:
        self.session.execute(delete(row_cell_table).where(_row_clause(table, row_id)))

    def has_row(self, table: str, row_id: str) -> bool:
        stmt = select(row_cell_table.c.cell_id).where(_row_clause(table, row_id)).limit(1)
        return self.session.execute(stmt).first() is not None

    def get_row(self, table: str, row_id: str) -> Row:
        stmt = select(row_cell_table.c.cell_id, row_cell_table.c.value).where(
            _row_clause(table, row_id)
        )
        return {cell_id: value for cell_id, value in self.session.execute(stmt)}

    def get_table(self, table: str) -> dict[str, Row]:
        stmt = (
            select(row_cell_table.c.row_id, row_cell_table.c.cell_id, row_cell_table.c.value)
            .where(row_cell_table.c.table_name == table)
            .order_by(row_cell_table.c.row_id, row_cell_table.c.cell_id)
        )
        rows: dict[str, Row] = {}
        for row_id, cell_id, value in self.session.execute(stmt):
            rows.setdefault(row_id, {})[cell_id] = value
        return rows

    def table_ids(self) -> tuple[str, ...]:
        stmt = (
            select(row_cell_table.c.table_name).distinct().order_by(row_cell_table.c.table_name)
        )
        return tuple(self.session.execute(stmt).scalars())


def _row_clause(table: str, row_id: str) -> ColumnElement[bool]:
    return and_(row_cell_table.c.table_name == table, row_cell_table.c.row_id == row_id)


if TYPE_CHECKING:
    from sqlalchemy.orm import Session as _Session

    _store_check: RowStore = SqlAlchemyRowStore(_Session())
