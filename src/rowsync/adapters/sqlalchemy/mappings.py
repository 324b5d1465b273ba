"""SQLAlchemy table metadata for the key-row-cell store."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import JSON, Column, MetaData, String, Table

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "pk": "pk_%(table_name)s",
    }
)

# One record per cell: (table, row, cell) -> primitive JSON value.
row_cell_table = Table(
    "row_cell",
    metadata,
    Column("table_name", String(255), primary_key=True),
    Column("row_id", String(255), primary_key=True),
    Column("cell_id", String(255), primary_key=True),
    Column("value", JSON, nullable=False),
)


def create_all_tables(engine: Engine) -> None:
    metadata.create_all(engine, checkfirst=True)
