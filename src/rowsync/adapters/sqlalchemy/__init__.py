"""SQLAlchemy adapter package for rowsync."""

from __future__ import annotations

from .mappings import create_all_tables, metadata, row_cell_table
from .row_store import SqlAlchemyRowStore
from .unit_of_work import (
    SqlAlchemyRowStoreUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyRowStore",
    "SqlAlchemyRowStoreUnitOfWork",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "metadata",
    "row_cell_table",
    "shutdown",
    "startup",
]
