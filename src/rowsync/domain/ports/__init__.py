"""Domain port definitions for adapters."""

from __future__ import annotations

from .row_store import CELL_TYPES, Cell, Row, RowStore
from .transport import GraphQLErrorDetail, GraphQLRequest, GraphQLResult, GraphQLTransport
from .unit_of_work import RowStoreUnitOfWork

__all__ = [
    "CELL_TYPES",
    "Cell",
    "GraphQLErrorDetail",
    "GraphQLRequest",
    "GraphQLResult",
    "GraphQLTransport",
    "Row",
    "RowStore",
    "RowStoreUnitOfWork",
]
