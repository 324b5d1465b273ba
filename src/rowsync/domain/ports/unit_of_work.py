"""Unit-of-work boundary around a row store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from .row_store import RowStore


@runtime_checkable
class RowStoreUnitOfWork(Protocol):
    """Scope in which store mutations are applied and then committed or rolled back."""

    @property
    def rows(self) -> RowStore: ...

    def __enter__(self) -> RowStoreUnitOfWork: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
