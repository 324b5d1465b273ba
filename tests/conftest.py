from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from graphql import parse
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from rowsync.adapters.memory import InMemoryRowStore
from rowsync.adapters.sqlalchemy import (
    SqlAlchemyRowStoreUnitOfWork,
    create_all_tables,
    shutdown,
    startup,
)
from rowsync.domain import CollectingDiagnosticSink, ReconcileResult, ResponseReconciler

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Mapping


@pytest.fixture
def store() -> InMemoryRowStore:
    return InMemoryRowStore()


@pytest.fixture
def diagnostics() -> CollectingDiagnosticSink:
    return CollectingDiagnosticSink()


@pytest.fixture
def reconciler(
    store: InMemoryRowStore, diagnostics: CollectingDiagnosticSink
) -> ResponseReconciler:
    return ResponseReconciler(store=store, diagnostics=diagnostics)


@pytest.fixture
def reconcile(
    reconciler: ResponseReconciler,
) -> Callable[..., ReconcileResult]:
    """Parse ``source`` and reconcile ``data`` against it."""

    def run(
        source: str,
        data: Mapping[str, object] | None,
        *,
        operation_name: str | None = None,
    ) -> ReconcileResult:
        return reconciler.reconcile(parse(source), data, operation_name=operation_name)

    return run


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyRowStoreUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyRowStoreUnitOfWork:
        return SqlAlchemyRowStoreUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()
