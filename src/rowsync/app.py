"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from graphql import parse, print_ast

from rowsync.adapters.graphql_http import HttpGraphQLTransport
from rowsync.adapters.sqlalchemy import SqlAlchemyRowStoreUnitOfWork, is_started, startup
from rowsync.domain import (
    LoggingDiagnosticSink,
    Operation,
    ReconcilingPipeline,
    ResponseReconciler,
    strip_row_directives,
)
from rowsync.domain.ports import RowStoreUnitOfWork

if TYPE_CHECKING:
    from collections.abc import Mapping

    from rowsync.domain import DiagnosticSink, OperationResult, ReconcileResult
    from rowsync.domain.ports import GraphQLTransport, Row

UnitOfWorkFactory = Callable[[], RowStoreUnitOfWork]

log = getLogger(__name__)


def _default_unit_of_work_factory() -> UnitOfWorkFactory:
    if not is_started():
        startup()
    return SqlAlchemyRowStoreUnitOfWork


def run_operation(
    source: str,
    *,
    variables: Mapping[str, object] | None = None,
    operation_name: str | None = None,
    transport: GraphQLTransport | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    diagnostics: DiagnosticSink | None = None,
) -> tuple[OperationResult, ReconcileResult]:
    """Execute one GraphQL operation and apply its row directives to the store."""

    operation = Operation.from_source(
        source, variables=variables, operation_name=operation_name
    )
    effective_transport = transport or HttpGraphQLTransport()
    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    log.info(
        "Running %s operation %s",
        operation.kind or "unknown",
        operation_name or operation.key,
    )

    with effective_uow() as uow:
        pipeline = ReconcilingPipeline(
            transport=effective_transport,
            reconciler=ResponseReconciler(
                store=uow.rows,
                diagnostics=diagnostics or LoggingDiagnosticSink(),
            ),
        )
        result, reconciliation = asyncio.run(pipeline.execute(operation))
        uow.commit()

    log.info(
        f"Stored reconciliation: mutations={reconciliation.mutations}, "
        f"skipped={reconciliation.skipped}, errors={reconciliation.errors}, "
        f"graphql_errors={len(result.errors)}"
    )
    return result, reconciliation


def strip_source(source: str) -> str:
    """Return ``source`` printed without row directives."""

    return print_ast(strip_row_directives(parse(source)))


def read_rows(
    table: str,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> dict[str, Row]:
    """Return every row of ``table`` from the persistent store."""

    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    with effective_uow() as uow:
        return uow.rows.get_table(table)
