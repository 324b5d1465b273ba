"""Operations flowing through the reconciling pipeline.

Request time: the pipeline remembers the directive-bearing document under the
operation key, strips the row directives and forwards the cleaned operation.
Result time: the original document is recalled by key and reconciled against the
result data. Without a remembered document the stripped one is used, which carries
no row directives and therefore reconciles nothing.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from graphql import parse, print_ast

from .ports.transport import GraphQLErrorDetail, GraphQLRequest
from .reconciler import ReconcileResult, ResponseReconciler, find_operation
from .stripper import has_row_directives, strip_row_directives

if TYPE_CHECKING:
    from graphql import DocumentNode

    from .ports.transport import GraphQLTransport

log = getLogger(__name__)


class OperationKind(StrEnum):
    QUERY = "query"
    MUTATION = "mutation"
    SUBSCRIPTION = "subscription"


@dataclass(frozen=True, slots=True, kw_only=True)
class Operation:
    """One GraphQL operation identified by an opaque per-operation key."""

    document: DocumentNode
    variables: Mapping[str, object] = field(default_factory=dict[str, object])
    operation_name: str | None = None
    key: UUID = field(default_factory=uuid4)

    @classmethod
    def from_source(
        cls,
        source: str,
        *,
        variables: Mapping[str, object] | None = None,
        operation_name: str | None = None,
    ) -> Operation:
        return cls(
            document=parse(source),
            variables=dict(variables or {}),
            operation_name=operation_name,
        )

    @property
    def kind(self) -> OperationKind | None:
        definition = find_operation(self.document, self.operation_name)
        if definition is None:
            return None
        return OperationKind(definition.operation.value)

    def to_request(self) -> GraphQLRequest:
        return GraphQLRequest(
            query=print_ast(self.document),
            variables=self.variables,
            operation_name=self.operation_name,
        )


@dataclass(frozen=True, slots=True)
class OperationResult:
    operation: Operation
    data: Mapping[str, object] | None = None
    errors: tuple[GraphQLErrorDetail, ...] = ()

    @property
    def has_data(self) -> bool:
        return bool(self.data)


@dataclass(slots=True)
class OriginalDocumentRegistry:
    """Side channel from request time to result time, keyed by operation key.

    Associations are superseded when a key is remembered again; the owner of the
    operation lifecycle decides when to ``forget`` them.
    """

    _documents: dict[UUID, DocumentNode] = field(
        default_factory=dict["UUID", "DocumentNode"], repr=False
    )

    def remember(self, key: UUID, document: DocumentNode) -> None:
        self._documents[key] = document

    def recall(self, key: UUID, *, fallback: DocumentNode) -> DocumentNode:
        document = self._documents.get(key)
        if document is None:
            log.warning(
                "No original document stored for operation %s; row directives were "
                "stripped and will not be applied",
                key,
            )
            return fallback
        return document

    def forget(self, key: UUID) -> None:
        self._documents.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._documents

    def __len__(self) -> int:
        return len(self._documents)


@dataclass(slots=True)
class ReconcilingPipeline:
    """Strip row directives on the way out, reconcile results on the way back."""

    transport: GraphQLTransport
    reconciler: ResponseReconciler
    registry: OriginalDocumentRegistry = field(default_factory=OriginalDocumentRegistry)

    def prepare(self, operation: Operation) -> Operation:
        """Remember the original document and return the operation to send."""

        self.registry.remember(operation.key, operation.document)
        if not has_row_directives(operation.document):
            return operation
        return replace(operation, document=strip_row_directives(operation.document))

    def handle_result(self, result: OperationResult) -> ReconcileResult:
        """Reconcile one result; results without data are a no-op."""

        for error in result.errors:
            log.warning(f"GraphQL error for operation {result.operation.key}: {error.message}")
        if not result.has_data:
            return ReconcileResult()

        document = self.registry.recall(result.operation.key, fallback=result.operation.document)
        return self.reconciler.reconcile(
            document,
            result.data,
            operation_name=result.operation.operation_name,
        )

    async def execute(self, operation: Operation) -> tuple[OperationResult, ReconcileResult]:
        """Send ``operation`` through the transport and reconcile its result."""

        prepared = self.prepare(operation)
        response = await self.transport.execute(prepared.to_request())
        result = OperationResult(operation=prepared, data=response.data, errors=response.errors)
        reconciliation = self.handle_result(result)
        log.info(
            "Operation %s finished: merged=%s, deleted=%s, skipped=%s, errors=%s",
            operation.operation_name or operation.key,
            reconciliation.merged,
            reconciliation.deleted,
            reconciliation.skipped,
            reconciliation.errors,
        )
        return result, reconciliation
