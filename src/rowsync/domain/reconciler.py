"""Walk a GraphQL response alongside its document and apply row directives.

The reconciler co-traverses the directive-bearing document and the ``data`` payload:

- a field reads its value by response key (alias, else name)
- an inline fragment reuses the value in scope
- a fragment spread applies the fragment definition's directives to the value in
  scope, then reuses that value for the fragment's selections
- a list value fans out over its elements with the same selection set

Directives act on the value in scope at their attachment point, independently of any
directives further down the tree. Problems with one directive or one row are reported
through the diagnostic sink and never stop the rest of the traversal.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, assert_never, cast

from graphql import (
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    InlineFragmentNode,
    OperationDefinitionNode,
)

from .diagnostics import Diagnostic, DiagnosticSink, LoggingDiagnosticSink, Severity
from .directives import (
    DELETE_ROW_DIRECTIVE,
    MERGE_ROW_DIRECTIVE,
    InvalidTableArgument,
    MissingTableArgument,
    TableName,
    find_directive,
    resolve_table,
)
from .ports.row_store import CELL_TYPES, Cell, RowStore

if TYPE_CHECKING:
    from collections.abc import Collection

    from graphql import DirectiveNode, DocumentNode, SelectionSetNode

log = getLogger(__name__)

type FragmentTable = dict[str, FragmentDefinitionNode]
type Selection = FieldNode | InlineFragmentNode | FragmentSpreadNode

ROW_ID_FIELD = "id"


@dataclass(slots=True)
class ReconcileResult:
    """Summary of the store mutations performed for one response."""

    merged: int = 0
    deleted: int = 0
    skipped: int = 0
    errors: int = 0

    @property
    def mutations(self) -> int:
        return self.merged + self.deleted


def collect_fragments(document: DocumentNode) -> FragmentTable:
    """Index the document's fragment definitions by name."""

    return {
        definition.name.value: definition
        for definition in document.definitions
        if isinstance(definition, FragmentDefinitionNode)
    }


def find_operation(
    document: DocumentNode, operation_name: str | None = None
) -> OperationDefinitionNode | None:
    """Return the named operation, or the first one when no name is given."""

    for definition in document.definitions:
        if not isinstance(definition, OperationDefinitionNode):
            continue
        if operation_name is None:
            return definition
        if definition.name is not None and definition.name.value == operation_name:
            return definition
    return None


def coerce_row_id(value: object) -> str:
    """Render a response value as a row id the way a JSON client would print it."""

    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def row_cells(value: Mapping[str, object]) -> dict[str, Cell]:
    """Keep the primitive entries of an object; rows cannot hold nested values."""

    return {key: cell for key, cell in value.items() if isinstance(cell, CELL_TYPES)}


def is_row_id(value: object) -> bool:
    """Row ids are non-empty primitives; objects, arrays and nulls never address a row."""

    return isinstance(value, CELL_TYPES) and value != ""


@dataclass(slots=True)
class ResponseReconciler:
    """Apply ``@dbMergeRow`` / ``@dbDeleteRow`` directives from a document to a store."""

    store: RowStore
    diagnostics: DiagnosticSink = field(default_factory=LoggingDiagnosticSink)

    def reconcile(
        self,
        document: DocumentNode,
        data: Mapping[str, object] | None,
        *,
        operation_name: str | None = None,
    ) -> ReconcileResult:
        """Reconcile ``data`` against ``document``; never raises for bad directives or data."""

        result = ReconcileResult()
        if not data:
            return result

        operation = find_operation(document, operation_name)
        if operation is None:
            log.debug("Document has no operation definition; nothing to reconcile")
            return result

        traversal = _Traversal(
            store=self.store,
            diagnostics=self.diagnostics,
            fragments=collect_fragments(document),
            result=result,
        )
        traversal.visit(operation.selection_set, data, frozenset())
        log.debug(
            "Reconciled response: merged=%s, deleted=%s, skipped=%s, errors=%s",
            result.merged,
            result.deleted,
            result.skipped,
            result.errors,
        )
        return result


@dataclass(slots=True)
class _Traversal:
    store: RowStore
    diagnostics: DiagnosticSink
    fragments: FragmentTable
    result: ReconcileResult

    def visit(
        self,
        selection_set: SelectionSetNode | None,
        value: object,
        active_fragments: frozenset[str],
    ) -> None:
        if selection_set is None or value is None:
            return

        if isinstance(value, list):
            for item in value:
                self.visit(selection_set, item, active_fragments)
            return

        if not isinstance(value, Mapping):
            return

        for selection in selection_set.selections:
            self._visit_selection(cast("Selection", selection), value, active_fragments)

    def _visit_selection(
        self,
        selection: Selection,
        value: Mapping[str, object],
        active_fragments: frozenset[str],
    ) -> None:
        match selection:
            case FieldNode():
                response_key = (
                    selection.alias.value if selection.alias is not None else selection.name.value
                )
                child = value.get(response_key)
                self.apply_directives(selection.directives, child)
                if selection.selection_set is not None and child is not None:
                    self.visit(selection.selection_set, child, frozenset())
            case InlineFragmentNode():
                self.visit(selection.selection_set, value, active_fragments)
            case FragmentSpreadNode():
                name = selection.name.value
                fragment = self.fragments.get(name)
                # Spreads already expanded on this same value are skipped; descending
                # into a field starts a fresh set.
                if fragment is None or name in active_fragments:
                    return
                self.apply_directives(fragment.directives, value)
                self.visit(fragment.selection_set, value, active_fragments | {name})
            case _:
                assert_never(selection)

    def apply_directives(
        self, directives: Collection[DirectiveNode] | None, value: object
    ) -> None:
        if not directives:
            return
        merge = find_directive(directives, MERGE_ROW_DIRECTIVE)
        if merge is not None:
            table = self._table_for(merge)
            if table is not None:
                self._merge(table, value)
        delete = find_directive(directives, DELETE_ROW_DIRECTIVE)
        if delete is not None:
            table = self._table_for(delete)
            if table is not None:
                self._delete(table, value)

    def _table_for(self, directive: DirectiveNode) -> str | None:
        match resolve_table(directive):
            case TableName(value=table):
                return table
            case MissingTableArgument(directive=name):
                self._error(f"@{name} is missing its 'table' argument", directive=name)
            case InvalidTableArgument(directive=name, kind=kind):
                self._error(
                    f"@{name} 'table' argument must be a string or enum value, got {kind}",
                    directive=name,
                    kind=kind,
                )
        return None

    def _merge(self, table: str, value: object) -> None:
        if isinstance(value, list):
            for item in value:
                self._merge_row(table, item)
        elif isinstance(value, Mapping):
            self._merge_row(table, value)

    def _merge_row(self, table: str, value: object) -> None:
        if not isinstance(value, Mapping) or not is_row_id(value.get(ROW_ID_FIELD)):
            self._warning(
                f"Skipping row without an '{ROW_ID_FIELD}' for table '{table}'",
                table=table,
                value=value,
            )
            return
        row_id = coerce_row_id(value[ROW_ID_FIELD])
        self.store.set_partial_row(table, row_id, row_cells(value))
        self.result.merged += 1

    def _delete(self, table: str, value: object) -> None:
        if isinstance(value, list):
            for item in value:
                self._delete_row(table, item)
        else:
            self._delete_row(table, value)

    def _delete_row(self, table: str, value: object) -> None:
        if value is None or value == "":
            return
        if not is_row_id(value):
            self._warning(
                f"Skipping delete in table '{table}': value is not a row id",
                table=table,
                value=value,
            )
            return
        self.store.del_row(table, coerce_row_id(value))
        self.result.deleted += 1

    def _error(self, message: str, **context: object) -> None:
        self.result.errors += 1
        self.diagnostics.emit(Diagnostic(Severity.ERROR, message, context))

    def _warning(self, message: str, **context: object) -> None:
        self.result.skipped += 1
        self.diagnostics.emit(Diagnostic(Severity.WARNING, message, context))
