"""Domain core: directive stripping and response reconciliation."""

from __future__ import annotations

from .diagnostics import (
    CollectingDiagnosticSink,
    Diagnostic,
    DiagnosticSink,
    LoggingDiagnosticSink,
    Severity,
)
from .directives import (
    DELETE_ROW_DIRECTIVE,
    DIRECTIVE_DEFINITIONS_SDL,
    MERGE_ROW_DIRECTIVE,
    ROW_DIRECTIVES,
    TABLE_ARGUMENT,
    InvalidTableArgument,
    MissingTableArgument,
    TableName,
    resolve_table,
)
from .operations import (
    Operation,
    OperationKind,
    OperationResult,
    OriginalDocumentRegistry,
    ReconcilingPipeline,
)
from .reconciler import (
    ReconcileResult,
    ResponseReconciler,
    coerce_row_id,
    collect_fragments,
    find_operation,
    is_row_id,
)
from .stripper import has_row_directives, strip_row_directives

__all__ = [
    "DELETE_ROW_DIRECTIVE",
    "DIRECTIVE_DEFINITIONS_SDL",
    "MERGE_ROW_DIRECTIVE",
    "ROW_DIRECTIVES",
    "TABLE_ARGUMENT",
    "CollectingDiagnosticSink",
    "Diagnostic",
    "DiagnosticSink",
    "InvalidTableArgument",
    "LoggingDiagnosticSink",
    "MissingTableArgument",
    "Operation",
    "OperationKind",
    "OperationResult",
    "OriginalDocumentRegistry",
    "ReconcileResult",
    "ReconcilingPipeline",
    "ResponseReconciler",
    "Severity",
    "TableName",
    "coerce_row_id",
    "collect_fragments",
    "find_operation",
    "has_row_directives",
    "is_row_id",
    "resolve_table",
    "strip_row_directives",
]
