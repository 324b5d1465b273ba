"""Remove row directives from outgoing documents.

Servers do not know ``@dbMergeRow`` / ``@dbDeleteRow``, so they are stripped before an
operation leaves the process. graphql-core's ``visit`` copies every node it edits, so
the directive-bearing original stays intact for reconciliation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from graphql import BREAK, REMOVE, Visitor, visit

from .directives import ROW_DIRECTIVES

if TYPE_CHECKING:
    from graphql import DirectiveNode, DocumentNode


class _RowDirectiveRemover(Visitor):
    def enter_directive(self, node: DirectiveNode, *_args: Any) -> object:
        if node.name.value in ROW_DIRECTIVES:
            return REMOVE
        return None


class _RowDirectiveFinder(Visitor):
    def __init__(self) -> None:
        super().__init__()
        self.found = False

    def enter_directive(self, node: DirectiveNode, *_args: Any) -> object:
        if node.name.value in ROW_DIRECTIVES:
            self.found = True
            return BREAK
        return None


def strip_row_directives(document: DocumentNode) -> DocumentNode:
    """Return a copy of ``document`` without any row directives."""

    return cast("DocumentNode", visit(document, _RowDirectiveRemover()))


def has_row_directives(document: DocumentNode) -> bool:
    finder = _RowDirectiveFinder()
    visit(document, finder)
    return finder.found
