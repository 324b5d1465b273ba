"""Row directive surface and ``table`` argument resolution.

Two directives drive reconciliation:

- ``@dbMergeRow(table: ...)`` upserts the value in scope into ``table``
- ``@dbDeleteRow(table: ...)`` deletes the row id(s) in scope from ``table``

The ``table`` argument may be written as a string literal (used verbatim) or as an
enum symbol (lowercased, so ``Post`` targets table ``post``).
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from graphql import EnumValueNode, StringValueNode

if TYPE_CHECKING:
    from collections.abc import Collection

    from graphql import DirectiveNode

MERGE_ROW_DIRECTIVE: Final[str] = "dbMergeRow"
DELETE_ROW_DIRECTIVE: Final[str] = "dbDeleteRow"
TABLE_ARGUMENT: Final[str] = "table"
ROW_DIRECTIVES: Final[frozenset[str]] = frozenset({MERGE_ROW_DIRECTIVE, DELETE_ROW_DIRECTIVE})

DIRECTIVE_DEFINITIONS_SDL: Final[str] = """\
directive @dbMergeRow(table: String!) on FIELD | FRAGMENT_DEFINITION
directive @dbDeleteRow(table: String!) on FIELD
"""

_ASCII_LOWER: Final = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


@dataclass(frozen=True, slots=True)
class TableName:
    """Table argument resolved to a concrete table name."""

    value: str


@dataclass(frozen=True, slots=True)
class MissingTableArgument:
    """Directive carries no ``table`` argument."""

    directive: str


@dataclass(frozen=True, slots=True)
class InvalidTableArgument:
    """Directive ``table`` argument is neither a string literal nor an enum symbol."""

    directive: str
    kind: str


type TableResolution = TableName | MissingTableArgument | InvalidTableArgument


def find_directive(
    directives: Collection[DirectiveNode] | None, name: str
) -> DirectiveNode | None:
    """Return the first directive called ``name`` or ``None``."""

    for directive in directives or ():
        if directive.name.value == name:
            return directive
    return None


def resolve_table(directive: DirectiveNode) -> TableResolution:
    """Resolve the ``table`` argument of a row directive."""

    name = directive.name.value
    for argument in directive.arguments or ():
        if argument.name.value != TABLE_ARGUMENT:
            continue
        value = argument.value
        if isinstance(value, StringValueNode):
            return TableName(value.value)
        if isinstance(value, EnumValueNode):
            return TableName(value.value.translate(_ASCII_LOWER))
        return InvalidTableArgument(directive=name, kind=value.kind)
    return MissingTableArgument(directive=name)
