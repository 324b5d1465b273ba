from __future__ import annotations

from graphql import DirectiveNode, build_schema, parse
from graphql.language import FieldNode, OperationDefinitionNode

from rowsync.domain.directives import (
    DELETE_ROW_DIRECTIVE,
    DIRECTIVE_DEFINITIONS_SDL,
    MERGE_ROW_DIRECTIVE,
    InvalidTableArgument,
    MissingTableArgument,
    TableName,
    find_directive,
    resolve_table,
)


def _field_directives(source: str) -> tuple[DirectiveNode, ...]:
    document = parse(source)
    operation = document.definitions[0]
    assert isinstance(operation, OperationDefinitionNode)
    field = operation.selection_set.selections[0]
    assert isinstance(field, FieldNode)
    return tuple(field.directives or ())


def test_string_literal_table_is_used_verbatim() -> None:
    (directive,) = _field_directives('{ user @dbMergeRow(table: "Users_Table") { id } }')

    assert resolve_table(directive) == TableName("Users_Table")


def test_enum_table_is_lowercased() -> None:
    (directive,) = _field_directives("{ post @dbMergeRow(table: Post) { id } }")

    assert resolve_table(directive) == TableName("post")


def test_enum_lowercasing_keeps_digits_and_underscores() -> None:
    (directive,) = _field_directives("{ post @dbMergeRow(table: BLOG_Post2) { id } }")

    assert resolve_table(directive) == TableName("blog_post2")


def test_missing_table_argument() -> None:
    (directive,) = _field_directives('{ user @dbDeleteRow(other: "x") }')

    assert resolve_table(directive) == MissingTableArgument(directive=DELETE_ROW_DIRECTIVE)


def test_table_argument_of_unexpected_kind() -> None:
    (directive,) = _field_directives("{ user @dbMergeRow(table: 42) { id } }")

    assert resolve_table(directive) == InvalidTableArgument(
        directive=MERGE_ROW_DIRECTIVE, kind="int_value"
    )


def test_variable_table_argument_is_invalid() -> None:
    (directive,) = _field_directives("query ($t: String) { user @dbMergeRow(table: $t) { id } }")

    resolution = resolve_table(directive)

    assert isinstance(resolution, InvalidTableArgument)
    assert resolution.kind == "variable"


def test_find_directive_returns_first_match_or_none() -> None:
    directives = _field_directives(
        '{ user @include(if: true) @dbMergeRow(table: "a") @dbMergeRow(table: "b") { id } }'
    )

    found = find_directive(directives, MERGE_ROW_DIRECTIVE)

    assert found is not None
    assert resolve_table(found) == TableName("a")
    assert find_directive(directives, DELETE_ROW_DIRECTIVE) is None
    assert find_directive(None, MERGE_ROW_DIRECTIVE) is None


def test_directive_definitions_extend_a_schema() -> None:
    schema = build_schema(DIRECTIVE_DEFINITIONS_SDL + "type Query { ok: Boolean }")

    merge = schema.get_directive(MERGE_ROW_DIRECTIVE)
    delete = schema.get_directive(DELETE_ROW_DIRECTIVE)

    assert merge is not None
    assert delete is not None
    assert "table" in merge.args
    assert {location.name for location in merge.locations} == {"FIELD", "FRAGMENT_DEFINITION"}
    assert {location.name for location in delete.locations} == {"FIELD"}
