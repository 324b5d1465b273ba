from __future__ import annotations

from graphql import parse, print_ast

from rowsync.domain.stripper import has_row_directives, strip_row_directives

DOCUMENT = """
fragment UserFields on User @dbMergeRow(table: "users") {
  id
  name
}

mutation CreateEverything($id: ID!) {
  createUser(id: $id, name: "Alice") @dbMergeRow(table: "users") @include(if: true) {
    ...UserFields
    ...UserFields @dbMergeRow(table: "spread")
    alias: name @dbDeleteRow(table: Names)
    ... on User @dbMergeRow(table: "inline") {
      createdAt
    }
  }
  deleteUser(id: "7") @dbDeleteRow(table: "users")
}
"""


def test_strip_removes_row_directives_everywhere() -> None:
    printed = print_ast(strip_row_directives(parse(DOCUMENT)))

    assert "@dbMergeRow" not in printed
    assert "@dbDeleteRow" not in printed


def test_strip_keeps_other_directives_and_structure() -> None:
    printed = print_ast(strip_row_directives(parse(DOCUMENT)))

    assert "@include(if: true)" in printed
    assert 'createUser(id: $id, name: "Alice")' in printed
    assert "alias: name" in printed
    assert "...UserFields" in printed
    assert "fragment UserFields on User {" in printed
    assert "... on User {" in printed
    assert 'deleteUser(id: "7")' in printed
    assert "mutation CreateEverything($id: ID!)" in printed


def test_strip_does_not_mutate_the_original() -> None:
    document = parse(DOCUMENT)
    before = print_ast(document)

    strip_row_directives(document)

    assert print_ast(document) == before
    assert has_row_directives(document)


def test_stripped_document_reparses_cleanly() -> None:
    stripped = strip_row_directives(parse(DOCUMENT))

    reparsed = parse(print_ast(stripped))

    assert not has_row_directives(reparsed)
    assert print_ast(reparsed) == print_ast(stripped)


def test_document_without_row_directives_is_unchanged() -> None:
    source = "query { users @skip(if: false) { id name } }"
    document = parse(source)

    assert not has_row_directives(document)
    assert print_ast(strip_row_directives(document)) == print_ast(document)
