"""Port for sending GraphQL operations to a server."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class GraphQLRequest:
    """Wire-ready operation: printed query text plus variables."""

    query: str
    variables: Mapping[str, object] = field(default_factory=dict[str, object])
    operation_name: str | None = None

    def to_payload(self) -> dict[str, object]:
        payload: dict[str, object] = {"query": self.query}
        if self.variables:
            payload["variables"] = dict(self.variables)
        if self.operation_name is not None:
            payload["operationName"] = self.operation_name
        return payload


@dataclass(frozen=True, slots=True)
class GraphQLErrorDetail:
    message: str
    path: tuple[str | int, ...] | None = None
    extensions: Mapping[str, object] | None = None


@dataclass(frozen=True, slots=True)
class GraphQLResult:
    """Decoded response envelope. ``data`` is ``None`` for error-only responses."""

    data: Mapping[str, object] | None = None
    errors: tuple[GraphQLErrorDetail, ...] = ()


@runtime_checkable
class GraphQLTransport(Protocol):
    """Async callable port executing one request against a GraphQL server."""

    async def execute(self, request: GraphQLRequest) -> GraphQLResult: ...
