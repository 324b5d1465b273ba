"""Public interface for the GraphQL-over-HTTP adapter."""

from __future__ import annotations

from .client import GraphQLTransportError, HttpGraphQLTransport
from .schema import ErrorPayload, GraphQLResponse

__all__ = [
    "ErrorPayload",
    "GraphQLResponse",
    "GraphQLTransportError",
    "HttpGraphQLTransport",
]
