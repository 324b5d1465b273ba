"""HTTP transport posting GraphQL operations as JSON."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from rowsync.adapters.http_resilience import ResilienceConfig, ResilientClient
from rowsync.config import GraphQLEndpointConfig, get_graphql_config

from .schema import GraphQLResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    from rowsync.domain.ports import GraphQLRequest, GraphQLResult, GraphQLTransport

log = getLogger(__name__)


class GraphQLTransportError(RuntimeError):
    """Raised when the server cannot be reached or answers with an unusable payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class HttpGraphQLTransport:
    config: GraphQLEndpointConfig = field(default_factory=get_graphql_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    async def execute(self, request: GraphQLRequest) -> GraphQLResult:
        async with self.client_factory(self.config.resilience) as client:
            try:
                response = await client.post_json(
                    self.config.url,
                    request.to_payload(),
                    headers=self.config.request_headers(),
                )
            except httpx.HTTPError as exc:
                raise GraphQLTransportError(f"GraphQL request failed: {exc}") from exc
        return self._decode(response)

    def _decode(self, response: httpx.Response) -> GraphQLResult:
        # GraphQL servers may answer 4xx with a well-formed error envelope.
        try:
            payload = response.json()
        except ValueError:
            response_error = self._status_error(response)
            if response_error is not None:
                raise response_error from None
            raise GraphQLTransportError(
                "GraphQL response is not JSON", status_code=response.status_code
            ) from None

        if not isinstance(payload, dict) or not ({"data", "errors"} & payload.keys()):
            response_error = self._status_error(response)
            if response_error is not None:
                raise response_error
            raise GraphQLTransportError(
                "Unexpected GraphQL response payload", status_code=response.status_code
            )

        try:
            envelope = GraphQLResponse.model_validate(payload)
        except ValidationError as exc:
            raise GraphQLTransportError(
                f"Malformed GraphQL response: {exc}", status_code=response.status_code
            ) from exc

        if response.is_error:
            log.warning(
                f"GraphQL server answered HTTP {response.status_code} "
                f"with {len(envelope.errors)} error(s)"
            )
        return envelope.to_result()

    @staticmethod
    def _status_error(response: httpx.Response) -> GraphQLTransportError | None:
        if not response.is_error:
            return None
        log.error(f"GraphQL HTTP error {response.status_code}: {response.text[:200]}")
        return GraphQLTransportError(
            f"GraphQL server answered HTTP {response.status_code}",
            status_code=response.status_code,
        )


if TYPE_CHECKING:
    _transport_check: GraphQLTransport = HttpGraphQLTransport()
