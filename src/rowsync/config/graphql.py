"""GraphQL endpoint configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_var
from .http_resilience import ResilienceConfig, RetryPolicy

GRAPHQL_TIMEOUT_SECONDS = 15.0

# 429 and 503 mean the server did not execute the operation, so mutations are safe
# to resend.
GRAPHQL_RETRY_STATUSES = frozenset({429, 503})


@dataclass(frozen=True)
class GraphQLEndpointConfig:
    """Holds the GraphQL endpoint and the HTTP client settings used to reach it."""

    url: str
    resilience: ResilienceConfig
    token: str | None = None

    def request_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers


def default_graphql_resilience(url: str) -> ResilienceConfig:
    return ResilienceConfig(
        name="graphql",
        base_url=url,
        timeout_seconds=GRAPHQL_TIMEOUT_SECONDS,
        retry=RetryPolicy(total=2, status_forcelist=GRAPHQL_RETRY_STATUSES),
    )


def get_graphql_config(*, resilience: ResilienceConfig | None = None) -> GraphQLEndpointConfig:
    url = require_env_var("ROWSYNC_GRAPHQL_URL")
    return GraphQLEndpointConfig(
        url=url,
        token=optional_env_var("ROWSYNC_GRAPHQL_TOKEN"),
        resilience=resilience or default_graphql_resilience(url),
    )
