"""In-process GraphQL server used behind ``httpx.MockTransport``."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx
from graphql import build_schema, graphql_sync

from rowsync.adapters.http_resilience import ResilienceConfig, ResilientClient

if TYPE_CHECKING:
    from collections.abc import Callable

SCHEMA_SDL = """
type Reaction {
  id: ID!
  emoji: String!
  user: User!
}

type Comment {
  id: ID!
  text: String!
  author: User!
  reactions: [Reaction!]!
  replies: [Comment!]!
}

type Post {
  id: ID!
  title: String!
  comments: [Comment!]!
}

type User {
  id: ID!
  name: String!
  createdAt: String
}

type Query {
  user(id: ID!): User
  users: [User!]!
  post(id: ID!): Post
}

type Mutation {
  createUser(id: ID!, name: String!, createdAt: String): User
  deleteUser(id: ID!): ID
  deleteUsers(ids: [ID!]!): [ID!]!
  updateUser(id: ID!, name: String!): User
  createPost(id: ID!, title: String!): Post
}
"""

SCHEMA = build_schema(SCHEMA_SDL)


def _create_post(_info: Any, *, id: str, title: str) -> dict[str, Any]:  # noqa: A002
    return {
        "id": id,
        "title": title,
        "comments": [
            {
                "id": "c100",
                "text": "New Comment",
                "author": {"id": "u100", "name": "Author 100"},
                "reactions": [
                    {"id": "r100", "emoji": "fire", "user": {"id": "u101", "name": "Reactor 101"}}
                ],
                "replies": [
                    {
                        "id": "c101",
                        "text": "Nested Reply",
                        "author": {"id": "u102", "name": "Replier 102"},
                        "reactions": [],
                        "replies": [],
                    }
                ],
            }
        ],
    }


ROOT_VALUE: dict[str, Any] = {
    "user": lambda _info, id: {"id": id, "name": f"User {id}"},  # noqa: A006
    "users": lambda _info: [{"id": "1", "name": "User 1"}, {"id": "2", "name": "User 2"}],
    "post": lambda info, id: _create_post(info, id=id, title=f"Post {id}"),  # noqa: A006
    "createUser": lambda _info, id, name, createdAt=None: {  # noqa: A006, N803
        "id": id,
        "name": name,
        "createdAt": createdAt,
    },
    "deleteUser": lambda _info, id: id,  # noqa: A006
    "deleteUsers": lambda _info, ids: ids,
    "updateUser": lambda _info, id, name: {"id": id, "name": name},  # noqa: A006
    "createPost": _create_post,
}


@dataclass(slots=True)
class FakeGraphQLServer:
    """Execute posted operations against ``SCHEMA`` and record what was received."""

    received: list[dict[str, Any]] = field(default_factory=list[dict[str, Any]])
    status_code: int = 200

    def handle(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.received.append(body)
        result = graphql_sync(
            SCHEMA,
            body["query"],
            root_value=ROOT_VALUE,
            variable_values=body.get("variables"),
            operation_name=body.get("operationName"),
        )
        return httpx.Response(self.status_code, json=result.formatted)

    def client_factory(self, resilience: ResilienceConfig) -> ResilientClient:
        return mock_client_factory(self.handle)(resilience)


def mock_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(transport=httpx.MockTransport(async_handler))  # noqa: SLF001  # type: ignore[reportPrivateUsage]
        return client

    return factory
